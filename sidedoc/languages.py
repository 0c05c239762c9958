r"""Language registry mapping file extensions to highlighter grammars.

Each supported extension carries the Pygments grammar name and the
line-comment marker used to tell documentation lines from code lines. From
those two values the registry derives everything the splitter and the
highlight merger need: the comment-line matcher, the raw divider token that is
inserted between sections before highlighting, and the pattern that finds the
divider again once the highlighter has wrapped it in markup.

The registry is an immutable mapping. Build one explicitly and hand it to the
components that need it; extend it by building a new registry with extra
entries.

Example
-------
>>> from sidedoc.languages import default_registry
>>> python = default_registry().lookup(".py")
>>> python.grammar_name, python.divider_text
('python', '\n#DIVIDER\n')
>>> bool(python.comment_matcher.match("    # indented comment"))
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import html
import re
import typing as typ
from pathlib import PurePath

from ._constants import DIVIDER_SENTINEL
from .errors import UnsupportedLanguageError

DEFAULT_LANGUAGES: dict[str, tuple[str, str]] = {
    ".php": ("php", "//"),
    ".py": ("python", "#"),
    ".rb": ("ruby", "#"),
    ".js": ("javascript", "//"),
    ".ts": ("typescript", "//"),
    ".coffee": ("coffeescript", "#"),
    ".c": ("c", "//"),
    ".h": ("c", "//"),
    ".cpp": ("cpp", "//"),
    ".cs": ("csharp", "//"),
    ".java": ("java", "//"),
    ".scala": ("scala", "//"),
    ".kt": ("kotlin", "//"),
    ".go": ("go", "//"),
    ".rs": ("rust", "//"),
    ".swift": ("swift", "//"),
    ".sh": ("bash", "#"),
    ".pl": ("perl", "#"),
    ".lua": ("lua", "--"),
    ".sql": ("sql", "--"),
    ".hs": ("haskell", "--"),
    ".erl": ("erlang", "%"),
    ".tex": ("latex", "%"),
    ".yaml": ("yaml", "#"),
    ".yml": ("yaml", "#"),
}


def _normalize_extension(extension: str) -> str:
    """Return ``extension`` lower-cased with a single leading dot."""
    text = extension.strip().lower()
    if not text:
        return ""
    return text if text.startswith(".") else f".{text}"


def _comment_pattern(marker: str) -> re.Pattern[str]:
    # The marker and at most one following space are consumed.
    return re.compile(rf"^\s*{re.escape(marker)} ?")


def _divider_html_pattern(marker: str) -> re.Pattern[str]:
    """Match the divider after highlighting, whatever markup surrounds it.

    Pygments wraps the token in a comment ``<span>`` (sometimes keeping the
    trailing newline inside it), may emit empty whitespace spans in front of
    it, and adds or drops blank lines on either side. Lexers that do not know
    the comment syntax leave the token bare.
    """
    marker_html = re.escape(html.escape(marker, quote=False))
    return re.compile(
        r"\n*"
        r"(?:<span[^>]*>[ \t]*</span>)*"
        rf"(?:<span[^>]*>)?{marker_html}{DIVIDER_SENTINEL}[ \t]*\n?(?:</span>)?"
        r"\n*"
    )


@dc.dataclass(frozen=True, slots=True)
class LanguageSpec:
    """Immutable description of one supported source language.

    Attributes
    ----------
    extension : str
        File extension including the leading dot, lower-cased.
    grammar_name : str
        Lexer name handed to the syntax highlighter.
    comment_marker : str
        Line-comment marker (for example ``"//"`` or ``"#"``).
    comment_matcher : re.Pattern[str]
        Matches a line that, after leading whitespace, starts with the marker.
        The match also covers one optional space after the marker.
    divider_text : str
        Raw divider token inserted between sections before highlighting.
    divider_html_matcher : re.Pattern[str]
        Finds the divider token in highlighted HTML.
    """

    extension: str
    grammar_name: str
    comment_marker: str
    comment_matcher: re.Pattern[str] = dc.field(compare=False, repr=False)
    divider_text: str = dc.field(repr=False)
    divider_html_matcher: re.Pattern[str] = dc.field(compare=False, repr=False)

    @classmethod
    def build(
        cls, extension: str, grammar_name: str, comment_marker: str
    ) -> LanguageSpec:
        """Derive the matchers and the divider token for a language entry."""
        if not comment_marker:
            msg = f"Language '{extension}' needs a non-empty comment marker."
            raise ValueError(msg)
        return cls(
            extension=_normalize_extension(extension),
            grammar_name=grammar_name,
            comment_marker=comment_marker,
            comment_matcher=_comment_pattern(comment_marker),
            divider_text=f"\n{comment_marker}{DIVIDER_SENTINEL}\n",
            divider_html_matcher=_divider_html_pattern(comment_marker),
        )

    def is_comment(self, line: str) -> bool:
        """Return ``True`` when ``line`` is a documentation comment line."""
        return self.comment_matcher.match(line) is not None

    def strip_comment(self, line: str) -> str:
        """Remove the leading comment marker (and one space) from ``line``."""
        return self.comment_matcher.sub("", line, count=1)


class LanguageRegistry(cabc.Mapping[str, LanguageSpec]):
    """Read-only lookup table of :class:`LanguageSpec` keyed by extension."""

    __slots__ = ("_specs",)

    def __init__(self, specs: cabc.Iterable[LanguageSpec] = ()) -> None:
        self._specs: dict[str, LanguageSpec] = {spec.extension: spec for spec in specs}

    @classmethod
    def from_table(
        cls, table: cabc.Mapping[str, tuple[str, str]]
    ) -> LanguageRegistry:
        """Build a registry from ``{extension: (grammar_name, comment_marker)}``."""
        return cls(
            LanguageSpec.build(ext, grammar, marker)
            for ext, (grammar, marker) in table.items()
        )

    def __getitem__(self, extension: str) -> LanguageSpec:
        return self._specs[_normalize_extension(extension)]

    def __iter__(self) -> typ.Iterator[str]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return f"LanguageRegistry({sorted(self._specs)!r})"

    def lookup(self, extension: str) -> LanguageSpec:
        """Return the spec registered for ``extension``.

        Raises
        ------
        UnsupportedLanguageError
            If no language is registered for the extension.
        """
        try:
            return self[extension]
        except KeyError as exc:
            raise UnsupportedLanguageError(extension) from exc

    def for_path(self, path: PurePath) -> LanguageSpec:
        """Return the spec matching the suffix of ``path``."""
        return self.lookup(path.suffix)

    def with_entries(self, specs: cabc.Iterable[LanguageSpec]) -> LanguageRegistry:
        """Return a new registry where ``specs`` add to or replace entries."""
        merged = dict(self._specs)
        merged.update((spec.extension, spec) for spec in specs)
        return LanguageRegistry(merged.values())


def default_registry() -> LanguageRegistry:
    """Return a registry holding the built-in language table."""
    return LanguageRegistry.from_table(DEFAULT_LANGUAGES)


__all__ = [
    "DEFAULT_LANGUAGES",
    "LanguageRegistry",
    "LanguageSpec",
    "default_registry",
]

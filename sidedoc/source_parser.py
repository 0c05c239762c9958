r"""Split annotated source files into ordered documentation/code sections.

A section pairs a block of comment lines (the prose) with the code that
follows it. Consecutive comment lines join into one block; a new section
starts only when a comment line follows code that has already accumulated.
The highlight merger and prose renderer later fill in the HTML fields of the
same :class:`Section` objects.

Example
-------
>>> from sidedoc.languages import default_registry
>>> from sidedoc.source_parser import parse_sections
>>> php = default_registry().lookup(".php")
>>> sections = parse_sections(php, "// Title\n// intro\nx = 1\n// step two\ny = 2")
>>> [(s.docs_text, s.code_text) for s in sections]
[('Title\nintro\n', 'x = 1\n'), ('step two\n', 'y = 2\n')]
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from .languages import LanguageSpec

SHEBANG_PREFIX = "#!"


@dc.dataclass(slots=True)
class Section:
    """Comment block and the code that follows it.

    Attributes
    ----------
    index : int
        0-based position of the section in source order.
    docs_text : str
        Comment text with the markers stripped, one line per comment line.
    code_text : str
        Raw code lines, blank lines included.
    docs_html : str
        Rendered prose; empty until the prose renderer runs.
    code_html : str
        Highlighted code; empty until the highlight merger runs.
    """

    index: int
    docs_text: str
    code_text: str
    docs_html: str = ""
    code_html: str = ""


def _source_lines(source_text: str) -> list[str]:
    lines = source_text.split("\n") if source_text else []
    # A terminating newline ends the last line rather than opening a new one.
    if lines and lines[-1] == "":
        lines.pop()
    if lines and lines[0].startswith(SHEBANG_PREFIX):
        lines = lines[1:]
    return lines


def parse_sections(language: LanguageSpec, source_text: str) -> list[Section]:
    """Group the lines of ``source_text`` into ordered sections.

    Parameters
    ----------
    language : LanguageSpec
        Language entry supplying the comment-line matcher.
    source_text : str
        Complete source file contents.

    Returns
    -------
    list[Section]
        Sections in source order with only ``docs_text`` and ``code_text``
        populated. Always holds at least one section, even for comment-only
        or code-only inputs.
    """
    sections: list[Section] = []
    docs: list[str] = []
    code: list[str] = []

    def _flush() -> None:
        sections.append(
            Section(index=len(sections), docs_text="".join(docs), code_text="".join(code))
        )
        docs.clear()
        code.clear()

    for line in _source_lines(source_text):
        if language.is_comment(line):
            if code:
                _flush()
            docs.append(language.strip_comment(line) + "\n")
        else:
            code.append(line + "\n")

    _flush()
    return sections


__all__ = ["SHEBANG_PREFIX", "Section", "parse_sections"]

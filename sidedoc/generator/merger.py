r"""Highlight every section's code in one pass and split the result back apart.

Syntax highlighters are most reliable on a complete token stream, so the
merger never highlights sections one at a time. Instead it:

1. joins all code blocks with the language's divider token (itself a comment
   line the highlighter renders like any other);
2. calls the highlighter once for the whole file;
3. strips the wrapper markup Pygments always emits;
4. splits the inner HTML on the rendered divider and checks that exactly one
   fragment came back per section before assigning any of them.

Example
-------
>>> from sidedoc.languages import default_registry
>>> from sidedoc.source_parser import parse_sections
>>> from sidedoc.generator.merger import build_highlight_input
>>> python = default_registry().lookup(".py")
>>> sections = parse_sections(python, "a = 1\n# two\nb = 2\n")
>>> build_highlight_input(python, sections)
'a = 1\n\n#DIVIDER\nb = 2\n'
"""

from __future__ import annotations

import logging
import re
import typing as typ

from sidedoc._constants import HIGHLIGHT_END, HIGHLIGHT_START
from sidedoc.errors import HighlightMismatchError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sidedoc.generator.highlighter import Highlighter
    from sidedoc.languages import LanguageSpec
    from sidedoc.source_parser import Section

logger = logging.getLogger(__name__)

# Pygments >= 2.12 opens the <pre> with an empty span; older releases do not.
_WRAPPER_START = re.compile(r"^\s*" + re.escape(HIGHLIGHT_START) + r"(?:<span></span>)?")
_WRAPPER_END = re.compile(re.escape(HIGHLIGHT_END) + r"\s*$")


def build_highlight_input(
    language: LanguageSpec, sections: cabc.Sequence[Section]
) -> str:
    """Join the sections' code with the divider token."""
    return language.divider_text.join(section.code_text for section in sections)


def strip_wrapper(html: str) -> str:
    """Return ``html`` without the highlighter's outer ``div``/``pre`` wrapper."""
    inner = _WRAPPER_START.sub("", html, count=1)
    return _WRAPPER_END.sub("", inner, count=1)


def split_highlighted(language: LanguageSpec, inner_html: str) -> list[str]:
    """Split unwrapped highlighter output into per-section fragments."""
    return language.divider_html_matcher.split(inner_html)


def merge_highlighted(
    language: LanguageSpec,
    sections: list[Section],
    highlighter: Highlighter,
) -> list[Section]:
    """Populate ``code_html`` on every section from a single highlighter call.

    Parameters
    ----------
    language : LanguageSpec
        Language supplying the grammar name and divider token/matcher.
    sections : list[Section]
        Sections produced by :func:`~sidedoc.source_parser.parse_sections`.
    highlighter : Highlighter
        Backend invoked exactly once with the combined code.

    Returns
    -------
    list[Section]
        The same section objects, mutated in place.

    Raises
    ------
    HighlightMismatchError
        If the number of recovered fragments differs from ``len(sections)``.
        No section is modified in that case.
    HighlighterUnavailableError
        Propagated from the highlighter backend.
    """
    if not sections:
        return sections
    combined = build_highlight_input(language, sections)
    highlighted = highlighter.highlight(combined, language.grammar_name)
    fragments = split_highlighted(language, strip_wrapper(highlighted))
    if len(fragments) != len(sections):
        raise HighlightMismatchError(expected=len(sections), actual=len(fragments))

    logger.debug(
        "Split %d highlighted fragment(s) for grammar %s",
        len(fragments),
        language.grammar_name,
    )
    for section, fragment in zip(sections, fragments, strict=True):
        section.code_html = f"{HIGHLIGHT_START}{fragment or ''}{HIGHLIGHT_END}"
    return sections


__all__ = [
    "build_highlight_input",
    "merge_highlighted",
    "split_highlighted",
    "strip_wrapper",
]

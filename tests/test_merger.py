"""Tests for the single-pass highlight merge.

Fake highlighters exercise the divider protocol deterministically: one that
preserves every divider, one that swallows a divider, and one that duplicates
it. The in-process Pygments backend then proves the protocol holds against
real lexer output.
"""

from __future__ import annotations

import html
import typing as typ

import pytest
from bs4 import BeautifulSoup

from sidedoc._constants import HIGHLIGHT_END, HIGHLIGHT_START
from sidedoc.errors import HighlightMismatchError
from sidedoc.generator.highlighter import PygmentsHighlighter
from sidedoc.generator.merger import (
    build_highlight_input,
    merge_highlighted,
    split_highlighted,
    strip_wrapper,
)
from sidedoc.languages import LanguageSpec
from sidedoc.source_parser import parse_sections

PHP_SOURCE = """<?php
// # Greeter
// Says hello.
function greet($name) {
    return "Hello, " . $name;
}

// Print it.
echo greet("world");
// Done.
"""


def _text(fragment_html: str) -> str:
    return BeautifulSoup(fragment_html, "html.parser").get_text()


@pytest.mark.parametrize("count", [1, 2, 5])
def test_highlight_input_joins_code_with_divider(python: LanguageSpec, count: int) -> None:
    """Joining every section's code with the divider gives the highlighter input."""
    source = "".join(f"# doc {i}\nvalue_{i} = {i}\n" for i in range(count))
    sections = parse_sections(python, source)
    assert len(sections) == count
    combined = build_highlight_input(python, sections)
    assert combined == python.divider_text.join(s.code_text for s in sections)
    assert combined.count(python.divider_text) == count - 1


def test_merge_calls_highlighter_once(php: LanguageSpec, fake_highlighter: typ.Any) -> None:
    """The whole file is highlighted in one call with the combined text."""
    sections = parse_sections(php, PHP_SOURCE)
    merge_highlighted(php, sections, fake_highlighter)
    assert fake_highlighter.calls == [(build_highlight_input(php, sections), "php")]


def test_merge_assigns_fragments_in_order(
    php: LanguageSpec, fake_highlighter: typ.Any
) -> None:
    """Each section receives the highlighted form of its own code."""
    sections = parse_sections(php, PHP_SOURCE)
    merge_highlighted(php, sections, fake_highlighter)
    assert len(sections) == 4
    for section in sections:
        assert section.code_html.startswith(HIGHLIGHT_START)
        assert section.code_html.endswith(HIGHLIGHT_END)
        assert _text(section.code_html).strip() == section.code_text.strip()
    assert "greet($name)" in html.unescape(sections[1].code_html)
    assert 'echo greet("world");' in html.unescape(sections[2].code_html)
    assert sections[3].code_html == HIGHLIGHT_START + HIGHLIGHT_END


def test_merge_detects_swallowed_divider(
    php: LanguageSpec, make_highlighter: typ.Any
) -> None:
    """A highlighter that merges two sections triggers a mismatch."""
    swallow = make_highlighter(
        mutate=lambda body: body.replace('<span class="c1">//DIVIDER</span>', "", 1)
    )
    sections = parse_sections(php, PHP_SOURCE)
    with pytest.raises(HighlightMismatchError) as excinfo:
        merge_highlighted(php, sections, swallow)
    assert (excinfo.value.expected, excinfo.value.actual) == (4, 3)
    assert all(section.code_html == "" for section in sections)


def test_merge_detects_duplicated_divider(
    php: LanguageSpec, make_highlighter: typ.Any
) -> None:
    """A highlighter that duplicates a divider triggers a mismatch."""
    marker = '<span class="c1">//DIVIDER</span>'
    duplicate = make_highlighter(
        mutate=lambda body: body.replace(marker, f"{marker}\nextra\n{marker}", 1)
    )
    sections = parse_sections(php, PHP_SOURCE)
    with pytest.raises(HighlightMismatchError) as excinfo:
        merge_highlighted(php, sections, duplicate)
    assert (excinfo.value.expected, excinfo.value.actual) == (4, 5)


def test_divider_collision_in_source_is_reported(
    php: LanguageSpec, make_highlighter: typ.Any
) -> None:
    """Source text that looks like the rendered divider fails instead of misaligning."""
    sections = parse_sections(php, "$a = '//DIVIDER';\n// next\n$b = 2;\n")
    collide = make_highlighter(mutate=lambda body: body.replace("'//DIVIDER'", "\n//DIVIDER\n"))
    with pytest.raises(HighlightMismatchError):
        merge_highlighted(php, sections, collide)


def test_single_comment_only_section(python: LanguageSpec, fake_highlighter: typ.Any) -> None:
    """An all-comment file keeps one section with an empty highlighted block."""
    sections = parse_sections(python, "# Only prose here.\n")
    merge_highlighted(python, sections, fake_highlighter)
    assert sections[0].code_html == HIGHLIGHT_START + HIGHLIGHT_END


def test_strip_wrapper_tolerates_missing_empty_span() -> None:
    """Older Pygments output without the leading empty span unwraps the same way."""
    assert strip_wrapper('<div class="highlight"><pre>x\n</pre></div>\n') == "x\n"
    assert strip_wrapper('<div class="highlight"><pre><span></span>x\n</pre></div>') == "x\n"
    assert strip_wrapper("bare") == "bare"


def test_split_highlighted_keeps_empty_fragments(python: LanguageSpec) -> None:
    """Adjacent dividers produce an empty fragment rather than collapsing."""
    inner = 'a\n\n<span class="c1">#DIVIDER</span>\n\n<span class="c1">#DIVIDER</span>\nb\n'
    assert split_highlighted(python, inner) == ["a", "", "b\n"]


@pytest.mark.parametrize(
    ("language_fixture", "source"),
    [
        ("php", PHP_SOURCE),
        (
            "python",
            'import os\n\n# Helper\ndef helper():\n    """Doc\n    string."""\n'
            "    return os.sep\n# Blank code follows\n\n# Tail\nprint(helper())\n",
        ),
    ],
)
def test_pygments_round_trip(
    request: pytest.FixtureRequest, language_fixture: str, source: str
) -> None:
    """Real Pygments output splits back into exactly one fragment per section."""
    language: LanguageSpec = request.getfixturevalue(language_fixture)
    sections = parse_sections(language, source)
    merge_highlighted(language, sections, PygmentsHighlighter())
    for section in sections:
        assert _text(section.code_html).strip() == section.code_text.strip()


def test_unknown_grammar_falls_back_to_plain_text() -> None:
    """Plain-text highlighting leaves the divider bare and still splits cleanly."""
    language = LanguageSpec.build(".zz", "no-such-lexer", ";;")
    sections = parse_sections(language, ";; a\nx\n;; b\ny\n")
    merge_highlighted(language, sections, PygmentsHighlighter())
    assert [_text(s.code_html).strip() for s in sections] == ["x", "y"]

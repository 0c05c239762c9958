"""Unit tests for splitting annotated sources into sections."""

from __future__ import annotations

import pytest

from sidedoc.languages import LanguageSpec
from sidedoc.source_parser import parse_sections


def _transitions(language: LanguageSpec, lines: list[str]) -> int:
    """Count comment lines that directly follow accumulated code."""
    count = 0
    seen_code = False
    for line in lines:
        if language.is_comment(line):
            if seen_code:
                count += 1
                seen_code = False
        else:
            seen_code = True
    return count


def test_two_section_example(php: LanguageSpec) -> None:
    """Comments and the code after them pair up in source order."""
    source = "\n".join(["// Title", "// intro", "x = 1", "// step two", "y = 2"])
    sections = parse_sections(php, source)
    assert [(s.index, s.docs_text, s.code_text) for s in sections] == [
        (0, "Title\nintro\n", "x = 1\n"),
        (1, "step two\n", "y = 2\n"),
    ]
    assert all(s.docs_html == "" and s.code_html == "" for s in sections)


def test_source_without_comments_is_one_section(python: LanguageSpec) -> None:
    """Code-only files produce a single section with empty docs."""
    sections = parse_sections(python, "a = 1\n\nb = 2\n")
    assert len(sections) == 1
    assert sections[0].docs_text == ""
    assert sections[0].code_text == "a = 1\n\nb = 2\n"


def test_comment_only_source_is_one_section(python: LanguageSpec) -> None:
    """Comment-only files produce a single section with empty code."""
    sections = parse_sections(python, "# one\n# two\n  # three\n")
    assert len(sections) == 1
    assert sections[0].docs_text == "one\ntwo\nthree\n"
    assert sections[0].code_text == ""


def test_empty_source_is_one_empty_section(python: LanguageSpec) -> None:
    """Even an empty file yields exactly one section."""
    sections = parse_sections(python, "")
    assert [(s.docs_text, s.code_text) for s in sections] == [("", "")]


def test_leading_code_forms_first_section(php: LanguageSpec) -> None:
    """Code before the first comment becomes an undocumented first section."""
    sections = parse_sections(php, "<?php\n// Greet\necho 'hi';\n")
    assert [(s.docs_text, s.code_text) for s in sections] == [
        ("", "<?php\n"),
        ("Greet\n", "echo 'hi';\n"),
    ]


def test_shebang_line_is_dropped(python: LanguageSpec) -> None:
    """A leading ``#!`` line never reaches docs or code."""
    sections = parse_sections(python, "#!/usr/bin/x\n# Intro\nrun()\n")
    assert len(sections) == 1
    for section in sections:
        assert "/usr/bin/x" not in section.docs_text
        assert "/usr/bin/x" not in section.code_text
    assert sections[0].docs_text == "Intro\n"


def test_shebang_only_applies_to_first_line(php: LanguageSpec) -> None:
    """A ``#!`` sequence later in the file is ordinary code."""
    sections = parse_sections(php, "x = 1\n#!not-a-shebang\n")
    assert sections[0].code_text == "x = 1\n#!not-a-shebang\n"


def test_blank_lines_stay_in_code(python: LanguageSpec) -> None:
    """Blank lines are code and keep the vertical spacing of the block."""
    sections = parse_sections(python, "# Doc\n\nx = 1\n\n\ny = 2\n# Next\nz = 3")
    assert sections[0].code_text == "\nx = 1\n\n\ny = 2\n"
    assert sections[1].code_text == "z = 3\n"


def test_code_between_comments_only_splits_on_transition(python: LanguageSpec) -> None:
    """Consecutive comment lines never start a new section on their own."""
    sections = parse_sections(python, "# a\n# b\nx\ny\n# c\n# d\nz\n")
    assert [(s.docs_text, s.code_text) for s in sections] == [
        ("a\nb\n", "x\ny\n"),
        ("c\nd\n", "z\n"),
    ]


def test_trailing_comment_creates_final_section(python: LanguageSpec) -> None:
    """Comments after the last code still get their own closing section."""
    sections = parse_sections(python, "x = 1\n# The end\n")
    assert [(s.docs_text, s.code_text) for s in sections] == [
        ("", "x = 1\n"),
        ("The end\n", ""),
    ]


@pytest.mark.parametrize(
    "lines",
    [
        ["x"],
        ["# a"],
        ["# a", "x", "# b", "y"],
        ["x", "# a", "# b", "y", "", "# c"],
        ["", "", "# a", "", "# b", "x"],
        ["  # a", "x", "  # b", "  y", "# c", "# d"],
    ],
)
def test_section_count_matches_transitions(python: LanguageSpec, lines: list[str]) -> None:
    """There is one section per comment-after-code transition, plus one."""
    sections = parse_sections(python, "\n".join(lines))
    assert len(sections) == 1 + _transitions(python, lines)
    assert [s.index for s in sections] == list(range(len(sections)))

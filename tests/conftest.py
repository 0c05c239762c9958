"""Shared fixtures for the sidedoc test suite.

The fake highlighters mimic Pygments' HTML output closely enough for the
merger to treat them like the real thing: the combined code is escaped,
comment lines are wrapped in ``<span class="c1">``, and the whole block is
wrapped in ``<div class="highlight"><pre>``. Each fake records its calls so
tests can assert the merger highlights a file exactly once.
"""

from __future__ import annotations

import html
import re
import typing as typ

import pytest

from sidedoc.languages import LanguageRegistry, LanguageSpec, default_registry

COMMENT_LINE = re.compile(r"^([ \t]*)(#|//|--)(.*)$", re.MULTILINE)


class FakeHighlighter:
    """Deterministic, divider-preserving stand-in for Pygments."""

    def __init__(self, mutate: typ.Callable[[str], str] | None = None) -> None:
        self.calls: list[tuple[str, str]] = []
        self._mutate = mutate

    def highlight(self, code: str, grammar: str) -> str:
        self.calls.append((code, grammar))
        body = html.escape(code, quote=False)
        body = COMMENT_LINE.sub(r'\1<span class="c1">\2\3</span>', body)
        if self._mutate is not None:
            body = self._mutate(body)
        return f'<div class="highlight"><pre><span></span>{body}</pre></div>\n'


@pytest.fixture
def registry() -> LanguageRegistry:
    """Return the built-in language registry."""
    return default_registry()


@pytest.fixture
def php(registry: LanguageRegistry) -> LanguageSpec:
    """Return the PHP language entry (``//`` comments)."""
    return registry.lookup(".php")


@pytest.fixture
def python(registry: LanguageRegistry) -> LanguageSpec:
    """Return the Python language entry (``#`` comments)."""
    return registry.lookup(".py")


@pytest.fixture
def fake_highlighter() -> FakeHighlighter:
    """Return a divider-preserving fake highlighter."""
    return FakeHighlighter()


@pytest.fixture
def make_highlighter() -> type[FakeHighlighter]:
    """Return the fake highlighter class for tests that need a mutating variant."""
    return FakeHighlighter

"""Generate side-by-side HTML documentation from annotated source files.

Comment blocks become Markdown-rendered prose and the code that follows each
block is syntax-highlighted with Pygments; both are paired row by row in one
page per source file.

Exports
-------
- ``app``: Cyclopts application entry.
- ``main``: Convenience function that invokes the Cyclopts app.
- The exception types raised for per-file failures.

Examples
--------
>>> from sidedoc import main
>>> main(["src/app.php"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .errors import (
    HighlighterUnavailableError,
    HighlightMismatchError,
    SidedocError,
    UnsupportedLanguageError,
)

__all__ = [
    "HighlightMismatchError",
    "HighlighterUnavailableError",
    "SidedocError",
    "UnsupportedLanguageError",
    "app",
    "main",
]

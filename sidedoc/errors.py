"""Exception types raised while generating sidedoc pages.

Every failure that is scoped to a single source file derives from
:class:`SidedocError`, so the run loop can catch the family in one place,
report the offending path, and move on to the next file.
"""

from __future__ import annotations


class SidedocError(Exception):
    """Base class for sidedoc failures."""


class UnsupportedLanguageError(SidedocError, LookupError):
    """Raised when a source extension has no registry entry."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        label = extension or "<none>"
        super().__init__(f"No language is registered for extension '{label}'.")


class HighlighterUnavailableError(SidedocError, RuntimeError):
    """Raised when the syntax highlighter cannot be invoked or does not respond."""


class HighlightMismatchError(SidedocError, RuntimeError):
    """Raised when highlighted fragments no longer line up with the sections."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        msg = (
            f"Highlighter output split into {actual} fragment(s) but {expected} "
            "section(s) were sent; the divider token was altered or collided "
            "with source content."
        )
        super().__init__(msg)


__all__ = [
    "HighlightMismatchError",
    "HighlighterUnavailableError",
    "SidedocError",
    "UnsupportedLanguageError",
]

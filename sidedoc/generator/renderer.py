"""Render comment prose into HTML with Python-Markdown."""

from __future__ import annotations

import typing as typ
import unicodedata

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from sidedoc._constants import DEFAULT_PYGMENTS_STYLE

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension

    from sidedoc.source_parser import Section


def decode_text(text: str | bytes) -> str:
    """Normalize ``text`` into NFC Unicode without a byte-order mark.

    Bytes are decoded as UTF-8, replacing undecodable sequences.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8-sig", errors="replace")
    return unicodedata.normalize("NFC", text.removeprefix("\ufeff"))


class ProseRenderer:
    """Render Markdown comment blocks and expose the code stylesheet."""

    def __init__(
        self,
        pygments_style: str = DEFAULT_PYGMENTS_STYLE,
        extensions: cabc.Sequence[Extension | str] | None = None,
    ) -> None:
        """Initialize a renderer with a Pygments style and Markdown extensions.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style used for fenced code inside prose and for the page
            stylesheet.
        extensions : Sequence, optional
            Extra Markdown extensions appended to the defaults.
        """
        self.pygments_style = pygments_style
        self._extra_extensions = list(extensions or [])
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="highlight")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".highlight")

    def render(self, text: str | bytes) -> str:
        """Return ``text`` rendered as HTML, or ``""`` for blank prose."""
        normalized = decode_text(text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            *self._extra_extensions,
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "highlight",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(normalized)


def render_sections(
    sections: cabc.Iterable[Section], renderer: ProseRenderer
) -> None:
    """Fill ``docs_html`` on each section from its ``docs_text``."""
    for section in sections:
        section.docs_html = renderer.render(section.docs_text)


__all__ = ["ProseRenderer", "decode_text", "render_sections"]

"""Typed dataclasses describing sidedoc configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from sidedoc._constants import DEFAULT_HIGHLIGHTER_TIMEOUT, DEFAULT_PYGMENTS_STYLE
from sidedoc.errors import SidedocError
from sidedoc.generator.models import OutputOptions
from sidedoc.languages import LanguageRegistry, default_registry


class SidedocConfigError(SidedocError, ValueError):
    """Raised when the configuration file is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class SidedocConfig:
    """Fully resolved settings for a documentation run.

    Attributes
    ----------
    output : OutputOptions
        Output root and path-preservation mode.
    languages : LanguageRegistry
        Extension table used to pick comment markers and grammars.
    pygments_style : str
        Pygments style for the embedded stylesheet and prose code blocks.
    highlighter : str
        Highlighter backend: ``"pygmentize"``, ``"pygments"``, or ``"remote"``.
    highlighter_timeout : float or None
        Seconds to wait for the highlighter; ``None`` waits indefinitely.
    remote_url : str or None
        Highlighting web service used by ``"remote"`` and as the fallback
        when ``pygmentize`` is missing.
    templates_dir : Path or None
        Directory holding a custom ``page.jinja``.
    """

    output: OutputOptions = OutputOptions()
    languages: LanguageRegistry = dc.field(default_factory=default_registry)
    pygments_style: str = DEFAULT_PYGMENTS_STYLE
    highlighter: str = "pygmentize"
    highlighter_timeout: float | None = DEFAULT_HIGHLIGHTER_TIMEOUT
    remote_url: str | None = None
    templates_dir: Path | None = None

    def with_overrides(
        self,
        *,
        output_dir: Path | None = None,
        preserve_paths: bool | None = None,
        highlighter: str | None = None,
    ) -> SidedocConfig:
        """Return a copy with command-line overrides applied.

        ``None`` leaves the configured value untouched.
        """
        output = OutputOptions(
            output_dir=output_dir if output_dir is not None else self.output.output_dir,
            preserve_paths=(
                preserve_paths if preserve_paths is not None else self.output.preserve_paths
            ),
        )
        return dc.replace(
            self, output=output, highlighter=highlighter or self.highlighter
        )


__all__ = ["SidedocConfig", "SidedocConfigError"]

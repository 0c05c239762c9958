"""Shared dataclasses passed from the generation pipeline to the page template."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from sidedoc._constants import DEFAULT_OUTPUT_DIR


@dc.dataclass(frozen=True, slots=True)
class OutputOptions:
    """Where generated pages go.

    Attributes
    ----------
    output_dir : Path
        Root directory for generated HTML.
    preserve_paths : bool
        Keep each source's relative directory under ``output_dir`` instead of
        flattening to the basename.
    """

    output_dir: Path = DEFAULT_OUTPUT_DIR
    preserve_paths: bool = False


@dc.dataclass(frozen=True, slots=True)
class SectionModel:
    """One table row of the generated page.

    Attributes
    ----------
    index : int
        Position of the section; used for ``section-<index>`` anchors.
    docs_html : str
        Rendered prose.
    code_html : str
        Highlighted code, including the ``highlight`` wrapper.
    """

    index: int
    docs_html: str
    code_html: str


@dc.dataclass(frozen=True, slots=True)
class JumpLink:
    """Navigation entry pointing at another page generated in the same run."""

    label: str
    href: str


@dc.dataclass(slots=True)
class PageModel:
    """Structured data passed to the page template.

    Attributes
    ----------
    title : str
        Page title; the source file's basename.
    source_path : Path
        Source file the page documents.
    destination : Path
        Output path of the rendered page.
    sections : list[SectionModel]
        Rows in source order.
    jump_links : list[JumpLink]
        Links to every page of the run; empty for single-file runs.
    stylesheet : str
        Pygments CSS embedded in the page.
    """

    title: str
    source_path: Path
    destination: Path
    sections: list[SectionModel]
    jump_links: list[JumpLink] = dc.field(default_factory=list)
    stylesheet: str = ""


__all__ = ["JumpLink", "OutputOptions", "PageModel", "SectionModel"]

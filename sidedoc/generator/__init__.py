"""Utilities for highlighting, rendering, and generating sidedoc pages."""

from .doc_generator import (
    DocumentationGenerator,
    FileFailure,
    GeneratedPage,
    GenerationReport,
)
from .highlighter import (
    Highlighter,
    PygmentizeHighlighter,
    PygmentsHighlighter,
    RemoteHighlighter,
    select_highlighter,
)
from .merger import merge_highlighted
from .models import JumpLink, OutputOptions, PageModel, SectionModel
from .page_assembler import PageWriter, assemble, destination_for
from .renderer import ProseRenderer, render_sections

__all__ = [
    "DocumentationGenerator",
    "FileFailure",
    "GeneratedPage",
    "GenerationReport",
    "Highlighter",
    "JumpLink",
    "OutputOptions",
    "PageModel",
    "PageWriter",
    "ProseRenderer",
    "PygmentizeHighlighter",
    "PygmentsHighlighter",
    "RemoteHighlighter",
    "SectionModel",
    "assemble",
    "destination_for",
    "merge_highlighted",
    "render_sections",
    "select_highlighter",
]

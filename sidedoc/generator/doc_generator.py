"""High-level orchestration for side-by-side documentation generation.

:class:`DocumentationGenerator` takes the source files of a run and, one file
at a time in lexicographic order, reads the source, splits it into sections,
highlights all code with a single highlighter call, renders the prose, and
writes the page. Failures are scoped to the file that caused them: they are
logged, collected in the :class:`GenerationReport`, and the run moves on.

Example
-------
>>> from pathlib import Path
>>> from sidedoc.config import load_config
>>> from sidedoc.generator import DocumentationGenerator
>>> generator = DocumentationGenerator(load_config())  # doctest: +SKIP
>>> report = generator.run([Path("src/app.php")])  # doctest: +SKIP
>>> [page.destination for page in report.written]  # doctest: +SKIP
[PosixPath('docs/app.html')]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from sidedoc.errors import SidedocError
from sidedoc.generator.highlighter import select_highlighter
from sidedoc.generator.merger import merge_highlighted
from sidedoc.generator.page_assembler import PageWriter, assemble, destination_for
from sidedoc.generator.renderer import ProseRenderer, render_sections
from sidedoc.source_parser import parse_sections

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sidedoc.config import SidedocConfig
    from sidedoc.generator.highlighter import Highlighter

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class GeneratedPage:
    """A page written during the run."""

    source: Path
    destination: Path
    section_count: int


@dc.dataclass(frozen=True, slots=True)
class FileFailure:
    """A source file that could not be documented.

    Attributes
    ----------
    source : Path
        Offending source file.
    reason : str
        Human-readable explanation.
    error : Exception
        The exception that stopped the file.
    """

    source: Path
    reason: str
    error: Exception


@dc.dataclass(slots=True)
class GenerationReport:
    """Outcome of a run, in processing order."""

    written: list[GeneratedPage] = dc.field(default_factory=list)
    failures: list[FileFailure] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when every source produced a page."""
        return not self.failures


class DocumentationGenerator:
    """Generate one HTML page per annotated source file."""

    def __init__(
        self,
        config: SidedocConfig,
        *,
        highlighter: Highlighter | None = None,
        renderer: ProseRenderer | None = None,
        writer: PageWriter | None = None,
    ) -> None:
        """Initialize the generator with configuration and collaborators.

        Parameters
        ----------
        config : SidedocConfig
            Output options, language registry, and highlighter settings.
        highlighter : Highlighter, optional
            Highlighter backend; selected from ``config`` when omitted.
        renderer : ProseRenderer, optional
            Markdown renderer; built from ``config.pygments_style`` when omitted.
        writer : PageWriter, optional
            Template renderer and file writer; uses ``config.templates_dir``
            when omitted.
        """
        self.config = config
        self.languages = config.languages
        self.options = config.output
        self.highlighter = highlighter or select_highlighter(
            config.highlighter,
            timeout=config.highlighter_timeout,
            remote_url=config.remote_url,
        )
        self.renderer = renderer or ProseRenderer(config.pygments_style)
        self.writer = writer or PageWriter(templates_dir=config.templates_dir)

    def run(self, sources: cabc.Iterable[Path]) -> GenerationReport:
        """Document every source, continuing past per-file failures.

        Parameters
        ----------
        sources : Iterable[Path]
            Source files; processed in lexicographic order.

        Returns
        -------
        GenerationReport
            Pages written and files that failed, each with its reason.

        Notes
        -----
        Side effects include creating the output directory and writing one
        HTML file per successful source.
        """
        ordered = sorted(sources, key=str)
        report = GenerationReport()
        if not ordered:
            return report
        self.options.output_dir.mkdir(parents=True, exist_ok=True)
        self._warn_on_collisions(ordered)
        linkable = [source for source in ordered if source.suffix in self.languages]

        for source in ordered:
            try:
                page = self.generate(source, sources=linkable)
            except (SidedocError, OSError) as exc:
                reason = self._describe_failure(exc)
                logger.error("Skipping %s: %s", source, reason)
                report.failures.append(FileFailure(source=source, reason=reason, error=exc))
                continue
            logger.info("sidedoc = %s -> %s", source, page.destination)
            report.written.append(page)
        return report

    def generate(
        self, source: Path, *, sources: cabc.Sequence[Path] = ()
    ) -> GeneratedPage:
        """Read, split, highlight, render, and write the page for ``source``.

        Raises
        ------
        UnsupportedLanguageError
            If the source extension has no registry entry.
        HighlighterUnavailableError
            If the highlighter cannot be invoked.
        HighlightMismatchError
            If highlighted fragments do not line up with the sections.
        OSError
            If the source cannot be read or the page cannot be written.
        """
        language = self.languages.for_path(source)
        source_text = source.read_text(encoding="utf-8", errors="replace")
        sections = parse_sections(language, source_text)
        merge_highlighted(language, sections, self.highlighter)
        render_sections(sections, self.renderer)
        page = assemble(
            source,
            sections,
            self.options,
            sources=sources,
            stylesheet=self.renderer.stylesheet,
        )
        destination = self.writer.write(page)
        return GeneratedPage(
            source=source, destination=destination, section_count=len(sections)
        )

    def _warn_on_collisions(self, sources: cabc.Sequence[Path]) -> None:
        """Log when several sources map to the same page; the last one wins."""
        seen: dict[Path, Path] = {}
        for source in sources:
            destination = destination_for(source, self.options)
            if destination in seen:
                logger.warning(
                    "%s and %s both write %s; keeping the later file",
                    seen[destination],
                    source,
                    destination,
                )
            seen[destination] = source

    @staticmethod
    def _describe_failure(exc: Exception) -> str:
        if isinstance(exc, OSError) and exc.strerror:
            target = exc.filename or ""
            return f"{exc.strerror}: {target}" if target else exc.strerror
        return str(exc)


__all__ = [
    "DocumentationGenerator",
    "FileFailure",
    "GeneratedPage",
    "GenerationReport",
]

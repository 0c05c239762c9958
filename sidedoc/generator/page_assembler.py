"""Turn populated sections into page models and write them to disk.

:func:`destination_for` maps a source path to its HTML output path,
:func:`assemble` builds the :class:`~sidedoc.generator.models.PageModel` view
model, and :class:`PageWriter` renders that model through the Jinja template
and writes the result.

Example
-------
>>> from pathlib import Path
>>> from sidedoc.generator.models import OutputOptions
>>> from sidedoc.generator.page_assembler import destination_for
>>> destination_for(Path("foo/bar.php"), OutputOptions(Path("out"))).as_posix()
'out/bar.html'
>>> destination_for(
...     Path("foo/bar.php"), OutputOptions(Path("out"), preserve_paths=True)
... ).as_posix()
'out/foo/bar.html'
"""

from __future__ import annotations

import contextlib
import os
import tempfile
import typing as typ
from pathlib import Path, PurePath

from jinja2 import Environment, FileSystemLoader, select_autoescape

from sidedoc._constants import PAGE_TEMPLATE
from sidedoc.generator.models import JumpLink, OutputOptions, PageModel, SectionModel

_PAGE_FILE_MODE = 0o644

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sidedoc.source_parser import Section


def _relative_source(source_path: Path) -> PurePath:
    """Return ``source_path`` as a relative path that stays under the output root."""
    path = source_path
    if path.is_absolute():
        try:
            path = path.relative_to(Path.cwd())
        except ValueError:
            path = PurePath(*path.parts[1:])
    parts = list(path.parts)
    while parts and parts[0] in {"..", "."}:
        parts.pop(0)
    return PurePath(*parts)


def destination_for(source_path: Path, options: OutputOptions) -> Path:
    """Return the HTML output path for ``source_path``.

    Parameters
    ----------
    source_path : Path
        Source file being documented.
    options : OutputOptions
        Output root and path-preservation mode.

    Returns
    -------
    Path
        ``<output_dir>/<stem>.html`` when flattening, or
        ``<output_dir>/<relative dir>/<stem>.html`` when preserving paths.
    """
    filename = f"{source_path.stem}.html"
    if not options.preserve_paths:
        return options.output_dir / filename
    relative = _relative_source(source_path)
    return options.output_dir / relative.parent / filename


def _jump_links(
    destination: Path, sources: cabc.Sequence[Path], options: OutputOptions
) -> list[JumpLink]:
    """Build links from ``destination`` to every page of the run."""
    if len(sources) < 2:
        return []
    links: list[JumpLink] = []
    for source in sources:
        target = destination_for(source, options)
        href = os.path.relpath(target, start=destination.parent)
        links.append(JumpLink(label=source.name, href=Path(href).as_posix()))
    return links


def assemble(
    source_path: Path,
    sections: cabc.Sequence[Section],
    options: OutputOptions,
    *,
    sources: cabc.Sequence[Path] = (),
    stylesheet: str = "",
) -> PageModel:
    """Build the page view model for a fully populated list of sections.

    Parameters
    ----------
    source_path : Path
        Source file the page documents.
    sections : Sequence[Section]
        Sections with ``docs_html`` and ``code_html`` filled in.
    options : OutputOptions
        Output root and path-preservation mode.
    sources : Sequence[Path], optional
        Every source of the run, used for the jump-to navigation.
    stylesheet : str, optional
        CSS embedded in the page for highlighted code.

    Returns
    -------
    PageModel
        Title, destination, ordered section rows, and navigation links.
    """
    destination = destination_for(source_path, options)
    return PageModel(
        title=source_path.name,
        source_path=source_path,
        destination=destination,
        sections=[
            SectionModel(
                index=section.index,
                docs_html=section.docs_html,
                code_html=section.code_html,
            )
            for section in sections
        ],
        jump_links=_jump_links(destination, sources, options),
        stylesheet=stylesheet,
    )


class PageWriter:
    """Render page models with the Jinja template and write them to disk."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the writer and its Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``page.jinja``; defaults to the templates
            shipped with the package.
        """
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template(PAGE_TEMPLATE)

    def render(self, page: PageModel) -> str:
        """Return the complete HTML document for ``page``."""
        html = self.template.render(page=page)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def write(self, page: PageModel) -> Path:
        """Render ``page`` and write it to ``page.destination``.

        The parent directory is created when missing. The file is written to a
        temporary sibling and moved into place, so a failure never leaves a
        truncated page behind; an existing page is overwritten.

        Returns
        -------
        Path
            The destination path.
        """
        html = self.render(page)
        destination = page.destination
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(html)
            os.chmod(tmp_name, _PAGE_FILE_MODE)
            Path(tmp_name).replace(destination)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                Path(tmp_name).unlink()
            raise
        return destination


__all__ = ["PageWriter", "assemble", "destination_for"]

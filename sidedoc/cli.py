"""Cyclopts CLI entrypoint for generating side-by-side source documentation.

The ``sidedoc`` console script reads annotated source files, splits them into
comment/code sections, and writes one HTML page per file into the output
directory. Files are processed one at a time in lexicographic order; a file
that fails (unsupported extension, highlighter problems, I/O errors) is
reported and skipped, and the command exits non-zero once the run completes.

Examples
--------
Document two files into the default ``docs`` directory:

>>> from sidedoc.cli import main
>>> main(["src/app.php", "src/util.php"])  # doctest: +SKIP

Keep the source tree layout under a custom output directory:

>>> main(["-p", "-d", "site", "src/app.php"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import SidedocConfigError, load_config
from .generator import DocumentationGenerator
from .generator.highlighter import HighlighterKind

app = App(name="sidedoc", config=cyclopts.config.Env("SIDEDOC_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.default
def generate(
    *files: Path,
    directory: typ.Annotated[
        Path | None,
        Parameter(name=["--directory", "-d"], help="Output root (default: docs)"),
    ] = None,
    paths: typ.Annotated[
        bool,
        Parameter(
            name=["--paths", "-p"],
            negative=(),
            help="Preserve relative directory structure under the output root",
        ),
    ] = False,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to a sidedoc.yaml configuration file")
    ] = None,
    highlighter: typ.Annotated[
        HighlighterKind | None, Parameter(help="Override the highlighter backend")
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(name=["--verbose", "-v"], negative=(), help="Log debug output")
    ] = False,
) -> None:
    """Generate side-by-side HTML documentation for annotated source files.

    Parameters
    ----------
    files : Path
        Source files to document.
    directory : Path or None, optional
        Output root; falls back to the configured ``output_dir`` (``docs``).
    paths : bool, optional
        Keep each source's relative directory under the output root instead
        of flattening to the basename.
    config : Path or None, optional
        Configuration file; ``sidedoc.yaml`` is used when present.
    highlighter : str or None, optional
        ``pygmentize``, ``pygments``, or ``remote``; overrides the config.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes pages and prints ``sidedoc = SOURCE -> DEST`` for each one.

    Raises
    ------
    SystemExit
        With status ``2`` when the configuration is invalid and ``1`` when
        any source file failed.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    try:
        settings = load_config(config).with_overrides(
            output_dir=directory,
            preserve_paths=True if paths else None,
            highlighter=highlighter,
        )
        generator = DocumentationGenerator(settings)
    except (SidedocConfigError, FileNotFoundError, ValueError) as exc:
        print(f"sidedoc: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    report = generator.run(files)
    for page in report.written:
        print(f"sidedoc = {_format_path(page.source)} -> {_format_path(page.destination)}")
    if not report.ok:
        print(
            f"sidedoc: {len(report.failures)} of {len(files)} file(s) failed",
            file=sys.stderr,
        )
        raise SystemExit(1)


def main(argv: list[str] | None = None) -> None:
    """Invoke the Cyclopts application that powers the ``sidedoc`` command.

    Parameters
    ----------
    argv : list[str] or None, optional
        Arguments to parse; ``sys.argv[1:]`` when ``None``.

    Examples
    --------
    >>> main(["--help"])  # doctest: +SKIP
    """
    app(argv)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

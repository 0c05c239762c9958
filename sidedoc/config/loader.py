"""Load sidedoc configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from sidedoc._constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_HIGHLIGHTER_TIMEOUT,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PYGMENTS_STYLE,
)
from sidedoc.generator.highlighter import HIGHLIGHTER_KINDS
from sidedoc.generator.models import OutputOptions
from sidedoc.languages import LanguageSpec, default_registry

from .models import SidedocConfig, SidedocConfigError


def load_config(path: Path | None = None) -> SidedocConfig:
    """Load the YAML configuration describing output and language choices.

    Parameters
    ----------
    path : Path or None, optional
        Configuration file. When ``None``, ``sidedoc.yaml`` in the working
        directory is used if it exists, otherwise built-in defaults apply.

    Returns
    -------
    SidedocConfig
        Resolved configuration with the language table merged over the
        built-in entries.

    Raises
    ------
    FileNotFoundError
        If ``path`` was given explicitly and does not exist.
    SidedocConfigError
        If the YAML structure or any value is invalid.

    Examples
    --------
    >>> from sidedoc.config import load_config
    >>> config = load_config(Path("sidedoc.yaml"))  # doctest: +SKIP
    >>> config.output.output_dir  # doctest: +SKIP
    PosixPath('docs')
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return SidedocConfig()
        path = DEFAULT_CONFIG_PATH
    elif not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise SidedocConfigError(msg)
    return _build_config(typ.cast("dict[str, typ.Any]", loaded))


def _build_config(raw: typ.Mapping[str, typ.Any]) -> SidedocConfig:
    defaults = raw.get("defaults") or {}
    if not isinstance(defaults, dict):
        msg = "'defaults' must be a mapping."
        raise SidedocConfigError(msg)

    highlighter = str(defaults.get("highlighter", "pygmentize"))
    if highlighter not in HIGHLIGHTER_KINDS:
        msg = (
            f"Unknown highlighter '{highlighter}'. "
            f"Expected one of: {', '.join(HIGHLIGHTER_KINDS)}"
        )
        raise SidedocConfigError(msg)
    remote_url = _optional_str(defaults.get("remote_url"))
    if highlighter == "remote" and not remote_url:
        msg = "The 'remote' highlighter requires 'remote_url'."
        raise SidedocConfigError(msg)

    templates_dir = _optional_str(defaults.get("templates_dir"))
    output_dir = _optional_str(defaults.get("output_dir"))
    output = OutputOptions(
        output_dir=Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR,
        preserve_paths=_parse_flag(defaults.get("preserve_paths", False), "preserve_paths"),
    )
    return SidedocConfig(
        output=output,
        languages=default_registry().with_entries(
            _build_language_specs(raw.get("languages") or {})
        ),
        pygments_style=str(defaults.get("pygments_style", DEFAULT_PYGMENTS_STYLE)),
        highlighter=highlighter,
        highlighter_timeout=_parse_timeout(
            defaults.get("highlighter_timeout", DEFAULT_HIGHLIGHTER_TIMEOUT)
        ),
        remote_url=remote_url,
        templates_dir=Path(templates_dir) if templates_dir else None,
    )


def _build_language_specs(payload: object) -> list[LanguageSpec]:
    """Build language entries from ``{extension: {name, symbol}}``."""
    if not isinstance(payload, dict):
        msg = "'languages' must be a mapping of extension to {name, symbol}."
        raise SidedocConfigError(msg)
    specs: list[LanguageSpec] = []
    for extension, entry in payload.items():
        match entry:
            case {"name": str(name), "symbol": str(symbol)} if name and symbol:
                specs.append(LanguageSpec.build(str(extension), name, symbol))
            case _:
                msg = f"Language '{extension}' needs non-empty 'name' and 'symbol'."
                raise SidedocConfigError(msg)
    return specs


def _parse_timeout(value: object) -> float | None:
    """Return a positive timeout in seconds, or ``None`` for no limit."""
    if value is None:
        return None
    try:
        seconds = float(typ.cast("float", value))
    except (TypeError, ValueError) as exc:
        msg = f"'highlighter_timeout' must be a number, got {value!r}."
        raise SidedocConfigError(msg) from exc
    if seconds <= 0:
        msg = "'highlighter_timeout' must be positive."
        raise SidedocConfigError(msg)
    return seconds


def _parse_flag(value: object, key: str) -> bool:
    """Return a YAML boolean, rejecting strings such as ``"false"``."""
    if value is None:
        return False
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false, got {value!r}."
        raise SidedocConfigError(msg)
    return value


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = ["load_config"]

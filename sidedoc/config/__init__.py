"""Load and validate sidedoc configuration.

This subpackage parses the optional ``sidedoc.yaml`` file, merges its language
table over the built-in extension registry, and produces a frozen
:class:`SidedocConfig` that the generator and CLI consume. The primary entry
point is :func:`load_config`.

Examples
--------
>>> from pathlib import Path
>>> from sidedoc.config import load_config
>>> config = load_config(Path("sidedoc.yaml"))  # doctest: +SKIP
>>> config.languages.lookup(".php").comment_marker  # doctest: +SKIP
'//'
"""

from .loader import load_config
from .models import SidedocConfig, SidedocConfigError

__all__ = ["SidedocConfig", "SidedocConfigError", "load_config"]

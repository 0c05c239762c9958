"""Common literal values used across sidedoc.

These constants keep the divider sentinel, the highlighter wrapper markup, and
default paths centralized so the splitter, the merger, templates, and tests
import the same values without drifting. Intended for internal use within the
sidedoc package.

Examples
--------
>>> from sidedoc import _constants
>>> _constants.HIGHLIGHT_START
'<div class="highlight"><pre>'
>>> _constants.DIVIDER_SENTINEL
'DIVIDER'
"""

from pathlib import Path

DIVIDER_SENTINEL = "DIVIDER"
HIGHLIGHT_START = '<div class="highlight"><pre>'
HIGHLIGHT_END = "</pre></div>"
DEFAULT_OUTPUT_DIR = Path("docs")
DEFAULT_CONFIG_PATH = Path("sidedoc.yaml")
DEFAULT_PYGMENTS_STYLE = "default"
DEFAULT_HIGHLIGHTER_TIMEOUT = 30.0
PAGE_TEMPLATE = "page.jinja"

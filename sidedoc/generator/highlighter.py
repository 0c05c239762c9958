"""Syntax highlighter backends used by the highlight merger.

The merger treats the highlighter as a black box: one synchronous call that
turns ``(code, grammar)`` into HTML wrapped in
``<div class="highlight"><pre>...</pre></div>``. Three backends satisfy that
contract:

* :class:`PygmentizeHighlighter` pipes the code through the ``pygmentize``
  command-line tool (the default).
* :class:`PygmentsHighlighter` calls the Pygments library in-process.
* :class:`RemoteHighlighter` posts the code to a highlighting web service.

:func:`select_highlighter` picks a backend from configuration and falls back
when ``pygmentize`` is not installed. Every backend raises
:class:`~sidedoc.errors.HighlighterUnavailableError` when it cannot produce
output, so callers never receive a silently empty highlight.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import typing as typ

import requests
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from sidedoc._constants import DEFAULT_HIGHLIGHTER_TIMEOUT
from sidedoc.errors import HighlighterUnavailableError

logger = logging.getLogger(__name__)

HighlighterKind = typ.Literal["pygmentize", "pygments", "remote"]
HIGHLIGHTER_KINDS: tuple[str, ...] = typ.get_args(HighlighterKind)


class Highlighter(typ.Protocol):
    """Callable seam for the external syntax highlighter."""

    def highlight(self, code: str, grammar: str) -> str:
        """Return ``code`` highlighted as HTML using the ``grammar`` lexer."""
        ...


class PygmentizeHighlighter:
    """Highlight code by running the ``pygmentize`` executable."""

    def __init__(
        self,
        *,
        executable: str | None = None,
        timeout: float | None = DEFAULT_HIGHLIGHTER_TIMEOUT,
    ) -> None:
        self.executable = executable
        self.timeout = timeout

    @staticmethod
    def available() -> bool:
        """Return ``True`` when ``pygmentize`` can be found on ``PATH``."""
        return shutil.which("pygmentize") is not None

    def highlight(self, code: str, grammar: str) -> str:
        """Pipe ``code`` through ``pygmentize -f html -l <grammar>``.

        Raises
        ------
        HighlighterUnavailableError
            If the executable is missing, cannot be started, times out, or
            exits with a non-zero status.
        """
        cmd = self.executable or shutil.which("pygmentize")
        if not cmd:
            msg = "pygmentize is not installed or not on PATH"
            raise HighlighterUnavailableError(msg)
        args = [cmd, "-f", "html", "-l", grammar, "-O", "encoding=utf-8"]
        try:
            completed = subprocess.run(  # noqa: S603
                args,
                input=code,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            msg = f"pygmentize did not respond within {self.timeout} seconds"
            raise HighlighterUnavailableError(msg) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            msg = f"pygmentize failed for lexer '{grammar}': {detail}"
            raise HighlighterUnavailableError(msg) from exc
        except OSError as exc:
            msg = f"Unable to start pygmentize: {exc}"
            raise HighlighterUnavailableError(msg) from exc
        return completed.stdout


class PygmentsHighlighter:
    """Highlight code with the Pygments library in the current process."""

    def __init__(self) -> None:
        self._formatter = HtmlFormatter(cssclass="highlight")

    def highlight(self, code: str, grammar: str) -> str:
        """Return highlighted HTML, using the ``text`` lexer for unknown grammars."""
        try:
            lexer = get_lexer_by_name(grammar)
        except ClassNotFound:
            logger.warning("No Pygments lexer named %r; highlighting as text", grammar)
            lexer = get_lexer_by_name("text")
        return highlight(code, lexer, self._formatter)


class RemoteHighlighter:
    """Highlight code by posting it to a Pygments-compatible web service.

    The service receives a form with ``lang`` and ``code`` fields and answers
    with the highlighted HTML body.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = DEFAULT_HIGHLIGHTER_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        retry = Retry(
            total=3,
            connect=3,
            read=3,
            backoff_factor=0.5,
            status_forcelist=(500, 502, 503, 504),
            allowed_methods=("POST",),
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    def highlight(self, code: str, grammar: str) -> str:
        """POST ``code`` to the service and return its HTML response.

        Raises
        ------
        HighlighterUnavailableError
            If the service cannot be reached or answers with an error status.
        """
        session = self._session or self._build_session()
        try:
            resp = session.post(
                self.url, data={"lang": grammar, "code": code}, timeout=self.timeout
            )
            resp.raise_for_status()
            return resp.text
        except requests.RequestException as exc:
            msg = f"Highlighting service {self.url} is unavailable: {exc}"
            raise HighlighterUnavailableError(msg) from exc
        finally:
            if self._session is None:
                session.close()


def select_highlighter(
    kind: str = "pygmentize",
    *,
    timeout: float | None = DEFAULT_HIGHLIGHTER_TIMEOUT,
    remote_url: str | None = None,
) -> Highlighter:
    """Return the configured highlighter backend.

    Parameters
    ----------
    kind : str, optional
        One of ``"pygmentize"`` (default), ``"pygments"``, or ``"remote"``.
    timeout : float or None, optional
        Seconds to wait for the subprocess or web service.
    remote_url : str or None, optional
        Web service URL; required for ``"remote"`` and used as the fallback
        when ``pygmentize`` is missing.

    Returns
    -------
    Highlighter
        ``pygmentize`` when requested and installed. When it is missing, a
        warning is logged and the remote service is used if a URL is
        configured, otherwise the in-process Pygments library.

    Raises
    ------
    ValueError
        If ``kind`` is unknown, or ``"remote"`` is requested without a URL.
    """
    if kind not in HIGHLIGHTER_KINDS:
        msg = f"Unknown highlighter '{kind}'. Expected one of: {', '.join(HIGHLIGHTER_KINDS)}"
        raise ValueError(msg)
    if kind == "remote":
        if not remote_url:
            msg = "The remote highlighter needs a service URL."
            raise ValueError(msg)
        return RemoteHighlighter(remote_url, timeout=timeout)
    if kind == "pygments":
        return PygmentsHighlighter()
    if PygmentizeHighlighter.available():
        return PygmentizeHighlighter(timeout=timeout)
    if remote_url:
        logger.warning("pygmentize not found; using web service %s", remote_url)
        return RemoteHighlighter(remote_url, timeout=timeout)
    logger.warning("pygmentize not found; highlighting with the Pygments library")
    return PygmentsHighlighter()


__all__ = [
    "HIGHLIGHTER_KINDS",
    "Highlighter",
    "HighlighterKind",
    "PygmentizeHighlighter",
    "PygmentsHighlighter",
    "RemoteHighlighter",
    "select_highlighter",
]

"""Logging initialization and structured logging helpers.

Purpose
    Establish the process-wide logging state before any command runs and keep
    every diagnostic emitted by ``zap`` contextual and predictable.

Contents
    - ``STANDARD`` / ``STATS`` / ``VERBOSE`` / ``DEBUG``: the four verbosity
      levels, ordered from quietest to noisiest.
    - ``VERBOSITY_LEVELS``: level names accepted by ``--verbosity``.
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``setup_logging``: idempotent initializer invoked by the command tree
      builder.
    - ``set_verbosity``: applies one of the named verbosity levels.
    - ``get_logger`` / ``bind_trace_id`` / ``make_event``.
    - ``log_debug`` / ``log_verbose`` / ``log_stats`` / ``log_info`` /
      ``log_error``: emit structured entries via a single private emitter.

System Integration
    :func:`zap.cli.build_root_command` calls :func:`setup_logging` once; the
    root handler applies ``--verbosity`` and binds a fresh trace id per
    invocation. Records go to ``stderr`` so command output on ``stdout``
    stays clean.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any, Final, Mapping, TextIO

STANDARD: Final[int] = logging.INFO
STATS: Final[int] = 17
VERBOSE: Final[int] = 15
DEBUG: Final[int] = logging.DEBUG

VERBOSITY_LEVELS: Final[dict[str, int]] = {
    "standard": STANDARD,
    "stats": STATS,
    "verbose": VERBOSE,
    "debug": DEBUG,
}

TRACE_ID: ContextVar[str | None] = ContextVar("zap_trace_id", default=None)
"""Current trace identifier propagated through logging helpers."""

_LOGGER: Final[logging.Logger] = logging.getLogger("zap")
_LOGGER.addHandler(logging.NullHandler())


class _StderrHandler(logging.StreamHandler):
    """Stream handler that looks up ``sys.stderr`` at emit time.

    Test runners and ``CliRunner`` swap ``sys.stderr``; binding the stream once
    would leave the handler writing to a closed file.
    """

    @property
    def stream(self) -> TextIO:  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value: TextIO) -> None:
        pass


class _ContextFormatter(logging.Formatter):
    """Append the structured ``context`` fields of a record as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return text
        fields = " ".join(f"{key}={value}" for key, value in context.items() if value is not None)
        return f"{text} {fields}" if fields else text


def setup_logging() -> None:
    """Establish process-wide logging state for the four verbosity levels.

    Why
        Commands report through the ``zap`` logger instead of printing
        diagnostics directly, and the level names must be registered before
        ``--verbosity`` is applied.
    What
        Registers the ``STATS`` and ``VERBOSE`` level names, attaches one
        ``stderr`` handler and sets the ``standard`` level.
    Side Effects
        Mutates the ``zap`` logger. Calling it again is a no-op; configuration
        errors are logged and swallowed so the command tree still builds.

    Examples
    --------
    >>> setup_logging()
    >>> setup_logging()
    >>> sum(isinstance(h, _StderrHandler) for h in get_logger().handlers)
    1
    """

    if any(isinstance(handler, _StderrHandler) for handler in _LOGGER.handlers):
        return
    try:
        logging.addLevelName(STATS, "STATS")
        logging.addLevelName(VERBOSE, "VERBOSE")
        handler = _StderrHandler()
        handler.setFormatter(_ContextFormatter("%(levelname)s %(message)s"))
        _LOGGER.addHandler(handler)
        _LOGGER.setLevel(STANDARD)
    except (TypeError, ValueError) as exc:
        _LOGGER.warning("logging_setup_failed", extra={"context": {"error": str(exc)}})


def set_verbosity(name: str) -> int:
    """Apply the verbosity level called *name* and return its numeric level.

    Examples
    --------
    >>> set_verbosity("verbose")
    15
    >>> set_verbosity("loud")
    Traceback (most recent call last):
    ...
    ValueError: unknown verbosity 'loud' (expected standard, stats, verbose, debug)
    >>> set_verbosity("standard")
    20
    """

    try:
        level = VERBOSITY_LEVELS[name.lower()]
    except KeyError as exc:
        choices = ", ".join(VERBOSITY_LEVELS)
        raise ValueError(f"unknown verbosity {name!r} (expected {choices})") from exc
    _LOGGER.setLevel(level)
    return level


def get_logger() -> logging.Logger:
    """Expose the package logger so embedding applications may attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id('abc123')
    >>> TRACE_ID.get()
    'abc123'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug entry."""

    _emit(DEBUG, message, fields)


def log_verbose(message: str, **fields: Any) -> None:
    """Emit a structured entry shown at ``verbose`` verbosity and noisier."""

    _emit(VERBOSE, message, fields)


def log_stats(message: str, **fields: Any) -> None:
    """Emit a structured entry shown at ``stats`` verbosity and noisier."""

    _emit(STATS, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured entry shown at every verbosity."""

    _emit(STANDARD, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error entry."""

    _emit(logging.ERROR, message, fields)


def make_event(command: str, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Build a structured logging payload for a command lifecycle event.

    Examples
    --------
    >>> make_event('publish', {'topic': 'a/b'})
    {'command': 'publish', 'topic': 'a/b'}
    """

    event: dict[str, Any] = {"command": command}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context

"""Structured event logging for the chain runner and the matcher.

Events are a name plus key/value fields. Fields come from three layers,
later ones winning: the scoped ``log_context``, the logger's bound context,
and the call site.

Output format and threshold come from settings (VERDICT_LOG_FORMAT,
VERDICT_LOG_LEVEL, VERDICT_DEBUG) until configure_logging() overrides them.

Example:
    >>> configure_logging(format="json", level="DEBUG")
    >>> log = get_logger("checkout", service="payments")
    >>> with log_context(request_id="r-1"):
    ...     log.info("charging card", order_id=123)
"""

from __future__ import annotations

import logging
import sys
import time
import traceback
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Callable, Protocol, TextIO, runtime_checkable

import orjson

from verdict.foundation.config import get_settings
from verdict.foundation.errors import JsonDict, JsonValue

if TYPE_CHECKING:
    from types import TracebackType

_scoped_fields: ContextVar[JsonDict] = ContextVar("verdict_log_fields", default={})
_active_renderer: ContextVar[LogRenderer | None] = ContextVar("verdict_log_renderer", default=None)
_threshold: ContextVar[int | None] = ContextVar("verdict_log_threshold", default=None)


# ─────────────────────────────────────────────────────────────────────────────
# Events & Loggers
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One emitted event."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    def clock(self, fmt: str | None = None) -> str:
        """Event time in UTC: ISO-8601 by default, or strftime(fmt)."""
        moment = datetime.fromtimestamp(self.timestamp, tz=UTC)
        return moment.isoformat() if fmt is None else moment.strftime(fmt)


@dataclass(frozen=True, slots=True)
class BoundLogger:
    """Logger carrying bound fields. bind()/unbind() return new loggers.

    Without an explicit renderer or level the logger follows the global
    configuration at emit time, so module-level loggers pick up a later
    configure_logging() call.
    """

    context: JsonDict = field(default_factory=dict)
    renderer: LogRenderer | None = None
    level: int | None = None

    def bind(self, **fields: JsonValue) -> BoundLogger:
        return BoundLogger({**self.context, **fields}, self.renderer, self.level)

    def unbind(self, *keys: str) -> BoundLogger:
        kept = {k: v for k, v in self.context.items() if k not in keys}
        return BoundLogger(kept, self.renderer, self.level)

    def is_enabled_for(self, level: int) -> bool:
        return level >= (_current_threshold() if self.level is None else self.level)

    def emit(self, level: int, event: str, fields: JsonDict) -> None:
        if not self.is_enabled_for(level):
            return
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event,
                         {**_scoped_fields.get(), **self.context, **fields})
        (self.renderer or _current_renderer()).render(entry)

    def debug(self, event: str, **fields: JsonValue) -> None:
        self.emit(logging.DEBUG, event, fields)

    def info(self, event: str, **fields: JsonValue) -> None:
        self.emit(logging.INFO, event, fields)

    def warning(self, event: str, **fields: JsonValue) -> None:
        self.emit(logging.WARNING, event, fields)

    def error(self, event: str, **fields: JsonValue) -> None:
        self.emit(logging.ERROR, event, fields)

    def exception(self, event: str, **fields: JsonValue) -> None:
        """Error event with the active traceback under ``exc_info``."""
        self.emit(logging.ERROR, event, {**fields, "exc_info": traceback.format_exc()})


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


_ANSI = {"reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "red": "\033[31m",
         "green": "\033[32m", "yellow": "\033[33m", "blue": "\033[34m", "cyan": "\033[36m"}
_PLAIN = dict.fromkeys(_ANSI, "")
_LEVEL_STYLE = {"debug": "dim", "info": "green", "warning": "yellow", "error": "red", "critical": "red"}


@dataclass(slots=True)
class ConsoleRenderer:
    """Single-line human output: ``HH:MM:SS.mmm [level] event key=value ...``"""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = use colors on a tty
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = bool(getattr(self.output, "isatty", lambda: False)())

    def render(self, entry: LogEntry) -> None:
        style = _ANSI if self.colors else _PLAIN
        paint = lambda name, text: f"{style[name]}{text}{style['reset']}"  # noqa: E731
        head = [paint("dim", entry.clock("%H:%M:%S.%f")[:-3])] if self.show_timestamp else []
        head += [paint(_LEVEL_STYLE.get(entry.level, "dim"), f"[{entry.level}]"), paint("bold", entry.event)]
        fields = [f"{paint('cyan', key)}={_console_value(value, paint)}"
                  for key, value in sorted(entry.context.items()) if key != "exc_info"]
        print(" ".join(head + fields), file=self.output)
        if trace := entry.context.get("exc_info"):
            print(paint("red", trace), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """One JSON object per line."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.clock(), "level": entry.level, "event": entry.event, **entry.context}
        self.output.write(orjson.dumps(record, option=orjson.OPT_NON_STR_KEYS | orjson.OPT_APPEND_NEWLINE,
                                       default=repr).decode())


@dataclass(slots=True)
class NoOpRenderer:
    """Discards every event."""

    def render(self, entry: LogEntry) -> None:
        return None


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────


def configure_logging(
    format: str | None = None,  # noqa: A002
    level: str | None = None,
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Select the global renderer and threshold. Arguments left as None come from settings.

    Raises:
        ValueError: If format is not "console", "json" or "none"
    """
    settings = get_settings()
    fmt = (format or settings.logging.format).lower()
    match fmt:
        case "console":
            renderer: LogRenderer = ConsoleRenderer(
                output or sys.stderr, colors if colors is not None else settings.logging.colors,
            )
        case "json":
            renderer = JsonRenderer(output or sys.stdout)
        case "none":
            renderer = NoOpRenderer()
        case _:
            raise ValueError(f"Unknown format: {fmt}. Use 'console', 'json', or 'none'")
    _threshold.set(_level_number(level or settings.effective_log_level))
    _active_renderer.set(renderer)
    return renderer


def reset_logging() -> None:
    """Forget configure_logging(); the next event reads settings again."""
    _active_renderer.set(None)
    _threshold.set(None)


def get_logger(name: str | None = None, **fields: JsonValue) -> BoundLogger:
    """Logger with initial bound fields; name is bound as ``logger``."""
    return BoundLogger({**fields, "logger": name} if name else dict(fields))


def _current_renderer() -> LogRenderer:
    return _active_renderer.get() or configure_logging()


def _current_threshold() -> int:
    level = _threshold.get()
    return _level_number(get_settings().effective_log_level) if level is None else level


def _level_number(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


# ─────────────────────────────────────────────────────────────────────────────
# Scoped Fields
# ─────────────────────────────────────────────────────────────────────────────


class log_context:
    """Add fields to every event emitted inside the ``with`` block."""

    __slots__ = ("_fields", "_token")

    def __init__(self, **fields: JsonValue) -> None:
        self._fields = fields
        self._token = None

    def __enter__(self) -> log_context:
        self._token = _scoped_fields.set({**_scoped_fields.get(), **self._fields})
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        if self._token is not None:
            _scoped_fields.reset(self._token)
            self._token = None


def _console_value(value: object, paint: Callable[[str, object], str]) -> str:
    match value:
        case str():
            return paint("yellow", f'"{value}"')
        case bool() | None:
            return paint("blue", str(value).lower())
        case int() | float():
            return paint("blue", value)
        case dict() | list() | tuple():
            return paint("dim", f"<{type(value).__name__} of {len(value)}>")
        case _:
            return repr(value)

"""Structured logging for retry sessions with context propagation.

Quick Start:
    >>> from retrykit.observability import configure_logging, get_logger
    >>> configure_logging(format="console", level="DEBUG")  # or "json" for production
    >>> log = get_logger("payments").bind(operation="charge")
    >>> log.info("charging card", amount=42)

The retry driver logs through this module: DEBUG for every scheduled retry,
INFO when a policy gives up on a result that was still retryable.
"""

from __future__ import annotations

import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, TextIO, runtime_checkable

import orjson

if TYPE_CHECKING:
    from types import TracebackType

    from retrykit.config import RetrykitSettings

LogDict = dict[str, Any]

# Context var for scoped context (persists across async calls)
_log_context: ContextVar[LogDict] = ContextVar("retrykit_log_context", default={})


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context. bind() returns a new logger with merged context.

    Example:
        >>> log = BoundLogger(context={"policy": "limit_retries(3)"})
        >>> log.debug("retry scheduled", attempt=0, delay_us=0)
        # => 10:30:45.120 [debug] retry scheduled attempt=0 delay_us=0 policy="limit_retries(3)"
    """

    context: LogDict = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int | None = None  # None follows the process-wide level

    def bind(self, **kw: Any) -> BoundLogger:
        """Create new logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def _log(self, level: int, event: str, **kw: Any) -> None:
        if level < (_default_level if self._level is None else self._level):
            return
        merged = {**_log_context.get(), **self.context, **kw}
        (self._renderer or _get_renderer()).render(LogEntry(time.time(), _level_name(level), event, merged))

    def debug(self, event: str, **kw: Any) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: Any) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: Any) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: Any) -> None: self._log(logging.ERROR, event, **kw)


@dataclass(slots=True)
class LogEntry:
    timestamp: float
    level: str
    event: str
    context: LogDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """Human-readable timestamp (HH:MM:SS.mmm)."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output. Format: timestamp [level] event key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    show_timestamp: bool = True

    def render(self, entry: LogEntry) -> None:
        parts = [entry.ts_human] if self.show_timestamp else []
        parts += [f"[{entry.level}]", entry.event]
        parts += [f"{k}={_format_value(v)}" for k, v in sorted(entry.context.items())]
        print(" ".join(parts), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        print(orjson.dumps({"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event,
                            **entry.context}, option=orjson.OPT_NON_STR_KEYS, default=repr).decode(),
              file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer for testing."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


# Shared by every thread and task; only configure_logging() rebinds them
_renderer: LogRenderer | None = None
_default_level: int = logging.INFO


def configure_logging(
    format: str = "console",  # noqa: A002 - shadows builtin but matches stdlib
    level: str = "INFO",
    *,
    output: TextIO | None = None,
) -> LogRenderer:
    """Configure global structured logging. Format: "console" (human), "json" (machine), "none"."""
    global _renderer, _default_level
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _renderer, _default_level = renderer, getattr(logging, level.upper(), logging.INFO)
    return renderer


def configure_from_settings(settings: RetrykitSettings | None = None, *, output: TextIO | None = None) -> LogRenderer:
    """Configure logging from the RETRYKIT_LOG_* settings."""
    if settings is None:
        from retrykit.config import get_settings
        settings = get_settings()
    return configure_logging(settings.logging.format, settings.logging.level, output=output)


def get_logger(name: str | None = None, **initial_context: Any) -> BoundLogger:
    """Get a structured logger. Name is added to context as 'logger'."""
    ctx = {**initial_context, **({"logger": name} if name else {})}
    return BoundLogger(context=ctx)


def _get_renderer() -> LogRenderer:
    global _renderer
    if _renderer is None:
        _renderer = ConsoleRenderer()
    return _renderer


class log_context:
    """Context manager adding key-value pairs to all log entries within the scope."""

    __slots__ = ("_ctx", "_token")

    def __init__(self, **kw: Any) -> None:
        self._ctx: LogDict = dict(kw)
        self._token: object | None = None

    def __enter__(self) -> log_context:
        self._token = _log_context.set({**_log_context.get(), **self._ctx})
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        self._token and _log_context.reset(self._token)  # type: ignore[func-returns-value,arg-type]


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


def _level_name(level: int) -> str:
    return logging.getLevelName(level).lower()


def _format_value(v: object) -> str:
    match v:
        case str(): return f'"{v}"'
        case bool(): return str(v).lower()
        case int() | float(): return str(v)
        case dict(): return f"{{{len(v)} items}}"
        case list() | tuple(): return f"[{len(v)} items]"
        case _: return repr(v)

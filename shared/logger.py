"""
Keyward Logging
================

:class:`KeywardLogger` binds a component name (``"breach"``, ``"engine"``)
to a stdlib logger under the ``keyward.`` namespace. Records go to a Rich
console handler on stderr and, when a log file is configured, to a
size-rotated file as plain text or one JSON object per line.

Password material never reaches a log record: callers log lengths,
statuses and counts, never the password, its digest or its hash prefix.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
import weakref
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

NAMESPACE = "keyward"

_STDERR_THEME = Theme(
    {
        "log.level.debug": "dim",
        "log.level.info": "cyan",
        "log.level.warning": "yellow",
        "log.level.error": "bold red",
        "log.level.critical": "reverse red",
    }
)

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Keyword arguments the stdlib logging calls understand; anything else a
# caller passes is carried as structured extra data.
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})


@dataclass(frozen=True)
class LogSettings:
    level: str = "WARNING"
    file: Optional[Path] = None
    json_lines: bool = False
    to_console: bool = True


_settings = LogSettings()
_live: "weakref.WeakSet[KeywardLogger]" = weakref.WeakSet()


def configure_logging(
    *,
    log_level: str = "WARNING",
    log_file: str | Path | None = None,
    json_logs: bool = False,
    console_output: bool = True,
) -> None:
    """Replace the process-wide logging settings.

    Loggers that already exist (most are created at import time) pick up
    the new settings immediately.
    """
    global _settings
    _settings = LogSettings(
        level=log_level,
        file=Path(log_file) if log_file else None,
        json_lines=json_logs,
        to_console=console_output,
    )
    for log in list(_live):
        log.rebuild()


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record.

    Always carries ``timestamp``, ``level``, ``logger`` and ``message``;
    ``component``, ``operation``, ``extra`` and ``exc_info`` appear when
    set.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        optional = {
            "component": getattr(record, "component", None),
            "operation": getattr(record, "operation", None),
            "extra": getattr(record, "fields", None),
        }
        payload.update({k: v for k, v in optional.items() if v})
        if record.exc_info and record.exc_info[1] is not None:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _stderr_handler(level: int) -> logging.Handler:
    return RichHandler(
        level=level,
        console=Console(stderr=True, theme=_STDERR_THEME),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )


def _file_handler(
    path: Path, json_lines: bool, level: int, max_bytes: int, backups: int
) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
    )
    handler.setLevel(level)
    if json_lines:
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    return handler


class Stopwatch:
    """Wall-clock timer returned by :meth:`KeywardLogger.timed`."""

    def __init__(self) -> None:
        self.started = time.perf_counter()

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started


class KeywardLogger:
    """Component-scoped logger.

    Keyword arguments other than the stdlib ones (``exc_info`` and so on)
    become structured fields, shown as ``extra`` in JSON output::

        log = KeywardLogger("breach")
        with log.operation("range_query"):
            log.debug("Range response held %d records", n, records=n)

    Constructor arguments left as ``None`` follow :func:`configure_logging`.
    """

    def __init__(
        self,
        component: str,
        *,
        log_level: str | None = None,
        log_file: str | Path | None = None,
        json_logs: bool | None = None,
        console_output: bool | None = None,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        self.component = component
        self._pinned = {
            "level": log_level,
            "file": Path(log_file) if log_file else None,
            "json_lines": json_logs,
            "to_console": console_output,
        }
        self._max_bytes = max_bytes
        self._backups = backup_count
        self._operation: Optional[str] = None
        self._logger = logging.getLogger(f"{NAMESPACE}.{component}")
        self._logger.propagate = False
        self.rebuild()
        _live.add(self)

    @property
    def underlying(self) -> logging.Logger:
        return self._logger

    def rebuild(self) -> None:
        """Reattach handlers from pinned values over the global settings."""
        settings = replace(
            _settings, **{k: v for k, v in self._pinned.items() if v is not None}
        )
        level = logging.getLevelName(settings.level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
        self._logger.setLevel(level)

        for old in self._logger.handlers[:]:
            self._logger.removeHandler(old)
            old.close()
        if settings.to_console:
            self._logger.addHandler(_stderr_handler(level))
        if settings.file is not None:
            self._logger.addHandler(
                _file_handler(
                    settings.file,
                    settings.json_lines,
                    level,
                    self._max_bytes,
                    self._backups,
                )
            )

    @contextmanager
    def operation(self, name: str) -> Iterator[KeywardLogger]:
        """Tag records emitted inside the block with *name*."""
        outer, self._operation = self._operation, name
        try:
            yield self
        finally:
            self._operation = outer

    @contextmanager
    def timed(self, label: str) -> Iterator[Stopwatch]:
        """Log *label* at DEBUG on entry and again with the elapsed time."""
        watch = Stopwatch()
        self.debug("%s started", label)
        try:
            yield watch
        finally:
            self.debug("%s finished in %.3fs", label, watch.elapsed)

    def _log(self, level: int, msg: str, args: tuple, kwargs: dict[str, Any]) -> None:
        passthrough = {k: kwargs.pop(k) for k in list(kwargs) if k in _LOGGING_KWARGS}
        context = {"component": self.component, "operation": self._operation}
        if kwargs:
            context["fields"] = kwargs
        self._logger.log(level, msg, *args, extra=context, **passthrough)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, args, kwargs)

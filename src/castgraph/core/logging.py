# src/castgraph/core/logging.py
"""Logging helpers for CastGraph."""

from __future__ import annotations

import asyncio
import functools
import json
import logging
import sys
import time
from collections.abc import Callable
from typing import Any, cast

from castgraph.config import config

_LOGGING_INITIALIZED = False

_RESERVED_ATTRS = frozenset(
    {
        "args",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Attach extras if present
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            # Avoid non-serializable objects
            try:
                json.dumps(value)
                data[key] = value
            except (TypeError, ValueError):
                data[key] = str(value)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


def _plain_handler(log_level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    return handler


def init_logging(
    level: str | None = None,
    format: str | None = None,
    include_trace: bool | None = None,
) -> None:
    """
    Initialize global logging configuration for CastGraph.

    Settings default to ``config.system``:
      - log_level: DEBUG|INFO|WARNING|ERROR|CRITICAL (default INFO)
      - log_format: plain|rich|json (default: auto rich if available, else plain)
      - log_include_trace: bool (default False)
    """
    global _LOGGING_INITIALIZED
    if _LOGGING_INITIALIZED:
        return

    resolved_level = (level or config.system.log_level or "INFO").upper()
    resolved_format = (format or config.system.log_format or "").lower()
    resolved_include_trace = (
        include_trace if include_trace is not None else config.system.log_include_trace
    )

    log_level = logging.getLevelNamesMapping().get(resolved_level, logging.INFO)

    # Root logger cleanup
    root = logging.getLogger()
    root.setLevel(log_level)
    for h in list(root.handlers):
        root.removeHandler(h)

    if not resolved_format:
        # Auto: prefer rich if available
        try:
            import rich  # noqa: F401

            resolved_format = "rich"
        except ImportError:
            resolved_format = "plain"

    handler: logging.Handler
    if resolved_format == "json":
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(JsonFormatter())
    elif resolved_format == "rich":
        try:
            from rich.logging import RichHandler

            handler = RichHandler(
                level=log_level,
                rich_tracebacks=resolved_include_trace,
                show_time=True,
                show_level=True,
                show_path=False,
                markup=False,
            )
            handler.setFormatter(logging.Formatter("%(message)s"))
        except ImportError:
            handler = _plain_handler(log_level)
    else:
        handler = _plain_handler(log_level)

    root.addHandler(handler)

    # Reduce noisy libraries if needed
    for noisy in ("uvicorn", "asyncio", "httpx", "LiteLLM", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(max(log_level, logging.WARNING))

    from castgraph import __version__

    logging.getLogger("castgraph.start").info(
        "Initializing logging | version=%s level=%s format=%s include_trace=%s",
        __version__,
        resolved_level,
        resolved_format,
        str(resolved_include_trace),
    )

    _LOGGING_INITIALIZED = True


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger with the provided name, or the package logger if None.
    """
    return logging.getLogger(name or "castgraph")


def log_calls(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorate func to log calls at the DEBUG level."""
    logger = get_logger(func.__module__)

    if asyncio.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            logger.debug("Entering %s", func.__qualname__)
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                logger.debug(
                    "Error in %s after %.1fms: %s",
                    func.__qualname__,
                    (time.perf_counter() - start_time) * 1000,
                    e,
                )
                raise
            logger.debug(
                "Exiting %s successfully in %.1fms",
                func.__qualname__,
                (time.perf_counter() - start_time) * 1000,
            )
            return result

        return cast(Callable[..., Any], async_wrapper)

    @functools.wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        start_time = time.perf_counter()
        logger.debug("Entering %s", func.__qualname__)
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.debug(
                "Error in %s after %.1fms: %s",
                func.__qualname__,
                (time.perf_counter() - start_time) * 1000,
                e,
            )
            raise
        logger.debug(
            "Exiting %s successfully in %.1fms",
            func.__qualname__,
            (time.perf_counter() - start_time) * 1000,
        )
        return result

    return cast(Callable[..., Any], sync_wrapper)


__all__ = ["JsonFormatter", "init_logging", "get_logger", "log_calls"]

"""Logging setup with per-request and per-recipe context.

Every log line carries the id of the HTTP request and of the recipe being
indexed, when those are bound. Binding happens through ``LoggingContext``;
the ids live in context variables so concurrent requests and the ingredient
branches of one recipe never see each other's values.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
recipe_id_ctx: ContextVar[int | None] = ContextVar("recipe_id", default=None)

_CONTEXT_VARS: dict[str, ContextVar] = {
    "request_id": request_id_ctx,
    "recipe_id": recipe_id_ctx,
}

# Loggers that drown out the pipeline's own messages
_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")


def current_context() -> dict[str, Any]:
    """Return the bound context ids, leaving out unset ones."""
    return {name: var.get() for name, var in _CONTEXT_VARS.items() if var.get() is not None}


class StructuredJsonFormatter(logging.Formatter):
    """One JSON object per line, for log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **current_context(),
            "location": f"{record.filename}:{record.lineno}",
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ContextualFormatter(logging.Formatter):
    """Readable single-line format for local development."""

    def format(self, record: logging.LogRecord) -> str:
        context = current_context()
        tags = []
        if "request_id" in context:
            tags.append(f"req={context['request_id'][:8]}")
        if "recipe_id" in context:
            tags.append(f"recipe={context['recipe_id']}")
        tag_str = f" [{' '.join(tags)}]" if tags else ""

        timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S")
        line = f"{timestamp} {record.levelname:<8} {record.name}{tag_str} | {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class ContextLogger(logging.LoggerAdapter):
    """Adapter attaching the bound context ids to each record as attributes."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs["extra"] = {**current_context(), **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger for the given module name."""
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(log_level: str = "INFO", json_format: bool = False) -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        log_level: Minimum level for recipeindex loggers (DEBUG, INFO, ...).
            Unknown names fall back to INFO.
        json_format: Emit JSON lines instead of the readable format.
    """
    level = logging.getLevelNamesMapping().get(log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredJsonFormatter() if json_format else ContextualFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    get_logger(__name__).info(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"format={'json' if json_format else 'text'}"
    )


class LoggingContext:
    """Bind context ids for the duration of a ``with`` block.

    Ids left as None are not touched, so a nested context for a recipe keeps
    the request id bound by the enclosing one.
    """

    def __init__(self, request_id: str | None = None, recipe_id: int | None = None):
        self.values = {"request_id": request_id, "recipe_id": recipe_id}
        self._tokens: list[tuple[ContextVar, Any]] = []

    def __enter__(self) -> "LoggingContext":
        for name, value in self.values.items():
            if value is not None:
                var = _CONTEXT_VARS[name]
                self._tokens.append((var, var.set(value)))
        return self

    def __exit__(self, *args: Any) -> None:
        while self._tokens:
            var, token = self._tokens.pop()
            var.reset(token)

"""Structured logging configuration for cookdoc."""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from cookdoc.config import get_settings

# Context variables for recipe tracking
recipe_ctx: ContextVar[str | None] = ContextVar("recipe", default=None)
line_ctx: ContextVar[int | None] = ContextVar("line", default=None)


class StructuredJsonFormatter(logging.Formatter):
    """JSON formatter for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if recipe := recipe_ctx.get():
            log_data["recipe"] = recipe
        if (line := line_ctx.get()) is not None:
            log_data["line"] = line

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data)


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter with context for development."""

    def format(self, record: logging.LogRecord) -> str:
        context_parts = []
        if recipe := recipe_ctx.get():
            context_parts.append(f"recipe={recipe}")
        if (line := line_ctx.get()) is not None:
            context_parts.append(f"line={line}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        message = record.getMessage()

        formatted = f"{timestamp} | {level} | {record.name}{context_str} | {message}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that automatically includes context variables."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        extra = kwargs.get("extra", {})

        if recipe := recipe_ctx.get():
            extra["recipe"] = recipe
        if (line := line_ctx.get()) is not None:
            extra["line"] = line

        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger for the given module name."""
    logger = logging.getLogger(name)
    return ContextLogger(logger, {})


def configure_logging(
    log_level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """
    Configure logging for applications embedding cookdoc.

    Args:
        log_level: Minimum log level. Defaults to the COOKDOC_LOG_LEVEL setting.
        json_format: Use JSON format for logs. If None, taken from settings.
        log_file: Optional file path to write logs to.
    """
    settings = get_settings()

    if json_format is None:
        json_format = settings.json_logs or (
            not sys.stdout.isatty() and settings.environment.lower() == "production"
        )

    level_str = (log_level or settings.log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    if json_format:
        formatter: logging.Formatter = StructuredJsonFormatter()
    else:
        formatter = ContextualFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    for module_name in ("cookdoc", "cookdoc.grammar", "cookdoc.reduce"):
        logging.getLogger(module_name).setLevel(level)

    logger = get_logger(__name__)
    logger.info(
        f"Logging configured: level={level_str}, format={'json' if json_format else 'text'}"
    )


def clear_context() -> None:
    """Clear all logging context variables."""
    recipe_ctx.set(None)
    line_ctx.set(None)


class LoggingContext:
    """Context manager for setting logging context."""

    def __init__(self, recipe: str | None = None, line: int | None = None):
        self.recipe = recipe
        self.line = line
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LoggingContext":
        if self.recipe is not None:
            self._tokens["recipe"] = recipe_ctx.set(self.recipe)
        if self.line is not None:
            self._tokens["line"] = line_ctx.set(self.line)
        return self

    def __exit__(self, *args: Any) -> None:
        ctx_vars = {"recipe": recipe_ctx, "line": line_ctx}
        for name, token in self._tokens.items():
            ctx_vars[name].reset(token)

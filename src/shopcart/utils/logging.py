"""Logging for the shopping cart.

Modules log through `get_logger(__name__)`. Hosts call `configure_logging()`
once at start-up to route structlog through the standard library, with
level, file output and rendering taken from `CartSettings`.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

from shopcart.config import CartSettings, get_settings

_DEFAULT_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

# Environments that emit one JSON document per line
_JSON_ENVIRONMENTS = {"production", "staging"}

_MAX_LOG_BYTES = 10 * 1024 * 1024


def get_log_level(settings: CartSettings | None = None) -> str:
    """Level name from `SHOPCART_LOG_LEVEL`, then `LOG_LEVEL`, then the environment default."""
    settings = settings or get_settings()
    if settings.log_level:
        return settings.log_level.upper()
    default = _DEFAULT_LEVELS.get(settings.environment.lower(), "INFO")
    return os.getenv("LOG_LEVEL", default).upper()


def _rotating_file(path: Path, level: str | int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_LOG_BYTES, backupCount=5, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _build_handlers(settings: CartSettings, level: str) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    handlers = [console]

    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_file(log_dir / "shopcart.log", level))
        handlers.append(_rotating_file(log_dir / "shopcart_error.log", logging.ERROR))
    return handlers


def _build_processors(environment: str) -> list[Any]:
    renderer = (
        structlog.processors.JSONRenderer()
        if environment in _JSON_ENVIRONMENTS
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(settings: CartSettings | None = None) -> None:
    """Install handlers on the root logger and point structlog at them."""
    settings = settings or get_settings()
    level = get_log_level(settings)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = _build_handlers(settings, level)

    # Domain framework chatter stays out of cart logs
    logging.getLogger("protean").setLevel(logging.WARNING)

    structlog.configure(
        processors=_build_processors(settings.environment.lower()),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values (such as a cart id) into every later log entry of this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()

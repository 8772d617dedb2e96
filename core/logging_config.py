"""
Structlog logging configuration.

Both structlog loggers and plain stdlib loggers (grpc, uvicorn) end up in one
processor chain, so every line carries the same timestamp, level and bound
request context. Rendering is chosen by LOG_FORMAT:

    LOG_FORMAT=console  coloured, human readable
    LOG_FORMAT=json     one JSON object per line
    LOG_FORMAT=auto     console when DEBUG, json otherwise (default)
"""
import logging
import json
import structlog
from structlog.processors import TimeStamper, add_log_level, JSONRenderer
from structlog.dev import ConsoleRenderer
from structlog.contextvars import merge_contextvars
from structlog.stdlib import ProcessorFormatter
from typing import Any, List

from core.config import settings


# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("grpc._cython", "uvicorn.access", "asyncio")


def _use_console() -> bool:
    fmt = settings.LOG_FORMAT.lower()
    if fmt == "auto":
        return settings.DEBUG
    return fmt == "console"


def get_renderer() -> Any:
    if _use_console():
        return ConsoleRenderer(colors=True)

    # structlog passes default= and sort_keys= through to the serializer
    def _dumps(obj, default=None, **kwargs):
        return json.dumps(obj, ensure_ascii=False, default=default, **kwargs)
    return JSONRenderer(serializer=_dumps)


def _add_service(_, __, event_dict: dict) -> dict:
    event_dict.setdefault("service", settings.PROJECT_NAME)
    return event_dict


def _level() -> int:
    default = logging.DEBUG if settings.DEBUG else logging.INFO
    if settings.LOG_LEVEL:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        # Unknown names come back as "Level <name>"
        return level if isinstance(level, int) else default
    return default


def configure_logging() -> None:
    """Configure structlog and route stdlib logging through the same chain."""
    shared_pre_chain: List[Any] = [
        merge_contextvars,
        add_log_level,
        TimeStamper(fmt="iso", utc=True),
        _add_service,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            *shared_pre_chain,
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(
        foreign_pre_chain=shared_pre_chain,
        processors=[
            ProcessorFormatter.remove_processors_meta,
            get_renderer(),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    level = _level()
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


configure_logging()

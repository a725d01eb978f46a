# logging.py

import logging
import os
from logging.handlers import RotatingFileHandler

import structlog
from structlog.contextvars import bind_contextvars, merge_contextvars

from Dicebag.config import Settings


def _level(name: str, default: int) -> int:
    return getattr(logging, name.upper(), default)


def setup_logging(settings: Settings | None = None) -> None:
    """Initialize structlog + stdlib logging.

    Both structlog and plain stdlib records are rendered as JSON lines.
    Defaults: INFO overall, console (stderr) at WARNING, no file.
    """
    if settings is None:
        settings = Settings()
    level = _level(settings.logging_level, logging.INFO)

    processor_formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
        foreign_pre_chain=[
            structlog.processors.add_log_level,
            merge_contextvars,
        ],
    )

    root_handlers: list[logging.Handler] = []
    if not settings.logging_enabled:
        root_handlers.append(logging.NullHandler())
    else:
        console_lvl_name = settings.logging_console or "NONE"
        if console_lvl_name.upper() != "NONE":
            ch = logging.StreamHandler()
            ch.setLevel(_level(console_lvl_name, level))
            ch.setFormatter(processor_formatter)
            root_handlers.append(ch)

        file_lvl_name = settings.logging_file or "NONE"
        if file_lvl_name.upper() != "NONE":
            path = settings.logging_file_path
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            fh = RotatingFileHandler(
                path,
                maxBytes=settings.logging_max_bytes,
                backupCount=settings.logging_backup_count,
            )
            fh.setLevel(_level(file_lvl_name, level))
            fh.setFormatter(processor_formatter)
            root_handlers.append(fh)

    # force=True to replace any prior configuration
    logging.basicConfig(level=level, handlers=root_handlers, force=True)

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            # Hand off to ProcessorFormatter on handlers
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    bind_contextvars(env=settings.env)

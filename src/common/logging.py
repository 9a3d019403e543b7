"""Structured logging configuration.

structlogを標準ライブラリのloggingの上に構成する。
ログレベルと出力形式（console / json）は設定から読み込む。
"""

import logging
import sys

from typing import Any

import structlog


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog and the root logger.

    Args:
        level: ログレベル（未指定の場合は settings.LOG_LEVEL）
        log_format: "console" または "json"（未指定の場合は settings.LOG_FORMAT）
    """
    if level is None or log_format is None:
        from src.infrastructure.config.settings import get_settings

        settings = get_settings()
        level = level or settings.LOG_LEVEL
        log_format = log_format or settings.LOG_FORMAT

    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    # Reduce noise from third-party libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)

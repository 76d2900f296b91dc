"""Structured logging setup.

Human-friendly console output in development, JSON lines in production.
"""

import logging
from typing import Optional

import structlog

from .config import Config


def configure_logging(log_level: str = "INFO", json_logs: Optional[bool] = None, app_env: str = "development") -> None:
    """Configure stdlib logging and structlog.

    Args:
        log_level: Level name (DEBUG, INFO, ...); unknown names fall back to INFO
        json_logs: Force JSON (True) or console (False) rendering; None derives it from app_env
        app_env: Application environment, "production" selects JSON rendering
    """
    level = getattr(logging, (log_level or "INFO").upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level)
    logging.getLogger().setLevel(level)

    if json_logs is None:
        json_logs = app_env.lower() == "production"

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_from_config(config: Config) -> None:
    """Configure logging from a Config instance."""
    configure_logging(log_level=config.log_level, app_env=config.app_env)

"""
logging.py - Global logging configuration

Logs go to stderr, tool results go to stdout (the MCP stdio channel).

Usage:
    from localstack_mcp.config.logging import configure_logging, get_logger
    configure_logging(level="INFO")
    logger = get_logger(__name__)
    logger.info("Export finished", services=3, resources=12)
"""

from __future__ import annotations

import logging
import sys

import structlog


def _setup_log_filters(level: int) -> None:
    """Quiet third-party loggers that trace every request."""
    noisy_loggers = [
        ("httpx", logging.WARNING if level > logging.DEBUG else logging.INFO),
        ("httpcore", logging.WARNING),
        ("urllib3", logging.WARNING),
        ("docker", logging.WARNING),
        ("mcp", logging.WARNING if level > logging.DEBUG else logging.INFO),
    ]

    for logger_name, log_lvl in noisy_loggers:
        logging.getLogger(logger_name).setLevel(log_lvl)


_configured = False


def configure_logging(level: str = "INFO", force: bool = False) -> None:
    """Configure global logging to send all logs to stderr.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    # 1. Standard logging (captures third-party library logs)
    root_logger = logging.getLogger()
    root_logger.handlers = []

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(log_level)

    # 2. Structlog; no ANSI colors so stdio clients see clean stderr
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _setup_log_filters(log_level)
    _configured = True


def get_logger(name: str = "localstack_mcp") -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


__all__ = ["configure_logging", "get_logger"]

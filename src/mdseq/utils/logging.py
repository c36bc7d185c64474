"""Structured logging setup for mdseq."""

import os
from pathlib import Path
from typing import Any

import structlog

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging() -> None:
    """
    Configure structlog for JSON logging to ~/.cache/mdseq/logs/mdseq.log.

    Log level can be controlled via MDSEQ_LOG_LEVEL environment variable:
    - Set to "DEBUG" to see converted outline text and every block write
    - Defaults to "INFO" if not set

    Log levels:
    - DEBUG: Converted text, node creation/deletion, atomic writes
    - INFO: Commands, page loads, page replacements
    - WARNING: Truncated traversals (depth limit, cycles)
    - ERROR: Store, materialization and clipboard failures

    Example:
        MDSEQ_LOG_LEVEL=DEBUG mdseq to-outline "My Page"

        # View logs with jq for readability:
        tail -f ~/.cache/mdseq/logs/mdseq.log | jq .
    """
    log_dir = Path.home() / ".cache" / "mdseq" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "mdseq.log"

    log_level = os.environ.get("MDSEQ_LOG_LEVEL", "INFO").upper()
    if log_level not in VALID_LEVELS:
        log_level = "INFO"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=open(log_file, "a")),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Structured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("page_loaded", page="Notes", blocks=12)
    """
    return structlog.get_logger(name)

"""Root logging configuration.

Log records may carry a ``correlation_id`` (the listener passes its
session id through ``extra``); the formatter prefixes its first eight
characters so concurrent sessions can be told apart.
"""

import logging

from loopback_redirect.core.config.schema import LOG_LEVELS, ConfigSchema
from loopback_redirect.core.config.validation import ConfigError, load_env_var

# Libraries whose INFO chatter only belongs in DEBUG output
NOISY_LOGGERS = (
    "httpx",
    "httpcore",
)


class CorrelationFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        # Add correlation ID if available
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            record = logging.makeLogRecord(record.__dict__)
            record.msg = f"[{str(correlation_id)[:8]}] {record.msg}"
        return super().format(record)


def resolve_log_level(level: str | None = None) -> str:
    """Normalize a level name, falling back to LOG_LEVEL and then INFO."""
    if level is None:
        try:
            level = load_env_var(ConfigSchema.LOG_LEVEL)
        except ConfigError:
            level = "INFO"

    # Extract just the first word to handle trailing comments
    parts = str(level).split()
    resolved = parts[0].upper() if parts else "INFO"
    if resolved not in LOG_LEVELS:
        resolved = "INFO"
    return resolved


def set_noisy_logger_levels(current_log_level: str) -> None:
    """Ensure HTTP client noise only surfaces at DEBUG level."""
    noisy_level = logging.DEBUG if current_log_level == "DEBUG" else logging.WARNING
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


def configure_root_logging(level: str | None = None) -> str:
    """Install a single stream handler on the root logger.

    Args:
        level: Level name; defaults to the LOG_LEVEL environment variable

    Returns:
        The level that was applied
    """
    log_level = resolve_log_level(level)

    handler = logging.StreamHandler()
    handler.setFormatter(
        CorrelationFormatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level))

    set_noisy_logger_levels(log_level)

    logging.getLogger(__name__).debug("Logging configured at %s", log_level)
    return log_level

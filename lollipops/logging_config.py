"""
Logging setup shared by the layout engine, the renderers and the providers

Modules obtain their logger through :func:`get_logger`. The level starts
from the LOLLIPOPS_LOG_LEVEL environment variable and can be overridden at
run time with :func:`set_log_level`, which the CLI calls for ``--log-level``.

Environment Variables:
    LOLLIPOPS_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
                         Default: WARNING

Examples:
    >>> from lollipops.logging_config import get_logger, set_log_level
    >>> logger = get_logger(__name__)
    >>> logger.warning("Falling back to estimated text widths")
    >>> set_log_level("DEBUG")
"""

import logging
import os

LOG_LEVEL_ENV = "LOLLIPOPS_LOG_LEVEL"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Set by set_log_level(); takes precedence over the environment
_level_override: int | None = None
_configured: set[str] = set()


def parse_level(name: str) -> int:
    """
    Convert a level name such as "info" to its logging constant

    Raises:
        ValueError: If the name is not one of LEVEL_NAMES
    """
    level_name = name.strip().upper()
    if level_name not in LEVEL_NAMES:
        raise ValueError(
            f"Invalid log level '{name}'. Valid levels: {', '.join(LEVEL_NAMES)}"
        )
    return getattr(logging, level_name)


def _environment_level(logger: logging.Logger) -> int:
    level_name = os.getenv(LOG_LEVEL_ENV, "WARNING")
    try:
        return parse_level(level_name)
    except ValueError:
        logger.warning(
            f"Invalid {LOG_LEVEL_ENV} '{level_name}'. Using WARNING instead. "
            f"Valid levels: {', '.join(LEVEL_NAMES)}"
        )
        return logging.WARNING


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with the lollipops format and level

    Args:
        name: Logger name (typically __name__ from the calling module)

    Returns:
        Configured logger instance

    Examples:
        >>> logger = get_logger(__name__)
        >>> logger.debug("scale=%.3f px/aa", scale)
    """
    logger = logging.getLogger(name)

    # Repeated calls must not stack handlers
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

        if _level_override is not None:
            logger.setLevel(_level_override)
        else:
            logger.setLevel(_environment_level(logger))
        _configured.add(name)

    return logger


def set_log_level(level: str | int) -> int:
    """
    Override the level of every lollipops logger, existing and future

    Args:
        level: Level name ("debug", "INFO", ...) or logging constant

    Returns:
        The numeric level applied

    Raises:
        ValueError: If a level name is not recognised
    """
    global _level_override

    numeric = parse_level(level) if isinstance(level, str) else int(level)
    _level_override = numeric
    for name in _configured:
        logging.getLogger(name).setLevel(numeric)
    return numeric


def reset_log_level() -> None:
    """Drop a :func:`set_log_level` override and return to the environment level"""
    global _level_override
    _level_override = None
    for name in _configured:
        logger = logging.getLogger(name)
        logger.setLevel(_environment_level(logger))

"""
Logging Configuration
=====================
Attaches console (and optionally file) output to the mesher's loggers.

Why is this file needed?
------------------------
Every module logs through `logging.getLogger(__name__)` and never configures
output itself. The example driver (or an embedding application) calls
`setup_logging` once to decide where the refinement reports go.

Handlers installed here are tagged, so a repeated call replaces only its own
handlers and leaves the ones a caller attached (e.g. a GUI log panel) alone.
"""
import logging
import sys
from typing import Optional

DEFAULT_NAMESPACE = "treecutmesh"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Attribute marking the handlers owned by `setup_logging`
_OWNED_FLAG = "_treecutmesh_owned"


def _owned_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in logger.handlers if getattr(handler, _OWNED_FLAG, False)]


def _install(logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _OWNED_FLAG, True)
    logger.addHandler(handler)


def remove_logging(namespace: str = DEFAULT_NAMESPACE) -> None:
    """Detach and close the handlers previously installed by `setup_logging`."""
    logger = logging.getLogger(namespace)
    for handler in _owned_handlers(logger):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    namespace: str = DEFAULT_NAMESPACE,
) -> logging.Logger:
    """
    Configure the logger of a namespace (by default the whole package).

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO).
        log_file: Optional path; the log is also written there, truncating old content.
        namespace: Logger to configure, e.g. "treecutmesh.pre" to only report refinement.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(namespace)
    logger.setLevel(level)
    remove_logging(namespace)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    _install(logger, logging.StreamHandler(sys.stdout), level, formatter)
    if log_file:
        _install(logger, logging.FileHandler(log_file, mode="w", encoding="utf-8"), level, formatter)

    logger.debug(f"Logging initialized for '{namespace}' at level {logging.getLevelName(level)}.")
    return logger

"""Loggers for bmap components.

Every component logs under the ``bmap`` namespace: ``bmap.map`` for
dispatches, batch summaries, sorts and merges, and ``bmap.serialization``
for JSON encoding and decoding. Nothing is emitted until the application
configures logging, either through its own setup or :func:`configure_logging`.

Example:
    >>> import logging
    >>> from bmap.logging import configure_logging
    >>> configure_logging(level=logging.DEBUG)
"""

import logging
from typing import Optional


BMAP_ROOT_LOGGER = "bmap"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_installed_handler: Optional[logging.Handler] = None


def get_logger(name: str = "") -> logging.Logger:
    """Get the logger for a bmap component.

    Args:
        name: Component name such as ``"map"``. Empty for the root logger.
    """
    if name:
        return logging.getLogger(f"{BMAP_ROOT_LOGGER}.{name}")
    return logging.getLogger(BMAP_ROOT_LOGGER)


def configure_logging(
    level: int = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Attach a handler to the ``bmap`` logger and set its level.

    Calling this again replaces the handler installed by the previous call
    instead of stacking a second one. Handlers added by the application
    itself are left alone.

    Args:
        level: Logging level for the ``bmap`` logger and the handler.
        format_string: Format applied to the handler.
        handler: Handler to install. A ``StreamHandler`` if None.

    Returns:
        The ``bmap`` root logger.
    """
    global _installed_handler

    logger = get_logger()
    logger.setLevel(level)

    if _installed_handler is not None:
        logger.removeHandler(_installed_handler)

    if handler is None:
        handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)
    _installed_handler = handler
    return logger


def set_level(level: int, component: str = "") -> None:
    """Set the level of one component, or of every component if empty."""
    get_logger(component).setLevel(level)


def _bmap_loggers():
    yield get_logger()
    prefix = f"{BMAP_ROOT_LOGGER}."
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if name.startswith(prefix) and isinstance(logger, logging.Logger):
            yield logger


def disable_logging() -> None:
    """Silence the root logger and every component logger created so far."""
    for logger in _bmap_loggers():
        logger.disabled = True


def enable_logging() -> None:
    for logger in _bmap_loggers():
        logger.disabled = False

"""Logger factory shared by all maptag modules."""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER_NAME = "maptag"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the ``maptag`` root logger."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str = "INFO", log_dir: str | None = None) -> logging.Logger:
    """Attach console (and optionally file) handlers to the ``maptag`` logger.

    Calling this more than once replaces the handlers it installed before.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for ``maptag.log``. ``None`` disables file logging.

    Returns:
        The configured root ``maptag`` logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        if getattr(handler, "_maptag_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path / "maptag.log", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._maptag_handler = True
        logger.addHandler(handler)

    return logger

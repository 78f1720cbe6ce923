import logging
import sys
from pathlib import Path

from .config import LogConfig

PACKAGE_LOGGER = "fspaths"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(threadName)s - %(name)s - %(message)s"

# Set on every handler setup_logging installs, so a later call replaces
# only its own handlers
_OWNED = "_fspaths_owned"


def setup_logging(config: LogConfig) -> logging.Logger:
    """
    Route the package's records to the handlers named in config.

    Only the "fspaths" logger is touched. Handlers that the host
    application attached to it, or to the root logger, are left alone.
    Calling this again swaps the handlers from the previous call for new
    ones.

    Args:
        config: LogConfig object containing settings.

    Returns:
        The configured package logger.
    """
    level = getattr(logging, config.level.upper(), logging.WARNING)

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(level)

    for handler in [h for h in pkg_logger.handlers if getattr(h, _OWNED, False)]:
        pkg_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = []

    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode="a", encoding="utf-8"))

    if config.console:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        setattr(handler, _OWNED, True)
        pkg_logger.addHandler(handler)

    # Records handled here are not repeated by the host's root handlers
    pkg_logger.propagate = not handlers
    return pkg_logger

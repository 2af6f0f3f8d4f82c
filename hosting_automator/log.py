import logging
import os
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

from hosting_automator.config import HostingConfig
from hosting_automator.ui import console

LOGGER_NAME = "hosting_automator"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3


def setup_logging(config: HostingConfig) -> logging.Logger:
    """
    Configure logging with a Rich console handler and a rotating log file.

    Calling it again replaces the handlers, so the logger never duplicates
    output. If the log file cannot be opened, logging continues on the
    console only.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    rich_handler.setLevel(level)
    logger.addHandler(rich_handler)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    try:
        os.makedirs(os.path.dirname(config.log_file) or ".", exist_ok=True)
        fh = RotatingFileHandler(
            config.log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS
        )
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        logger.addHandler(fh)
        os.chmod(config.log_file, 0o600)
    except OSError as e:
        logger.warning(f"Could not set up log file {config.log_file}: {e}")
        logger.warning("Continuing with console logging only")

    logger.debug(f"Logging initialized: {config.log_file}")
    return logger

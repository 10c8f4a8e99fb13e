import logging
from contextlib import contextmanager
from pathlib import Path

import coloredlogs

LOGGER_NAME = "pdf_decrypt"
AUDIT_LOGGER_NAME = "pdf_decrypt.audit"
LOG_FILE = "decrypt.log"

CONSOLE_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def get_logger(name: str = LOGGER_NAME, level: str = "INFO") -> logging.Logger:
    """
    Get a logger that writes colored output to the console.

    Args:
        name: Name for the logger (typically LOGGER_NAME)
        level: Logging level as string ('DEBUG', 'INFO', 'WARNING', 'ERROR')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    numeric_level = getattr(logging, level.upper())

    # coloredlogs replaces its own handler on repeated calls
    coloredlogs.install(level=numeric_level, logger=logger, fmt=CONSOLE_FORMAT)
    logger.setLevel(numeric_level)

    # Prevent duplicate logs when the root logger is configured
    logger.propagate = False

    return logger


def get_audit_logger() -> logging.Logger:
    """
    Get the logger for per-file records. It has no console handler, so its
    records only reach the log file while file_log() is active.
    """
    audit = logging.getLogger(AUDIT_LOGGER_NAME)
    audit.setLevel(logging.INFO)
    audit.propagate = False
    return audit


@contextmanager
def file_log(path: Path = Path(LOG_FILE), *loggers: logging.Logger):
    """
    Append log records to a file for the duration of the block.

    The handler is attached to the given loggers (the console and audit
    loggers when none are given) and is closed on every exit path.

    Args:
        path: Log file, created if absent and opened in append mode
        loggers: Loggers that should also write to the file

    Yields:
        The attached FileHandler
    """
    targets = loggers or (logging.getLogger(LOGGER_NAME), get_audit_logger())

    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))

    for logger in targets:
        logger.addHandler(handler)
    try:
        yield handler
    finally:
        for logger in targets:
            logger.removeHandler(handler)
        handler.close()


def mask(value: str) -> str:
    """
    Mask a potentially sensitive value for safe logging.

    Args:
        value: String value to mask

    Returns:
        Masked string with same length hint (e.g., "secret" -> "******")
    """
    if not value:
        return ""

    # Replace with asterisks but preserve length as hint
    return "*" * len(value)

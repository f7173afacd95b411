"""
Logging setup for TutorAid.

Every handler installed here masks phone numbers, since student and
parent numbers appear in feedback and data-loading messages. File
output rotates at 10MB and keeps five backups.
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Shorter runs are counts, capacities and times
PHONE_PATTERN = re.compile(r"\d{6,}")


def mask_phone(phone: str) -> str:
    """
    Mask a phone number, keeping the last two digits.

    Examples:
        >>> mask_phone("91234567")
        '******67'
        >>> mask_phone("12")
        '**'
    """
    if len(phone) <= 2:
        return "*" * len(phone)
    return "*" * (len(phone) - 2) + phone[-2:]


class PhoneNumberFilter(logging.Filter):
    """
    Masks digit runs that look like phone numbers.

    The record's arguments are merged into the message first so that
    numbers passed as ``%s`` arguments are masked too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        record.msg = PHONE_PATTERN.sub(lambda match: mask_phone(match.group(0)), message)
        record.args = None
        return True


def _attach(logger: logging.Logger, handler: logging.Handler) -> None:
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    # Handler level, so records from child loggers are masked as well
    handler.addFilter(PhoneNumberFilter())
    logger.addHandler(handler)


def setup_logger(
    name: str = "tutoraid",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the console (and optionally file) output of a logger.

    A logger that already has handlers is returned unchanged.

    Args:
        name: Logger name; the package root by default so every module
            logger propagates to it
        level: Logging level
        log_file: Path of a rotating log file, or None for console only

    Returns:
        The configured logger

    Examples:
        >>> logger = setup_logger(level=logging.DEBUG, log_file="output/logs/tutoraid.log")
        >>> logger.info("TutorAid started")
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(level)
    _attach(logger, logging.StreamHandler())

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        ))

    return logger


def reset_logger(name: str = "tutoraid") -> None:
    """Close and remove every handler on a logger and clear its level."""
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)

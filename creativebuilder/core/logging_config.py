"""
Logging configuration for the creativebuilder package.

This module provides logging configuration for the creativebuilder package:
- Configurable log levels
- Console and rotating file logging
- Redaction of credentials before they reach a log record
"""

import os
import sys
import logging
import logging.handlers
from typing import Dict, Any, Optional

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

SENSITIVE_KEYS = [
    "api_key", "key", "secret", "password", "token", "auth", "authorization",
    "credential", "access_token", "refresh_token"
]


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    log_to_console: bool = True,
    log_to_file: bool = True,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5
) -> None:
    """
    Configure global logging settings.

    Values that are not passed explicitly are read from the ``logging``
    section of the configuration.

    Args:
        level (str, optional): Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file (str, optional): Path to log file
        log_format (str, optional): Log message format
        log_to_console (bool): Whether to log to console
        log_to_file (bool): Whether to log to file
        max_bytes (int): Maximum log file size before rotation
        backup_count (int): Number of backup log files to keep
    """
    from creativebuilder.core.config import get_config_value

    if level is None:
        level = get_config_value("logging.level", "INFO")

    if log_file is None:
        log_file = get_config_value("logging.file", "creativebuilder.log")

    if log_format is None:
        log_format = get_config_value(
            "logging.format",
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(LEVEL_MAP.get(level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(log_format)

    if log_to_console:
        # stderr keeps stdout free for --json output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_to_file and log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name (str): Logger name

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)


def log_execution_context(logger: logging.Logger, context: Dict[str, Any]) -> None:
    """
    Log execution context information.

    Args:
        logger (logging.Logger): Logger instance
        context (Dict[str, Any]): Context information to log
    """
    logger.info("Execution context:")
    for key, value in redact_sensitive_data(context).items():
        logger.info(f"  {key}: {value}")


def redact_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Redact sensitive information from data.

    Nested dictionaries are redacted recursively; the input is not modified.

    Args:
        data (Dict[str, Any]): Data to redact

    Returns:
        Dict[str, Any]: Redacted data
    """
    redacted = data.copy()

    for key, value in redacted.items():
        if any(sensitive_key in key.lower() for sensitive_key in SENSITIVE_KEYS):
            redacted[key] = "********"
        elif isinstance(value, dict):
            redacted[key] = redact_sensitive_data(value)

    return redacted

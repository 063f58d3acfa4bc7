"""
Main logging module for the CLEO setup CLI.

This module provides the primary logging interface and logger setup
with a daily rotating log file.
"""

import logging
import logging.handlers
import sys
from typing import Optional, Dict, Any

from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import CleoFormatter
from .utils import cleanup_old_logs


# Global logger registry
_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the CLEO setup logging system.

    Args:
        config: LogConfig instance, reads the level from the environment if None
        force_reconfigure: Force reconfiguration even if already set up
    """
    global _logging_configured

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = LogConfig.from_environment()

    log_file_path = get_log_file_path(config)

    root_logger = logging.getLogger("cleo_setup")
    root_logger.setLevel(getattr(logging, config.default_level.value))
    root_logger.handlers.clear()

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when='midnight',
        interval=1,
        backupCount=config.log_retention_days,
        encoding='utf-8',
        utc=False
    )
    file_handler.setLevel(getattr(logging, config.default_level.value))
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setFormatter(CleoFormatter(
        include_timestamps=config.include_timestamps,
        include_process_info=config.include_process_info,
        sanitize_sensitive=config.sanitize_sensitive_data,
        sensitive_keys=config.sensitive_keys
    ))
    root_logger.addHandler(file_handler)

    if config.console_level != LogLevel.ERROR or config.default_level == LogLevel.DEBUG:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.console_level.value))
        console_handler.setFormatter(CleoFormatter(
            include_timestamps=False,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys
        ))
        root_logger.addHandler(console_handler)

    # Keep CLI output on stderr/stdout owned by the console helpers
    root_logger.propagate = False

    try:
        cleanup_old_logs(
            log_file_path.parent,
            config.log_retention_days,
            config.log_filename,
        )
    except OSError:
        pass

    _logging_configured = True

    setup_logger = get_logger("cleo_setup.setup_logging")
    setup_logger.info(f"Logging initialized - File: {log_file_path}, "
                      f"Level: {config.default_level.value}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'cleo_setup.commands.setup')

    Returns:
        logging.Logger: Logger instance
    """
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def log_application_event(
    event: str,
    level: str = "info",
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "cleo_setup.app"
) -> None:
    """
    Log application-level events at appropriate levels.

    Args:
        event: Description of the event
        level: Log level (debug, info, warning, error)
        details: Additional event details, sanitized by the formatter
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {"app_event": event}

    if details:
        extra["app_details"] = details

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(f"Application: {event}", extra=extra)

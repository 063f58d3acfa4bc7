"""
CLEO setup logging module.

Key Features:
- Single log file with daily rotation
- Cross-platform log directory detection
- Automatic sanitization of client secrets and setup strings
- Log level override through OPENDUT_CLEO_SETUP_LOG_LEVEL
"""

from .logger import (
    get_logger,
    setup_logging,
    log_application_event,
)
from .config import LogConfig, LogLevel, get_log_directory
from .utils import sanitize_data

__all__ = [
    "get_logger",
    "setup_logging",
    "log_application_event",
    "LogLevel",
    "LogConfig",
    "sanitize_data",
    "get_log_directory",
]

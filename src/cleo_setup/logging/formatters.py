"""
Custom formatter for CLEO setup log entries.
"""

import logging
from .utils import sanitize_data
from cleo_setup.constants import SENSITIVE_KEYS


class CleoFormatter(logging.Formatter):
    """
    Structured formatter with optional components and
    automatic sanitization of sensitive data.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        include_process_info: bool = False,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
    ):
        self.include_timestamps = include_timestamps
        self.include_process_info = include_process_info
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        fmt_parts = []
        if include_timestamps:
            fmt_parts.append("%(asctime)s")
        fmt_parts.extend(["%(levelname)s", "[%(name)s]", "%(message)s"])
        if include_process_info:
            fmt_parts.insert(-1, "[PID:%(process)d]")
        fmt_string = " ".join(fmt_parts)
        super().__init__(fmt=fmt_string, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record with optional sanitization.

        Args:
            record: The log record to format

        Returns:
            str: Formatted log message
        """
        if self.sanitize_sensitive:
            if isinstance(record.msg, (dict, list, str)):
                record.msg = sanitize_data(record.msg, self.sensitive_keys)
            if isinstance(record.args, (tuple, list)):
                record.args = tuple(
                    sanitize_data(arg, self.sensitive_keys) for arg in record.args
                )
            details = getattr(record, "app_details", None)
            if details:
                record.app_details = sanitize_data(details, self.sensitive_keys)

        message = super().format(record)
        details = getattr(record, "app_details", None)
        if details:
            message = f"{message} {details}"
        return message

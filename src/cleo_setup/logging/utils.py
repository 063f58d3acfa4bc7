"""
Utility functions for CLEO setup logging.

Sanitization keeps client secrets and setup strings out of log files.
"""

import re
from typing import Any, Dict, List, Tuple
from pathlib import Path
from datetime import datetime, timedelta


def sanitize_data(data: Any, sensitive_keys: Tuple[str, ...]) -> Any:
    """
    Recursively sanitize sensitive data from dictionaries, lists, and strings.

    Args:
        data: Data to sanitize (dict, list, str, or other)
        sensitive_keys: Tuple of keys/patterns to sanitize

    Returns:
        Any: Sanitized data with sensitive values replaced
    """
    if isinstance(data, dict):
        return sanitize_dict(data, sensitive_keys)
    elif isinstance(data, list):
        return sanitize_list(data, sensitive_keys)
    elif isinstance(data, str):
        return sanitize_string(data)
    else:
        return data


def sanitize_dict(data: Dict[str, Any], sensitive_keys: Tuple[str, ...]) -> Dict[str, Any]:
    """Sanitize sensitive values in a dictionary"""
    sanitized = {}

    for key, value in data.items():
        key_lower = str(key).lower()
        is_sensitive = any(
            sensitive_key.lower() in key_lower
            for sensitive_key in sensitive_keys
        )

        if is_sensitive:
            if isinstance(value, str) and len(value) > 8:
                # Show first 4 and last 4 characters
                sanitized[key] = f"{value[:4]}...{value[-4:]}"
            else:
                sanitized[key] = "***"
        else:
            sanitized[key] = sanitize_data(value, sensitive_keys)

    return sanitized


def sanitize_list(data: List[Any], sensitive_keys: Tuple[str, ...]) -> List[Any]:
    """Sanitize sensitive values in a list"""
    return [sanitize_data(item, sensitive_keys) for item in data]


def sanitize_string(data: str) -> str:
    """
    Sanitize sensitive patterns in free text.

    Masks OIDC client secret assignments as they appear in the
    environment block and in the TOML document.
    """
    patterns = [
        (r'(OIDC_CLIENT_SECRET=)\S+', r'\1***'),
        (r'(secret\s*=\s*)"[^"]*"', r'\1"***"'),
        (r'Bearer\s+[A-Za-z0-9\-._~+/]+=*', 'Bearer ***'),
    ]

    sanitized = data
    for pattern, replacement in patterns:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

    return sanitized


def cleanup_old_logs(
    log_directory: Path,
    retention_days: int = 30,
    log_filename: str = "cleo.log",
) -> int:
    """
    Clean up old log files based on retention policy.

    Args:
        log_directory: Directory containing log files
        retention_days: Number of days to retain logs
        log_filename: Name of the active log file; rotated copies carry a
            date suffix

    Returns:
        int: Number of files cleaned up
    """
    if not log_directory.exists():
        return 0

    cutoff_date = datetime.now() - timedelta(days=retention_days)
    cleaned_count = 0

    # Rotated log files look like cleo.log.2026-01-31
    for log_file in log_directory.glob(f"{log_filename}.*"):
        try:
            if log_file.stat().st_mtime < cutoff_date.timestamp():
                log_file.unlink()
                cleaned_count += 1
        except OSError:
            continue

    return cleaned_count

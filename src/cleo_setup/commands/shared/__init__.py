"""
Shared utilities for CLI commands.
"""

from .cli_options import fill_optional_value, optional_value_command

__all__ = ["fill_optional_value", "optional_value_command"]

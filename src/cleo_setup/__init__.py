"""CLEO setup: configure CLEO from a CARL setup string."""

__version__ = "1.0.0"

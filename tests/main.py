"""Simple test runner to execute the CLEO setup test suite.

Run with:

    python tests/main.py

This invokes pytest programmatically so the suite runs the same way from a
shell or from an IDE that prefers a single entrypoint.
"""
import sys

import pytest


def main(argv=None):
    """Run pytest with the provided argv list. Returns pytest exit code."""
    if argv is None:
        argv = ["-v"]
    return pytest.main(argv)


if __name__ == "__main__":
    sys.exit(main())

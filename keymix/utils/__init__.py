"""Utility modules"""

from keymix.utils.logging import setup_logging

__all__ = [
    "setup_logging",
]

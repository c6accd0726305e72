"""Utility modules for minifmt.

Provides:
- logger: get_logger for logging
- text: Rust debug-style literal escaping
"""

from minifmt.utils.logger import get_logger
from minifmt.utils.text import escape_debug_char, escape_debug_str

__all__ = [
    "escape_debug_char",
    "escape_debug_str",
    "get_logger",
]

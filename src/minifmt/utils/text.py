"""Text processing utilities for minifmt.

Provides the quoting used for string and character literals: the same
escaped form Rust's ``Debug`` formatting produces.

Example:
    >>> from minifmt.utils.text import escape_debug_str
    >>> escape_debug_str('say "hi"\\n')
    '"say \\\\"hi\\\\"\\\\n"'
"""

from __future__ import annotations

_COMMON_ESCAPES = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\\": "\\\\",
    "\0": "\\0",
}


def _escape_char(ch: str, quote: str) -> str:
    if ch in _COMMON_ESCAPES:
        return _COMMON_ESCAPES[ch]
    if ch == quote:
        return "\\" + ch
    if not ch.isprintable() and ch != " ":
        return f"\\u{{{ord(ch):x}}}"
    return ch


def escape_debug_str(value: str) -> str:
    """Quote a string the way Rust's ``{:?}`` does for ``str``.

    Backslash, double quote, tab, carriage return, newline and NUL use their
    short escapes; other non-printable characters become ``\\u{hex}``.
    Single quotes are left alone.

    Examples:
        >>> escape_debug_str("")
        '""'
        >>> escape_debug_str("it's")
        '"it\\'s"'
    """
    return '"' + "".join(_escape_char(ch, '"') for ch in value) + '"'


def escape_debug_char(value: str) -> str:
    """Quote a single character the way Rust's ``{:?}`` does for ``char``.

    Examples:
        >>> escape_debug_char("'")
        "'\\\\''"
        >>> escape_debug_char('"')
        '\\'"\\''
    """
    if len(value) != 1:
        msg = f"expected a single character, got {value!r}"
        raise ValueError(msg)
    return "'" + _escape_char(value, "'") + "'"

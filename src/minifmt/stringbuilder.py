"""Indentation-aware StringBuilder for formatted source output.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation.

Every fragment written through ``append`` is re-indented on the fly: each
line that starts at the beginning of an output line is prefixed with
``depth * indent_width`` spaces. Callers write raw text (including
multi-line fragments) and never compute indentation themselves.

Indentation is only changed through ``indent()`` and ``block()``, both of
which restore the previous depth on every exit path.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

DEFAULT_INDENT_WIDTH = 4


class StringBuilder:
    """Efficient, indentation-tracking string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> _ = sb.append("mod a")
            >>> with sb.block():
            ...     sb.append("use b;\\n")
            >>> sb.build()
            'mod a {\\n    use b;\\n}\\n'

    Thread Safety:
        Instance is local to each render() call.
        No shared mutable state.

    """

    __slots__ = ("_parts", "_depth", "_indent_width", "_at_line_start", "_last_char")

    def __init__(self, indent_width: int = DEFAULT_INDENT_WIDTH) -> None:
        """Initialize empty StringBuilder.

        Args:
            indent_width: Spaces emitted per indentation level
        """
        if indent_width < 0:
            msg = f"indent_width must be non-negative, got {indent_width}"
            raise ValueError(msg)
        self._parts: list[str] = []
        self._depth = 0
        self._indent_width = indent_width
        self._at_line_start = True
        self._last_char = ""

    @property
    def depth(self) -> int:
        """Current indentation depth."""
        return self._depth

    @property
    def at_line_start(self) -> bool:
        """True if the next character written begins a fresh line."""
        return self._at_line_start

    @property
    def ends_with_space(self) -> bool:
        return self._last_char == " "

    def append(self, s: str) -> StringBuilder:
        """Append a fragment, indenting every line that starts a new output line.

        Line breaks pass through as-is so blank lines stay blank.

        Args:
            s: Fragment to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if not s:
            return self

        for i, line in enumerate(s.split("\n")):
            if i:
                self._parts.append("\n")
                self._at_line_start = True
            if not line:
                continue
            if self._at_line_start and self._depth:
                self._parts.append(" " * (self._depth * self._indent_width))
            self._parts.append(line)
            self._at_line_start = False

        self._last_char = s[-1]
        return self

    def ensure_newline(self) -> StringBuilder:
        """End the current line unless already at the start of one."""
        if not self._at_line_start:
            self.append("\n")
        return self

    @contextmanager
    def indent(self) -> Iterator[None]:
        """Increase indentation depth by one for the duration of the block.

        The previous depth is restored even if an exception is raised.

        """
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    @contextmanager
    def block(self, *, trailing_newline: bool = True) -> Iterator[None]:
        """Wrap the body in ``{`` ... ``}`` with one extra level of indentation.

        A separating space is emitted before ``{`` unless the output is at the
        start of a line or already ends with a space, so the brace attaches to
        the preceding token. The closing brace always sits on its own line.

        Args:
            trailing_newline: Emit a newline after ``}`` (standalone
                declarations). Pass False when the block is embedded in a
                larger expression.

        """
        if not self._at_line_start and not self.ends_with_space:
            self.append(" ")
        self.append("{\n")
        with self.indent():
            yield
        self.ensure_newline()
        self.append("}\n" if trailing_newline else "}")

    def build(self) -> str:
        """Join all parts into final string.

        Returns:
            Concatenated string of all appended parts
        """
        return "".join(self._parts)


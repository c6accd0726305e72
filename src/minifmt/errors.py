"""Exception classes for minifmt.

Provides standardized exceptions for error handling throughout minifmt.

Callers only need to catch ``FormatError``: it is raised whenever a
formatting call could not complete. The two subclasses tell apart where
the failure happened (decoding the tree vs. rendering it) for debugging.
"""

from __future__ import annotations


class MinifmtError(Exception):
    """Base exception for all minifmt errors.

    Subclass this for specific error categories.
    """

    pass


class FormatError(MinifmtError):
    """Formatting could not complete.

    Raised when the input tree could not be decoded or uses a construct
    the renderer does not cover. No partial output is ever produced.
    """

    pass


class ParseError(FormatError):
    """Error while decoding a serialized syntax tree.

    Raised when the input does not describe a well-formed tree.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize parse error with an optional location in the input.

        Args:
            message: Error description
            path: Dotted location of the offending value (e.g. "items.0.ident")
        """
        self.message = message
        self.path = path
        location = f"at {path}: " if path else ""
        super().__init__(f"{location}{message}")


class UnsupportedSyntaxError(FormatError):
    """The renderer reached a construct it has no rendering rule for.

    Raised for unknown node kinds and for node kinds whose combination of
    optional fields is not supported (e.g. a labelled loop).
    """

    def __init__(
        self,
        node_kind: str,
        detail: str | None = None,
        trail: tuple[str, ...] = (),
    ) -> None:
        """Initialize unsupported-syntax error.

        Args:
            node_kind: Class name of the offending node
            detail: Which field combination is unsupported (optional)
            trail: Node kinds enclosing the offending node, outermost first
        """
        self.node_kind = node_kind
        self.detail = detail
        self.trail = trail

        message = f"unsupported syntax: {node_kind}"
        if detail:
            message += f" ({detail})"
        if trail:
            message += f" in {' > '.join(trail)}"
        super().__init__(message)

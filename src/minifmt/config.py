"""ContextVar-based format configuration for minifmt.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Renderers read the active config when they are created unless one is
passed explicitly.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config
    text = fmt_file(tree, config=FormatConfig(indent_width=2))

    # Or use the context manager
    with format_config_context(FormatConfig(indent_width=2)):
        text = fmt_file(tree)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Immutable format configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        indent_width: Spaces per indentation level
        doc_comments: Render ``doc = "..."`` attributes as ``///`` / ``//!``
            comments. When False they render as ordinary attributes.

    """

    indent_width: int = 4
    doc_comments: bool = True

    def __post_init__(self) -> None:
        if self.indent_width < 0:
            msg = f"indent_width must be non-negative, got {self.indent_width}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "FormatConfig":
        """Create FormatConfig from dictionary.

        Only includes keys that are valid FormatConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> FormatConfig.from_dict({"indent_width": 2, "unknown_key": 1}).indent_width
            2

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: FormatConfig = FormatConfig()

_format_config: ContextVar[FormatConfig] = ContextVar(
    "format_config",
    default=_DEFAULT_CONFIG,
)


def get_format_config() -> FormatConfig:
    """Get current format configuration (thread-local)."""
    return _format_config.get()


def set_format_config(config: FormatConfig) -> None:
    """Set format configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.

    """
    _format_config.set(config)


def reset_format_config() -> None:
    """Reset to the default configuration."""
    _format_config.set(_DEFAULT_CONFIG)


@contextmanager
def format_config_context(config: FormatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with format_config_context(FormatConfig(indent_width=2)):
        ...     get_format_config().indent_width
        2

    """
    previous = _format_config.get()
    _format_config.set(config)
    try:
        yield
    finally:
        _format_config.set(previous)


__all__ = [
    "FormatConfig",
    "get_format_config",
    "set_format_config",
    "reset_format_config",
    "format_config_context",
]

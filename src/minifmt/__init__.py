"""
minifmt: Minimal Rust Source Formatter

Renders an already-parsed Rust syntax tree back to canonically formatted
source: consistent indentation, spacing, line breaks and separator
placement. Parsing is left to an external parser; trees arrive either as
typed nodes (``minifmt.nodes``) or as JSON (``minifmt.serialization``).

Quick Start:
    >>> from minifmt import fmt_file
    >>> from minifmt.nodes import File, ItemStruct, FieldsNamed, VisPublic
    >>> print(fmt_file(File(items=(ItemStruct("MyStruct", FieldsNamed(), vis=VisPublic()),))))
    pub struct MyStruct {
    }
    <BLANKLINE>

    >>> # From a serialized tree
    >>> from minifmt import fmt_json
    >>> text = fmt_json(json_from_parser)

Configuration:
    >>> from minifmt import FormatConfig, format_config_context
    >>> with format_config_context(FormatConfig(indent_width=2)):
    ...     text = fmt_file(tree)

Installation:
    pip install minifmt              # zero runtime dependencies
"""

from minifmt.config import (
    FormatConfig,
    format_config_context,
    get_format_config,
    reset_format_config,
    set_format_config,
)
from minifmt.errors import FormatError, MinifmtError, ParseError, UnsupportedSyntaxError
from minifmt.nodes import File, Item, Node
from minifmt.punct import Pair, Punctuated, Spacing
from minifmt.renderers.rust import RustRenderer
from minifmt.serialization import from_dict, from_json, to_dict, to_json
from minifmt.stringbuilder import StringBuilder

__version__ = "0.1.0"


def fmt_file(file: File, *, config: FormatConfig | None = None) -> str:
    """Format a whole compilation unit.

    Args:
        file: Parsed file to format
        config: Format configuration (uses the context's active config if None)

    Returns:
        Formatted source. Non-empty output always ends with a newline.

    Raises:
        FormatError: The tree contains a construct that cannot be rendered.

    Example:
        >>> fmt_file(File())
        ''
    """
    return RustRenderer(config).render(file)


def fmt_item(item: Item, *, config: FormatConfig | None = None) -> str:
    """Format a single top-level declaration.

    Same rules as fmt_file, for one item.

    Example:
        >>> from minifmt.nodes import ItemMod
        >>> fmt_item(ItemMod("my_module"))
        'mod my_module;\\n'
    """
    return RustRenderer(config).render(item)


def fmt_json(data: str, *, config: FormatConfig | None = None) -> str:
    """Decode a JSON-serialized File and format it.

    Raises:
        ParseError: The input does not describe a well-formed File.
        UnsupportedSyntaxError: The tree cannot be rendered.
    """
    return fmt_file(from_json(data), config=config)


__all__ = [
    # Entry points
    "fmt_file",
    "fmt_item",
    "fmt_json",
    # Rendering
    "RustRenderer",
    "StringBuilder",
    "Punctuated",
    "Pair",
    "Spacing",
    # Nodes
    "File",
    "Item",
    "Node",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration
    "FormatConfig",
    "get_format_config",
    "set_format_config",
    "reset_format_config",
    "format_config_context",
    # Errors
    "MinifmtError",
    "FormatError",
    "ParseError",
    "UnsupportedSyntaxError",
    # Version
    "__version__",
]

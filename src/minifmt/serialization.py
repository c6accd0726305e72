"""Tree serialization: JSON round-trip for minifmt syntax-tree nodes.

Converts typed nodes to/from JSON-compatible dicts. This is how trees
produced by an external Rust parser reach the formatter (see ``fmt_json``),
and it is handy for fixtures and debugging.

Encoding:
- Nodes: ``{"_type": "ItemStruct", "ident": ..., ...}``
- Sequences: ``{"_type": "Punctuated", "pairs": [[value, punct], ...]}``
  where ``punct`` is null for a pair without separator
- Enums: ``{"_type": "BinOp", "name": "ADD"}``
- Byte strings: ``{"_type": "bytes", "hex": "..."}``
- Tuples: lists

All output is deterministic (sorted keys).

Example:
    from minifmt.serialization import to_json, from_json

    json_str = to_json(tree)
    assert from_json(json_str) == tree

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from enum import Enum
from types import UnionType
from typing import Any, TypeAliasType, Union, get_args, get_origin, get_type_hints

from minifmt import nodes
from minifmt.errors import ParseError
from minifmt.nodes import File, Node
from minifmt.punct import Pair, Punctuated

_NODE_CLASSES: tuple[type[Node], ...] = (
    nodes.Lifetime,
    nodes.VisInherited,
    nodes.VisPublic,
    nodes.VisCrate,
    nodes.VisRestricted,
    nodes.AngleBracketedGenericArguments,
    nodes.ParenthesizedGenericArguments,
    nodes.Binding,
    nodes.PathSegment,
    nodes.Path,
    nodes.QSelf,
    nodes.LitInt,
    nodes.LitStr,
    nodes.LitBool,
    nodes.LitChar,
    nodes.LitFloat,
    nodes.LitByte,
    nodes.LitByteStr,
    nodes.LitVerbatim,
    nodes.MetaWord,
    nodes.MetaList,
    nodes.MetaNameValue,
    nodes.Attribute,
    nodes.TypePath,
    nodes.TypeReference,
    nodes.TypeArray,
    nodes.TypeSlice,
    nodes.TypeTuple,
    nodes.TypeNever,
    nodes.TypePtr,
    nodes.TypeInfer,
    nodes.TypeBareFn,
    nodes.TypeTraitObject,
    nodes.TypeImplTrait,
    nodes.TraitBound,
    nodes.TypeParam,
    nodes.LifetimeDef,
    nodes.ConstParam,
    nodes.PredicateType,
    nodes.PredicateLifetime,
    nodes.PredicateEq,
    nodes.WhereClause,
    nodes.Generics,
    nodes.PatIdent,
    nodes.PatWild,
    nodes.PatTuple,
    nodes.PatTupleStruct,
    nodes.PatPath,
    nodes.PatRef,
    nodes.PatLit,
    nodes.PatStruct,
    nodes.PatRange,
    nodes.PatSlice,
    nodes.ExprCall,
    nodes.ExprMethodCall,
    nodes.ExprBinary,
    nodes.ExprUnary,
    nodes.ExprField,
    nodes.ExprIf,
    nodes.Arm,
    nodes.ExprMatch,
    nodes.FieldValue,
    nodes.ExprStruct,
    nodes.ExprBlock,
    nodes.ExprReference,
    nodes.ExprForLoop,
    nodes.ExprPath,
    nodes.ExprLit,
    nodes.Macro,
    nodes.ExprMacro,
    nodes.ExprTuple,
    nodes.ExprArray,
    nodes.ExprClosure,
    nodes.ExprParen,
    nodes.ExprReturn,
    nodes.ExprIndex,
    nodes.ExprRange,
    nodes.ExprLoop,
    nodes.ExprWhile,
    nodes.ExprCast,
    nodes.Local,
    nodes.StmtItem,
    nodes.StmtExpr,
    nodes.StmtSemi,
    nodes.Block,
    nodes.ArgSelf,
    nodes.ArgSelfRef,
    nodes.ArgCaptured,
    nodes.FnDecl,
    nodes.MethodSig,
    nodes.Field,
    nodes.FieldsNamed,
    nodes.FieldsUnnamed,
    nodes.ItemStruct,
    nodes.ImplItemMethod,
    nodes.ImplItemConst,
    nodes.ImplItemType,
    nodes.ImplItemMacro,
    nodes.TraitRef,
    nodes.ItemImpl,
    nodes.ItemMod,
    nodes.UsePath,
    nodes.UseName,
    nodes.UseRename,
    nodes.UseGlob,
    nodes.UseGroup,
    nodes.ItemUse,
    nodes.ItemFn,
    nodes.ItemEnum,
    nodes.ItemConst,
    nodes.ItemStatic,
    nodes.ItemTrait,
    nodes.ItemType,
    nodes.ItemMacro,
    nodes.ItemExternCrate,
    nodes.File,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {cls.__name__: cls for cls in _NODE_CLASSES}

_ENUM_TYPES: dict[str, type[Enum]] = {
    cls.__name__: cls
    for cls in (
        nodes.AttrStyle,
        nodes.BinOp,
        nodes.UnOp,
        nodes.IntSuffix,
        nodes.MacroDelimiter,
        nodes.TraitBoundModifier,
    )
}

# Resolved field annotations, filled lazily per node class
_FIELD_HINTS: dict[type[Node], dict[str, Any]] = {}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        node: Any minifmt node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, Punctuated):
        return {
            "_type": "Punctuated",
            "pairs": [[_serialize_value(pair.value), pair.punct] for pair in value.pairs],
        }
    if isinstance(value, Enum):
        return {"_type": type(value).__name__, "name": value.name}
    if isinstance(value, bytes):
        return {"_type": "bytes", "hex": value.hex()}
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, float, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        ParseError: If ``_type`` is missing or unknown, or the fields do not
            fit the node class.

    """
    value = _deserialize_value(data, "$")
    if not isinstance(value, Node):
        raise ParseError("expected a syntax-tree node", "$")
    return value


def _deserialize_node(data: dict[str, Any], path: str) -> Node:
    type_name = data["_type"]
    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        raise ParseError(f"unknown node type: {type_name!r}", path)

    known = {f.name for f in fields(node_cls)}
    unknown = sorted(set(data) - known - {"_type"})
    if unknown:
        raise ParseError(f"unknown field(s) for {type_name}: {', '.join(unknown)}", path)

    kwargs = {
        name: _deserialize_value(raw, f"{path}.{name}")
        for name, raw in data.items()
        if name != "_type"
    }

    hints = _field_hints(node_cls)
    for f in fields(node_cls):
        if f.name in kwargs and not _fits(kwargs[f.name], hints[f.name]):
            raise ParseError(
                f"{type_name}.{f.name} expects {f.type}, got {_describe(kwargs[f.name])}",
                f"{path}.{f.name}",
            )

    try:
        return node_cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise ParseError(f"invalid {type_name}: {e}", path) from e


def _field_hints(node_cls: type[Node]) -> dict[str, Any]:
    hints = _FIELD_HINTS.get(node_cls)
    if hints is None:
        hints = _FIELD_HINTS[node_cls] = get_type_hints(node_cls)
    return hints


def _fits(value: Any, hint: Any) -> bool:
    """Check a decoded value against a node field annotation."""
    if isinstance(hint, TypeAliasType):
        return _fits(value, hint.__value__)
    if hint is type(None):
        return value is None

    origin = get_origin(hint)
    if origin is Union or origin is UnionType:
        return any(_fits(value, arg) for arg in get_args(hint))
    if origin is tuple:
        item_hint = get_args(hint)[0]
        return isinstance(value, tuple) and all(_fits(item, item_hint) for item in value)
    if origin is Punctuated:
        (item_hint,) = get_args(hint)
        return isinstance(value, Punctuated) and all(_fits(item, item_hint) for item in value)

    # bool is an int subclass but never a valid int or float field
    if hint is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if hint is float:
        return isinstance(value, int | float) and not isinstance(value, bool)
    return isinstance(value, hint)


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, tuple):
        return "list"
    return type(value).__name__


def _deserialize_punctuated(data: dict[str, Any], path: str) -> Punctuated:
    raw_pairs = data.get("pairs")
    if not isinstance(raw_pairs, list):
        raise ParseError("Punctuated requires a 'pairs' list", path)

    pairs = []
    for i, raw in enumerate(raw_pairs):
        pair_path = f"{path}.pairs.{i}"
        if not isinstance(raw, list) or len(raw) != 2:
            raise ParseError("pair must be a [value, punct] list", pair_path)
        value, punct = raw
        if punct is not None and not isinstance(punct, str):
            raise ParseError("separator must be a string or null", pair_path)
        pairs.append(Pair(_deserialize_value(value, pair_path), punct))

    try:
        return Punctuated(tuple(pairs))
    except ValueError as e:
        raise ParseError(str(e), path) from e


def _deserialize_enum(enum_cls: type[Enum], data: dict[str, Any], path: str) -> Enum:
    name = data.get("name")
    try:
        return enum_cls[name]
    except (KeyError, TypeError):
        raise ParseError(f"unknown {enum_cls.__name__} member: {name!r}", path) from None


def _deserialize_value(value: Any, path: str) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name is None:
            raise ParseError("missing '_type' field", path)
        if not isinstance(type_name, str):
            raise ParseError(f"'_type' must be a string, got {type_name!r}", path)
        if type_name == "Punctuated":
            return _deserialize_punctuated(value, path)
        if type_name == "bytes":
            try:
                return bytes.fromhex(value["hex"])
            except (KeyError, TypeError, ValueError) as e:
                raise ParseError("bytes require a 'hex' string", path) from e
        if type_name in _ENUM_TYPES:
            return _deserialize_enum(_ENUM_TYPES[type_name], value, path)
        return _deserialize_node(value, path)
    if isinstance(value, list):
        return tuple(_deserialize_value(item, f"{path}.{i}") for i, item in enumerate(value))
    return value


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize a tree to a JSON string.

    Output is deterministic (sorted keys).

    Args:
        node: Root node to serialize, usually a File.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(node), sort_keys=True, indent=indent)


def from_json(data: str) -> File:
    """Deserialize a File from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Raises:
        ParseError: If the input is not valid JSON or doesn't represent a File.

    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e

    if not isinstance(raw, dict):
        raise ParseError("expected a JSON object", "$")

    node = from_dict(raw)
    if not isinstance(node, File):
        raise ParseError(f"expected File, got {type(node).__name__}", "$")
    return node

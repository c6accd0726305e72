"""Rust source renderer using the indentation-aware StringBuilder.

Renders a typed syntax tree back to canonically formatted Rust source.

Dispatch:
One method per syntactic category (items, statements, expressions,
patterns, types, literals, attributes, ...). Each is a match statement over
the closed node set whose default arm raises UnsupportedSyntaxError, as do
the structural preconditions some node kinds carry (e.g. a labelled loop).
A failed render never returns partial output.

Layout rules:
- Indentation is owned by the StringBuilder and changes only through
  ``block()`` / ``indent()``, so an aborted render cannot leave it unbalanced.
- Separators of every sequence are emitted exactly as they appear in the
  tree, spaced according to a per-call-site Spacing policy.
- Inside a block, a statement that directly follows a nested item is
  preceded by one blank line.

Thread Safety:
All per-render state lives in a StringBuilder and RenderContext created
fresh for each render() call. A RustRenderer instance holds only its
(immutable) config and can be shared across threads.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from minifmt import attributes
from minifmt.config import FormatConfig, get_format_config
from minifmt.errors import FormatError, UnsupportedSyntaxError
from minifmt.nodes import (
    AngleBracketedGenericArguments,
    ArgCaptured,
    ArgSelf,
    ArgSelfRef,
    Arm,
    Attribute,
    AttrStyle,
    BinOp,
    Block,
    ExprBinary,
    ExprBlock,
    ExprCall,
    ExprField,
    ExprForLoop,
    ExprIf,
    ExprLit,
    ExprMacro,
    ExprMatch,
    ExprMethodCall,
    ExprPath,
    ExprReference,
    ExprStruct,
    ExprUnary,
    Field,
    FieldsNamed,
    FieldValue,
    File,
    Generics,
    ImplItemMethod,
    IntSuffix,
    ItemFn,
    ItemImpl,
    ItemMod,
    ItemStruct,
    ItemUse,
    Lifetime,
    LitBool,
    LitChar,
    LitInt,
    LitStr,
    Local,
    Macro,
    MacroDelimiter,
    MetaList,
    MetaNameValue,
    MetaWord,
    MethodSig,
    Node,
    PatIdent,
    PatPath,
    PatTuple,
    PatTupleStruct,
    PatWild,
    Path,
    PathSegment,
    PredicateType,
    StmtExpr,
    StmtItem,
    StmtSemi,
    TraitBound,
    TraitBoundModifier,
    TypeArray,
    TypeParam,
    TypePath,
    TypeReference,
    TypeSlice,
    TypeTuple,
    UnOp,
    UseGlob,
    UseGroup,
    UseName,
    UsePath,
    UseRename,
    VisInherited,
    VisPublic,
)
from minifmt.punct import SPACING_TABLE, Punctuated, Spacing
from minifmt.stringbuilder import StringBuilder
from minifmt.utils.logger import get_logger
from minifmt.utils.text import escape_debug_char, escape_debug_str

logger = get_logger(__name__)

_BIN_OPS: dict[BinOp, str] = {
    BinOp.ADD: "+",
    BinOp.SUB: "-",
    BinOp.MUL: "*",
    BinOp.DIV: "/",
    BinOp.REM: "%",
    BinOp.AND: "&&",
    BinOp.OR: "||",
    BinOp.BIT_XOR: "^",
    BinOp.BIT_AND: "&",
    BinOp.BIT_OR: "|",
    BinOp.SHL: "<<",
    BinOp.SHR: ">>",
    BinOp.EQ: "==",
    BinOp.LT: "<",
    BinOp.LE: "<=",
    BinOp.NE: "!=",
    BinOp.GE: ">=",
    BinOp.GT: ">",
    BinOp.ADD_EQ: "+=",
    BinOp.SUB_EQ: "-=",
    BinOp.MUL_EQ: "*=",
    BinOp.DIV_EQ: "/=",
    BinOp.REM_EQ: "%=",
    BinOp.BIT_XOR_EQ: "^=",
    BinOp.BIT_AND_EQ: "&=",
    BinOp.BIT_OR_EQ: "|=",
    BinOp.SHL_EQ: "<<=",
    BinOp.SHR_EQ: ">>=",
}

_UN_OPS: dict[UnOp, str] = {
    UnOp.DEREF: "*",
    UnOp.NOT: "!",
    UnOp.NEG: "-",
}

_INT_SUFFIXES: dict[IntSuffix, str] = {
    IntSuffix.NONE: "",
    IntSuffix.I8: "i8",
    IntSuffix.I16: "i16",
    IntSuffix.I32: "i32",
    IntSuffix.I64: "i64",
    IntSuffix.I128: "i128",
    IntSuffix.ISIZE: "isize",
    IntSuffix.U8: "u8",
    IntSuffix.U16: "u16",
    IntSuffix.U32: "u32",
    IntSuffix.U64: "u64",
    IntSuffix.U128: "u128",
    IntSuffix.USIZE: "usize",
}

type RenderFn[T] = Callable[[T, StringBuilder, RenderContext], None]


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render() call. ``trail`` holds the kinds of the
    items and expressions currently being rendered, outermost first, and is
    attached to UnsupportedSyntaxError as a location hint.

    """

    trail: list[str] = field(default_factory=list)

    @contextmanager
    def enter(self, node: Node) -> Iterator[None]:
        self.trail.append(type(node).__name__)
        try:
            yield
        finally:
            self.trail.pop()

    def unsupported(self, node: object, detail: str | None = None) -> UnsupportedSyntaxError:
        return UnsupportedSyntaxError(type(node).__name__, detail, tuple(self.trail))

    def require(self, condition: bool, node: Node, detail: str) -> None:
        """Raise UnsupportedSyntaxError for ``node`` unless ``condition`` holds."""
        if not condition:
            raise self.unsupported(node, detail)


class RustRenderer:
    """Render a syntax tree to Rust source text.

    Usage:
        >>> from minifmt.nodes import File, ItemStruct
        >>> RustRenderer().render(File(items=(ItemStruct("Unit"),)))
        'struct Unit;\\n'

    Thread Safety:
        Multiple threads can safely share a single RustRenderer instance.
        Each render() call creates an independent StringBuilder and
        RenderContext.
    """

    __slots__ = ("_config",)

    def __init__(self, config: FormatConfig | None = None) -> None:
        """Initialize renderer.

        Args:
            config: Format configuration (uses the context's active config if None)
        """
        self._config = config if config is not None else get_format_config()

    @property
    def config(self) -> FormatConfig:
        return self._config

    def render(self, node: Node) -> str:
        """Render a File, or a single item, to source text.

        Non-empty output always ends with a newline.

        Raises:
            UnsupportedSyntaxError: The tree contains a construct without a
                rendering rule. No partial output is returned.
        """
        logger.debug("Rendering %s", type(node).__name__)
        ctx = RenderContext()
        sb = StringBuilder(self._config.indent_width)

        try:
            if isinstance(node, File):
                self._render_file(node, sb, ctx)
            else:
                self._render_item(node, sb, ctx)
        except FormatError as exc:
            logger.debug("Rendering aborted: %s", exc)
            raise

        sb.ensure_newline()
        return sb.build()

    # =========================================================================
    # Sequences
    # =========================================================================

    def _render_punctuated[T](
        self,
        seq: Punctuated[T],
        sb: StringBuilder,
        ctx: RenderContext,
        spacing: Spacing,
        render_value: RenderFn[T],
    ) -> None:
        """Render each value, followed by its separator when it has one."""
        before, after = SPACING_TABLE[spacing]
        for pair in seq.pairs:
            render_value(pair.value, sb, ctx)
            if pair.punct is not None:
                sb.append(f"{before}{pair.punct}{after}")

    # =========================================================================
    # Attributes
    # =========================================================================

    def _render_attributes(
        self,
        attrs: tuple[Attribute, ...],
        sb: StringBuilder,
        ctx: RenderContext,
        style: AttrStyle | None = None,
    ) -> None:
        """Render attributes, optionally only those of one style."""
        match style:
            case AttrStyle.INNER:
                selected = attributes.inner_attributes(attrs)
            case AttrStyle.OUTER:
                selected = attributes.outer_attributes(attrs)
            case _:
                selected = list(attrs)

        for attr in selected:
            self._render_attribute(attr, sb, ctx)

    def _render_attribute(self, attr: Attribute, sb: StringBuilder, ctx: RenderContext) -> None:
        inner = attributes.is_inner(attr)

        if self._config.doc_comments and attributes.is_doc(attr):
            text = attributes.doc_text(attr)
            if text is None:
                raise ctx.unsupported(attr.meta, "doc attribute must be a string")
            prefix = "//!" if inner else "///"
            for line in text.split("\n"):
                sb.append(f"{prefix}{line}\n")
            return

        sb.append("#![" if inner else "#[")
        self._render_meta(attr.meta, sb, ctx)
        sb.append("]\n")

    def _render_meta(self, meta: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match meta:
            case MetaWord():
                sb.append(meta.ident)
            case MetaList():
                sb.append(f"{meta.ident}(")
                self._render_punctuated(
                    meta.nested, sb, ctx, Spacing.SPACE_AFTER, self._render_nested_meta
                )
                sb.append(")")
            case MetaNameValue():
                sb.append(f"{meta.ident} = ")
                self._render_lit(meta.lit, sb, ctx)
            case _:
                raise ctx.unsupported(meta)

    def _render_nested_meta(self, nested: object, sb: StringBuilder, ctx: RenderContext) -> None:
        if isinstance(nested, MetaWord | MetaList | MetaNameValue):
            self._render_meta(nested, sb, ctx)
        else:
            self._render_lit(nested, sb, ctx)

    def _render_visibility(self, vis: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match vis:
            case VisInherited():
                pass
            case VisPublic():
                sb.append("pub ")
            case _:
                raise ctx.unsupported(vis)

    # =========================================================================
    # Files and items
    # =========================================================================

    def _render_file(self, file: File, sb: StringBuilder, ctx: RenderContext) -> None:
        with ctx.enter(file):
            ctx.require(file.shebang is None, file, "shebang line")
            self._render_attributes(file.attrs, sb, ctx)
            for item in file.items:
                self._render_item(item, sb, ctx)

    def _render_item(self, item: object, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render an item. Every item ends at the start of a fresh line."""
        match item:
            case ItemStruct():
                with ctx.enter(item):
                    self._render_struct(item, sb, ctx)
            case ItemImpl():
                with ctx.enter(item):
                    self._render_impl(item, sb, ctx)
            case ItemMod():
                with ctx.enter(item):
                    self._render_mod(item, sb, ctx)
            case ItemUse():
                self._render_use(item, sb, ctx)
            case ItemFn():
                with ctx.enter(item):
                    self._render_attributes(item.attrs, sb, ctx)
                    self._render_visibility(item.vis, sb, ctx)
                    self._render_signature(item.sig, sb, ctx)
                    self._render_block(item.block, sb, ctx)
                    sb.append("\n")
            case _:
                raise ctx.unsupported(item)

    def _render_struct(self, item: ItemStruct, sb: StringBuilder, ctx: RenderContext) -> None:
        self._render_attributes(item.attrs, sb, ctx)
        self._render_visibility(item.vis, sb, ctx)
        sb.append(f"struct {item.ident}")
        self._render_generics(item.generics, sb, ctx)

        match item.fields:
            case None:
                self._render_where_clause(item.generics, sb, ctx)
                sb.append(";\n")
            case FieldsNamed(named=named):
                self._render_where_clause(item.generics, sb, ctx)
                with sb.block():
                    self._render_punctuated(named, sb, ctx, Spacing.NEWLINE, self._render_field)
            case other:
                raise ctx.unsupported(other)

    def _render_field(self, f: Field, sb: StringBuilder, ctx: RenderContext) -> None:
        self._render_attributes(f.attrs, sb, ctx)
        self._render_visibility(f.vis, sb, ctx)
        ctx.require(f.ident is not None, f, "unnamed field")
        sb.append(f"{f.ident}: ")
        self._render_type(f.ty, sb, ctx)

    def _render_impl(self, item: ItemImpl, sb: StringBuilder, ctx: RenderContext) -> None:
        self._render_attributes(item.attrs, sb, ctx, AttrStyle.OUTER)
        ctx.require(not item.defaultness, item, "default impl")

        if item.unsafe:
            sb.append("unsafe ")
        sb.append("impl")
        self._render_generics(item.generics, sb, ctx)
        sb.append(" ")

        if item.trait_ is not None:
            if item.trait_.negative:
                sb.append("!")
            self._render_path(item.trait_.path, sb, ctx)
            sb.append(" for ")

        self._render_type(item.self_ty, sb, ctx)
        self._render_where_clause(item.generics, sb, ctx)

        with sb.block():
            self._render_attributes(item.attrs, sb, ctx, AttrStyle.INNER)
            for i, impl_item in enumerate(item.items):
                self._render_impl_item(impl_item, sb, ctx)
                if i + 1 < len(item.items):
                    sb.append("\n")
                sb.append("\n")

    def _render_impl_item(self, item: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match item:
            case ImplItemMethod():
                with ctx.enter(item):
                    ctx.require(not item.defaultness, item, "default fn")
                    self._render_attributes(item.attrs, sb, ctx)
                    self._render_visibility(item.vis, sb, ctx)
                    self._render_signature(item.sig, sb, ctx)
                    self._render_block(item.block, sb, ctx)
            case _:
                raise ctx.unsupported(item)

    def _render_mod(self, item: ItemMod, sb: StringBuilder, ctx: RenderContext) -> None:
        self._render_attributes(item.attrs, sb, ctx, AttrStyle.OUTER)
        self._render_visibility(item.vis, sb, ctx)
        sb.append(f"mod {item.ident}")

        if item.content is None:
            sb.append(";\n")
            return

        with sb.block():
            self._render_attributes(item.attrs, sb, ctx, AttrStyle.INNER)
            for child in item.content:
                self._render_item(child, sb, ctx)

    def _render_use(self, item: ItemUse, sb: StringBuilder, ctx: RenderContext) -> None:
        self._render_attributes(item.attrs, sb, ctx)
        self._render_visibility(item.vis, sb, ctx)
        sb.append("use ")
        if item.leading_colon:
            sb.append("::")
        self._render_use_tree(item.tree, sb, ctx)
        sb.append(";\n")

    def _render_use_tree(self, tree: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match tree:
            case UsePath():
                sb.append(f"{tree.ident}::")
                self._render_use_tree(tree.tree, sb, ctx)
            case UseName():
                sb.append(tree.ident)
            case UseRename():
                sb.append(f"{tree.ident} as {tree.rename}")
            case UseGlob():
                sb.append("*")
            case UseGroup():
                sb.append("{")
                self._render_punctuated(
                    tree.items, sb, ctx, Spacing.SPACE_AFTER, self._render_use_tree
                )
                sb.append("}")
            case _:
                raise ctx.unsupported(tree)

    # =========================================================================
    # Signatures and generics
    # =========================================================================

    def _render_signature(self, sig: MethodSig, sb: StringBuilder, ctx: RenderContext) -> None:
        ctx.require(not sig.constness, sig, "const fn")
        ctx.require(sig.abi is None, sig, "extern ABI")
        decl = sig.decl
        ctx.require(not decl.variadic, decl, "variadic arguments")

        if sig.asyncness:
            sb.append("async ")
        if sig.unsafe:
            sb.append("unsafe ")
        sb.append(f"fn {sig.ident}")

        self._render_generics(decl.generics, sb, ctx)
        sb.append("(")
        self._render_punctuated(decl.inputs, sb, ctx, Spacing.SPACE_AFTER, self._render_fn_arg)
        sb.append(")")

        if decl.output is not None:
            sb.append(" -> ")
            self._render_type(decl.output, sb, ctx)

        self._render_where_clause(decl.generics, sb, ctx)

    def _render_fn_arg(self, arg: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match arg:
            case ArgSelf():
                sb.append("mut self" if arg.mutable else "self")
            case ArgSelfRef():
                sb.append("&")
                if arg.lifetime is not None:
                    self._render_lifetime(arg.lifetime, sb, ctx)
                    sb.append(" ")
                if arg.mutable:
                    sb.append("mut ")
                sb.append("self")
            case ArgCaptured():
                self._render_pat(arg.pat, sb, ctx)
                sb.append(": ")
                self._render_type(arg.ty, sb, ctx)
            case _:
                raise ctx.unsupported(arg)

    def _render_generics(self, generics: Generics, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render ``<params>``; where clauses are rendered separately."""
        if not generics.params:
            return

        sb.append("<")
        self._render_punctuated(
            generics.params, sb, ctx, Spacing.SPACE_AFTER, self._render_generic_param
        )
        sb.append(">")

    def _render_generic_param(self, param: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match param:
            case TypeParam():
                ctx.require(not param.attrs, param, "attributes on type parameter")
                sb.append(param.ident)

                if param.colon:
                    sb.append(": ")
                    self._render_punctuated(
                        param.bounds, sb, ctx, Spacing.SPACE_BOTH, self._render_bound
                    )
                else:
                    ctx.require(not param.bounds, param, "bounds without a colon")

                if param.default is not None:
                    ctx.require(param.eq, param, "default without an equals sign")
                    sb.append(" = ")
                    self._render_type(param.default, sb, ctx)
            case _:
                raise ctx.unsupported(param)

    def _render_bound(self, bound: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match bound:
            case TraitBound():
                ctx.require(not bound.parenthesized, bound, "parenthesized bound")
                ctx.require(not bound.lifetimes, bound, "higher-ranked lifetimes")
                if bound.modifier is TraitBoundModifier.MAYBE:
                    sb.append("?")
                self._render_path(bound.path, sb, ctx)
            case Lifetime():
                self._render_lifetime(bound, sb, ctx)
            case _:
                raise ctx.unsupported(bound)

    def _render_where_clause(
        self, generics: Generics, sb: StringBuilder, ctx: RenderContext
    ) -> None:
        """Render the where clause, if any, with one predicate per line."""
        where_clause = generics.where_clause
        if where_clause is None:
            return

        sb.append("\nwhere\n")
        with sb.indent():
            self._render_punctuated(
                where_clause.predicates, sb, ctx, Spacing.NEWLINE, self._render_predicate
            )

    def _render_predicate(self, pred: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match pred:
            case PredicateType():
                ctx.require(not pred.lifetimes, pred, "higher-ranked lifetimes")
                self._render_type(pred.bounded_ty, sb, ctx)
                sb.append(": ")
                self._render_punctuated(
                    pred.bounds, sb, ctx, Spacing.SPACE_BOTH, self._render_bound
                )
            case _:
                raise ctx.unsupported(pred)

    # =========================================================================
    # Paths
    # =========================================================================

    def _render_path(self, path: Path, sb: StringBuilder, ctx: RenderContext) -> None:
        if path.leading_colon:
            sb.append("::")
        self._render_punctuated(path.segments, sb, ctx, Spacing.NONE, self._render_path_segment)

    def _render_path_segment(
        self, segment: PathSegment, sb: StringBuilder, ctx: RenderContext
    ) -> None:
        sb.append(segment.ident)
        match segment.arguments:
            case None:
                pass
            case AngleBracketedGenericArguments() as args:
                self._render_angle_bracketed(args, sb, ctx)
            case other:
                raise ctx.unsupported(other)

    def _render_angle_bracketed(
        self, args: AngleBracketedGenericArguments, sb: StringBuilder, ctx: RenderContext
    ) -> None:
        if args.colon2:
            sb.append("::")
        sb.append("<")
        self._render_punctuated(
            args.args, sb, ctx, Spacing.SPACE_AFTER, self._render_generic_argument
        )
        sb.append(">")

    def _render_generic_argument(self, arg: object, sb: StringBuilder, ctx: RenderContext) -> None:
        if isinstance(arg, Lifetime):
            self._render_lifetime(arg, sb, ctx)
        else:
            self._render_type(arg, sb, ctx)

    def _render_lifetime(self, lifetime: Lifetime, sb: StringBuilder, ctx: RenderContext) -> None:
        sb.append(f"'{lifetime.ident}")

    # =========================================================================
    # Statements
    # =========================================================================

    def _render_block(self, block: Block, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render ``{ stmts }`` embedded in a larger construct (no trailing newline)."""
        with sb.block(trailing_newline=False):
            after_item = False
            for stmt in block.stmts:
                after_item = self._render_stmt(stmt, sb, ctx, after_item)

    def _render_stmt(
        self, stmt: object, sb: StringBuilder, ctx: RenderContext, after_item: bool
    ) -> bool:
        """Render one statement. Returns True if it was a nested item.

        ``after_item`` is True when the previous statement in the same block
        was a nested item; a blank line then separates the two.
        """
        if isinstance(stmt, StmtItem):
            self._render_item(stmt.item, sb, ctx)
            return True

        if after_item:
            sb.append("\n")

        match stmt:
            case Local():
                self._render_local(stmt, sb, ctx)
                sb.append(";\n")
            case StmtExpr():
                self._render_expr(stmt.expr, sb, ctx)
                sb.append("\n")
            case StmtSemi():
                self._render_expr(stmt.expr, sb, ctx)
                sb.append(";\n")
            case _:
                raise ctx.unsupported(stmt)
        return False

    def _render_local(self, local: Local, sb: StringBuilder, ctx: RenderContext) -> None:
        self._render_attributes(local.attrs, sb, ctx)
        sb.append("let ")
        self._render_punctuated(local.pats, sb, ctx, Spacing.SPACE_BOTH, self._render_pat)

        if local.ty is not None:
            sb.append(": ")
            self._render_type(local.ty, sb, ctx)

        if local.init is not None:
            sb.append(" = ")
            self._render_expr(local.init, sb, ctx)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _render_expr(self, expr: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match expr:
            case ExprCall():
                self._render_attributes(expr.attrs, sb, ctx)
                self._render_expr(expr.func, sb, ctx)
                sb.append("(")
                self._render_punctuated(expr.args, sb, ctx, Spacing.SPACE_AFTER, self._render_expr)
                sb.append(")")
            case ExprMethodCall():
                self._render_attributes(expr.attrs, sb, ctx)
                ctx.require(expr.turbofish is None, expr, "turbofish")
                self._render_expr(expr.receiver, sb, ctx)
                sb.append(f".{expr.method}(")
                self._render_punctuated(expr.args, sb, ctx, Spacing.SPACE_AFTER, self._render_expr)
                sb.append(")")
            case ExprBinary():
                self._render_attributes(expr.attrs, sb, ctx)
                self._render_expr(expr.left, sb, ctx)
                sb.append(f" {self._symbol(_BIN_OPS, expr.op, ctx)} ")
                self._render_expr(expr.right, sb, ctx)
            case ExprUnary():
                self._render_attributes(expr.attrs, sb, ctx)
                sb.append(self._symbol(_UN_OPS, expr.op, ctx))
                self._render_expr(expr.expr, sb, ctx)
            case ExprField():
                self._render_attributes(expr.attrs, sb, ctx)
                self._render_expr(expr.base, sb, ctx)
                sb.append(f".{expr.member}")
            case ExprIf():
                with ctx.enter(expr):
                    self._render_attributes(expr.attrs, sb, ctx)
                    self._render_if(expr, sb, ctx)
            case ExprMatch():
                with ctx.enter(expr):
                    self._render_attributes(expr.attrs, sb, ctx)
                    sb.append("match ")
                    self._render_expr(expr.expr, sb, ctx)
                    with sb.block(trailing_newline=False):
                        for arm in expr.arms:
                            self._render_arm(arm, sb, ctx)
            case ExprStruct():
                with ctx.enter(expr):
                    self._render_struct_literal(expr, sb, ctx)
            case ExprBlock():
                with ctx.enter(expr):
                    self._render_attributes(expr.attrs, sb, ctx)
                    ctx.require(expr.label is None, expr, "labelled block")
                    self._render_block(expr.block, sb, ctx)
            case ExprReference():
                self._render_attributes(expr.attrs, sb, ctx)
                sb.append("&mut " if expr.mutable else "&")
                self._render_expr(expr.expr, sb, ctx)
            case ExprForLoop():
                with ctx.enter(expr):
                    self._render_attributes(expr.attrs, sb, ctx)
                    ctx.require(expr.label is None, expr, "labelled loop")
                    sb.append("for ")
                    self._render_pat(expr.pat, sb, ctx)
                    sb.append(" in ")
                    self._render_expr(expr.expr, sb, ctx)
                    self._render_block(expr.body, sb, ctx)
            case ExprPath():
                self._render_attributes(expr.attrs, sb, ctx)
                ctx.require(expr.qself is None, expr, "qualified self type")
                self._render_path(expr.path, sb, ctx)
            case ExprLit():
                self._render_attributes(expr.attrs, sb, ctx)
                self._render_lit(expr.lit, sb, ctx)
            case ExprMacro():
                self._render_attributes(expr.attrs, sb, ctx)
                self._render_macro(expr.mac, sb, ctx)
            case _:
                raise ctx.unsupported(expr)

    def _symbol[K](self, table: dict[K, str], op: K, ctx: RenderContext) -> str:
        symbol = table.get(op)
        if symbol is None:
            raise ctx.unsupported(op)
        return symbol

    def _render_if(self, expr: ExprIf, sb: StringBuilder, ctx: RenderContext) -> None:
        sb.append("if ")
        self._render_expr(expr.cond, sb, ctx)
        self._render_block(expr.then_branch, sb, ctx)

        if expr.else_branch is not None:
            ctx.require(
                isinstance(expr.else_branch, ExprIf | ExprBlock),
                expr.else_branch,
                "else branch must be a block or another if",
            )
            sb.append(" else ")
            self._render_expr(expr.else_branch, sb, ctx)

    def _render_arm(self, arm: Arm, sb: StringBuilder, ctx: RenderContext) -> None:
        self._render_attributes(arm.attrs, sb, ctx)

        if arm.leading_vert:
            sb.append("| ")
        self._render_punctuated(arm.pats, sb, ctx, Spacing.SPACE_BOTH, self._render_pat)

        if arm.guard is not None:
            sb.append(" if ")
            self._render_expr(arm.guard, sb, ctx)

        sb.append(" => ")
        self._render_expr(arm.body, sb, ctx)

        if arm.comma:
            sb.append(",")
        sb.append("\n")

    def _render_struct_literal(
        self, expr: ExprStruct, sb: StringBuilder, ctx: RenderContext
    ) -> None:
        self._render_attributes(expr.attrs, sb, ctx)
        self._render_path(expr.path, sb, ctx)

        with sb.block(trailing_newline=False):
            self._render_punctuated(
                expr.fields, sb, ctx, Spacing.NEWLINE, self._render_field_value
            )
            if expr.rest is not None:
                sb.ensure_newline()
                sb.append("..")
                self._render_expr(expr.rest, sb, ctx)

    def _render_field_value(self, fv: FieldValue, sb: StringBuilder, ctx: RenderContext) -> None:
        self._render_attributes(fv.attrs, sb, ctx)
        ctx.require(isinstance(fv.member, str), fv, "numbered member")
        sb.append(f"{fv.member}: ")
        self._render_expr(fv.expr, sb, ctx)

    def _render_macro(self, mac: Macro, sb: StringBuilder, ctx: RenderContext) -> None:
        self._render_path(mac.path, sb, ctx)
        sb.append("!")

        match mac.delimiter:
            case MacroDelimiter.PAREN:
                sb.append(f"({mac.tokens})")
            case MacroDelimiter.BRACKET:
                sb.append(f"[{mac.tokens}]")
            case MacroDelimiter.BRACE:
                with sb.block(trailing_newline=False):
                    sb.append(mac.tokens)
            case other:
                raise ctx.unsupported(other)

    # =========================================================================
    # Patterns
    # =========================================================================

    def _render_pat(self, pat: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match pat:
            case PatIdent():
                ctx.require(pat.subpat is None, pat, "binding with sub-pattern")
                if pat.by_ref:
                    sb.append("ref ")
                if pat.mutable:
                    sb.append("mut ")
                sb.append(pat.ident)
            case PatWild():
                sb.append("_")
            case PatTuple():
                self._render_pat_tuple(pat, sb, ctx)
            case PatTupleStruct():
                self._render_path(pat.path, sb, ctx)
                self._render_pat_tuple(pat.pat, sb, ctx)
            case PatPath():
                ctx.require(pat.qself is None, pat, "qualified self type")
                self._render_path(pat.path, sb, ctx)
            case _:
                raise ctx.unsupported(pat)

    def _render_pat_tuple(self, pat: PatTuple, sb: StringBuilder, ctx: RenderContext) -> None:
        ctx.require(not pat.dot2 and not pat.back, pat, "rest pattern")
        sb.append("(")
        self._render_punctuated(pat.front, sb, ctx, Spacing.SPACE_AFTER, self._render_pat)
        sb.append(")")

    # =========================================================================
    # Types
    # =========================================================================

    def _render_type(self, ty: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match ty:
            case TypePath():
                ctx.require(ty.qself is None, ty, "qualified self type")
                self._render_path(ty.path, sb, ctx)
            case TypeReference():
                sb.append("&")
                if ty.lifetime is not None:
                    self._render_lifetime(ty.lifetime, sb, ctx)
                    sb.append(" ")
                if ty.mutable:
                    sb.append("mut ")
                self._render_type(ty.elem, sb, ctx)
            case TypeArray():
                sb.append("[")
                self._render_type(ty.elem, sb, ctx)
                sb.append("; ")
                self._render_expr(ty.len, sb, ctx)
                sb.append("]")
            case TypeSlice():
                sb.append("[")
                self._render_type(ty.elem, sb, ctx)
                sb.append("]")
            case TypeTuple():
                sb.append("(")
                self._render_punctuated(ty.elems, sb, ctx, Spacing.SPACE_AFTER, self._render_type)
                sb.append(")")
            case _:
                raise ctx.unsupported(ty)

    # =========================================================================
    # Literals
    # =========================================================================

    def _render_lit(self, lit: object, sb: StringBuilder, ctx: RenderContext) -> None:
        match lit:
            case LitInt():
                ctx.require(lit.value >= 0, lit, "negative integer literal")
                sb.append(f"{lit.value}{self._symbol(_INT_SUFFIXES, lit.suffix, ctx)}")
            case LitStr():
                sb.append(escape_debug_str(lit.value))
            case LitBool():
                sb.append("true" if lit.value else "false")
            case LitChar():
                ctx.require(len(lit.value) == 1, lit, "char literal must hold one character")
                sb.append(escape_debug_char(lit.value))
            case _:
                raise ctx.unsupported(lit)

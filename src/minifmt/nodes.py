"""Typed syntax-tree nodes for minifmt.

All nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: a tree is borrowed read-only for a formatting call
- Pattern matching: the renderer dispatches with match statements

The node set mirrors the shape of a Rust syntax tree as produced by an
external parser. It is closed: every kind is listed here and registered in
``minifmt.serialization``. Some kinds exist only so that trees using them
can be represented; the renderer rejects them with UnsupportedSyntaxError
(they are grouped under "not rendered" comments below).

Node Hierarchy:
Node (base)
├── File
├── Item (ItemStruct, ItemImpl, ItemMod, ItemUse, ItemFn, ...)
├── ImplItem (ImplItemMethod, ...)
├── Stmt (Local, StmtItem, StmtExpr, StmtSemi)
├── Expr (ExprCall, ExprMethodCall, ExprBinary, ExprIf, ExprMatch, ...)
├── Pat (PatIdent, PatWild, PatTuple, PatTupleStruct, PatPath, ...)
├── Type (TypePath, TypeReference, TypeArray, TypeSlice, TypeTuple, ...)
├── Lit (LitInt, LitStr, LitBool, LitChar, ...)
├── Attribute / Meta (MetaWord, MetaList, MetaNameValue)
├── Generics / GenericParam / WherePredicate / TypeParamBound
├── Path / PathSegment / generic arguments
├── Visibility (VisInherited, VisPublic, ...)
└── UseTree (UsePath, UseName, UseRename, UseGlob, UseGroup)

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from minifmt.punct import EMPTY, Punctuated

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all syntax-tree nodes."""


# =============================================================================
# Enumerations
# =============================================================================


class AttrStyle(Enum):
    """Whether an attribute applies to the following item or the enclosing scope."""

    OUTER = auto()  # #[...]
    INNER = auto()  # #![...]


class BinOp(Enum):
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    REM = auto()
    AND = auto()
    OR = auto()
    BIT_XOR = auto()
    BIT_AND = auto()
    BIT_OR = auto()
    SHL = auto()
    SHR = auto()
    EQ = auto()
    LT = auto()
    LE = auto()
    NE = auto()
    GE = auto()
    GT = auto()
    ADD_EQ = auto()
    SUB_EQ = auto()
    MUL_EQ = auto()
    DIV_EQ = auto()
    REM_EQ = auto()
    BIT_XOR_EQ = auto()
    BIT_AND_EQ = auto()
    BIT_OR_EQ = auto()
    SHL_EQ = auto()
    SHR_EQ = auto()


class UnOp(Enum):
    DEREF = auto()
    NOT = auto()
    NEG = auto()


class IntSuffix(Enum):
    """Fixed-width integer suffix of an integer literal."""

    NONE = auto()
    I8 = auto()
    I16 = auto()
    I32 = auto()
    I64 = auto()
    I128 = auto()
    ISIZE = auto()
    U8 = auto()
    U16 = auto()
    U32 = auto()
    U64 = auto()
    U128 = auto()
    USIZE = auto()


class MacroDelimiter(Enum):
    PAREN = auto()  # name!(...)
    BRACKET = auto()  # name![...]
    BRACE = auto()  # name! { ... }


class TraitBoundModifier(Enum):
    NONE = auto()
    MAYBE = auto()  # ?Sized


# =============================================================================
# Identifiers, lifetimes, visibility
# =============================================================================


@dataclass(frozen=True, slots=True)
class Lifetime(Node):
    """Lifetime such as ``'a``; ``ident`` excludes the apostrophe."""

    ident: str


@dataclass(frozen=True, slots=True)
class VisInherited(Node):
    """No visibility marker."""


@dataclass(frozen=True, slots=True)
class VisPublic(Node):
    """``pub``"""


# Not rendered
@dataclass(frozen=True, slots=True)
class VisCrate(Node):
    """``crate``"""


@dataclass(frozen=True, slots=True)
class VisRestricted(Node):
    """``pub(in path)``"""

    path: Path


type Visibility = VisInherited | VisPublic | VisCrate | VisRestricted

INHERITED = VisInherited()


# =============================================================================
# Paths and generic arguments
# =============================================================================


@dataclass(frozen=True, slots=True)
class AngleBracketedGenericArguments(Node):
    """``<A, B>`` or, with ``colon2``, the turbofish form ``::<A, B>``."""

    args: Punctuated[GenericArgument]
    colon2: bool = False


# Not rendered
@dataclass(frozen=True, slots=True)
class ParenthesizedGenericArguments(Node):
    """``Fn(A, B) -> C``"""

    inputs: Punctuated[Type]
    output: Type | None = None


@dataclass(frozen=True, slots=True)
class Binding(Node):
    """``Item = Type`` inside generic arguments."""

    ident: str
    ty: Type


type PathArguments = AngleBracketedGenericArguments | ParenthesizedGenericArguments


@dataclass(frozen=True, slots=True)
class PathSegment(Node):
    ident: str
    arguments: PathArguments | None = None


@dataclass(frozen=True, slots=True)
class Path(Node):
    """A ``::``-separated path, optionally starting with ``::``."""

    segments: Punctuated[PathSegment]
    leading_colon: bool = False

    @classmethod
    def of(cls, *idents: str, leading_colon: bool = False) -> Path:
        """Build a plain path from identifiers.

        Example:
            >>> Path.of("std", "io").segments.values()[1].ident
            'io'

        """
        segments = Punctuated.of((PathSegment(ident) for ident in idents), "::")
        return cls(segments, leading_colon)


@dataclass(frozen=True, slots=True)
class QSelf(Node):
    """Qualified self type, as in ``<T as Trait>::Item``."""

    ty: Type
    position: int = 0


# =============================================================================
# Literals
# =============================================================================


@dataclass(frozen=True, slots=True)
class LitInt(Node):
    value: int
    suffix: IntSuffix = IntSuffix.NONE


@dataclass(frozen=True, slots=True)
class LitStr(Node):
    """String literal; ``value`` is the unescaped content."""

    value: str


@dataclass(frozen=True, slots=True)
class LitBool(Node):
    value: bool


@dataclass(frozen=True, slots=True)
class LitChar(Node):
    value: str


# Not rendered
@dataclass(frozen=True, slots=True)
class LitFloat(Node):
    value: float
    suffix: str = ""


@dataclass(frozen=True, slots=True)
class LitByte(Node):
    value: int


@dataclass(frozen=True, slots=True)
class LitByteStr(Node):
    value: bytes


@dataclass(frozen=True, slots=True)
class LitVerbatim(Node):
    text: str


type Lit = LitInt | LitStr | LitBool | LitChar | LitFloat | LitByte | LitByteStr | LitVerbatim


# =============================================================================
# Attributes
# =============================================================================


@dataclass(frozen=True, slots=True)
class MetaWord(Node):
    """Bare name: ``#[test]``"""

    ident: str


@dataclass(frozen=True, slots=True)
class MetaList(Node):
    """Call form: ``#[derive(Debug, Clone)]``"""

    ident: str
    nested: Punctuated[Meta | Lit]


@dataclass(frozen=True, slots=True)
class MetaNameValue(Node):
    """Name-equals-literal form: ``#[path = "x.rs"]``"""

    ident: str
    lit: Lit


type Meta = MetaWord | MetaList | MetaNameValue


@dataclass(frozen=True, slots=True)
class Attribute(Node):
    """``#[meta]`` or ``#![meta]``; doc comments are ``doc = "..."`` attributes."""

    meta: Meta
    style: AttrStyle = AttrStyle.OUTER

    @classmethod
    def doc(cls, text: str, *, inner: bool = False) -> Attribute:
        """Build the attribute a ``///text`` (or ``//!text``) comment parses to."""
        style = AttrStyle.INNER if inner else AttrStyle.OUTER
        return cls(MetaNameValue("doc", LitStr(text)), style)


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class TypePath(Node):
    path: Path
    qself: QSelf | None = None


@dataclass(frozen=True, slots=True)
class TypeReference(Node):
    """``&'a mut T``"""

    elem: Type
    lifetime: Lifetime | None = None
    mutable: bool = False


@dataclass(frozen=True, slots=True)
class TypeArray(Node):
    """``[T; N]``"""

    elem: Type
    len: Expr


@dataclass(frozen=True, slots=True)
class TypeSlice(Node):
    """``[T]``"""

    elem: Type


@dataclass(frozen=True, slots=True)
class TypeTuple(Node):
    """``(A, B)``"""

    elems: Punctuated[Type] = EMPTY


# Not rendered
@dataclass(frozen=True, slots=True)
class TypeNever(Node):
    """``!``"""


@dataclass(frozen=True, slots=True)
class TypePtr(Node):
    """``*const T`` / ``*mut T``"""

    elem: Type
    mutable: bool = False


@dataclass(frozen=True, slots=True)
class TypeInfer(Node):
    """``_``"""


@dataclass(frozen=True, slots=True)
class TypeBareFn(Node):
    """``fn(A) -> B``"""

    inputs: Punctuated[Type]
    output: Type | None = None


@dataclass(frozen=True, slots=True)
class TypeTraitObject(Node):
    """``dyn A + B``"""

    bounds: Punctuated[TypeParamBound]
    dyn: bool = True


@dataclass(frozen=True, slots=True)
class TypeImplTrait(Node):
    """``impl A + B``"""

    bounds: Punctuated[TypeParamBound]


type Type = (
    TypePath
    | TypeReference
    | TypeArray
    | TypeSlice
    | TypeTuple
    | TypeNever
    | TypePtr
    | TypeInfer
    | TypeBareFn
    | TypeTraitObject
    | TypeImplTrait
)

type GenericArgument = Type | Lifetime | Binding


# =============================================================================
# Generics
# =============================================================================


@dataclass(frozen=True, slots=True)
class TraitBound(Node):
    path: Path
    modifier: TraitBoundModifier = TraitBoundModifier.NONE
    lifetimes: tuple[Lifetime, ...] = ()  # for<'a>
    parenthesized: bool = False


type TypeParamBound = TraitBound | Lifetime


@dataclass(frozen=True, slots=True)
class TypeParam(Node):
    """``T: A + B = Default``

    ``colon`` and ``eq`` record whether the ``:`` and ``=`` tokens were
    present in the source.

    """

    ident: str
    bounds: Punctuated[TypeParamBound] = EMPTY
    colon: bool = False
    default: Type | None = None
    eq: bool = False
    attrs: tuple[Attribute, ...] = ()


# Not rendered
@dataclass(frozen=True, slots=True)
class LifetimeDef(Node):
    lifetime: Lifetime
    bounds: Punctuated[Lifetime] = EMPTY


@dataclass(frozen=True, slots=True)
class ConstParam(Node):
    ident: str
    ty: Type
    default: Expr | None = None


type GenericParam = TypeParam | LifetimeDef | ConstParam


@dataclass(frozen=True, slots=True)
class PredicateType(Node):
    """``T: A + B`` inside a where clause."""

    bounded_ty: Type
    bounds: Punctuated[TypeParamBound]
    lifetimes: tuple[Lifetime, ...] = ()  # for<'a>


# Not rendered
@dataclass(frozen=True, slots=True)
class PredicateLifetime(Node):
    lifetime: Lifetime
    bounds: Punctuated[Lifetime]


@dataclass(frozen=True, slots=True)
class PredicateEq(Node):
    lhs_ty: Type
    rhs_ty: Type


type WherePredicate = PredicateType | PredicateLifetime | PredicateEq


@dataclass(frozen=True, slots=True)
class WhereClause(Node):
    predicates: Punctuated[WherePredicate]


@dataclass(frozen=True, slots=True)
class Generics(Node):
    params: Punctuated[GenericParam] = EMPTY
    where_clause: WhereClause | None = None


NO_GENERICS = Generics()


# =============================================================================
# Patterns
# =============================================================================


@dataclass(frozen=True, slots=True)
class PatIdent(Node):
    """``ref mut name``"""

    ident: str
    by_ref: bool = False
    mutable: bool = False
    subpat: Pat | None = None  # name @ subpat


@dataclass(frozen=True, slots=True)
class PatWild(Node):
    """``_``"""


@dataclass(frozen=True, slots=True)
class PatTuple(Node):
    """``(a, b)``; ``dot2`` and ``back`` describe a ``..`` rest pattern."""

    front: Punctuated[Pat] = EMPTY
    dot2: bool = False
    back: Punctuated[Pat] = EMPTY


@dataclass(frozen=True, slots=True)
class PatTupleStruct(Node):
    """``Some(x)``"""

    path: Path
    pat: PatTuple


@dataclass(frozen=True, slots=True)
class PatPath(Node):
    """``Ordering::Less``"""

    path: Path
    qself: QSelf | None = None


# Not rendered
@dataclass(frozen=True, slots=True)
class PatRef(Node):
    pat: Pat
    mutable: bool = False


@dataclass(frozen=True, slots=True)
class PatLit(Node):
    expr: Expr


@dataclass(frozen=True, slots=True)
class PatStruct(Node):
    path: Path
    fields: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PatRange(Node):
    lo: Expr
    hi: Expr


@dataclass(frozen=True, slots=True)
class PatSlice(Node):
    front: Punctuated[Pat] = EMPTY


type Pat = (
    PatIdent
    | PatWild
    | PatTuple
    | PatTupleStruct
    | PatPath
    | PatRef
    | PatLit
    | PatStruct
    | PatRange
    | PatSlice
)


# =============================================================================
# Expressions
# =============================================================================


@dataclass(frozen=True, slots=True)
class ExprCall(Node):
    """``func(args)``"""

    func: Expr
    args: Punctuated[Expr] = EMPTY
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprMethodCall(Node):
    """``receiver.method(args)``"""

    receiver: Expr
    method: str
    args: Punctuated[Expr] = EMPTY
    turbofish: AngleBracketedGenericArguments | None = None
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprBinary(Node):
    left: Expr
    op: BinOp
    right: Expr
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprUnary(Node):
    op: UnOp
    expr: Expr
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprField(Node):
    """``base.member``; an int member is a tuple index (``base.0``)."""

    base: Expr
    member: str | int
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprIf(Node):
    cond: Expr
    then_branch: Block
    else_branch: Expr | None = None  # ExprBlock or ExprIf
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class Arm(Node):
    """One ``pats => body`` arm of a match expression."""

    pats: Punctuated[Pat]
    body: Expr
    guard: Expr | None = None
    leading_vert: bool = False
    comma: bool = False
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprMatch(Node):
    expr: Expr
    arms: tuple[Arm, ...] = ()
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class FieldValue(Node):
    """``member: expr`` inside a struct literal."""

    member: str | int
    expr: Expr
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprStruct(Node):
    """``Path { fields, ..rest }``"""

    path: Path
    fields: Punctuated[FieldValue] = EMPTY
    rest: Expr | None = None
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprBlock(Node):
    block: Block
    label: Lifetime | None = None
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprReference(Node):
    """``&expr`` / ``&mut expr``"""

    expr: Expr
    mutable: bool = False
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprForLoop(Node):
    pat: Pat
    expr: Expr
    body: Block
    label: Lifetime | None = None
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprPath(Node):
    path: Path
    qself: QSelf | None = None
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprLit(Node):
    lit: Lit
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class Macro(Node):
    """Macro invocation; ``tokens`` is the verbatim token text of the body."""

    path: Path
    delimiter: MacroDelimiter = MacroDelimiter.PAREN
    tokens: str = ""


@dataclass(frozen=True, slots=True)
class ExprMacro(Node):
    mac: Macro
    attrs: tuple[Attribute, ...] = ()


# Not rendered
@dataclass(frozen=True, slots=True)
class ExprTuple(Node):
    elems: Punctuated[Expr] = EMPTY


@dataclass(frozen=True, slots=True)
class ExprArray(Node):
    elems: Punctuated[Expr] = EMPTY


@dataclass(frozen=True, slots=True)
class ExprClosure(Node):
    inputs: Punctuated[Pat]
    body: Expr


@dataclass(frozen=True, slots=True)
class ExprParen(Node):
    expr: Expr


@dataclass(frozen=True, slots=True)
class ExprReturn(Node):
    expr: Expr | None = None


@dataclass(frozen=True, slots=True)
class ExprIndex(Node):
    expr: Expr
    index: Expr


@dataclass(frozen=True, slots=True)
class ExprRange(Node):
    start: Expr | None = None
    end: Expr | None = None
    closed: bool = False


@dataclass(frozen=True, slots=True)
class ExprLoop(Node):
    body: Block


@dataclass(frozen=True, slots=True)
class ExprWhile(Node):
    cond: Expr
    body: Block


@dataclass(frozen=True, slots=True)
class ExprCast(Node):
    expr: Expr
    ty: Type


type Expr = (
    ExprCall
    | ExprMethodCall
    | ExprBinary
    | ExprUnary
    | ExprField
    | ExprIf
    | ExprMatch
    | ExprStruct
    | ExprBlock
    | ExprReference
    | ExprForLoop
    | ExprPath
    | ExprLit
    | ExprMacro
    | ExprTuple
    | ExprArray
    | ExprClosure
    | ExprParen
    | ExprReturn
    | ExprIndex
    | ExprRange
    | ExprLoop
    | ExprWhile
    | ExprCast
)


# =============================================================================
# Statements and blocks
# =============================================================================


@dataclass(frozen=True, slots=True)
class Local(Node):
    """``let pats: ty = init;``"""

    pats: Punctuated[Pat]
    ty: Type | None = None
    init: Expr | None = None
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class StmtItem(Node):
    """An item declared inside a block."""

    item: Item


@dataclass(frozen=True, slots=True)
class StmtExpr(Node):
    """Expression without a trailing semicolon."""

    expr: Expr


@dataclass(frozen=True, slots=True)
class StmtSemi(Node):
    """Expression followed by a semicolon."""

    expr: Expr


type Stmt = Local | StmtItem | StmtExpr | StmtSemi


@dataclass(frozen=True, slots=True)
class Block(Node):
    stmts: tuple[Stmt, ...] = ()


# =============================================================================
# Function signatures
# =============================================================================


@dataclass(frozen=True, slots=True)
class ArgSelf(Node):
    """``self`` / ``mut self``"""

    mutable: bool = False


@dataclass(frozen=True, slots=True)
class ArgSelfRef(Node):
    """``&self`` / ``&'a mut self``"""

    lifetime: Lifetime | None = None
    mutable: bool = False


@dataclass(frozen=True, slots=True)
class ArgCaptured(Node):
    """``pat: Type``"""

    pat: Pat
    ty: Type


type FnArg = ArgSelf | ArgSelfRef | ArgCaptured


@dataclass(frozen=True, slots=True)
class FnDecl(Node):
    inputs: Punctuated[FnArg] = EMPTY
    output: Type | None = None
    generics: Generics = NO_GENERICS
    variadic: bool = False


@dataclass(frozen=True, slots=True)
class MethodSig(Node):
    ident: str
    decl: FnDecl = FnDecl()
    unsafe: bool = False
    asyncness: bool = False
    constness: bool = False
    abi: str | None = None


# =============================================================================
# Items
# =============================================================================


@dataclass(frozen=True, slots=True)
class Field(Node):
    ty: Type
    ident: str | None = None  # None for tuple-struct fields
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class FieldsNamed(Node):
    """``{ a: A, b: B }``"""

    named: Punctuated[Field] = EMPTY


# Not rendered
@dataclass(frozen=True, slots=True)
class FieldsUnnamed(Node):
    """``(A, B)``"""

    unnamed: Punctuated[Field] = EMPTY


type Fields = FieldsNamed | FieldsUnnamed


@dataclass(frozen=True, slots=True)
class ItemStruct(Node):
    """Struct declaration; ``fields=None`` is a unit struct (``struct S;``)."""

    ident: str
    fields: Fields | None = None
    generics: Generics = NO_GENERICS
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ImplItemMethod(Node):
    sig: MethodSig
    block: Block = Block()
    vis: Visibility = INHERITED
    defaultness: bool = False
    attrs: tuple[Attribute, ...] = ()


# Not rendered
@dataclass(frozen=True, slots=True)
class ImplItemConst(Node):
    ident: str
    ty: Type
    expr: Expr


@dataclass(frozen=True, slots=True)
class ImplItemType(Node):
    ident: str
    ty: Type


@dataclass(frozen=True, slots=True)
class ImplItemMacro(Node):
    mac: Macro


type ImplItem = ImplItemMethod | ImplItemConst | ImplItemType | ImplItemMacro


@dataclass(frozen=True, slots=True)
class TraitRef(Node):
    """``Trait for`` part of a trait impl; ``negative`` renders ``!Trait``."""

    path: Path
    negative: bool = False


@dataclass(frozen=True, slots=True)
class ItemImpl(Node):
    self_ty: Type
    items: tuple[ImplItem, ...] = ()
    generics: Generics = NO_GENERICS
    trait_: TraitRef | None = None
    unsafe: bool = False
    defaultness: bool = False
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ItemMod(Node):
    """``mod name;`` when ``content`` is None, else ``mod name { ... }``."""

    ident: str
    content: tuple[Item, ...] | None = None
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class UsePath(Node):
    """``ident::tree``"""

    ident: str
    tree: UseTree


@dataclass(frozen=True, slots=True)
class UseName(Node):
    ident: str


@dataclass(frozen=True, slots=True)
class UseRename(Node):
    """``ident as rename``"""

    ident: str
    rename: str


@dataclass(frozen=True, slots=True)
class UseGlob(Node):
    """``*``"""


@dataclass(frozen=True, slots=True)
class UseGroup(Node):
    """``{a, b::c}``"""

    items: Punctuated[UseTree] = EMPTY


type UseTree = UsePath | UseName | UseRename | UseGlob | UseGroup


@dataclass(frozen=True, slots=True)
class ItemUse(Node):
    tree: UseTree
    leading_colon: bool = False
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ItemFn(Node):
    sig: MethodSig
    block: Block = Block()
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


# Not rendered
@dataclass(frozen=True, slots=True)
class ItemEnum(Node):
    ident: str
    variants: tuple[str, ...] = ()
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ItemConst(Node):
    ident: str
    ty: Type
    expr: Expr
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ItemStatic(Node):
    ident: str
    ty: Type
    expr: Expr
    mutable: bool = False
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ItemTrait(Node):
    ident: str
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ItemType(Node):
    ident: str
    ty: Type
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ItemMacro(Node):
    mac: Macro
    attrs: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class ItemExternCrate(Node):
    ident: str
    rename: str | None = None
    vis: Visibility = INHERITED
    attrs: tuple[Attribute, ...] = ()


type Item = (
    ItemStruct
    | ItemImpl
    | ItemMod
    | ItemUse
    | ItemFn
    | ItemEnum
    | ItemConst
    | ItemStatic
    | ItemTrait
    | ItemType
    | ItemMacro
    | ItemExternCrate
)


# =============================================================================
# Compilation unit
# =============================================================================


@dataclass(frozen=True, slots=True)
class File(Node):
    """Root node: one parsed compilation unit."""

    items: tuple[Item, ...] = ()
    attrs: tuple[Attribute, ...] = ()
    shebang: str | None = None

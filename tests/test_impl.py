"""Tests for impl block rendering."""

import pytest

from minifmt import fmt_file
from minifmt.errors import UnsupportedSyntaxError
from minifmt.nodes import (
    AngleBracketedGenericArguments,
    ArgCaptured,
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
    FieldValue,
    File,
    FnDecl,
    Generics,
    ImplItemConst,
    ImplItemMethod,
    ItemImpl,
    ItemUse,
    LitInt,
    LitStr,
    Local,
    Macro,
    MetaWord,
    MethodSig,
    PatIdent,
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
    TraitRef,
    TypeParam,
    TypePath,
    TypeReference,
    TypeSlice,
    UnOp,
    UseGlob,
    UsePath,
    VisPublic,
    WhereClause,
)
from minifmt.punct import Punctuated


def _ty(*idents: str) -> TypePath:
    return TypePath(Path.of(*idents))


def _var(*idents: str) -> ExprPath:
    return ExprPath(Path.of(*idents))


def _call(name: str, *args) -> ExprCall:  # type: ignore[no-untyped-def]
    return ExprCall(_var(name), Punctuated.of(args))


def _method(receiver, name: str, *args) -> ExprMethodCall:  # type: ignore[no-untyped-def]
    return ExprMethodCall(receiver, name, Punctuated.of(args))


def _fn(name: str, *stmts, inputs=(), output=None) -> ImplItemMethod:  # type: ignore[no-untyped-def]
    decl = FnDecl(Punctuated.of(inputs), output)
    return ImplItemMethod(MethodSig(name, decl), Block(tuple(stmts)))


def _arm(pat, body, *, comma: bool = False) -> Arm:  # type: ignore[no-untyped-def]
    return Arm(Punctuated.of([pat], "|"), body, comma=comma)


def _tuple_struct_pat(name: str, binding: str) -> PatTupleStruct:
    return PatTupleStruct(Path.of(name), PatTuple(Punctuated.of([PatIdent(binding)])))


def _panic() -> ExprMacro:
    return ExprMacro(Macro(Path.of("panic")))


def _impl(*items, **kwargs) -> File:  # type: ignore[no-untyped-def]
    return File(items=(ItemImpl(_ty("MyStruct"), tuple(items), **kwargs),))


def _attrs_param() -> ArgCaptured:
    return ArgCaptured(PatIdent("i"), TypeReference(TypeSlice(_ty("syn", "Attribute"))))


class TestImplBlocks:
    """Impl headers, attributes and item separation."""

    def test_empty_impl_block(self) -> None:
        assert fmt_file(_impl()) == "impl MyStruct {\n}\n"

    def test_attributes(self) -> None:
        attrs = (
            Attribute(MetaWord("foo")),
            Attribute(MetaWord("bar"), AttrStyle.INNER),
        )
        assert fmt_file(_impl(attrs=attrs)) == "#[foo]\nimpl MyStruct {\n    #![bar]\n}\n"

    def test_init_tuple_struct(self) -> None:
        body = StmtExpr(
            _call(
                "Foo",
                ExprLit(LitInt(1)),
                ExprLit(LitStr("two")),
                _call("foo"),
                ExprBinary(ExprLit(LitInt(2)), BinOp.ADD, ExprLit(LitInt(3))),
            )
        )
        tree = File(items=(ItemImpl(_ty("Foo"), (_fn("new", body, output=_ty("Self")),)),))

        assert fmt_file(tree) == (
            "impl Foo {\n"
            "    fn new() -> Self {\n"
            '        Foo(1, "two", foo(), 2 + 3)\n'
            "    }\n"
            "}\n"
        )

    def test_items_are_separated_by_blank_line(self) -> None:
        out = fmt_file(_impl(_fn("a"), _fn("b"), _fn("c")))
        assert out == (
            "impl MyStruct {\n"
            "    fn a() {\n"
            "    }\n"
            "\n"
            "    fn b() {\n"
            "    }\n"
            "\n"
            "    fn c() {\n"
            "    }\n"
            "}\n"
        )

    def test_trait_impl(self) -> None:
        out = fmt_file(_impl(trait_=TraitRef(Path.of("Default"))))
        assert out == "impl Default for MyStruct {\n}\n"

    def test_negative_trait_impl(self) -> None:
        out = fmt_file(_impl(trait_=TraitRef(Path.of("Send"), negative=True)))
        assert out == "impl !Send for MyStruct {\n}\n"

    def test_unsafe_impl(self) -> None:
        out = fmt_file(_impl(trait_=TraitRef(Path.of("Sync")), unsafe=True))
        assert out == "unsafe impl Sync for MyStruct {\n}\n"

    def test_generic_impl_with_where_clause(self) -> None:
        generics = Generics(
            params=Punctuated.of([TypeParam("T")]),
            where_clause=WhereClause(
                Punctuated.of(
                    [PredicateType(_ty("T"), Punctuated.of([TraitBound(Path.of("Clone"))], "+"))],
                    trailing=True,
                )
            ),
        )
        generic_self = TypePath(
            Path(
                Punctuated.of(
                    [
                        PathSegment(
                            "Wrapper",
                            AngleBracketedGenericArguments(Punctuated.of([_ty("T")])),
                        )
                    ],
                    "::",
                )
            )
        )
        tree = File(items=(ItemImpl(generic_self, generics=generics),))

        assert fmt_file(tree) == "impl<T> Wrapper<T>\nwhere\n    T: Clone,\n{\n}\n"

    def test_pub_method_with_doc_comment(self) -> None:
        method = ImplItemMethod(
            MethodSig("len", FnDecl(Punctuated.of([ArgSelfRef()]), _ty("usize"))),
            Block((StmtExpr(ExprField(_var("self"), 0)),)),
            vis=VisPublic(),
            attrs=(Attribute.doc(" Number of elements."),),
        )
        assert fmt_file(_impl(method)) == (
            "impl MyStruct {\n"
            "    /// Number of elements.\n"
            "    pub fn len(&self) -> usize {\n"
            "        self.0\n"
            "    }\n"
            "}\n"
        )

    def test_default_impl_is_rejected(self) -> None:
        with pytest.raises(UnsupportedSyntaxError, match="default impl"):
            fmt_file(_impl(defaultness=True))

    def test_associated_const_is_rejected(self) -> None:
        item = ImplItemConst("N", _ty("usize"), ExprLit(LitInt(1)))
        with pytest.raises(UnsupportedSyntaxError) as exc_info:
            fmt_file(_impl(item))
        assert exc_info.value.node_kind == "ImplItemConst"
        assert exc_info.value.trail == ("File", "ItemImpl")


class TestBasicFunctions:
    """A larger impl exercising statements, control flow and matches."""

    def _tree(self) -> File:
        new = _fn(
            "new",
            StmtExpr(
                ExprStruct(
                    Path.of("FormatFile"),
                    Punctuated.of(
                        [
                            FieldValue("out", _method(ExprLit(LitStr("")), "to_string")),
                            FieldValue("indent", ExprLit(LitInt(0))),
                        ],
                        trailing=True,
                    ),
                )
            ),
            output=_ty("FormatFile"),
        )

        def visit_each(body_stmt) -> ExprForLoop:  # type: ignore[no-untyped-def]
            return ExprForLoop(PatIdent("attr"), _var("i"), Block((body_stmt,)))

        visit = StmtSemi(_method(_var("self"), "visit_attribute", _var("attr")))

        visit_attributes = _fn(
            "visit_attributes",
            StmtExpr(visit_each(visit)),
            inputs=[ArgSelfRef(mutable=True), _attrs_param()],
        )
        visit_inner = _fn(
            "visit_inner_attributes",
            StmtExpr(
                visit_each(
                    StmtExpr(ExprIf(_call("is_inner_attr", _var("attr")), Block((visit,))))
                )
            ),
            inputs=[ArgSelfRef(mutable=True), _attrs_param()],
        )
        visit_outer = _fn(
            "visit_outer_attributes",
            StmtExpr(
                visit_each(
                    StmtExpr(
                        ExprIf(
                            ExprUnary(UnOp.NOT, _call("is_inner_attr", _var("attr"))),
                            Block((visit,)),
                        )
                    )
                )
            ),
            inputs=[ArgSelfRef(mutable=True), _attrs_param()],
        )

        inner_match = ExprMatch(
            ExprField(_var("name_value"), "lit"),
            (
                _arm(
                    _tuple_struct_pat("Str", "s"),
                    ExprBlock(
                        Block(
                            (
                                StmtSemi(
                                    _method(
                                        _var("self"),
                                        "visit_doc_comment",
                                        _call("is_inner_attr", _var("i")),
                                        ExprReference(_method(_var("s"), "value")),
                                    )
                                ),
                            )
                        )
                    ),
                ),
                _arm(PatWild(), _panic(), comma=True),
            ),
        )
        outer_match = ExprMatch(
            _var("meta"),
            (
                _arm(
                    _tuple_struct_pat("NameValue", "name_value"),
                    ExprBlock(Block((StmtExpr(inner_match),))),
                ),
                _arm(PatWild(), _panic(), comma=True),
            ),
        )
        visit_doc = _fn(
            "visit_doc_attribute",
            StmtItem(ItemUse(UsePath("syn", UsePath("Meta", UseGlob())))),
            StmtItem(ItemUse(UsePath("syn", UsePath("Lit", UseGlob())))),
            Local(
                Punctuated.of([PatIdent("meta")], "|"),
                init=_method(_method(_var("i"), "parse_meta"), "unwrap"),
            ),
            StmtExpr(outer_match),
            inputs=[
                ArgSelfRef(mutable=True),
                ArgCaptured(PatIdent("i"), TypeReference(_ty("syn", "Attribute"))),
            ],
        )

        return _impl(new, visit_attributes, visit_inner, visit_outer, visit_doc)

    def test_basic_functions(self) -> None:
        expected = """\
impl MyStruct {
    fn new() -> FormatFile {
        FormatFile {
            out: "".to_string(),
            indent: 0,
        }
    }

    fn visit_attributes(&mut self, i: &[syn::Attribute]) {
        for attr in i {
            self.visit_attribute(attr);
        }
    }

    fn visit_inner_attributes(&mut self, i: &[syn::Attribute]) {
        for attr in i {
            if is_inner_attr(attr) {
                self.visit_attribute(attr);
            }
        }
    }

    fn visit_outer_attributes(&mut self, i: &[syn::Attribute]) {
        for attr in i {
            if !is_inner_attr(attr) {
                self.visit_attribute(attr);
            }
        }
    }

    fn visit_doc_attribute(&mut self, i: &syn::Attribute) {
        use syn::Meta::*;
        use syn::Lit::*;

        let meta = i.parse_meta().unwrap();
        match meta {
            NameValue(name_value) => {
                match name_value.lit {
                    Str(s) => {
                        self.visit_doc_comment(is_inner_attr(i), &s.value());
                    }
                    _ => panic!(),
                }
            }
            _ => panic!(),
        }
    }
}
"""
        assert fmt_file(self._tree()) == expected

    def test_rendering_is_deterministic(self) -> None:
        tree = self._tree()
        assert fmt_file(tree) == fmt_file(tree)

    def test_indent_width_applies_to_every_level(self) -> None:
        from minifmt import FormatConfig

        out = fmt_file(self._tree(), config=FormatConfig(indent_width=2))
        assert "\n  fn new() -> FormatFile {\n    FormatFile {\n      out: " in out

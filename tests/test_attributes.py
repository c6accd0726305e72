"""Tests for attribute classification and rendering."""

import pytest

from minifmt import FormatConfig, fmt_file
from minifmt.attributes import (
    doc_text,
    inner_attributes,
    is_doc,
    is_inner,
    outer_attributes,
)
from minifmt.errors import UnsupportedSyntaxError
from minifmt.nodes import (
    Attribute,
    AttrStyle,
    File,
    ItemMod,
    ItemStruct,
    LitBool,
    LitInt,
    LitStr,
    MetaList,
    MetaNameValue,
    MetaWord,
)
from minifmt.punct import Punctuated

_OUTER = Attribute(MetaWord("test"))
_INNER = Attribute(MetaWord("allow"), AttrStyle.INNER)


class TestClassification:
    def test_is_inner(self) -> None:
        assert is_inner(_INNER)
        assert not is_inner(_OUTER)

    def test_partition_preserves_order(self) -> None:
        second_outer = Attribute(MetaWord("inline"))
        attrs = (_OUTER, _INNER, second_outer)
        assert inner_attributes(attrs) == [_INNER]
        assert outer_attributes(attrs) == [_OUTER, second_outer]

    @pytest.mark.parametrize(
        "meta",
        [
            MetaWord("doc"),
            MetaList("doc", Punctuated.of([MetaWord("hidden")])),
            MetaNameValue("doc", LitStr(" text")),
        ],
    )
    def test_is_doc_matches_any_form(self, meta: object) -> None:
        assert is_doc(Attribute(meta))

    def test_is_doc_checks_name(self) -> None:
        assert not is_doc(Attribute(MetaNameValue("path", LitStr("x.rs"))))

    def test_doc_text(self) -> None:
        assert doc_text(Attribute.doc(" Hello")) == " Hello"

    def test_doc_text_of_non_string_forms(self) -> None:
        assert doc_text(Attribute(MetaWord("doc"))) is None
        assert doc_text(Attribute(MetaNameValue("doc", LitBool(True)))) is None


def _struct(*attrs: Attribute) -> File:
    return File(items=(ItemStruct("S", attrs=attrs),))


class TestRendering:
    def test_meta_forms(self) -> None:
        attrs = (
            Attribute(MetaWord("test")),
            Attribute(MetaNameValue("path", LitStr("x.rs"))),
            Attribute(
                MetaList(
                    "cfg",
                    Punctuated.of(
                        [
                            MetaList(
                                "all",
                                Punctuated.of(
                                    [MetaWord("unix"), MetaNameValue("target_os", LitStr("linux"))]
                                ),
                            ),
                            LitBool(True),
                        ]
                    ),
                )
            ),
        )
        assert fmt_file(_struct(*attrs)) == (
            "#[test]\n"
            '#[path = "x.rs"]\n'
            '#[cfg(all(unix, target_os = "linux"), true)]\n'
            "struct S;\n"
        )

    def test_literal_in_meta_list(self) -> None:
        attr = Attribute(MetaList("repr", Punctuated.of([MetaWord("align"), LitInt(8)])))
        assert fmt_file(_struct(attr)).startswith("#[repr(align, 8)]\n")

    def test_outer_doc_comment(self) -> None:
        assert fmt_file(_struct(Attribute.doc(" Docs"))) == "/// Docs\nstruct S;\n"

    def test_inner_doc_comment_on_file(self) -> None:
        tree = File(attrs=(Attribute.doc(" Crate docs", inner=True),))
        assert fmt_file(tree) == "//! Crate docs\n"

    def test_multiline_doc_comment(self) -> None:
        out = fmt_file(_struct(Attribute.doc(" First\n Second")))
        assert out == "/// First\n/// Second\nstruct S;\n"

    def test_doc_comments_can_be_disabled(self) -> None:
        out = fmt_file(_struct(Attribute.doc(" Docs")), config=FormatConfig(doc_comments=False))
        assert out == '#[doc = " Docs"]\nstruct S;\n'

    def test_doc_comment_inside_module(self) -> None:
        tree = File(
            items=(ItemMod("m", (), attrs=(Attribute.doc(" Module docs", inner=True),)),)
        )
        assert fmt_file(tree) == "mod m {\n    //! Module docs\n}\n"

    def test_doc_word_is_rejected(self) -> None:
        with pytest.raises(UnsupportedSyntaxError, match="must be a string") as exc_info:
            fmt_file(_struct(Attribute(MetaWord("doc"))))
        assert exc_info.value.node_kind == "MetaWord"
        assert exc_info.value.trail == ("File", "ItemStruct")

    def test_inner_doc_word_in_module_carries_trail(self) -> None:
        tree = File(items=(ItemMod("m", (), attrs=(Attribute(MetaWord("doc"), AttrStyle.INNER),)),))
        with pytest.raises(UnsupportedSyntaxError) as exc_info:
            fmt_file(tree)
        assert exc_info.value.trail == ("File", "ItemMod")

    def test_inner_file_attribute(self) -> None:
        tree = File(items=(ItemStruct("S"),), attrs=(_INNER,))
        assert fmt_file(tree) == "#![allow]\nstruct S;\n"

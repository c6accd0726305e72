"""Property-based tests for rendering invariants using Hypothesis.

These tests verify that certain properties always hold regardless of the
tree being rendered, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from minifmt import FormatConfig, fmt_file, fmt_json, to_json
from minifmt.nodes import (
    Attribute,
    Field,
    FieldsNamed,
    File,
    ItemMod,
    ItemStruct,
    ItemUse,
    LitStr,
    MetaNameValue,
    MetaWord,
    Path,
    TypePath,
    UseName,
    UsePath,
    VisInherited,
    VisPublic,
)
from minifmt.punct import Punctuated

identifiers = st.from_regex(r"[a-z_][a-z0-9_]{0,8}", fullmatch=True)
visibilities = st.sampled_from([VisInherited(), VisPublic()])

attribute_names = identifiers.filter(lambda name: name != "doc")

attributes = st.one_of(
    attribute_names.map(lambda name: Attribute(MetaWord(name))),
    st.tuples(attribute_names, st.text(max_size=20)).map(
        lambda pair: Attribute(MetaNameValue(pair[0], LitStr(pair[1])))
    ),
)


@st.composite
def structs(draw: st.DrawFn) -> ItemStruct:
    names = draw(st.lists(identifiers, max_size=6))
    fields = None
    if draw(st.booleans()):
        named = [Field(TypePath(Path.of(draw(identifiers))), name) for name in names]
        fields = FieldsNamed(Punctuated.of(named, trailing=draw(st.booleans())))
    return ItemStruct(
        draw(identifiers),
        fields,
        vis=draw(visibilities),
        attrs=tuple(draw(st.lists(attributes, max_size=2))),
    )


uses = st.tuples(identifiers, identifiers).map(lambda p: ItemUse(UsePath(p[0], UseName(p[1]))))

items = st.recursive(
    st.one_of(structs(), uses, identifiers.map(ItemMod)),
    lambda children: st.tuples(identifiers, st.lists(children, max_size=4)).map(
        lambda pair: ItemMod(pair[0], tuple(pair[1]))
    ),
    max_leaves=12,
)

files = st.lists(items, max_size=5).map(lambda xs: File(items=tuple(xs)))


class TestOutputShape:
    """Invariants of every successful render."""

    @given(files)
    @settings(max_examples=150)
    def test_ends_with_single_newline(self, tree: File) -> None:
        out = fmt_file(tree)
        if out:
            assert out.endswith("\n")
            assert not out.endswith("\n\n")

    @given(files)
    @settings(max_examples=100)
    def test_deterministic(self, tree: File) -> None:
        assert fmt_file(tree) == fmt_file(tree)

    @given(files, st.integers(min_value=0, max_value=8))
    @settings(max_examples=100)
    def test_indentation_is_a_multiple_of_width(self, tree: File, width: int) -> None:
        out = fmt_file(tree, config=FormatConfig(indent_width=width))
        for line in out.splitlines():
            if not line:
                continue
            leading = len(line) - len(line.lstrip(" "))
            if width:
                assert leading % width == 0
            else:
                assert leading == 0

    @given(files)
    @settings(max_examples=100)
    def test_braces_are_balanced_on_their_own_lines(self, tree: File) -> None:
        out = fmt_file(tree)
        lines = [line for line in out.splitlines() if '"' not in line]
        opens = sum(line.endswith("{") for line in lines)
        closes = sum(line.strip() == "}" for line in lines)
        assert opens == closes

    @given(files)
    @settings(max_examples=100)
    def test_no_trailing_whitespace(self, tree: File) -> None:
        for line in fmt_file(tree).splitlines():
            if '"' not in line:
                assert line == line.rstrip()


class TestSeparators:
    """Separators are emitted exactly as they appear in the tree."""

    @given(structs())
    @settings(max_examples=150)
    def test_field_separators_preserved(self, item: ItemStruct) -> None:
        out = fmt_file(File(items=(item,)))
        if item.fields is None:
            assert out.endswith(";\n")
            return
        body = out[out.index("{\n") + 2 : out.rindex("}")]
        field_lines = [line for line in body.splitlines() if not line.lstrip().startswith("#")]
        assert len(field_lines) == len(item.fields.named)
        assert sum(line.endswith(",") for line in field_lines) == (
            item.fields.named.separator_count()
        )


class TestSerialization:
    """Formatting a decoded tree matches formatting the original."""

    @given(files)
    @settings(max_examples=100)
    def test_json_round_trip_renders_identically(self, tree: File) -> None:
        assert fmt_json(to_json(tree)) == fmt_file(tree)

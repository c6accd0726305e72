"""Attribute classification.

Splits attributes into inner (``#![...]``, applies to the enclosing scope)
and outer (``#[...]``, applies to the following item), and recognizes the
``doc = "..."`` attributes that doc comments parse to.
"""

from __future__ import annotations

from collections.abc import Iterable

from minifmt.nodes import Attribute, AttrStyle, LitStr, MetaList, MetaNameValue, MetaWord

DOC_ATTRIBUTE = "doc"


def is_inner(attr: Attribute) -> bool:
    return attr.style is AttrStyle.INNER


def is_doc(attr: Attribute) -> bool:
    """Return True if the attribute is named ``doc``, whatever its form."""
    match attr.meta:
        case MetaWord(ident=ident) | MetaList(ident=ident) | MetaNameValue(ident=ident):
            return ident == DOC_ATTRIBUTE
    return False


def doc_text(attr: Attribute) -> str | None:
    """Return the comment text of a ``doc = "..."`` attribute, or None for any other form."""
    match attr.meta:
        case MetaNameValue(lit=LitStr(value=value)):
            return value
    return None


def inner_attributes(attrs: Iterable[Attribute]) -> list[Attribute]:
    return [attr for attr in attrs if is_inner(attr)]


def outer_attributes(attrs: Iterable[Attribute]) -> list[Attribute]:
    return [attr for attr in attrs if not is_inner(attr)]

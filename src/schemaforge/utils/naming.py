"""
Identifier case conversion shared by parsers and generators
"""
from __future__ import annotations

import re

_WORD_SEPARATORS = re.compile(r"[_\s-]+")


def to_pascal_case(value: str) -> str:
    """order_items -> OrderItems (each word's tail is lower-cased)"""
    return "".join(
        word[:1].upper() + word[1:].lower()
        for word in _WORD_SEPARATORS.split(value)
    )


def to_camel_case(value: str) -> str:
    """customer_id -> customerId"""
    pascal = to_pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


def lower_first(value: str) -> str:
    return value[:1].lower() + value[1:]

"""avsize core: per-type size rules and the recursive item sum.

    STRING      UTF-8 byte length
    BINARY      raw byte length
    BOOLEAN     1
    NULL        1
    NUMBER      ceil(len(significant text) / 2) + 1 (positive) or + 2
    SS/NS/BS    sum of the element rule, no framing
    LIST        sum(element tag bytes + element size) + 3
    MAP         sum(name bytes + value size + value tag bytes) + 3

value_size() is the single recursive entry point; lists and maps call
back into it for every element.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable

from ._bytes import raw_byte_length, utf8_byte_length
from ._constants import (
    BOOLEAN_SIZE,
    LIST_OVERHEAD,
    MAP_OVERHEAD,
    MAX_DEPTH,
    NULL_SIZE,
    NUMBER_NON_POSITIVE_OVERHEAD,
    NUMBER_POSITIVE_OVERHEAD,
)
from ._errors import DepthLimitError, MissingInputError, MissingTypeError
from ._resolve import ResolvedType, infer_type, is_number, resolve_structure


# ── Numbers ──────────────────────────────────────────────────
# Numbers are stored as packed decimal digit pairs.  Equivalent
# renderings ("5", "5.0", "5.000") must cost the same, so the text is
# canonicalized before counting.  The round trip through float loses
# digits past ~17 significant places; that is an accepted approximation.
# Values past the float range skip the round trip and keep their digits.

def _as_decimal(value: Any) -> Decimal:
    try:
        parsed = float(value)
    except (OverflowError, ValueError):
        parsed = math.inf
    if math.isfinite(parsed):
        return Decimal(repr(parsed))
    return Decimal(value.strip() if isinstance(value, str) else value)


def _digits_text(number: Decimal) -> str:
    # Not normalize(): that rounds to the context precision.
    sign, digits, exponent = number.as_tuple()
    kept = list(digits)
    while len(kept) > 1 and kept[-1] == 0:
        kept.pop()
        exponent += 1
    if exponent >= 0:
        return ("-" if sign else "") + "".join(str(d) for d in kept)
    return format(Decimal((sign, tuple(kept), exponent)), "f")


def significant_text(value: Any) -> str:
    """Render a numeric value as canonical text with only significant digits.

    No exponent, no trailing fractional zeros, and no trailing zeros on an
    integral value (5559400 → "55594").  Zero renders as "0".
    """
    if not is_number(value):
        raise MissingTypeError()
    number = _as_decimal(value)
    if number == 0:
        return "0"
    return _digits_text(number)


def number_size(value: Any) -> int:
    text = significant_text(value)
    overhead = (NUMBER_POSITIVE_OVERHEAD if _as_decimal(value) > 0
                else NUMBER_NON_POSITIVE_OVERHEAD)
    return math.ceil(len(text) / 2) + overhead


# ── Other scalars ────────────────────────────────────────────

def string_size(value: Any) -> int:
    return utf8_byte_length(value)


def binary_size(value: Any) -> int:
    # Text in a binary slot counts as its UTF-8 bytes, the same as {"B": "text"}
    # resolving to STRING.
    if isinstance(value, str):
        return utf8_byte_length(value)
    return raw_byte_length(value)


def set_size(values: Iterable[Any], element_size: Callable[[Any], int]) -> int:
    """Sets are charged for their elements only."""
    return sum(element_size(v) for v in values)


# ── Tag overhead ─────────────────────────────────────────────
# Once a tagged value is unwrapped for recursive sizing, its tag text is no
# longer visible to the recursive call, yet the tag still occupies storage.
# Map entries add it back here.  Top-level attributes do not.

def tag_overhead(value: Any) -> int:
    """Byte length of `value`'s own type tag, or 0 for a bare value."""
    inner_key, _ = resolve_structure(value)
    if inner_key is None:
        return 0
    return utf8_byte_length(inner_key)


# ── Containers ───────────────────────────────────────────────

def _check_depth(depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise DepthLimitError()


def list_size(values: Iterable[Any], depth: int, max_depth: int) -> int:
    _check_depth(depth, max_depth)
    total = 0
    for element in values:
        # Element wrappers are still visible here, so the tag is charged
        # alongside the element rather than through tag_overhead().
        total += tag_overhead(element)
        total += _value_size(element, depth, max_depth)
    return total + LIST_OVERHEAD


def map_size(entries: Mapping, depth: int, max_depth: int) -> int:
    _check_depth(depth, max_depth)
    total = 0
    for name, value in entries.items():
        total += utf8_byte_length(name)
        total += _value_size(value, depth, max_depth)
        total += tag_overhead(value)
    return total + MAP_OVERHEAD


# ── Dispatch ─────────────────────────────────────────────────

_SCALAR_SIZES: Dict[ResolvedType, Callable[[Any], int]] = {
    ResolvedType.STRING: string_size,
    ResolvedType.NUMBER: number_size,
    ResolvedType.BINARY: binary_size,
    ResolvedType.BOOLEAN: lambda _v: BOOLEAN_SIZE,
    ResolvedType.NULL: lambda _v: NULL_SIZE,
}

_SET_ELEMENT_SIZES: Dict[ResolvedType, Callable[[Any], int]] = {
    ResolvedType.STRING_SET: string_size,
    ResolvedType.NUMBER_SET: number_size,
    ResolvedType.BINARY_SET: binary_size,
}


def _value_size(value: Any, depth: int, max_depth: int) -> int:
    """Resolve one attribute value and size it.

    `depth` is the container depth of the enclosing value.  Entering a
    list or map checks depth+1 against max_depth; scalars and sets don't
    nest and never increment it.
    """
    inner_key, inner = resolve_structure(value)
    kind = infer_type(inner, inner_key)

    if kind in _SCALAR_SIZES:
        return _SCALAR_SIZES[kind](inner)
    if kind in _SET_ELEMENT_SIZES:
        return set_size(inner, _SET_ELEMENT_SIZES[kind])
    if kind is ResolvedType.LIST:
        return list_size(inner, depth + 1, max_depth)
    if kind is ResolvedType.MAP:
        return map_size(inner, depth + 1, max_depth)

    # Unreachable while every ResolvedType member has a rule above.
    raise MissingTypeError()


def value_size(value: Any, *, max_depth: int = MAX_DEPTH) -> int:
    """Size of a single attribute value, tagged or bare, without its name."""
    return _value_size(value, 0, max_depth)


# ── Items ────────────────────────────────────────────────────

def attribute_sizes(item: Any = None, *, max_depth: int = MAX_DEPTH) -> Dict[str, int]:
    """Per-attribute sizes: name bytes plus value size for each top-level attribute."""
    if item is None:
        raise MissingInputError()
    if not isinstance(item, Mapping):
        raise MissingInputError("Item must be a mapping!")
    return {
        name: utf8_byte_length(name) + _value_size(value, 0, max_depth)
        for name, value in item.items()
    }


def size_of(item: Any = None, *, max_depth: int = MAX_DEPTH) -> int:
    """Approximate stored size of an item, in bytes.

    The item maps attribute names to values in either the tagged shape
    ({"S": "x"}) or the bare shape ("x").  An empty item sizes to 0.
    Raises MissingInputError for a missing item and MissingTypeError if any
    value, at any depth, matches none of the ten attribute types.
    """
    return sum(attribute_sizes(item, max_depth=max_depth).values())

"""avsize type resolution: tagged-vs-bare detection and type inference.

An attribute value arrives in one of two shapes:

    tagged  {"S": "Hello"}, {"NS": ["1", "2"]}, {"M": {...}}
    bare    "Hello", 42, Decimal("1.5"), b"\\x00", [...], {...}

Both shapes may be mixed at any depth.  Resolution happens in two steps:
resolve_structure() peels off a type wrapper if there is one, and
infer_type() maps the (inner key, payload) pair to exactly one of the ten
ResolvedType members.  There is no default type; anything that falls
through every rule is a MissingTypeError.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple

from ._constants import (
    TAG_BINARY,
    TAG_BINARY_SET,
    TAG_BOOLEAN,
    TAG_LIST,
    TAG_MAP,
    TAG_NULL,
    TAG_NUMBER,
    TAG_NUMBER_SET,
    TAG_STRING,
    TAG_STRING_SET,
    TYPE_TAGS,
)
from ._errors import MissingTypeError


class ResolvedType(enum.Enum):
    """The ten attribute types.  `.tag` is the wrapper key for the type."""

    STRING = TAG_STRING
    NUMBER = TAG_NUMBER
    BINARY = TAG_BINARY
    BOOLEAN = TAG_BOOLEAN
    NULL = TAG_NULL
    MAP = TAG_MAP
    LIST = TAG_LIST
    STRING_SET = TAG_STRING_SET
    NUMBER_SET = TAG_NUMBER_SET
    BINARY_SET = TAG_BINARY_SET

    @property
    def tag(self) -> str:
        return self.value


_SET_TYPES = {
    TAG_STRING_SET: ResolvedType.STRING_SET,
    TAG_NUMBER_SET: ResolvedType.NUMBER_SET,
    TAG_BINARY_SET: ResolvedType.BINARY_SET,
}

_BINARY_TYPES = (bytes, bytearray, memoryview)


# ── Structure resolution ─────────────────────────────────────
# A single-key mapping whose key happens to be a tag name is always read as
# a wrapper.  Without a schema there is no way to tell {"S": "x"} the
# string from {"S": "x"} the one-attribute map, and guessing would make
# sizes depend on payload content.

def is_tagged(value: Any) -> bool:
    """True iff `value` is a mapping with exactly one key, and that key is a tag."""
    if not isinstance(value, Mapping) or len(value) != 1:
        return False
    key = next(iter(value))
    return isinstance(key, str) and key in TYPE_TAGS


def resolve_structure(value: Any) -> Tuple[Optional[str], Any]:
    """Split a value into (inner key, inner value).

    Tagged values return their tag and payload.  Bare values return
    (None, value) unchanged.
    """
    if is_tagged(value):
        key = next(iter(value))
        return key, value[key]
    return None, value


# ── Scalar predicates ────────────────────────────────────────

def is_number(value: Any) -> bool:
    """True if `value` parses as a finite number.

    Deliberately permissive: numeric-looking text counts, so a bare "42"
    resolves the same way as {"N": "42"}.  bool is excluded even though
    it subclasses int.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, str):
        # float() and Decimal() both take "1_000" and non-ASCII digits;
        # neither is numeric text in this format.
        if "_" in value or not value.isascii():
            return False
        try:
            return Decimal(value).is_finite()
        except InvalidOperation:
            return False
    return False


def _is_null_payload(value: Any) -> bool:
    return value is None or isinstance(value, bool) or value == ""


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


def _infer_set_type(values: Any) -> ResolvedType:
    """Infer SS, NS or BS for an untagged Python set from its elements."""
    if values and all(isinstance(v, str) for v in values):
        return ResolvedType.STRING_SET
    if values and all(is_number(v) and not isinstance(v, str) for v in values):
        return ResolvedType.NUMBER_SET
    if values and all(isinstance(v, _BINARY_TYPES) for v in values):
        return ResolvedType.BINARY_SET
    raise MissingTypeError()


# ── Type inference ────────────────────────────────────────────
# Rule order is load-bearing.  In particular the numeric check runs before
# the string check, so numeric text resolves to NUMBER whether or not it
# is wrapped in {"N": ...}.

def infer_type(value: Any, inner_key: Optional[str] = None) -> ResolvedType:
    """Resolve an inner value (and its inner key, if tagged) to a type."""
    # 1. NULL
    if inner_key == TAG_NULL and _is_null_payload(value):
        return ResolvedType.NULL
    if inner_key is None and value is None:
        return ResolvedType.NULL

    # 2. sets and lists
    if _is_sequence(value):
        if inner_key in _SET_TYPES:
            return _SET_TYPES[inner_key]
        if inner_key == TAG_LIST or inner_key is None:
            if inner_key is None and isinstance(value, (set, frozenset)):
                return _infer_set_type(value)
            return ResolvedType.LIST
        raise MissingTypeError()

    # 3. maps
    if inner_key == TAG_MAP:
        if isinstance(value, Mapping):
            return ResolvedType.MAP
        raise MissingTypeError()
    if inner_key is None and isinstance(value, Mapping):
        # A one-key mapping reaching this point is a wrapper with an
        # unknown tag, not a map.
        if len(value) == 1:
            raise MissingTypeError()
        return ResolvedType.MAP

    # 4-7. scalars
    if is_number(value):
        return ResolvedType.NUMBER
    if isinstance(value, str):
        return ResolvedType.STRING
    if isinstance(value, _BINARY_TYPES):
        return ResolvedType.BINARY
    if isinstance(value, bool):
        return ResolvedType.BOOLEAN

    raise MissingTypeError()


def resolve_type(value: Any) -> ResolvedType:
    """Resolve an attribute value, tagged or bare, to its type."""
    inner_key, inner = resolve_structure(value)
    return infer_type(inner, inner_key)


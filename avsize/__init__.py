"""avsize: approximate stored byte size of attribute-value items.

Items map attribute names to values written either in the tagged wire
shape or as bare native values, mixed freely:

Quick start:
    >>> from avsize import size_of
    >>> size_of({"key": {"S": "Hello World"}})
    14
    >>> size_of({"key": "Hello World"})
    14
    >>> size_of({"key": {"M": {"firstName": {"S": "Harry"}}}})
    21

The ten type tags are S, N, B, BOOL, NULL, M, L, SS, NS and BS.  A
mapping with exactly one key that is one of these tags is always read as
a type wrapper.
"""

from __future__ import annotations

from typing import Any, Union

from ._bytes import raw_byte_length, utf8_byte_length
from ._constants import MAX_DEPTH, TYPE_TAGS
from ._core import (
    attribute_sizes,
    number_size,
    significant_text,
    size_of,
    tag_overhead,
    value_size,
)
from ._errors import (
    ERR_JSON,
    ERR_LIMIT_DEPTH,
    ERR_MISSING_INPUT,
    ERR_MISSING_TYPE,
    DepthLimitError,
    MissingInputError,
    MissingTypeError,
    SizerError,
)
from ._json_adapter import parse_json_item
from ._resolve import ResolvedType, is_tagged, resolve_structure, resolve_type

__version__ = "1.0.0"

__all__ = [
    # Sizing
    "size_of",
    "size_of_json",
    "attribute_sizes",
    "value_size",
    "number_size",
    "significant_text",
    "tag_overhead",
    # Resolution
    "ResolvedType",
    "resolve_type",
    "resolve_structure",
    "is_tagged",
    "parse_json_item",
    # Byte-length primitives
    "utf8_byte_length",
    "raw_byte_length",
    # Constants
    "TYPE_TAGS",
    "MAX_DEPTH",
    # Exceptions
    "SizerError",
    "MissingInputError",
    "MissingTypeError",
    "DepthLimitError",
    # Error codes
    "ERR_MISSING_INPUT",
    "ERR_MISSING_TYPE",
    "ERR_LIMIT_DEPTH",
    "ERR_JSON",
]


# ── JSON API ──────────────────────────────────────────────────

def size_of_json(raw: Union[bytes, str], *, max_depth: int = MAX_DEPTH) -> int:
    """Size an item given as JSON text (B/BS payloads base64-encoded)."""
    item: Any = parse_json_item(raw)
    return size_of(item, max_depth=max_depth)

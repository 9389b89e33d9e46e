"""avsize constants: attribute type tags, fixed overheads, and limits.

Size rules reference the provider's documented item size calculation for
the ten-tag attribute-value format.
"""

from __future__ import annotations

from typing import FrozenSet

# ── Type tags ─────────────────────────────────────────────────
# These are the exact wrapper keys of the low-level wire shape,
# e.g. {"S": "Hello"} or {"NS": ["1", "2"]}.
TAG_STRING: str = "S"
TAG_NUMBER: str = "N"
TAG_BINARY: str = "B"
TAG_BOOLEAN: str = "BOOL"
TAG_NULL: str = "NULL"
TAG_MAP: str = "M"
TAG_LIST: str = "L"
TAG_STRING_SET: str = "SS"
TAG_NUMBER_SET: str = "NS"
TAG_BINARY_SET: str = "BS"

TYPE_TAGS: FrozenSet[str] = frozenset({
    TAG_STRING,
    TAG_NUMBER,
    TAG_BINARY,
    TAG_BOOLEAN,
    TAG_NULL,
    TAG_MAP,
    TAG_LIST,
    TAG_STRING_SET,
    TAG_NUMBER_SET,
    TAG_BINARY_SET,
})

# ── Fixed costs ───────────────────────────────────────────────
# Lists and maps pay for their own framing regardless of element count.
LIST_OVERHEAD: int = 3
MAP_OVERHEAD: int = 3

BOOLEAN_SIZE: int = 1
NULL_SIZE: int = 1

# Numbers pack two significant characters per byte, plus a sign/terminator
# byte.  Zero and negative values need one more.
NUMBER_POSITIVE_OVERHEAD: int = 1
NUMBER_NON_POSITIVE_OVERHEAD: int = 2

# ── Limits ────────────────────────────────────────────────────
# The format allows at most 32 levels of nested lists and maps.
MAX_DEPTH: int = 32

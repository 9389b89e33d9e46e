"""Byte-length primitives the sizing rules are expressed in."""

from __future__ import annotations

from typing import Union

from ._errors import MissingTypeError

Buffer = Union[bytes, bytearray, memoryview]


def utf8_byte_length(text: str) -> int:
    """Return the number of bytes `text` occupies when encoded as UTF-8.

    Lone surrogates are counted as the 3 bytes they would take in a
    lenient encoder instead of failing the whole item.
    """
    if not isinstance(text, str):
        raise MissingTypeError()
    return len(text.encode("utf-8", errors="surrogatepass"))


def raw_byte_length(buffer: Buffer) -> int:
    """Return the byte count of an opaque binary payload."""
    if not isinstance(buffer, (bytes, bytearray, memoryview)):
        raise MissingTypeError()
    # memoryview.nbytes, not len(): len() counts items, not bytes,
    # for views with a multi-byte format.
    return memoryview(buffer).nbytes

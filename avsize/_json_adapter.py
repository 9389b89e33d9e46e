"""avsize JSON adapter.

Converts raw JSON text into an item the sizer accepts.

Type mapping:
    JSON object  → mapping (tagged wrapper or bare map)
    JSON array   → list
    JSON string  → str, except B payloads and BS elements (base64 → bytes)
    JSON number  → int, or Decimal when the token has '.' or an exponent
    JSON boolean → bool
    JSON null    → None (sizes as NULL)

Binary data cannot appear in JSON directly.  The provider's JSON wire
format carries it base64-encoded under B and BS, so those payloads are
decoded here before sizing; leaving them as text would count the base64
characters, which are a third longer than the bytes they stand for.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict, Union

from ._constants import TAG_BINARY, TAG_BINARY_SET, TAG_LIST, TAG_MAP
from ._errors import ERR_JSON, SizerError
from ._resolve import resolve_structure


# ── Number interception ───────────────────────────────────────
# json.loads() would turn "412.481278720021" into a float and "1.50" into
# 1.5 before we see it.  The number rule canonicalizes anyway, but keeping
# the token as Decimal means the sizer, not the parser, decides how it is
# rendered.

def _intercept_float(s: str) -> Decimal:
    return Decimal(s)


def _reject_constant(name: str) -> Any:
    raise SizerError(ERR_JSON, "JSON constant not allowed")


def _b64decode(text: Any) -> Any:
    if not isinstance(text, str):
        return text
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        raise SizerError(ERR_JSON, "invalid base64 in binary payload")


def _convert(value: Any) -> Any:
    """Walk a parsed JSON value, decoding base64 binary payloads."""
    inner_key, inner = resolve_structure(value)

    if inner_key == TAG_BINARY:
        return {inner_key: _b64decode(inner)}
    if inner_key == TAG_BINARY_SET and isinstance(inner, list):
        return {inner_key: [_b64decode(v) for v in inner]}
    if inner_key in (TAG_LIST, None) and isinstance(inner, list):
        converted = [_convert(v) for v in inner]
        return {inner_key: converted} if inner_key else converted
    if inner_key in (TAG_MAP, None) and isinstance(inner, Mapping):
        converted_map = {k: _convert(v) for k, v in inner.items()}
        return {inner_key: converted_map} if inner_key else converted_map
    return value


def parse_json_item(raw: Union[bytes, str]) -> Dict[str, Any]:
    """Parse raw JSON text into an item.

    The document must be a JSON object.  Malformed JSON, NaN/Infinity
    constants and bad base64 all raise SizerError(ERR_JSON).
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            text = bytes(raw).decode("utf-8")
        except UnicodeDecodeError:
            raise SizerError(ERR_JSON, "invalid UTF-8 in JSON input")
    else:
        text = raw

    try:
        obj = json.loads(
            text,
            parse_float=_intercept_float,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError:
        raise SizerError(ERR_JSON, "JSON parse error")

    if not isinstance(obj, dict):
        raise SizerError(ERR_JSON, "JSON item must be an object")

    return {name: _convert(value) for name, value in obj.items()}

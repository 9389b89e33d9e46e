"""avsize error codes and exception classes.

Every failure is fatal to the current call: no partial size is ever
returned.  Messages are static and never echo attribute content, since
items routinely carry data that should not end up in logs.
"""

from __future__ import annotations

# ── Error codes ──────────────────────────────────────────────
# Grep-friendly; the CLI prints them and the conformance vectors
# compare against them.

ERR_MISSING_INPUT: str = "ERR_MISSING_INPUT"  # item absent, None, or not a mapping
ERR_MISSING_TYPE: str = "ERR_MISSING_TYPE"    # value matches none of the ten types
ERR_LIMIT_DEPTH: str = "ERR_LIMIT_DEPTH"      # nesting exceeds max_depth
ERR_JSON: str = "ERR_JSON"                    # JSON adapter input is malformed


class SizerError(Exception):
    """Base exception for item sizing errors.

    The `.code` attribute is one of the ERR_* strings above.
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or code)
        self.code = code


class MissingInputError(SizerError):
    """The item argument was absent, None, or not a mapping."""

    def __init__(self, msg: str = "Missing input!") -> None:
        super().__init__(ERR_MISSING_INPUT, msg)


class MissingTypeError(SizerError):
    """A value could not be matched to any attribute type."""

    def __init__(self, msg: str = "No matching type!") -> None:
        super().__init__(ERR_MISSING_TYPE, msg)


class DepthLimitError(SizerError):
    def __init__(self, msg: str = "Nesting exceeds maximum depth!") -> None:
        super().__init__(ERR_LIMIT_DEPTH, msg)

"""
BDL Failure Taxonomy

Every failure is terminal for the parse call that raised it. Failures are
grouped by the stage that detects them:

- MetadataError: the `// BDL-META:` header is missing or unusable
- PayloadError: the fenced payload cannot be located or decoded

Interpretation (schema dispatch, TLV framing, raw-blob summary) has no
failure modes of its own, so there is no third stage class.
"""

from __future__ import annotations


class BDLError(Exception):
    """Base class for every failure raised while parsing a BDL block."""

    code: str = "BDLError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.code, "message": self.message}


# ============================================================================
# Metadata stage
# ============================================================================

class MetadataError(BDLError):
    """The metadata header could not be located or accepted."""


class MetaNotFound(MetadataError):
    code = "MetaNotFound"

    def __init__(self) -> None:
        super().__init__("BDL-META header not found")


class MetaInvalid(MetadataError):
    code = "MetaInvalid"

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid BDL-META JSON: {detail}")
        self.detail = detail


class UnsupportedVersion(MetadataError):
    code = "UnsupportedVersion"

    def __init__(self, got: int) -> None:
        super().__init__(f"Unsupported BDL-META version: {got}")
        self.got = got


class MissingEncoding(MetadataError):
    code = "MissingEncoding"

    def __init__(self) -> None:
        super().__init__("BDL-META missing encoding")


# ============================================================================
# Decode stage
# ============================================================================

class PayloadError(BDLError):
    """The fenced payload could not be located or turned into bytes."""


class FenceNotFound(PayloadError):
    code = "FenceNotFound"

    def __init__(self) -> None:
        super().__init__("Code fence with binary body not found")


class FenceLanguageMismatch(PayloadError):
    code = "FenceLanguageMismatch"

    def __init__(self, expected: str, got: str) -> None:
        super().__init__(f"Expected {expected} fence, got {got}")
        self.expected = expected
        self.got = got


class OddLengthHex(PayloadError):
    code = "OddLengthHex"

    def __init__(self, digits: int) -> None:
        super().__init__(f"Odd-length hex body ({digits} digits)")
        self.digits = digits


class HexDecodeError(PayloadError):
    code = "HexDecodeError"

    def __init__(self, detail: str) -> None:
        super().__init__(f"Hex decode error: {detail}")
        self.detail = detail


class Base64DecodeError(PayloadError):
    code = "Base64DecodeError"

    def __init__(self, detail: str) -> None:
        super().__init__(f"Base64 decode error: {detail}")
        self.detail = detail


class UnsupportedEncoding(PayloadError):
    code = "UnsupportedEncoding"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported encoding: {name}")
        self.name = name

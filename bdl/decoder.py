"""
BDL Payload Decoder

Locates the fenced payload region of a BDL block and turns its text into
raw bytes according to the encoding declared in the metadata header.

    ```hex
    00000000  aa 02 11 22                                   |..."|
    ```

Only the first fence in the block is used. The fence's language tag must
agree with the declared encoding; the comparison is case-insensitive.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from enum import Enum

from bdl.errors import (
    Base64DecodeError,
    FenceLanguageMismatch,
    FenceNotFound,
    HexDecodeError,
    OddLengthHex,
    UnsupportedEncoding,
)
from bdl.hexdump import detect_style, normalize_hex_dump

logger = logging.getLogger(__name__)

FENCE = re.compile(r"```([A-Za-z0-9]+)\r?\n([\s\S]*?)```")
WHITESPACE = re.compile(r"\s+")


class Encoding(Enum):
    HEX = "hex"
    BASE64 = "base64"

    @classmethod
    def from_name(cls, name: str) -> Encoding:
        for member in cls:
            if member.value == name:
                return member
        raise UnsupportedEncoding(name)


@dataclass(frozen=True)
class Fence:
    """The first fenced region of a block."""
    language: str  # lowercased
    body: str
    start: int
    end: int


def find_fence(text: str) -> Fence:
    match = FENCE.search(text)
    if match is None:
        raise FenceNotFound()
    fence = Fence(
        language=match.group(1).lower(),
        body=match.group(2),
        start=match.start(),
        end=match.end(),
    )
    logger.debug(
        "Payload fence '%s' at [%d:%d] (%d body chars)",
        fence.language, fence.start, fence.end, len(fence.body),
    )
    return fence


def _require_language(fence: Fence, encoding: Encoding) -> None:
    if fence.language != encoding.value:
        raise FenceLanguageMismatch(expected=encoding.value, got=fence.language)


def decode_hex(body: str) -> bytes:
    """Decode a hex body, tolerating dump-style offset and preview columns."""
    logger.debug("Hex body style: %s", detect_style(body).value)
    digits = normalize_hex_dump(body)
    if len(digits) % 2 != 0:
        raise OddLengthHex(len(digits))
    try:
        return bytes.fromhex(digits)
    except ValueError as exc:
        raise HexDecodeError(str(exc)) from exc


def decode_base64(body: str) -> bytes:
    """Decode a standard (padded) base64 body; whitespace is ignored."""
    compact = WHITESPACE.sub("", body)
    try:
        data = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise Base64DecodeError(str(exc)) from exc
    # Stray padding and nonzero trailing bits survive b64decode
    if base64.b64encode(data).decode("ascii") != compact:
        raise Base64DecodeError("Non-canonical padding or trailing bits")
    return data


_DECODERS = {
    Encoding.HEX: decode_hex,
    Encoding.BASE64: decode_base64,
}


def decode_payload(text: str, encoding: str) -> bytes:
    """Extract the payload bytes of a BDL block.

    Args:
        text: The full block text
        encoding: The encoding declared by the metadata header

    Returns:
        The decoded bytes (possibly empty)
    """
    fence = find_fence(text)
    kind = Encoding.from_name(encoding)
    _require_language(fence, kind)
    data = _DECODERS[kind](fence.body)
    logger.debug("Decoded %d bytes from %s payload", len(data), kind.value)
    return data

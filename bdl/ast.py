"""
BDL Interpreted Structures

The result of interpreting a decoded payload is exactly one of:

- TlvSequenceAst: the payload framed as flat type-length-value records
- RawBlobAst: summary statistics for payloads without a structured schema

Both carry a `kind` tag so serialized results stay self-describing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class TlvFrame:
    """One complete type-length-value record.

    `offset` is the position of the type byte within the payload; the value
    occupies bytes[offset + 2 : offset + 2 + length].
    """
    index: int
    offset: int
    type: int
    length: int
    value_hex: str

    @property
    def size(self) -> int:
        """Bytes occupied by the frame, header included."""
        return 2 + self.length

    @property
    def end(self) -> int:
        return self.offset + self.size

    @property
    def value(self) -> bytes:
        return bytes.fromhex(self.value_hex)

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "offset": self.offset,
            "type": self.type,
            "length": self.length,
            "valueHex": self.value_hex,
        }

    def __repr__(self) -> str:
        return (
            f"<TlvFrame #{self.index} type={self.type:#04x} "
            f"[{self.offset:#x}:{self.end:#x}] len={self.length}>"
        )


@dataclass(frozen=True)
class TlvSequenceAst:
    kind: ClassVar[str] = "tlv-sequence"

    frames: tuple[TlvFrame, ...]
    remainder_bytes: int

    @property
    def claimed_bytes(self) -> int:
        return sum(f.size for f in self.frames)

    @property
    def total_bytes(self) -> int:
        return self.claimed_bytes + self.remainder_bytes

    @property
    def coverage(self) -> float:
        """Fraction of the payload accounted for by complete frames."""
        total = self.total_bytes
        return self.claimed_bytes / total if total else 0.0

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "frames": [f.to_dict() for f in self.frames],
            "remainderBytes": self.remainder_bytes,
        }

    def __repr__(self) -> str:
        return (
            f"<TlvSequence: {len(self.frames)} frame(s), "
            f"{self.remainder_bytes} remainder byte(s)>"
        )


@dataclass(frozen=True)
class RawBlobAst:
    kind: ClassVar[str] = "raw-blob"

    length: int
    sha256: str
    entropy_bits_per_byte: float

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "length": self.length,
            "sha256": self.sha256,
            "entropyBitsPerByte": self.entropy_bits_per_byte,
        }

    def __repr__(self) -> str:
        return (
            f"<RawBlob: {self.length} bytes sha256={self.sha256[:12]}… "
            f"H={self.entropy_bits_per_byte:.3f}>"
        )


@dataclass(frozen=True)
class StructureHints:
    """TLV-shaped framing found in a payload regardless of its declared schema."""
    kind: ClassVar[str] = "structure-hints"

    frames: tuple[TlvFrame, ...]

    @property
    def tlv_frames_detected(self) -> bool:
        return bool(self.frames)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "tlvFramesDetected": self.tlv_frames_detected,
            "frames": [
                {"kind": "tlv-frame", "offset": f.offset, "type": f.type, "length": f.length}
                for f in self.frames
            ],
        }


InterpretedStructure = Union[TlvSequenceAst, RawBlobAst]

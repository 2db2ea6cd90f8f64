"""
BDL Semantic Annotator

Attaches low-cost semantic guesses to a parsed block:

- whole-payload entropy class ($)
- known magic constants at the start of the payload ($.magic)
- plausible Unix timestamps among 8-byte TLV values ($.frames[i].value)

annotate_block also reports TLV-shaped framing found in the payload whatever
its declared schema (StructureHints).

Annotations are hints with a confidence, never assertions.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from bdl.ast import InterpretedStructure, StructureHints, TlvSequenceAst
from bdl.contexts.raw import shannon_entropy
from bdl.contexts.tlv import infer_structure
from bdl.core import ParsedBlock, parse_block_with_payload
from bdl.metadata import Metadata

HIGH_ENTROPY_THRESHOLD = 7.0

MAGIC_CONSTANTS: tuple[tuple[str, str], ...] = (
    ("ipv4-header", "4500"),
    ("cafebabe", "cafebabe"),
)

# 2000-01-01T00:00:00Z
TIMESTAMP_FLOOR = 946684800
TIMESTAMP_HORIZON = 10 * 365 * 24 * 3600


@dataclass(frozen=True)
class SemanticField:
    path: str
    role: str
    confidence: float

    def to_dict(self) -> dict:
        return {"path": self.path, "role": self.role, "confidence": self.confidence}


@dataclass(frozen=True)
class AnnotatedBlock:
    meta: Metadata
    ast: InterpretedStructure
    semantic: tuple[SemanticField, ...]
    structure: StructureHints

    def to_dict(self) -> dict:
        return {
            "meta": self.meta.to_dict(),
            "ast": self.ast.to_dict(),
            "structure": self.structure.to_dict(),
            "semantic": [f.to_dict() for f in self.semantic],
        }


def _entropy_field(data: bytes) -> SemanticField:
    role = "high-entropy" if shannon_entropy(data) > HIGH_ENTROPY_THRESHOLD else "low-entropy"
    return SemanticField("$", role, 0.7)


def _magic_fields(data: bytes) -> list[SemanticField]:
    prefix = data[:4].hex()
    return [
        SemanticField("$.magic", name, 0.95)
        for name, value_hex in MAGIC_CONSTANTS
        if prefix.startswith(value_hex)
    ]


def _timestamp_fields(ast: TlvSequenceAst, now: float) -> list[SemanticField]:
    ceiling = now + TIMESTAMP_HORIZON
    fields = []
    for frame in ast.frames:
        if frame.length != 8:
            continue
        value = int.from_bytes(frame.value, "big")
        if TIMESTAMP_FLOOR < value < ceiling:
            fields.append(SemanticField(f"$.frames[{frame.index}].value", "timestamp", 0.9))
    return fields


def annotate(parsed: ParsedBlock, data: bytes, now: Optional[float] = None) -> list[SemanticField]:
    """Compute semantic hints for a parsed block and its decoded payload.

    Args:
        parsed: Result of parsing the block
        data: The decoded payload bytes the structure was built from
        now: Reference Unix time for timestamp plausibility (default: current time)
    """
    if now is None:
        now = time.time()
    fields = [_entropy_field(data)]
    fields.extend(_magic_fields(data))
    if isinstance(parsed.structure, TlvSequenceAst):
        fields.extend(_timestamp_fields(parsed.structure, now))
    return fields


def annotate_block(text: str, now: Optional[float] = None) -> AnnotatedBlock:
    parsed, data = parse_block_with_payload(text)
    return AnnotatedBlock(
        meta=parsed.metadata,
        ast=parsed.structure,
        semantic=tuple(annotate(parsed, data, now=now)),
        structure=infer_structure(data),
    )

"""
BDL Core: block parsing entry point

Runs the three stages of a parse strictly in order and stops at the first
failure, which propagates to the caller unchanged:

    metadata  →  decode  →  interpret
    (MetadataError)  (PayloadError)  (never fails)

Usage:
    parsed = parse_block(markdown_text)
    print(parsed.metadata.schema_name)
    print(parsed.structure)
    print(canonical_json(parsed.to_dict()))

Nothing here keeps state between calls; the interpreter table is built once
from stateless interpreter instances.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from bdl.ast import InterpretedStructure
from bdl.context import Interpreter, Schema
from bdl.contexts import RawBlobInterpreter, TlvInterpreter
from bdl.decoder import decode_payload
from bdl.metadata import Metadata, extract_metadata

logger = logging.getLogger(__name__)

INTERPRETERS: MappingProxyType[Schema, Interpreter] = MappingProxyType({
    Schema.TLV: TlvInterpreter(),
    Schema.RAW_BLOB: RawBlobInterpreter(),
})


def get_interpreter(schema: Schema) -> Interpreter:
    return INTERPRETERS[schema]


def interpret(meta: Metadata, data: bytes) -> InterpretedStructure:
    """Interpret decoded bytes according to the declared schema name."""
    schema = Schema.from_name(meta.schema_name)
    logger.debug("Schema '%s' resolved to %s", meta.schema_name, schema.name)
    return get_interpreter(schema).interpret(data)


@dataclass(frozen=True)
class ParsedBlock:
    """A successfully parsed BDL block."""
    metadata: Metadata
    structure: InterpretedStructure

    def __iter__(self):
        yield self.metadata
        yield self.structure

    def to_dict(self) -> dict:
        return {"meta": self.metadata.to_dict(), "ast": self.structure.to_dict()}


def parse_block_with_payload(text: str) -> tuple[ParsedBlock, bytes]:
    """Like parse_block, but also hands back the decoded payload bytes."""
    meta = extract_metadata(text)
    data = decode_payload(text, meta.encoding)
    structure = interpret(meta, data)
    return ParsedBlock(metadata=meta, structure=structure), data


def parse_block(text: str) -> ParsedBlock:
    """Parse a BDL block into its metadata and interpreted structure.

    Raises:
        MetadataError: header missing, malformed, or unsupported
        PayloadError: fence missing, mismatched, or undecodable
    """
    parsed, _ = parse_block_with_payload(text)
    return parsed


def canonical_json(value: Any, indent: int | None = 2) -> str:
    """Render JSON with recursively sorted object keys."""
    return json.dumps(value, indent=indent, sort_keys=True, ensure_ascii=False)

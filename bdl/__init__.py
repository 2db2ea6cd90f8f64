"""
BDL - Binary Description Language
Parses self-describing binary payloads embedded in documentation blocks.

A block carries a `// BDL-META:` JSON header and one fenced payload region
(hex or base64). Parsing decodes the payload and interprets it per the
declared schema: TLV framing for "ExampleTLV", hash + entropy otherwise.
"""

__version__ = "0.1.0"

from bdl.ast import RawBlobAst, TlvFrame, TlvSequenceAst, StructureHints, InterpretedStructure
from bdl.context import Interpreter, Schema
from bdl.core import ParsedBlock, parse_block, interpret, canonical_json
from bdl.decoder import Encoding, decode_payload
from bdl.metadata import Metadata, extract_metadata
from bdl.annotator import AnnotatedBlock, SemanticField, annotate, annotate_block
from bdl.errors import (
    BDLError,
    MetadataError,
    MetaNotFound,
    MetaInvalid,
    UnsupportedVersion,
    MissingEncoding,
    PayloadError,
    FenceNotFound,
    FenceLanguageMismatch,
    OddLengthHex,
    HexDecodeError,
    Base64DecodeError,
    UnsupportedEncoding,
)

__all__ = [
    "RawBlobAst",
    "TlvFrame",
    "TlvSequenceAst",
    "StructureHints",
    "InterpretedStructure",
    "Interpreter",
    "Schema",
    "ParsedBlock",
    "parse_block",
    "interpret",
    "canonical_json",
    "Encoding",
    "decode_payload",
    "Metadata",
    "extract_metadata",
    "AnnotatedBlock",
    "SemanticField",
    "annotate",
    "annotate_block",
    "BDLError",
    "MetadataError",
    "MetaNotFound",
    "MetaInvalid",
    "UnsupportedVersion",
    "MissingEncoding",
    "PayloadError",
    "FenceNotFound",
    "FenceLanguageMismatch",
    "OddLengthHex",
    "HexDecodeError",
    "Base64DecodeError",
    "UnsupportedEncoding",
]

"""
BDL Built-in Contexts

One interpreter per Schema member.
"""

from bdl.contexts.tlv import TlvInterpreter, frame_tlv, infer_structure
from bdl.contexts.raw import RawBlobInterpreter, sha256_hex, shannon_entropy

__all__ = [
    "TlvInterpreter",
    "RawBlobInterpreter",
    "frame_tlv",
    "infer_structure",
    "sha256_hex",
    "shannon_entropy",
]

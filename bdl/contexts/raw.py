"""
BDL Raw-Blob Context

The fallback interpretation for payloads without a structured schema:
a SHA-256 content hash and a Shannon-entropy estimate.

Entropy is measured in bits per byte over the byte-value histogram, so it
lies in [0, 8]: 0 for a buffer of one repeated value, approaching 8 for
uniformly random bytes. High entropy usually means compressed or encrypted
content.
"""

from __future__ import annotations

import hashlib
import math
from collections import Counter

from bdl.ast import RawBlobAst
from bdl.context import Interpreter, Schema


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def shannon_entropy(data: bytes) -> float:
    """Shannon entropy of the byte-value distribution, in bits per byte."""
    if not data:
        return 0.0
    total = len(data)
    entropy = 0.0
    for count in Counter(data).values():
        p = count / total
        entropy -= p * math.log2(p)
    # A single repeated value gives -1.0 * log2(1.0) == -0.0
    return max(0.0, min(entropy, 8.0))


class RawBlobInterpreter(Interpreter):

    @property
    def schema(self) -> Schema:
        return Schema.RAW_BLOB

    def interpret(self, data: bytes) -> RawBlobAst:
        return RawBlobAst(
            length=len(data),
            sha256=sha256_hex(data),
            entropy_bits_per_byte=shannon_entropy(data),
        )

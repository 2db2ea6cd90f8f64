"""
BDL Interpretation Contexts

An interpreter maps decoded payload bytes to an InterpretedStructure. The set
of interpreters is closed: the declared schema name is resolved to a Schema
member once, and each member has exactly one interpreter.

- Schema.TLV: flat type-length-value framing (schemaName "ExampleTLV")
- Schema.RAW_BLOB: hash + entropy summary, the fallback for every other name

Unknown schema names are never an error; they simply resolve to RAW_BLOB.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from bdl.ast import InterpretedStructure


class Schema(Enum):
    """Interpreter variants, keyed by the schema name that selects them."""
    TLV = "ExampleTLV"
    RAW_BLOB = "raw-blob"

    @classmethod
    def from_name(cls, schema_name: str) -> Schema:
        if schema_name == cls.TLV.value:
            return cls.TLV
        return cls.RAW_BLOB


class Interpreter(ABC):
    """Base class for payload interpreters.

    Subclasses implement:
        - schema: The Schema member they serve
        - interpret(): bytes → structure, without failure modes

    Implementations hold no per-call state, so one instance may serve any
    number of concurrent callers.
    """

    @property
    @abstractmethod
    def schema(self) -> Schema:
        ...

    @property
    def name(self) -> str:
        return self.schema.name

    @abstractmethod
    def interpret(self, data: bytes) -> InterpretedStructure:
        """Interpret a decoded payload.

        Must not raise for any byte sequence: malformed or truncated input
        degrades to a partial structure instead.
        """
        ...

    def __repr__(self) -> str:
        return f"<Interpreter:{self.name}>"

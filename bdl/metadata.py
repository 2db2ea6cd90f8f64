"""
BDL Metadata Header

A BDL block declares how its payload is encoded and which schema describes
it on a single header line:

    // BDL-META: {"version": 1, "encoding": "hex", "schemaName": "ExampleTLV", ...}

The JSON object is validated into an immutable Metadata model. Structural
problems (bad JSON, wrong field types, missing fields) are reported as
MetaInvalid; the semantic checks on version and encoding run afterwards.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from bdl.errors import MetaInvalid, MetaNotFound, MissingEncoding, UnsupportedVersion

logger = logging.getLogger(__name__)

META_MARKER = "// BDL-META:"
SUPPORTED_VERSION = 1


class Metadata(BaseModel):
    """The declared shape of a BDL payload.

    Field names follow Python conventions; the header itself uses the
    camelCase aliases (framingType, schemaName, ...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    version: StrictInt = Field(ge=0)
    encoding: StrictStr
    endianness: StrictStr
    framing_type: StrictStr = Field(alias="framingType")
    schema_name: StrictStr = Field(alias="schemaName")
    sample_length: StrictInt = Field(alias="sampleLength", ge=0)
    safety_flags: frozenset[StrictStr] = Field(alias="safetyFlags")
    tags: tuple[StrictStr, ...] = ()

    def has_flag(self, flag: str) -> bool:
        return flag in self.safety_flags

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "encoding": self.encoding,
            "endianness": self.endianness,
            "framingType": self.framing_type,
            "schemaName": self.schema_name,
            "sampleLength": self.sample_length,
            "safetyFlags": sorted(self.safety_flags),
            "tags": list(self.tags),
        }


def find_meta_line(text: str) -> str:
    """Return the JSON text following the first `// BDL-META:` marker.

    Only lines whose left-trimmed content starts with the marker count;
    a marker buried in the middle of a line is ignored.
    """
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.lstrip()
        if stripped.startswith(META_MARKER):
            logger.debug("BDL-META header found on line %d", lineno)
            return stripped[len(META_MARKER):].lstrip()
    raise MetaNotFound()


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def extract_metadata(text: str) -> Metadata:
    """Locate, parse and check the metadata header of a BDL block."""
    payload = find_meta_line(text)
    try:
        meta = Metadata.model_validate_json(payload)
    except ValidationError as exc:
        raise MetaInvalid(_describe(exc)) from exc

    if meta.version != SUPPORTED_VERSION:
        raise UnsupportedVersion(meta.version)
    if not meta.encoding:
        raise MissingEncoding()
    return meta

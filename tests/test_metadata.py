"""
BDL Metadata Tests

1. Header discovery (marker position, leading whitespace)
2. Structural validation → MetaInvalid
3. Semantic checks → UnsupportedVersion, MissingEncoding
4. Serialization
"""

import json
import os
import sys

import pytest
from pydantic import ValidationError

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bdl.errors import MetaInvalid, MetaNotFound, MissingEncoding, UnsupportedVersion
from bdl.metadata import Metadata, extract_metadata, find_meta_line

from blocks import DEFAULT_META, build_block, meta_line


# ============================================================================
# Header discovery
# ============================================================================

def test_extracts_all_fields():
    meta = extract_metadata(build_block("AA 00", tags=["demo", "tlv"]))

    assert meta.version == 1
    assert meta.encoding == "hex"
    assert meta.endianness == "big"
    assert meta.framing_type == "tlv"
    assert meta.schema_name == "ExampleTLV"
    assert meta.sample_length == 4
    assert meta.safety_flags == frozenset({"maskSecrets"})
    assert meta.tags == ("demo", "tlv")


def test_tags_default_to_empty():
    assert extract_metadata(build_block("AA 00")).tags == ()


def test_leading_whitespace_before_marker_is_allowed():
    text = "intro\n    \t" + meta_line() + "\n```hex\nAA 00\n```"
    assert extract_metadata(text).schema_name == "ExampleTLV"


def test_first_marker_line_wins():
    text = meta_line(schemaName="First") + "\n" + meta_line(schemaName="Second")
    assert extract_metadata(text).schema_name == "First"


def test_marker_in_middle_of_line_is_not_a_header():
    text = "see: " + meta_line() + "\n```hex\nAA 00\n```"
    with pytest.raises(MetaNotFound):
        extract_metadata(text)


def test_missing_header():
    with pytest.raises(MetaNotFound):
        extract_metadata("# Nothing here\n```hex\nAA 00\n```\n")


def test_json_text_is_left_trimmed():
    assert find_meta_line("// BDL-META:    {\"a\": 1}") == "{\"a\": 1}"


def test_crlf_line_endings():
    text = build_block("AA 00", newline="\r\n")
    assert extract_metadata(text).encoding == "hex"


def test_unknown_fields_are_ignored():
    meta = extract_metadata(build_block("AA 00", producer="bdl-gen"))
    assert meta.version == 1


# ============================================================================
# Structural validation
# ============================================================================

def test_malformed_json():
    with pytest.raises(MetaInvalid) as excinfo:
        extract_metadata("// BDL-META: {\"version\": 1,")
    assert excinfo.value.detail


def test_json_array_is_not_an_object():
    with pytest.raises(MetaInvalid):
        extract_metadata("// BDL-META: [1, 2, 3]")


@pytest.mark.parametrize("field", ["version", "encoding", "schemaName", "safetyFlags", "sampleLength"])
def test_missing_required_field(field):
    meta = dict(DEFAULT_META)
    del meta[field]
    with pytest.raises(MetaInvalid) as excinfo:
        extract_metadata("// BDL-META: " + json.dumps(meta))
    assert field in excinfo.value.detail


def test_version_must_be_an_integer():
    with pytest.raises(MetaInvalid):
        extract_metadata(meta_line(version="1"))


def test_negative_version():
    with pytest.raises(MetaInvalid) as excinfo:
        extract_metadata(meta_line(version=-1))
    assert "version" in excinfo.value.detail


def test_safety_flags_must_be_strings():
    with pytest.raises(MetaInvalid):
        extract_metadata(meta_line(safetyFlags=[1, 2]))


def test_negative_sample_length():
    with pytest.raises(MetaInvalid):
        extract_metadata(meta_line(sampleLength=-1))


# ============================================================================
# Semantic checks
# ============================================================================

def test_unsupported_version():
    with pytest.raises(UnsupportedVersion) as excinfo:
        extract_metadata(meta_line(version=2))
    assert excinfo.value.got == 2


def test_version_checked_before_encoding():
    with pytest.raises(UnsupportedVersion):
        extract_metadata(meta_line(version=0, encoding=""))


def test_empty_encoding():
    with pytest.raises(MissingEncoding):
        extract_metadata(meta_line(encoding=""))


def test_unknown_encoding_is_accepted_at_this_stage():
    assert extract_metadata(meta_line(encoding="base32")).encoding == "base32"


# ============================================================================
# Model behavior
# ============================================================================

def test_metadata_is_immutable():
    meta = extract_metadata(meta_line())
    with pytest.raises(ValidationError):
        meta.version = 3


def test_to_dict_uses_header_field_names():
    meta = extract_metadata(meta_line(safetyFlags=["noExec", "maskSecrets"]))
    assert meta.to_dict() == {
        "version": 1,
        "encoding": "hex",
        "endianness": "big",
        "framingType": "tlv",
        "schemaName": "ExampleTLV",
        "sampleLength": 4,
        "safetyFlags": ["maskSecrets", "noExec"],
        "tags": [],
    }


def test_construct_by_python_names():
    meta = Metadata(
        version=1,
        encoding="base64",
        endianness="little",
        framing_type="none",
        schema_name="Opaque",
        sample_length=0,
        safety_flags={"noExec"},
    )
    assert meta.has_flag("noExec")
    assert not meta.has_flag("maskSecrets")

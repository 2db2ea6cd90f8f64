"""
BDL Raw-Blob Tests: content hash and entropy bounds.
"""

import hashlib
import os
import random
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bdl.context import Schema
from bdl.contexts.raw import RawBlobInterpreter, sha256_hex, shannon_entropy


def test_empty_input_has_zero_entropy():
    assert shannon_entropy(b"") == 0.0


@pytest.mark.parametrize("value", [0x00, 0x41, 0xFF])
def test_repeated_byte_has_zero_entropy(value):
    assert shannon_entropy(bytes([value]) * 1000) == 0.0
    assert shannon_entropy(bytes([value])) == 0.0


def test_two_equally_likely_values_is_one_bit():
    assert shannon_entropy(b"\x00\x01" * 64) == pytest.approx(1.0)


def test_every_byte_value_once_is_eight_bits():
    assert shannon_entropy(bytes(range(256))) == pytest.approx(8.0)


def test_large_random_input_approaches_eight_bits():
    rng = random.Random(5)
    data = bytes(rng.randrange(256) for _ in range(1 << 16))
    assert 7.99 < shannon_entropy(data) <= 8.0


def test_entropy_bounds_on_random_inputs():
    rng = random.Random(11)
    for _ in range(200):
        alphabet = rng.randrange(1, 257)
        data = bytes(rng.randrange(alphabet) for _ in range(rng.randrange(0, 300)))
        assert 0.0 <= shannon_entropy(data) <= 8.0


def test_sha256_is_lowercase_hex():
    assert sha256_hex(b"abc") == hashlib.sha256(b"abc").hexdigest()
    assert sha256_hex(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_interpreter_summary():
    interpreter = RawBlobInterpreter()
    ast = interpreter.interpret(b"hello world")

    assert interpreter.schema is Schema.RAW_BLOB
    assert ast.kind == "raw-blob"
    assert ast.length == 11
    assert ast.sha256 == hashlib.sha256(b"hello world").hexdigest()
    assert 0.0 < ast.entropy_bits_per_byte < 8.0

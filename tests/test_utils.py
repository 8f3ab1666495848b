"""Tests for utility functions."""

import json

import pytest

from web3url.utils import json_encode_output, stringify


class TestStringify:
    """Rendering decoded values as strings."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (42, "42"),
            (True, "true"),
            (False, "false"),
            (b"\x00\xff", "0x00ff"),
            ("text", "text"),
            ([1, 2, 3], "1,2,3"),
            ((b"\x01", False), "0x01,false"),
        ],
    )
    def test_values(self, value, expected):
        assert stringify(value) == expected


class TestJsonEncodeOutput:
    """JSON encoding of return values."""

    def test_scalar_is_wrapped(self):
        assert json_encode_output(42) == '["42"]'

    def test_tuple_is_flattened_one_level(self):
        assert json.loads(json_encode_output(("a", 1, [2, 3]))) == ["a", "1", "2,3"]

    def test_bytes_scalar(self):
        assert json_encode_output(b"\xab") == '["0xab"]'

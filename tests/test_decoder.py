"""Tests for API request decoding."""

import logging
import sys

import pytest

from poolapi.decoder import DecodedRequest, decode
from poolapi.errors import EmptyRequest, InvalidJson, MissingCommand


def test_command_without_params():
    assert decode(b'{"command":"generator.stats"}') == DecodedRequest("generator.stats", None)


def test_command_with_params():
    request = decode(b'{"command":"x","params":{"id":3,"tags":["a"]}}')
    assert request.command == "x"
    assert request.params == {"id": 3, "tags": ["a"]}


def test_null_params_counts_as_absent():
    assert decode(b'{"command":"x","params":null}').params is None


def test_str_payload_is_accepted():
    assert decode('{"command":"generator.stats"}').command == "generator.stats"


@pytest.mark.parametrize("payload", [None, b"", ""])
def test_empty_payload(payload):
    with pytest.raises(EmptyRequest):
        decode(payload)


@pytest.mark.parametrize("payload", [b"not json at all", b"{", b"   ", b"\xff\xfe"])
def test_invalid_json(payload):
    with pytest.raises(InvalidJson) as exc_info:
        decode(payload)
    assert exc_info.value.as_pair() == (-1, "Invalid json")


def test_parser_detail_is_logged_not_exposed(caplog):
    with caplog.at_level(logging.WARNING, logger="poolapi.decoder"):
        with pytest.raises(InvalidJson) as exc_info:
            decode(b'{"command":\n oops}')
    assert "line 2" in caplog.text
    assert exc_info.value.as_pair() == (-1, "Invalid json")


@pytest.mark.parametrize("payload", [
    b'{}',
    b'{"params":1}',
    b'{"command":7}',
    b'{"command":null}',
    b'["command"]',
    b'"generator.stats"',
])
def test_missing_command(payload):
    with pytest.raises(MissingCommand) as exc_info:
        decode(payload)
    assert exc_info.value.as_pair() == (-2, "No command")


def test_nesting_past_recursion_limit():
    with pytest.raises(InvalidJson) as exc_info:
        decode(b"[" * 200000)
    assert exc_info.value.as_pair() == (-1, "Invalid json")


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"),
                    reason="interpreter has no integer string length limit")
def test_integer_past_digit_limit():
    payload = b'{"command":"generator.stats","params":' + b"9" * 5000 + b"}"
    with pytest.raises(InvalidJson) as exc_info:
        decode(payload)
    assert exc_info.value.as_pair() == (-1, "Invalid json")

"""Tests for the encoding codec."""

import os

import pytest

from shared.helper import HelperCodec
from shared.helper.HelperCodec import BINARY_SENTINEL


@pytest.mark.parametrize(
    "content",
    [
        b"",
        b"Hello",
        "Grüße, 世界".encode("utf-8"),
        bytes(range(256)),
        b"\x00\xff\x00\xfe" * 1000,
    ],
)
def test_decode_to_bytes_inverts_encode(content: bytes) -> None:
    assert HelperCodec.decode_to_bytes(HelperCodec.encode(content)) == content


def test_encode_is_binary_safe_for_large_content() -> None:
    content = os.urandom(20 * 1024 * 1024)
    encoded = HelperCodec.encode(content, "application/pdf")
    assert HelperCodec.decode_to_bytes(encoded) == content


def test_encode_produces_data_url_with_mime_type() -> None:
    encoded = HelperCodec.encode(b"Hello", "text/plain")
    assert encoded == "data:text/plain;base64,SGVsbG8="
    assert HelperCodec.get_mime_type(encoded) == "text/plain"


def test_decode_to_display_text_returns_utf8_text() -> None:
    assert HelperCodec.decode_to_display_text(HelperCodec.encode("Grüße".encode("utf-8"))) == "Grüße"


@pytest.mark.parametrize(
    "content",
    [
        b"%PDF-1.7\n\xe2\xe3\xcf\xd3\n",
        b"PK\x03\x04\x14\x00\x06\x00\x08\x00\x00\x00!\x00\xff",
        b"\xff\xfe\xfd",
    ],
)
def test_decode_to_display_text_degrades_to_sentinel_for_binary(content: bytes) -> None:
    assert HelperCodec.decode_to_display_text(HelperCodec.encode(content)) == BINARY_SENTINEL
    assert not HelperCodec.is_text(HelperCodec.encode(content))


@pytest.mark.parametrize("encoded", ["", "not a data url", "data:text/plain,Hello", "data:text/plain;base64,!!!"])
def test_decode_to_display_text_never_raises_on_malformed_input(encoded: str) -> None:
    assert HelperCodec.decode_to_display_text(encoded) == BINARY_SENTINEL


def test_decode_to_bytes_rejects_malformed_input() -> None:
    with pytest.raises(ValueError):
        HelperCodec.decode_to_bytes("plain text")
    with pytest.raises(ValueError):
        HelperCodec.decode_to_bytes("data:text/plain;base64,@@@")


def test_guess_mime_type_prefers_declared_type() -> None:
    assert HelperCodec.guess_mime_type("capabilities.txt", "text/markdown") == "text/markdown"
    assert HelperCodec.guess_mime_type("capabilities.txt") == "text/plain"
    assert HelperCodec.guess_mime_type("no_extension") == HelperCodec.DEFAULT_MIME_TYPE


@pytest.mark.parametrize("declared", ["text/plain;base64,AAAA", "text/plain,evil", "text/plain;BASE64"])
def test_guess_mime_type_ignores_declared_type_with_data_url_separators(declared: str) -> None:
    mime_type = HelperCodec.guess_mime_type("notes.txt", declared)

    assert mime_type == "text/plain"
    encoded = HelperCodec.encode(b"Hello", mime_type)
    assert HelperCodec.decode_to_bytes(encoded) == b"Hello"
    assert HelperCodec.decode_to_display_text(encoded) == "Hello"


def test_decode_splits_on_last_base64_marker() -> None:
    encoded = HelperCodec.encode(b"Hello", "text/plain;base64,AAAA")

    assert HelperCodec.decode_to_bytes(encoded) == b"Hello"
    assert HelperCodec.get_mime_type(encoded) == "text/plain;base64,AAAA"
    assert HelperCodec.is_text(encoded)

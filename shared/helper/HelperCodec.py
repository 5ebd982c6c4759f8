"""Encoding codec for uploaded file content.

File bytes are stored as data URLs (``data:<mime>;base64,<payload>``), the
same self-describing form a browser file reader produces. The base64 payload
makes the representation binary safe and JSON friendly.
"""

import base64
import binascii
import mimetypes

BINARY_SENTINEL = "[Binary file content - cannot display as text]"
DEFAULT_MIME_TYPE = "application/octet-stream"
_DATA_URL_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


def guess_mime_type(file_name: str, declared: str | None = None) -> str:
    """Resolve the MIME type for an upload.

    Args:
        file_name (str): The original file name.
        declared (str | None): The MIME type sent along with the upload, if any.

    Returns:
        str: The declared type if it is usable as a data URL header, else a guess from
            the file extension, else the octet-stream default.
    """
    declared = (declared or "").strip()
    # the type becomes the data URL header, which must not carry its own separators
    if declared and "," not in declared and ";base64" not in declared.lower():
        return declared
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or DEFAULT_MIME_TYPE


def encode(content: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Encode raw bytes into a data URL.

    Args:
        content (bytes): The raw file content.
        mime_type (str): The MIME type recorded in the data URL header.

    Returns:
        str: The encoded representation.
    """
    payload = base64.b64encode(content).decode("ascii")
    return f"{_DATA_URL_PREFIX}{mime_type or DEFAULT_MIME_TYPE}{_BASE64_MARKER}{payload}"


def get_mime_type(encoded: str) -> str:
    """Return the MIME type recorded in an encoded string's header."""
    header, _ = _split(encoded)
    return header or DEFAULT_MIME_TYPE


def decode_to_bytes(encoded: str) -> bytes:
    """Exact inverse of :func:`encode`.

    Raises:
        ValueError: If the string is not a base64 data URL.
    """
    _, payload = _split(encoded)
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload in encoded content: {e}") from e


def decode_to_display_text(encoded: str) -> str:
    """Best-effort UTF-8 rendering of encoded content. Never raises.

    Returns:
        str: The decoded text, or :data:`BINARY_SENTINEL` if the bytes are not valid UTF-8.
    """
    try:
        return decode_to_bytes(encoded).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return BINARY_SENTINEL


def is_text(encoded: str) -> bool:
    """Whether the encoded content decodes to valid UTF-8 text."""
    return decode_to_display_text(encoded) != BINARY_SENTINEL


def is_text_bytes(content: bytes) -> bool:
    """Same check as :func:`is_text` for content that is already decoded."""
    try:
        content.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def _split(encoded: str) -> tuple[str, str]:
    if not isinstance(encoded, str) or not encoded.startswith(_DATA_URL_PREFIX):
        raise ValueError("Encoded content is not a data URL.")
    header, marker, payload = encoded[len(_DATA_URL_PREFIX):].rpartition(_BASE64_MARKER)
    if not marker:
        raise ValueError("Encoded content is not base64 encoded.")
    return header, payload

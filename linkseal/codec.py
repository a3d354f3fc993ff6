"""
Binary/Text Codec
=================
Moves raw bytes through text-only channels (URL fragments, hidden form
fields) and back.

Text  <-> bytes : UTF-8
Bytes <-> text  : base64, padded

The default alphabet is standard base64 (+ / =). Links produced by
existing senders use it, so switching alphabets silently would break
every link already shared. Pass url_safe=True only when the same party
controls both encoding and decoding.
"""

import base64
import binascii
import logging
from typing import Iterable, Union

from .errors import InvalidEncoding

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8"

_URLSAFE_TO_STANDARD = bytes.maketrans(b"-_", b"+/")


def encode_text(text: str) -> bytes:
    return text.encode(TEXT_ENCODING)


def decode_text(data: bytes) -> str:
    try:
        return bytes(data).decode(TEXT_ENCODING)
    except UnicodeDecodeError as exc:
        raise InvalidEncoding("Decrypted bytes are not valid UTF-8.") from exc


def to_transport_text(data: bytes, url_safe: bool = False) -> str:
    """Base64-encode a buffer into ASCII text."""
    if url_safe:
        return base64.urlsafe_b64encode(data).decode("ascii")
    return base64.b64encode(data).decode("ascii")


def from_transport_text(text: Union[str, bytes], url_safe: bool = False) -> bytes:
    """
    Strict inverse of to_transport_text.
    Raises InvalidEncoding on characters outside the alphabet, bad padding
    or non-zero trailing bits.
    """
    if isinstance(text, str):
        try:
            raw = text.encode("ascii")
        except UnicodeEncodeError as exc:
            raise InvalidEncoding("Transport text must be ASCII base64.") from exc
    else:
        raw = bytes(text)

    if url_safe:
        # validate=True ignores altchars, so map the URL-safe alphabet first
        if b"+" in raw or b"/" in raw:
            raise InvalidEncoding("Standard base64 characters in URL-safe text.")
        raw = raw.translate(_URLSAFE_TO_STANDARD)
    try:
        data = base64.b64decode(raw, validate=True)
    except binascii.Error as exc:
        logger.debug(f"Rejected transport text of {len(raw)} chars")
        raise InvalidEncoding("Malformed base64 transport text.") from exc
    # unused low bits of the last character must be zero
    if base64.b64encode(data) != raw:
        logger.debug(f"Rejected non-canonical transport text of {len(raw)} chars")
        raise InvalidEncoding("Non-canonical base64 transport text.")
    return data


def concat(buffers: Iterable[bytes]) -> bytes:
    """Join buffers in order; used to frame nonce || ciphertext."""
    return b"".join(buffers)

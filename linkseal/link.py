"""
Share-link flows
================
Sender and recipient paths built on the engine and the codec.

Sender:     text -> UTF-8 -> fresh key -> AES-256-GCM -> base64(frame), base64(key)
Recipient:  base64(key) -> key, base64(frame) -> frame -> AES-256-GCM -> UTF-8 -> text

The two strings in a SealedSecret travel on different channels: the key
in the URL fragment (never sent to the server), the sealed message in
page content or a form field. Neither one alone recovers the text.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from urllib.parse import unquote, urldefrag

from . import engine
from .codec import decode_text, encode_text, from_transport_text, to_transport_text
from .errors import InvalidKeyMaterial, UnsupportedCipher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SealedSecret:
    """Result of seal_secret(): hand both values to whatever builds the link."""

    key: str = field(repr=False)
    sealed_message: str
    cipher: str = engine.CIPHER_NAME

    def share_url(self, base_url: str) -> str:
        return share_url(base_url, self.key)


def seal_secret(secret: str, url_safe: bool = False) -> SealedSecret:
    """
    Encrypt a text secret under a brand-new key.
    The key is not kept anywhere once the result is returned.
    """
    key    = engine.generate_key()
    sealed = engine.encrypt(key, encode_text(secret))
    return SealedSecret(
        key=to_transport_text(engine.export_key(key), url_safe=url_safe),
        sealed_message=to_transport_text(sealed, url_safe=url_safe),
    )


def open_secret(key_text: str, sealed_message: str,
                cipher: str = engine.CIPHER_NAME, url_safe: bool = False) -> str:
    """
    Decrypt a secret from its two transport strings.
    Raises UnsupportedCipher, InvalidEncoding, InvalidKeyMaterial or a
    DecryptionError; never returns partial text.
    """
    if cipher != engine.CIPHER_NAME:
        raise UnsupportedCipher(f"Cannot open {cipher!r} secrets, only {engine.CIPHER_NAME!r}.")
    key    = engine.import_key(from_transport_text(key_text, url_safe=url_safe))
    sealed = from_transport_text(sealed_message, url_safe=url_safe)
    return decode_text(engine.decrypt(key, sealed))


async def seal_secret_async(secret: str, url_safe: bool = False) -> SealedSecret:
    return await asyncio.to_thread(seal_secret, secret, url_safe)


async def open_secret_async(key_text: str, sealed_message: str,
                            cipher: str = engine.CIPHER_NAME,
                            url_safe: bool = False) -> str:
    return await asyncio.to_thread(open_secret, key_text, sealed_message, cipher, url_safe)


def key_from_fragment(fragment: str) -> str:
    """
    Key text from a URL fragment ("#abc..." or "abc...").
    Percent-escapes added by a browser or mail client are undone.
    """
    if fragment.startswith("#"):
        fragment = fragment[1:]
    key_text = unquote(fragment)
    if not key_text:
        raise InvalidKeyMaterial("URL fragment carries no key.")
    return key_text


def share_url(base_url: str, key_text: str) -> str:
    """Put the key in the fragment of base_url, replacing any existing one."""
    if not key_text:
        raise InvalidKeyMaterial("Refusing to build a link without a key.")
    url, _ = urldefrag(base_url)
    return f"{url}#{key_text}"

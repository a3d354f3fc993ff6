"""
Key & Cipher Engine: AES-256-GCM
================================
One fresh 256-bit key per secret, one fresh 96-bit nonce per encryption.

GCM authenticates as well as encrypts: any change to the nonce, the
ciphertext or the 128-bit tag makes decryption fail instead of returning
altered plaintext. No associated data is used.

Key:    256 bits (32 bytes) - generated per message, exportable as raw bytes
Nonce:   96 bits (12 bytes) - os.urandom on every encrypt() call
Tag:    128 bits (16 bytes)

Sealed message format: nonce(12) || ciphertext || tag(16)
No length prefix; the nonce length is fixed and GCM delimits the tag.

Dependencies: cryptography >= 41.0
"""

import hmac
import logging
import os

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .codec import concat
from .errors import (
    AuthenticationFailed,
    CryptoProviderUnavailable,
    InvalidKeyMaterial,
    MalformedSealedMessage,
)

logger = logging.getLogger(__name__)

CIPHER_NAME     = "aes_256_gcm"
KEY_SIZE        = 32   # 256-bit key
NONCE_SIZE      = 12   # 96-bit nonce (GCM standard)
TAG_SIZE        = 16   # 128-bit tag
MIN_SEALED_SIZE = NONCE_SIZE + TAG_SIZE


def _random_bytes(n: int) -> bytes:
    try:
        return os.urandom(n)
    except NotImplementedError as exc:
        raise CryptoProviderUnavailable("No secure random source available.") from exc


def _bind_cipher(raw: bytes) -> AESGCM:
    try:
        return AESGCM(raw)
    except UnsupportedAlgorithm as exc:
        raise CryptoProviderUnavailable("AES-GCM is not supported by the crypto backend.") from exc


class SymmetricKey:
    """
    Opaque AES-256-GCM key.
    Holds the raw bytes only so they can be exported into the share link.
    """

    def __init__(self, raw: bytes):
        if len(raw) != KEY_SIZE:
            raise InvalidKeyMaterial(f"AES-256 key must be {KEY_SIZE} bytes.")
        self._raw    = bytes(raw)
        self._aesgcm = _bind_cipher(self._raw)

    def export(self) -> bytes:
        return self._raw

    def encrypt(self, plaintext: bytes) -> bytes:
        return encrypt(self, plaintext)

    def decrypt(self, sealed: bytes) -> bytes:
        return decrypt(self, sealed)

    def __eq__(self, other):
        if not isinstance(other, SymmetricKey):
            return NotImplemented
        return hmac.compare_digest(self._raw, other._raw)

    __hash__ = None

    def __repr__(self):
        return f"SymmetricKey({CIPHER_NAME}, <{KEY_SIZE * 8} bits hidden>)"


def generate_key() -> SymmetricKey:
    """New random 256-bit key, exportable."""
    key = SymmetricKey(_random_bytes(KEY_SIZE))
    logger.debug(f"Generated {CIPHER_NAME} key ({KEY_SIZE}B)")
    return key


def export_key(key: SymmetricKey) -> bytes:
    return key.export()


def import_key(raw: bytes) -> SymmetricKey:
    """
    Rebuild a key from its 32 raw bytes.
    Raises InvalidKeyMaterial on anything else.
    """
    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise InvalidKeyMaterial("Key material must be bytes.")
    raw = bytes(raw)
    try:
        return SymmetricKey(raw)
    except ValueError as exc:
        if isinstance(exc, InvalidKeyMaterial):
            raise
        raise InvalidKeyMaterial("Key rejected by the crypto backend.") from exc


def encrypt(key: SymmetricKey, plaintext: bytes) -> bytes:
    """
    Encrypt and authenticate under a fresh random nonce.
    Returns: nonce || ciphertext+tag
    """
    nonce  = _random_bytes(NONCE_SIZE)
    ct     = key._aesgcm.encrypt(nonce, bytes(plaintext), None)
    sealed = concat([nonce, ct])
    logger.debug(f"Sealed {len(plaintext)}B plaintext into {len(sealed)}B frame")
    return sealed


def decrypt(key: SymmetricKey, sealed: bytes) -> bytes:
    """
    Split the frame, verify the tag and decrypt.
    Raises MalformedSealedMessage if the frame cannot hold nonce and tag,
    AuthenticationFailed if the tag does not verify.
    """
    sealed = bytes(sealed)
    if len(sealed) < MIN_SEALED_SIZE:
        logger.warning("Rejected sealed message: cannot decrypt")
        raise MalformedSealedMessage()
    nonce = sealed[:NONCE_SIZE]
    ct    = sealed[NONCE_SIZE:]
    try:
        return key._aesgcm.decrypt(nonce, ct, None)
    except InvalidTag:
        logger.warning("Rejected sealed message: cannot decrypt")
        raise AuthenticationFailed() from None

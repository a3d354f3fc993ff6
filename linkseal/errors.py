"""
Errors
======
Every failure raised by linkseal derives from LinkSealError.

None of these are transient, so none are retried. Both decryption
failures carry the same message, so str(exc) never tells a user whether
the frame was short or the tag was wrong.
"""


class LinkSealError(Exception):
    """Base class for all linkseal failures."""


class CryptoProviderUnavailable(LinkSealError, RuntimeError):
    """The secure random source or the AES-GCM backend is missing."""


class InvalidKeyMaterial(LinkSealError, ValueError):
    """Key bytes or key text were malformed or the wrong length."""


class InvalidEncoding(LinkSealError, ValueError):
    """Text could not be converted to bytes, or bytes to text."""


class UnsupportedCipher(LinkSealError, ValueError):
    """The sealed message names a cipher this package cannot open."""


class DecryptionError(LinkSealError):
    """Opaque decryption failure."""

    MESSAGE = "cannot decrypt"

    def __init__(self, *args):
        super().__init__(self.MESSAGE)


class MalformedSealedMessage(DecryptionError):
    """Sealed message too short to hold nonce and tag."""


class AuthenticationFailed(DecryptionError):
    """GCM tag did not verify: tampered data, wrong key or wrong nonce."""

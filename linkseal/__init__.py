"""
linkseal
========
Zero-knowledge "share a secret via link".

The sender encrypts a short text on their own device. The key lives only
in the URL fragment, which browsers never send to the server; the sealed
message travels separately in page content or a form field. The
recipient's device reads the key from the fragment and decrypts locally.

Modules:
    engine  — AES-256-GCM key generation and authenticated encryption
    codec   — UTF-8 and base64 conversions, frame concatenation
    link    — sender/recipient flows, share-URL helpers
    errors  — exception taxonomy

License: Apache 2.0
"""

__version__  = "1.0.0"
__project__  = "linkseal"

from .codec   import (encode_text, decode_text, to_transport_text,
                      from_transport_text, concat)
from .engine  import (SymmetricKey, generate_key, export_key, import_key,
                      encrypt, decrypt, CIPHER_NAME, KEY_SIZE, NONCE_SIZE,
                      TAG_SIZE, MIN_SEALED_SIZE)
from .errors  import (LinkSealError, CryptoProviderUnavailable,
                      InvalidKeyMaterial, InvalidEncoding, UnsupportedCipher,
                      DecryptionError, MalformedSealedMessage,
                      AuthenticationFailed)
from .link    import (SealedSecret, seal_secret, open_secret,
                      seal_secret_async, open_secret_async,
                      key_from_fragment, share_url)

__all__ = [
    "encode_text",
    "decode_text",
    "to_transport_text",
    "from_transport_text",
    "concat",
    "SymmetricKey",
    "generate_key",
    "export_key",
    "import_key",
    "encrypt",
    "decrypt",
    "CIPHER_NAME",
    "KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "MIN_SEALED_SIZE",
    "LinkSealError",
    "CryptoProviderUnavailable",
    "InvalidKeyMaterial",
    "InvalidEncoding",
    "UnsupportedCipher",
    "DecryptionError",
    "MalformedSealedMessage",
    "AuthenticationFailed",
    "SealedSecret",
    "seal_secret",
    "open_secret",
    "seal_secret_async",
    "open_secret_async",
    "key_from_fragment",
    "share_url",
]

"""
linkseal — Share-link flow tests
================================
Run with:  python -m pytest tests/ -v
       or:  python tests/test_link.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
from urllib.parse import urlsplit

import pytest
from linkseal import (SealedSecret, seal_secret, open_secret, seal_secret_async,
                      open_secret_async, key_from_fragment, share_url,
                      from_transport_text, to_transport_text)
from linkseal.errors import (AuthenticationFailed, DecryptionError,
                             InvalidEncoding, InvalidKeyMaterial,
                             MalformedSealedMessage, UnsupportedCipher)

SECRET = "hello world"

# ── Sender / recipient round trip ────────────────────────────────────────────
@pytest.mark.parametrize("secret", ["", SECRET, "pässwörd · 秘密 · 🔑", "x" * 10_000])
def test_seal_open_roundtrip(secret):
    s = seal_secret(secret)
    assert open_secret(s.key, s.sealed_message) == secret

def test_hello_world_frame_is_39_bytes():
    s = seal_secret(SECRET)
    assert len(from_transport_text(s.sealed_message)) == 12 + 11 + 16
    assert len(from_transport_text(s.key)) == 32
    assert open_secret(s.key, s.sealed_message) == SECRET

def test_empty_secret_frame_is_28_bytes():
    s = seal_secret("")
    assert len(from_transport_text(s.sealed_message)) == 28
    assert open_secret(s.key, s.sealed_message) == ""

def test_every_seal_uses_a_fresh_key():
    a, b = seal_secret(SECRET), seal_secret(SECRET)
    assert a.key != b.key
    assert a.sealed_message != b.sealed_message

def test_result_is_explicit_and_hides_key():
    s = seal_secret(SECRET)
    assert isinstance(s, SealedSecret)
    assert s.cipher == "aes_256_gcm"
    assert s.key not in repr(s)

def test_url_safe_roundtrip():
    s = seal_secret("a?b#c&d", url_safe=True)
    assert "+" not in s.key and "/" not in s.key
    assert open_secret(s.key, s.sealed_message, url_safe=True) == "a?b#c&d"

def test_known_vector_through_transport_text():
    key_text = to_transport_text(bytes(32))
    sealed   = to_transport_text(bytes(12) + bytes.fromhex("530f8afbc74536b9a963b4f1c4cb738b"))
    assert open_secret(key_text, sealed) == ""

# ── Recipient failures ────────────────────────────────────────────────────────
def test_wrong_key_cannot_open():
    s     = seal_secret(SECRET)
    other = seal_secret(SECRET)
    with pytest.raises(AuthenticationFailed):
        open_secret(other.key, s.sealed_message)

def test_short_sealed_message_rejected():
    s = seal_secret(SECRET)
    with pytest.raises(MalformedSealedMessage):
        open_secret(s.key, to_transport_text(bytes(27)))

def test_failures_read_the_same_to_users():
    s = seal_secret(SECRET)
    messages = set()
    for sealed in (to_transport_text(b"short"), seal_secret(SECRET).sealed_message):
        with pytest.raises(DecryptionError) as exc:
            open_secret(s.key, sealed)
        messages.add(str(exc.value))
    assert messages == {"cannot decrypt"}

def test_truncated_key_rejected():
    s = seal_secret(SECRET)
    with pytest.raises(InvalidKeyMaterial):
        open_secret(to_transport_text(from_transport_text(s.key)[:16]), s.sealed_message)

def test_garbled_key_text_rejected():
    s = seal_secret(SECRET)
    with pytest.raises(InvalidEncoding):
        open_secret(s.key[:-1] + "$", s.sealed_message)

def test_non_utf8_plaintext_rejected():
    from linkseal import engine
    k      = engine.generate_key()
    sealed = engine.encrypt(k, b"\xff\xfe")
    with pytest.raises(InvalidEncoding):
        open_secret(to_transport_text(engine.export_key(k)), to_transport_text(sealed))

def test_other_cipher_rejected():
    s = seal_secret(SECRET)
    with pytest.raises(UnsupportedCipher):
        open_secret(s.key, s.sealed_message, cipher="chacha20_poly1305")

# ── URL fragment ──────────────────────────────────────────────────────────────
def test_share_url_then_fragment_recovers_secret():
    s   = seal_secret(SECRET)
    url = s.share_url("https://example.com/secrets/42")
    assert url == f"https://example.com/secrets/42#{s.key}"
    fragment = urlsplit(url).fragment
    assert open_secret(key_from_fragment(fragment), s.sealed_message) == SECRET

def test_share_url_replaces_existing_fragment():
    assert share_url("https://example.com/s/1#old", "NEW") == "https://example.com/s/1#NEW"

def test_share_url_requires_key():
    with pytest.raises(InvalidKeyMaterial):
        share_url("https://example.com/s/1", "")

@pytest.mark.parametrize("fragment, expected", [
    ("#abc+/=", "abc+/="),
    ("abc+/=",  "abc+/="),
    ("#abc%2B%2F%3D", "abc+/="),
])
def test_key_from_fragment(fragment, expected):
    assert key_from_fragment(fragment) == expected

@pytest.mark.parametrize("fragment", ["", "#"])
def test_key_from_empty_fragment(fragment):
    with pytest.raises(InvalidKeyMaterial):
        key_from_fragment(fragment)

# ── Async wrappers ────────────────────────────────────────────────────────────
def test_async_roundtrip():
    async def scenario():
        s = await seal_secret_async(SECRET)
        return await open_secret_async(s.key, s.sealed_message)
    assert asyncio.run(scenario()) == SECRET

def test_async_independent_calls_any_order():
    async def scenario():
        sealed = await asyncio.gather(*(seal_secret_async(f"msg {i}") for i in range(10)))
        return await asyncio.gather(*(open_secret_async(s.key, s.sealed_message) for s in sealed))
    assert asyncio.run(scenario()) == [f"msg {i}" for i in range(10)]

def test_async_failure_propagates():
    s = seal_secret(SECRET)
    async def scenario():
        return await open_secret_async(seal_secret(SECRET).key, s.sealed_message)
    with pytest.raises(AuthenticationFailed):
        asyncio.run(scenario())

def test_cancelled_open_returns_nothing():
    s = seal_secret(SECRET)
    async def scenario():
        task = asyncio.ensure_future(open_secret_async(s.key, s.sealed_message))
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return task
    task = asyncio.run(scenario())
    assert task.cancelled()

def test_cancelled_seal_returns_nothing():
    async def scenario():
        task = asyncio.ensure_future(seal_secret_async(SECRET))
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return task
    task = asyncio.run(scenario())
    assert task.cancelled()

def test_cancelled_while_in_flight_returns_nothing():
    s = seal_secret(SECRET)
    async def scenario():
        task = asyncio.ensure_future(open_secret_async(s.key, s.sealed_message))
        await asyncio.sleep(0)
        task.cancel()
        try:
            return await task
        except asyncio.CancelledError:
            return None
    assert asyncio.run(scenario()) is None

if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))

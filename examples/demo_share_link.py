"""
linkseal — Live Demo: sender and recipient
==========================================
Run:  python examples/demo_share_link.py ["your secret"]

Seals a secret, prints the share link and the sealed message as they
would travel on their two channels, then opens it again from the link.
"""

import sys, os, time, logging
from urllib.parse import urlsplit
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from linkseal import (seal_secret, open_secret, key_from_fragment,
                      from_transport_text, to_transport_text, AuthenticationFailed)

logging.basicConfig(level=logging.INFO, format=' %(levelname)s %(name)s: %(message)s')

LINE   = "═" * 70
SECRET = sys.argv[1] if len(sys.argv) > 1 else "hello world"

def header(step, name):
    print(f"\n{LINE}")
    print(f"  {step} — {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

# ─────────────────────────────────────────────────────────────────────────────
print(f"\n{LINE}")
print("  linkseal — share a secret via link")
print(LINE)
print(f"  Secret: {SECRET}\n")

# ── SENDER ───────────────────────────────────────────────────────────────────
header(1, "SENDER — seal on this device")
t0      = time.perf_counter()
sealed  = seal_secret(SECRET)
url     = sealed.share_url("https://example.com/secrets/42")
elapsed = time.perf_counter() - t0
frame   = from_transport_text(sealed.sealed_message)
ok("Cipher",         sealed.cipher)
ok("Frame size",     f"{len(frame)} bytes (nonce=12 + data + tag=16)")
ok("Sealed message", sealed.sealed_message)
ok("Share link",     url)
ok("Seal time",      f"{elapsed*1000:.2f} ms")

# ── RECIPIENT ────────────────────────────────────────────────────────────────
header(2, "RECIPIENT — open from the link")
t0        = time.perf_counter()
key_text  = key_from_fragment(urlsplit(url).fragment)
plaintext = open_secret(key_text, sealed.sealed_message)
elapsed   = time.perf_counter() - t0
ok("Key read from fragment")
ok("Decrypted", plaintext)
ok("Open time", f"{elapsed*1000:.2f} ms")

# ── TAMPERING ────────────────────────────────────────────────────────────────
header(3, "RELAY — tampered sealed message")
tampered     = bytearray(frame)
tampered[-1] ^= 0x01
try:
    open_secret(key_text, to_transport_text(bytes(tampered)))
    print("  ✗  Tampering went unnoticed")
    sys.exit(1)
except AuthenticationFailed as exc:
    ok("Rejected", str(exc))

print(f"\n{LINE}\n")

# backend/storefront/core/security.py
import hashlib
import secrets
import time

# NOTE: passwords are stored as a bare, unsalted SHA-256 hex digest so that
# hashes written by the existing admin pages keep verifying. This is not a
# credential scheme worth extending.
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def hash_password(password: str) -> str:
    """Hash a password with a single SHA-256 digest (hex)."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    """Compare the digest of a password against a stored hash."""
    return secrets.compare_digest(
        hash_password(password).encode(), (password_hash or "").encode()
    )


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("Cannot encode negative numbers in base 36")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_session_token(now_ms: int | None = None) -> str:
    """
    Generate an opaque session token.

    Shape is random base-36, then the login timestamp in base-36, then more
    random base-36. The token is an identifier for the local session slot only;
    nothing server-side verifies it.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return (
        to_base36(secrets.randbits(52))
        + to_base36(now_ms)
        + to_base36(secrets.randbits(52))
    )

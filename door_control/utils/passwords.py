"""Password hashing helpers for operator accounts.

Stored format: ``<salt hex>$<pbkdf2-sha256 digest hex>``.
"""

import hashlib
import hmac
import secrets

ITERATIONS = 200_000


def _digest(password: str, salt: bytes) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, ITERATIONS).hex()


def hash_password(password: str) -> str:
    """Return a salted hash for the given password."""
    salt = secrets.token_bytes(16)
    return f"{salt.hex()}${_digest(password, salt)}"


def verify_password(password: str, hashed: str) -> bool:
    """Constant-time check of a password against a stored hash."""
    salt_hex, sep, expected = hashed.partition("$")
    if not sep:
        return False
    try:
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    return hmac.compare_digest(_digest(password, salt), expected)

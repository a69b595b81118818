"""Password hashing and credential input validation."""

from functools import lru_cache

import bcrypt

from opsgate.core.config import settings

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# bcrypt only reads the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72

DUMMY_PASSWORD = b"opsgate-dummy-password"


def _to_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(_to_bytes(plain_password), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    try:
        return bcrypt.checkpw(_to_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int) -> bytes:
    """Hash compared against when a login identifier is unknown. Built once per cost."""
    return bcrypt.hashpw(DUMMY_PASSWORD, bcrypt.gensalt(rounds=rounds))


def burn_password_check(plain_password: str) -> None:
    """
    Run one bcrypt comparison whose result is discarded, at the configured cost,
    so an unknown login identifier takes as long as a wrong password.
    """
    bcrypt.checkpw(_to_bytes(plain_password), dummy_hash(settings.BCRYPT_ROUNDS))


def password_problem(password: str) -> str | None:
    """
    Return a human-readable reason the password is rejected, or None if it is acceptable.

    Policy: 8-128 characters, at least one letter and at least one character
    that is not a letter (digit, symbol or space).
    """
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        return f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters."
    if not any(c.isalpha() for c in password):
        return "Password must contain at least one letter."
    if all(c.isalpha() for c in password):
        return "Password must contain at least one digit or symbol."
    return None


def username_problem(username: str) -> str | None:
    """Return why the username is rejected, or None."""
    if not (USERNAME_MIN_LEN <= len(username.strip()) <= USERNAME_MAX_LEN):
        return "Invalid username length."
    return None

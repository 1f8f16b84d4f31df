"""Password hashing helpers."""

import logging

import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


def _encode(password: str) -> bytes:
    # bcrypt only considers the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), hashed.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Stored password hash is not a valid bcrypt hash: {e}")
        return False

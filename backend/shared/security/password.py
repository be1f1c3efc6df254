"""
Password hashing utilities using bcrypt.

Every stored credential (customers, chefs, admins, app users) goes through
hash_password(); logins go through verify_password().
"""

import bcrypt

from shared.config.logging import get_logger
from shared.utils.exceptions import ValidationError

logger = get_logger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

# bcrypt only reads the first 72 bytes; newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Example:
        hashed = hash_password("mypassword123")
        # $2b$12$...

    Raises:
        ValidationError: Password longer than MAX_PASSWORD_BYTES in UTF-8.
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """
    Verify a password against its bcrypt hash.

    Stored values that are not bcrypt hashes never match: plaintext
    credentials are rejected instead of compared.
    """
    if not hashed_password or not hashed_password.startswith(BCRYPT_PREFIXES):
        logger.warning("Credential check against a non-bcrypt stored password")
        return False

    encoded = plain_password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed_password.encode("utf-8"))


def is_hashed(value: str | None) -> bool:
    """True when value already looks like a bcrypt hash."""
    return bool(value) and value.startswith(BCRYPT_PREFIXES)

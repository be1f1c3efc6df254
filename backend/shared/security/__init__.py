"""
Security module: password hashing.
"""

from shared.security.password import hash_password, verify_password, is_hashed

__all__ = [
    "hash_password",
    "verify_password",
    "is_hashed",
]

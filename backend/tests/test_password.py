"""
Tests for bcrypt password hashing.
"""

import pytest

from shared.security.password import MAX_PASSWORD_BYTES, hash_password, is_hashed, verify_password
from shared.utils.exceptions import ValidationError


class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123")

        assert is_hashed(hashed)
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_longest_allowed_password(self):
        password = "a" * MAX_PASSWORD_BYTES
        assert verify_password(password, hash_password(password))

    def test_too_long_password_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            hash_password("a" * (MAX_PASSWORD_BYTES + 1))
        assert exc.value.status_code == 400

    def test_multibyte_length_counts_bytes(self):
        # 25 characters, 75 bytes
        with pytest.raises(ValidationError):
            hash_password("€" * 25)

    def test_too_long_candidate_never_matches(self):
        hashed = hash_password("a" * MAX_PASSWORD_BYTES)
        assert verify_password("a" * 100, hashed) is False

    def test_plaintext_stored_value_never_matches(self):
        assert verify_password("secret123", "secret123") is False
        assert verify_password("secret123", None) is False

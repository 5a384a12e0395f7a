"""
Unit tests for password hashing.
"""
import pytest

from diary_api.core.exceptions import ValidationError
from diary_api.core.passwords import compare_password, hash_password


@pytest.fixture(scope="module")
def hashed():
    return hash_password("CorrectPassword1")


class TestHashPassword:
    """Tests for hash_password."""

    def test_hash_password(self):
        """Hash differs from the plain text and looks like bcrypt."""
        password = "supersecretpassword123"
        hashed = hash_password(password)

        assert hashed != password
        assert hashed.startswith("$2")

    def test_different_hashes_for_same_password(self):
        """Same password produces different hashes (salt)."""
        password = "samepassword"
        hash1 = hash_password(password)
        hash2 = hash_password(password)

        assert hash1 != hash2
        assert compare_password(password, hash1) is True
        assert compare_password(password, hash2) is True

    def test_empty_password_rejected(self):
        with pytest.raises(ValidationError, match="empty"):
            hash_password("")

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError, match="at least 8"):
            hash_password("short12")

    def test_minimum_length_accepted(self):
        assert compare_password("exactly8", hash_password("exactly8")) is True

    def test_password_over_bcrypt_limit_rejected(self):
        with pytest.raises(ValidationError):
            hash_password("a" * 73)


class TestComparePassword:
    """Tests for compare_password."""

    def test_correct_password(self, hashed):
        assert compare_password("CorrectPassword1", hashed) is True

    def test_wrong_password(self, hashed):
        assert compare_password("WrongPassword1", hashed) is False

    def test_case_sensitive(self, hashed):
        assert compare_password("correctpassword1", hashed) is False

    def test_empty_password_is_false(self, hashed):
        assert compare_password("", hashed) is False

    def test_invalid_hash_raises(self):
        """A structurally invalid hash raises instead of returning False."""
        with pytest.raises(ValidationError, match="Invalid hash format"):
            compare_password("somepassword", "not-a-bcrypt-hash")

    def test_unicode_password_roundtrip(self):
        password = "일기장비밀번호🔒"
        assert compare_password(password, hash_password(password)) is True

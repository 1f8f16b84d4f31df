"""Tests for password hashing."""

from property_market.utils.security import hash_password, verify_password


class TestPasswords:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("rahasia123", rounds=4)
        assert hashed != "rahasia123"
        assert hashed.startswith("$2")

    def test_verify_correct(self):
        assert verify_password("rahasia123", hash_password("rahasia123", rounds=4))

    def test_verify_wrong(self):
        assert not verify_password("salah", hash_password("rahasia123", rounds=4))

    def test_salted(self):
        assert hash_password("rahasia123", rounds=4) != hash_password("rahasia123", rounds=4)

    def test_invalid_stored_hash(self):
        assert not verify_password("rahasia123", "not-a-hash")

    def test_long_password(self):
        password = "x" * 100
        assert verify_password(password, hash_password(password, rounds=4))

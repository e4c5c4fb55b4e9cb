"""Tests for password hashing."""

import pytest

from mini_ledger.config import SecurityConfig
from mini_ledger.security import PasswordHasher


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(SecurityConfig(scrypt_n=16, scrypt_r=1, scrypt_p=1))


class TestPasswordHasher:
    """Tests for PasswordHasher."""

    def test_default_config(self) -> None:
        assert PasswordHasher().config == SecurityConfig()

    def test_salt_length(self, hasher: PasswordHasher) -> None:
        assert len(hasher.generate_salt()) == 2 * hasher.config.salt_bytes

    def test_salts_differ(self, hasher: PasswordHasher) -> None:
        assert hasher.generate_salt() != hasher.generate_salt()

    def test_hash_is_deterministic(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("secret", "salt") == hasher.hash("secret", "salt")

    def test_hash_depends_on_salt(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("secret", "salt-a") != hasher.hash("secret", "salt-b")

    def test_hash_is_not_plaintext(self, hasher: PasswordHasher) -> None:
        assert "secret" not in hasher.hash("secret", "salt")

    def test_verify(self, hasher: PasswordHasher) -> None:
        salt = hasher.generate_salt()
        stored = hasher.hash("open sesame", salt)

        assert hasher.verify("open sesame", salt, stored)
        assert not hasher.verify("open-sesame", salt, stored)
        assert not hasher.verify("Open sesame", salt, stored)

"""Password hashing for account credentials."""

import hashlib
import hmac
import secrets

from mini_ledger.config import SecurityConfig


class PasswordHasher:
    """Salted scrypt hashing of account passwords.

    Parameters
    ----------
    config : SecurityConfig | None
        scrypt cost parameters and salt length.
    """

    def __init__(self, config: SecurityConfig | None = None) -> None:
        self.config = config or SecurityConfig()

    def generate_salt(self) -> str:
        """Generate a random hex salt."""
        return secrets.token_hex(self.config.salt_bytes)

    def hash(self, password: str, salt: str) -> str:
        """Hash a password with the given salt."""
        return hashlib.scrypt(
            password.encode("utf-8"),
            salt=salt.encode("utf-8"),
            n=self.config.scrypt_n,
            r=self.config.scrypt_r,
            p=self.config.scrypt_p,
        ).hex()

    def verify(self, password: str, salt: str, expected_hash: str) -> bool:
        """Check a password against a stored hash in constant time."""
        return hmac.compare_digest(self.hash(password, salt), expected_hash)

"""Configuration management for mini-ledger."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from mini_ledger.exceptions import ConfigurationError


@dataclass
class SecurityConfig:
    """Password hashing configuration (scrypt cost parameters)."""

    scrypt_n: int = 16384
    scrypt_r: int = 8
    scrypt_p: int = 1
    salt_bytes: int = 16

    def validate(self) -> None:
        """Check cost parameters are usable by ``hashlib.scrypt``."""
        if self.scrypt_n < 2 or self.scrypt_n & (self.scrypt_n - 1):
            raise ConfigurationError(f"scrypt_n must be a power of two > 1, got {self.scrypt_n}")
        if self.scrypt_r < 1 or self.scrypt_p < 1:
            raise ConfigurationError("scrypt_r and scrypt_p must be positive")
        if self.salt_bytes < 8:
            raise ConfigurationError(f"salt_bytes must be at least 8, got {self.salt_bytes}")


@dataclass
class LedgerConfig:
    """Main configuration for mini-ledger."""

    security: SecurityConfig = field(default_factory=SecurityConfig)
    currency_quantum: Decimal = Decimal("0.01")
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if any setting is out of range."""
        self.security.validate()
        if not self.currency_quantum.is_finite() or self.currency_quantum <= 0:
            raise ConfigurationError(
                f"currency_quantum must be positive, got {self.currency_quantum}"
            )
        if self.log_format not in ("standard", "json"):
            raise ConfigurationError(f"Unknown log format: {self.log_format}")

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        try:
            security = SecurityConfig(
                scrypt_n=int(os.getenv("LEDGER_SCRYPT_N", "16384")),
                scrypt_r=int(os.getenv("LEDGER_SCRYPT_R", "8")),
                scrypt_p=int(os.getenv("LEDGER_SCRYPT_P", "1")),
            )
            quantum = Decimal(os.getenv("LEDGER_CURRENCY_QUANTUM", "0.01"))
        except (ValueError, InvalidOperation) as exc:
            raise ConfigurationError(f"Invalid ledger environment setting: {exc}") from exc

        config = cls(
            security=security,
            currency_quantum=quantum,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
        config.validate()
        return config

"""Pytest configuration and fixtures."""

import pytest

from mini_ledger.config import LedgerConfig, SecurityConfig
from mini_ledger.store import AccountStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def fast_config() -> LedgerConfig:
    """Config with cheap scrypt parameters so tests stay fast."""
    return LedgerConfig(security=SecurityConfig(scrypt_n=16, scrypt_r=1, scrypt_p=1))


@pytest.fixture
def store(fast_config: LedgerConfig) -> AccountStore:
    """Create a fresh store for each test."""
    return AccountStore(config=fast_config)

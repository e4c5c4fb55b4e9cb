"""In-memory account ledger with authentication and money movement."""

from mini_ledger.config import LedgerConfig, SecurityConfig
from mini_ledger.store import AccountStore

__version__ = "0.1.0"

__all__ = ["AccountStore", "LedgerConfig", "SecurityConfig", "__version__"]

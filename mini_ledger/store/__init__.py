"""In-memory account store."""

from mini_ledger.store.ledger import AccountStore

__all__ = ["AccountStore"]

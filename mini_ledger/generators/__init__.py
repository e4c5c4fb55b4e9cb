"""Sample data generators."""

from mini_ledger.generators.account import AccountApplicationGenerator

__all__ = ["AccountApplicationGenerator"]

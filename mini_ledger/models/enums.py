"""Enumeration types for ledger entities."""

from enum import Enum


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


class RecipientLookup(str, Enum):
    """How a transfer recipient is identified."""

    ID = "ID"
    USERNAME = "USERNAME"

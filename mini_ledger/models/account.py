"""Account models for the ledger."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from mini_ledger.models.enums import AccountStatus


@dataclass
class Account:
    """Customer account held by an ``AccountStore``.

    ``account_id`` is a serial number starting at 1 and is never reused,
    even after the account is closed. ``username`` is unique among active
    accounts only.
    """

    account_id: int
    full_name: str
    username: str
    password_hash: str = field(repr=False)
    password_salt: str = field(repr=False)
    balance: Decimal
    status: AccountStatus
    created_at: datetime
    closed_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        """Check if the account accepts operations."""
        return self.status == AccountStatus.ACTIVE


@dataclass(frozen=True)
class AccountSummary:
    """Public view of an account, without secret material."""

    account_id: int
    full_name: str
    username: str
    balance: Decimal


@dataclass
class AccountApplication:
    """Input for opening a new account."""

    full_name: str
    username: str
    password: str = field(repr=False)
    initial_deposit: Decimal = Decimal("0.00")

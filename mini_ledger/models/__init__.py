"""Domain models for the account ledger."""

from mini_ledger.models.account import Account, AccountApplication, AccountSummary
from mini_ledger.models.enums import AccountStatus, RecipientLookup
from mini_ledger.models.resolution import CloseResolution, TransferAllTo, WithdrawAll

__all__ = [
    "Account",
    "AccountApplication",
    "AccountStatus",
    "AccountSummary",
    "CloseResolution",
    "RecipientLookup",
    "TransferAllTo",
    "WithdrawAll",
]

"""Ways to settle a remaining balance before an account is closed."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WithdrawAll:
    """Pay out the whole balance in cash."""


@dataclass(frozen=True)
class TransferAllTo:
    """Move the whole balance to another active account."""

    username: str


CloseResolution = WithdrawAll | TransferAllTo

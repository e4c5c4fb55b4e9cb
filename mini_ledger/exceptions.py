"""Custom exception hierarchy for mini-ledger."""


class LedgerError(Exception):
    """Base exception for all mini-ledger errors."""


class DuplicateUsernameError(LedgerError):
    """Raised when a username is already taken by an active account."""


class InvalidUsernameError(DuplicateUsernameError):
    """Raised when a username is empty or contains whitespace."""


class InvalidAmountError(LedgerError):
    """Raised when a money amount is not acceptable for the operation."""


class InsufficientFundsError(LedgerError):
    """Raised when a debit exceeds the available balance."""


class AccountNotFoundError(LedgerError):
    """Raised when no active account matches the given id or username."""


class InactiveAccountError(LedgerError):
    """Raised when an operation targets a closed account."""


class AlreadyClosedError(InactiveAccountError):
    """Raised when closing an account that is already closed."""


class InvalidCredentialsError(LedgerError):
    """Raised when a password does not match the stored secret."""


class SameAccountError(LedgerError):
    """Raised when source and destination resolve to the same account."""


class OutstandingBalanceError(LedgerError):
    """Raised when closing an account with money left and no resolution."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""

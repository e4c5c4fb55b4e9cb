"""Tests for custom exception hierarchy."""

from mini_ledger.exceptions import (
    AccountNotFoundError,
    AlreadyClosedError,
    ConfigurationError,
    DuplicateUsernameError,
    InactiveAccountError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidCredentialsError,
    InvalidUsernameError,
    LedgerError,
    OutstandingBalanceError,
    SameAccountError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_ledger_error_is_exception(self) -> None:
        assert isinstance(LedgerError("test"), Exception)

    def test_every_kind_is_ledger_error(self) -> None:
        for cls in (
            AccountNotFoundError,
            ConfigurationError,
            DuplicateUsernameError,
            InactiveAccountError,
            InsufficientFundsError,
            InvalidAmountError,
            InvalidCredentialsError,
            OutstandingBalanceError,
            SameAccountError,
        ):
            assert isinstance(cls("test"), LedgerError)

    def test_invalid_username_is_duplicate_username(self) -> None:
        err = InvalidUsernameError("test")
        assert isinstance(err, DuplicateUsernameError)
        assert isinstance(err, LedgerError)

    def test_already_closed_is_inactive_account(self) -> None:
        err = AlreadyClosedError("test")
        assert isinstance(err, InactiveAccountError)
        assert isinstance(err, LedgerError)

    def test_not_found_is_not_inactive(self) -> None:
        assert not isinstance(AccountNotFoundError("test"), InactiveAccountError)

    def test_exception_message(self) -> None:
        err = AccountNotFoundError("Account 7 not found")
        assert str(err) == "Account 7 not found"

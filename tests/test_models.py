"""Tests for ledger models."""

import dataclasses
from datetime import datetime
from decimal import Decimal

import pytest

from mini_ledger.models import (
    Account,
    AccountApplication,
    AccountStatus,
    AccountSummary,
    RecipientLookup,
    TransferAllTo,
    WithdrawAll,
)


@pytest.fixture
def account() -> Account:
    return Account(
        account_id=1,
        full_name="Alice Example",
        username="alice",
        password_hash="deadbeef",
        password_salt="cafe",
        balance=Decimal("100.00"),
        status=AccountStatus.ACTIVE,
        created_at=datetime.now(),
    )


class TestAccount:
    """Tests for Account."""

    def test_is_active(self, account: Account) -> None:
        assert account.is_active
        account.status = AccountStatus.CLOSED
        assert not account.is_active

    def test_closed_at_defaults_to_none(self, account: Account) -> None:
        assert account.closed_at is None

    def test_repr_hides_secret(self, account: Account) -> None:
        text = repr(account)
        assert "deadbeef" not in text
        assert "cafe" not in text
        assert "alice" in text


class TestAccountSummary:
    """Tests for AccountSummary."""

    def test_is_frozen(self) -> None:
        summary = AccountSummary(1, "Alice", "alice", Decimal("1.00"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            summary.balance = Decimal("2.00")  # type: ignore[misc]


class TestAccountApplication:
    """Tests for AccountApplication."""

    def test_default_deposit(self) -> None:
        application = AccountApplication("Bob", "bob", "pw")
        assert application.initial_deposit == Decimal("0.00")

    def test_repr_hides_password(self) -> None:
        assert "hunter2" not in repr(AccountApplication("Bob", "bob", "hunter2"))


class TestResolutions:
    """Tests for close resolutions."""

    def test_transfer_all_to_equality(self) -> None:
        assert TransferAllTo("bob") == TransferAllTo("bob")
        assert TransferAllTo("bob") != TransferAllTo("carol")

    def test_withdraw_all_equality(self) -> None:
        assert WithdrawAll() == WithdrawAll()


class TestEnums:
    """Tests for enum values."""

    def test_account_status_values(self) -> None:
        assert [s.value for s in AccountStatus] == ["ACTIVE", "CLOSED"]

    def test_recipient_lookup_is_str(self) -> None:
        assert RecipientLookup.USERNAME == "USERNAME"

"""Account store with serial ids, a username index and atomic money movement."""

import threading
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal, Inexact, InvalidOperation, Rounded, localcontext
from typing import Any, Iterator

from mini_ledger.config import LedgerConfig
from mini_ledger.exceptions import (
    AccountNotFoundError,
    AlreadyClosedError,
    DuplicateUsernameError,
    InactiveAccountError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidCredentialsError,
    InvalidUsernameError,
    OutstandingBalanceError,
    SameAccountError,
)
from mini_ledger.logging import get_logger
from mini_ledger.models import (
    Account,
    AccountStatus,
    AccountSummary,
    CloseResolution,
    RecipientLookup,
    TransferAllTo,
    WithdrawAll,
)
from mini_ledger.security import PasswordHasher

logger = get_logger(__name__)

ZERO = Decimal("0")


@dataclass(eq=False)
class AccountStore:
    """In-memory store that owns every account and is its only writer.

    Closed accounts stay in ``accounts`` so their ids are never reissued,
    but they are dropped from the username index and from every lookup.

    Locking: ``_registry_lock`` guards the id counter and the username
    index, and each account has its own lock. Operations touching two
    accounts take both account locks in ascending id order. The registry
    lock is never acquired while an account lock is held.
    """

    config: LedgerConfig = field(default_factory=LedgerConfig)

    # All accounts ever opened, keyed by id
    accounts: dict[int, Account] = field(default_factory=dict)

    # Active accounts only
    _username_index: dict[str, int] = field(default_factory=dict)

    _last_id: int = 0
    _registry_lock: Any = field(default_factory=threading.RLock, repr=False)
    _account_locks: dict[int, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self.config.validate()
        self._hasher = PasswordHasher(self.config.security)

    def __len__(self) -> int:
        return len(self._username_index)

    def __contains__(self, account_id: object) -> bool:
        account = self._lookup(account_id)
        return account is not None and account.is_active

    # Commands
    def create_account(
        self,
        full_name: str,
        username: str,
        password: str,
        initial_deposit: Decimal | int | str = ZERO,
    ) -> Account:
        """Open a new account.

        Parameters
        ----------
        full_name : str
            Display name, may contain spaces.
        username : str
            Login name, unique among active accounts.
        password : str
            Plain secret; only its salted hash is stored.
        initial_deposit : Decimal | int | str
            Opening balance, zero or more.

        Returns
        -------
        Account
            Snapshot of the new account.
        """
        if not username or any(ch.isspace() for ch in username):
            raise InvalidUsernameError(f"Invalid username: {username!r}")

        opening = self._to_amount(initial_deposit)
        if opening < 0:
            raise InvalidAmountError(f"Initial deposit cannot be negative: {opening}")

        salt = self._hasher.generate_salt()
        password_hash = self._hasher.hash(password, salt)

        with self._registry_lock:
            if username in self._username_index:
                raise DuplicateUsernameError(f"Username {username!r} is already taken")

            self._last_id += 1
            account = Account(
                account_id=self._last_id,
                full_name=full_name,
                username=username,
                password_hash=password_hash,
                password_salt=salt,
                balance=opening,
                status=AccountStatus.ACTIVE,
                created_at=datetime.now(),
            )
            self._account_locks[account.account_id] = threading.Lock()
            self.accounts[account.account_id] = account
            self._username_index[username] = account.account_id

        logger.info("Opened account %d for %s", account.account_id, username)
        return replace(account)

    def authenticate(self, username: str, password: str) -> Account:
        """Return the active account matching the credentials."""
        with self._registry_lock:
            account_id = self._username_index.get(username)
            if account_id is None:
                logger.warning("Login failed: no active account %r", username)
                raise AccountNotFoundError(f"No active account with username {username!r}")
            account = self.accounts[account_id]

        if not self._hasher.verify(password, account.password_salt, account.password_hash):
            logger.warning("Login failed: wrong password for %r", username)
            raise InvalidCredentialsError("Incorrect password")

        return replace(account)

    def deposit(self, account_id: int, amount: Decimal | int | str) -> Decimal:
        """Add money to an active account and return the new balance."""
        value = self._positive_amount(amount)
        account = self._get_active(account_id)

        with self._account_locks[account.account_id]:
            self._ensure_active(account)
            account.balance = self._exact_sum(account.balance, value)
            new_balance = account.balance

        logger.debug(
            "Deposited %s into account %d",
            value,
            account.account_id,
            extra={"extra": {"account_id": account.account_id, "amount": value}},
        )
        return new_balance

    def withdraw(self, account_id: int, amount: Decimal | int | str) -> Decimal:
        """Take money out of an active account and return the new balance."""
        value = self._positive_amount(amount)
        account = self._get_active(account_id)

        with self._account_locks[account.account_id]:
            self._ensure_active(account)
            if value > account.balance:
                raise InsufficientFundsError(
                    f"Insufficient balance. Current balance: {account.balance}"
                )
            account.balance = self._exact_sum(account.balance, -value)
            new_balance = account.balance

        logger.debug(
            "Withdrew %s from account %d",
            value,
            account.account_id,
            extra={"extra": {"account_id": account.account_id, "amount": value}},
        )
        return new_balance

    def transfer(
        self,
        from_id: int,
        recipient: int | str,
        amount: Decimal | int | str,
        lookup: RecipientLookup = RecipientLookup.ID,
    ) -> Decimal:
        """Move money between two active accounts.

        Parameters
        ----------
        from_id : int
            Source account id.
        recipient : int | str
            Recipient id or username, depending on ``lookup``.
        amount : Decimal | int | str
            Amount to move, greater than zero.
        lookup : RecipientLookup
            Whether ``recipient`` is an id or a username.

        Returns
        -------
        Decimal
            New balance of the source account.
        """
        source = self._get_active(from_id)
        target = self._resolve_recipient(recipient, lookup)
        if target.account_id == source.account_id:
            raise SameAccountError("Cannot transfer to the same account")
        value = self._positive_amount(amount)

        with self._locked(source.account_id, target.account_id):
            self._ensure_active(source)
            if not target.is_active:
                raise AccountNotFoundError(f"No active account {target.account_id}")
            if value > source.balance:
                raise InsufficientFundsError(
                    f"Insufficient balance. Current balance: {source.balance}"
                )
            # Both results are computed before either record changes
            new_balance = self._exact_sum(source.balance, -value)
            target_balance = self._exact_sum(target.balance, value)
            source.balance = new_balance
            target.balance = target_balance

        logger.debug(
            "Transferred %s from account %d to account %d",
            value,
            source.account_id,
            target.account_id,
            extra={
                "extra": {
                    "account_id": source.account_id,
                    "counterparty_id": target.account_id,
                    "amount": value,
                }
            },
        )
        return new_balance

    def close_account(
        self,
        account_id: int,
        resolution: CloseResolution | None = None,
    ) -> Account:
        """Close an account, settling any remaining balance first.

        A positive balance needs a ``resolution``: ``WithdrawAll`` pays it
        out, ``TransferAllTo`` moves it to another active account. With a
        zero balance the resolution is ignored.

        Returns
        -------
        Account
            Snapshot of the closed account.
        """
        with self._registry_lock:
            account = self._lookup(account_id)
            if account is None:
                raise AccountNotFoundError(f"Account {account_id} not found")
            if not account.is_active:
                raise AlreadyClosedError(f"Account {account_id} is already closed")

            target_id = None
            if isinstance(resolution, TransferAllTo):
                target_id = self._username_index.get(resolution.username)

            lock_ids = [account_id]
            if target_id is not None and target_id != account_id:
                lock_ids.append(target_id)

            with self._locked(*lock_ids):
                paid_out = account.balance
                if paid_out > 0:
                    if resolution is None:
                        raise OutstandingBalanceError(
                            f"Account {account_id} still holds {paid_out}; "
                            "withdraw or transfer it first"
                        )
                    if isinstance(resolution, TransferAllTo):
                        if target_id is None:
                            raise AccountNotFoundError(
                                f"No active account with username {resolution.username!r}"
                            )
                        if target_id == account_id:
                            raise SameAccountError("Cannot transfer to the same account")
                        heir = self.accounts[target_id]
                        heir.balance = self._exact_sum(heir.balance, paid_out)
                    elif not isinstance(resolution, WithdrawAll):
                        raise TypeError(f"Unknown close resolution: {resolution!r}")
                    account.balance = ZERO.quantize(self.config.currency_quantum)

                account.status = AccountStatus.CLOSED
                account.closed_at = datetime.now()
                del self._username_index[account.username]

        logger.info(
            "Closed account %d (settled %s via %s)",
            account_id,
            paid_out,
            type(resolution).__name__ if paid_out > 0 else "nothing",
            extra={
                "extra": {
                    "account_id": account_id,
                    "counterparty_id": target_id if paid_out > 0 else None,
                    "amount": paid_out,
                }
            },
        )
        return replace(account)

    # Queries
    def find_by_username(self, username: str) -> Account | None:
        """Get the active account with this username, if any."""
        with self._registry_lock:
            account_id = self._username_index.get(username)
            if account_id is None:
                return None
            return replace(self.accounts[account_id])

    def find_by_id(self, account_id: int) -> Account | None:
        """Get the active account with this id, if any."""
        account = self._lookup(account_id)
        if account is None or not account.is_active:
            return None
        return replace(account)

    def view_account(self, account_id: int) -> AccountSummary:
        """Get the public details of an active account."""
        account = self._get_active(account_id)
        with self._account_locks[account_id]:
            self._ensure_active(account)
            return AccountSummary(
                account_id=account.account_id,
                full_name=account.full_name,
                username=account.username,
                balance=account.balance,
            )

    def active_accounts(self) -> list[Account]:
        """Get snapshots of all active accounts, ordered by id."""
        with self._registry_lock:
            ids = sorted(self._username_index.values())
            return [replace(self.accounts[aid]) for aid in ids]

    def summary(self) -> dict[str, int | Decimal]:
        """Return counts of accounts and the total active balance."""
        with self._registry_lock:
            active = [self.accounts[aid] for aid in self._username_index.values()]
            return {
                "active_accounts": len(active),
                "closed_accounts": len(self.accounts) - len(active),
                "total_balance": sum((a.balance for a in active), ZERO),
            }

    # Internals
    def _lookup(self, account_id: object) -> Account | None:
        # bool is an int subclass and True would hash to account 1
        if isinstance(account_id, bool) or not isinstance(account_id, int):
            return None
        return self.accounts.get(account_id)

    def _get_active(self, account_id: int) -> Account:
        account = self._lookup(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account {account_id} not found")
        self._ensure_active(account)
        return account

    @staticmethod
    def _ensure_active(account: Account) -> None:
        if not account.is_active:
            raise InactiveAccountError(f"Account {account.account_id} is closed")

    def _resolve_recipient(self, recipient: int | str, lookup: RecipientLookup) -> Account:
        if lookup == RecipientLookup.USERNAME:
            with self._registry_lock:
                account_id = self._username_index.get(recipient)  # type: ignore[arg-type]
        else:
            account_id = recipient  # type: ignore[assignment]

        account = self._lookup(account_id)
        if account is None or not account.is_active:
            kind = "username" if lookup == RecipientLookup.USERNAME else "ID"
            raise AccountNotFoundError(f"No active account with that {kind}: {recipient!r}")
        return account

    @contextmanager
    def _locked(self, *account_ids: int) -> Iterator[None]:
        """Hold the locks of the given accounts, lowest id first."""
        with ExitStack() as stack:
            for account_id in sorted(set(account_ids)):
                stack.enter_context(self._account_locks[account_id])
            yield

    def _to_amount(self, value: Any) -> Decimal:
        """Convert an already-parsed amount to a Decimal on the currency grid."""
        if isinstance(value, bool) or not isinstance(value, (Decimal, int, float, str)):
            raise InvalidAmountError(f"Not a money amount: {value!r}")

        quantum = self.config.currency_quantum
        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
            if not amount.is_finite():
                raise InvalidAmountError(f"Not a finite amount: {value!r}")
            quantized = amount.quantize(quantum)
        except InvalidOperation as exc:
            raise InvalidAmountError(f"Not a money amount: {value!r}") from exc

        if quantized != amount:
            raise InvalidAmountError(f"Amount {value} has more precision than {quantum}")
        return quantized

    @staticmethod
    def _exact_sum(balance: Decimal, delta: Decimal) -> Decimal:
        """Add ``delta`` to ``balance``, failing rather than rounding the result."""
        with localcontext() as ctx:
            ctx.traps[Inexact] = True
            ctx.traps[Rounded] = True
            try:
                return balance + delta
            except (Inexact, Rounded) as exc:
                raise InvalidAmountError(
                    f"Balance would exceed {ctx.prec} significant digits"
                ) from exc

    def _positive_amount(self, value: Any) -> Decimal:
        amount = self._to_amount(value)
        if amount <= 0:
            raise InvalidAmountError(f"Amount must be greater than 0, got {amount}")
        return amount

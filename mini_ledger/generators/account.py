"""Generator for sample account applications."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterator

from mini_ledger.generators.base import BaseGenerator
from mini_ledger.models import AccountApplication


class AccountApplicationGenerator(BaseGenerator):
    """Generate synthetic requests to open an account.

    Usernames are unique within one generator instance. Roughly a fifth of
    applicants open with an empty balance, the rest deposit between 10 and
    5 000.
    """

    EMPTY_OPENING_RATE = 0.2
    DEPOSIT_RANGE = (10, 5000)

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        super().__init__(seed, locale)
        self._used_usernames: set[str] = set()

    def generate(self) -> AccountApplication:
        """Generate a single application.

        Returns
        -------
        AccountApplication
            Generated application.
        """
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[AccountApplication]:
        """Generate multiple applications.

        Parameters
        ----------
        count : int
            Number of applications to generate.

        Yields
        ------
        AccountApplication
            Generated applications.
        """
        for _ in range(count):
            yield self._generate_one()

    def _generate_one(self) -> AccountApplication:
        if self.random.random() < self.EMPTY_OPENING_RATE:
            deposit = Decimal("0.00")
        else:
            low, high = self.DEPOSIT_RANGE
            cents = self.random.randint(low * 100, high * 100)
            deposit = Decimal(cents) / 100

        return AccountApplication(
            full_name=self.fake.name(),
            username=self._unique_username(),
            password=self.fake.password(length=12, special_chars=False),
            initial_deposit=deposit.quantize(Decimal("0.01")),
        )

    def _unique_username(self) -> str:
        base = self.fake.user_name()
        username = base
        suffix = 1
        while username in self._used_usernames:
            suffix += 1
            username = f"{base}{suffix}"
        self._used_usernames.add(username)
        return username

#!/usr/bin/env python3
"""Populate an in-memory ledger with sample accounts and activity.

Opens generated accounts, moves money between them at random, closes a
few of them and prints the resulting summary. Useful as a smoke run of
the store and for eyeballing the log output.
"""

import argparse
import random
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from mini_ledger.config import LedgerConfig
from mini_ledger.exceptions import LedgerError
from mini_ledger.generators import AccountApplicationGenerator
from mini_ledger.logging import get_logger, setup_logging
from mini_ledger.models import RecipientLookup, TransferAllTo, WithdrawAll
from mini_ledger.store import AccountStore

logger = get_logger("seed_ledger")


def open_accounts(store: AccountStore, generator: AccountApplicationGenerator, count: int) -> None:
    """Open ``count`` generated accounts."""
    print(f"\n1. Opening {count} accounts...")
    for application in generator.generate_batch(count):
        store.create_account(
            application.full_name,
            application.username,
            application.password,
            application.initial_deposit,
        )


def run_transfers(store: AccountStore, rng: random.Random, count: int) -> int:
    """Attempt ``count`` random transfers; return how many succeeded."""
    print(f"\n2. Running {count} random transfers...")
    accounts = store.active_accounts()
    succeeded = 0
    for _ in range(count):
        source, target = rng.sample(accounts, 2)
        amount = Decimal(rng.randint(1, 50000)) / 100
        lookup = rng.choice(list(RecipientLookup))
        recipient = target.username if lookup == RecipientLookup.USERNAME else target.account_id
        try:
            store.transfer(source.account_id, recipient, amount, lookup=lookup)
        except LedgerError as exc:
            logger.debug("Transfer skipped: %s", exc)
            continue
        succeeded += 1
    return succeeded


def close_some(store: AccountStore, rng: random.Random, count: int) -> None:
    """Close ``count`` accounts, alternating between the two resolutions."""
    print(f"\n3. Closing {count} accounts...")
    for i in range(count):
        accounts = store.active_accounts()
        if len(accounts) < 2:
            break
        account, heir = rng.sample(accounts, 2)
        resolution = WithdrawAll() if i % 2 == 0 else TransferAllTo(heir.username)
        store.close_account(account.account_id, resolution)


def main() -> None:
    """Seed a ledger and print its summary."""
    parser = argparse.ArgumentParser(description="Seed an in-memory ledger with sample data")
    parser.add_argument("--accounts", type=int, default=20, help="Accounts to open (default: 20)")
    parser.add_argument("--transfers", type=int, default=100, help="Transfers to attempt (default: 100)")
    parser.add_argument("--closures", type=int, default=3, help="Accounts to close (default: 3)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.accounts < 2:
        parser.error("--accounts must be at least 2")

    config = LedgerConfig.from_env()
    setup_logging(config.log_level, config.log_format)

    store = AccountStore(config=config)
    generator = AccountApplicationGenerator(seed=args.seed)
    rng = random.Random(args.seed)

    open_accounts(store, generator, args.accounts)
    opening_total = store.summary()["total_balance"]

    succeeded = run_transfers(store, rng, args.transfers)
    print(f"   {succeeded}/{args.transfers} transfers succeeded")

    if store.summary()["total_balance"] != opening_total:
        raise SystemExit("Transfers changed the total balance")

    close_some(store, rng, args.closures)

    print("\n" + "=" * 60)
    for key, value in store.summary().items():
        print(f"  {key:<16} {value}")
    print("=" * 60)


if __name__ == "__main__":
    main()

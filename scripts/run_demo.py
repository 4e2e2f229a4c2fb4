#!/usr/bin/env python3
"""Walk through the card ledger end to end.

1. Opens a card with a 1000 USD limit, buys 400, tries 700 (declined)
   and buys 600, reaching the limit exactly.
2. Opens a second card and fills it with generated purchases.
3. Writes both invoices and a JSON export of each account.

Settings come from the environment (see ``LedgerConfig.from_env``);
command-line options override them.
"""

import argparse
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from card_ledger import Account, CardBrand, InsufficientFundsError
from card_ledger.config import LedgerConfig
from card_ledger.generators import PurchaseGenerator
from card_ledger.logging import get_logger, setup_logging
from card_ledger.sinks import JsonFileSink

logger = get_logger(__name__)


def run_limit_scenario(expiration: datetime) -> Account:
    """Fill a 1000 USD card exactly to its limit, with one declined purchase."""
    account = Account(123456, expiration, 1000, CardBrand.VISA, 4111111111111111)

    account.submit_purchase(400, "A")
    try:
        account.submit_purchase(700, "B")
    except InsufficientFundsError as e:
        logger.warning("CC %s | %s", account.number, e)
    account.submit_purchase(600, "C")

    return account


def run_generated_scenario(expiration: datetime, seed: int | None, count: int) -> Account:
    """Fill a card with generated purchases."""
    account = Account(654321, expiration, 2500, CardBrand.MASTERCARD, 5555555555554444)
    accepted = PurchaseGenerator(seed=seed).fill(account, count)
    logger.info("CC %s | %d of %d generated purchases accepted", account.number, accepted, count)
    return account


def main() -> None:
    """Main entry point."""
    config = LedgerConfig.from_env()

    parser = argparse.ArgumentParser(description="Card ledger walkthrough")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for invoices and JSON exports (default: from environment)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for generated purchases (default: 42)",
    )
    parser.add_argument(
        "--purchases",
        type=int,
        default=20,
        help="Number of generated purchases for the second card (default: 20)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, config.log_format)

    if args.output_dir is not None:
        config.statement.output_dir = args.output_dir
        config.export.json_output_dir = args.output_dir
    config.statement.output_dir.mkdir(parents=True, exist_ok=True)

    expiration = datetime.now() + timedelta(days=3 * 365)
    accounts = [
        run_limit_scenario(expiration),
        run_generated_scenario(expiration, args.seed, args.purchases),
    ]

    sink = JsonFileSink(config.export.json_output_dir, pretty=config.export.pretty_json)
    failures = 0
    for account in accounts:
        written = account.generate_statement(
            config.statement.path_for(account.number),
            strict=config.statement.strict,
            encoding=config.statement.encoding,
        )
        if not written:
            failures += 1
        sink.write_account(account)
    sink.close()

    if failures:
        logger.error("%d invoice(s) could not be written", failures)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Synthetic purchase generator for demos and tests."""

from decimal import Decimal
from typing import Iterator

from card_ledger.exceptions import InsufficientFundsError
from card_ledger.generators.base import BaseGenerator
from card_ledger.logging import get_logger
from card_ledger.models.account import Account

logger = get_logger(__name__)


class PurchaseGenerator(BaseGenerator):
    """Generate synthetic card purchases."""

    # MCC code -> (category, amount range in USD)
    MCC_CATEGORIES = {
        "5411": ("Groceries", (15, 250)),
        "5541": ("Gas Station", (20, 90)),
        "5812": ("Restaurant", (12, 150)),
        "5814": ("Fast Food", (5, 35)),
        "5912": ("Pharmacy", (5, 120)),
        "5311": ("Department Store", (20, 600)),
        "5732": ("Electronics", (30, 1500)),
        "5942": ("Bookstore", (8, 80)),
        "7832": ("Cinema", (8, 40)),
        "4121": ("Taxi", (6, 60)),
    }

    def generate(self) -> tuple[Decimal, str]:
        """Generate one purchase.

        Returns
        -------
        tuple[Decimal, str]
            Amount and description, ready for ``Account.submit_purchase``.
        """
        mcc_code = self.rng.choice(list(self.MCC_CATEGORIES))
        category, amount_range = self.MCC_CATEGORIES[mcc_code]
        amount = round(self.rng.uniform(*amount_range), 2)

        return Decimal(str(amount)), f"{category} - {self.fake.company()}"

    def generate_many(self, count: int) -> Iterator[tuple[Decimal, str]]:
        """Generate ``count`` purchases."""
        for _ in range(count):
            yield self.generate()

    def fill(self, account: Account, count: int) -> int:
        """Submit up to ``count`` generated purchases to an account.

        Purchases rejected for insufficient funds are logged and skipped.

        Returns
        -------
        int
            Number of accepted purchases.
        """
        accepted = 0
        for amount, description in self.generate_many(count):
            try:
                account.submit_purchase(amount, description)
            except InsufficientFundsError as e:
                logger.warning(
                    "CC %s | Purchase of USD %s declined: %s",
                    account.number,
                    amount,
                    e,
                    extra={"extra": {"account": account.number, "amount": amount}},
                )
                continue
            accepted += 1
        return accepted

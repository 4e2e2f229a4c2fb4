"""Purchase model for the account ledger."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Purchase:
    """One committed card purchase.

    Purchases are only created by ``Account.submit_purchase``, which stamps
    ``timestamp`` at the moment the purchase is accepted.
    """

    amount: Decimal  # no sign constraint
    description: str
    timestamp: datetime

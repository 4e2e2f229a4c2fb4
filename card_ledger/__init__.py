"""Credit card account ledger with validated limits and plain-text invoices."""

from card_ledger.exceptions import (
    AccountValidationError,
    ConfigurationError,
    InsufficientFundsError,
    InvalidAccessCodeError,
    InvalidExpirationError,
    InvalidLimitError,
    LedgerError,
    ReportWriteError,
)
from card_ledger.models import Account, AccountSnapshot, CardBrand, Purchase

__version__ = "0.1.0"

__all__ = [
    "Account",
    "AccountSnapshot",
    "AccountValidationError",
    "CardBrand",
    "ConfigurationError",
    "InsufficientFundsError",
    "InvalidAccessCodeError",
    "InvalidExpirationError",
    "InvalidLimitError",
    "LedgerError",
    "Purchase",
    "ReportWriteError",
]

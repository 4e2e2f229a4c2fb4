"""Custom exception hierarchy for card-ledger."""

from decimal import Decimal


class LedgerError(Exception):
    """Base exception for all card-ledger errors."""


class AccountValidationError(LedgerError, ValueError):
    """Raised when an account field fails validation."""


class InvalidExpirationError(AccountValidationError):
    """Raised when an expiration date is not in the future."""


class InvalidLimitError(AccountValidationError):
    """Raised when a spending limit is negative or not a finite number."""


class InvalidAccessCodeError(AccountValidationError):
    """Raised when an access code does not have exactly six digits."""


class InsufficientFundsError(LedgerError):
    """Raised when a purchase would push the balance past the spending limit."""

    def __init__(
        self,
        message: str,
        amount: Decimal | None = None,
        balance: Decimal | None = None,
        spending_limit: Decimal | None = None,
    ) -> None:
        super().__init__(message)
        self.amount = amount
        self.balance = balance
        self.spending_limit = spending_limit


class ReportWriteError(LedgerError):
    """Raised when a statement or export cannot be written."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""

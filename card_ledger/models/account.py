"""Credit card account model with balance and purchase ledger."""

import threading
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Callable

from card_ledger.exceptions import (
    AccountValidationError,
    InsufficientFundsError,
    InvalidAccessCodeError,
    InvalidExpirationError,
    InvalidLimitError,
)
from card_ledger.logging import get_logger
from card_ledger.models.enums import CardBrand
from card_ledger.models.purchase import Purchase

logger = get_logger(__name__)

ACCESS_CODE_MIN = 100000
ACCESS_CODE_MAX = 999999

Number = int | float | str | Decimal


def to_decimal(
    value: Number,
    error_cls: type[AccountValidationError] = AccountValidationError,
) -> Decimal:
    """Convert a numeric input to a finite Decimal.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather
    than its binary expansion.
    """
    if isinstance(value, bool):
        raise error_cls(f"Expected a number, got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise error_cls(f"Expected a number, got {value!r}") from e
    if not result.is_finite():
        raise error_cls(f"Expected a finite number, got {value!r}")
    return result


@dataclass(frozen=True)
class AccountSnapshot:
    """Point-in-time copy of an account, safe to render or export.

    The access code is not included.
    """

    number: int
    brand: str
    expiration: datetime
    spending_limit: Decimal
    balance: Decimal
    available_limit: Decimal
    purchases: tuple[Purchase, ...]


class Account:
    """Credit card account.

    Holds an immutable identity (number, brand, expiration), a validated
    spending limit and access code, and an append-only purchase ledger.
    The balance never exceeds the spending limit as a result of an
    accepted purchase.

    Parameters
    ----------
    access_code : int
        Six-digit code in [100000, 999999].
    expiration : datetime
        Expiration timestamp, strictly later than ``clock()``.
    spending_limit : int | float | str | Decimal
        Non-negative limit.
    brand : str
        Issuer label; ``CardBrand`` members are accepted.
    number : int
        Account (card) number.
    clock : Callable[[], datetime]
        Time source for validation and purchase timestamps.
    """

    def __init__(
        self,
        access_code: int,
        expiration: datetime,
        spending_limit: Number,
        brand: str,
        number: int,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._clock = clock
        self._lock = threading.Lock()

        if expiration <= _comparable_now(expiration, clock()):
            raise InvalidExpirationError("Credit card expiration date should be in the future")

        self._number = number
        self._brand = brand.value if isinstance(brand, CardBrand) else brand
        self._expiration = expiration
        self._spending_limit = _validate_limit(spending_limit)
        self._access_code = _validate_access_code(access_code)
        self._balance = Decimal("0")
        self._purchases: list[Purchase] = []

    def __repr__(self) -> str:
        return (
            f"Account(number={self._number!r}, brand={self._brand!r}, "
            f"balance={self._balance}, spending_limit={self._spending_limit})"
        )

    @property
    def number(self) -> int:
        return self._number

    @property
    def brand(self) -> str:
        return self._brand

    @property
    def expiration(self) -> datetime:
        return self._expiration

    @property
    def spending_limit(self) -> Decimal:
        return self._spending_limit

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def available_limit(self) -> Decimal:
        """Remaining limit; negative after a limit cut below the balance."""
        return self._spending_limit - self._balance

    @property
    def access_code(self) -> int:
        return self._access_code

    @property
    def purchases(self) -> tuple[Purchase, ...]:
        """Purchases in the order they were accepted."""
        return tuple(self._purchases)

    def set_limit(self, new_limit: Number) -> None:
        """Replace the spending limit.

        The new limit is not checked against the current balance; a limit
        below the balance just blocks further purchases.
        """
        limit = _validate_limit(new_limit)
        with self._lock:
            self._spending_limit = limit

    def set_access_code(self, new_code: int) -> None:
        """Replace the access code."""
        code = _validate_access_code(new_code)
        with self._lock:
            self._access_code = code

    def submit_purchase(self, amount: Number, description: str) -> Decimal:
        """Record a purchase and return the new balance.

        Parameters
        ----------
        amount : int | float | str | Decimal
            Purchase amount.
        description : str
            Free-text description.

        Returns
        -------
        Decimal
            Balance including the accepted purchase.

        Raises
        ------
        InsufficientFundsError
            If the purchase would exceed the spending limit. Nothing is
            recorded in that case.
        """
        value = to_decimal(amount)

        with self._lock:
            new_balance = self._balance + value
            if new_balance > self._spending_limit:
                raise InsufficientFundsError(
                    "Purchase amount is higher than the available limit",
                    amount=value,
                    balance=self._balance,
                    spending_limit=self._spending_limit,
                )

            self._purchases.append(Purchase(value, description, self._clock()))
            self._balance = new_balance

        logger.info(
            "CC %s | New purchase: USD %s | Current balance: USD %s",
            self._number,
            value,
            new_balance,
            extra={"extra": {"account": self._number, "amount": value, "balance": new_balance}},
        )
        return new_balance

    def snapshot(self) -> AccountSnapshot:
        """Return a consistent copy of the account state."""
        with self._lock:
            return AccountSnapshot(
                number=self._number,
                brand=self._brand,
                expiration=self._expiration,
                spending_limit=self._spending_limit,
                balance=self._balance,
                available_limit=self._spending_limit - self._balance,
                purchases=tuple(self._purchases),
            )

    def generate_statement(
        self,
        destination: str | Path,
        *,
        strict: bool = False,
        encoding: str = "utf-8",
    ) -> bool:
        """Write a plain-text invoice to ``destination``.

        Reporting is best-effort: I/O failures are logged and ``False`` is
        returned. Pass ``strict=True`` to get a ``ReportWriteError`` instead.
        """
        # sinks.statement imports this module; a top-level import would be circular
        from card_ledger.sinks.statement import write_statement

        return write_statement(
            self,
            destination,
            generated_at=self._clock(),
            strict=strict,
            encoding=encoding,
        )


def _validate_limit(value: Number) -> Decimal:
    limit = to_decimal(value, InvalidLimitError)
    if limit < 0:
        raise InvalidLimitError("Credit card limit should not be negative")
    return limit


def _validate_access_code(code: int) -> int:
    if isinstance(code, bool) or not isinstance(code, int):
        raise InvalidAccessCodeError(f"Access code must be an integer, got {code!r}")
    if code < ACCESS_CODE_MIN or code > ACCESS_CODE_MAX:
        raise InvalidAccessCodeError("Access code must have exactly six digits")
    return code


def _comparable_now(expiration: datetime, now: datetime) -> datetime:
    """Align ``now`` with the awareness of ``expiration`` so they compare."""
    if expiration.tzinfo is not None and now.tzinfo is None:
        return now.astimezone(expiration.tzinfo)
    if expiration.tzinfo is None and now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now

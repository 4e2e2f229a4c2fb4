"""Property-based tests for the account ledger."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from card_ledger.exceptions import (
    InsufficientFundsError,
    InvalidAccessCodeError,
    InvalidExpirationError,
    InvalidLimitError,
)
from card_ledger.models import Account
from card_ledger.sinks.statement import parse_statement, render_statement

NOW = datetime(2026, 10, 19, 14, 5)

limits = st.decimals(min_value=0, max_value=1_000_000, places=2, allow_nan=False)
amounts = st.decimals(min_value=-500, max_value=5_000, places=2, allow_nan=False)
descriptions = st.text(
    alphabet=st.characters(exclude_categories=("Cs",), exclude_characters="\r\n"),
    max_size=40,
)
valid_codes = st.integers(min_value=100000, max_value=999999)
invalid_codes = st.integers().filter(lambda c: not 100000 <= c <= 999999)


def make_account(limit: Decimal = Decimal("1000"), code: int = 123456) -> Account:
    return Account(code, NOW + timedelta(days=365), limit, "VISA", 1, clock=lambda: NOW)


@given(limit=limits, code=valid_codes)
def test_new_account_is_empty(limit: Decimal, code: int) -> None:
    account = make_account(limit, code)

    assert account.balance == 0
    assert account.purchases == ()


@given(limit=limits, attempts=st.lists(amounts, max_size=30))
@settings(max_examples=200)
def test_balance_is_sum_of_accepted_and_within_limit(
    limit: Decimal, attempts: list[Decimal]
) -> None:
    account = make_account(limit)

    for amount in attempts:
        before = (account.balance, len(account.purchases))
        try:
            account.submit_purchase(amount, "x")
        except InsufficientFundsError:
            assert (account.balance, len(account.purchases)) == before
        assert account.balance <= account.spending_limit

    assert account.balance == sum((p.amount for p in account.purchases), Decimal("0"))


@given(limit=limits, bad=st.decimals(max_value=Decimal("-0.01"), allow_nan=False, places=2))
def test_negative_limit_keeps_previous(limit: Decimal, bad: Decimal) -> None:
    account = make_account(limit)

    with pytest.raises(InvalidLimitError):
        account.set_limit(bad)
    assert account.spending_limit == limit


@given(code=invalid_codes)
def test_invalid_access_code_keeps_previous(code: int) -> None:
    account = make_account()

    with pytest.raises(InvalidAccessCodeError):
        account.set_access_code(code)
    assert account.access_code == 123456


@given(offset=st.integers(min_value=0, max_value=10**8))
def test_past_expiration_always_fails(offset: int) -> None:
    with pytest.raises(InvalidExpirationError):
        Account(123456, NOW - timedelta(seconds=offset), 1000, "VISA", 1, clock=lambda: NOW)


@given(offset=st.integers(min_value=1, max_value=10**8))
def test_future_expiration_always_succeeds(offset: int) -> None:
    expiration = NOW + timedelta(seconds=offset)
    account = Account(123456, expiration, 1000, "VISA", 1, clock=lambda: NOW)
    assert account.expiration == expiration


@given(
    purchases=st.lists(
        st.tuples(st.decimals(min_value=0, max_value=100, places=4), descriptions),
        max_size=15,
    )
)
def test_statement_round_trip(purchases: list[tuple[Decimal, str]]) -> None:
    account = make_account(Decimal("1500"))
    for amount, description in purchases:
        account.submit_purchase(amount, description)

    rows = parse_statement(render_statement(account, NOW))

    assert [(r.amount, r.description) for r in rows] == [
        (p.amount, p.description) for p in account.purchases
    ]

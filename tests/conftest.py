"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta

import pytest

from card_ledger.models import Account, CardBrand


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to 19/10/2026 14:05."""
    return FixedClock(datetime(2026, 10, 19, 14, 5))


@pytest.fixture
def expiration(clock: FixedClock) -> datetime:
    """Expiration two years after the fixed clock."""
    return clock.now + timedelta(days=730)


@pytest.fixture
def account(clock: FixedClock, expiration: datetime) -> Account:
    """VISA account with a 1000 USD limit and no purchases."""
    return Account(123456, expiration, 1000, CardBrand.VISA, 4111111111111111, clock=clock)

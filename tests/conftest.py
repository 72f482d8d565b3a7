"""
Shared fixtures.

Test strategy:
1. Storage runs against real JSON files under tmp_path
2. Rate sources are in-memory fakes or httpx.MockTransport
3. No real network calls, no real clock in rate tests
"""

import random

import pytest

from terminal_budget.audit import AuditLogger
from terminal_budget.models.budget import WalletFields
from terminal_budget.models.session import Session, WalletScreen
from terminal_budget.services.rates import RateCache, RateSource, RateSourceError
from terminal_budget.services.storage import JsonBudgetStorage


NOW = 1_700_000_000.0


class FixedClock:
    """Callable clock returning a settable unix time."""

    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSource(RateSource):
    """In-memory rate source that records every fetch."""

    def __init__(self, name: str, rates=None, error: str = None):
        self.name = name
        self._rates = rates or {}
        self._error = error
        self.calls: list[str] = []

    def fetch(self, base: str) -> dict[str, float]:
        self.calls.append(base)
        if self._error:
            raise RateSourceError(self.name, self._error)
        return dict(self._rates)


class StubProvider:
    """Provider double returning one fixed table for every base."""

    def __init__(self, rates: dict[str, float]):
        self._rates = rates
        self.calls: list[str] = []

    def rates(self, base: str) -> dict[str, float]:
        self.calls.append(base)
        return dict(self._rates)


class LoudProvider:
    """Provider double that fails the test if it is consulted at all."""

    def rates(self, base: str) -> dict[str, float]:
        raise AssertionError(f"rate provider consulted for {base}")


class RecordingAuditLogger(AuditLogger):
    """Audit logger that keeps events in memory."""

    def __init__(self):
        super().__init__()
        self.events = []

    def log(self, event) -> None:
        self.events.append(event)

    def types(self) -> list[str]:
        return [event.event_type.value for event in self.events]


HOME_WALLETS = [
    WalletFields(name="Cash", owner="alice", type="cash", currency="USD", balance=100.0),
    WalletFields(name="Bank", owner="bob", type="bank", currency="EUR", balance=200.0),
    WalletFields(name="Savings", owner="alice", type="bank", currency="USD", balance=300.0),
]


@pytest.fixture
def storage(tmp_path):
    return JsonBudgetStorage(tmp_path / "files")


@pytest.fixture
def home(storage):
    """A budget named "home" with three wallets (USD, EUR, USD)."""
    storage.create_budget("home")
    for fields in HOME_WALLETS:
        storage.create_wallet("home", fields)
    return storage.load_budget("home")


@pytest.fixture
def wallet_session(storage, home):
    """A session on the wallet screen with "home" open."""
    session = Session()
    session.workspace.load(home)
    session.screen = WalletScreen()
    return session


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def cache(tmp_path):
    return RateCache(tmp_path / "cache" / "exchange_cache.json")


@pytest.fixture
def audit():
    return RecordingAuditLogger()


@pytest.fixture
def rng():
    return random.Random(1234)

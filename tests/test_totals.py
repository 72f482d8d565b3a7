"""Tests for the wallet screen total."""

import pytest

from conftest import FakeSource, StubProvider
from terminal_budget.queries import TotalsCalculator
from terminal_budget.models.session import Workspace
from terminal_budget.services.conversion import ConversionService
from terminal_budget.services.rates import RateProvider


@pytest.fixture
def workspace(home):
    workspace = Workspace()
    workspace.load(home)
    return workspace


class TestTotals:
    """Tests for TotalsCalculator."""

    def test_converts_to_default_currency(self, workspace):
        calculator = TotalsCalculator(ConversionService(StubProvider({"EUR": 0.5})))
        result = calculator.calculate(workspace)

        assert result.wallet_count == 3
        assert result.currency == "USD"
        assert result.total == pytest.approx(100 + 200 / 0.5 + 300)
        assert result.unconverted == []

    def test_display_currency_uses_default_as_base(self, workspace):
        provider = StubProvider({"EUR": 0.5})
        workspace.display_currency = "EUR"

        result = TotalsCalculator(ConversionService(provider)).calculate(workspace)
        assert result.currency == "EUR"
        assert result.total == pytest.approx(100 * 0.5 + 200 + 300 * 0.5)
        assert set(provider.calls) == {"USD"}

    def test_excluded_wallets_do_not_count(self, workspace):
        workspace.hidden = {2}
        workspace.filters.owner = "alice"

        result = TotalsCalculator(ConversionService(StubProvider({}))).calculate(workspace)
        assert result.wallet_count == 1
        assert result.total == 100.0
        assert result.count_label == "1 wallet"

    def test_missing_rate_adds_unconverted(self, workspace, audit):
        calculator = TotalsCalculator(ConversionService(StubProvider({})), audit)
        result = calculator.calculate(workspace)

        assert result.total == pytest.approx(600.0)
        assert result.unconverted == ["Bank"]
        assert audit.types() == ["conversion_fallback"]

    def test_zero_rate_adds_unconverted(self, workspace):
        calculator = TotalsCalculator(ConversionService(StubProvider({"EUR": 0.0, "USD": 1.0})))
        result = calculator.calculate(workspace)

        assert result.total == pytest.approx(600.0)
        assert result.unconverted == ["Bank"]

    def test_rates_unavailable_asked_once(self, workspace, cache, clock):
        source = FakeSource("down", error="offline")
        workspace.wallets.append(workspace.wallets[1].model_copy(update={"name": "Bank 2"}))
        provider = RateProvider([source], cache, clock=clock)

        result = TotalsCalculator(ConversionService(provider)).calculate(workspace)
        assert result.total == pytest.approx(800.0)
        assert result.unconverted == ["Bank", "Bank 2"]
        assert source.calls == ["USD"]

    def test_invalid_display_currency_falls_back(self, workspace):
        workspace.display_currency = "XX"
        result = TotalsCalculator(ConversionService(StubProvider({}))).calculate(workspace)
        assert result.total == pytest.approx(600.0)
        assert len(result.unconverted) == 3

    def test_empty_budget(self):
        workspace = Workspace()
        result = TotalsCalculator(ConversionService(StubProvider({}))).calculate(workspace)
        assert result.wallet_count == 0
        assert result.total == 0.0
        assert result.count_label == "0 wallets"

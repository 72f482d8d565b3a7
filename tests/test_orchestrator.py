"""Tests for application wiring and configuration."""

import random

import httpx
import pytest

from conftest import RecordingAuditLogger
from terminal_budget.config import Settings, get_settings, validate_all_settings
from terminal_budget.models.session import ScreenKind
from terminal_budget.orchestrator import create_app_components, seed_if_first_run
from terminal_budget.services.storage import EXAMPLE_BUDGET_NAME


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("BUDGET_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield tmp_path / "data"
    get_settings.cache_clear()


def rates_transport(rates):
    def handler(request):
        return httpx.Response(200, json={"result": "success", "rates": rates})
    return httpx.MockTransport(handler)


class TestSettings:

    def test_paths_follow_data_dir(self, data_dir):
        settings = Settings()
        assert settings.storage.files_dir == data_dir / "files"
        assert settings.cache_path == data_dir / "exchange_cache.json"
        assert settings.log_path == data_dir / "budget.log"

    def test_rate_overrides(self, data_dir, monkeypatch):
        monkeypatch.setenv("BUDGET_RATES_CACHE_TTL", "60")
        assert Settings().rates.cache_ttl == 60

    def test_invalid_section_reported(self, data_dir, monkeypatch):
        monkeypatch.setenv("BUDGET_LOG_LEVEL", "loud")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["app"] is False
        assert "loud" in results["app_error"]


class TestFirstRun:

    def test_seeds_once(self, storage):
        audit = RecordingAuditLogger()
        assert seed_if_first_run(storage, audit) is True
        assert seed_if_first_run(storage, audit) is False
        assert [b.name for b in storage.list_budgets()] == [EXAMPLE_BUDGET_NAME]
        assert audit.types() == ["example_seeded"]

    def test_existing_budget_prevents_seed(self, storage, home):
        assert seed_if_first_run(storage) is False
        assert [b.name for b in storage.list_budgets()] == ["home"]


class TestAppComponents:

    def test_starts_on_greeting_with_example(self, data_dir):
        components = create_app_components(rng=random.Random(3), configure_logging=False)

        assert components.machine.kind == ScreenKind.GREETING
        view = components.view()
        assert [f.name for f in view.files] == [EXAMPLE_BUDGET_NAME]
        assert (data_dir / "files" / f"{EXAMPLE_BUDGET_NAME}.json").is_file()

    def test_seed_can_be_disabled(self, data_dir, monkeypatch):
        monkeypatch.setenv("BUDGET_SEED_EXAMPLE", "false")
        components = create_app_components(configure_logging=False)
        assert components.view().files == []

    def test_example_totals_use_rates(self, data_dir):
        components = create_app_components(
            transport=rates_transport({"EUR": 0.8}),
            configure_logging=False,
        )
        components.machine.handle_key("enter")

        view = components.view()
        assert view.kind == "wallet"
        assert view.totals.wallet_count == 5
        assert view.totals.currency == "USD"
        assert view.totals.total == pytest.approx(250.75 + 1500.0 + 800.5 / 0.8 + 5000.0 + 2000.0)
        assert (data_dir / "exchange_cache.json").is_file()

    def test_totals_survive_rate_outage(self, data_dir):
        def down(request):
            raise httpx.ConnectError("offline", request=request)

        components = create_app_components(
            transport=httpx.MockTransport(down),
            configure_logging=False,
        )
        components.machine.handle_key("enter")

        totals = components.view().totals
        assert totals.unconverted == ["Savings Fund"]
        assert totals.total == pytest.approx(250.75 + 1500.0 + 800.5 + 5000.0 + 2000.0)


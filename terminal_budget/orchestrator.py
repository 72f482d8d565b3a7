"""
Application Wiring for Terminal Budget

Builds the components the interactive front-end needs:
storage → rate provider → conversion → totals, plus the state machine that
ties the session engine together, all sharing one audit logger.

DESIGN DECISION: Nothing here touches the terminal. The front-end asks for
an AppComponents bundle, feeds keys to `machine` and draws `describe()`
results; tests can build the same bundle on a temporary directory.
"""

import random
from dataclasses import dataclass
from typing import Optional

import httpx

from terminal_budget.audit import AuditLogger, configure_file_logging
from terminal_budget.config import Settings, get_settings
from terminal_budget.queries import TotalsCalculator
from terminal_budget.services.conversion import ConversionService
from terminal_budget.services.rates import RateCache, RateProvider, default_sources
from terminal_budget.services.storage import (
    EXAMPLE_BUDGET_NAME,
    BudgetStorageInterface,
    JsonBudgetStorage,
    StorageError,
    seed_example_budget,
)
from terminal_budget.session import ScreenStateMachine, ScreenView, describe
from terminal_budget.validation import ValidationError


@dataclass
class AppComponents:
    storage: BudgetStorageInterface
    provider: RateProvider
    conversion: ConversionService
    totals: TotalsCalculator
    machine: ScreenStateMachine
    audit_logger: AuditLogger

    def view(self) -> ScreenView:
        """Describe the active screen."""
        return describe(self.machine.session, self.totals)


def seed_if_first_run(
    storage: BudgetStorageInterface,
    audit_logger: Optional[AuditLogger] = None,
) -> bool:
    """
    Create the example budget when no budget exists yet.

    Returns True if the example was created. A failed seed is logged and
    the application starts with an empty picker.
    """
    try:
        if storage.list_budgets():
            return False
        count = seed_example_budget(storage)
    except (StorageError, ValidationError) as e:
        if audit_logger:
            audit_logger.log_error("example_seed_failed", str(e))
        return False

    if audit_logger:
        audit_logger.log_example_seeded(EXAMPLE_BUDGET_NAME, count)
    return True


def create_app_components(
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
    transport: Optional[httpx.BaseTransport] = None,
    configure_logging: bool = True,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (defaults to get_settings())
        rng: Random source for the greeting line
        transport: httpx transport for the rate sources (tests pass a mock)
        configure_logging: Route logs to the configured log file

    Returns:
        AppComponents with the state machine on the greeting screen
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    rate_settings = settings.rates

    if configure_logging:
        app_settings = settings.app
        level = "DEBUG" if app_settings.debug_mode else app_settings.log_level
        configure_file_logging(settings.log_path, level)

    audit_logger = AuditLogger()
    storage = JsonBudgetStorage(storage_settings.files_dir)

    if storage_settings.seed_example:
        seed_if_first_run(storage, audit_logger)

    provider = RateProvider(
        sources=default_sources(rate_settings, transport=transport),
        cache=RateCache(settings.cache_path),
        ttl_seconds=rate_settings.cache_ttl,
        audit_logger=audit_logger,
    )
    conversion = ConversionService(provider)

    return AppComponents(
        storage=storage,
        provider=provider,
        conversion=conversion,
        totals=TotalsCalculator(conversion, audit_logger),
        machine=ScreenStateMachine(storage, rng=rng, audit_logger=audit_logger),
        audit_logger=audit_logger,
    )

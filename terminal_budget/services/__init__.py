"""Services package."""

from terminal_budget.services.conversion import ConversionService, RateNotFound
from terminal_budget.services.rates import (
    HttpRateSource,
    RateCache,
    RateCacheError,
    RateProvider,
    RateSource,
    RateSourceError,
    RatesUnavailable,
    default_sources,
)
from terminal_budget.services.storage import (
    BudgetStorageInterface,
    DuplicateError,
    EXAMPLE_BUDGET_NAME,
    JsonBudgetStorage,
    NotFoundError,
    StorageError,
    seed_example_budget,
)

__all__ = [
    # Conversion
    "ConversionService",
    "RateNotFound",
    # Rates
    "HttpRateSource",
    "RateCache",
    "RateCacheError",
    "RateProvider",
    "RateSource",
    "RateSourceError",
    "RatesUnavailable",
    "default_sources",
    # Storage
    "BudgetStorageInterface",
    "DuplicateError",
    "EXAMPLE_BUDGET_NAME",
    "JsonBudgetStorage",
    "NotFoundError",
    "StorageError",
    "seed_example_budget",
]

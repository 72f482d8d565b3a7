"""Exchange rate package: remote sources, file cache and the provider."""

from terminal_budget.services.rates.cache import RateCache, RateCacheError
from terminal_budget.services.rates.provider import (
    DEFAULT_TTL_SECONDS,
    RateProvider,
    RatesUnavailable,
)
from terminal_budget.services.rates.sources import (
    HttpRateSource,
    RateSource,
    RateSourceError,
    default_sources,
)

__all__ = [
    "DEFAULT_TTL_SECONDS",
    "HttpRateSource",
    "RateCache",
    "RateCacheError",
    "RateProvider",
    "RateSource",
    "RateSourceError",
    "RatesUnavailable",
    "default_sources",
]

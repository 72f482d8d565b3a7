"""
Rate Provider

Answers "what are the rates relative to BASE?" with, in order:
1. The cached snapshot, if it is for BASE and younger than its TTL
2. The first configured source that responds with a usable rate table

A successful fetch always replaces the cache slot, whatever base it held.
An expired snapshot is never used as a fallback when every source fails.
"""

import time
from typing import Callable, Optional, Sequence

from terminal_budget.audit import AuditLogger
from terminal_budget.models.rates import RateSnapshot
from terminal_budget.services.rates.cache import RateCache, RateCacheError
from terminal_budget.services.rates.sources import RateSource, RateSourceError
from terminal_budget.validation import normalize_currency


DEFAULT_TTL_SECONDS = 3600


class RatesUnavailable(Exception):
    """No source could provide rates for the requested base."""

    def __init__(self, base: str, last_error: Optional[Exception]):
        self.base = base
        self.last_error = last_error
        detail = f": {last_error}" if last_error else ""
        super().__init__(f"exchange rates for {base} are unavailable{detail}")


class RateProvider:
    """
    Cached, multi-source exchange rate lookup.

    `clock` returns unix seconds and exists so tests can move time.
    """

    def __init__(
        self,
        sources: Sequence[RateSource],
        cache: RateCache,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._sources = list(sources)
        self._cache = cache
        self._ttl = ttl_seconds
        self._clock = clock
        self._audit_logger = audit_logger

    def rates(self, base: str) -> dict[str, float]:
        """
        Get the rate table for `base`.

        Raises:
            InvalidCurrencyCode: If `base` is not a 3-letter code
            RatesUnavailable: If the cache cannot serve and every source fails
        """
        base = normalize_currency(base)
        now = self._clock()

        snapshot = self._cache.load()
        if snapshot is not None and snapshot.serves(base, now):
            if self._audit_logger:
                self._audit_logger.log_rates_cache_hit(base, now - snapshot.timestamp)
            return dict(snapshot.rates)

        last_error: Optional[Exception] = None
        for source in self._sources:
            try:
                rates = source.fetch(base)
            except RateSourceError as e:
                last_error = e
                if self._audit_logger:
                    self._audit_logger.log_rate_source_failed(base, source.name, str(e))
                continue

            self._store(RateSnapshot(
                rates=rates,
                base=base,
                timestamp=int(now),
                ttl=self._ttl,
            ))
            if self._audit_logger:
                self._audit_logger.log_rates_fetched(base, source.name, len(rates))
            return rates

        if self._audit_logger:
            self._audit_logger.log_rates_unavailable(base, str(last_error))
        raise RatesUnavailable(base, last_error)

    def _store(self, snapshot: RateSnapshot) -> None:
        """Write the cache; a failed write only costs a refetch next time."""
        try:
            self._cache.save(snapshot)
        except RateCacheError as e:
            if self._audit_logger:
                self._audit_logger.log_error("rate_cache_write", str(e))

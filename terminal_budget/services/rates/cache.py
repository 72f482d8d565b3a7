"""
Exchange Rate Cache

A single JSON file holding the last fetched rate table:

    {"rates": {...}, "base": "USD", "timestamp": 1700000000, "ttl": 3600}

Only one snapshot is kept. Whether it may be used is decided by the
provider (same base, not expired).
"""

from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError as SchemaError

from terminal_budget.models.rates import RateSnapshot


logger = structlog.get_logger(__name__)


class RateCacheError(Exception):
    """The cache file could not be written."""
    pass


class RateCache:
    """File-backed single-slot rate cache."""

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[RateSnapshot]:
        """
        Read the cached snapshot.

        A missing file means "no cache". An unreadable or malformed file is
        logged and also treated as "no cache".
        """
        if not self._path.exists():
            return None

        try:
            return RateSnapshot.model_validate_json(self._path.read_bytes())
        except (OSError, SchemaError) as e:
            logger.warning("rate_cache_unreadable", path=str(self._path), error=str(e))
            return None

    def save(self, snapshot: RateSnapshot) -> None:
        """Overwrite the cache slot."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(snapshot.model_dump_json(indent=1), encoding="utf-8")
        except OSError as e:
            raise RateCacheError(f"failed to write rate cache {self._path}: {e}")

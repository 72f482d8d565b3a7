"""
Exchange Rate Models

RatesPayload is the tolerant parser for remote responses; RateSnapshot is
the single cached rate table written to disk.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field


Rate = Annotated[float, Field(gt=0)]


class RatesPayload(BaseModel):
    """
    Body of a rate source response.

    Frankfurter answers {amount, base, date, rates}; open.er-api answers
    {result, base_code, rates, time_last_update_unix, ...}. Only `rates`
    is required, everything else is ignored.
    """
    model_config = ConfigDict(extra="ignore")

    rates: dict[str, Rate] = Field(
        ...,
        description="Currency code to rate relative to the base"
    )
    base: Optional[str] = None
    timestamp: Optional[int] = None


class RateSnapshot(BaseModel):
    """
    A rate table as persisted in the cache slot.

    Only one snapshot is kept; loading rates for another base replaces it.
    """

    rates: dict[str, Rate]
    base: str = Field(..., min_length=3, max_length=3)
    timestamp: int = Field(
        ...,
        description="Fetch time in unix seconds"
    )
    ttl: int = Field(
        ...,
        ge=0,
        description="Seconds the snapshot stays valid"
    )

    def is_fresh(self, now: float) -> bool:
        return now - self.timestamp < self.ttl

    def serves(self, base: str, now: float) -> bool:
        """True if this snapshot can answer a request for `base` at `now`."""
        return self.base == base and self.is_fresh(now)

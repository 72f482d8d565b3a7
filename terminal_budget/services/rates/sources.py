"""
Remote Exchange Rate Sources

Two free JSON endpoints are supported out of the box:
- Frankfurter: {"amount": 1.0, "base": "EUR", "date": "...", "rates": {...}}
- open.er-api: {"result": "success", "base_code": "EUR", "rates": {...}, ...}

Both are read through the same tolerant RatesPayload model, so any other
endpoint that returns a `rates` object can be configured as well.

Transport errors (DNS, refused connection, timeout) are retried once.
An error status or a body without `rates` fails the source immediately;
the provider then moves on to the next source.
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import ValidationError as SchemaError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from terminal_budget.config import RateSettings
from terminal_budget.models.rates import RatesPayload


class RateSourceError(Exception):
    """A single rate source could not produce a rate table."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(message)


class RateSource(ABC):
    """Something that can return a code -> rate mapping for a base currency."""

    name: str = "source"

    @abstractmethod
    def fetch(self, base: str) -> dict[str, float]:
        """
        Fetch rates relative to `base` (already normalized).

        Raises:
            RateSourceError: On any network, status or parse failure
        """
        pass


class HttpRateSource(RateSource):
    """A rate source reached over HTTP GET."""

    def __init__(
        self,
        name: str,
        url_template: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.name = name
        self._url_template = url_template
        self._timeout = timeout
        self._transport = transport

    def url_for(self, base: str) -> str:
        return self._url_template.format(base=base)

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
        reraise=True,
    )
    def _get(self, url: str) -> httpx.Response:
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            return client.get(url)

    def fetch(self, base: str) -> dict[str, float]:
        url = self.url_for(base)
        try:
            response = self._get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RateSourceError(
                self.name,
                f"{self.name} returned status {e.response.status_code}",
            )
        except httpx.HTTPError as e:
            raise RateSourceError(self.name, f"failed to fetch from {self.name}: {e}")

        try:
            payload = RatesPayload.model_validate_json(response.content)
        except SchemaError as e:
            raise RateSourceError(
                self.name,
                f"failed to decode {self.name} response: {e.error_count()} error(s)",
            )

        return payload.rates


def default_sources(
    settings: RateSettings,
    transport: Optional[httpx.BaseTransport] = None,
) -> list[RateSource]:
    """Primary then backup source, as configured."""
    return [
        HttpRateSource(
            "frankfurter",
            settings.primary_api,
            timeout=settings.timeout_seconds,
            transport=transport,
        ),
        HttpRateSource(
            "open-er-api",
            settings.backup_api,
            timeout=settings.timeout_seconds,
            transport=transport,
        ),
    ]

"""
Currency Conversion

Pure arithmetic on top of RateProvider. An amount moves from its currency
to the base of the rate table (divide) and from the base to the target
currency (multiply). No rounding is done here; formatting is left to views.
"""

from terminal_budget.services.rates import RateProvider
from terminal_budget.validation import normalize_currency


class RateNotFound(LookupError):
    """The rate table has no usable (positive) rate for a currency the conversion needs."""

    def __init__(self, currency: str, base: str):
        self.currency = currency
        self.base = base
        super().__init__(f"no exchange rate for {currency} (base {base})")


class ConversionService:
    """Converts amounts between currencies through a common base."""

    def __init__(self, provider: RateProvider):
        self._provider = provider

    def convert(self, amount: float, from_currency: str, to_currency: str, base: str) -> float:
        """
        Convert `amount` from `from_currency` to `to_currency`.

        Same-currency conversions return `amount` without touching the
        provider, so they work offline and never hit the cache file.

        Raises:
            InvalidCurrencyCode: If any of the three codes is malformed
            RatesUnavailable: If no rates can be obtained for `base`
            RateNotFound: If a needed currency is missing from the table
        """
        from_currency = normalize_currency(from_currency)
        to_currency = normalize_currency(to_currency)
        base = normalize_currency(base)

        if from_currency == to_currency:
            return amount

        rates = self._provider.rates(base)

        in_base = amount
        if from_currency != base:
            in_base = amount / self._rate(rates, from_currency, base)

        if to_currency == base:
            return in_base
        return in_base * self._rate(rates, to_currency, base)

    @staticmethod
    def _rate(rates: dict[str, float], currency: str, base: str) -> float:
        rate = rates.get(currency)
        if rate is None or rate <= 0:
            raise RateNotFound(currency, base)
        return rate

"""
Wallet Totals

DESIGN DECISION: Totals are computed from the in-memory wallet snapshot of
the Workspace, never from a fresh storage read, so the total always matches
the rows on screen.

Excluded wallets (hidden or not matching a filter) are still listed but do
not count. Every counted balance is converted to the target currency
(display override, else the budget default) using the budget default as the
rate base.

KNOWN LIMITATION: a balance that cannot be converted (unknown rate, rates
unavailable, malformed display currency) is added unconverted, as if it
were already in the target currency. Each such wallet is logged and
reported in `TotalsResult.unconverted`.
"""

from typing import Optional

from pydantic import BaseModel, Field

from terminal_budget.audit import AuditLogger
from terminal_budget.models.session import Workspace
from terminal_budget.services.conversion import ConversionService, RateNotFound
from terminal_budget.services.rates import RatesUnavailable
from terminal_budget.validation import InvalidCurrencyCode


class TotalsResult(BaseModel):
    """Sum of the counted wallets."""

    wallet_count: int = 0
    total: float = 0.0
    currency: Optional[str] = None
    unconverted: list[str] = Field(
        default_factory=list,
        description="Wallets added without conversion"
    )

    @property
    def count_label(self) -> str:
        noun = "wallet" if self.wallet_count == 1 else "wallets"
        return f"{self.wallet_count} {noun}"


class TotalsCalculator:
    """Computes the footer total of the wallet screen."""

    def __init__(
        self,
        conversion: ConversionService,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._conversion = conversion
        self._audit_logger = audit_logger

    def calculate(self, workspace: Workspace) -> TotalsResult:
        indices = workspace.visible_indices()
        target = workspace.target_currency()
        base = workspace.default_currency or target

        if not indices or target is None or base is None:
            return TotalsResult(currency=target)

        total = 0.0
        unconverted: list[str] = []
        rates_down = False

        for index in indices:
            wallet = workspace.wallets[index]
            if wallet.currency == target:
                total += wallet.balance
                continue

            # Every source already failed for this base.
            if rates_down:
                total += wallet.balance
                unconverted.append(wallet.name)
                continue

            try:
                total += self._conversion.convert(
                    wallet.balance, wallet.currency, target, base
                )
            except (RateNotFound, RatesUnavailable, InvalidCurrencyCode) as e:
                rates_down = isinstance(e, RatesUnavailable)
                total += wallet.balance
                unconverted.append(wallet.name)
                if self._audit_logger:
                    self._audit_logger.log_conversion_fallback(
                        wallet=wallet.name,
                        from_currency=wallet.currency,
                        to_currency=target,
                        error_message=str(e),
                    )

        return TotalsResult(
            wallet_count=len(indices),
            total=total,
            currency=target,
            unconverted=unconverted,
        )

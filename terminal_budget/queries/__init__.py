"""Query package: read-only calculations over the open budget."""

from terminal_budget.queries.executor import TotalsCalculator, TotalsResult

__all__ = ["TotalsCalculator", "TotalsResult"]

"""Input validation package."""

from terminal_budget.validation.validator import (
    IndexOutOfRange,
    InvalidAmount,
    InvalidBudgetName,
    InvalidCurrencyCode,
    InvalidIndex,
    ValidationError,
    distinct,
    is_relative_amount,
    normalize_currency,
    parse_amount,
    parse_index,
    parse_index_list,
    validate_budget_name,
)

__all__ = [
    "IndexOutOfRange",
    "InvalidAmount",
    "InvalidBudgetName",
    "InvalidCurrencyCode",
    "InvalidIndex",
    "ValidationError",
    "distinct",
    "is_relative_amount",
    "normalize_currency",
    "parse_amount",
    "parse_index",
    "parse_index_list",
    "validate_budget_name",
]

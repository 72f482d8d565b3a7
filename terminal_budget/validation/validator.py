"""
Input Validation

Every piece of text the user types that has to become a currency code,
a wallet index, an amount or a budget name passes through one of the
parsers below.

IMPORTANT: Validation NEVER silently fixes input beyond trimming and
upper-casing currency codes. Anything else is reported back as a
ValidationError whose message is shown to the user as-is.
"""

import math
import re
from typing import Iterable


class ValidationError(ValueError):
    """Base exception for malformed user input."""
    pass


class InvalidCurrencyCode(ValidationError):
    """Currency code is not exactly three letters."""
    pass


class InvalidIndex(ValidationError):
    """Wallet index is not an integer."""
    pass


class IndexOutOfRange(ValidationError):
    """Wallet index does not point at an existing wallet."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Index {index} is out of range (0-{count - 1})")


class InvalidAmount(ValidationError):
    """Amount does not parse as a finite number."""
    pass


class InvalidBudgetName(ValidationError):
    """Budget name cannot be used as a file name."""
    pass


_BUDGET_NAME_PATTERN = re.compile(r"^[\w][\w .\-]*$")
MAX_BUDGET_NAME_LENGTH = 64


def normalize_currency(code: str) -> str:
    """
    Normalize a currency code: trim, upper-case, exactly 3 letters.

    Raises:
        InvalidCurrencyCode: If the result is not three ASCII letters
    """
    normalized = code.strip().upper()

    if len(normalized) != 3:
        raise InvalidCurrencyCode(
            f"currency code must be exactly 3 characters, got '{code}'"
        )
    if not all("A" <= char <= "Z" for char in normalized):
        raise InvalidCurrencyCode(
            f"currency code must contain only letters, got '{code}'"
        )

    return normalized


def parse_index(text: str, count: int) -> int:
    """
    Parse a wallet index and check it against the number of wallets.

    Raises:
        InvalidIndex: If text is not an integer
        IndexOutOfRange: If the index is outside [0, count)
    """
    text = text.strip()
    try:
        index = int(text)
    except ValueError:
        raise InvalidIndex(f"Invalid index: {text}")

    if index < 0 or index >= count:
        raise IndexOutOfRange(index, count)
    return index


def parse_index_list(text: str, count: int) -> list[int]:
    """
    Parse a comma-separated index list.

    The whole list is validated before anything is returned, so a caller
    never acts on a prefix of a bad list.
    """
    return [parse_index(part, count) for part in text.split(",")]


def parse_amount(text: str) -> float:
    """
    Parse a signed decimal amount.

    Raises:
        InvalidAmount: If text is not a finite number
    """
    text = text.strip()
    try:
        amount = float(text)
    except ValueError:
        raise InvalidAmount(f"Invalid amount: {text}")

    if not math.isfinite(amount):
        raise InvalidAmount(f"Invalid amount: {text}")
    return amount


def is_relative_amount(text: str) -> bool:
    """A leading sign marks an amount as a delta rather than a new value."""
    return text.startswith(("+", "-"))


def validate_budget_name(name: str) -> str:
    """
    Check that a budget name is safe to use as a file name.

    Letters, digits, underscores, spaces, dots and dashes are allowed;
    the name must start with a letter, digit or underscore.
    """
    name = name.strip()
    if not name:
        raise InvalidBudgetName("Budget name cannot be empty")
    if len(name) > MAX_BUDGET_NAME_LENGTH:
        raise InvalidBudgetName(
            f"Budget name must be at most {MAX_BUDGET_NAME_LENGTH} characters"
        )
    if not _BUDGET_NAME_PATTERN.match(name):
        raise InvalidBudgetName(
            f"Budget name '{name}' may only contain letters, digits, spaces, '.', '-' and '_'"
        )
    return name


def distinct(values: Iterable[str]) -> list[str]:
    """Distinct values in first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)

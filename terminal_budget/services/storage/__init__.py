"""
Storage Services Package

Provides the abstract budget storage interface and the JSON file backend.
"""

from terminal_budget.services.storage.interface import (
    BudgetStorageInterface,
    DuplicateError,
    NotFoundError,
    StorageError,
)
from terminal_budget.services.storage.json_files import JsonBudgetStorage
from terminal_budget.services.storage.seed import (
    EXAMPLE_BUDGET_NAME,
    EXAMPLE_WALLETS,
    seed_example_budget,
)

__all__ = [
    # Interfaces
    "BudgetStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # JSON implementation
    "JsonBudgetStorage",
    # First run
    "EXAMPLE_BUDGET_NAME",
    "EXAMPLE_WALLETS",
    "seed_example_budget",
]

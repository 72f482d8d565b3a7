"""
Abstract Storage Interface

DESIGN DECISION: The session engine only talks to this interface.
Budget files are handled as whole snapshots: every mutation loads the file,
changes it and writes the full file back. Wallets are addressed by their
0-based position in the budget at call time.

Implementations:
- JsonBudgetStorage: one JSON file per budget on local disk
- Test doubles in tests/conftest.py
"""

from abc import ABC, abstractmethod

from terminal_budget.models.budget import BudgetFile, WalletFields
from terminal_budget.validation import normalize_currency


class BudgetStorageInterface(ABC):
    """
    Abstract interface for budget file storage.

    Any storage implementation must implement these methods.
    All methods are synchronous; the interactive loop blocks on them.
    """

    @abstractmethod
    def list_budgets(self) -> list[BudgetFile]:
        """
        List every readable budget file, most recently updated first.

        Files that cannot be parsed are skipped.
        """
        pass

    @abstractmethod
    def load_budget(self, name: str) -> BudgetFile:
        """
        Load a budget snapshot.

        Raises:
            NotFoundError: If no budget with this name exists
            StorageError: If the file cannot be read or parsed
        """
        pass

    @abstractmethod
    def create_budget(self, name: str) -> BudgetFile:
        """
        Create an empty budget.

        Raises:
            DuplicateError: If a budget with this name exists
            StorageError: If the file cannot be written
        """
        pass

    @abstractmethod
    def save_budget(self, budget: BudgetFile) -> None:
        """
        Write a full snapshot, stamping `updated_at`.

        Raises:
            StorageError: If the file cannot be written
        """
        pass

    @abstractmethod
    def delete_budget(self, name: str) -> None:
        """
        Delete a budget.

        Raises:
            NotFoundError: If no budget with this name exists
        """
        pass

    @abstractmethod
    def create_wallet(self, budget_name: str, fields: WalletFields) -> None:
        """
        Append a wallet to a budget.

        Raises:
            DuplicateError: If the budget already has a wallet with this name
            InvalidCurrencyCode: If the currency is not a 3-letter code
        """
        pass

    @abstractmethod
    def adjust_wallet_balance(self, budget_name: str, index: int, delta: float) -> None:
        """
        Add `delta` to the balance of the wallet at `index`.

        Raises:
            IndexOutOfRange: If no wallet exists at `index`
        """
        pass

    @abstractmethod
    def set_wallet_balance(self, budget_name: str, index: int, value: float) -> None:
        """
        Replace the balance of the wallet at `index`.

        Raises:
            IndexOutOfRange: If no wallet exists at `index`
        """
        pass

    @abstractmethod
    def delete_wallet(self, budget_name: str, index: int) -> None:
        """
        Remove the wallet at `index`; later wallets shift down by one.

        Raises:
            IndexOutOfRange: If no wallet exists at `index`
        """
        pass

    def set_default_currency(self, budget_name: str, currency: str) -> None:
        """Persist a new default currency for a budget."""
        budget = self.load_budget(budget_name)
        budget.default_currency = normalize_currency(currency)
        self.save_budget(budget)


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Budget file not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to create a budget or wallet whose name is taken."""
    pass

"""
JSON File Storage Implementation

Each budget is one pretty-printed JSON file, `<files_dir>/<name>.json`,
holding the complete BudgetFile snapshot.

TRADEOFFS:
- Every mutation rewrites the whole file (fine for a handful of wallets)
- No locking: one interactive process is assumed
- Older files that only hold {wallets, default_currency} are upgraded in
  place the first time they are loaded
"""

import math
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import structlog
from pydantic import ValidationError as SchemaError

from terminal_budget.config import get_settings
from terminal_budget.models.budget import (
    BudgetFile,
    LegacyBudgetData,
    Wallet,
    WalletFields,
)
from terminal_budget.services.storage.interface import (
    BudgetStorageInterface,
    DuplicateError,
    NotFoundError,
    StorageError,
)
from terminal_budget.validation import (
    IndexOutOfRange,
    InvalidAmount,
    normalize_currency,
)


logger = structlog.get_logger(__name__)


class JsonBudgetStorage(BudgetStorageInterface):
    """Budget storage backed by a directory of JSON files."""

    def __init__(self, files_dir: Optional[Path] = None):
        self._files_dir = files_dir or get_settings().storage.files_dir

    @property
    def files_dir(self) -> Path:
        return self._files_dir

    def _path(self, name: str) -> Path:
        return self._files_dir / f"{name}.json"

    def _ensure_dir(self) -> None:
        try:
            self._files_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"failed to create budgets directory: {e}")

    def _write(self, budget: BudgetFile) -> None:
        self._ensure_dir()
        try:
            self._path(budget.name).write_text(
                budget.model_dump_json(indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            raise StorageError(f"failed to write budget file '{budget.name}': {e}")

    def _parse(self, name: str, raw: bytes) -> BudgetFile:
        """Parse the current format, falling back to the legacy one."""
        try:
            return BudgetFile.model_validate_json(raw)
        except SchemaError:
            pass

        now = datetime.now()
        try:
            legacy = LegacyBudgetData.model_validate_json(raw)
            budget = BudgetFile(
                name=name,
                created_at=now,
                updated_at=now,
                wallets=legacy.wallets,
                default_currency=legacy.default_currency,
            )
        except SchemaError as e:
            raise StorageError(
                f"failed to parse budget file '{name}' in any known format: {e}"
            )

        if not budget.default_currency and budget.wallets:
            budget.default_currency = budget.wallets[0].currency

        try:
            self.save_budget(budget)
            logger.info("legacy_budget_upgraded", budget=name)
        except StorageError as e:
            logger.warning("legacy_budget_upgrade_failed", budget=name, error=str(e))
        return budget

    def _mutate(self, budget_name: str, change: Callable[[BudgetFile], None]) -> None:
        budget = self.load_budget(budget_name)
        change(budget)
        self.save_budget(budget)

    @staticmethod
    def _check_index(budget: BudgetFile, index: int) -> None:
        if index < 0 or index >= len(budget.wallets):
            raise IndexOutOfRange(index, len(budget.wallets))

    def list_budgets(self) -> list[BudgetFile]:
        self._ensure_dir()

        budgets = []
        for path in sorted(self._files_dir.glob("*.json")):
            if not path.is_file():
                continue
            try:
                budgets.append(self.load_budget(path.stem))
            except StorageError as e:
                logger.warning("budget_file_skipped", path=str(path), error=str(e))
                continue

        budgets.sort(key=lambda b: b.updated_at, reverse=True)
        return budgets

    def load_budget(self, name: str) -> BudgetFile:
        path = self._path(name)
        if not path.is_file():
            raise NotFoundError(f"budget file '{name}' does not exist")

        try:
            raw = path.read_bytes()
        except OSError as e:
            raise StorageError(f"failed to read budget file '{name}': {e}")

        return self._parse(name, raw)

    def create_budget(self, name: str) -> BudgetFile:
        self._ensure_dir()
        if self._path(name).exists():
            raise DuplicateError(f"budget file '{name}' already exists")

        budget = BudgetFile(name=name)
        self._write(budget)
        return budget

    def save_budget(self, budget: BudgetFile) -> None:
        budget.updated_at = datetime.now()
        self._write(budget)

    def delete_budget(self, name: str) -> None:
        path = self._path(name)
        if not path.is_file():
            raise NotFoundError(f"budget file '{name}' does not exist")
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"failed to delete budget file '{name}': {e}")

    def create_wallet(self, budget_name: str, fields: WalletFields) -> None:
        currency = normalize_currency(fields.currency)

        def append(budget: BudgetFile) -> None:
            if fields.name in budget.wallet_names():
                raise DuplicateError(f"wallet with name '{fields.name}' already exists")
            budget.wallets.append(Wallet(
                name=fields.name,
                owner=fields.owner,
                type=fields.type,
                currency=currency,
                balance=fields.balance,
            ))

        self._mutate(budget_name, append)

    def adjust_wallet_balance(self, budget_name: str, index: int, delta: float) -> None:
        def adjust(budget: BudgetFile) -> None:
            self._check_index(budget, index)
            wallet = budget.wallets[index]
            balance = wallet.balance + delta
            if not math.isfinite(balance):
                raise InvalidAmount(f"Balance of {wallet.name} would be out of range")
            wallet.balance = balance

        self._mutate(budget_name, adjust)

    def set_wallet_balance(self, budget_name: str, index: int, value: float) -> None:
        def assign(budget: BudgetFile) -> None:
            self._check_index(budget, index)
            budget.wallets[index].balance = value

        self._mutate(budget_name, assign)

    def delete_wallet(self, budget_name: str, index: int) -> None:
        def remove(budget: BudgetFile) -> None:
            self._check_index(budget, index)
            del budget.wallets[index]

        self._mutate(budget_name, remove)

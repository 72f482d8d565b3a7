"""Tests for the JSON budget storage backend."""

import json

import pytest

from terminal_budget.models.budget import WalletFields
from terminal_budget.services.storage import (
    EXAMPLE_BUDGET_NAME,
    EXAMPLE_WALLETS,
    DuplicateError,
    JsonBudgetStorage,
    NotFoundError,
    StorageError,
    seed_example_budget,
)
from terminal_budget.validation import IndexOutOfRange, InvalidAmount, InvalidCurrencyCode


class TestBudgetFiles:
    """Tests for budget-level operations."""

    def test_create_and_load(self, storage):
        storage.create_budget("home")
        budget = storage.load_budget("home")
        assert budget.name == "home"
        assert budget.wallets == []
        assert (storage.files_dir / "home.json").is_file()

    def test_create_duplicate(self, storage):
        storage.create_budget("home")
        with pytest.raises(DuplicateError):
            storage.create_budget("home")

    def test_load_missing(self, storage):
        with pytest.raises(NotFoundError):
            storage.load_budget("nope")

    def test_delete(self, storage):
        storage.create_budget("home")
        storage.delete_budget("home")
        assert storage.list_budgets() == []

    def test_delete_missing(self, storage):
        with pytest.raises(NotFoundError):
            storage.delete_budget("nope")

    def test_list_most_recent_first(self, storage):
        storage.create_budget("old")
        storage.create_budget("new")
        storage.save_budget(storage.load_budget("old"))

        assert [b.name for b in storage.list_budgets()] == ["old", "new"]

    def test_list_skips_unreadable_files(self, storage):
        storage.create_budget("good")
        (storage.files_dir / "broken.json").write_text("{not json", encoding="utf-8")

        assert [b.name for b in storage.list_budgets()] == ["good"]

    def test_list_skips_non_utf8_files(self, storage):
        storage.create_budget("good")
        (storage.files_dir / "bad.json").write_bytes(b'{"wallets": [\xff\xfe]}')

        assert [b.name for b in storage.list_budgets()] == ["good"]

    def test_load_non_utf8_is_storage_error(self, storage):
        storage.files_dir.mkdir(parents=True)
        (storage.files_dir / "bad.json").write_bytes(b"\xff\xfe garbage")

        with pytest.raises(StorageError, match="any known format"):
            storage.load_budget("bad")

    def test_list_creates_directory(self, tmp_path):
        storage = JsonBudgetStorage(tmp_path / "a" / "b")
        assert storage.list_budgets() == []
        assert (tmp_path / "a" / "b").is_dir()

    def test_save_stamps_updated_at(self, storage):
        budget = storage.create_budget("home")
        before = budget.updated_at
        storage.save_budget(budget)
        assert storage.load_budget("home").updated_at >= before

    def test_set_default_currency(self, storage):
        storage.create_budget("home")
        storage.set_default_currency("home", "eur")
        assert storage.load_budget("home").default_currency == "EUR"

    def test_set_default_currency_invalid(self, storage):
        storage.create_budget("home")
        with pytest.raises(InvalidCurrencyCode):
            storage.set_default_currency("home", "euro")


class TestLegacyFormat:
    """Files written before budgets carried their own metadata."""

    def write_legacy(self, storage, name, default_currency=""):
        storage.files_dir.mkdir(parents=True, exist_ok=True)
        (storage.files_dir / f"{name}.json").write_text(json.dumps({
            "wallets": [
                {"name": "Cash", "owner": "me", "type": "cash", "currency": "eur", "balance": 5},
            ],
            "default_currency": default_currency,
        }), encoding="utf-8")

    def test_upgraded_on_load(self, storage):
        self.write_legacy(storage, "old")

        budget = storage.load_budget("old")
        assert budget.name == "old"
        assert budget.wallets[0].currency == "EUR"
        assert budget.default_currency == "EUR"

        on_disk = json.loads((storage.files_dir / "old.json").read_text(encoding="utf-8"))
        assert on_disk["name"] == "old"
        assert "created_at" in on_disk

    def test_keeps_explicit_default(self, storage):
        self.write_legacy(storage, "old", default_currency="GBP")
        assert storage.load_budget("old").default_currency == "GBP"

    @pytest.mark.parametrize("content", [
        "{}",
        '{"name": "old", "created_at": "someday", "wallets": [], "default_currency": "USD"}',
    ])
    def test_other_objects_not_upgraded(self, storage, content):
        storage.files_dir.mkdir(parents=True)
        path = storage.files_dir / "old.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(StorageError):
            storage.load_budget("old")
        assert path.read_text(encoding="utf-8") == content


class TestWallets:
    """Tests for wallet-level operations."""

    def test_create_wallet(self, storage, home):
        assert [w.name for w in home.wallets] == ["Cash", "Bank", "Savings"]
        assert home.wallets[1].currency == "EUR"

    def test_duplicate_wallet_name(self, storage, home):
        with pytest.raises(DuplicateError, match="already exists"):
            storage.create_wallet("home", WalletFields(name="Cash", currency="USD"))

    def test_invalid_currency(self, storage, home):
        with pytest.raises(InvalidCurrencyCode):
            storage.create_wallet("home", WalletFields(name="New", currency="dollars"))
        assert len(storage.load_budget("home").wallets) == 3

    def test_create_wallet_in_missing_budget(self, storage):
        with pytest.raises(NotFoundError):
            storage.create_wallet("nope", WalletFields(name="New", currency="USD"))

    def test_adjust_balance(self, storage, home):
        storage.adjust_wallet_balance("home", 0, -25.5)
        assert storage.load_budget("home").wallets[0].balance == pytest.approx(74.5)

    def test_set_balance(self, storage, home):
        storage.set_wallet_balance("home", 2, 10.0)
        assert storage.load_budget("home").wallets[2].balance == 10.0

    def test_adjust_overflow_rejected(self, storage, home):
        storage.set_wallet_balance("home", 0, 1e308)
        with pytest.raises(InvalidAmount):
            storage.adjust_wallet_balance("home", 0, 1e308)
        assert storage.load_budget("home").wallets[0].balance == 1e308

    def test_out_of_range(self, storage, home):
        with pytest.raises(IndexOutOfRange):
            storage.set_wallet_balance("home", 3, 1.0)

    def test_delete_shifts_indices(self, storage, home):
        storage.delete_wallet("home", 1)
        assert [w.name for w in storage.load_budget("home").wallets] == ["Cash", "Savings"]


class TestExampleSeed:
    """Tests for the first-run example budget."""

    def test_seed(self, storage):
        count = seed_example_budget(storage)
        budget = storage.load_budget(EXAMPLE_BUDGET_NAME)
        assert count == len(EXAMPLE_WALLETS) == len(budget.wallets)
        assert {w.currency for w in budget.wallets} == {"USD", "EUR"}

    def test_seed_twice_fails(self, storage):
        seed_example_budget(storage)
        with pytest.raises(DuplicateError):
            seed_example_budget(storage)

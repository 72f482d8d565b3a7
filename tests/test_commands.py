"""Tests for wallet screen commands."""

import pytest

from terminal_budget.models.budget import WalletFields
from terminal_budget.models.session import DeleteWallet, ScreenKind, WizardStep
from terminal_budget.session.commands import HELP_TEXT, CommandInterpreter
from terminal_budget.session.wizard import WizardEngine


@pytest.fixture
def interpreter(storage, audit):
    return CommandInterpreter(storage, WizardEngine(storage), audit)


@pytest.fixture
def workspace(wallet_session):
    return wallet_session.workspace


def run(interpreter, workspace, line):
    return interpreter.execute(workspace, line).message


class TestBasics:
    """Tests for refresh, help and unknown commands."""

    def test_empty_line_refreshes(self, interpreter, workspace, storage):
        storage.create_wallet("home", WalletFields(name="Added", currency="USD"))
        assert run(interpreter, workspace, "   ") == "Display refreshed"
        assert workspace.wallets[-1].name == "Added"

    def test_unknown(self, interpreter, workspace):
        assert run(interpreter, workspace, "fly away") == (
            "Unknown command: fly. Type 'help' for available commands."
        )

    def test_help(self, interpreter, workspace):
        assert run(interpreter, workspace, "help") == HELP_TEXT


class TestFilters:
    """Tests for filter and hide."""

    def test_filter_owner(self, interpreter, workspace):
        assert run(interpreter, workspace, "filter owner alice") == "Filtering by owner: alice"
        assert workspace.visible_indices() == [0, 2]

    def test_filter_value_with_spaces(self, interpreter, workspace):
        run(interpreter, workspace, "filter owner Mary  Ann")
        assert workspace.filters.owner == "Mary Ann"

    def test_filter_currency_upper_cased(self, interpreter, workspace):
        assert run(interpreter, workspace, "filter currency eur") == "Filtering by currency: EUR"
        assert workspace.visible_indices() == [1]

    def test_filter_usage(self, interpreter, workspace):
        assert run(interpreter, workspace, "filter colour red").startswith("Usage: filter")
        assert run(interpreter, workspace, "filter owner").startswith("Usage: filter")

    def test_filter_reset_clears_hidden(self, interpreter, workspace):
        run(interpreter, workspace, "filter type bank")
        run(interpreter, workspace, "hide 0")
        assert run(interpreter, workspace, "filter reset") == "Filters cleared"
        assert workspace.filters.type is None
        assert workspace.hidden == set()

    def test_hide(self, interpreter, workspace):
        assert run(interpreter, workspace, "hide 0,2") == "Hidden 2 wallet(s)"
        assert workspace.hidden == {0, 2}

    def test_hide_is_all_or_nothing(self, interpreter, workspace):
        message = run(interpreter, workspace, "hide 0,99")
        assert message == "Index 99 is out of range (0-2)"
        assert workspace.hidden == set()

    def test_hide_bad_token(self, interpreter, workspace):
        assert run(interpreter, workspace, "hide 1,x") == "Invalid index: x"
        assert workspace.hidden == set()


class TestCurrencies:
    """Tests for currency and default."""

    def test_display_currency(self, interpreter, workspace):
        assert run(interpreter, workspace, "currency gbp") == "Display currency changed to GBP"
        assert workspace.display_currency == "GBP"

    def test_display_currency_not_validated(self, interpreter, workspace):
        run(interpreter, workspace, "currency bitcoin")
        assert workspace.display_currency == "BITCOIN"

    def test_default_currency_persisted(self, interpreter, workspace, storage, audit):
        assert run(interpreter, workspace, "default eur") == "Default currency set to EUR"
        assert storage.load_budget("home").default_currency == "EUR"
        assert workspace.default_currency == "EUR"
        assert audit.types() == ["default_currency_set"]

    def test_default_currency_invalid(self, interpreter, workspace, storage):
        message = run(interpreter, workspace, "default euro")
        assert "3 characters" in message
        assert storage.load_budget("home").default_currency == "USD"


class TestAdjust:
    """Tests for balance adjustment."""

    def test_relative(self, interpreter, workspace, storage):
        assert run(interpreter, workspace, "adjust 0 +50") == "Adjusted Cash by 50.00"
        assert storage.load_budget("home").wallets[0].balance == 150.0
        assert workspace.wallets[0].balance == 150.0

    def test_negative_delta(self, interpreter, workspace):
        assert run(interpreter, workspace, "adjust 1 -20.5") == "Adjusted Bank by -20.50"
        assert workspace.wallets[1].balance == pytest.approx(179.5)

    def test_absolute(self, interpreter, workspace, storage, audit):
        assert run(interpreter, workspace, "adjust 2 42") == "Set Savings balance to 42.00"
        assert storage.load_budget("home").wallets[2].balance == 42.0
        assert audit.types() == ["wallet_balance_set"]

    def test_keeps_hidden_rows(self, interpreter, workspace):
        run(interpreter, workspace, "hide 1")
        run(interpreter, workspace, "adjust 0 +1")
        assert workspace.hidden == {1}

    def test_overflow_keeps_budget_readable(self, interpreter, workspace, storage):
        run(interpreter, workspace, "adjust 0 1e308")
        message = run(interpreter, workspace, "adjust 0 +1e308")

        assert message == "Failed to adjust wallet: Balance of Cash would be out of range"
        assert [b.name for b in storage.list_budgets()] == ["home"]
        assert storage.load_budget("home").wallets[0].balance == 1e308

    @pytest.mark.parametrize("line,message", [
        ("adjust 0", "Usage: adjust"),
        ("adjust x 5", "Invalid index: x"),
        ("adjust 3 5", "Index 3 is out of range (0-2)"),
        ("adjust 0 +lots", "Invalid amount: +lots"),
    ])
    def test_errors(self, interpreter, workspace, storage, line, message):
        assert run(interpreter, workspace, line).startswith(message)
        assert storage.load_budget("home").wallets[0].balance == 100.0


class TestModeSwitches:
    """Tests for commands that leave the wallet screen."""

    def test_new_starts_wizard(self, interpreter, workspace):
        result = interpreter.execute(workspace, "new")
        assert result.draft.budget_name == "home"
        assert result.draft.step == WizardStep.NAME
        assert result.pending is None

    def test_delete_stages_confirmation(self, interpreter, workspace, storage):
        result = interpreter.execute(workspace, "delete 1")

        assert result.pending.prompt == (
            "Are you sure you want to delete wallet 'Bank' (owned by bob)?"
        )
        assert result.pending.action == DeleteWallet(budget="home", index=1)
        assert result.pending.origin == ScreenKind.WALLET
        assert len(storage.load_budget("home").wallets) == 3

    def test_delete_out_of_range(self, interpreter, workspace):
        result = interpreter.execute(workspace, "delete 7")
        assert result.pending is None
        assert result.message == "Index 7 is out of range (0-2)"

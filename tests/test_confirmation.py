"""Tests for the confirmation gate."""

import pytest

from terminal_budget.models.session import (
    DeleteBudget,
    DeleteWallet,
    GreetingScreen,
    PendingConfirmation,
    ScreenKind,
    WalletScreen,
)
from terminal_budget.session.confirmation import ConfirmationGate


@pytest.fixture
def gate(storage, audit):
    return ConfirmationGate(storage, audit)


def delete_wallet(index: int) -> PendingConfirmation:
    return PendingConfirmation(
        prompt=f"delete {index}?",
        action=DeleteWallet(budget="home", index=index),
        origin=ScreenKind.WALLET,
    )


class TestWalletDeletion:
    """Deleting a wallet through the gate."""

    def test_stage_does_not_run(self, gate, wallet_session, storage):
        gate.stage(wallet_session, delete_wallet(1))
        assert wallet_session.kind == ScreenKind.CONFIRMATION
        assert len(storage.load_budget("home").wallets) == 3

    def test_confirm_deletes_and_shifts(self, gate, wallet_session, storage):
        wallet_session.workspace.hidden = {0, 2}
        gate.stage(wallet_session, delete_wallet(1))

        assert gate.confirm(wallet_session) is True
        assert isinstance(wallet_session.screen, WalletScreen)
        assert [w.name for w in wallet_session.workspace.wallets] == ["Cash", "Savings"]
        assert [w.name for w in storage.load_budget("home").wallets] == ["Cash", "Savings"]
        assert wallet_session.workspace.hidden == set()

    def test_second_confirm_is_noop(self, gate, wallet_session, storage):
        gate.stage(wallet_session, delete_wallet(0))
        gate.confirm(wallet_session)

        assert gate.confirm(wallet_session) is False
        assert [w.name for w in storage.load_budget("home").wallets] == ["Bank", "Savings"]

    def test_cancel(self, gate, wallet_session, storage, audit):
        gate.stage(wallet_session, delete_wallet(0))
        gate.cancel(wallet_session)

        assert wallet_session.kind == ScreenKind.WALLET
        assert len(storage.load_budget("home").wallets) == 3
        assert gate.confirm(wallet_session) is False
        assert audit.types() == ["confirmation_staged", "confirmation_declined"]

    def test_failed_action_skips_continuation(self, gate, wallet_session, storage, audit):
        wallet_session.workspace.hidden = {0}
        gate.stage(wallet_session, delete_wallet(2))
        storage.delete_wallet("home", 2)

        assert gate.confirm(wallet_session) is False
        assert wallet_session.kind == ScreenKind.WALLET
        assert wallet_session.error.startswith("action failed: Index 2 is out of range")
        assert wallet_session.workspace.hidden == {0}
        assert len(storage.load_budget("home").wallets) == 2
        assert "action_failed" in audit.types()


class TestBudgetDeletion:
    """Deleting a budget file through the gate."""

    def pending(self, name="home"):
        return PendingConfirmation(
            prompt=f"delete {name}?",
            action=DeleteBudget(name=name),
            origin=ScreenKind.GREETING,
        )

    def test_confirm_refreshes_picker(self, gate, wallet_session, storage):
        storage.create_budget("other")
        gate.stage(wallet_session, self.pending())

        assert gate.confirm(wallet_session) is True
        screen = wallet_session.screen
        assert isinstance(screen, GreetingScreen)
        assert [b.name for b in screen.files] == ["other"]
        assert screen.selected == 0

    def test_missing_budget_reports_error(self, gate, wallet_session, storage):
        gate.stage(wallet_session, self.pending("ghost"))

        assert gate.confirm(wallet_session) is False
        assert wallet_session.kind == ScreenKind.GREETING
        assert "does not exist" in wallet_session.error

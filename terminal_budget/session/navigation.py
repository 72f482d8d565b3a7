"""
Screen entry helpers shared by the state machine and the confirmation gate.

Entering a screen always builds a fresh screen payload, so transient input
(typed text, cursor, selection) never leaks from one visit to the next.
"""

from terminal_budget.models.session import (
    GreetingScreen,
    ScreenKind,
    Session,
    WalletScreen,
    Workspace,
)
from terminal_budget.services.storage import BudgetStorageInterface, StorageError


def enter_greeting(session: Session, storage: BudgetStorageInterface) -> None:
    """Show the budget picker with a freshly listed set of files."""
    session.error = None
    session.command_result = ""
    try:
        files = storage.list_budgets()
    except StorageError as e:
        session.error = f"failed to list budget files: {e}"
        files = []
    session.screen = GreetingScreen(files=files)


def enter_wallet(session: Session) -> None:
    session.error = None
    session.screen = WalletScreen()


def enter(session: Session, storage: BudgetStorageInterface, kind: ScreenKind) -> None:
    """Return to an origin screen (greeting or wallet)."""
    if kind == ScreenKind.GREETING:
        enter_greeting(session, storage)
    elif kind == ScreenKind.WALLET:
        enter_wallet(session)
    else:
        raise ValueError(f"cannot return to screen '{kind.value}'")


def reload_workspace(workspace: Workspace, storage: BudgetStorageInterface) -> None:
    """
    Re-read the open budget into the workspace.

    Raises:
        StorageError: If the budget cannot be loaded
    """
    budget = storage.load_budget(workspace.budget_name)
    workspace.refresh(budget)

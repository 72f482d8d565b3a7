"""
Screen State Machine

The top-level controller. It owns the Session and routes every key to the
handler of the active screen:

    Greeting ──enter on "Create new"──> BudgetCreation ──enter──> Wallet
    Greeting ──enter on a file──────────────────────────────────> Wallet
    Greeting ──d / delete────────────> Confirmation ──y/n──> Greeting
    Wallet   ──"new"─────────────────> WalletCreation ──done/esc──> Wallet
    Wallet   ──"delete N"────────────> Confirmation ──y/n──> Wallet
    Wallet, BudgetCreation ──esc────> Greeting

ctrl+c ends the session from any screen; esc on the greeting does too.
Quitting is a flag for the front-end, not a screen.

One key is handled completely (state read, changed, ready to describe)
before the next one is accepted.
"""

import random
from typing import Callable, Optional

from terminal_budget.audit import AuditLogger
from terminal_budget.models.session import (
    BudgetCreationScreen,
    DeleteBudget,
    PendingConfirmation,
    ScreenKind,
    Session,
    WalletCreationScreen,
)
from terminal_budget.services.storage import BudgetStorageInterface, StorageError
from terminal_budget.session import keys
from terminal_budget.session.commands import CommandInterpreter
from terminal_budget.session.confirmation import ConfirmationGate
from terminal_budget.session.navigation import (
    enter_greeting,
    enter_wallet,
    reload_workspace,
)
from terminal_budget.session.wizard import WizardEngine, WizardOutcome
from terminal_budget.validation import ValidationError, validate_budget_name


GREETINGS = [
    "hey, how are you?",
    "hi there!",
    "ah, that's you",
    "long time no see, human",
    "here you are",
    "welcome back, friend",
    "good to see you, friend",
    "greetings, traveller",
    "oh, it's you again",
    "look who showed up",
    "hey stranger",
    "nice to have you here",
    "salutations",
    "ahoy!",
    "welcome, human",
    "system online: user detected",
    "hey, commander",
    "ready for action?",
    "glad you made it",
    "hi, friend",
    "hi, wanderer",
    "welcome, adventurer",
    "hail, wayfarer",
    "well met, explorer",
    "back from your quest?",
    "hello, drifter",
    "the road greets you once more",
]


class ScreenStateMachine:
    """Routes keys to screens and mediates screen transitions."""

    def __init__(
        self,
        storage: BudgetStorageInterface,
        rng: Optional[random.Random] = None,
        wizard: Optional[WizardEngine] = None,
        interpreter: Optional[CommandInterpreter] = None,
        gate: Optional[ConfirmationGate] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._rng = rng or random.Random()
        self._audit_logger = audit_logger
        self._wizard = wizard or WizardEngine(storage, audit_logger)
        self._interpreter = interpreter or CommandInterpreter(
            storage, self._wizard, audit_logger
        )
        self._gate = gate or ConfirmationGate(storage, audit_logger)

        self._handlers: dict[ScreenKind, Callable[[str], None]] = {
            ScreenKind.GREETING: self._on_greeting,
            ScreenKind.BUDGET_CREATION: self._on_budget_creation,
            ScreenKind.WALLET: self._on_wallet,
            ScreenKind.WALLET_CREATION: self._on_wallet_creation,
            ScreenKind.CONFIRMATION: self._on_confirmation,
        }

        self.quit_requested = False
        self.session = Session(greeting=self._rng.choice(GREETINGS))
        enter_greeting(self.session, self._storage)

    @property
    def kind(self) -> ScreenKind:
        return self.session.kind

    def handle_key(self, key: str) -> None:
        """Process one key event."""
        if key == keys.CTRL_C:
            self.quit_requested = True
            return
        if self.quit_requested:
            return

        self._handlers[self.session.kind](key)

    # =========================================================================
    # Greeting
    # =========================================================================

    def _on_greeting(self, key: str) -> None:
        screen = self.session.screen

        if key in (keys.UP, keys.DOWN):
            step = -1 if key == keys.UP else 1
            # The entry after the last file is "Create new budget..."
            screen.selected = min(max(screen.selected + step, 0), len(screen.files))
        elif key == keys.ENTER:
            selected = screen.selected_file()
            if selected is None:
                self.session.error = None
                self.session.screen = BudgetCreationScreen()
            else:
                self._open_budget(selected.name)
        elif key == keys.ESC:
            self.quit_requested = True
        elif key in ("d", keys.DELETE):
            selected = screen.selected_file()
            if selected is not None:
                self._gate.stage(self.session, PendingConfirmation(
                    prompt=f"Are you sure you want to delete the budget file '{selected.name}'?",
                    action=DeleteBudget(name=selected.name),
                    origin=ScreenKind.GREETING,
                ))

    def _open_budget(self, name: str) -> None:
        try:
            budget = self._storage.load_budget(name)
        except StorageError as e:
            self.session.error = f"failed to open budget '{name}': {e}"
            return

        self.session.workspace.load(budget)
        self.session.command_result = ""
        enter_wallet(self.session)
        if self._audit_logger:
            self._audit_logger.log_budget_opened(name, len(budget.wallets))

    # =========================================================================
    # Budget creation
    # =========================================================================

    def _on_budget_creation(self, key: str) -> None:
        screen = self.session.screen

        if key == keys.ENTER:
            self._create_budget(screen.input.value)
        elif key == keys.ESC:
            enter_greeting(self.session, self._storage)
        else:
            keys.edit_line(screen.input, key)

    def _create_budget(self, text: str) -> None:
        if not text:
            return

        try:
            name = validate_budget_name(text)
            budget = self._storage.create_budget(name)
        except (ValidationError, StorageError) as e:
            self.session.error = str(e)
            return

        if self._audit_logger:
            self._audit_logger.log_budget_created(name)
        self.session.workspace.load(budget)
        self.session.command_result = ""
        enter_wallet(self.session)

    # =========================================================================
    # Wallet table
    # =========================================================================

    def _on_wallet(self, key: str) -> None:
        screen = self.session.screen

        if key == keys.ENTER:
            result = self._interpreter.execute(self.session.workspace, screen.command.text)
            screen.command.clear()
            self.session.command_result = result.message
            if result.draft is not None:
                self.session.error = None
                self.session.screen = WalletCreationScreen(draft=result.draft)
            elif result.pending is not None:
                self._gate.stage(self.session, result.pending)
        elif key == keys.ESC:
            self.session.workspace.close()
            enter_greeting(self.session, self._storage)
        else:
            keys.edit_line(screen.command, key)

    # =========================================================================
    # Wallet creation
    # =========================================================================

    def _on_wallet_creation(self, key: str) -> None:
        draft = self.session.screen.draft

        if key == keys.ENTER:
            if self._wizard.submit(draft) == WizardOutcome.COMPLETED:
                self.session.command_result = f"Created wallet {draft.name}"
                self._back_to_wallets()
        elif key == keys.ESC:
            self._back_to_wallets()
        elif key in (keys.UP, keys.DOWN):
            self._wizard.move(draft, -1 if key == keys.UP else 1)
        else:
            self._wizard.edit(draft, key)

    def _back_to_wallets(self) -> None:
        enter_wallet(self.session)
        try:
            reload_workspace(self.session.workspace, self._storage)
        except StorageError as e:
            self.session.error = f"failed to reload wallets: {e}"

    # =========================================================================
    # Confirmation
    # =========================================================================

    def _on_confirmation(self, key: str) -> None:
        if key in ("y", "Y"):
            self._gate.confirm(self.session)
        elif key in ("n", "N", keys.ESC):
            self._gate.cancel(self.session)

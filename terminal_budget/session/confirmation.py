"""
Confirmation Gate

Destructive actions are never run directly. They are staged as a
PendingConfirmation on the confirmation screen and only run after an
explicit "yes".

A pending action is plain data (DeleteWallet, DeleteBudget). What it does
is looked up in two fixed tables keyed by the action kind:
- the action itself (talks to storage, may fail)
- the continuation run after a successful action (refreshes session state)

CRITICAL: confirm() consumes the pending action before running it. A second
confirm() arriving after the session is back on the origin screen finds
nothing to run.
"""

from typing import Callable, Optional

from terminal_budget.audit import AuditLogger
from terminal_budget.models.session import (
    ConfirmationScreen,
    DeleteBudget,
    DeleteWallet,
    PendingConfirmation,
    Session,
)
from terminal_budget.services.storage import BudgetStorageInterface, StorageError
from terminal_budget.session.navigation import (
    enter,
    enter_greeting,
    reload_workspace,
)
from terminal_budget.validation import ValidationError


class ConfirmationGate:
    """Stages, confirms and cancels destructive actions."""

    def __init__(
        self,
        storage: BudgetStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._actions: dict[str, Callable] = {
            "delete_wallet": self._delete_wallet,
            "delete_budget": self._delete_budget,
        }
        self._continuations: dict[str, Callable] = {
            "delete_wallet": self._after_wallet_deleted,
            "delete_budget": self._after_budget_deleted,
        }

    @staticmethod
    def pending(session: Session) -> Optional[PendingConfirmation]:
        if isinstance(session.screen, ConfirmationScreen):
            return session.screen.pending
        return None

    def stage(self, session: Session, pending: PendingConfirmation) -> None:
        """Show the confirmation screen for `pending`."""
        session.error = None
        session.screen = ConfirmationScreen(pending=pending)
        if self._audit_logger:
            self._audit_logger.log_confirmation_staged(pending.action.kind, pending.prompt)

    def confirm(self, session: Session) -> bool:
        """
        Run the pending action, then its continuation.

        Returns True if an action ran successfully. On failure the error is
        stored on the session and the continuation is skipped. The session
        is back on the origin screen in every case.
        """
        pending = self.pending(session)
        if pending is None:
            return False

        enter(session, self._storage, pending.origin)
        if self._audit_logger:
            self._audit_logger.log_confirmation_accepted(pending.action.kind, pending.prompt)

        try:
            self._actions[pending.action.kind](pending.action)
        except (StorageError, ValidationError) as e:
            session.error = f"action failed: {e}"
            if self._audit_logger:
                self._audit_logger.log_action_failed(pending.action.kind, str(e))
            return False

        self._continuations[pending.action.kind](session, pending.action)
        return True

    def cancel(self, session: Session) -> None:
        """Drop the pending action without running it."""
        pending = self.pending(session)
        if pending is None:
            return

        enter(session, self._storage, pending.origin)
        if self._audit_logger:
            self._audit_logger.log_confirmation_declined(pending.action.kind, pending.prompt)

    # =========================================================================
    # Actions
    # =========================================================================

    def _delete_wallet(self, action: DeleteWallet) -> None:
        self._storage.delete_wallet(action.budget, action.index)
        if self._audit_logger:
            self._audit_logger.log_wallet_deleted(action.budget, action.index)

    def _delete_budget(self, action: DeleteBudget) -> None:
        self._storage.delete_budget(action.name)
        if self._audit_logger:
            self._audit_logger.log_budget_deleted(action.name)

    # =========================================================================
    # Continuations
    # =========================================================================

    def _after_wallet_deleted(self, session: Session, action: DeleteWallet) -> None:
        """Positions after the deleted wallet shifted, so hidden rows go stale."""
        try:
            reload_workspace(session.workspace, self._storage)
        except StorageError as e:
            session.error = f"wallet deleted, but failed to reload: {e}"
        session.workspace.hidden = set()

    def _after_budget_deleted(self, session: Session, action: DeleteBudget) -> None:
        """Re-list the files; the deleted one must disappear from the picker."""
        enter_greeting(session, self._storage)

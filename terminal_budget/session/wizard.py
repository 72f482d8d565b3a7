"""
Wallet Creation Wizard

Five steps, asked in order: Name, Type, Currency, Owner, Balance.

- Name and Balance are typed.
- Type, Currency and Owner offer a list: the distinct values already used
  by the budget's wallets (or a default set for a budget without wallets)
  followed by a trailing "custom" entry. Moving onto the custom entry
  switches the step to typed input.
- Balance may be left empty (0.0). Submitting it creates the wallet.

Nothing is written to storage before the last step succeeds, so cancelling
at any point leaves the budget untouched.
"""

from enum import Enum
from typing import Optional

from terminal_budget.audit import AuditLogger
from terminal_budget.models.budget import WalletFields
from terminal_budget.models.session import WizardDraft, WizardStep
from terminal_budget.services.storage import BudgetStorageInterface, StorageError
from terminal_budget.session.keys import edit_line
from terminal_budget.validation import (
    ValidationError,
    distinct,
    normalize_currency,
    parse_amount,
)


DEFAULT_SUGGESTIONS: dict[WizardStep, list[str]] = {
    WizardStep.TYPE: ["bank", "cash", "invest"],
    WizardStep.CURRENCY: ["USD", "EUR", "GBP"],
    WizardStep.OWNER: ["me"],
}

CUSTOM_ENTRY_LABELS: dict[WizardStep, str] = {
    WizardStep.TYPE: "custom: enter new type...",
    WizardStep.CURRENCY: "custom: enter currency code...",
    WizardStep.OWNER: "custom: enter owner name...",
}

STEP_PROMPTS: dict[WizardStep, str] = {
    WizardStep.NAME: "Wallet name",
    WizardStep.TYPE: "Wallet type",
    WizardStep.CURRENCY: "Currency",
    WizardStep.OWNER: "Owner",
    WizardStep.BALANCE: "Starting balance (empty for 0)",
}


class WizardOutcome(str, Enum):
    """What a submit did to the draft."""
    STAYED = "stayed"
    ADVANCED = "advanced"
    COMPLETED = "completed"


class WizardEngine:
    """Drives a WizardDraft through its steps."""

    def __init__(
        self,
        storage: BudgetStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger

    def start(self, budget_name: str) -> WizardDraft:
        """A fresh draft on the Name step."""
        return WizardDraft(budget_name=budget_name)

    def suggestions(self, budget_name: str, step: WizardStep) -> list[str]:
        """
        Choices offered on a list step, custom entry last.

        Values come from the wallets currently stored in the budget. A budget
        that cannot be read is treated like an empty one.
        """
        if step not in CUSTOM_ENTRY_LABELS:
            return []

        try:
            wallets = self._storage.load_budget(budget_name).wallets
        except StorageError:
            wallets = []

        attribute = step.name.lower()
        values = distinct(
            getattr(wallet, attribute) for wallet in wallets
            if getattr(wallet, attribute)
        )
        if not values:
            values = list(DEFAULT_SUGGESTIONS[step])

        return values + [CUSTOM_ENTRY_LABELS[step]]

    def move(self, draft: WizardDraft, delta: int) -> None:
        """Move the list selection; landing on the custom entry enables typing."""
        if not draft.suggestions:
            return

        last = len(draft.suggestions) - 1
        draft.selected = min(max(draft.selected + delta, 0), last)
        draft.custom = draft.on_custom_entry
        if not draft.custom:
            draft.buffer.clear()

    def edit(self, draft: WizardDraft, key: str) -> bool:
        """Apply an editing key if the current step takes typed input."""
        if not draft.accepts_text:
            return False
        return edit_line(draft.buffer, key)

    def submit(self, draft: WizardDraft) -> WizardOutcome:
        """Commit the current step."""
        draft.error = None
        text = draft.buffer.value

        if draft.step == WizardStep.NAME:
            if not text:
                return WizardOutcome.STAYED
            draft.name = text
            return self._advance(draft)

        if draft.step == WizardStep.BALANCE:
            return self._finish(draft, text)

        if draft.custom:
            if not text:
                return WizardOutcome.STAYED
            value = text
            if draft.step == WizardStep.CURRENCY:
                try:
                    value = normalize_currency(text)
                except ValidationError as e:
                    draft.error = str(e)
                    return WizardOutcome.STAYED
        elif draft.on_custom_entry:
            draft.custom = True
            return WizardOutcome.STAYED
        else:
            value = draft.suggestions[draft.selected]

        setattr(draft, draft.step.name.lower(), value)
        return self._advance(draft)

    def _advance(self, draft: WizardDraft) -> WizardOutcome:
        draft.step = WizardStep(draft.step + 1)
        draft.buffer.clear()
        draft.selected = 0
        draft.custom = False
        draft.suggestions = self.suggestions(draft.budget_name, draft.step)
        return WizardOutcome.ADVANCED

    def _finish(self, draft: WizardDraft, text: str) -> WizardOutcome:
        """Parse the balance and create the wallet."""
        if text:
            try:
                draft.balance = parse_amount(text)
            except ValidationError as e:
                draft.error = str(e)
                return WizardOutcome.STAYED
        else:
            draft.balance = 0.0

        fields = WalletFields(
            name=draft.name,
            owner=draft.owner,
            type=draft.type,
            currency=draft.currency,
            balance=draft.balance,
        )
        try:
            self._storage.create_wallet(draft.budget_name, fields)
        except (StorageError, ValidationError) as e:
            draft.error = str(e)
            if self._audit_logger:
                self._audit_logger.log_action_failed("create_wallet", str(e))
            return WizardOutcome.STAYED

        if self._audit_logger:
            self._audit_logger.log_wallet_created(
                budget=draft.budget_name,
                wallet=fields.name,
                currency=fields.currency,
                balance=fields.balance,
            )
        return WizardOutcome.COMPLETED

"""
Wallet Screen Commands

The wallet screen takes one line of text at a time. The first word picks
the command:

    filter owner|type|currency <value...>   show matching wallets only
    filter reset                            clear filters and hidden rows
    hide 0,2,3                              exclude rows from the total
    currency CODE                           show the total in CODE
    default CODE                            change the budget's default currency
    adjust <index> <+N|-N|N>                add to or set a balance
    delete <index>                          delete a wallet (asks first)
    new                                     open the wallet wizard
    help                                    list commands

An empty line re-reads the budget from storage.

GUARANTEE: execute() never raises for bad input or storage failures. Every
outcome, good or bad, is a message for the status line.
"""

from typing import Optional

from pydantic import BaseModel

from terminal_budget.audit import AuditLogger
from terminal_budget.models.session import (
    DeleteWallet,
    PendingConfirmation,
    ScreenKind,
    WizardDraft,
    Workspace,
)
from terminal_budget.services.storage import BudgetStorageInterface, StorageError
from terminal_budget.session.navigation import reload_workspace
from terminal_budget.session.wizard import WizardEngine
from terminal_budget.validation import (
    ValidationError,
    is_relative_amount,
    normalize_currency,
    parse_amount,
    parse_index,
    parse_index_list,
)


HELP_TEXT = (
    "Available commands:\n"
    "adjust 0 +100 | delete 1 | hide 0,2\n"
    "new | filter owner alice | filter reset | currency USD | default EUR"
)

FILTER_USAGE = "Usage: filter owner <name> | filter type <type> | filter currency <code>"


class CommandResult(BaseModel):
    """
    Outcome of one command line.

    At most one of `draft` and `pending` is set; either tells the caller to
    leave the wallet screen.
    """

    message: str = ""
    draft: Optional[WizardDraft] = None
    pending: Optional[PendingConfirmation] = None


class CommandInterpreter:
    """Parses and runs wallet screen commands against the open workspace."""

    def __init__(
        self,
        storage: BudgetStorageInterface,
        wizard: WizardEngine,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._wizard = wizard
        self._audit_logger = audit_logger
        self._commands = {
            "help": self._help,
            "filter": self._filter,
            "hide": self._hide,
            "currency": self._currency,
            "default": self._default,
            "new": self._new,
            "adjust": self._adjust,
            "delete": self._delete,
        }

    def execute(self, workspace: Workspace, line: str) -> CommandResult:
        parts = line.split()
        if not parts:
            return self._refresh(workspace)

        handler = self._commands.get(parts[0])
        if handler is None:
            return CommandResult(
                message=f"Unknown command: {parts[0]}. Type 'help' for available commands."
            )

        try:
            return handler(workspace, parts[1:])
        except ValidationError as e:
            return CommandResult(message=str(e))

    def _refresh(self, workspace: Workspace) -> CommandResult:
        try:
            reload_workspace(workspace, self._storage)
        except StorageError as e:
            return CommandResult(message=f"Failed to reload wallets: {e}")
        return CommandResult(message="Display refreshed")

    def _help(self, workspace: Workspace, args: list[str]) -> CommandResult:
        return CommandResult(message=HELP_TEXT)

    def _filter(self, workspace: Workspace, args: list[str]) -> CommandResult:
        if not args:
            return CommandResult(message=f"{FILTER_USAGE} | filter reset")

        if args[0] == "reset":
            workspace.filters.reset()
            workspace.hidden = set()
            return CommandResult(message="Filters cleared")

        if len(args) < 2:
            return CommandResult(message=FILTER_USAGE)

        value = " ".join(args[1:])
        if args[0] == "owner":
            workspace.filters.owner = value
        elif args[0] == "type":
            workspace.filters.type = value
        elif args[0] == "currency":
            value = value.upper()
            workspace.filters.currency = value
        else:
            return CommandResult(message=FILTER_USAGE)

        return CommandResult(message=f"Filtering by {args[0]}: {value}")

    def _hide(self, workspace: Workspace, args: list[str]) -> CommandResult:
        if not args:
            return CommandResult(message="Usage: hide 0,2,3 (comma-separated indexes)")

        # Validated as a whole; a bad entry leaves the hidden set untouched.
        indices = parse_index_list("".join(args), len(workspace.wallets))
        workspace.hidden.update(indices)
        return CommandResult(message=f"Hidden {len(indices)} wallet(s)")

    def _currency(self, workspace: Workspace, args: list[str]) -> CommandResult:
        if not args:
            return CommandResult(message="Usage: currency <CURRENCY_CODE>")

        code = args[0].upper()
        workspace.display_currency = code
        return CommandResult(message=f"Display currency changed to {code}")

    def _default(self, workspace: Workspace, args: list[str]) -> CommandResult:
        if not args:
            return CommandResult(message="Usage: default <CURRENCY_CODE>")

        code = normalize_currency(args[0])
        try:
            self._storage.set_default_currency(workspace.budget_name, code)
            reload_workspace(workspace, self._storage)
        except StorageError as e:
            return CommandResult(message=f"Failed to set default currency: {e}")

        if self._audit_logger:
            self._audit_logger.log_default_currency_set(workspace.budget_name, code)
        return CommandResult(message=f"Default currency set to {code}")

    def _new(self, workspace: Workspace, args: list[str]) -> CommandResult:
        return CommandResult(draft=self._wizard.start(workspace.budget_name))

    def _adjust(self, workspace: Workspace, args: list[str]) -> CommandResult:
        if len(args) < 2:
            return CommandResult(
                message="Usage: adjust <index> <amount> (e.g., adjust 0 +100, adjust 1 -50, adjust 2 500)"
            )

        index = parse_index(args[0], len(workspace.wallets))
        amount = parse_amount(args[1])
        relative = is_relative_amount(args[1])
        wallet_name = workspace.wallets[index].name

        try:
            if relative:
                self._storage.adjust_wallet_balance(workspace.budget_name, index, amount)
            else:
                self._storage.set_wallet_balance(workspace.budget_name, index, amount)
        except (StorageError, ValidationError) as e:
            return CommandResult(message=f"Failed to adjust wallet: {e}")

        if self._audit_logger:
            self._audit_logger.log_balance_changed(
                budget=workspace.budget_name,
                wallet=wallet_name,
                index=index,
                amount=amount,
                relative=relative,
            )

        try:
            reload_workspace(workspace, self._storage)
        except StorageError as e:
            return CommandResult(message=f"Wallet adjusted, but failed to reload: {e}")

        if relative:
            return CommandResult(message=f"Adjusted {wallet_name} by {amount:.2f}")
        return CommandResult(message=f"Set {wallet_name} balance to {amount:.2f}")

    def _delete(self, workspace: Workspace, args: list[str]) -> CommandResult:
        if not args:
            return CommandResult(message="Usage: delete <index>")

        index = parse_index(args[0], len(workspace.wallets))
        wallet = workspace.wallets[index]
        pending = PendingConfirmation(
            prompt=(
                f"Are you sure you want to delete wallet '{wallet.name}' "
                f"(owned by {wallet.owner})?"
            ),
            action=DeleteWallet(budget=workspace.budget_name, index=index),
            origin=ScreenKind.WALLET,
        )
        return CommandResult(pending=pending)

"""
Session Models

The interactive session is one Session object owned by the screen state
machine. The active screen is a tagged union: each screen carries only the
fields that make sense for it, so a wizard draft cannot exist while the
greeting screen is showing, and a pending confirmation cannot outlive the
confirmation screen.

The loaded budget (wallet snapshot, filters, hidden rows, display currency)
lives in the Workspace, which survives screen changes.
"""

from enum import Enum, IntEnum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from terminal_budget.models.budget import BudgetFile, Wallet


class ScreenKind(str, Enum):
    """The five screens of the application."""
    GREETING = "greeting"
    BUDGET_CREATION = "budget_creation"
    WALLET = "wallet"
    WALLET_CREATION = "wallet_creation"
    CONFIRMATION = "confirmation"


# =============================================================================
# TEXT INPUT
# =============================================================================

class LineBuffer(BaseModel):
    """Single-line text input with a cursor."""

    text: str = ""
    cursor: int = Field(default=0, ge=0)

    def insert(self, chars: str) -> None:
        self.text = self.text[:self.cursor] + chars + self.text[self.cursor:]
        self.cursor += len(chars)

    def backspace(self) -> None:
        if self.cursor > 0:
            self.text = self.text[:self.cursor - 1] + self.text[self.cursor:]
            self.cursor -= 1

    def left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def right(self) -> None:
        if self.cursor < len(self.text):
            self.cursor += 1

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0

    @property
    def value(self) -> str:
        return self.text.strip()


# =============================================================================
# WORKSPACE (loaded budget)
# =============================================================================

class WalletFilters(BaseModel):
    """Owner/type/currency predicates; None means "no filter"."""

    owner: Optional[str] = None
    type: Optional[str] = None
    currency: Optional[str] = None

    def matches(self, wallet: Wallet) -> bool:
        if self.owner is not None and wallet.owner != self.owner:
            return False
        if self.type is not None and wallet.type != self.type:
            return False
        if self.currency is not None and wallet.currency != self.currency:
            return False
        return True

    def reset(self) -> None:
        self.owner = None
        self.type = None
        self.currency = None


class Workspace(BaseModel):
    """
    The budget currently open on the wallet screen.

    INVARIANT: `hidden` holds positions into `wallets`. Whenever the wallet
    sequence changes length or order the set is cleared, since the old
    positions would point at different wallets.
    """

    budget_name: str = ""
    wallets: list[Wallet] = Field(default_factory=list)
    default_currency: Optional[str] = None
    filters: WalletFilters = Field(default_factory=WalletFilters)
    hidden: set[int] = Field(default_factory=set)
    display_currency: Optional[str] = None

    def load(self, budget: BudgetFile) -> None:
        """Open a budget, dropping everything tied to the previous one."""
        self.close()
        self.budget_name = budget.name
        self.wallets = list(budget.wallets)
        self.default_currency = budget.effective_currency()

    def refresh(self, budget: BudgetFile) -> None:
        """Replace the wallet snapshot of the open budget with a newer one."""
        old_names = [wallet.name for wallet in self.wallets]
        self.wallets = list(budget.wallets)
        self.default_currency = budget.effective_currency()
        if budget.wallet_names() != old_names:
            self.hidden = set()

    def close(self) -> None:
        self.budget_name = ""
        self.wallets = []
        self.default_currency = None
        self.filters.reset()
        self.hidden = set()
        self.display_currency = None

    def is_excluded(self, index: int) -> bool:
        return index in self.hidden or not self.filters.matches(self.wallets[index])

    def visible_indices(self) -> list[int]:
        return [i for i in range(len(self.wallets)) if not self.is_excluded(i)]

    def target_currency(self) -> Optional[str]:
        """Currency totals are expressed in."""
        return self.display_currency or self.default_currency


# =============================================================================
# WALLET CREATION WIZARD
# =============================================================================

class WizardStep(IntEnum):
    """Wizard steps in the order they are asked."""
    NAME = 0
    TYPE = 1
    CURRENCY = 2
    OWNER = 3
    BALANCE = 4


class WizardDraft(BaseModel):
    """A wallet being assembled by the wizard, plus the wizard's cursor state."""

    budget_name: str
    step: WizardStep = WizardStep.NAME

    # Collected values
    name: str = ""
    type: str = ""
    currency: str = ""
    owner: str = ""
    balance: float = 0.0

    # Input state for the current step
    buffer: LineBuffer = Field(default_factory=LineBuffer)
    suggestions: list[str] = Field(default_factory=list)
    selected: int = 0
    custom: bool = False

    error: Optional[str] = None

    @property
    def accepts_text(self) -> bool:
        """Free text is typed on Name and Balance, or once "custom" is chosen."""
        return self.step in (WizardStep.NAME, WizardStep.BALANCE) or self.custom

    @property
    def on_custom_entry(self) -> bool:
        return bool(self.suggestions) and self.selected == len(self.suggestions) - 1


# =============================================================================
# CONFIRMATION
# =============================================================================

class DeleteWallet(BaseModel):
    """Remove the wallet at `index` from budget `budget`."""
    kind: Literal["delete_wallet"] = "delete_wallet"
    budget: str
    index: int = Field(..., ge=0)


class DeleteBudget(BaseModel):
    """Remove budget file `name`."""
    kind: Literal["delete_budget"] = "delete_budget"
    name: str


PendingAction = Annotated[
    Union[DeleteWallet, DeleteBudget],
    Field(discriminator="kind"),
]


class PendingConfirmation(BaseModel):
    """
    A destructive action waiting for an explicit yes/no.

    CRITICAL: consumed at most once. "Yes" runs the action, "no" drops it;
    either way the session returns to `origin`.
    """

    prompt: str
    action: PendingAction
    origin: ScreenKind


# =============================================================================
# SCREENS
# =============================================================================

class GreetingScreen(BaseModel):
    """Budget picker. The entry after the last file is "Create new budget..."."""
    kind: Literal["greeting"] = "greeting"
    files: list[BudgetFile] = Field(default_factory=list)
    selected: int = 0

    @property
    def on_new_entry(self) -> bool:
        return self.selected == len(self.files)

    def selected_file(self) -> Optional[BudgetFile]:
        if self.on_new_entry:
            return None
        return self.files[self.selected]


class BudgetCreationScreen(BaseModel):
    kind: Literal["budget_creation"] = "budget_creation"
    input: LineBuffer = Field(default_factory=LineBuffer)


class WalletScreen(BaseModel):
    kind: Literal["wallet"] = "wallet"
    command: LineBuffer = Field(default_factory=LineBuffer)


class WalletCreationScreen(BaseModel):
    kind: Literal["wallet_creation"] = "wallet_creation"
    draft: WizardDraft


class ConfirmationScreen(BaseModel):
    kind: Literal["confirmation"] = "confirmation"
    pending: PendingConfirmation


Screen = Annotated[
    Union[
        GreetingScreen,
        BudgetCreationScreen,
        WalletScreen,
        WalletCreationScreen,
        ConfirmationScreen,
    ],
    Field(discriminator="kind"),
]


class Session(BaseModel):
    """Everything the running application knows. Never persisted."""

    screen: Screen = Field(default_factory=GreetingScreen)
    workspace: Workspace = Field(default_factory=Workspace)
    greeting: str = ""
    command_result: str = ""
    error: Optional[str] = None

    @property
    def kind(self) -> ScreenKind:
        return ScreenKind(self.screen.kind)

"""
Screen Descriptions

describe() turns the Session into a plain pydantic model of what belongs on
screen: values, selected entries, excluded rows, cursor positions. Layout
and styling are left to the front-end, which only has to draw these.
"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from terminal_budget.models.session import (
    BudgetCreationScreen,
    ConfirmationScreen,
    GreetingScreen,
    Session,
    WalletCreationScreen,
    WalletScreen,
    WizardStep,
)
from terminal_budget.queries import TotalsCalculator, TotalsResult
from terminal_budget.session.wizard import STEP_PROMPTS


def format_time_ago(moment: datetime, now: datetime) -> str:
    seconds = (now - moment).total_seconds()
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        minutes = int(seconds // 60)
        return "1 minute ago" if minutes == 1 else f"{minutes} minutes ago"
    if seconds < 86400:
        hours = int(seconds // 3600)
        return "1 hour ago" if hours == 1 else f"{hours} hours ago"
    days = int(seconds // 86400)
    return "yesterday" if days == 1 else f"{days} days ago"


class InputLine(BaseModel):
    text: str = ""
    cursor: int = 0


class FileEntry(BaseModel):
    name: str
    updated: str
    wallet_count: int
    selected: bool = False


class GreetingView(BaseModel):
    kind: Literal["greeting"] = "greeting"
    greeting: str
    question: str = "What budget are we dealing with today?"
    files: list[FileEntry] = Field(default_factory=list)
    new_entry_label: str = "Create new budget..."
    new_entry_selected: bool = False
    error: Optional[str] = None


class BudgetCreationView(BaseModel):
    kind: Literal["budget_creation"] = "budget_creation"
    title: str = "CREATE NEW BUDGET"
    prompt: str = "Budget name"
    input: InputLine
    error: Optional[str] = None


class WalletRow(BaseModel):
    """One table row. Excluded rows are shown but not counted."""
    index: int
    name: str
    owner: str
    type: str
    balance: float
    currency: str
    excluded: bool = False


class WalletView(BaseModel):
    kind: Literal["wallet"] = "wallet"
    title: str = "YOUR BUDGET"
    budget_name: str
    rows: list[WalletRow] = Field(default_factory=list)
    empty_hint: Optional[str] = None
    totals: TotalsResult
    active_filters: dict[str, str] = Field(default_factory=dict)
    command: InputLine
    command_result: str = ""
    error: Optional[str] = None


class WizardOption(BaseModel):
    label: str
    selected: bool = False


class WizardView(BaseModel):
    kind: Literal["wallet_creation"] = "wallet_creation"
    title: str = "NEW WALLET"
    step: int
    step_count: int = len(WizardStep)
    prompt: str
    options: list[WizardOption] = Field(default_factory=list)
    accepts_text: bool
    input: InputLine
    collected: dict[str, str] = Field(default_factory=dict)
    error: Optional[str] = None


class ConfirmationView(BaseModel):
    kind: Literal["confirmation"] = "confirmation"
    prompt: str
    hint: str = "Press Y to confirm, N or Esc to cancel"
    error: Optional[str] = None


ScreenView = Union[GreetingView, BudgetCreationView, WalletView, WizardView, ConfirmationView]


def describe(
    session: Session,
    totals: TotalsCalculator,
    now: Optional[datetime] = None,
) -> ScreenView:
    """Describe the active screen."""
    now = now or datetime.now()
    screen = session.screen

    if isinstance(screen, GreetingScreen):
        return GreetingView(
            greeting=session.greeting,
            files=[
                FileEntry(
                    name=budget.name,
                    updated=f"Updated {format_time_ago(budget.updated_at, now)}",
                    wallet_count=len(budget.wallets),
                    selected=(i == screen.selected),
                )
                for i, budget in enumerate(screen.files)
            ],
            new_entry_selected=screen.on_new_entry,
            error=session.error,
        )

    if isinstance(screen, BudgetCreationScreen):
        return BudgetCreationView(
            input=InputLine(text=screen.input.text, cursor=screen.input.cursor),
            error=session.error,
        )

    if isinstance(screen, WalletScreen):
        return _describe_wallets(session, screen, totals)

    if isinstance(screen, WalletCreationScreen):
        draft = screen.draft
        collected = {
            step.name.lower(): getattr(draft, step.name.lower())
            for step in WizardStep
            if step < draft.step and step != WizardStep.BALANCE
        }
        return WizardView(
            step=int(draft.step),
            prompt=STEP_PROMPTS[draft.step],
            options=[
                WizardOption(label=label, selected=(i == draft.selected))
                for i, label in enumerate(draft.suggestions)
            ],
            accepts_text=draft.accepts_text,
            input=InputLine(text=draft.buffer.text, cursor=draft.buffer.cursor),
            collected=collected,
            error=draft.error or session.error,
        )

    if isinstance(screen, ConfirmationScreen):
        return ConfirmationView(prompt=screen.pending.prompt, error=session.error)

    raise TypeError(f"unknown screen {type(screen).__name__}")


def _describe_wallets(
    session: Session,
    screen: WalletScreen,
    totals: TotalsCalculator,
) -> WalletView:
    workspace = session.workspace
    filters = workspace.filters.model_dump(exclude_none=True)

    rows = [
        WalletRow(
            index=i,
            name=wallet.name,
            owner=wallet.owner,
            type=wallet.type,
            balance=wallet.balance,
            currency=wallet.currency,
            excluded=workspace.is_excluded(i),
        )
        for i, wallet in enumerate(workspace.wallets)
    ]

    return WalletView(
        budget_name=workspace.budget_name,
        rows=rows,
        empty_hint=None if rows else "No wallets found. Type 'new' to create one.",
        totals=totals.calculate(workspace),
        active_filters=filters,
        command=InputLine(text=screen.command.text, cursor=screen.command.cursor),
        command_result=session.command_result,
        error=session.error,
    )

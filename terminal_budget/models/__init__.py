"""
Data Models Package

Pydantic models for budget files, rate tables, the interactive session
and audit events.
"""

from terminal_budget.models.budget import (
    DEFAULT_BUDGET_CURRENCY,
    BudgetFile,
    LegacyBudgetData,
    Wallet,
    WalletFields,
)
from terminal_budget.models.rates import RatesPayload, RateSnapshot
from terminal_budget.models.session import (
    BudgetCreationScreen,
    ConfirmationScreen,
    DeleteBudget,
    DeleteWallet,
    GreetingScreen,
    LineBuffer,
    PendingAction,
    PendingConfirmation,
    ScreenKind,
    Session,
    WalletCreationScreen,
    WalletFilters,
    WalletScreen,
    WizardDraft,
    WizardStep,
    Workspace,
)
from terminal_budget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Budget models
    "DEFAULT_BUDGET_CURRENCY",
    "BudgetFile",
    "LegacyBudgetData",
    "Wallet",
    "WalletFields",
    # Rate models
    "RatesPayload",
    "RateSnapshot",
    # Session models
    "BudgetCreationScreen",
    "ConfirmationScreen",
    "DeleteBudget",
    "DeleteWallet",
    "GreetingScreen",
    "LineBuffer",
    "PendingAction",
    "PendingConfirmation",
    "ScreenKind",
    "Session",
    "WalletCreationScreen",
    "WalletFilters",
    "WalletScreen",
    "WizardDraft",
    "WizardStep",
    "Workspace",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

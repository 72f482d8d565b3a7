"""
Interactive Session Engine

Screen state machine, wallet wizard, wallet command interpreter,
confirmation gate and the declarative screen descriptions.
"""

from terminal_budget.session.commands import CommandInterpreter, CommandResult
from terminal_budget.session.confirmation import ConfirmationGate
from terminal_budget.session.machine import GREETINGS, ScreenStateMachine
from terminal_budget.session.views import ScreenView, describe
from terminal_budget.session.wizard import (
    CUSTOM_ENTRY_LABELS,
    DEFAULT_SUGGESTIONS,
    WizardEngine,
    WizardOutcome,
)

__all__ = [
    "CUSTOM_ENTRY_LABELS",
    "CommandInterpreter",
    "CommandResult",
    "ConfirmationGate",
    "DEFAULT_SUGGESTIONS",
    "GREETINGS",
    "ScreenStateMachine",
    "ScreenView",
    "WizardEngine",
    "WizardOutcome",
    "describe",
]

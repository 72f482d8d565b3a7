"""
Audit Models for Terminal Budget

Every mutation of a budget file, every rate lookup and every recovered
failure is described by an AuditEvent and written to the structured log.
This makes it possible to reconstruct what happened to a budget file after
the fact, since the terminal itself keeps no history.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Budget files
    BUDGET_CREATED = "budget_created"
    BUDGET_OPENED = "budget_opened"
    BUDGET_DELETED = "budget_deleted"
    EXAMPLE_SEEDED = "example_seeded"
    DEFAULT_CURRENCY_SET = "default_currency_set"

    # Wallets
    WALLET_CREATED = "wallet_created"
    WALLET_ADJUSTED = "wallet_adjusted"
    WALLET_BALANCE_SET = "wallet_balance_set"
    WALLET_DELETED = "wallet_deleted"

    # Confirmation gate
    CONFIRMATION_STAGED = "confirmation_staged"
    CONFIRMATION_ACCEPTED = "confirmation_accepted"
    CONFIRMATION_DECLINED = "confirmation_declined"

    # Exchange rates
    RATES_CACHE_HIT = "rates_cache_hit"
    RATES_FETCHED = "rates_fetched"
    RATE_SOURCE_FAILED = "rate_source_failed"
    RATES_UNAVAILABLE = "rates_unavailable"
    CONVERSION_FALLBACK = "conversion_fallback"

    # Failures that were turned into a message
    ACTION_FAILED = "action_failed"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What the event is about, e.g. ("wallet", "Cash Wallet")
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None

    # One id per application run
    session_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a key press rather than a background lookup?"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "session_id": str(self.session_id) if self.session_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.wallet_created("home", "Cash", "USD", 10.0)
        event = AuditEventBuilder.rates_fetched("EUR", "frankfurter", 30)
    """

    @staticmethod
    def budget_created(name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_CREATED,
            entity_type="budget",
            entity_id=name,
            description=f"Budget created: {name}",
            is_user_action=True,
        )

    @staticmethod
    def budget_opened(name: str, wallet_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_OPENED,
            severity=AuditSeverity.DEBUG,
            entity_type="budget",
            entity_id=name,
            description=f"Budget opened: {name}",
            details={"wallet_count": wallet_count},
            is_user_action=True,
        )

    @staticmethod
    def budget_deleted(name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_DELETED,
            entity_type="budget",
            entity_id=name,
            description=f"Budget deleted: {name}",
            is_user_action=True,
        )

    @staticmethod
    def example_seeded(name: str, wallet_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXAMPLE_SEEDED,
            entity_type="budget",
            entity_id=name,
            description=f"Example budget '{name}' created with {wallet_count} wallets",
            details={"wallet_count": wallet_count},
        )

    @staticmethod
    def default_currency_set(budget: str, currency: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEFAULT_CURRENCY_SET,
            entity_type="budget",
            entity_id=budget,
            description=f"Default currency of {budget} set to {currency}",
            details={"currency": currency},
            is_user_action=True,
        )

    @staticmethod
    def wallet_created(
        budget: str,
        wallet: str,
        currency: str,
        balance: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WALLET_CREATED,
            entity_type="wallet",
            entity_id=wallet,
            description=f"Wallet created in {budget}: {wallet}",
            details={
                "budget": budget,
                "currency": currency,
                "balance": balance,
            },
            is_user_action=True,
        )

    @staticmethod
    def wallet_balance_changed(
        budget: str,
        wallet: str,
        index: int,
        amount: float,
        relative: bool,
    ) -> AuditEvent:
        if relative:
            event_type = AuditEventType.WALLET_ADJUSTED
            description = f"Wallet {wallet} adjusted by {amount:+.2f}"
        else:
            event_type = AuditEventType.WALLET_BALANCE_SET
            description = f"Wallet {wallet} balance set to {amount:.2f}"
        return AuditEvent(
            event_type=event_type,
            entity_type="wallet",
            entity_id=wallet,
            description=description,
            details={
                "budget": budget,
                "index": index,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def wallet_deleted(budget: str, index: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WALLET_DELETED,
            entity_type="wallet",
            description=f"Wallet #{index} deleted from {budget}",
            details={
                "budget": budget,
                "index": index,
            },
            is_user_action=True,
        )

    @staticmethod
    def confirmation(kind: str, prompt: str, event_type: AuditEventType) -> AuditEvent:
        return AuditEvent(
            event_type=event_type,
            entity_type="confirmation",
            entity_id=kind,
            description=prompt,
            is_user_action=True,
        )

    @staticmethod
    def rates_cache_hit(base: str, age_seconds: float) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RATES_CACHE_HIT,
            severity=AuditSeverity.DEBUG,
            entity_type="rates",
            entity_id=base,
            description=f"Served {base} rates from cache",
            details={"age_seconds": round(age_seconds, 1)},
        )

    @staticmethod
    def rates_fetched(base: str, source: str, rate_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RATES_FETCHED,
            entity_type="rates",
            entity_id=base,
            description=f"Fetched {rate_count} {base} rates from {source}",
            details={
                "source": source,
                "rate_count": rate_count,
            },
        )

    @staticmethod
    def rate_source_failed(base: str, source: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RATE_SOURCE_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="rates",
            entity_id=base,
            description=f"Rate source {source} failed",
            error_message=error_message,
            details={"source": source},
        )

    @staticmethod
    def rates_unavailable(base: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RATES_UNAVAILABLE,
            severity=AuditSeverity.ERROR,
            entity_type="rates",
            entity_id=base,
            description=f"No rate source could provide {base} rates",
            error_message=error_message,
        )

    @staticmethod
    def conversion_fallback(
        wallet: str,
        from_currency: str,
        to_currency: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONVERSION_FALLBACK,
            severity=AuditSeverity.WARNING,
            entity_type="wallet",
            entity_id=wallet,
            description=(
                f"Could not convert {from_currency} to {to_currency}; "
                "balance counted unconverted"
            ),
            error_message=error_message,
            details={
                "from_currency": from_currency,
                "to_currency": to_currency,
            },
        )

    @staticmethod
    def action_failed(action: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACTION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"Action failed: {action}",
            error_message=error_message,
            details={"action": action},
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )

"""
Audit Logger

Every significant action is logged as a structured JSON record.

The terminal is owned by the interactive screen, so log output goes to a
file (see configure_file_logging) and never to stdout. The audit logger:
- Is synchronous, like the rest of the event loop
- Leaves write failures to the stdlib handler, which reports and continues
- Stamps every event with the id of the current application run
"""

import logging
from pathlib import Path
from typing import Optional
from uuid import UUID, uuid4

import structlog

from terminal_budget.models.audit import AuditEvent, AuditEventBuilder, AuditEventType


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_file_logging(path: Path, level: str = "INFO") -> None:
    """
    Route all stdlib (and therefore structlog) records to `path`.

    Replaces any handlers already installed on the root logger.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, session_id: Optional[UUID] = None):
        self._session_id = session_id or create_session_id()
        self._logger = structlog.get_logger("terminal_budget.audit")

    @property
    def session_id(self) -> UUID:
        return self._session_id

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        if event.session_id is None:
            event.session_id = self._session_id
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_budget_created(self, name: str) -> None:
        self.log(AuditEventBuilder.budget_created(name))

    def log_budget_opened(self, name: str, wallet_count: int) -> None:
        self.log(AuditEventBuilder.budget_opened(name, wallet_count))

    def log_budget_deleted(self, name: str) -> None:
        self.log(AuditEventBuilder.budget_deleted(name))

    def log_example_seeded(self, name: str, wallet_count: int) -> None:
        self.log(AuditEventBuilder.example_seeded(name, wallet_count))

    def log_default_currency_set(self, budget: str, currency: str) -> None:
        self.log(AuditEventBuilder.default_currency_set(budget, currency))

    def log_wallet_created(
        self,
        budget: str,
        wallet: str,
        currency: str,
        balance: float,
    ) -> None:
        self.log(AuditEventBuilder.wallet_created(budget, wallet, currency, balance))

    def log_balance_changed(
        self,
        budget: str,
        wallet: str,
        index: int,
        amount: float,
        relative: bool,
    ) -> None:
        """Log an `adjust` command (delta or absolute set)."""
        self.log(AuditEventBuilder.wallet_balance_changed(
            budget=budget,
            wallet=wallet,
            index=index,
            amount=amount,
            relative=relative,
        ))

    def log_wallet_deleted(self, budget: str, index: int) -> None:
        self.log(AuditEventBuilder.wallet_deleted(budget, index))

    def log_confirmation_staged(self, kind: str, prompt: str) -> None:
        self.log(AuditEventBuilder.confirmation(
            kind, prompt, AuditEventType.CONFIRMATION_STAGED
        ))

    def log_confirmation_accepted(self, kind: str, prompt: str) -> None:
        self.log(AuditEventBuilder.confirmation(
            kind, prompt, AuditEventType.CONFIRMATION_ACCEPTED
        ))

    def log_confirmation_declined(self, kind: str, prompt: str) -> None:
        self.log(AuditEventBuilder.confirmation(
            kind, prompt, AuditEventType.CONFIRMATION_DECLINED
        ))

    def log_rates_cache_hit(self, base: str, age_seconds: float) -> None:
        self.log(AuditEventBuilder.rates_cache_hit(base, age_seconds))

    def log_rates_fetched(self, base: str, source: str, rate_count: int) -> None:
        self.log(AuditEventBuilder.rates_fetched(base, source, rate_count))

    def log_rate_source_failed(self, base: str, source: str, error_message: str) -> None:
        self.log(AuditEventBuilder.rate_source_failed(base, source, error_message))

    def log_rates_unavailable(self, base: str, error_message: str) -> None:
        self.log(AuditEventBuilder.rates_unavailable(base, error_message))

    def log_conversion_fallback(
        self,
        wallet: str,
        from_currency: str,
        to_currency: str,
        error_message: str,
    ) -> None:
        self.log(AuditEventBuilder.conversion_fallback(
            wallet=wallet,
            from_currency=from_currency,
            to_currency=to_currency,
            error_message=error_message,
        ))

    def log_action_failed(self, action: str, error_message: str) -> None:
        self.log(AuditEventBuilder.action_failed(action, error_message))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.log(AuditEventBuilder.system_error(error_type, error_message, details))


def create_session_id() -> UUID:
    """Create the id shared by every event of one application run."""
    return uuid4()

"""
Core Data Models for Terminal Budget

These models define the on-disk shape of a budget file and the wallets it
holds. They are serialized as-is by the JSON storage backend.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from terminal_budget.validation import normalize_currency


DEFAULT_BUDGET_CURRENCY = "USD"


class Wallet(BaseModel):
    """
    A named balance with an owner, a type and a currency.

    Name uniqueness is checked by storage when the wallet is created.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Wallet name, unique within its budget file"
    )
    owner: str = Field(
        default="",
        description="Free-text owner"
    )
    type: str = Field(
        default="",
        description="Free-text category such as bank, cash, invest"
    )
    currency: str = Field(
        ...,
        description="Three-letter currency code"
    )
    balance: float = Field(
        default=0.0,
        allow_inf_nan=False,
        description="Signed balance in the wallet's currency"
    )

    @field_validator('currency')
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return normalize_currency(v)


class WalletFields(BaseModel):
    """Fields collected before a wallet exists (wizard output, direct API)."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    owner: str = ""
    type: str = ""
    currency: str = Field(..., min_length=1)
    balance: float = 0.0


class BudgetFile(BaseModel):
    """
    A named collection of wallets with a default currency.

    The name doubles as the storage key and never changes once created.
    """

    name: str = Field(
        ...,
        min_length=1,
        description="Budget name, used as the file name"
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="When the budget was created"
    )
    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="Last time the snapshot was written"
    )
    wallets: list[Wallet] = Field(default_factory=list)
    default_currency: str = Field(
        default=DEFAULT_BUDGET_CURRENCY,
        description="Currency totals are shown in unless overridden"
    )

    @field_validator('default_currency')
    @classmethod
    def validate_default_currency(cls, v: str) -> str:
        """An empty value means "not set"; anything else must be a valid code."""
        if not v:
            return ""
        return normalize_currency(v)

    def effective_currency(self) -> Optional[str]:
        """Default currency, falling back to the first wallet's currency."""
        if self.default_currency:
            return self.default_currency
        if self.wallets:
            return self.wallets[0].currency
        return None

    def wallet_names(self) -> list[str]:
        return [wallet.name for wallet in self.wallets]


class LegacyBudgetData(BaseModel):
    """Older on-disk format: wallets and default currency only, no metadata."""
    model_config = ConfigDict(extra="forbid")

    wallets: list[Wallet]
    default_currency: str = ""

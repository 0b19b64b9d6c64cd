"""Shared value types used across consent, payment and refund models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BlinkModel(BaseModel):
    """Base model for all DTOs. Unknown response fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class Bank(str, Enum):
    """Banks supported by Blink Debit."""

    ASB = "ASB"
    ANZ = "ANZ"
    BNZ = "BNZ"
    WESTPAC = "Westpac"
    KIWIBANK = "KiwiBank"
    PNZ = "PNZ"


class AmountCurrency(str, Enum):
    NZD = "NZD"


class Amount(BlinkModel):
    """A monetary amount. ``total`` is a decimal string, e.g. ``"1.25"``."""

    currency: AmountCurrency = AmountCurrency.NZD
    total: str = Field(..., pattern=r"^\d{1,10}(\.\d{1,2})?$")


class Pcr(BlinkModel):
    """Particulars, code and reference shown on the payee's bank statement."""

    particulars: str = Field(..., max_length=12)
    code: str | None = Field(None, max_length=12)
    reference: str | None = Field(None, max_length=12)


class Period(str, Enum):
    """Enduring consent period over which the maximum amount applies."""

    ANNUAL = "annual"
    DAILY = "daily"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    WEEKLY = "weekly"


class Account(BlinkModel):
    """A customer account offered for selection on a consent."""

    account_reference_id: str | None = None
    account_number: str | None = None
    name: str | None = None
    available_balance: str | None = None

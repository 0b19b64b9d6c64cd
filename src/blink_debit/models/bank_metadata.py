"""Bank metadata returned by ``GET /meta``."""

from pydantic import Field

from blink_debit.models.common import Amount, Bank, BlinkModel
from blink_debit.models.flows import IdentifierType


class EnduringConsentFeature(BlinkModel):
    enabled: bool
    consent_indefinite: bool | None = None


class DecoupledFlowIdentifier(BlinkModel):
    type: IdentifierType
    name: str
    validation_regex: str | None = None
    description: str | None = None


class DecoupledFlowFeature(BlinkModel):
    enabled: bool
    available_identifiers: list[DecoupledFlowIdentifier] = Field(default_factory=list)
    request_timeout: str | None = None


class BankMetadataFeatures(BlinkModel):
    enduring_consent: EnduringConsentFeature | None = None
    decoupled_flow: DecoupledFlowFeature | None = None


class BankMetadataRedirectFlow(BlinkModel):
    enabled: bool
    request_timeout: str | None = None


class BankMetadata(BlinkModel):
    name: Bank
    payment_limit: Amount | None = None
    features: BankMetadataFeatures
    redirect_flow: BankMetadataRedirectFlow | None = None

"""
Authorisation flow variants.

The flow detail on a consent request is a tagged union keyed on ``type``:
redirect, decoupled or gateway. A gateway flow may carry a flow hint, itself
a tagged union of redirect and decoupled hints.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from blink_debit.models.common import Bank, BlinkModel


class AuthFlowDetailType(str, Enum):
    GATEWAY = "gateway"
    REDIRECT = "redirect"
    DECOUPLED = "decoupled"


class IdentifierType(str, Enum):
    """How the bank identifies the customer in a decoupled flow."""

    PHONE_NUMBER = "phone_number"
    MOBILE_NUMBER = "mobile_number"
    CONSENT_ID = "consent_id"


class RedirectFlow(BlinkModel):
    """Customer is redirected to their bank and back to ``redirect_uri``."""

    type: Literal["redirect"] = "redirect"
    redirect_uri: str
    bank: Bank
    redirect_to_app: bool | None = None


class DecoupledFlow(BlinkModel):
    """Customer approves the consent in their banking app (push notification)."""

    type: Literal["decoupled"] = "decoupled"
    bank: Bank | None = None
    identifier_type: IdentifierType
    identifier_value: str
    callback_url: str | None = None


class RedirectFlowHint(BlinkModel):
    type: Literal["redirect"] = "redirect"
    bank: Bank | None = None


class DecoupledFlowHint(BlinkModel):
    type: Literal["decoupled"] = "decoupled"
    bank: Bank | None = None
    identifier_type: IdentifierType
    identifier_value: str


FlowHint = Annotated[Union[RedirectFlowHint, DecoupledFlowHint], Field(discriminator="type")]


class GatewayFlow(BlinkModel):
    """Customer picks their bank on the hosted Blink gateway page."""

    type: Literal["gateway"] = "gateway"
    redirect_uri: str
    flow_hint: FlowHint | None = None


AuthFlowDetail = Annotated[
    Union[RedirectFlow, DecoupledFlow, GatewayFlow],
    Field(discriminator="type"),
]


class AuthFlow(BlinkModel):
    detail: AuthFlowDetail

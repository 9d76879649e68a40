"""
Solana Actions request/response models (pydantic).

Unset optional fields are dropped from JSON (routes use response_model_exclude_none).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from pydantic import BaseModel, Field
from solders.pubkey import Pubkey


class ActionParameter(BaseModel):
    """Input a client collects before calling a linked action's href."""

    name: str = Field(..., description="Template variable name used in href, e.g. 'amount'")
    label: str | None = Field(None, description="Placeholder shown to the user")
    required: bool | None = Field(None, description="Whether the user must fill this in")


class LinkedAction(BaseModel):
    """One button in the action UI."""

    href: str = Field(..., description="Action URL; may contain {name} templates for parameters")
    label: str = Field(..., description="Button text")
    parameters: list[ActionParameter] | None = Field(None, description="Inputs templated into href")


class ActionLinks(BaseModel):
    actions: list[LinkedAction] = Field(default_factory=list)


class ActionGetResponse(BaseModel):
    """GET response: the action descriptor."""

    icon: str = Field(..., description="Absolute image URL")
    label: str = Field(..., description="Default button label")
    title: str
    description: str
    disabled: bool | None = Field(None, description="True when the action cannot be executed")
    error: dict[str, str] | None = Field(None, description="Non-fatal error shown to the user")
    links: ActionLinks | None = None


class ActionPostRequest(BaseModel):
    """POST body: the account that will pay for and sign the transaction."""

    account: str = Field(..., min_length=1, max_length=64, description="Donor wallet (base58)")


class ActionPostResponse(BaseModel):
    """POST response: base64 unsigned transaction."""

    transaction: str = Field(..., description="Base64-encoded serialized unsigned transaction")
    message: str | None = Field(None, description="Optional message shown to the user")


class ActionError(BaseModel):
    """Error body for every 4xx/5xx raised by the donate action."""

    message: str
    error_code: str | None = None


class ActionRule(BaseModel):
    pathPattern: str
    apiPath: str


class ActionsJsonResponse(BaseModel):
    """GET /actions.json: maps website paths to action API paths."""

    rules: list[ActionRule]


@dataclass(frozen=True)
class DonationRequest:
    """Validated POST input: who pays, who receives, how many lamports."""

    payer: Pubkey
    recipient: Pubkey
    lamports: int
    amount_sol: Decimal

"""
Request resolver: turns raw HTTP inputs into action descriptors and validated donation requests.

Amount policy: the SOL amount is parsed as a Decimal and converted to lamports
rounding half-up to the nearest whole lamport (0.0000000005 SOL -> 1 lamport).
Lamports must fit in u64.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from solana_donate.actions.metadata import DonateMetadataProvider
from solana_donate.actions.models import (
    ActionGetResponse,
    ActionLinks,
    ActionParameter,
    ActionPostRequest,
    DonationRequest,
    LinkedAction,
)
from solana_donate.config.settings import LAMPORTS_PER_SOL, DonateSettings
from solana_donate.core.exceptions import InvalidAmount
from solana_donate.utils.wallet_utils import decode_account

CURRENCY = "SOL"
AMOUNT_PARAMETER_NAME = "amount"
CUSTOM_AMOUNT_LABEL = "Donate"
CUSTOM_AMOUNT_PLACEHOLDER = "Enter a custom SOL amount"
U64_MAX = 2**64 - 1

# Plain ASCII decimal, optional exponent; Decimal alone also takes "1_0" and non-ASCII digits
AMOUNT_PATTERN = re.compile(r"(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def format_amount(amount: Decimal) -> str:
    """Plain decimal text: 0.25, 0.5, 1, 100 (no exponent, no trailing zeros)."""
    return format(amount.normalize(), "f")


def parse_amount(raw: str | None) -> Decimal:
    """
    Parse a SOL amount string.

    Raises:
        InvalidAmount: missing, non-numeric, NaN/infinite or negative.
    """
    text = (raw or "").strip()
    if not text:
        raise InvalidAmount("amount is required")
    if text.startswith("-") and AMOUNT_PATTERN.fullmatch(text[1:]):
        raise InvalidAmount("amount must not be negative")
    if not AMOUNT_PATTERN.fullmatch(text):
        raise InvalidAmount(f"amount must be a number, got {text[:32]!r}")
    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise InvalidAmount(f"amount must be a number, got {text[:32]!r}") from e
    if not amount.is_finite():
        raise InvalidAmount("amount must be a finite number")
    if amount < 0:
        raise InvalidAmount("amount must not be negative")
    return amount


def sol_to_lamports(amount: Decimal, lamports_per_sol: int = LAMPORTS_PER_SOL) -> int:
    """SOL -> lamports, rounded half-up. Raises InvalidAmount when the result exceeds u64."""
    try:
        lamports = (amount * lamports_per_sol).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    except ArithmeticError as e:
        raise InvalidAmount("amount is too large") from e
    if lamports > U64_MAX:
        raise InvalidAmount("amount is too large")
    return int(lamports)


class RequestResolver:
    """Builds descriptors for GET and validated DonationRequest for POST."""

    def __init__(self, settings: DonateSettings, metadata: DonateMetadataProvider | None = None) -> None:
        self._settings = settings
        self._metadata = metadata or DonateMetadataProvider(settings)
        self._base_path = settings.mount_path.rstrip("/")

    def _href(self, amount_text: str) -> str:
        return f"{self._base_path}/{amount_text}"

    def resolve_listing(self) -> ActionGetResponse:
        """Descriptor for the root: one link per suggested amount plus a custom-amount link (last)."""
        info = self._metadata.describe()
        actions = [
            LinkedAction(
                label=f"{format_amount(amount)} {CURRENCY}",
                href=self._href(format_amount(amount)),
            )
            for amount in self._metadata.amount_options
        ]
        actions.append(
            LinkedAction(
                href=self._href("{" + AMOUNT_PARAMETER_NAME + "}"),
                label=CUSTOM_AMOUNT_LABEL,
                parameters=[
                    ActionParameter(name=AMOUNT_PARAMETER_NAME, label=CUSTOM_AMOUNT_PLACEHOLDER),
                ],
            )
        )
        return ActionGetResponse(
            icon=info.icon,
            label=f"{format_amount(self._metadata.default_amount)} {CURRENCY}",
            title=info.title,
            description=info.description,
            links=ActionLinks(actions=actions),
        )

    def resolve_amount_descriptor(self, amount: str) -> ActionGetResponse:
        """Descriptor for /{amount}. The amount is echoed verbatim; validation happens on POST."""
        info = self._metadata.describe()
        return ActionGetResponse(
            icon=info.icon,
            label=f"{amount} {CURRENCY}",
            title=info.title,
            description=info.description,
        )

    def resolve_build_request(self, amount: str | None, body: ActionPostRequest) -> DonationRequest:
        """
        Validate POST inputs.

        amount falls back to the configured default when None. Raises InvalidAmount
        or InvalidAccount; nothing is built on failure.
        """
        if amount is None:
            amount_sol = self._metadata.default_amount
        else:
            amount_sol = parse_amount(amount)
        lamports = sol_to_lamports(amount_sol, self._settings.lamports_per_sol)
        payer = decode_account(body.account, role="account")
        recipient = decode_account(self._settings.destination_wallet, role="destination wallet")
        return DonationRequest(payer=payer, recipient=recipient, lamports=lamports, amount_sol=amount_sol)

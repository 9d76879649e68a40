"""
FastAPI router: donate action.

GET  /            -> action descriptor with suggested amounts + custom amount link
GET  /{amount}    -> action descriptor labelled with the amount
POST /            -> unsigned transfer for the default amount
POST /{amount}    -> unsigned transfer for amount SOL

Mounted under DONATE_MOUNT_PATH (default /api/donate) by server.create_app.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Request

from solana_donate.actions.builder import DonateTransactionBuilder
from solana_donate.actions.encoder import encode_transaction
from solana_donate.actions.models import ActionError, ActionGetResponse, ActionPostRequest, ActionPostResponse
from solana_donate.actions.resolver import CURRENCY, RequestResolver, format_amount
from solana_donate.config.settings import DonateSettings
from solana_donate.donate_logging import get_logger
from solana_donate.ledger.assembler import TransactionAssembler, assembler_from_settings
from solana_donate.utils.wallet_utils import short_wallet

logger = get_logger(__name__)

router = APIRouter(tags=["Donate"])

_ERROR_RESPONSES = {
    400: {"model": ActionError, "description": "Invalid amount or account"},
    503: {"model": ActionError, "description": "Could not assemble transaction (RPC unavailable)"},
}


def get_donate_settings(request: Request) -> DonateSettings:
    """Dependency: settings the app was created with (app.state.settings)."""
    return request.app.state.settings


def get_resolver(settings: DonateSettings = Depends(get_donate_settings)) -> RequestResolver:
    return RequestResolver(settings)


def get_assembler(settings: DonateSettings = Depends(get_donate_settings)) -> TransactionAssembler:
    """Dependency: assembler bound to the configured RPC. Override in tests."""
    return assembler_from_settings(settings)


def get_builder(assembler: TransactionAssembler = Depends(get_assembler)) -> DonateTransactionBuilder:
    return DonateTransactionBuilder(assembler)


async def _prepare_donation(
    amount: str | None,
    body: ActionPostRequest,
    resolver: RequestResolver,
    builder: DonateTransactionBuilder,
) -> ActionPostResponse:
    donation = resolver.resolve_build_request(amount, body)
    tx = await builder.build(donation.payer, donation.recipient, donation.lamports)
    logger.info(
        "donate_transaction_prepared",
        account=short_wallet(donation.payer),
        amount_sol=format_amount(donation.amount_sol),
        lamports=donation.lamports,
    )
    return ActionPostResponse(
        transaction=encode_transaction(tx),
        message=f"Thank you for donating {format_amount(donation.amount_sol)} {CURRENCY}!",
    )


@router.get("/", response_model=ActionGetResponse, response_model_exclude_none=True)
async def get_donate_listing(resolver: RequestResolver = Depends(get_resolver)) -> ActionGetResponse:
    """Action descriptor with one link per suggested amount and a custom amount link."""
    response = resolver.resolve_listing()
    logger.debug("donate_listing_served", links=len(response.links.actions) if response.links else 0)
    return response


@router.get("/{amount}", response_model=ActionGetResponse, response_model_exclude_none=True)
async def get_donate_amount(
    amount: str = Path(..., description="Donation amount in SOL", examples=["1"]),
    resolver: RequestResolver = Depends(get_resolver),
) -> ActionGetResponse:
    """Action descriptor labelled with the requested amount (validated on POST)."""
    return resolver.resolve_amount_descriptor(amount)


@router.post(
    "/",
    response_model=ActionPostResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def post_donate_default(
    body: ActionPostRequest,
    resolver: RequestResolver = Depends(get_resolver),
    builder: DonateTransactionBuilder = Depends(get_builder),
) -> ActionPostResponse:
    """Unsigned transfer of the default amount from body.account to the donation wallet."""
    return await _prepare_donation(None, body, resolver, builder)


@router.post(
    "/{amount}",
    response_model=ActionPostResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def post_donate_amount(
    body: ActionPostRequest,
    amount: str = Path(..., description="Donation amount in SOL", examples=["1"]),
    resolver: RequestResolver = Depends(get_resolver),
    builder: DonateTransactionBuilder = Depends(get_builder),
) -> ActionPostResponse:
    """Unsigned transfer of amount SOL from body.account to the donation wallet."""
    return await _prepare_donation(amount, body, resolver, builder)

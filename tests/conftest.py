"""
Pytest fixtures for Solana Donate tests. No network: the assembler uses a fixed blockhash.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey

from solana_donate.config.settings import DonateSettings
from solana_donate.ledger.assembler import StaticBlockhashProvider, TransactionAssembler

DESTINATION_WALLET = "GALn5nQYPkgnbC2yiZa4VRcM2zYsBLXTN64GcFFVzuq1"
FIXED_BLOCKHASH = Hash.new_unique()


@pytest.fixture
def settings() -> DonateSettings:
    """Explicit settings so tests do not depend on the developer's env."""
    return DonateSettings(
        destination_wallet=DESTINATION_WALLET,
        amount_options=(Decimal("0.25"), Decimal("0.5"), Decimal("1")),
        default_amount=Decimal("1"),
        mount_path="/api/donate",
        icon="https://example.com/icon.png",
        title="Donate to SOL Maniac",
        description="We make Solana Easy! | Content Creator for Solana.",
        solana_rpc_url="http://localhost:8899",
        commitment="confirmed",
        blockhash_timeout_sec=5.0,
        use_dummy_blockhash=True,
    )


@pytest.fixture
def blockhash() -> Hash:
    return FIXED_BLOCKHASH


@pytest.fixture
def assembler() -> TransactionAssembler:
    return TransactionAssembler(StaticBlockhashProvider(FIXED_BLOCKHASH), timeout_sec=5.0)


@pytest.fixture
def donor() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def app(settings, assembler):
    """FastAPI app built from test settings; assembler overridden with the fixed blockhash."""
    from solana_donate.api_server.donate import get_assembler
    from solana_donate.api_server.server import create_app

    application = create_app(settings)
    application.dependency_overrides[get_assembler] = lambda: assembler
    return application


@pytest.fixture
def client(app):
    """FastAPI TestClient over the test app."""
    from fastapi.testclient import TestClient

    with TestClient(app) as c:
        yield c

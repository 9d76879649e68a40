"""
Transaction assembly: recent blockhash + v0 message compilation.

- RpcBlockhashProvider fetches the recent blockhash over solana-py AsyncClient.
- StaticBlockhashProvider returns a fixed blockhash (offline mode: DONATE_USE_DUMMY_BLOCKHASH=1, tests).
- TransactionAssembler compiles instructions into an unsigned VersionedTransaction
  with the fee payer first and zeroed signature slots, ready for client-side signing.
Single await point is the blockhash fetch; bounded by timeout_sec. Any failure is AssemblyFailed.
"""

from __future__ import annotations

import asyncio
from typing import Protocol, Sequence

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from solana_donate.config.env import masked_rpc_url
from solana_donate.config.settings import DonateSettings
from solana_donate.core.exceptions import AssemblyFailed
from solana_donate.donate_logging import get_logger
from solana_donate.utils.wallet_utils import short_wallet

logger = get_logger(__name__)


class BlockhashProvider(Protocol):
    async def latest_blockhash(self) -> Hash: ...


class RpcBlockhashProvider:
    """Fetch the latest blockhash from a Solana RPC node (one client per call)."""

    def __init__(self, rpc_url: str, commitment: str = "confirmed") -> None:
        self._rpc_url = rpc_url
        self._commitment = Commitment(commitment)

    async def latest_blockhash(self) -> Hash:
        async with AsyncClient(self._rpc_url, commitment=self._commitment) as client:
            resp = await client.get_latest_blockhash(commitment=self._commitment)
        value = getattr(resp, "value", None)
        if value is None:
            raise RuntimeError("get_latest_blockhash returned no value")
        return value.blockhash

    def __repr__(self) -> str:
        return f"RpcBlockhashProvider({masked_rpc_url(self._rpc_url)!r})"


class StaticBlockhashProvider:
    """Always return the same blockhash. No network access."""

    def __init__(self, blockhash: Hash | None = None) -> None:
        self._blockhash = blockhash or Hash.default()

    async def latest_blockhash(self) -> Hash:
        return self._blockhash


class TransactionAssembler:
    """Wrap instructions into an unsigned, compiled v0 transaction."""

    def __init__(self, provider: BlockhashProvider, timeout_sec: float = 10.0) -> None:
        self._provider = provider
        self._timeout_sec = timeout_sec

    async def _fetch_blockhash(self) -> Hash:
        try:
            return await asyncio.wait_for(self._provider.latest_blockhash(), timeout=self._timeout_sec)
        except asyncio.TimeoutError as e:
            logger.warning("blockhash_fetch_timeout", timeout_sec=self._timeout_sec)
            raise AssemblyFailed("Timed out fetching a recent blockhash") from e
        except Exception as e:
            logger.error("blockhash_fetch_failed", error=str(e))
            raise AssemblyFailed("Could not fetch a recent blockhash from the Solana RPC node") from e

    async def assemble(self, instructions: Sequence[Instruction], fee_payer: Pubkey) -> VersionedTransaction:
        """
        Compile instructions with fee_payer and a fresh blockhash into an unsigned transaction.

        Raises:
            AssemblyFailed: blockhash fetch failed or timed out, or compilation failed.
        """
        if not instructions:
            raise AssemblyFailed("At least one instruction is required")
        blockhash = await self._fetch_blockhash()
        try:
            message = MessageV0.try_compile(fee_payer, list(instructions), [], blockhash)
        except Exception as e:
            logger.error("message_compile_failed", fee_payer=short_wallet(fee_payer), error=str(e))
            raise AssemblyFailed("Could not compile transaction message") from e
        signatures = [Signature.default()] * message.header.num_required_signatures
        tx = VersionedTransaction.populate(message, signatures)
        logger.debug(
            "transaction_assembled",
            fee_payer=short_wallet(fee_payer),
            blockhash=str(blockhash),
            num_instructions=len(instructions),
        )
        return tx


def assembler_from_settings(settings: DonateSettings) -> TransactionAssembler:
    """Build the assembler for the configured RPC (or the dummy blockhash in offline mode)."""
    provider: BlockhashProvider
    if settings.use_dummy_blockhash:
        provider = StaticBlockhashProvider()
    else:
        provider = RpcBlockhashProvider(settings.solana_rpc_url, settings.commitment)
    return TransactionAssembler(provider, timeout_sec=settings.blockhash_timeout_sec)

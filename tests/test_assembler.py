"""
Tests for TransactionAssembler and blockhash providers.

Uses mocked solana-py AsyncClient; no RPC traffic.
"""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey

from solana_donate.actions.builder import build_transfer_instruction
from solana_donate.core.exceptions import AssemblyFailed
from solana_donate.ledger.assembler import (
    RpcBlockhashProvider,
    StaticBlockhashProvider,
    TransactionAssembler,
    assembler_from_settings,
)


class _SlowProvider:
    async def latest_blockhash(self) -> Hash:
        await asyncio.sleep(5)
        return Hash.default()


class _FailingProvider:
    async def latest_blockhash(self) -> Hash:
        raise ConnectionError("node unavailable")


def _transfer(payer: Pubkey):
    return [build_transfer_instruction(payer, Pubkey.new_unique(), 1)]


def test_assemble_timeout_raises_assembly_failed(donor):
    assembler = TransactionAssembler(_SlowProvider(), timeout_sec=0.01)
    with pytest.raises(AssemblyFailed, match="Timed out"):
        asyncio.run(assembler.assemble(_transfer(donor), fee_payer=donor))


def test_assemble_provider_error_is_chained(donor):
    assembler = TransactionAssembler(_FailingProvider(), timeout_sec=1.0)
    with pytest.raises(AssemblyFailed) as excinfo:
        asyncio.run(assembler.assemble(_transfer(donor), fee_payer=donor))
    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert excinfo.value.status_code == 503


def test_assemble_requires_instructions(donor):
    assembler = TransactionAssembler(StaticBlockhashProvider(), timeout_sec=1.0)
    with pytest.raises(AssemblyFailed):
        asyncio.run(assembler.assemble([], fee_payer=donor))


def test_static_provider_defaults_to_zero_hash():
    assert asyncio.run(StaticBlockhashProvider().latest_blockhash()) == Hash.default()


def test_rpc_provider_reads_blockhash_from_response():
    """RpcBlockhashProvider opens AsyncClient and returns resp.value.blockhash."""
    expected = Hash.new_unique()
    rpc_client = MagicMock()
    rpc_client.get_latest_blockhash = AsyncMock(
        return_value=SimpleNamespace(value=SimpleNamespace(blockhash=expected, last_valid_block_height=1))
    )
    with patch("solana_donate.ledger.assembler.AsyncClient") as client_cls:
        client_cls.return_value.__aenter__ = AsyncMock(return_value=rpc_client)
        client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
        provider = RpcBlockhashProvider("http://localhost:8899", "finalized")
        result = asyncio.run(provider.latest_blockhash())
    assert result == expected
    assert client_cls.call_args.args[0] == "http://localhost:8899"
    rpc_client.get_latest_blockhash.assert_awaited_once()


def test_rpc_provider_missing_value_fails_assembly(donor):
    rpc_client = MagicMock()
    rpc_client.get_latest_blockhash = AsyncMock(return_value=SimpleNamespace(value=None))
    with patch("solana_donate.ledger.assembler.AsyncClient") as client_cls:
        client_cls.return_value.__aenter__ = AsyncMock(return_value=rpc_client)
        client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
        assembler = TransactionAssembler(RpcBlockhashProvider("http://localhost:8899"), timeout_sec=1.0)
        with pytest.raises(AssemblyFailed):
            asyncio.run(assembler.assemble(_transfer(donor), fee_payer=donor))


def test_assembler_from_settings_offline_mode(settings, donor):
    """use_dummy_blockhash=True: no RPC, zero blockhash."""
    assembler = assembler_from_settings(settings)
    tx = asyncio.run(assembler.assemble(_transfer(donor), fee_payer=donor))
    assert tx.message.recent_blockhash == Hash.default()


def test_rpc_provider_repr_masks_api_key():
    provider = RpcBlockhashProvider("https://mainnet.helius-rpc.com/?api-key=secret")
    assert "secret" not in repr(provider)

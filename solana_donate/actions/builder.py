"""
Transaction builder: one native SOL transfer, compiled into an unsigned versioned transaction.

Does not sign, send or cache. The assembler injects the recent blockhash and compiles
the message; its failures surface as AssemblyFailed.
"""

from __future__ import annotations

import struct

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYS_PROGRAM_ID
from solders.system_program import TransferParams, decode_transfer, transfer
from solders.transaction import VersionedTransaction

from solana_donate.donate_logging import get_logger
from solana_donate.ledger.assembler import TransactionAssembler
from solana_donate.utils.wallet_utils import short_wallet

logger = get_logger(__name__)

# SystemInstruction::Transfer tag (u32 LE) in instruction data
TRANSFER_INSTRUCTION_TAG = struct.pack("<I", 2)


def build_transfer_instruction(payer: Pubkey, recipient: Pubkey, lamports: int) -> Instruction:
    """System program transfer payer -> recipient."""
    return transfer(TransferParams(from_pubkey=payer, to_pubkey=recipient, lamports=lamports))


def decode_transfers(tx: VersionedTransaction) -> list[TransferParams]:
    """Recover system transfers from a compiled transaction, in instruction order."""
    message = tx.message
    keys = message.account_keys
    num_signers = message.header.num_required_signatures
    out: list[TransferParams] = []
    for compiled in message.instructions:
        program_id = keys[compiled.program_id_index]
        if program_id != SYS_PROGRAM_ID or not bytes(compiled.data).startswith(TRANSFER_INSTRUCTION_TAG):
            continue
        accounts = [
            AccountMeta(pubkey=keys[i], is_signer=i < num_signers, is_writable=True)
            for i in bytes(compiled.accounts)
        ]
        ix = Instruction(program_id=program_id, data=bytes(compiled.data), accounts=accounts)
        out.append(decode_transfer(ix))
    return out


class DonateTransactionBuilder:
    """build(payer, recipient, lamports) -> unsigned VersionedTransaction."""

    def __init__(self, assembler: TransactionAssembler) -> None:
        self._assembler = assembler

    async def build(self, payer: Pubkey, recipient: Pubkey, lamports: int) -> VersionedTransaction:
        instructions = [build_transfer_instruction(payer, recipient, lamports)]
        tx = await self._assembler.assemble(instructions, fee_payer=payer)
        logger.info(
            "donate_transaction_built",
            payer=short_wallet(payer),
            recipient=short_wallet(recipient),
            lamports=lamports,
        )
        return tx

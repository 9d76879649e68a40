"""
Ledger collaborator — recent blockhash retrieval and transaction compilation.

Wraps solders/solana-py; nothing here signs or sends transactions.
"""

from solana_donate.ledger.assembler import (
    BlockhashProvider,
    RpcBlockhashProvider,
    StaticBlockhashProvider,
    TransactionAssembler,
    assembler_from_settings,
)

__all__ = [
    "BlockhashProvider",
    "RpcBlockhashProvider",
    "StaticBlockhashProvider",
    "TransactionAssembler",
    "assembler_from_settings",
]

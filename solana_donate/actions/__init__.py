"""
Donate action — metadata, request resolution, transaction building, transport encoding.

Per request: RequestResolver -> DonateTransactionBuilder -> encode_transaction.
"""

from solana_donate.actions.builder import DonateTransactionBuilder, build_transfer_instruction, decode_transfers
from solana_donate.actions.encoder import decode_transaction, encode_transaction
from solana_donate.actions.metadata import ActionMetadata, DonateMetadataProvider
from solana_donate.actions.resolver import RequestResolver, format_amount, parse_amount, sol_to_lamports

__all__ = [
    "ActionMetadata",
    "DonateMetadataProvider",
    "DonateTransactionBuilder",
    "RequestResolver",
    "build_transfer_instruction",
    "decode_transaction",
    "decode_transfers",
    "encode_transaction",
    "format_amount",
    "parse_amount",
    "sol_to_lamports",
]

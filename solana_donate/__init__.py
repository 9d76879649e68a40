"""
Solana Donate — Solana Actions endpoint that prepares unsigned donation transfers.

Serves discovery metadata for a "donate" action and builds unsigned, versioned
SOL transfer transactions for the client to sign. Never holds keys, never
broadcasts. Modular layout: actions (metadata, resolver, builder, encoder),
ledger (blockhash + compilation), api_server (FastAPI surface).
"""

__version__ = "0.1.0"

"""
Core — shared exceptions used across actions, ledger and API server.
"""

from solana_donate.core.exceptions import (
    AssemblyFailed,
    DonateError,
    InvalidAccount,
    InvalidAmount,
)

__all__ = ["AssemblyFailed", "DonateError", "InvalidAccount", "InvalidAmount"]

"""Wallet address codec: base58 string <-> solders Pubkey."""

from __future__ import annotations

from solders.pubkey import Pubkey

from solana_donate.core.exceptions import InvalidAccount


def decode_account(value: str, role: str = "account") -> Pubkey:
    """
    Decode a base58 wallet string into a 32-byte Pubkey.

    Raises:
        InvalidAccount: value is empty or not a valid public key.
    """
    raw = (value or "").strip()
    if not raw:
        raise InvalidAccount(f"{role} must be non-empty")
    try:
        return Pubkey.from_string(raw)
    except Exception as e:
        raise InvalidAccount(f"Invalid {role}: not a valid Solana public key") from e


def short_wallet(value: object) -> str:
    """Truncate an address for logs."""
    s = str(value)
    return s[:8] + "..." if len(s) > 8 else s

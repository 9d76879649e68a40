"""
Application settings for the donate action.

Responsibilities:
- Load configuration from environment variables and .env (see config.env).
- Validate settings and provide defaults matching the published action.
- Expose one frozen settings object that is injected into the resolver,
  metadata provider and assembler (never mutated at runtime).
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from solana_donate.config.env import get_solana_rpc_url, load_donate_env, parse_bool_env

DONATION_DESTINATION_WALLET = "GALn5nQYPkgnbC2yiZa4VRcM2zYsBLXTN64GcFFVzuq1"
DONATION_AMOUNT_SOL_OPTIONS = (Decimal("0.25"), Decimal("0.5"), Decimal("1"))
DEFAULT_DONATION_AMOUNT_SOL = Decimal("1")
LAMPORTS_PER_SOL = 1_000_000_000

DEFAULT_MOUNT_PATH = "/api/donate"
DEFAULT_ICON = "https://pbs.twimg.com/profile_banners/1473560408346689536/1718333092/600x200"
DEFAULT_TITLE = "Donate to SOL Maniac"
DEFAULT_DESCRIPTION = "We make Solana Easy! | Content Creator for Solana."
DEFAULT_COMMITMENT = "confirmed"
DEFAULT_BLOCKHASH_TIMEOUT_SEC = 10.0


def _parse_decimal(raw: str, name: str) -> Decimal:
    try:
        value = Decimal(raw.strip())
    except InvalidOperation as e:
        raise ValueError(f"{name} must be a decimal number, got {raw!r}") from e
    if not value.is_finite() or value < 0:
        raise ValueError(f"{name} must be a finite non-negative number, got {raw!r}")
    return value


def _amount_options_from_env() -> tuple[Decimal, ...]:
    raw = (os.getenv("DONATE_AMOUNT_OPTIONS") or "").strip()
    if not raw:
        return DONATION_AMOUNT_SOL_OPTIONS
    return tuple(
        _parse_decimal(part, "DONATE_AMOUNT_OPTIONS") for part in raw.split(",") if part.strip()
    )


def _default_amount_from_env() -> Decimal:
    raw = (os.getenv("DONATE_DEFAULT_AMOUNT") or "").strip()
    if not raw:
        return DEFAULT_DONATION_AMOUNT_SOL
    return _parse_decimal(raw, "DONATE_DEFAULT_AMOUNT")


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


@dataclass(frozen=True)
class DonateSettings:
    """Donate action configuration (env or explicit). Pass explicit values in tests."""

    destination_wallet: str = field(
        default_factory=lambda: _env_str("DONATE_DESTINATION_WALLET", DONATION_DESTINATION_WALLET)
    )
    amount_options: tuple[Decimal, ...] = field(default_factory=_amount_options_from_env)
    default_amount: Decimal = field(default_factory=_default_amount_from_env)
    lamports_per_sol: int = LAMPORTS_PER_SOL
    mount_path: str = field(default_factory=lambda: _env_str("DONATE_MOUNT_PATH", DEFAULT_MOUNT_PATH))
    icon: str = field(default_factory=lambda: _env_str("DONATE_ICON", DEFAULT_ICON))
    title: str = field(default_factory=lambda: _env_str("DONATE_TITLE", DEFAULT_TITLE))
    description: str = field(default_factory=lambda: _env_str("DONATE_DESCRIPTION", DEFAULT_DESCRIPTION))
    solana_rpc_url: str = field(default_factory=get_solana_rpc_url)
    commitment: str = field(default_factory=lambda: _env_str("SOLANA_COMMITMENT", DEFAULT_COMMITMENT))
    blockhash_timeout_sec: float = field(
        default_factory=lambda: float(
            _env_str("DONATE_BLOCKHASH_TIMEOUT_SEC", str(DEFAULT_BLOCKHASH_TIMEOUT_SEC))
        )
    )
    use_dummy_blockhash: bool = field(default_factory=lambda: parse_bool_env("DONATE_USE_DUMMY_BLOCKHASH", False))

    def __post_init__(self) -> None:
        if not self.destination_wallet.strip():
            raise ValueError("DONATE_DESTINATION_WALLET must be non-empty")
        if not self.amount_options:
            raise ValueError("DONATE_AMOUNT_OPTIONS must list at least one amount")
        if self.lamports_per_sol <= 0:
            raise ValueError("lamports_per_sol must be positive")
        if self.blockhash_timeout_sec <= 0:
            raise ValueError("DONATE_BLOCKHASH_TIMEOUT_SEC must be positive")
        if not self.mount_path.startswith("/"):
            raise ValueError("DONATE_MOUNT_PATH must start with '/'")
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, "mount_path", self.mount_path.rstrip("/") or "/")


@functools.lru_cache(maxsize=1)
def get_settings() -> DonateSettings:
    """
    Return the process-wide settings, loaded once from env / .env.

    Returns:
        DonateSettings with destination_wallet, amount_options, default_amount,
        solana_rpc_url, blockhash_timeout_sec, etc.
    """
    load_donate_env()
    return DonateSettings()

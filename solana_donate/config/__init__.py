"""
Configuration management for Solana Donate.

Loads and validates settings from environment variables and an optional .env
file. Exposes a single source of truth for all service configuration.
"""

from solana_donate.config.settings import DonateSettings, get_settings  # noqa: F401

__all__ = ["DonateSettings", "get_settings"]

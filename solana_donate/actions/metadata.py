"""Static display metadata for the donate action."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from solana_donate.config.settings import DonateSettings


@dataclass(frozen=True)
class ActionMetadata:
    icon: str
    title: str
    description: str


class DonateMetadataProvider:
    """Icon/title/description plus the suggested and default donation amounts."""

    def __init__(self, settings: DonateSettings) -> None:
        self._settings = settings

    def describe(self) -> ActionMetadata:
        return ActionMetadata(
            icon=self._settings.icon,
            title=self._settings.title,
            description=self._settings.description,
        )

    @property
    def amount_options(self) -> tuple[Decimal, ...]:
        return self._settings.amount_options

    @property
    def default_amount(self) -> Decimal:
        return self._settings.default_amount

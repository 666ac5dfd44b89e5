"""Resolution of the active tax settings."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from rental_workpaper.models.rental.settings import DEFAULT_TAX_SETTINGS, TaxSettings
from rental_workpaper.sinks.serialization import to_dict

if TYPE_CHECKING:
    from rental_workpaper.store.repositories import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsProvider:
    """Merge stored settings over defaults on every read.

    Parameters
    ----------
    repository : SettingsRepository
        Holds the stored overrides.
    defaults : TaxSettings
        Values used for anything not stored (built-in or from the environment).
    """

    def __init__(
        self,
        repository: SettingsRepository,
        defaults: TaxSettings = DEFAULT_TAX_SETTINGS,
    ) -> None:
        self.repository = repository
        self.defaults = defaults

    def load(self) -> TaxSettings:
        """Return the settings in effect right now."""
        return self.defaults.merged(self.repository.load())

    def save(self, settings: TaxSettings) -> bool:
        """Persist ``settings`` as the stored overrides."""
        saved = self.repository.save(to_dict(settings))
        if saved:
            logger.info(
                "Settings saved: tax_year=%s interest_deductibility_rate=%s",
                settings.tax_year,
                settings.interest_deductibility_rate,
            )
        return saved

    def update(self, **changes: Any) -> TaxSettings:
        """Apply ``changes`` over the current settings and persist them."""
        current = self.load()
        updated = current.merged(changes)
        self.save(updated)
        return updated

    def reset(self) -> TaxSettings:
        """Clear stored overrides so the defaults apply again."""
        self.repository.save({})
        return self.defaults

    @property
    def current_tax_year(self) -> str:
        return self.load().tax_year

    @property
    def interest_deductibility_rate(self) -> Decimal:
        return self.load().interest_deductibility_rate

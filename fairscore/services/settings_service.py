"""
Event Settings Service - Science Fair Evaluation Platform
fairscore/services/settings_service.py
"""

import logging

from fairscore.models.event_settings import (
    BRANDING_DEFAULTS,
    EventSettings,
    EventSettingsUpdate,
    PublicEventSettings,
)
from fairscore.repositories.entity_store import EntityStore

logger = logging.getLogger(__name__)


class EventSettingsService:
    def __init__(self, store: EntityStore):
        self.store = store

    def get(self) -> EventSettings:
        return self.store.settings

    def public(self) -> PublicEventSettings:
        """Branding only; the passcode and remote URL stay private."""
        return PublicEventSettings.model_validate(self.store.settings.model_dump())

    def update(self, data: EventSettingsUpdate) -> EventSettings:
        changes = data.model_dump(exclude_unset=True)
        if "gas_url" in changes:
            changes["gas_url"] = changes["gas_url"].strip()
        self.store.settings = self.store.settings.model_copy(update=changes)
        logger.info(f"Event settings updated: {sorted(changes)}")
        return self.store.settings

    def reset_branding(self) -> EventSettings:
        """Restore branding text and logo; passcode and remote URL are kept."""
        self.store.settings = self.store.settings.model_copy(update=BRANDING_DEFAULTS)
        logger.info("Branding reset to defaults")
        return self.store.settings

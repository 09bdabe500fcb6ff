"""
Settings singleton access with defaults.
"""

import logging

from core.clock import Clock
from schemas import CoupleSettings, SettingsView

from services.persistent_store import PersistentStore

logger = logging.getLogger("SettingsService")


class SettingsService:
    def __init__(self, store: PersistentStore, clock: Clock):
        self.store = store
        self.clock = clock

    async def current(self) -> CoupleSettings:
        """Saved settings, or defaults starting today when nothing was saved."""
        return await self.store.get_settings() or CoupleSettings.defaults(self.clock.now())

    async def view(self) -> SettingsView:
        saved = await self.store.get_settings()
        if saved is None:
            return SettingsView(settings=CoupleSettings.defaults(self.clock.now()), is_default=True)
        return SettingsView(settings=saved)

    async def update(self, settings: CoupleSettings) -> CoupleSettings:
        """
        Replace the settings.

        The security PIN is kept from the stored settings; it only changes
        through SecurityService.
        """
        current = await self.current()
        updated = settings.model_copy(update={"security_pin": current.security_pin})
        await self.store.save_settings(updated)
        logger.info("Settings updated")
        return updated

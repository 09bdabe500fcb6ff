"""
PIN lock for the app.

The PIN is a four-digit string stored on the settings singleton. Verifying an
unset PIN always succeeds.
"""

import hmac
import logging
from typing import Optional

from domain.exceptions import PinError
from schemas.settings import PIN_PATTERN

from services.settings_service import SettingsService

logger = logging.getLogger("SecurityService")


def _is_well_formed(pin: Optional[str]) -> bool:
    return isinstance(pin, str) and PIN_PATTERN.fullmatch(pin) is not None


def _check_format(pin: str) -> None:
    if not _is_well_formed(pin):
        raise PinError("PIN must be exactly 4 digits")


def _pin_matches(stored: str, candidate: Optional[str]) -> bool:
    # Anything that is not four ASCII digits can never match
    if not _is_well_formed(candidate):
        return False
    return hmac.compare_digest(stored.encode("utf-8"), candidate.encode("utf-8"))


class SecurityService:
    def __init__(self, settings_service: SettingsService):
        self.settings_service = settings_service

    async def is_enabled(self) -> bool:
        settings = await self.settings_service.current()
        return settings.pin_enabled

    async def enable(self, pin: str, confirmation: str) -> None:
        """
        Set (or replace) the PIN.

        Raises:
            PinError: If the PIN is malformed or the confirmation does not match
        """
        _check_format(pin)
        if pin != confirmation:
            raise PinError("PIN confirmation does not match", mismatch=True)

        settings = await self.settings_service.current()
        await self.settings_service.store.save_settings(settings.model_copy(update={"security_pin": pin}))
        logger.info("Security PIN enabled")

    async def verify(self, pin: Optional[str]) -> bool:
        settings = await self.settings_service.current()
        if not settings.pin_enabled:
            return True
        return _pin_matches(settings.security_pin, pin)

    async def disable(self, current_pin: Optional[str]) -> None:
        """
        Remove the PIN.

        Raises:
            PinError: If the PIN is set and current_pin does not match it
        """
        settings = await self.settings_service.current()
        if not settings.pin_enabled:
            return
        if not _pin_matches(settings.security_pin, current_pin):
            raise PinError("Incorrect PIN", mismatch=True)
        await self.settings_service.store.save_settings(settings.model_copy(update={"security_pin": None}))
        logger.info("Security PIN disabled")

"""Settings singleton and PIN lock routes."""

from core.dependencies import get_security_service, get_settings_service
from fastapi import APIRouter, Depends
from schemas import CamelSchema, CoupleSettings, SettingsView
from services import SecurityService, SettingsService

router = APIRouter()


class PinSetup(CamelSchema):
    pin: str
    confirm_pin: str


class PinCheck(CamelSchema):
    pin: str


class PinStatus(CamelSchema):
    enabled: bool


class PinVerification(CamelSchema):
    valid: bool


@router.get("", response_model=SettingsView)
async def get_settings(service: SettingsService = Depends(get_settings_service)):
    """Current settings; flagged `isDefault` when nothing has been saved yet."""
    return await service.view()


@router.put("", response_model=CoupleSettings)
async def update_settings(settings: CoupleSettings, service: SettingsService = Depends(get_settings_service)):
    """Replace the settings. The PIN is managed by the /settings/pin routes."""
    return await service.update(settings)


@router.post("/pin", response_model=PinStatus)
async def enable_pin(body: PinSetup, service: SecurityService = Depends(get_security_service)):
    await service.enable(body.pin, body.confirm_pin)
    return PinStatus(enabled=True)


@router.post("/pin/verify", response_model=PinVerification)
async def verify_pin(body: PinCheck, service: SecurityService = Depends(get_security_service)):
    return PinVerification(valid=await service.verify(body.pin))


@router.delete("/pin", response_model=PinStatus)
async def disable_pin(body: PinCheck, service: SecurityService = Depends(get_security_service)):
    await service.disable(body.pin)
    return PinStatus(enabled=False)

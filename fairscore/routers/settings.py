"""
Event Settings Router - Science Fair Evaluation Platform
fairscore/routers/settings.py

Branding is public; everything else about settings needs the admin passcode.
"""

from fastapi import APIRouter, Depends

from fairscore.core.dependencies import get_settings_service, require_admin
from fairscore.models.event_settings import EventSettings, EventSettingsUpdate, PublicEventSettings
from fairscore.services.settings_service import EventSettingsService

router = APIRouter(prefix="/api/v1", tags=["Settings"])


@router.get("/branding", response_model=PublicEventSettings, summary="Public event branding")
async def get_branding(service: EventSettingsService = Depends(get_settings_service)) -> PublicEventSettings:
    return service.public()


@router.get(
    "/settings",
    response_model=EventSettings,
    dependencies=[Depends(require_admin)],
    summary="Full event settings",
)
async def get_event_settings(service: EventSettingsService = Depends(get_settings_service)) -> EventSettings:
    return service.get()


@router.patch(
    "/settings",
    response_model=EventSettings,
    dependencies=[Depends(require_admin)],
    summary="Update event settings",
)
async def update_event_settings(
    data: EventSettingsUpdate,
    service: EventSettingsService = Depends(get_settings_service),
) -> EventSettings:
    return service.update(data)


@router.post(
    "/settings/reset-branding",
    response_model=EventSettings,
    dependencies=[Depends(require_admin)],
    summary="Restore default branding",
)
async def reset_branding(service: EventSettingsService = Depends(get_settings_service)) -> EventSettings:
    return service.reset_branding()

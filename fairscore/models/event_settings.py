"""
Event Settings Model - Science Fair Evaluation Platform
fairscore/models/event_settings.py

Branding text plus the local admin passcode and remote URL. These travel
with the dataset to the remote store, so the field names match its columns.
"""

from typing import Optional

from pydantic import Field

from fairscore.models.base import CamelModel

BRANDING_DEFAULTS = {
    "event_title": "Think Big Science Carnival 2025",
    "subtitle": "Project Evaluation System",
    "welcome_title": "Welcome to Think Big Science Carnival 2025",
    "welcome_body": (
        "Please read the instructions. Click below to enter your basic details "
        "and start evaluating assigned projects."
    ),
    "logo_url": "https://dummyimage.com/128x128/1f2a52/ffffff&text=SE",
}


class EventSettings(CamelModel):
    event_title: str = BRANDING_DEFAULTS["event_title"]
    subtitle: str = BRANDING_DEFAULTS["subtitle"]
    welcome_title: str = BRANDING_DEFAULTS["welcome_title"]
    welcome_body: str = BRANDING_DEFAULTS["welcome_body"]
    logo_url: str = BRANDING_DEFAULTS["logo_url"]
    admin_pass: str = ""
    gas_url: str = Field(default="", description="Remote store URL; empty disables sync")


class EventSettingsUpdate(CamelModel):
    event_title: Optional[str] = None
    subtitle: Optional[str] = None
    welcome_title: Optional[str] = None
    welcome_body: Optional[str] = None
    logo_url: Optional[str] = None
    admin_pass: Optional[str] = Field(default=None, min_length=1)
    gas_url: Optional[str] = None


class PublicEventSettings(CamelModel):
    """Settings safe to show evaluators (no passcode)."""

    event_title: str
    subtitle: str
    welcome_title: str
    welcome_body: str
    logo_url: str

"""Preference schemas."""
from typing import Optional
from pydantic import BaseModel
from ticket_tally.models.enums import Theme


class UserSettings(BaseModel):
    """Per-user toggles."""
    email_notifications: bool = False
    auto_refresh: bool = True
    show_closed: bool = False


class UserSettingsUpdate(BaseModel):
    """Partial settings update."""
    email_notifications: Optional[bool] = None
    auto_refresh: Optional[bool] = None
    show_closed: Optional[bool] = None


class ThemePreference(BaseModel):
    """Theme preference body."""
    theme: Theme

"""Preference API routes."""
from fastapi import APIRouter, Depends
from ticket_tally.api.auth import get_current_principal
from ticket_tally.repositories import Repository
from ticket_tally.repositories.sql import get_repository
from ticket_tally.schemas.preferences import ThemePreference, UserSettings, UserSettingsUpdate
from ticket_tally.services import preference_service

# Theme is readable before sign-in; settings belong to a signed-in user.
router = APIRouter()


@router.get("/theme", response_model=ThemePreference)
async def get_theme(repo: Repository = Depends(get_repository)):
    return ThemePreference(theme=await preference_service.get_theme(repo))


@router.put("/theme", response_model=ThemePreference)
async def set_theme(data: ThemePreference, repo: Repository = Depends(get_repository)):
    return ThemePreference(theme=await preference_service.set_theme(repo, data.theme))


@router.get("/settings", response_model=UserSettings)
async def get_settings(
    repo: Repository = Depends(get_repository),
    current_user=Depends(get_current_principal),
):
    return await preference_service.get_settings(repo)


@router.patch("/settings", response_model=UserSettings)
async def update_settings(
    data: UserSettingsUpdate,
    repo: Repository = Depends(get_repository),
    current_user=Depends(get_current_principal),
):
    """Change notification, auto-refresh and show-closed toggles."""
    return await preference_service.update_settings(repo, data)

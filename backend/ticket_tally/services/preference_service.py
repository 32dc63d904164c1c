"""Session and preference service."""
import logging
from typing import Optional
from ticket_tally.models.enums import Theme
from ticket_tally.repositories import Collection, Repository
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.preferences import UserSettings, UserSettingsUpdate
from ticket_tally.utils import coerce_enum, utcnow

logger = logging.getLogger(__name__)


async def get_session(repo: Repository) -> Optional[Principal]:
    """Current session principal, or None when nobody is signed in."""
    return await repo.load_one(Collection.SESSION)


async def start_session(repo: Repository, principal: Principal) -> Principal:
    """Store the principal handed over by the authentication collaborator."""
    if principal.created_at is None:
        principal = principal.model_copy(update={"created_at": utcnow()})
    await repo.save_one(Collection.SESSION, principal)
    logger.info("Session started for %s (%s)", principal.email, principal.role.value)
    return principal


async def end_session(repo: Repository) -> None:
    """Forget the session principal."""
    await repo.clear(Collection.SESSION)


async def get_theme(repo: Repository) -> Theme:
    """Stored theme, light by default."""
    raw = await repo.read(Collection.THEME.value)
    if raw is None:
        return Theme.LIGHT
    return coerce_enum(Theme, raw, "theme")


async def set_theme(repo: Repository, theme) -> Theme:
    """Persist the theme preference."""
    theme = coerce_enum(Theme, theme, "theme")
    await repo.write(Collection.THEME.value, theme.value)
    return theme


async def get_settings(repo: Repository) -> UserSettings:
    """Stored per-user settings, or the defaults."""
    return await repo.load_one(Collection.SETTINGS) or UserSettings()


async def update_settings(repo: Repository, patch: UserSettingsUpdate) -> UserSettings:
    """Change only the supplied toggles."""
    current = await get_settings(repo)
    changes = {k: v for k, v in patch.model_dump(exclude_unset=True).items() if v is not None}
    updated = current.model_copy(update=changes)
    await repo.save_one(Collection.SETTINGS, updated)
    return updated

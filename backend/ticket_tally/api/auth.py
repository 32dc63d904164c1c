"""Session API routes.

Credentials are checked upstream; these routes only record and expose the
already-authenticated principal.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from ticket_tally.repositories import Repository
from ticket_tally.repositories.sql import get_repository
from ticket_tally.schemas.auth import Principal
from ticket_tally.services import preference_service

router = APIRouter()


async def get_current_principal(repo: Repository = Depends(get_repository)) -> Principal:
    """Dependency to get the current session principal."""
    principal = await preference_service.get_session(repo)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No active session",
        )
    return principal


@router.put("/session", response_model=Principal)
async def start_session(principal: Principal, repo: Repository = Depends(get_repository)):
    """Record the principal supplied by the authentication collaborator."""
    return await preference_service.start_session(repo, principal)


@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(repo: Repository = Depends(get_repository)):
    """Log out."""
    await preference_service.end_session(repo)


@router.get("/me", response_model=Principal)
async def get_me(current_user: Principal = Depends(get_current_principal)):
    """Get current user information."""
    return current_user

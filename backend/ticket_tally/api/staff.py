"""IT staff API routes."""
from typing import List
from fastapi import APIRouter, Depends, status
from ticket_tally.api.auth import get_current_principal
from ticket_tally.repositories import Repository
from ticket_tally.repositories.sql import get_repository
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.staff import StaffMember, StaffCreate
from ticket_tally.services import staff_service

router = APIRouter()


@router.get("", response_model=List[StaffMember])
async def list_staff(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Get the IT staff directory."""
    return await staff_service.list_staff(repo, current_user)


@router.post("", response_model=StaffMember, status_code=status.HTTP_201_CREATED)
async def add_staff(
    data: StaffCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Add an IT staff member."""
    return await staff_service.add_staff(repo, current_user, data.name, data.email, data.team)


@router.post("/{email}/toggle", response_model=StaffMember)
async def toggle_staff_status(
    email: str,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Activate or deactivate a staff member."""
    return await staff_service.toggle_status(repo, current_user, email)

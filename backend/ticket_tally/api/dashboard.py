"""Dashboard API routes."""
from typing import List
from fastapi import APIRouter, Depends
from ticket_tally.api.auth import get_current_principal
from ticket_tally.repositories import Repository
from ticket_tally.repositories.sql import get_repository
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.stats import DashboardSummary, EmployeeSummary, ProfileStat, UserDataExport
from ticket_tally.services import stats_service

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
async def get_summary(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """KPI cards plus category, priority and SLA breakdowns."""
    return await stats_service.dashboard_summary(repo, current_user)


@router.get("/employees", response_model=List[EmployeeSummary])
async def get_employees(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Employees derived from ticket creators (admin only)."""
    return await stats_service.list_employees(repo, current_user)


@router.get("/profile", response_model=List[ProfileStat])
async def get_profile_stats(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    return await stats_service.profile(repo, current_user)


@router.get("/export", response_model=UserDataExport)
async def export_my_data(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Download the current user's data as JSON."""
    return await stats_service.export_user_data(repo, current_user)

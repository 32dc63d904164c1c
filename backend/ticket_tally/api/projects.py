"""Projects API routes."""
from typing import List, Optional
from fastapi import APIRouter, Depends, status, Query
from ticket_tally.api.auth import get_current_principal
from ticket_tally.repositories import Repository
from ticket_tally.repositories.sql import get_repository
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.project import (
    Project,
    ProjectCreate,
    ProjectUpdate,
    ProgressUpdate,
    ProgressResponse,
    DeadlineClass,
)
from ticket_tally.schemas.stats import ProjectStatistics
from ticket_tally.services import project_service, stats_service
from ticket_tally.utils import utcnow

router = APIRouter()


@router.get("", response_model=List[Project])
async def list_projects(
    status_filter: Optional[str] = Query(None, alias="status"),
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """List projects, closest deadline first."""
    return await project_service.list_projects(repo, current_user, status_filter)


@router.get("/statistics", response_model=ProjectStatistics)
async def project_statistics(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Totals and deadlines due within a week."""
    return await stats_service.project_overview(repo, current_user)


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Create a new project."""
    return await project_service.create_project(
        repo,
        current_user,
        name=data.name,
        description=data.description,
        status=data.status,
        priority=data.priority,
        start_date=data.start_date,
        deadline=data.deadline,
        team_emails=data.team_emails,
    )


@router.get("/{project_id}", response_model=Project)
async def get_project(
    project_id: str,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Get a project by ID."""
    return await project_service.get_project(repo, current_user, project_id)


@router.get("/{project_id}/deadline", response_model=DeadlineClass)
async def get_project_deadline(
    project_id: str,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Deadline urgency of a project as of now."""
    project = await project_service.get_project(repo, current_user, project_id)
    return project_service.classify_deadline(project, utcnow())


@router.put("/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Edit a project."""
    return await project_service.update_project(repo, current_user, project_id, data)


@router.patch("/{project_id}/progress", response_model=ProgressResponse)
async def update_progress(
    project_id: str,
    data: ProgressUpdate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """
    Record progress.

    When the response has offer_completion set, the client should ask the
    user and resend with promote_to_completed=true to complete the project.
    """
    project = await project_service.set_progress(
        repo,
        current_user,
        project_id,
        data.progress,
        promote_to_completed=data.promote_to_completed,
    )
    return ProgressResponse(
        project=project,
        offer_completion=project_service.offers_completion(project),
    )


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Delete a project permanently."""
    await project_service.delete_project(repo, current_user, project_id)

"""Project schemas."""
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field
from ticket_tally.models.enums import ProjectStatus, Priority, DeadlineUrgency


class TeamMember(BaseModel):
    """A project team member."""
    email: str
    name: str


class Project(BaseModel):
    """Stored project record."""
    id: str
    name: str
    description: str = ""
    status: ProjectStatus
    priority: Priority
    start_date: date
    deadline: date
    team: List[TeamMember] = []
    progress: int = Field(0, ge=0, le=100)
    created_by: str
    created_at: datetime
    updated_at: datetime


class ProjectCreate(BaseModel):
    """Schema for creating a project."""
    name: str
    description: str = ""
    status: str = ProjectStatus.PLANNING.value
    priority: str = Priority.MEDIUM.value
    start_date: date
    deadline: date
    team_emails: List[str] = []


class ProjectUpdate(BaseModel):
    """Schema for editing a project. Omitted fields are left unchanged."""
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    team_emails: Optional[List[str]] = None  # replaces the whole roster


class ProgressUpdate(BaseModel):
    """Schema for a progress update."""
    progress: int
    promote_to_completed: bool = False


class ProgressResponse(BaseModel):
    """Project after a progress update, with the completion prompt hint."""
    project: Project
    offer_completion: bool


class DeadlineClass(BaseModel):
    """Deadline urgency of a project."""
    urgency: DeadlineUrgency
    days: Optional[int] = None  # days left, or days overdue for OVERDUE

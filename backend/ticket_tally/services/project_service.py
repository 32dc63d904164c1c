"""Project service."""
import logging
import math
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Union
from ticket_tally.exceptions import NotFoundError, ValidationError
from ticket_tally.models.enums import DeadlineUrgency, Priority, ProjectStatus
from ticket_tally.repositories import Collection, Repository
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.project import DeadlineClass, Project, ProjectUpdate, TeamMember
from ticket_tally.schemas.ticket import Ticket
from ticket_tally.services import query_service
from ticket_tally.services.authz import Permission, authorize
from ticket_tally.services.id_generator import generate_project_id
from ticket_tally.utils import coerce_enum, ensure_aware, require_text, utcnow

logger = logging.getLogger(__name__)

URGENT_DAYS = 3
SOON_DAYS = 7

TeamEmails = Union[str, Iterable[str], None]


def parse_team_emails(raw: TeamEmails) -> List[str]:
    """Split a comma-separated string (or list) into trimmed, non-empty emails."""
    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else raw
    return [email.strip() for email in parts if email and email.strip()]


def resolve_display_name(
    email: str,
    tickets: Iterable[Ticket],
    principal: Optional[Principal] = None,
) -> str:
    """
    Best known display name for an email.

    Looks at the creator of the first ticket raised from that address, then
    the session principal, and falls back to the email itself.
    """
    for ticket in tickets:
        if ticket.created_by == email and ticket.created_by_name:
            return ticket.created_by_name
    if principal is not None and principal.email == email:
        return principal.name
    return email


def _build_team(emails: TeamEmails, tickets: List[Ticket], principal: Principal) -> List[TeamMember]:
    return [
        TeamMember(email=email, name=resolve_display_name(email, tickets, principal))
        for email in parse_team_emails(emails)
    ]


def _validate_progress(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Progress must be a whole number between 0 and 100")
    if value < 0 or value > 100:
        raise ValidationError("Progress must be between 0 and 100")
    return value


def _find_project(projects: List[Project], project_id: str) -> Project:
    for project in projects:
        if project.id == project_id:
            return project
    raise NotFoundError(f"Project {project_id} not found")


def days_until(deadline: date, today: Union[date, datetime]) -> int:
    """
    Whole days from ``today`` to the deadline, rounded up.

    With a datetime the deadline counts from midnight in the same timezone,
    so a deadline later today is still 0 days away.
    """
    if isinstance(today, datetime):
        deadline_start = datetime.combine(deadline, time.min, tzinfo=today.tzinfo)
        return math.ceil((deadline_start - today).total_seconds() / 86400)
    return (deadline - today).days


def classify_deadline(project: Project, today: Union[date, datetime]) -> DeadlineClass:
    """Bucket a project by how close its deadline is."""
    if project.status == ProjectStatus.COMPLETED:
        return DeadlineClass(urgency=DeadlineUrgency.COMPLETED)

    days = days_until(project.deadline, today)
    if days < 0:
        return DeadlineClass(urgency=DeadlineUrgency.OVERDUE, days=abs(days))
    if days == 0:
        return DeadlineClass(urgency=DeadlineUrgency.DUE_TODAY, days=0)
    if days <= URGENT_DAYS:
        return DeadlineClass(urgency=DeadlineUrgency.URGENT, days=days)
    if days <= SOON_DAYS:
        return DeadlineClass(urgency=DeadlineUrgency.SOON, days=days)
    return DeadlineClass(urgency=DeadlineUrgency.NORMAL, days=days)


def offers_completion(project: Project) -> bool:
    """Whether the caller should offer to mark the project Completed."""
    return project.progress == 100 and project.status != ProjectStatus.COMPLETED


async def create_project(
    repo: Repository,
    principal: Principal,
    name: str,
    description: str,
    status: Union[ProjectStatus, str],
    priority: Union[Priority, str],
    start_date: date,
    deadline: date,
    team_emails: TeamEmails = None,
    now: Optional[datetime] = None,
) -> Project:
    """Create a project. Completed projects start at 100% progress."""
    authorize(principal, Permission.MANAGE_PROJECTS)
    name = require_text(name, "Project name")
    status = coerce_enum(ProjectStatus, status, "project status")
    priority = coerce_enum(Priority, priority, "priority")
    now = ensure_aware(now or utcnow())

    tickets = await repo.load_all(Collection.TICKETS)
    projects = await repo.load_all(Collection.PROJECTS)
    project = Project(
        id=generate_project_id(),
        name=name,
        description=(description or "").strip(),
        status=status,
        priority=priority,
        start_date=start_date,
        deadline=deadline,
        team=_build_team(team_emails, tickets, principal),
        progress=100 if status is ProjectStatus.COMPLETED else 0,
        created_by=principal.email,
        created_at=now,
        updated_at=now,
    )
    projects.append(project)
    await repo.replace_all(Collection.PROJECTS, projects)

    logger.info("Project %s (%s) created by %s", project.id, project.name, principal.email)
    return project


async def get_project(repo: Repository, principal: Principal, project_id: str) -> Project:
    """Get a project by ID."""
    authorize(principal, Permission.MANAGE_PROJECTS)
    projects = await repo.load_all(Collection.PROJECTS)
    return _find_project(projects, project_id)


async def list_projects(
    repo: Repository,
    principal: Principal,
    status: Optional[str] = None,
) -> List[Project]:
    """List projects, optionally by status, closest deadline first."""
    authorize(principal, Permission.MANAGE_PROJECTS)
    projects = await repo.load_all(Collection.PROJECTS)
    return query_service.sort_projects_by_deadline(
        query_service.filter_projects(projects, status)
    )


async def update_project(
    repo: Repository,
    principal: Principal,
    project_id: str,
    patch: ProjectUpdate,
    now: Optional[datetime] = None,
) -> Project:
    """Apply an edit. A supplied email list replaces the whole team."""
    authorize(principal, Permission.MANAGE_PROJECTS)
    changes = patch.model_dump(exclude_unset=True)

    # Validate everything before touching the stored record
    if changes.get("name") is not None:
        changes["name"] = require_text(changes["name"], "Project name")
    if changes.get("status") is not None:
        changes["status"] = coerce_enum(ProjectStatus, changes["status"], "project status")
    if changes.get("priority") is not None:
        changes["priority"] = coerce_enum(Priority, changes["priority"], "priority")
    team_emails = changes.pop("team_emails", None)
    now = ensure_aware(now or utcnow())

    projects = await repo.load_all(Collection.PROJECTS)
    project = _find_project(projects, project_id)

    for key, value in changes.items():
        if value is not None:
            setattr(project, key, value)
    if team_emails is not None:
        tickets = await repo.load_all(Collection.TICKETS)
        project.team = _build_team(team_emails, tickets, principal)

    if project.status == ProjectStatus.COMPLETED:
        project.progress = 100
    project.updated_at = max(ensure_aware(project.updated_at), now)
    await repo.replace_all(Collection.PROJECTS, projects)

    logger.info("Project %s updated by %s", project_id, principal.email)
    return project


async def set_progress(
    repo: Repository,
    principal: Principal,
    project_id: str,
    value: int,
    promote_to_completed: bool = False,
    now: Optional[datetime] = None,
) -> Project:
    """
    Record progress for a project.

    Reaching 100% does not complete the project by itself; the caller asks
    the user and passes ``promote_to_completed=True`` on confirmation.
    """
    authorize(principal, Permission.MANAGE_PROJECTS)
    value = _validate_progress(value)
    now = ensure_aware(now or utcnow())

    projects = await repo.load_all(Collection.PROJECTS)
    project = _find_project(projects, project_id)

    project.progress = value
    if value == 100 and promote_to_completed and project.status != ProjectStatus.COMPLETED:
        project.status = ProjectStatus.COMPLETED
        logger.info("Project %s promoted to Completed", project_id)
    project.updated_at = max(ensure_aware(project.updated_at), now)
    await repo.replace_all(Collection.PROJECTS, projects)
    return project


async def delete_project(repo: Repository, principal: Principal, project_id: str) -> None:
    """Delete a project permanently."""
    authorize(principal, Permission.MANAGE_PROJECTS)
    projects = await repo.load_all(Collection.PROJECTS)
    project = _find_project(projects, project_id)

    projects.remove(project)
    await repo.replace_all(Collection.PROJECTS, projects)
    logger.info("Project %s deleted by %s", project_id, principal.email)

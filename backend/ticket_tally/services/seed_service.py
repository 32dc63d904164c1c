"""Demo data for a fresh installation."""
import logging
from datetime import date, datetime
from typing import List, Optional
from ticket_tally.models.enums import Priority, ProjectStatus
from ticket_tally.repositories import Collection, Repository
from ticket_tally.schemas.project import Project, TeamMember
from ticket_tally.services.id_generator import generate_project_id
from ticket_tally.services.staff_service import default_staff
from ticket_tally.utils import ensure_aware, utcnow

logger = logging.getLogger(__name__)

DEMO_ADMIN_EMAIL = "admin@demo.com"

_JOHN = TeamMember(email="itstaff@demo.com", name="John Smith")
_SARAH = TeamMember(email="employee@demo.com", name="Sarah Johnson")


def sample_projects(now: datetime, created_by: str = DEMO_ADMIN_EMAIL) -> List[Project]:
    """Three example projects in different states."""
    def project(name, description, status, priority, start, deadline, team, progress, created):
        return Project(
            id=generate_project_id(),
            name=name,
            description=description,
            status=status,
            priority=priority,
            start_date=start,
            deadline=deadline,
            team=team,
            progress=progress,
            created_by=created_by,
            created_at=datetime.combine(created, datetime.min.time(), tzinfo=now.tzinfo),
            updated_at=now,
        )

    return [
        project(
            "IT Infrastructure Upgrade",
            "Upgrade server infrastructure and implement cloud migration strategy "
            "for improved performance and scalability.",
            ProjectStatus.ACTIVE, Priority.HIGH,
            date(2026, 1, 15), date(2026, 3, 31), [_JOHN, _SARAH], 45, date(2026, 1, 15),
        ),
        project(
            "Employee Portal Development",
            "Build a new self-service employee portal with improved UX and mobile responsiveness.",
            ProjectStatus.ACTIVE, Priority.MEDIUM,
            date(2026, 1, 20), date(2026, 4, 15), [_SARAH], 30, date(2026, 1, 20),
        ),
        project(
            "Security Audit 2026",
            "Comprehensive security audit and penetration testing of all systems and applications.",
            ProjectStatus.PLANNING, Priority.CRITICAL,
            date(2026, 2, 1), date(2026, 2, 28), [_JOHN], 10, date(2026, 1, 25),
        ),
    ]


async def seed_demo_data(repo: Repository, now: Optional[datetime] = None) -> None:
    """Fill the staff directory and projects if they were never written."""
    now = ensure_aware(now or utcnow())

    if not await repo.has(Collection.STAFF):
        await repo.replace_all(Collection.STAFF, default_staff(now))
        logger.info("Seeded default IT staff")
    else:
        logger.info("IT staff already present")

    if not await repo.load_all(Collection.PROJECTS):
        await repo.replace_all(Collection.PROJECTS, sample_projects(now))
        logger.info("Seeded sample projects")
    else:
        logger.info("Projects already present")

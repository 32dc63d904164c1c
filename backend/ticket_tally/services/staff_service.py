"""IT staff directory service."""
import logging
from datetime import datetime
from typing import List, Optional
from ticket_tally.exceptions import ConflictError, NotFoundError
from ticket_tally.models.enums import StaffStatus
from ticket_tally.repositories import Collection, Repository
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.staff import StaffMember
from ticket_tally.services.authz import Permission, authorize
from ticket_tally.utils import ensure_aware, require_text, utcnow

logger = logging.getLogger(__name__)

DEFAULT_STAFF = [
    ("John Smith", "itstaff@demo.com", "Software Team"),
    ("Mike Johnson", "mike.j@demo.com", "Hardware Team"),
    ("Sarah Williams", "sarah.w@demo.com", "Network Team"),
]


def default_staff(now: datetime) -> List[StaffMember]:
    """The directory a fresh installation starts with."""
    return [
        StaffMember(name=name, email=email, team=team, status=StaffStatus.ACTIVE, joined_at=now)
        for name, email, team in DEFAULT_STAFF
    ]


async def _load_staff(repo: Repository, now: datetime) -> List[StaffMember]:
    """Load the directory, seeding the defaults the first time it is read."""
    if not await repo.has(Collection.STAFF):
        staff = default_staff(now)
        await repo.replace_all(Collection.STAFF, staff)
        logger.info("Seeded default IT staff directory")
        return staff
    return await repo.load_all(Collection.STAFF)


async def list_staff(
    repo: Repository,
    principal: Principal,
    now: Optional[datetime] = None,
) -> List[StaffMember]:
    """Get the whole directory in stored order."""
    authorize(principal, Permission.MANAGE_STAFF)
    return await _load_staff(repo, ensure_aware(now or utcnow()))


async def add_staff(
    repo: Repository,
    principal: Principal,
    name: str,
    email: str,
    team: str,
    now: Optional[datetime] = None,
) -> StaffMember:
    """Add an active staff member. Emails are unique (exact match)."""
    authorize(principal, Permission.MANAGE_STAFF)
    name = require_text(name, "Name")
    email = require_text(email, "Email")
    team = require_text(team, "Team")
    now = ensure_aware(now or utcnow())

    staff = await _load_staff(repo, now)
    if any(member.email == email for member in staff):
        logger.warning("Rejected duplicate staff email %s", email)
        raise ConflictError(f"An IT staff member with email {email} already exists")

    member = StaffMember(name=name, email=email, team=team, status=StaffStatus.ACTIVE, joined_at=now)
    staff.append(member)
    await repo.replace_all(Collection.STAFF, staff)

    logger.info("Added %s to %s", email, team)
    return member


async def toggle_status(repo: Repository, principal: Principal, email: str) -> StaffMember:
    """Flip a member between Active and Inactive, looked up by email."""
    authorize(principal, Permission.MANAGE_STAFF)
    staff = await _load_staff(repo, utcnow())

    for member in staff:
        if member.email == email:
            break
    else:
        raise NotFoundError(f"IT staff member {email} not found")

    member.status = (
        StaffStatus.INACTIVE if member.status == StaffStatus.ACTIVE else StaffStatus.ACTIVE
    )
    await repo.replace_all(Collection.STAFF, staff)

    logger.info("Staff member %s is now %s", email, member.status.value)
    return member

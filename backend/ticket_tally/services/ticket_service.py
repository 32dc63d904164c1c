"""Ticket service."""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Union
from ticket_tally.exceptions import AuthorizationError, NotFoundError
from ticket_tally.models.enums import Priority, SlaStatus, TicketCategory, TicketStatus
from ticket_tally.repositories import Collection, Repository
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.ticket import Comment, SlaReport, Ticket, TimelineEvent
from ticket_tally.services import query_service
from ticket_tally.services.authz import Permission, authorize, is_allowed
from ticket_tally.services.id_generator import generate_comment_id, generate_ticket_id
from ticket_tally.utils import coerce_enum, ensure_aware, require_text, truncate, utcnow

logger = logging.getLogger(__name__)

TEAM_ROUTES = {
    TicketCategory.SOFTWARE: "Software Team",
    TicketCategory.HARDWARE: "Hardware Team",
    TicketCategory.NETWORK: "Network Team",
    TicketCategory.EMAIL: "Software Team",
}
FALLBACK_TEAM = "IT Support"

SLA_HOURS = {
    Priority.CRITICAL: 4,
    Priority.HIGH: 8,
    Priority.MEDIUM: 24,
    Priority.LOW: 48,
}
DEFAULT_SLA_HOURS = 24
APPROACHING_RATIO = 0.8

COMMENT_NOTE_LIMIT = 100


def route_team(category: Union[TicketCategory, str, None]) -> str:
    """Team a new ticket is assigned to, by category."""
    try:
        return TEAM_ROUTES.get(TicketCategory(category), FALLBACK_TEAM)
    except ValueError:
        return FALLBACK_TEAM


def sla_threshold_hours(priority: Union[Priority, str, None]) -> int:
    """Maximum acceptable ticket age in hours for a priority."""
    try:
        return SLA_HOURS.get(Priority(priority), DEFAULT_SLA_HOURS)
    except ValueError:
        return DEFAULT_SLA_HOURS


def compute_age(ticket: Ticket, now: datetime) -> timedelta:
    """Time elapsed since the ticket was created."""
    return ensure_aware(now) - ensure_aware(ticket.created_at)


def compute_sla_status(ticket: Ticket, now: datetime) -> SlaStatus:
    """
    SLA state of a ticket at ``now``.

    Resolved and Closed tickets are always Completed. Otherwise the age in
    hours is compared to the priority threshold: above it is Breached,
    above 80% of it is Approaching.
    """
    if ticket.status in (TicketStatus.RESOLVED, TicketStatus.CLOSED):
        return SlaStatus.COMPLETED

    threshold = sla_threshold_hours(ticket.priority)
    age_hours = compute_age(ticket, now).total_seconds() / 3600
    if age_hours > threshold:
        return SlaStatus.BREACHED
    if age_hours > threshold * APPROACHING_RATIO:
        return SlaStatus.APPROACHING
    return SlaStatus.ON_TRACK


def sla_report(ticket: Ticket, now: datetime) -> SlaReport:
    """Threshold, age and SLA state for a ticket detail view."""
    threshold = sla_threshold_hours(ticket.priority)
    return SlaReport(
        ticket_id=ticket.id,
        priority=ticket.priority,
        threshold_hours=threshold,
        age_hours=round(compute_age(ticket, now).total_seconds() / 3600, 2),
        status=compute_sla_status(ticket, now),
        due_at=ensure_aware(ticket.created_at) + timedelta(hours=threshold),
    )


def _find_ticket(tickets: List[Ticket], ticket_id: str) -> Ticket:
    for ticket in tickets:
        if ticket.id == ticket_id:
            return ticket
    raise NotFoundError(f"Ticket {ticket_id} not found")


def _ensure_visible(principal: Principal, ticket: Ticket) -> None:
    """Employees may only see the tickets they raised."""
    if ticket.created_by == principal.email:
        return
    if not is_allowed(principal, Permission.VIEW_ALL_TICKETS):
        raise AuthorizationError(f"Ticket {ticket.id} belongs to another user")


def _touch(ticket: Ticket, now: datetime) -> datetime:
    """Advance updated_at to now and return the stamp to record.

    A clock behind the ticket's last activity is held at updated_at, so
    timeline order, closed_at and updated_at never move backwards.
    """
    ticket.updated_at = max(ensure_aware(ticket.updated_at), now)
    return ticket.updated_at


async def create_ticket(
    repo: Repository,
    principal: Principal,
    subject: str,
    category: Union[TicketCategory, str],
    priority: Union[Priority, str],
    description: str,
    now: Optional[datetime] = None,
) -> Ticket:
    """Raise a new ticket and route it to a team."""
    authorize(principal, Permission.CREATE_TICKET)
    subject = require_text(subject, "Subject")
    description = require_text(description, "Description")
    category = coerce_enum(TicketCategory, category, "category")
    priority = coerce_enum(Priority, priority, "priority")
    now = ensure_aware(now or utcnow())

    tickets = await repo.load_all(Collection.TICKETS)
    ticket = Ticket(
        id=generate_ticket_id({t.id for t in tickets}),
        subject=subject,
        description=description,
        category=category,
        priority=priority,
        status=TicketStatus.OPEN,
        created_by=principal.email,
        created_by_name=principal.name,
        assigned_to=route_team(category),
        created_at=now,
        updated_at=now,
        timeline=[TimelineEvent(action="Ticket Created", by=principal.name, timestamp=now)],
    )
    tickets.append(ticket)
    await repo.replace_all(Collection.TICKETS, tickets)

    logger.info("Ticket %s created by %s, routed to %s", ticket.id, principal.email, ticket.assigned_to)
    return ticket


async def get_ticket(repo: Repository, principal: Principal, ticket_id: str) -> Ticket:
    """Get a ticket by its ID."""
    authorize(principal, Permission.VIEW_OWN_TICKETS)
    tickets = await repo.load_all(Collection.TICKETS)
    ticket = _find_ticket(tickets, ticket_id)
    _ensure_visible(principal, ticket)
    return ticket


async def list_tickets(
    repo: Repository,
    principal: Principal,
    status_tab: Optional[str] = None,
    search_term: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[Ticket]:
    """
    List tickets for the principal's dashboard.

    Args:
        repo: Collection store
        principal: Session user; employees only see their own tickets
        status_tab: A ticket status, "all", or None for the default view
        search_term: Free-text filter
        now: Reference time for the retention window

    Returns:
        Tickets sorted by priority, then newest first
    """
    authorize(principal, Permission.VIEW_OWN_TICKETS)
    tickets = await repo.load_all(Collection.TICKETS)
    return query_service.ticket_view(
        tickets,
        principal,
        ensure_aware(now or utcnow()),
        status_tab=status_tab,
        term=search_term,
    )


async def add_comment(
    repo: Repository,
    ticket_id: str,
    principal: Principal,
    text: str,
    now: Optional[datetime] = None,
) -> Ticket:
    """Post a comment and log it on the timeline."""
    authorize(principal, Permission.COMMENT_TICKET)
    text = require_text(text, "Comment text")
    now = ensure_aware(now or utcnow())

    tickets = await repo.load_all(Collection.TICKETS)
    ticket = _find_ticket(tickets, ticket_id)
    _ensure_visible(principal, ticket)
    now = _touch(ticket, now)

    ticket.comments.append(
        Comment(
            id=generate_comment_id(),
            author=principal.name,
            author_email=principal.email,
            text=text,
            timestamp=now,
        )
    )
    ticket.timeline.append(
        TimelineEvent(
            action="Comment added",
            by=principal.name,
            timestamp=now,
            note=truncate(text, COMMENT_NOTE_LIMIT),
        )
    )
    await repo.replace_all(Collection.TICKETS, tickets)

    logger.info("Comment added to %s by %s", ticket_id, principal.email)
    return ticket


async def change_status(
    repo: Repository,
    ticket_id: str,
    principal: Principal,
    new_status: Union[TicketStatus, str],
    now: Optional[datetime] = None,
) -> Ticket:
    """
    Move a ticket to another status.

    Any status may move to any other. Moving into Closed stamps closed_at;
    leaving Closed keeps it.
    """
    authorize(principal, Permission.CHANGE_TICKET_STATUS)
    new_status = coerce_enum(TicketStatus, new_status, "status")
    now = ensure_aware(now or utcnow())

    tickets = await repo.load_all(Collection.TICKETS)
    ticket = _find_ticket(tickets, ticket_id)
    now = _touch(ticket, now)

    old_status = ticket.status
    ticket.status = new_status
    if new_status is TicketStatus.CLOSED and (
        old_status is not TicketStatus.CLOSED or ticket.closed_at is None
    ):
        ticket.closed_at = now
    ticket.timeline.append(
        TimelineEvent(
            action=f"Status changed from {old_status.value} to {new_status.value}",
            by=principal.name,
            timestamp=now,
        )
    )
    await repo.replace_all(Collection.TICKETS, tickets)

    logger.info("Ticket %s status %s -> %s", ticket_id, old_status.value, new_status.value)
    return ticket


async def change_priority(
    repo: Repository,
    ticket_id: str,
    principal: Principal,
    new_priority: Union[Priority, str],
    now: Optional[datetime] = None,
) -> Ticket:
    """Change a ticket's priority."""
    authorize(principal, Permission.CHANGE_TICKET_PRIORITY)
    new_priority = coerce_enum(Priority, new_priority, "priority")
    now = ensure_aware(now or utcnow())

    tickets = await repo.load_all(Collection.TICKETS)
    ticket = _find_ticket(tickets, ticket_id)
    now = _touch(ticket, now)

    old_priority = ticket.priority
    ticket.priority = new_priority
    ticket.timeline.append(
        TimelineEvent(
            action=f"Priority changed from {old_priority.value} to {new_priority.value}",
            by=principal.name,
            timestamp=now,
        )
    )
    await repo.replace_all(Collection.TICKETS, tickets)

    logger.info("Ticket %s priority %s -> %s", ticket_id, old_priority.value, new_priority.value)
    return ticket

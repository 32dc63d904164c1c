"""Query engine for ticket and project list views.

Everything here is a pure function over already-loaded records; the
caller supplies the role, the requested status tab and the clock.
"""
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Union
from ticket_tally.models.enums import Priority, ProjectStatus, Role, TicketStatus
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.project import Project
from ticket_tally.schemas.ticket import Ticket
from ticket_tally.services.authz import is_self_scoped
from ticket_tally.utils import coerce_enum, ensure_aware

RETENTION_WINDOW = timedelta(days=7)

PRIORITY_RANK = {
    Priority.CRITICAL: 4,
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}

ALL_TAB = "all"

StatusTab = Optional[Union[TicketStatus, str]]


def _parse_tab(status_tab: StatusTab) -> Optional[TicketStatus]:
    if status_tab is None or status_tab == ALL_TAB:
        return None
    return coerce_enum(TicketStatus, status_tab, "status")


def is_expired(ticket: Ticket, now: datetime) -> bool:
    """A Closed ticket whose closed_at lies more than 7 days before now."""
    if ticket.status != TicketStatus.CLOSED or ticket.closed_at is None:
        return False
    return ensure_aware(ticket.closed_at) < ensure_aware(now) - RETENTION_WINDOW


def retention_filter(
    tickets: Iterable[Ticket],
    role: Role,
    now: datetime,
    status_tab: StatusTab = None,
) -> List[Ticket]:
    """
    Drop Closed tickets that fell out of the 7-day retention window.

    Self-scoped (employee) views always apply the window. Privileged views
    apply it only when the Closed tab is selected and otherwise show every
    ticket regardless of age.
    """
    tab = _parse_tab(status_tab)
    if is_self_scoped(role) or tab is TicketStatus.CLOSED:
        return [t for t in tickets if not is_expired(t, now)]
    return list(tickets)


def sort_by_priority_then_recency(tickets: Iterable[Ticket]) -> List[Ticket]:
    """Highest priority first; newest first within a priority."""
    return sorted(
        tickets,
        key=lambda t: (PRIORITY_RANK.get(t.priority, 0), ensure_aware(t.created_at)),
        reverse=True,
    )


def search(tickets: Iterable[Ticket], term: Optional[str]) -> List[Ticket]:
    """Case-insensitive substring match on id, subject, category, status and creator."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(tickets)

    def matches(ticket: Ticket) -> bool:
        fields = (
            ticket.id,
            ticket.subject,
            ticket.category.value,
            ticket.status.value,
            ticket.created_by_name or "",
        )
        return any(needle in field.lower() for field in fields)

    return [t for t in tickets if matches(t)]


def scope_tickets(tickets: Iterable[Ticket], principal: Principal) -> List[Ticket]:
    """Employees only see the tickets they raised."""
    if is_self_scoped(principal.role):
        return [t for t in tickets if t.created_by == principal.email]
    return list(tickets)


def filter_by_status_tab(
    tickets: Iterable[Ticket],
    status_tab: StatusTab,
    role: Role,
) -> List[Ticket]:
    """
    Apply a dashboard status tab.

    No tab leaves the list untouched. The employee "all" tab lists active
    work only, so Closed tickets are hidden there; the privileged "all" tab
    lists everything.
    """
    if status_tab is None:
        return list(tickets)
    tab = _parse_tab(status_tab)
    if tab is None:
        if is_self_scoped(role):
            return [t for t in tickets if t.status != TicketStatus.CLOSED]
        return list(tickets)
    return [t for t in tickets if t.status == tab]


def ticket_view(
    tickets: Iterable[Ticket],
    principal: Principal,
    now: datetime,
    status_tab: StatusTab = None,
    term: Optional[str] = None,
) -> List[Ticket]:
    """Scope, tab, retention, search and sort, in that order."""
    scoped = scope_tickets(tickets, principal)
    tabbed = filter_by_status_tab(scoped, status_tab, principal.role)
    retained = retention_filter(tabbed, principal.role, now, status_tab)
    return sort_by_priority_then_recency(search(retained, term))


def filter_projects(
    projects: Iterable[Project],
    status: Optional[Union[ProjectStatus, str]] = None,
) -> List[Project]:
    """Keep projects with the given status; None or "all" keeps everything."""
    if status is None or status == ALL_TAB:
        return list(projects)
    wanted = coerce_enum(ProjectStatus, status, "status")
    return [p for p in projects if p.status == wanted]


def sort_projects_by_deadline(projects: Iterable[Project]) -> List[Project]:
    """Closest deadline first."""
    return sorted(projects, key=lambda p: p.deadline)

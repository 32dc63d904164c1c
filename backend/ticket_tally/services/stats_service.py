"""Dashboard statistics and data export."""
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional
from ticket_tally.models.enums import Priority, ProjectStatus, Role, SlaStatus, TicketCategory, TicketStatus
from ticket_tally.repositories import Collection, Repository
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.project import Project
from ticket_tally.schemas.stats import (
    DashboardSummary,
    EmployeeSummary,
    ProfileStat,
    ProjectStatistics,
    TicketKpis,
    UserDataExport,
)
from ticket_tally.schemas.ticket import Ticket
from ticket_tally.services import query_service
from ticket_tally.services.authz import Permission, authorize, is_self_scoped
from ticket_tally.services.ticket_service import compute_sla_status
from ticket_tally.utils import ensure_aware, utcnow

UPCOMING_WINDOW = timedelta(days=7)


def ticket_kpis(tickets: Iterable[Ticket]) -> TicketKpis:
    """Total plus per-status counts."""
    tickets = list(tickets)
    counts = Counter(t.status for t in tickets)
    return TicketKpis(
        total=len(tickets),
        open=counts[TicketStatus.OPEN],
        in_progress=counts[TicketStatus.IN_PROGRESS],
        resolved=counts[TicketStatus.RESOLVED],
    )


def category_breakdown(tickets: Iterable[Ticket]) -> Dict[str, int]:
    counts = Counter(t.category for t in tickets)
    return {c.value: counts[c] for c in TicketCategory}


def priority_breakdown(tickets: Iterable[Ticket]) -> Dict[str, int]:
    counts = Counter(t.priority for t in tickets)
    return {p.value: counts[p] for p in Priority}


def sla_overview(tickets: Iterable[Ticket], now: datetime) -> Dict[str, int]:
    """How many tickets sit in each SLA state at ``now``."""
    counts = Counter(compute_sla_status(t, now) for t in tickets)
    return {s.value: counts[s] for s in SlaStatus}


def employee_directory(
    tickets: Iterable[Ticket],
    principal: Optional[Principal] = None,
) -> List[EmployeeSummary]:
    """Employees known from the tickets they raised, in first-seen order."""
    employees: Dict[str, EmployeeSummary] = {}
    for ticket in tickets:
        if not ticket.created_by:
            continue
        if ticket.created_by not in employees:
            employees[ticket.created_by] = EmployeeSummary(
                email=ticket.created_by,
                name=ticket.created_by_name or "Unknown",
                ticket_count=0,
                created_at=ticket.created_at,
            )
        employees[ticket.created_by].ticket_count += 1

    if principal is not None and principal.role is Role.EMPLOYEE and principal.email not in employees:
        employees[principal.email] = EmployeeSummary(
            email=principal.email,
            name=principal.name,
            ticket_count=0,
            created_at=principal.created_at,
        )
    return list(employees.values())


def project_statistics(projects: Iterable[Project], today: date) -> ProjectStatistics:
    """Counts for the projects overview, including deadlines due within a week."""
    projects = list(projects)
    week_ahead = today + UPCOMING_WINDOW
    return ProjectStatistics(
        total=len(projects),
        active=sum(1 for p in projects if p.status == ProjectStatus.ACTIVE),
        completed=sum(1 for p in projects if p.status == ProjectStatus.COMPLETED),
        upcoming_deadlines=sum(
            1 for p in projects
            if p.status != ProjectStatus.COMPLETED and today <= p.deadline <= week_ahead
        ),
    )


def profile_stats(principal: Principal, tickets: List[Ticket], staff_count: int) -> List[ProfileStat]:
    """Role-specific counters shown on the profile page."""
    if principal.role is Role.EMPLOYEE:
        mine = [t for t in tickets if t.created_by == principal.email]
        return [
            ProfileStat(label="Total Tickets", value=len(mine)),
            ProfileStat(label="Open Tickets", value=sum(1 for t in mine if t.status == TicketStatus.OPEN)),
            ProfileStat(label="Resolved Tickets", value=sum(1 for t in mine if t.status == TicketStatus.RESOLVED)),
        ]
    if principal.role is Role.ITSTAFF:
        assigned = [t for t in tickets if t.assigned_to and "Team" in t.assigned_to]
        return [
            ProfileStat(label="Assigned Tickets", value=len(assigned)),
            ProfileStat(label="In Progress", value=sum(1 for t in assigned if t.status == TicketStatus.IN_PROGRESS)),
            ProfileStat(label="Resolved", value=sum(1 for t in assigned if t.status == TicketStatus.RESOLVED)),
        ]
    if principal.role is Role.ADMIN:
        creators = {t.created_by for t in tickets if t.created_by}
        return [
            ProfileStat(label="System Tickets", value=len(tickets)),
            ProfileStat(label="Open Tickets", value=sum(1 for t in tickets if t.status == TicketStatus.OPEN)),
            ProfileStat(label="Total Users", value=len(creators) + staff_count),
        ]
    raise ValueError(f"Unhandled role: {principal.role}")


async def dashboard_summary(
    repo: Repository,
    principal: Principal,
    now: Optional[datetime] = None,
) -> DashboardSummary:
    """
    KPIs and breakdowns for the principal's dashboard.

    Employees get figures over their own visible tickets; privileged roles
    over every ticket.
    """
    authorize(principal, Permission.VIEW_OWN_TICKETS)
    now = ensure_aware(now or utcnow())
    tickets = await repo.load_all(Collection.TICKETS)
    if is_self_scoped(principal.role):
        tickets = query_service.retention_filter(
            query_service.scope_tickets(tickets, principal), principal.role, now
        )
    return DashboardSummary(
        kpis=ticket_kpis(tickets),
        by_category=category_breakdown(tickets),
        by_priority=priority_breakdown(tickets),
        sla=sla_overview(tickets, now),
    )


async def list_employees(repo: Repository, principal: Principal) -> List[EmployeeSummary]:
    authorize(principal, Permission.VIEW_REPORTS)
    tickets = await repo.load_all(Collection.TICKETS)
    return employee_directory(tickets, principal)


async def project_overview(
    repo: Repository,
    principal: Principal,
    today: Optional[date] = None,
) -> ProjectStatistics:
    authorize(principal, Permission.MANAGE_PROJECTS)
    projects = await repo.load_all(Collection.PROJECTS)
    return project_statistics(projects, today or utcnow().date())


async def profile(repo: Repository, principal: Principal) -> List[ProfileStat]:
    authorize(principal, Permission.VIEW_OWN_TICKETS)
    tickets = await repo.load_all(Collection.TICKETS)
    staff = await repo.load_all(Collection.STAFF)
    return profile_stats(principal, tickets, len(staff))


async def export_user_data(
    repo: Repository,
    principal: Principal,
    now: Optional[datetime] = None,
) -> UserDataExport:
    """Personal data export: own tickets for employees, everything otherwise."""
    authorize(principal, Permission.VIEW_OWN_TICKETS)
    tickets = await repo.load_all(Collection.TICKETS)
    if is_self_scoped(principal.role):
        tickets = query_service.scope_tickets(tickets, principal)
    return UserDataExport(
        user=principal,
        tickets=tickets,
        export_date=ensure_aware(now or utcnow()),
    )

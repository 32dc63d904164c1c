"""Ticket lifecycle tests."""
import re
from datetime import timedelta

import pytest

from ticket_tally.exceptions import AuthorizationError, NotFoundError, ValidationError
from ticket_tally.models.enums import Priority, SlaStatus, TicketCategory, TicketStatus
from ticket_tally.repositories import Collection
from ticket_tally.services import ticket_service


async def _raise(repo, principal, now, **overrides):
    fields = dict(
        subject="Laptop will not boot",
        category="Hardware Issue",
        priority="High",
        description="Black screen after the overnight update",
    )
    fields.update(overrides)
    return await ticket_service.create_ticket(repo, principal, now=now, **fields)


async def test_create_ticket_routes_and_logs(repo, employee, now):
    ticket = await _raise(repo, employee, now)

    assert re.fullmatch(r"TKT-\d{5}", ticket.id)
    assert ticket.status is TicketStatus.OPEN
    assert ticket.category is TicketCategory.HARDWARE
    assert ticket.priority is Priority.HIGH
    assert ticket.assigned_to == "Hardware Team"
    assert ticket.created_by == "employee@demo.com"
    assert ticket.created_by_name == "Sarah Johnson"
    assert ticket.created_at == now
    assert ticket.updated_at == now
    assert ticket.closed_at is None
    assert ticket.comments == []
    assert [e.action for e in ticket.timeline] == ["Ticket Created"]
    assert ticket.timeline[0].by == "Sarah Johnson"

    stored = await repo.load_all(Collection.TICKETS)
    assert [t.id for t in stored] == [ticket.id]


async def test_create_ticket_trims_text(repo, employee, now):
    ticket = await _raise(repo, employee, now, subject="  VPN drops  ", category="Network Issue")
    assert ticket.subject == "VPN drops"
    assert ticket.assigned_to == "Network Team"


@pytest.mark.parametrize(
    "overrides",
    [
        {"subject": "   "},
        {"description": ""},
        {"category": "Printer Issue"},
        {"priority": "Urgent"},
    ],
)
async def test_create_ticket_rejects_bad_input_without_writing(repo, employee, now, overrides):
    with pytest.raises(ValidationError):
        await _raise(repo, employee, now, **overrides)
    assert not await repo.has(Collection.TICKETS)


async def test_ticket_ids_are_unique(repo, employee, now):
    ids = {(await _raise(repo, employee, now)).id for _ in range(25)}
    assert len(ids) == 25


@pytest.mark.parametrize(
    "category,team",
    [
        ("Software Issue", "Software Team"),
        ("Hardware Issue", "Hardware Team"),
        ("Network Issue", "Network Team"),
        ("Email Issue", "Software Team"),
        ("Printer Issue", "IT Support"),
        (None, "IT Support"),
    ],
)
def test_route_team(category, team):
    assert ticket_service.route_team(category) == team


async def test_long_comment_is_truncated_on_timeline(repo, employee, itstaff, now):
    ticket = await _raise(repo, employee, now)
    text = "x" * 150
    later = now + timedelta(minutes=5)

    updated = await ticket_service.add_comment(repo, ticket.id, itstaff, text, now=later)

    assert len(updated.comments) == 1
    comment = updated.comments[0]
    assert comment.text == text
    assert comment.author == "John Smith"
    assert comment.author_email == "itstaff@demo.com"
    assert comment.id.startswith("CMT-")
    event = updated.timeline[-1]
    assert event.action == "Comment added"
    assert event.note == "x" * 100 + "..."
    assert updated.updated_at == later


async def test_short_comment_note_is_not_marked(repo, employee, now):
    ticket = await _raise(repo, employee, now)
    updated = await ticket_service.add_comment(repo, ticket.id, employee, "Still broken", now=now)
    assert updated.timeline[-1].note == "Still broken"


async def test_comment_errors(repo, employee, other_employee, now):
    ticket = await _raise(repo, employee, now)

    with pytest.raises(ValidationError):
        await ticket_service.add_comment(repo, ticket.id, employee, "   ", now=now)
    with pytest.raises(NotFoundError):
        await ticket_service.add_comment(repo, "TKT-00000", employee, "hello", now=now)
    with pytest.raises(AuthorizationError):
        await ticket_service.add_comment(repo, ticket.id, other_employee, "me too", now=now)

    stored = (await repo.load_all(Collection.TICKETS))[0]
    assert stored.comments == []
    assert len(stored.timeline) == 1


async def test_close_stamps_closed_at_and_reopen_keeps_it(repo, employee, itstaff, now):
    ticket = await _raise(repo, employee, now)
    closed_time = now + timedelta(hours=2)

    closed = await ticket_service.change_status(repo, ticket.id, itstaff, "Closed", now=closed_time)
    assert closed.status is TicketStatus.CLOSED
    assert closed.closed_at == closed_time
    assert closed.timeline[-1].action == "Status changed from Open to Closed"
    assert closed.timeline[-1].by == "John Smith"

    reopened = await ticket_service.change_status(
        repo, ticket.id, itstaff, "Open", now=closed_time + timedelta(hours=1)
    )
    assert reopened.status is TicketStatus.OPEN
    assert reopened.closed_at == closed_time


async def test_any_status_transition_is_allowed(repo, employee, admin, now):
    ticket = await _raise(repo, employee, now)
    for target in ("Resolved", "In Progress", "Open", "Resolved"):
        ticket = await ticket_service.change_status(repo, ticket.id, admin, target, now=now)
        assert ticket.status.value == target
    assert len(ticket.timeline) == 5


async def test_employee_cannot_change_status_or_priority(repo, employee, now):
    ticket = await _raise(repo, employee, now)
    with pytest.raises(AuthorizationError):
        await ticket_service.change_status(repo, ticket.id, employee, "Resolved", now=now)
    with pytest.raises(AuthorizationError):
        await ticket_service.change_priority(repo, ticket.id, employee, "Low", now=now)


async def test_change_priority(repo, employee, itstaff, now):
    ticket = await _raise(repo, employee, now)
    updated = await ticket_service.change_priority(
        repo, ticket.id, itstaff, "Critical", now=now + timedelta(minutes=1)
    )
    assert updated.priority is Priority.CRITICAL
    assert updated.timeline[-1].action == "Priority changed from High to Critical"

    with pytest.raises(ValidationError):
        await ticket_service.change_priority(repo, ticket.id, itstaff, "Urgent", now=now)
    with pytest.raises(NotFoundError):
        await ticket_service.change_priority(repo, "TKT-00000", itstaff, "Low", now=now)


async def test_updated_at_never_moves_backwards(repo, employee, itstaff, now):
    ticket = await _raise(repo, employee, now)
    updated = await ticket_service.change_status(
        repo, ticket.id, itstaff, "In Progress", now=now - timedelta(hours=1)
    )
    assert updated.updated_at == now
    assert updated.updated_at >= updated.created_at


async def test_late_clock_keeps_timeline_in_order(repo, employee, itstaff, now):
    ticket = await _raise(repo, employee, now)
    earlier = now - timedelta(hours=1)

    await ticket_service.add_comment(repo, ticket.id, employee, "Any update?", now=earlier)
    await ticket_service.change_priority(repo, ticket.id, itstaff, "Critical", now=earlier)
    closed = await ticket_service.change_status(repo, ticket.id, itstaff, "Closed", now=earlier)

    stamps = [event.timestamp for event in closed.timeline]
    assert stamps == sorted(stamps)
    assert stamps[-1] == now
    assert closed.comments[0].timestamp == now
    assert closed.closed_at == now
    assert closed.closed_at >= closed.created_at
    assert closed.updated_at == now


async def test_get_ticket_visibility(repo, employee, other_employee, itstaff, now):
    ticket = await _raise(repo, employee, now)

    assert (await ticket_service.get_ticket(repo, employee, ticket.id)).id == ticket.id
    assert (await ticket_service.get_ticket(repo, itstaff, ticket.id)).id == ticket.id
    with pytest.raises(AuthorizationError):
        await ticket_service.get_ticket(repo, other_employee, ticket.id)
    with pytest.raises(NotFoundError):
        await ticket_service.get_ticket(repo, itstaff, "TKT-00000")


async def test_list_tickets_scopes_employees(repo, employee, other_employee, admin, now):
    mine = await _raise(repo, employee, now)
    await _raise(repo, other_employee, now, subject="Mailbox full", category="Email Issue")

    visible = await ticket_service.list_tickets(repo, employee, now=now)
    assert [t.id for t in visible] == [mine.id]
    assert len(await ticket_service.list_tickets(repo, admin, now=now)) == 2


async def test_changes_survive_reload(repo, employee, itstaff, now):
    ticket = await _raise(repo, employee, now)
    await ticket_service.add_comment(repo, ticket.id, employee, "Any news?", now=now)
    await ticket_service.change_status(repo, ticket.id, itstaff, "Closed", now=now)

    stored = await ticket_service.get_ticket(repo, employee, ticket.id)
    assert stored.status is TicketStatus.CLOSED
    assert stored.closed_at == now
    assert [c.text for c in stored.comments] == ["Any news?"]
    assert len(stored.timeline) == 3


class TestSla:
    @pytest.mark.parametrize(
        "priority,hours",
        [(Priority.CRITICAL, 4), (Priority.HIGH, 8), (Priority.MEDIUM, 24), (Priority.LOW, 48), ("Urgent", 24)],
    )
    def test_thresholds(self, priority, hours):
        assert ticket_service.sla_threshold_hours(priority) == hours

    @pytest.mark.parametrize(
        "age_hours,expected",
        [
            (0, SlaStatus.ON_TRACK),
            (3.2, SlaStatus.ON_TRACK),
            (3.3, SlaStatus.APPROACHING),
            (4, SlaStatus.APPROACHING),
            (4.01, SlaStatus.BREACHED),
        ],
    )
    def test_critical_ticket_states(self, make_ticket, now, age_hours, expected):
        ticket = make_ticket(priority=Priority.CRITICAL, created_at=now - timedelta(hours=age_hours))
        assert ticket_service.compute_sla_status(ticket, now) is expected

    @pytest.mark.parametrize("status", [TicketStatus.RESOLVED, TicketStatus.CLOSED])
    def test_finished_tickets_are_completed(self, make_ticket, now, status):
        ticket = make_ticket(
            priority=Priority.CRITICAL,
            status=status,
            created_at=now - timedelta(days=30),
            closed_at=now if status is TicketStatus.CLOSED else None,
        )
        assert ticket_service.compute_sla_status(ticket, now) is SlaStatus.COMPLETED

    def test_state_only_worsens_with_time(self, make_ticket, now):
        order = [SlaStatus.ON_TRACK, SlaStatus.APPROACHING, SlaStatus.BREACHED]
        ticket = make_ticket(priority=Priority.HIGH, created_at=now)
        states = [
            ticket_service.compute_sla_status(ticket, now + timedelta(minutes=30 * step))
            for step in range(30)
        ]
        ranks = [order.index(s) for s in states]
        assert ranks == sorted(ranks)
        assert states[-1] is SlaStatus.BREACHED

    def test_report(self, make_ticket, now):
        ticket = make_ticket(priority=Priority.MEDIUM, created_at=now - timedelta(hours=20))
        report = ticket_service.sla_report(ticket, now)
        assert report.ticket_id == ticket.id
        assert report.threshold_hours == 24
        assert report.age_hours == 20
        assert report.status is SlaStatus.APPROACHING
        assert report.due_at == now + timedelta(hours=4)

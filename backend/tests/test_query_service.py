"""List view tests: retention, tabs, search and ordering."""
from datetime import date, datetime, timedelta, timezone

import pytest

from ticket_tally.exceptions import ValidationError
from ticket_tally.models.enums import Priority, ProjectStatus, Role, TicketCategory, TicketStatus
from ticket_tally.schemas.project import Project
from ticket_tally.services import query_service


def _closed(make_ticket, now, age):
    return make_ticket(
        status=TicketStatus.CLOSED,
        created_at=now - age - timedelta(days=1),
        closed_at=now - age,
    )


class TestRetention:
    def test_boundary(self, make_ticket, now):
        exactly_week = _closed(make_ticket, now, timedelta(hours=168))
        past_week = _closed(make_ticket, now, timedelta(hours=168, seconds=1))

        kept = query_service.retention_filter([exactly_week, past_week], Role.EMPLOYEE, now)

        assert [t.id for t in kept] == [exactly_week.id]

    def test_closed_without_timestamp_is_kept(self, make_ticket, now):
        ticket = make_ticket(status=TicketStatus.CLOSED, created_at=now - timedelta(days=60))
        assert query_service.retention_filter([ticket], Role.EMPLOYEE, now) == [ticket]

    def test_only_closed_tickets_expire(self, make_ticket, now):
        old_resolved = make_ticket(status=TicketStatus.RESOLVED, created_at=now - timedelta(days=90))
        assert query_service.retention_filter([old_resolved], Role.EMPLOYEE, now) == [old_resolved]

    def test_privileged_views_keep_everything_outside_closed_tab(self, make_ticket, now):
        old = _closed(make_ticket, now, timedelta(days=30))
        assert query_service.retention_filter([old], Role.ITSTAFF, now) == [old]
        assert query_service.retention_filter([old], Role.ADMIN, now, status_tab="all") == [old]
        assert query_service.retention_filter([old], Role.ADMIN, now, status_tab="Closed") == []

    def test_idempotent(self, make_ticket, now):
        tickets = [
            _closed(make_ticket, now, timedelta(days=1)),
            _closed(make_ticket, now, timedelta(days=10)),
            make_ticket(),
        ]
        once = query_service.retention_filter(tickets, Role.EMPLOYEE, now)
        twice = query_service.retention_filter(once, Role.EMPLOYEE, now)
        assert [t.id for t in once] == [t.id for t in twice]
        assert len(once) == 2

    @pytest.mark.parametrize("role", ["employee", Role.EMPLOYEE])
    def test_role_given_as_value(self, make_ticket, now, role):
        old = _closed(make_ticket, now, timedelta(days=30))
        recent = _closed(make_ticket, now, timedelta(days=1))
        kept = query_service.retention_filter([old, recent], role, now)
        assert [t.id for t in kept] == [recent.id]

    def test_naive_datetimes_are_utc(self, make_ticket, now):
        ticket = _closed(make_ticket, now, timedelta(days=8))
        naive_now = now.replace(tzinfo=None)
        assert query_service.is_expired(ticket, naive_now)


class TestSorting:
    def test_priority_order(self, make_ticket):
        tickets = [
            make_ticket(priority=Priority.LOW),
            make_ticket(priority=Priority.CRITICAL),
            make_ticket(priority=Priority.MEDIUM),
            make_ticket(priority=Priority.HIGH),
        ]
        ordered = query_service.sort_by_priority_then_recency(tickets)
        assert [t.priority for t in ordered] == [
            Priority.CRITICAL,
            Priority.HIGH,
            Priority.MEDIUM,
            Priority.LOW,
        ]

    def test_newest_first_within_priority(self, make_ticket, now):
        older = make_ticket(created_at=now - timedelta(hours=5))
        newer = make_ticket(created_at=now - timedelta(hours=1))
        ordered = query_service.sort_by_priority_then_recency([older, newer])
        assert [t.id for t in ordered] == [newer.id, older.id]

    def test_ties_keep_input_order(self, make_ticket, now):
        first = make_ticket(created_at=now)
        second = make_ticket(created_at=now)
        ordered = query_service.sort_by_priority_then_recency([first, second])
        assert [t.id for t in ordered] == [first.id, second.id]


class TestSearch:
    @pytest.fixture
    def tickets(self, make_ticket):
        return [
            make_ticket(subject="VPN keeps dropping", category=TicketCategory.NETWORK),
            make_ticket(subject="Outlook crash", category=TicketCategory.EMAIL, created_by_name="Dan Brooks"),
            make_ticket(subject="Monitor flicker", status=TicketStatus.IN_PROGRESS),
        ]

    def test_empty_term_returns_everything(self, tickets):
        assert query_service.search(tickets, "") == tickets
        assert query_service.search(tickets, "   ") == tickets
        assert query_service.search(tickets, None) == tickets

    @pytest.mark.parametrize(
        "term,index",
        [("vpn", 0), ("EMAIL", 1), ("dan", 1), ("in progress", 2), ("flick", 2)],
    )
    def test_matches_fields_case_insensitively(self, tickets, term, index):
        assert query_service.search(tickets, term) == [tickets[index]]

    def test_matches_id(self, tickets):
        assert query_service.search(tickets, tickets[2].id.lower()) == [tickets[2]]

    def test_no_match(self, tickets):
        assert query_service.search(tickets, "keyboard") == []


class TestStatusTabs:
    @pytest.fixture
    def tickets(self, make_ticket, now):
        return [
            make_ticket(status=TicketStatus.OPEN),
            make_ticket(status=TicketStatus.IN_PROGRESS),
            _closed(make_ticket, now, timedelta(days=1)),
        ]

    def test_employee_all_tab_hides_closed(self, tickets):
        shown = query_service.filter_by_status_tab(tickets, "all", Role.EMPLOYEE)
        assert TicketStatus.CLOSED not in {t.status for t in shown}
        assert len(shown) == 2

    def test_privileged_all_tab_shows_closed(self, tickets):
        assert len(query_service.filter_by_status_tab(tickets, "all", Role.ADMIN)) == 3

    def test_specific_tab(self, tickets):
        shown = query_service.filter_by_status_tab(tickets, "In Progress", Role.ITSTAFF)
        assert [t.status for t in shown] == [TicketStatus.IN_PROGRESS]

    def test_no_tab(self, tickets):
        assert query_service.filter_by_status_tab(tickets, None, Role.EMPLOYEE) == tickets

    def test_unknown_tab(self, tickets):
        with pytest.raises(ValidationError):
            query_service.filter_by_status_tab(tickets, "Pending", Role.ADMIN)


def test_ticket_view_pipeline(make_ticket, employee, now):
    mine_old_closed = _closed(make_ticket, now, timedelta(days=9))
    mine_recent_closed = _closed(make_ticket, now, timedelta(days=2))
    mine_low = make_ticket(priority=Priority.LOW)
    mine_high = make_ticket(priority=Priority.HIGH)
    theirs = make_ticket(created_by="dan@demo.com", created_by_name="Dan Brooks")
    tickets = [mine_old_closed, mine_recent_closed, mine_low, mine_high, theirs]

    default = query_service.ticket_view(tickets, employee, now)
    assert [t.id for t in default] == [mine_high.id, mine_recent_closed.id, mine_low.id]

    closed_tab = query_service.ticket_view(tickets, employee, now, status_tab="Closed")
    assert [t.id for t in closed_tab] == [mine_recent_closed.id]

    searched = query_service.ticket_view(tickets, employee, now, term="dan")
    assert searched == []


def _project(name, status, deadline):
    stamp = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return Project(
        id=f"PRJ-{name}",
        name=name,
        status=status,
        priority=Priority.MEDIUM,
        start_date=date(2026, 1, 1),
        deadline=deadline,
        created_by="admin@demo.com",
        created_at=stamp,
        updated_at=stamp,
    )


def test_project_filter_and_deadline_order():
    projects = [
        _project("b", ProjectStatus.ACTIVE, date(2026, 5, 1)),
        _project("a", ProjectStatus.PLANNING, date(2026, 3, 1)),
        _project("c", ProjectStatus.ACTIVE, date(2026, 4, 1)),
    ]
    active = query_service.filter_projects(projects, "Active")
    assert [p.name for p in query_service.sort_projects_by_deadline(active)] == ["c", "b"]
    assert len(query_service.filter_projects(projects, "all")) == 3
    assert len(query_service.filter_projects(projects, None)) == 3
    with pytest.raises(ValidationError):
        query_service.filter_projects(projects, "On Hold")

"""Shared fixtures."""
import itertools
from datetime import datetime, timedelta, timezone

import pytest

from ticket_tally.models.enums import Priority, Role, TicketCategory, TicketStatus
from ticket_tally.repositories.memory import InMemoryRepository
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.ticket import Ticket, TimelineEvent

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def employee():
    return Principal(
        email="employee@demo.com",
        name="Sarah Johnson",
        role=Role.EMPLOYEE,
        department="Finance",
    )


@pytest.fixture
def other_employee():
    return Principal(email="dan@demo.com", name="Dan Brooks", role=Role.EMPLOYEE)


@pytest.fixture
def itstaff():
    return Principal(email="itstaff@demo.com", name="John Smith", role=Role.ITSTAFF)


@pytest.fixture
def admin():
    return Principal(email="admin@demo.com", name="Alex Admin", role=Role.ADMIN)


@pytest.fixture
def make_ticket():
    """Build Ticket records directly, bypassing the service."""
    counter = itertools.count(10001)

    def _make(
        priority=Priority.MEDIUM,
        status=TicketStatus.OPEN,
        created_at=None,
        closed_at=None,
        created_by="employee@demo.com",
        created_by_name="Sarah Johnson",
        subject="Printer jam on floor 3",
        category=TicketCategory.HARDWARE,
    ):
        created_at = created_at or NOW - timedelta(hours=1)
        return Ticket(
            id=f"TKT-{next(counter)}",
            subject=subject,
            description="Details",
            category=category,
            priority=priority,
            status=status,
            created_by=created_by,
            created_by_name=created_by_name,
            assigned_to="Hardware Team",
            created_at=created_at,
            updated_at=closed_at or created_at,
            closed_at=closed_at,
            timeline=[TimelineEvent(action="Ticket Created", by=created_by_name, timestamp=created_at)],
        )

    return _make

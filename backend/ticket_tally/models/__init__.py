"""SQLAlchemy models and domain enumerations."""
from ticket_tally.models.collection import CollectionDocument
from ticket_tally.models.enums import (
    TicketCategory,
    Priority,
    TicketStatus,
    SlaStatus,
    ProjectStatus,
    DeadlineUrgency,
    StaffStatus,
    Role,
    Theme,
)

__all__ = [
    "CollectionDocument",
    "TicketCategory",
    "Priority",
    "TicketStatus",
    "SlaStatus",
    "ProjectStatus",
    "DeadlineUrgency",
    "StaffStatus",
    "Role",
    "Theme",
]

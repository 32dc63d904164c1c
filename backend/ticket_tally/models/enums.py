"""Domain enumerations.

Enum values are the display strings persisted in the collections, so a
stored record round-trips to the same member.
"""
import enum


class TicketCategory(str, enum.Enum):
    """Ticket categories."""
    SOFTWARE = "Software Issue"
    HARDWARE = "Hardware Issue"
    NETWORK = "Network Issue"
    EMAIL = "Email Issue"


class Priority(str, enum.Enum):
    """Priority levels shared by tickets and projects."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class TicketStatus(str, enum.Enum):
    """Ticket status values."""
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class SlaStatus(str, enum.Enum):
    """SLA state of a ticket at a point in time."""
    ON_TRACK = "On Track"
    APPROACHING = "Approaching"
    BREACHED = "Breached"
    COMPLETED = "Completed"


class ProjectStatus(str, enum.Enum):
    """Project status values."""
    PLANNING = "Planning"
    ACTIVE = "Active"
    COMPLETED = "Completed"


class DeadlineUrgency(str, enum.Enum):
    """Deadline proximity buckets for projects."""
    COMPLETED = "completed"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    URGENT = "urgent"
    SOON = "soon"
    NORMAL = "normal"


class StaffStatus(str, enum.Enum):
    """IT staff member status."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class Role(str, enum.Enum):
    """Session principal roles."""
    EMPLOYEE = "employee"
    ITSTAFF = "itstaff"
    ADMIN = "admin"


class Theme(str, enum.Enum):
    """UI theme preference."""
    LIGHT = "light"
    DARK = "dark"

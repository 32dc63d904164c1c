"""Pydantic schemas for stored records and request/response models."""
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.ticket import (
    TimelineEvent,
    Comment,
    Ticket,
    TicketCreate,
    CommentCreate,
    TicketStatusUpdate,
    TicketPriorityUpdate,
    TicketListResponse,
    SlaReport,
)
from ticket_tally.schemas.project import (
    TeamMember,
    Project,
    ProjectCreate,
    ProjectUpdate,
    ProgressUpdate,
    ProgressResponse,
    DeadlineClass,
)
from ticket_tally.schemas.staff import StaffMember, StaffCreate
from ticket_tally.schemas.preferences import UserSettings, UserSettingsUpdate, ThemePreference
from ticket_tally.schemas.stats import (
    TicketKpis,
    EmployeeSummary,
    ProjectStatistics,
    DashboardSummary,
    ProfileStat,
    UserDataExport,
)

__all__ = [
    "Principal",
    "TimelineEvent",
    "Comment",
    "Ticket",
    "TicketCreate",
    "CommentCreate",
    "TicketStatusUpdate",
    "TicketPriorityUpdate",
    "TicketListResponse",
    "SlaReport",
    "TeamMember",
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "ProgressUpdate",
    "ProgressResponse",
    "DeadlineClass",
    "StaffMember",
    "StaffCreate",
    "UserSettings",
    "UserSettingsUpdate",
    "ThemePreference",
    "TicketKpis",
    "EmployeeSummary",
    "ProjectStatistics",
    "DashboardSummary",
    "ProfileStat",
    "UserDataExport",
]

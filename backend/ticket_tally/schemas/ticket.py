"""Ticket schemas."""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel
from ticket_tally.models.enums import TicketCategory, Priority, TicketStatus, SlaStatus


class TimelineEvent(BaseModel):
    """One entry of a ticket's append-only activity log."""
    action: str
    by: str
    timestamp: datetime
    note: Optional[str] = None


class Comment(BaseModel):
    """A comment posted on a ticket."""
    id: str
    author: str
    author_email: str
    text: str
    timestamp: datetime


class Ticket(BaseModel):
    """Stored ticket record."""
    id: str
    subject: str
    description: str
    category: TicketCategory
    priority: Priority
    status: TicketStatus = TicketStatus.OPEN
    created_by: str
    created_by_name: str
    assigned_to: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    closed_at: Optional[datetime] = None
    timeline: List[TimelineEvent] = []
    comments: List[Comment] = []


# Request bodies carry raw strings; the service validates enum membership
# so direct callers and HTTP callers get the same ValidationError.
class TicketCreate(BaseModel):
    """Schema for raising a ticket."""
    subject: str
    category: str
    priority: str = Priority.MEDIUM.value
    description: str


class CommentCreate(BaseModel):
    """Schema for posting a comment."""
    text: str


class TicketStatusUpdate(BaseModel):
    """Schema for a status transition."""
    status: str


class TicketPriorityUpdate(BaseModel):
    """Schema for a priority change."""
    priority: str


class TicketListResponse(BaseModel):
    """Paginated ticket list response."""
    items: List[Ticket]
    total: int
    page: int
    page_size: int


class SlaReport(BaseModel):
    """SLA figures for a ticket detail view."""
    ticket_id: str
    priority: Priority
    threshold_hours: int
    age_hours: float
    status: SlaStatus
    due_at: datetime

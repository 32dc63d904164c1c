"""Dashboard and reporting schemas."""
from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.ticket import Ticket


class TicketKpis(BaseModel):
    """Headline ticket counts."""
    total: int
    open: int
    in_progress: int
    resolved: int


class EmployeeSummary(BaseModel):
    """An employee derived from the tickets they raised."""
    email: str
    name: str
    ticket_count: int
    created_at: Optional[datetime] = None


class ProjectStatistics(BaseModel):
    """Project overview counts."""
    total: int
    active: int
    completed: int
    upcoming_deadlines: int


class DashboardSummary(BaseModel):
    """Everything an overview screen needs in one payload."""
    kpis: TicketKpis
    by_category: Dict[str, int]
    by_priority: Dict[str, int]
    sla: Dict[str, int]


class ProfileStat(BaseModel):
    """One labelled counter on the profile page."""
    label: str
    value: int


class UserDataExport(BaseModel):
    """Personal data export."""
    user: Principal
    tickets: List[Ticket]
    export_date: datetime

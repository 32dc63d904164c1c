"""IT staff schemas."""
from datetime import datetime
from pydantic import BaseModel
from ticket_tally.models.enums import StaffStatus


class StaffMember(BaseModel):
    """IT staff directory entry."""
    name: str
    email: str
    team: str
    status: StaffStatus = StaffStatus.ACTIVE
    joined_at: datetime


class StaffCreate(BaseModel):
    """Schema for adding an IT staff member."""
    name: str
    email: str
    team: str

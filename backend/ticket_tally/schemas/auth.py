"""Session principal schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel
from ticket_tally.models.enums import Role


class Principal(BaseModel):
    """The pre-authenticated user a request acts on behalf of."""
    email: str
    name: str
    role: Role
    department: Optional[str] = None
    created_at: Optional[datetime] = None

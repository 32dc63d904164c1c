"""Tickets API routes."""
from typing import Optional
from fastapi import APIRouter, Depends, status, Query
from ticket_tally.api.auth import get_current_principal
from ticket_tally.repositories import Repository
from ticket_tally.repositories.sql import get_repository
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.ticket import (
    Ticket,
    TicketCreate,
    CommentCreate,
    TicketStatusUpdate,
    TicketPriorityUpdate,
    TicketListResponse,
    SlaReport,
)
from ticket_tally.services import ticket_service
from ticket_tally.utils import utcnow

router = APIRouter()


@router.post("", response_model=Ticket, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    data: TicketCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Raise a new ticket. It is routed to a team by category."""
    return await ticket_service.create_ticket(
        repo,
        current_user,
        subject=data.subject,
        category=data.category,
        priority=data.priority,
        description=data.description,
    )


@router.get("", response_model=TicketListResponse)
async def list_tickets(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status_tab: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """
    List tickets visible to the current user.

    - status: a ticket status, or "all" (Closed applies the 7-day window)
    - search: matches ID, subject, category, status and creator name
    """
    tickets = await ticket_service.list_tickets(
        repo,
        current_user,
        status_tab=status_tab,
        search_term=search,
    )

    offset = (page - 1) * page_size
    return TicketListResponse(
        items=tickets[offset:offset + page_size],
        total=len(tickets),
        page=page,
        page_size=page_size,
    )


@router.get("/{ticket_id}", response_model=Ticket)
async def get_ticket(
    ticket_id: str,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Get a ticket by its ID."""
    return await ticket_service.get_ticket(repo, current_user, ticket_id)


@router.get("/{ticket_id}/sla", response_model=SlaReport)
async def get_ticket_sla(
    ticket_id: str,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """SLA threshold, age and state of a ticket."""
    ticket = await ticket_service.get_ticket(repo, current_user, ticket_id)
    return ticket_service.sla_report(ticket, utcnow())


@router.post("/{ticket_id}/comments", response_model=Ticket, status_code=status.HTTP_201_CREATED)
async def add_comment(
    ticket_id: str,
    data: CommentCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Post a comment on a ticket."""
    return await ticket_service.add_comment(repo, ticket_id, current_user, data.text)


@router.patch("/{ticket_id}/status", response_model=Ticket)
async def change_status(
    ticket_id: str,
    data: TicketStatusUpdate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Move a ticket to another status."""
    return await ticket_service.change_status(repo, ticket_id, current_user, data.status)


@router.patch("/{ticket_id}/priority", response_model=Ticket)
async def change_priority(
    ticket_id: str,
    data: TicketPriorityUpdate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_principal),
):
    """Change a ticket's priority."""
    return await ticket_service.change_priority(repo, ticket_id, current_user, data.priority)

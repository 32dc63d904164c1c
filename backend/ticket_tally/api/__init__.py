"""API routes."""
from fastapi import APIRouter
from ticket_tally.api import auth, tickets, projects, staff, preferences, dashboard

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Session"])
api_router.include_router(tickets.router, prefix="/tickets", tags=["Tickets"])
api_router.include_router(projects.router, prefix="/projects", tags=["Projects"])
api_router.include_router(staff.router, prefix="/staff", tags=["Staff"])
api_router.include_router(preferences.router, prefix="/preferences", tags=["Preferences"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])

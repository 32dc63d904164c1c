"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ticket_tally.config import get_settings
from ticket_tally.database import init_db, AsyncSessionLocal
from ticket_tally.api import api_router
from ticket_tally.exceptions import TallyError
from ticket_tally.repositories.sql import SqlRepository
from ticket_tally.services.seed_service import seed_demo_data

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()
    if settings.seed_demo_data:
        async with AsyncSessionLocal() as db:
            await seed_demo_data(SqlRepository(db))
    logger.info("%s started", settings.app_name)
    yield


app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Ticket-Tally - IT helpdesk tickets, SLA tracking, staff and projects",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TallyError)
async def tally_error_handler(request: Request, exc: TallyError):
    """Map service errors onto their HTTP status codes."""
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ticket_tally.main:app", host="0.0.0.0", port=8000, reload=True)

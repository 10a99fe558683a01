from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .config import get_settings
from .database import close_ledger, is_ledger_open, open_ledger
from .logging_config import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the configured ledger on startup, close it on shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)
    if not is_ledger_open():
        open_ledger(settings.database_path)
    logger.info(f"Reporting in base currency {settings.base_currency}")
    yield
    # Cleanup on shutdown
    close_ledger()


app = FastAPI(
    title="Yachtbook",
    description="Yacht operations bookkeeping and reporting",
    version="0.1.0",
    lifespan=lifespan
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "ledger_open": is_ledger_open()}

# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.errors import SyncEndpointError
from app.core.logging_conf import configure_logging
from app.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from app.models import product as _product_models  # noqa: F401

# Routers
from app.routers.products import router as products_router
from app.routers.sync import router as sync_router

settings = get_settings()

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables, when DATABASE_URL is
        set. A sync-only deployment (no DATABASE_URL) still boots; the
        catalog endpoints are unavailable there.

    Shutdown:
      - No special cleanup needed for sync engine.
    """
    if not get_settings().DATABASE_URL:
        logger.warning("⚠️  Startup: DATABASE_URL not set, skipping table check (catalog API disabled).")
        yield
        return

    logger.info("🔄 Startup: Connecting to Supabase Postgres...")
    try:
        create_db_and_tables()
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "Maison Catalog API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(SyncEndpointError)
async def sync_endpoint_error_handler(request: Request, exc: SyncEndpointError):
    """Sync endpoint errors use the {success, error} envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.error},
    )


# --- CORS configuration ---
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(products_router, prefix=settings.API_V1_STR)
app.include_router(sync_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "maison-catalog"}

# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from app.core.config import get_settings
from app.core.errors import setup_exception_handlers
from app.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from app.models import user as _user_models  # noqa: F401
from app.models import business as _business_models  # noqa: F401
from app.models import favorite as _favorite_models  # noqa: F401


# Routers
from app.routers.admin import router as admin_router
from app.routers.auth import router as auth_router
from app.routers.businesses import router as businesses_router
from app.routers.favorites import router as favorites_router
from app.routers.health import router as health_router
from app.routers.photos import router as photos_router
from app.routers.search import router as search_router
from app.routers.supplier_dashboard import router as supplier_dashboard_router
from app.routers.users import router as users_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
    """
    logger.info("🔄 Startup: Connecting to database...")
    try:
        create_db_and_tables()
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "Lokolo Directory API",
    version="0.1.0",
    lifespan=lifespan,
)

setup_exception_handlers(app)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Search must be registered before /businesses/{business_id}
app.include_router(search_router, prefix=settings.API_PREFIX)
app.include_router(businesses_router, prefix=settings.API_PREFIX)
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(users_router, prefix=settings.API_PREFIX)
app.include_router(photos_router, prefix=settings.API_PREFIX)
app.include_router(favorites_router, prefix=settings.API_PREFIX)
app.include_router(favorites_router, prefix=f"{settings.API_PREFIX}/consumer")
app.include_router(supplier_dashboard_router, prefix=settings.API_PREFIX)
app.include_router(admin_router, prefix=settings.API_PREFIX)
app.include_router(health_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "lokolo-backend"}

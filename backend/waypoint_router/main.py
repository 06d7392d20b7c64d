from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from waypoint_router.config import settings
from waypoint_router.observability.logging import configure_logging
from waypoint_router.db.session import engine, Base
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from waypoint_router.api.routes_health import router as health_router
from waypoint_router.api.routes_plan import router as plan_router
from waypoint_router.api.routes_scenes import router as scenes_router
import waypoint_router.db.models  # noqa: F401  (register tables on Base)

configure_logging()
logger = logging.getLogger("waypoint_router")


def init_database(max_retries: int = 5, retry_delay: int = 2):
    """
    Initialize the scene store with retry logic.
    Planning endpoints work without it; only /scenes needs the database.
    """
    for attempt in range(max_retries):
        try:
            # Test connection
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            # Create all tables
            Base.metadata.create_all(bind=engine)
            logger.info("Database initialized")
            return True

        except SQLAlchemyError as e:
            logger.warning("Database connection attempt %d/%d failed: %s", attempt + 1, max_retries, e)
            if attempt < max_retries - 1:
                time.sleep(retry_delay)
            else:
                logger.error("Failed to connect to database after all retries")
                return False
    return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Waypoint Router API")
    logger.info("   Environment: %s", settings.environment)
    logger.info("   Grid step: %s, virtual point margin: %s", settings.grid_step, settings.virtual_point_margin)

    init_database()

    yield

    logger.info("Shutting down...")
    engine.dispose()


app = FastAPI(
    title="Waypoint Router API",
    version="0.1.0",
    lifespan=lifespan
)


@app.get("/")
def root():
    return {
        "name": "Waypoint Router API",
        "status": "ok",
        "docs": "/docs",
        "health": "/health"
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(health_router)
app.include_router(plan_router)
app.include_router(scenes_router)

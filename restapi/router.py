"""Application configuration and router setup."""

from contextlib import asynccontextmanager

import fastapi
from fastapi.middleware import cors

from components.core.config import get_settings
from components.core.init_db import db_manager
from components.core.logging_config import get_logger, setup_logging
from components.category.repository import CategoryRepository
from restapi.errors import register_error_handlers
from restapi.endpoints import (
    auth,
    category,
    challenge,
    expense,
    health_check,
    notification,
    savings,
    user,
)

logger = get_logger(__name__)

APP_TITLE = "Finance Tracker"
APP_DESCRIPTION = "Expenses, savings goals, spending challenges and notifications."


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Create the schema and seed categories on startup, release the pool on shutdown."""
    settings = get_settings()
    logger.info(f"{APP_TITLE} starting, version {app.version}")
    if settings.CREATE_TABLES:
        await db_manager.create_tables()
        async with db_manager.get_db() as session:
            seeded = await CategoryRepository(session).seed_defaults()
            if seeded:
                logger.info(f"Seeded {seeded} default categories")

    yield

    await db_manager.dispose()
    logger.info(f"{APP_TITLE} shutting down")


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    app = fastapi.FastAPI(
        title=APP_TITLE,
        description=APP_DESCRIPTION,
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(health_check.router)
    for module_router in (
        auth.router,
        user.router,
        category.router,
        expense.router,
        savings.router,
        savings.sub_goal_router,
        challenge.router,
        notification.router,
    ):
        app.include_router(module_router, prefix=settings.API_PREFIX)

    logger.info("All routes registered successfully")
    return app

# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from museum_inventory.routers import (
    item_template_router,
    location_router,
    inventory_item_router,
)

from museum_inventory.core.config import (
    APP_ENV,
    APP_NAME,
    APP_VERSION,
    CORS_ORIGINS,
    DATABASE_URL,
)
from museum_inventory.core.db import Database
from museum_inventory.core.logging import setup_logging
from museum_inventory.core.error_handlers import register_exception_handlers
from museum_inventory.middleware.request_logging import request_logging_middleware

# ------------------------------------------------------------------------------
# LOGGING
# ------------------------------------------------------------------------------
setup_logging()
logger = logging.getLogger(__name__)


def create_app(database: Database, create_tables: bool = APP_ENV == "development") -> FastAPI:
    # --------------------------------------------------------------------------
    # LIFESPAN
    # --------------------------------------------------------------------------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Starting application")

        # No migrations: tables are only auto-created in development
        if create_tables:
            await database.create_all()
            logger.info("📦 Database models initialized (development)")
        else:
            logger.info("📦 init_models skipped (%s)", APP_ENV)

        yield

        logger.info("🛑 Shutting down application")
        await database.dispose()

    # --------------------------------------------------------------------------
    # APP INIT
    # --------------------------------------------------------------------------
    app = FastAPI(
        title=APP_NAME,
        description="Templates, locations and numbered inventory items for a museum collection",
        version=APP_VERSION,
        docs_url="/docs" if APP_ENV != "production" else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.database = database

    # --------------------------------------------------------------------------
    # EXCEPTION HANDLERS
    # --------------------------------------------------------------------------
    register_exception_handlers(app)

    # --------------------------------------------------------------------------
    # MIDDLEWARE
    # --------------------------------------------------------------------------
    app.middleware("http")(request_logging_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --------------------------------------------------------------------------
    # HEALTH CHECK
    # --------------------------------------------------------------------------
    @app.get("/", tags=["Health"])
    async def health_check():
        return {
            "status": "ok",
            "service": "museum-inventory-api",
            "environment": APP_ENV,
            "version": APP_VERSION,
        }

    # --------------------------------------------------------------------------
    # ROUTERS
    # --------------------------------------------------------------------------
    app.include_router(item_template_router)
    app.include_router(location_router)
    app.include_router(inventory_item_router)

    return app


app = create_app(Database(DATABASE_URL))

# museum_inventory/core/db.py

import ssl
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from museum_inventory.core.config import (
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_COMMAND_TIMEOUT,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
)
from museum_inventory.utils.logger import get_logger

logger = get_logger(__name__)

# =====================================================
# BASE
# =====================================================
Base = declarative_base()


# =====================================================
# CONNECTION CONFIG
# =====================================================
def _engine_options(database_url: str) -> dict:
    connect_args = {}
    pool_args = {}

    if database_url.startswith("postgresql"):
        ssl_ctx = ssl.create_default_context()

        if not DB_SSL_VERIFY:
            ssl_ctx.check_hostname = False
            ssl_ctx.verify_mode = ssl.CERT_NONE

        connect_args = {
            "ssl": ssl_ctx,
            "command_timeout": DB_COMMAND_TIMEOUT,
            # Disable prepared statements (asyncpg behind pgbouncer)
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
        }

        pool_args = {
            "pool_size": DB_POOL_SIZE,
            "max_overflow": DB_MAX_OVERFLOW,
            "pool_timeout": DB_POOL_TIMEOUT,
            "pool_pre_ping": True,
        }

    elif database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

    return {"connect_args": connect_args, **pool_args}


# =====================================================
# DATABASE HANDLE
# =====================================================
class Database:
    """Engine plus session factory for one store.

    Created once at process start, attached to the application and
    disposed on shutdown. Services never reach for a global session;
    they receive an AsyncSession opened from this handle.
    """

    def __init__(self, database_url: str):
        self.url = database_url
        self.engine = create_async_engine(
            database_url,
            echo=False,
            echo_pool=DB_ECHO_POOL,
            **_engine_options(database_url),
        )
        self.sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        return self.sessionmaker()

    async def create_all(self) -> None:
        # Registers every table on Base.metadata
        import museum_inventory.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured", extra={"url": self.engine.url.render_as_string()})

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")


# =====================================================
# DEPENDENCY
# =====================================================
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session

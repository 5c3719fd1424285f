# storefront/core/db.py
from typing import AsyncGenerator
import ssl

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

from storefront.core.config import DATABASE_URL, DB_TYPE, DB_TIMEOUT_SECONDS

Base = declarative_base()


def _postgres_engine() -> AsyncEngine:
    # Managed Postgres behind PgBouncer: TLS without hostname checks, no prepared statements
    tls = ssl.create_default_context()
    tls.check_hostname = False
    tls.verify_mode = ssl.CERT_NONE
    return create_async_engine(
        DATABASE_URL,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        connect_args={
            "ssl": tls,
            "timeout": DB_TIMEOUT_SECONDS,
            "command_timeout": DB_TIMEOUT_SECONDS,
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
        },
    )


def _sqlite_engine() -> AsyncEngine:
    # aiosqlite connections are bound to the loop that opened them, so none are pooled
    sqlite = create_async_engine(
        DATABASE_URL,
        poolclass=NullPool,
        connect_args={"timeout": DB_TIMEOUT_SECONDS},
    )

    @event.listens_for(sqlite.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return sqlite


engine = _postgres_engine() if DB_TYPE == "postgres" else _sqlite_engine()

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


import storefront.models  # noqa: E402,F401  registers every table on Base.metadata


async def init_models():
    """Create missing tables; there are no migrations."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

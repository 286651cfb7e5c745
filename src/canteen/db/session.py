from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from canteen.config import settings
from canteen.db.base import Base

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

# Async engine. SQLite connections are opened per use so they never outlive an event loop.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    future=True,
    **({"poolclass": NullPool} if _is_sqlite else {}),
)

if _is_sqlite:
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Scope a unit of work: commit when the block exits cleanly, roll back on any error.
    """
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise


async def init_models() -> None:
    """Create missing tables. Production databases are managed by Alembic."""
    import canteen.models  # noqa: F401  registers the mappers on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine
from sqlalchemy.orm import sessionmaker

from app.helpers.getters import isDebugMode, database_url
from app.core.logging import get_logger

logger = get_logger(__name__)


def enable_sqlite_foreign_keys(async_engine: AsyncEngine):
    """SQLite ignores ON DELETE clauses unless foreign keys are switched on per connection."""
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if isDebugMode():
    logger.info("Using EXTERNAL database URL for debug mode")
else:
    logger.info("Using INTERNAL database URL")

engine = create_async_engine(database_url(), future=True, echo=False, pool_pre_ping=True)
enable_sqlite_foreign_keys(engine)
SessionAsync = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables():
    from app.db.base import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

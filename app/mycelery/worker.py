import asyncio

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from app.core.logging import get_logger
from app.db.session import enable_sqlite_foreign_keys
from app.helpers.getters import database_url
from app.mycelery.app import celery_app
from app.services.email import process_queue

logger = get_logger(__name__)


async def _process_email_queue():
    # Each task run gets its own event loop, so connections must not be pooled across runs
    engine = create_async_engine(database_url(), poolclass=NullPool)
    enable_sqlite_foreign_keys(engine)
    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with session_factory() as db:
            return await process_queue(db)
    finally:
        await engine.dispose()


@celery_app.task(name="process_email_queue")
def process_email_queue():
    """Send every due email in the queue"""
    stats = asyncio.run(_process_email_queue())
    logger.info(f"process_email_queue finished: {stats}")
    return stats

import functools
import logging
from typing import AsyncGenerator

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.core.exceptions import StoreError

logger = logging.getLogger(__name__)

STORE_UNAVAILABLE_MESSAGE = "Database connection failed"

engine = None
SessionLocal = None


def _masked_database_url(url: str) -> str:
    if settings.POSTGRES_PASSWORD:
        return url.replace(settings.POSTGRES_PASSWORD, "********")
    return url


if not settings.DATABASE_URL:
    logger.error("DATABASE_URL is empty; set it or the POSTGRES_* variables in .env. Requests will fail with 503.")
else:
    logger.info(f"Configuring database engine for: {_masked_database_url(settings.DATABASE_URL)}")
    try:
        engine = create_async_engine(
            settings.DATABASE_URL,
            pool_pre_ping=True,
        )
        SessionLocal = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Database engine ready.")
    except Exception as e:
        # Requests will get a 503 from get_db instead of the app failing to import
        logger.error(f"Could not create the database engine for {_masked_database_url(settings.DATABASE_URL)}: {e}")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped AsyncSession, closed when the response is sent.
    Raises StoreError (503) when the engine could not be configured.
    """
    if not SessionLocal:
        logger.error("No session factory: the database engine failed to configure at import time.")
        raise StoreError(STORE_UNAVAILABLE_MESSAGE)

    db: AsyncSession = SessionLocal()
    try:
        yield db
    finally:
        await db.close()


def translate_store_errors(func):
    """
    Wrap an async store operation so connection-level failures surface as StoreError.
    Integrity and programming errors pass through untouched.
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (OperationalError, InterfaceError, ConnectionError) as e:
            logger.error(f"Store operation {func.__qualname__} failed: {e}")
            raise StoreError(STORE_UNAVAILABLE_MESSAGE) from e
    return wrapper

"""
One-off setup for a fresh deployment: create every table and the image
storage directories. Production schemas are managed with Alembic
(`alembic upgrade head`); this is the quick path for local development.

    python -m app.db.init_db [--reset]
"""
import argparse
import asyncio
import logging

from app import models  # noqa: F401  (registers every table with Base.metadata)
from app.api.deps import get_image_storage
from app.core.exceptions import StoreError
from app.db import session
from app.db.base_class import Base

logger = logging.getLogger(__name__)


async def init_db(reset: bool = False) -> None:
    if session.engine is None:
        raise StoreError("Database engine is not configured, check DATABASE_URL")

    async with session.engine.begin() as conn:
        if reset:
            logger.warning("Dropping all inventory tables")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")

    storage = get_image_storage()
    storage.ensure_directories()
    logger.info(f"Image storage ready at {storage.root} (transient uploads in {storage.transient_dir})")


if __name__ == "__main__":
    from app.core.logging import setup_logging

    parser = argparse.ArgumentParser(description="Create the inventory database tables.")
    parser.add_argument("--reset", action="store_true", help="drop existing tables first")
    args = parser.parse_args()

    setup_logging()
    try:
        asyncio.run(init_db(reset=args.reset))
    except Exception:
        logger.exception("Database initialization failed")
        raise SystemExit(1)

# backend/app/services/lifecycle.py
import logging
import uuid
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, StoreError
from app.crud.crud_image import ImageStore
from app.db.session import translate_store_errors
from app.services.image_storage import ImageStorage

logger = logging.getLogger(__name__)

# Deletion ordering: the database row goes first, the files second. A failed
# file removal leaves an unreferenced file (logged), never a record that points
# at a missing file. There is no transaction spanning both.


def purge_image_files(storage: ImageStorage, images: Iterable) -> None:
    for image in images:
        for relative_path in (image.image_path, image.thumbnail_path):
            if not storage.delete(relative_path):
                logger.warning(f"Image file {relative_path} of image {image.id} was left on disk")


async def delete_image(
    db: AsyncSession,
    *,
    store: ImageStore,
    storage: ImageStorage,
    parent_id: uuid.UUID,
    image_id: uuid.UUID,
):
    """
    Delete one image record, then its derivative and thumbnail files.
    Returns the deleted record.
    """
    if not await store.parent_exists(db, parent_id):
        raise NotFoundError(f"{store.parent_label} not found")

    image = await store.remove(db, parent_id, image_id)
    if not image:
        raise NotFoundError("Image not found")

    purge_image_files(storage, [image])
    logger.info(f"Deleted image {image_id} of {store.parent_label.lower()} {parent_id}")
    return image


@translate_store_errors
async def _delete_row(db: AsyncSession, db_obj) -> None:
    await db.delete(db_obj) # Cascades to the image rows
    await db.commit()


async def delete_parent(
    db: AsyncSession,
    *,
    store: ImageStore,
    storage: ImageStorage,
    parent_id: uuid.UUID,
):
    """
    Delete a product, category or supplier together with its images.

    Sibling images are read before the parent row is deleted so their files can
    be removed afterwards. If they cannot be read, the parent is deleted anyway
    and the files are orphaned.
    """
    try:
        images = await store.list(db, parent_id)
    except StoreError as e:
        logger.error(f"Could not list images of {store.parent_label.lower()} {parent_id}, files will be orphaned: {e}")
        await db.rollback()
        images = []

    db_parent = await store.get_parent(db, parent_id)
    if not db_parent:
        raise NotFoundError(f"{store.parent_label} not found")

    await _delete_row(db, db_parent)
    purge_image_files(storage, images)
    logger.info(f"Deleted {store.parent_label.lower()} {parent_id} and {len(images)} image(s)")
    return db_parent

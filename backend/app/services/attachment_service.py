# backend/app/services/attachment_service.py
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import NotFoundError, ProcessingError, ValidationError
from app.crud.crud_image import ImageStore
from app.services.image_processor import DerivativeGenerator, DerivativePaths
from app.services.image_storage import ImageStorage, remove_file
from app.services.uploads import UploadedFile, discard_uploads

logger = logging.getLogger(__name__)


@dataclass
class AttachmentResult:
    created: List[Any] = field(default_factory=list) # Image records, in insertion order
    errors: List[Dict[str, str]] = field(default_factory=list) # [{"filename": ..., "message": ...}]


def _discard_derivatives(storage: ImageStorage, paths: DerivativePaths) -> None:
    for relative_path in paths:
        storage.delete(relative_path)


async def _record_image(
    db: AsyncSession, store: ImageStore, storage: ImageStorage, parent_id: uuid.UUID, paths: DerivativePaths
):
    try:
        # Counted per file, not per batch: concurrent uploads may share an order value
        display_order = await store.count(db, parent_id)
        return await store.add(
            db,
            parent_id=parent_id,
            image_path=paths.derivative_path,
            thumbnail_path=paths.thumbnail_path,
            display_order=display_order,
        )
    except IntegrityError as e:
        # The parent row vanished between the existence check and the insert
        _discard_derivatives(storage, paths)
        await db.rollback()
        logger.warning(f"{store.parent_label} {parent_id} was deleted during upload: {e.orig}")
        raise NotFoundError(f"{store.parent_label} not found") from e
    except Exception:
        _discard_derivatives(storage, paths)
        raise


async def attach(
    db: AsyncSession,
    *,
    store: ImageStore,
    processor: DerivativeGenerator,
    parent_id: uuid.UUID,
    parent_exists: bool,
    files: Sequence[UploadedFile],
) -> AttachmentResult:
    """
    Turn transient uploads into image records for one parent.

    Files are processed one at a time and independently: a file that fails to
    decode is reported in `errors` and never leaves a record or a derivative
    behind. Raises ValidationError when nothing was uploaded or nothing
    succeeded, and NotFoundError when the parent does not exist. Every
    transient upload is gone when this returns or raises.
    """
    if not files:
        raise ValidationError("No images provided")

    result = AttachmentResult()
    try:
        if not parent_exists:
            raise NotFoundError(f"{store.parent_label} not found")

        for uploaded in files:
            try:
                paths = await run_in_threadpool(processor.generate, uploaded.temp_path)
            except ProcessingError as e:
                logger.warning(f"Error processing image {uploaded.original_filename}: {e.message}")
                result.errors.append({"filename": uploaded.original_filename, "message": e.message})
                continue
            finally:
                # Freed as soon as it is processed, before the rest of the batch
                remove_file(uploaded.temp_path)

            record = await _record_image(db, store, processor.storage, parent_id, paths)
            result.created.append(record)
    finally:
        # Covers the files a raised error kept the loop from reaching
        discard_uploads(files)

    if not result.created:
        raise ValidationError("Failed to upload images", details=result.errors)

    logger.info(
        f"Attached {len(result.created)} image(s) to {store.parent_label.lower()} {parent_id}"
        f" ({len(result.errors)} failed)"
    )
    return result

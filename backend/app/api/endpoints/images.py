# backend/app/api/endpoints/images.py
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Any, Optional
import uuid

from app import schemas
from app.api import deps
from app.core.exceptions import NotFoundError
from app.crud.crud_image import ImageStore
from app.db.session import get_db
from app.services import attachment_service, lifecycle
from app.services.image_processor import DerivativeGenerator
from app.services.image_storage import ImageStorage
from app.services.uploads import discard_uploads, ingest_uploads


def build_image_router(store: ImageStore) -> APIRouter:
    """
    Image sub-resource routes for one parent type. Mounted under the parent's
    prefix, e.g. /products/{parent_id}/images.
    """
    router = APIRouter()
    label = store.parent_label

    @router.get("/{parent_id}/images", response_model=List[schemas.EntityImage])
    async def list_images(
        parent_id: uuid.UUID,
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        if not await store.parent_exists(db, parent_id):
            raise NotFoundError(f"{label} not found")
        return await store.list(db, parent_id)

    @router.post(
        "/{parent_id}/images",
        response_model=schemas.ImageUploadResponse,
        response_model_exclude_none=True,
        status_code=status.HTTP_201_CREATED,
    )
    async def upload_images(
        parent_id: uuid.UUID,
        images: Optional[List[UploadFile]] = File(None),
        db: AsyncSession = Depends(get_db),
        storage: ImageStorage = Depends(deps.get_image_storage),
        processor: DerivativeGenerator = Depends(deps.get_derivative_generator),
    ) -> Any:
        uploads = await ingest_uploads(images, storage, prefix=label.lower())
        try:
            parent_exists = bool(uploads) and await store.parent_exists(db, parent_id)
            result = await attachment_service.attach(
                db,
                store=store,
                processor=processor,
                parent_id=parent_id,
                parent_exists=parent_exists,
                files=uploads,
            )
        except Exception:
            discard_uploads(uploads)
            raise
        return {
            "message": f"Successfully uploaded {len(result.created)} image(s)",
            "images": result.created,
            "errors": result.errors or None,
        }

    @router.delete("/{parent_id}/images/{image_id}", response_model=schemas.ImageDeleteResponse)
    async def delete_image(
        parent_id: uuid.UUID,
        image_id: uuid.UUID,
        db: AsyncSession = Depends(get_db),
        storage: ImageStorage = Depends(deps.get_image_storage),
    ) -> Any:
        image = await lifecycle.delete_image(
            db, store=store, storage=storage, parent_id=parent_id, image_id=image_id
        )
        return {"message": "Image deleted successfully", "image": image}

    @router.put("/{parent_id}/images/{image_id}/order", response_model=schemas.EntityImage)
    async def update_image_order(
        parent_id: uuid.UUID,
        image_id: uuid.UUID,
        order_in: schemas.ImageOrderUpdate,
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        if not await store.parent_exists(db, parent_id):
            raise NotFoundError(f"{label} not found")
        image = await store.set_order(db, parent_id, image_id, order_in.display_order)
        if not image:
            raise NotFoundError("Image not found")
        return image

    return router

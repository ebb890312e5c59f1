# backend/app/schemas/image.py
from datetime import datetime
from pydantic import BaseModel, Field, computed_field
from typing import List, Optional
import uuid

from app.core.config import settings


def public_url(relative_path: str) -> str:
    """Join a storage-relative path to the public uploads prefix."""
    return f"{settings.PUBLIC_UPLOADS_PREFIX.rstrip('/')}/{relative_path.lstrip('/')}"


class EntityImage(BaseModel): # Response schema for an image attached to a product, category or supplier
    id: uuid.UUID
    parent_id: uuid.UUID
    image_path: str # Relative to the storage root, e.g. resized-product-1712-42.jpg
    thumbnail_path: str # e.g. thumbnails/thumb-product-1712-42.jpg
    display_order: int
    created_at: datetime

    @computed_field
    @property
    def image_url(self) -> str:
        return public_url(self.image_path)

    @computed_field
    @property
    def thumbnail_url(self) -> str:
        return public_url(self.thumbnail_path)

    class Config:
        from_attributes = True

class ImageOrderUpdate(BaseModel):
    display_order: int = Field(..., ge=0)

class UploadError(BaseModel):
    filename: str
    message: str

class ImageUploadResponse(BaseModel):
    message: str
    images: List[EntityImage]
    errors: Optional[List[UploadError]] = None # Only present when some files failed

class ImageDeleteResponse(BaseModel):
    message: str
    image: EntityImage

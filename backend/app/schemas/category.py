from pydantic import BaseModel, constr
from typing import Optional, List
import uuid

from app.schemas.image import EntityImage

class CategoryBase(BaseModel):
    name: constr(min_length=1, max_length=255)
    description: Optional[str] = None

class CategoryCreate(CategoryBase):
    pass

class Category(CategoryBase):
    id: uuid.UUID
    images: List[EntityImage] = []

    class Config:
        from_attributes = True

class CategoryDeleted(BaseModel):
    message: str
    category: Category

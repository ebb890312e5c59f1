# backend/app/schemas/product.py
from pydantic import BaseModel, constr, Field
from typing import Optional, List
import uuid

from app.schemas.image import EntityImage

class ProductBase(BaseModel):
    name: constr(min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=0)
    sku: Optional[constr(max_length=100)] = None
    category_id: Optional[uuid.UUID] = None
    supplier_id: Optional[uuid.UUID] = None

class ProductCreate(ProductBase):
    pass

class Product(ProductBase): # Full Product response schema
    id: uuid.UUID
    images: List[EntityImage] = [] # Ordered by display_order, then created_at

    class Config:
        from_attributes = True

class ProductDeleted(BaseModel):
    message: str
    product: Product

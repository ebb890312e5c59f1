from pydantic import BaseModel, EmailStr, constr
from typing import Optional, List
import uuid

from app.schemas.image import EntityImage

# Shared properties for a supplier
class SupplierBase(BaseModel):
    name: constr(min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None

# Properties to receive on supplier creation
class SupplierCreate(SupplierBase):
    pass

# Properties to return to client
class Supplier(SupplierBase):
    id: uuid.UUID
    images: List[EntityImage] = []

    class Config:
        from_attributes = True

class SupplierDeleted(BaseModel):
    message: str
    supplier: Supplier

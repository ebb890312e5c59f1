# backend/app/api/endpoints/suppliers.py
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Any
import uuid

from app import crud, schemas
from app.api import deps
from app.core.exceptions import NotFoundError
from app.db.session import get_db
from app.services import lifecycle
from app.services.image_storage import ImageStorage

router = APIRouter()

@router.get("/", response_model=List[schemas.Supplier])
async def read_suppliers(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Retrieve suppliers with their ordered images.
    """
    return await crud.supplier.get_suppliers(db, skip=skip, limit=limit)

@router.get("/{supplier_id}", response_model=schemas.Supplier)
async def read_supplier_by_id(
    supplier_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Any:
    supplier = await crud.supplier.get_supplier(db, supplier_id=supplier_id)
    if not supplier:
        raise NotFoundError("Supplier not found")
    return supplier

@router.post("/", response_model=schemas.Supplier, status_code=status.HTTP_201_CREATED)
async def create_new_supplier(
    supplier_in: schemas.SupplierCreate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    return await crud.supplier.create_supplier(db=db, supplier_in=supplier_in)

@router.delete("/{supplier_id}", response_model=schemas.SupplierDeleted)
async def delete_existing_supplier(
    supplier_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(deps.get_image_storage),
) -> Any:
    """
    Delete a supplier, its image records and their files.
    """
    supplier = await lifecycle.delete_parent(
        db, store=crud.supplier_images, storage=storage, parent_id=supplier_id
    )
    return {"message": "Supplier deleted successfully", "supplier": supplier}

# backend/app/api/endpoints/products.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Any
import logging
import uuid

from app import crud, schemas
from app.api import deps
from app.core.exceptions import NotFoundError, ValidationError
from app.db.session import get_db
from app.services import lifecycle
from app.services.image_storage import ImageStorage

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/", response_model=List[schemas.Product])
async def read_products(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> Any:
    return await crud.product.get_products(db, skip=skip, limit=limit)

@router.get("/{product_id}", response_model=schemas.Product)
async def read_product_by_id(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Any:
    product = await crud.product.get_product(db, product_id=product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product

@router.post("/", response_model=schemas.Product, status_code=status.HTTP_201_CREATED)
async def create_new_product(
    product_in: schemas.ProductCreate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    # Unknown references are a bad request, not a SKU clash
    if product_in.category_id and not await crud.category.get_category(db, category_id=product_in.category_id):
        raise ValidationError("Invalid category or supplier ID")
    if product_in.supplier_id and not await crud.supplier.get_supplier(db, supplier_id=product_in.supplier_id):
        raise ValidationError("Invalid category or supplier ID")
    try:
        return await crud.product.create_product(db=db, product_in=product_in)
    except IntegrityError as e:
        await db.rollback()
        logger.info(f"Rejected product '{product_in.name}': {e.orig}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Product with this SKU already exists")

@router.delete("/{product_id}", response_model=schemas.ProductDeleted)
async def delete_existing_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(deps.get_image_storage),
) -> Any:
    product = await lifecycle.delete_parent(
        db, store=crud.product_images, storage=storage, parent_id=product_id
    )
    return {"message": "Product deleted successfully", "product": product}

# backend/app/api/endpoints/categories.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.exc import IntegrityError
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

@router.get("/", response_model=List[schemas.Category])
async def read_categories(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> Any:
    return await crud.category.get_categories(db, skip=skip, limit=limit)

@router.get("/{category_id}", response_model=schemas.Category)
async def read_category_by_id(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Any:
    category = await crud.category.get_category(db, category_id=category_id)
    if not category:
        raise NotFoundError("Category not found")
    return category

@router.post("/", response_model=schemas.Category, status_code=status.HTTP_201_CREATED)
async def create_new_category(
    category_in: schemas.CategoryCreate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    try:
        return await crud.category.create_category(db=db, category_in=category_in)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category with this name already exists")

@router.delete("/{category_id}", response_model=schemas.CategoryDeleted)
async def delete_existing_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(deps.get_image_storage),
) -> Any:
    category = await lifecycle.delete_parent(
        db, store=crud.category_images, storage=storage, parent_id=category_id
    )
    return {"message": "Category deleted successfully", "category": category}

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
import uuid
from typing import List, Optional

from app.db.session import translate_store_errors
from app.models.category import Category as CategoryModel
from app.schemas.category import CategoryCreate

@translate_store_errors
async def get_category(db: AsyncSession, category_id: uuid.UUID) -> Optional[CategoryModel]:
    result = await db.execute(select(CategoryModel).filter(CategoryModel.id == category_id))
    return result.scalars().first()

@translate_store_errors
async def get_categories(db: AsyncSession, *, skip: int = 0, limit: int = 100) -> List[CategoryModel]:
    result = await db.execute(
        select(CategoryModel).order_by(CategoryModel.name).offset(skip).limit(limit)
    )
    return result.scalars().all()

@translate_store_errors
async def create_category(db: AsyncSession, *, category_in: CategoryCreate) -> CategoryModel:
    db_obj = CategoryModel(**category_in.model_dump(exclude_unset=True))
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    await db.refresh(db_obj, attribute_names=['images'])
    return db_obj

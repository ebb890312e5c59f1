from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
import uuid
from typing import List, Optional

from app.db.session import translate_store_errors
from app.models.product import Product as ProductModel
from app.schemas.product import ProductCreate

@translate_store_errors
async def get_product(db: AsyncSession, product_id: uuid.UUID) -> Optional[ProductModel]:
    """
    Get a single product by its ID. Images are loaded with it (selectin).
    """
    result = await db.execute(select(ProductModel).filter(ProductModel.id == product_id))
    return result.scalars().first()

@translate_store_errors
async def get_products(db: AsyncSession, *, skip: int = 0, limit: int = 100) -> List[ProductModel]:
    """
    Get products, newest first.
    """
    result = await db.execute(
        select(ProductModel)
        .order_by(ProductModel.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    return result.scalars().all()

@translate_store_errors
async def create_product(db: AsyncSession, *, product_in: ProductCreate) -> ProductModel:
    db_obj = ProductModel(**product_in.model_dump(exclude_unset=True))
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    # Populate the (empty) images collection so the response can serialize it
    await db.refresh(db_obj, attribute_names=['images'])
    return db_obj

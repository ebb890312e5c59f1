from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
import uuid
from typing import List, Optional

from app.db.session import translate_store_errors
from app.models.supplier import Supplier as SupplierModel
from app.schemas.supplier import SupplierCreate

@translate_store_errors
async def get_supplier(db: AsyncSession, supplier_id: uuid.UUID) -> Optional[SupplierModel]:
    """
    Get a single supplier by its ID.
    """
    result = await db.execute(select(SupplierModel).filter(SupplierModel.id == supplier_id))
    return result.scalars().first()

@translate_store_errors
async def get_suppliers(db: AsyncSession, *, skip: int = 0, limit: int = 100) -> List[SupplierModel]:
    """
    Get suppliers ordered by name with pagination.
    """
    result = await db.execute(
        select(SupplierModel).order_by(SupplierModel.name).offset(skip).limit(limit)
    )
    return result.scalars().all()

@translate_store_errors
async def create_supplier(db: AsyncSession, *, supplier_in: SupplierCreate) -> SupplierModel:
    """
    Create a new supplier.
    """
    db_obj = SupplierModel(**supplier_in.model_dump(exclude_unset=True))
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    await db.refresh(db_obj, attribute_names=['images'])
    return db_obj

# backend/app/crud/crud_image.py
import logging
import uuid
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.db.session import translate_store_errors
from app.models import Category, CategoryImage, Product, ProductImage, Supplier, SupplierImage

logger = logging.getLogger(__name__)


class ImageStore:
    """
    Ordered image records for one parent type (one attachment table per parent type).

    Every operation is scoped to a parent id. The store never touches the
    filesystem: callers use the paths on returned records to delete files.
    """

    def __init__(self, model, parent_model, parent_label: str):
        self.model = model
        self.parent_model = parent_model
        self.parent_label = parent_label # "Product", used in messages and transient file names

    @property
    def parent_column(self):
        return getattr(self.model, self.model.parent_key)

    @translate_store_errors
    async def get_parent(self, db: AsyncSession, parent_id: uuid.UUID):
        return await db.get(self.parent_model, parent_id)

    async def parent_exists(self, db: AsyncSession, parent_id: uuid.UUID) -> bool:
        return await self.get_parent(db, parent_id) is not None

    @translate_store_errors
    async def list(self, db: AsyncSession, parent_id: uuid.UUID) -> List:
        result = await db.execute(
            select(self.model)
            .filter(self.parent_column == parent_id)
            .order_by(self.model.display_order.asc(), self.model.created_at.asc())
        )
        return list(result.scalars().all())

    @translate_store_errors
    async def count(self, db: AsyncSession, parent_id: uuid.UUID) -> int:
        result = await db.execute(
            select(func.count(self.model.id)).filter(self.parent_column == parent_id)
        )
        return result.scalar_one()

    @translate_store_errors
    async def get(self, db: AsyncSession, parent_id: uuid.UUID, image_id: uuid.UUID):
        result = await db.execute(
            select(self.model)
            .filter(self.model.id == image_id)
            .filter(self.parent_column == parent_id)
        )
        return result.scalars().first()

    @translate_store_errors
    async def add(
        self, db: AsyncSession, *, parent_id: uuid.UUID, image_path: str, thumbnail_path: str, display_order: int
    ):
        db_image = self.model(
            image_path=image_path,
            thumbnail_path=thumbnail_path,
            display_order=display_order,
            **{self.model.parent_key: parent_id},
        )
        db.add(db_image)
        await db.commit()
        await db.refresh(db_image)
        logger.info(f"Added {self.model.__name__} {db_image.id} to {self.parent_label.lower()} {parent_id} at order {display_order}")
        return db_image

    @translate_store_errors
    async def remove(self, db: AsyncSession, parent_id: uuid.UUID, image_id: uuid.UUID) -> Optional[object]:
        """
        Delete an image record and return it, or None if it does not belong to this parent.
        """
        db_image = await self.get(db, parent_id, image_id)
        if not db_image:
            return None
        await db.delete(db_image)
        await db.commit()
        return db_image # expire_on_commit=False keeps the paths readable for file cleanup

    @translate_store_errors
    async def set_order(
        self, db: AsyncSession, parent_id: uuid.UUID, image_id: uuid.UUID, display_order: int
    ) -> Optional[object]:
        """
        Overwrite one record's display_order. Siblings are left untouched.
        """
        db_image = await self.get(db, parent_id, image_id)
        if not db_image:
            return None
        db_image.display_order = display_order
        db.add(db_image)
        await db.commit()
        await db.refresh(db_image)
        return db_image


product_images = ImageStore(ProductImage, Product, "Product")
category_images = ImageStore(CategoryImage, Category, "Category")
supplier_images = ImageStore(SupplierImage, Supplier, "Supplier")

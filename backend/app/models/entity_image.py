# backend/app/models/entity_image.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from app.db.base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntityImageMixin:
    """
    Columns shared by every per-parent image table.
    Subclasses declare the owning foreign key and name it in `parent_key`.
    """
    parent_key: str = ""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    image_path = Column(String(1024), nullable=False) # Relative to the storage root (display-sized derivative)
    thumbnail_path = Column(String(1024), nullable=False) # Relative to the storage root
    display_order = Column(Integer, nullable=False, default=0)
    # Set by the application so siblings with equal display_order still sort by insertion
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    @property
    def parent_id(self) -> uuid.UUID:
        return getattr(self, self.parent_key)

    def __repr__(self):
        return f"<{type(self).__name__}(id={self.id}, {self.parent_key}={self.parent_id}, order={self.display_order})>"


class ProductImage(EntityImageMixin, Base):
    __tablename__ = "product_images"
    parent_key = "product_id"

    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    product = relationship("Product", back_populates="images")


class CategoryImage(EntityImageMixin, Base):
    __tablename__ = "category_images"
    parent_key = "category_id"

    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    category = relationship("Category", back_populates="images")


class SupplierImage(EntityImageMixin, Base):
    __tablename__ = "supplier_images"
    parent_key = "supplier_id"

    supplier_id = Column(Uuid(as_uuid=True), ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False, index=True)
    supplier = relationship("Supplier", back_populates="images")

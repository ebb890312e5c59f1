import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, ForeignKey, Float, Integer, DateTime, Uuid
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.models.entity_image import ProductImage

class Product(Base):
    # __tablename__ will be 'products'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    sku = Column(String(100), nullable=True, unique=True)

    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    supplier_id = Column(Uuid(as_uuid=True), ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    category = relationship("Category", back_populates="products")
    supplier = relationship("Supplier", back_populates="products")

    # Deleting a product deletes its image rows; the files are removed by app.services.lifecycle
    images = relationship(
        ProductImage,
        back_populates="product",
        order_by=[ProductImage.display_order, ProductImage.created_at],
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}')>"

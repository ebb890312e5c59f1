# backend/app/models/__init__.py
from .entity_image import ProductImage, CategoryImage, SupplierImage
from .category import Category
from .supplier import Supplier
from .product import Product # References Category and Supplier

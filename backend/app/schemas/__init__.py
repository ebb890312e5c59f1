from .image import EntityImage, ImageOrderUpdate, UploadError, ImageUploadResponse, ImageDeleteResponse
from .category import Category, CategoryCreate, CategoryDeleted
from .supplier import Supplier, SupplierCreate, SupplierDeleted
from .product import Product, ProductCreate, ProductDeleted

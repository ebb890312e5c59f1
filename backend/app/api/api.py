from fastapi import APIRouter

from app import crud
from app.api.endpoints import products
from app.api.endpoints import categories
from app.api.endpoints import suppliers
from app.api.endpoints.images import build_image_router

api_router = APIRouter()

api_router.include_router(products.router, prefix="/products", tags=["Products"])
api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(suppliers.router, prefix="/suppliers", tags=["Suppliers"])

# Image attachments, one table per parent type
api_router.include_router(build_image_router(crud.product_images), prefix="/products", tags=["Product Images"])
api_router.include_router(build_image_router(crud.category_images), prefix="/categories", tags=["Category Images"])
api_router.include_router(build_image_router(crud.supplier_images), prefix="/suppliers", tags=["Supplier Images"])

@api_router.get("/health", tags=["Health"])
async def health_check():
    return {"status": "OK", "message": "Inventory Management API is running"}

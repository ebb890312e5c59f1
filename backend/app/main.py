import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import api_router
from app.api.deps import get_image_storage
from app.core import exceptions
from app.core.config import settings
from app.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

# Storage directories are created once at startup and never change afterwards
get_image_storage().ensure_directories()

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION
)

# Derivatives are served read-only; the API itself only returns relative paths
app.mount(settings.PUBLIC_UPLOADS_PREFIX, StaticFiles(directory=settings.STORAGE_ROOT), name="uploads")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Error handling ---
# Every error raised by the image subsystem is one of these tagged types
ERROR_STATUS_CODES = {
    exceptions.ValidationError: status.HTTP_400_BAD_REQUEST,
    exceptions.NotFoundError: status.HTTP_404_NOT_FOUND,
    exceptions.StoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
    exceptions.ProcessingError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

STORE_GUIDANCE = "Please ensure PostgreSQL is running and the database is set up (see app/db/init_db.py)."


@app.exception_handler(exceptions.InventoryAPIError)
async def inventory_error_handler(request: Request, exc: exceptions.InventoryAPIError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    content = {"error": exc.message}
    if isinstance(exc, exceptions.StoreError):
        logger.error(f"{request.method} {request.url.path} failed, store unavailable: {exc.message}")
        content["message"] = STORE_GUIDANCE
    if exc.details is not None:
        content["details"] = jsonable_encoder(exc.details)
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)
# --- End error handling ---

app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
async def read_root():
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.PROJECT_VERSION,
        "endpoints": {
            "health": f"{settings.API_V1_STR}/health",
            "products": f"{settings.API_V1_STR}/products",
            "categories": f"{settings.API_V1_STR}/categories",
            "suppliers": f"{settings.API_V1_STR}/suppliers",
        },
    }

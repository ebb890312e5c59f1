from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from pathlib import Path
import urllib.parse

BACKEND_DIR = Path(__file__).resolve().parent.parent.parent # This is backend/

class Settings(BaseSettings):
    PROJECT_NAME: str = "Inventory Management API"
    PROJECT_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api"
    SERVER_HOST: str = "http://localhost:5000"
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",  # React dev server
        "http://localhost:5173",  # Vite dev server
    ]

    # Database
    POSTGRES_SERVER: Optional[str] = "localhost"
    POSTGRES_USER: Optional[str] = "inventory_user"
    POSTGRES_PASSWORD: Optional[str] = "inventory_password" # Default, should be overridden by .env
    POSTGRES_DB: Optional[str] = "inventory_db"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = None # Built from the POSTGRES_* values when not given

    # --- Image storage ---
    # Derivatives live under STORAGE_ROOT and are served read-only under PUBLIC_UPLOADS_PREFIX.
    # Raw uploads are parked in TRANSIENT_UPLOAD_DIR until processed, never served.
    STORAGE_ROOT: Path = BACKEND_DIR / "uploads"
    THUMBNAIL_SUBDIR: str = "thumbnails"
    TRANSIENT_UPLOAD_DIR: Path = BACKEND_DIR / "uploads_tmp"
    PUBLIC_UPLOADS_PREFIX: str = "/uploads"

    MAX_UPLOAD_FILES: int = 10
    MAX_UPLOAD_SIZE_BYTES: int = 5 * 1024 * 1024 # 5MB per file
    ALLOWED_IMAGE_EXTENSIONS: List[str] = ["jpeg", "jpg", "png", "gif", "webp"]

    THUMBNAIL_MAX_DIMENSION: int = 300
    THUMBNAIL_QUALITY: int = 85
    DISPLAY_MAX_DIMENSION: int = 800
    DISPLAY_QUALITY: int = 90
    # --- End image storage ---

    model_config = SettingsConfigDict(
        env_file=BACKEND_DIR.parent / ".env",
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=True
    )

settings = Settings()

# Construct DATABASE_URL after settings are loaded, unless one was given explicitly
if not settings.DATABASE_URL:
    if settings.POSTGRES_USER and settings.POSTGRES_PASSWORD and \
       settings.POSTGRES_SERVER and settings.POSTGRES_DB and settings.POSTGRES_PORT:
        encoded_password = urllib.parse.quote_plus(settings.POSTGRES_PASSWORD)
        settings.DATABASE_URL = (
            f"postgresql+asyncpg://{settings.POSTGRES_USER}:{encoded_password}@"
            f"{settings.POSTGRES_SERVER}:{settings.POSTGRES_PORT}/{settings.POSTGRES_DB}"
        )
    else:
        print("Database URL could not be constructed. Check POSTGRES environment variables in .env and config defaults.")

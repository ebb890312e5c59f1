from functools import lru_cache

from fastapi import Depends

from app.core.config import settings
from app.services.image_processor import DerivativeGenerator
from app.services.image_storage import ImageStorage


@lru_cache
def get_image_storage() -> ImageStorage:
    """
    Dependency returning the process-wide storage layout.
    Built once from settings; tests override it with a temporary directory.
    """
    return ImageStorage(
        root=settings.STORAGE_ROOT,
        thumbnail_subdir=settings.THUMBNAIL_SUBDIR,
        transient_dir=settings.TRANSIENT_UPLOAD_DIR,
    )


def get_derivative_generator(
    storage: ImageStorage = Depends(get_image_storage),
) -> DerivativeGenerator:
    return DerivativeGenerator(
        storage,
        thumbnail_size=settings.THUMBNAIL_MAX_DIMENSION,
        thumbnail_quality=settings.THUMBNAIL_QUALITY,
        display_size=settings.DISPLAY_MAX_DIMENSION,
        display_quality=settings.DISPLAY_QUALITY,
    )

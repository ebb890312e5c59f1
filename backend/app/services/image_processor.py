# backend/app/services/image_processor.py
import logging
from pathlib import Path
from typing import NamedTuple, Optional, Union

from PIL import Image, UnidentifiedImageError

from app.core.exceptions import ProcessingError
from app.services.image_storage import ImageStorage, remove_file

logger = logging.getLogger(__name__)


class DerivativePaths(NamedTuple):
    thumbnail_path: str # Relative to the storage root
    derivative_path: str


class DerivativeGenerator:
    """Resize an uploaded image into a thumbnail and a display-sized JPEG using Pillow"""

    def __init__(
        self,
        storage: ImageStorage,
        thumbnail_size: int = 300,
        thumbnail_quality: int = 85,
        display_size: int = 800,
        display_quality: int = 90,
    ):
        self.storage = storage
        self.thumbnail_size = thumbnail_size
        self.thumbnail_quality = thumbnail_quality
        self.display_size = display_size
        self.display_quality = display_quality

    def generate(self, source_path: Union[str, Path], output_dir: Optional[Union[str, Path]] = None) -> DerivativePaths:
        """
        Write `thumbnails/thumb-<stem>.jpg` and `resized-<stem>.jpg` under output_dir
        (the storage root by default) and return their storage-relative paths.

        The source file is left in place. Raises ProcessingError if the source
        cannot be decoded or either output cannot be written; nothing written
        by this call survives a failure.
        """
        source_path = Path(source_path)
        output_dir = Path(output_dir) if output_dir else self.storage.root
        stem = source_path.stem
        thumbnail_file = output_dir / self.storage.thumbnail_subdir / f"thumb-{stem}.jpg"
        derivative_file = output_dir / f"resized-{stem}.jpg"
        try:
            paths = DerivativePaths(
                thumbnail_path=self.storage.relative(thumbnail_file),
                derivative_path=self.storage.relative(derivative_file),
            )
        except ValueError as e:
            raise ProcessingError(f"Output directory {output_dir} is outside the storage root") from e

        try:
            with Image.open(source_path) as source:
                source.load()
                self._write_derivative(source, thumbnail_file, self.thumbnail_size, self.thumbnail_quality)
                self._write_derivative(source, derivative_file, self.display_size, self.display_quality)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            logger.error(f"Error processing image {source_path.name}: {e}")
            for path in (thumbnail_file, derivative_file):
                remove_file(path)
            raise ProcessingError("Failed to process image") from e

        logger.info(f"Generated derivatives for {source_path.name}: {thumbnail_file.name}, {derivative_file.name}")
        return paths

    @staticmethod
    def _write_derivative(source: Image.Image, target: Path, max_dimension: int, quality: int) -> None:
        # thumbnail() keeps the aspect ratio and never enlarges
        resized = source.copy()
        resized.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)
        if resized.mode not in ("RGB", "L"):
            resized = resized.convert("RGB")
        target.parent.mkdir(parents=True, exist_ok=True)
        resized.save(target, format="JPEG", quality=quality, optimize=True)

# backend/app/services/image_storage.py
import logging
from pathlib import Path
from typing import Union

from app.schemas.image import public_url

logger = logging.getLogger(__name__)


class ImageStorage:
    """Local filesystem layout for image derivatives and transient uploads.

    Built once at process start from settings and shared read-only by every
    request. Paths persisted in the database are relative to `root`.
    """

    def __init__(self, root: Union[str, Path], thumbnail_subdir: str, transient_dir: Union[str, Path]):
        self.root = Path(root)
        self.thumbnail_subdir = thumbnail_subdir
        self.transient_dir = Path(transient_dir)

    @property
    def thumbnail_dir(self) -> Path:
        return self.root / self.thumbnail_subdir

    def ensure_directories(self) -> None:
        for directory in (self.root, self.thumbnail_dir, self.transient_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def resolve(self, relative_path: str) -> Path:
        return self.root / relative_path

    def relative(self, path: Path) -> str:
        return Path(path).relative_to(self.root).as_posix()

    def get_url(self, relative_path: str) -> str:
        if not relative_path:
            return ""
        return public_url(relative_path)

    def delete(self, relative_path: str) -> bool:
        """
        Remove a stored file. A missing file is not an error; other failures are
        logged and reported as False, never raised.
        """
        if not relative_path:
            return False
        return remove_file(self.resolve(relative_path))


def remove_file(path: Union[str, Path]) -> bool:
    try:
        Path(path).unlink(missing_ok=True)
        return True
    except OSError as e:
        logger.warning(f"Could not delete file {path}: {e}")
        return False

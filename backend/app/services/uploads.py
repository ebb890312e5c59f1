# backend/app/services/uploads.py
import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.services.image_storage import ImageStorage, remove_file

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}


@dataclass
class UploadedFile:
    """A raw upload parked on disk until the attachment workflow consumes it."""
    original_filename: str
    mime_type: str
    temp_path: Path
    size_bytes: int


def is_allowed_image(filename: Optional[str], content_type: Optional[str]) -> bool:
    extension = Path(filename or "").suffix.lower().lstrip(".")
    return (
        extension in settings.ALLOWED_IMAGE_EXTENSIONS
        and (content_type or "").lower() in ALLOWED_MIME_TYPES
    )


def transient_filename(prefix: str, original_filename: str) -> str:
    # <prefix>-<epoch ms>-<random>.<ext>, unique enough to key derivative names too
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}"
    return f"{prefix}-{unique_suffix}{Path(original_filename).suffix.lower()}"


def discard_uploads(files: Sequence[UploadedFile]) -> None:
    for uploaded in files:
        remove_file(uploaded.temp_path)


def _save_to_transient(upload: UploadFile, destination: Path, max_size: int) -> int:
    size = 0
    with open(destination, "wb") as file_object:
        while True:
            chunk = upload.file.read(CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > max_size:
                break
            file_object.write(chunk)
    return size


async def ingest_uploads(
    files: Optional[List[UploadFile]],
    storage: ImageStorage,
    *,
    prefix: str,
    max_files: Optional[int] = None,
    max_size: Optional[int] = None,
) -> List[UploadedFile]:
    """
    Filter and spool multipart image uploads into the transient directory.

    Rejects the whole request with ValidationError on a disallowed type, an
    oversize file, or too many files; transient files already written for the
    request are deleted first.
    """
    max_files = max_files or settings.MAX_UPLOAD_FILES
    max_size = max_size or settings.MAX_UPLOAD_SIZE_BYTES
    files = [f for f in (files or []) if f.filename]

    if len(files) > max_files:
        raise ValidationError(f"Too many files: at most {max_files} images per request")
    for upload in files:
        if not is_allowed_image(upload.filename, upload.content_type):
            logger.info(f"Rejected upload {upload.filename} ({upload.content_type})")
            raise ValidationError("Only image files are allowed (jpeg, jpg, png, gif, webp)")

    storage.transient_dir.mkdir(parents=True, exist_ok=True)
    ingested: List[UploadedFile] = []
    try:
        for upload in files:
            temp_path = storage.transient_dir / transient_filename(prefix, upload.filename)
            # Register before writing so a failed write is still cleaned up
            uploaded = UploadedFile(
                original_filename=upload.filename,
                mime_type=upload.content_type,
                temp_path=temp_path,
                size_bytes=0,
            )
            ingested.append(uploaded)
            try:
                uploaded.size_bytes = await run_in_threadpool(_save_to_transient, upload, temp_path, max_size)
            finally:
                upload.file.close()
            if uploaded.size_bytes > max_size:
                raise ValidationError(
                    f"File {upload.filename} is too large: at most {max_size // (1024 * 1024)}MB per image"
                )
    except Exception:
        discard_uploads(ingested)
        raise

    logger.info(f"Accepted {len(ingested)} upload(s) into {storage.transient_dir}")
    return ingested

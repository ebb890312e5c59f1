# backend/tests/conftest.py
"""
Pytest configuration and shared fixtures for the inventory API tests.

The app is imported after pointing its settings at a throwaway directory; each
test then gets its own SQLite database and storage root, injected through
FastAPI dependency overrides.
"""

import io
import os
import tempfile
from pathlib import Path

import pytest
from PIL import Image

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="inventory-api-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'app.db'}"
os.environ["STORAGE_ROOT"] = str(_TEST_ROOT / "uploads")
os.environ["TRANSIENT_UPLOAD_DIR"] = str(_TEST_ROOT / "uploads_tmp")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from app import models  # noqa: E402, F401
from app.api import deps  # noqa: E402
from app.db.base_class import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.services.image_processor import DerivativeGenerator  # noqa: E402
from app.services.image_storage import ImageStorage  # noqa: E402
from app.services.uploads import UploadedFile  # noqa: E402


def make_image_bytes(size=(1200, 900), fmt="PNG", mode="RGB", color=(180, 40, 40)) -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, color if mode != "P" else 1).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def image_bytes():
    """Factory producing encoded image bytes."""
    return make_image_bytes


@pytest.fixture
def database_path(tmp_path):
    path = tmp_path / "test.db"
    # Tables are created with a plain sync engine; the app talks to the same file through aiosqlite
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return path


def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite only honours ON DELETE CASCADE / SET NULL with this pragma
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def session_factory(database_path):
    # NullPool: no connection outlives the event loop that opened it
    engine = create_async_engine(f"sqlite+aiosqlite:///{database_path}", poolclass=NullPool)
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    return async_sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


@pytest.fixture
def image_storage(tmp_path):
    storage = ImageStorage(
        root=tmp_path / "uploads",
        thumbnail_subdir="thumbnails",
        transient_dir=tmp_path / "uploads_tmp",
    )
    storage.ensure_directories()
    return storage


@pytest.fixture
def processor(image_storage):
    return DerivativeGenerator(image_storage)


@pytest.fixture
def make_upload(image_storage, image_bytes):
    """Factory writing a transient upload the way ingestion would."""
    counter = {"n": 0}

    def _make(original_filename="photo.png", data=None, mime_type="image/png"):
        counter["n"] += 1
        data = image_bytes() if data is None else data
        temp_path = image_storage.transient_dir / f"product-1700000000000-{counter['n']}{Path(original_filename).suffix}"
        temp_path.write_bytes(data)
        return UploadedFile(
            original_filename=original_filename,
            mime_type=mime_type,
            temp_path=temp_path,
            size_bytes=len(data),
        )

    return _make


@pytest.fixture
def client(session_factory, image_storage):
    """TestClient wired to the per-test database and storage root."""

    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_image_storage] = lambda: image_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def stored_files(storage: ImageStorage):
    """Every file under the storage root, as storage-relative paths."""
    return sorted(p.relative_to(storage.root).as_posix() for p in storage.root.rglob("*") if p.is_file())


def transient_files(storage: ImageStorage):
    return sorted(p.name for p in storage.transient_dir.iterdir())


@pytest.fixture
def list_stored_files():
    return stored_files


@pytest.fixture
def list_transient_files():
    return transient_files

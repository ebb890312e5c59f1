"""
Tests for the attachment workflow: per-file independence, ordering of new
images after existing ones, and cleanup of transient and derivative files.
"""

import uuid

import pytest

from app import crud
from app.core.exceptions import NotFoundError, StoreError, ValidationError
from app.crud.crud_image import ImageStore
from app.models import Product, ProductImage
from app.services.attachment_service import attach


class UnavailableStore(ImageStore):
    """Product image store whose writes fail as if the database went away."""

    async def add(self, db, **kwargs):
        raise StoreError("Database connection failed")


async def create_product(db):
    product = Product(name="Lamp", price=25.0, quantity=1)
    db.add(product)
    await db.commit()
    return product


@pytest.mark.unit
@pytest.mark.asyncio
async def test_partial_batch_keeps_good_files(session_factory, processor, make_upload, list_transient_files, list_stored_files):
    image_storage = processor.storage
    files = [
        make_upload("one.png"),
        make_upload("broken.jpg", data=b"not an image", mime_type="image/jpeg"),
        make_upload("two.png"),
    ]

    async with session_factory() as db:
        product = await create_product(db)
        result = await attach(
            db,
            store=crud.product_images,
            processor=processor,
            parent_id=product.id,
            parent_exists=True,
            files=files,
        )
        records = await crud.product_images.list(db, product.id)

    assert len(result.created) == 2
    assert result.errors == [{"filename": "broken.jpg", "message": "Failed to process image"}]
    assert len(records) == 2
    assert list_transient_files(image_storage) == []
    # One derivative and one thumbnail per successful file, nothing for the broken one
    stored = list_stored_files(image_storage)
    assert len(stored) == 4
    for record in records:
        assert record.image_path in stored
        assert record.thumbnail_path in stored


@pytest.mark.unit
@pytest.mark.asyncio
async def test_all_files_failing_raises_with_details(session_factory, processor, make_upload, list_transient_files):
    files = [
        make_upload("a.jpg", data=b"junk", mime_type="image/jpeg"),
        make_upload("b.jpg", data=b"more junk", mime_type="image/jpeg"),
    ]

    async with session_factory() as db:
        product = await create_product(db)
        with pytest.raises(ValidationError) as exc_info:
            await attach(
                db,
                store=crud.product_images,
                processor=processor,
                parent_id=product.id,
                parent_exists=True,
                files=files,
            )
        count = await crud.product_images.count(db, product.id)

    assert exc_info.value.message == "Failed to upload images"
    assert [d["filename"] for d in exc_info.value.details] == ["a.jpg", "b.jpg"]
    assert count == 0
    assert list_transient_files(processor.storage) == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_parent_discards_uploads(session_factory, processor, make_upload, list_transient_files, list_stored_files):
    files = [make_upload("a.png"), make_upload("b.png")]

    async with session_factory() as db:
        with pytest.raises(NotFoundError) as exc_info:
            await attach(
                db,
                store=crud.product_images,
                processor=processor,
                parent_id=uuid.uuid4(),
                parent_exists=False,
                files=files,
            )

    assert exc_info.value.message == "Product not found"
    assert list_transient_files(processor.storage) == []
    assert list_stored_files(processor.storage) == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_no_files_is_a_validation_error(session_factory, processor):
    async with session_factory() as db:
        with pytest.raises(ValidationError) as exc_info:
            await attach(
                db,
                store=crud.product_images,
                processor=processor,
                parent_id=uuid.uuid4(),
                parent_exists=True,
                files=[],
            )

    assert exc_info.value.message == "No images provided"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_new_images_are_appended_after_existing(session_factory, processor, make_upload):
    async with session_factory() as db:
        product = await create_product(db)
        first = await attach(
            db,
            store=crud.product_images,
            processor=processor,
            parent_id=product.id,
            parent_exists=True,
            files=[make_upload("a.png"), make_upload("b.png")],
        )
        second = await attach(
            db,
            store=crud.product_images,
            processor=processor,
            parent_id=product.id,
            parent_exists=True,
            files=[make_upload("c.png")],
        )
        orders = [img.display_order for img in await crud.product_images.list(db, product.id)]

    assert [img.display_order for img in first.created] == [0, 1]
    assert [img.display_order for img in second.created] == [2]
    assert orders == [0, 1, 2]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_store_failure_removes_derivatives(session_factory, processor, make_upload, list_transient_files, list_stored_files):
    store = UnavailableStore(ProductImage, Product, "Product")

    async with session_factory() as db:
        product = await create_product(db)
        with pytest.raises(StoreError):
            await attach(
                db,
                store=store,
                processor=processor,
                parent_id=product.id,
                parent_exists=True,
                files=[make_upload("a.png")],
            )

    assert list_stored_files(processor.storage) == []
    assert list_transient_files(processor.storage) == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_store_failure_discards_whole_batch(session_factory, processor, make_upload, list_transient_files, list_stored_files):
    store = UnavailableStore(ProductImage, Product, "Product")
    files = [make_upload("a.png"), make_upload("b.png"), make_upload("c.png")]

    async with session_factory() as db:
        product = await create_product(db)
        with pytest.raises(StoreError):
            await attach(
                db,
                store=store,
                processor=processor,
                parent_id=product.id,
                parent_exists=True,
                files=files,
            )

    assert list_transient_files(processor.storage) == []
    assert list_stored_files(processor.storage) == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_parent_deleted_before_insert(session_factory, processor, make_upload, list_transient_files, list_stored_files):
    # The existence check passed, but the row is gone by the time the image is inserted
    files = [make_upload("a.png"), make_upload("b.png"), make_upload("c.png")]

    async with session_factory() as db:
        with pytest.raises(NotFoundError) as exc_info:
            await attach(
                db,
                store=crud.product_images,
                processor=processor,
                parent_id=uuid.uuid4(),
                parent_exists=True,
                files=files,
            )

    assert exc_info.value.message == "Product not found"
    assert list_transient_files(processor.storage) == []
    assert list_stored_files(processor.storage) == []

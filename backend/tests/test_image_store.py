"""
Unit tests for the per-parent image store against a throwaway SQLite database.
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app import crud
from app.core.exceptions import StoreError
from app.models import Category, Product


async def create_product(db, name="Widget", sku=None):
    product = Product(name=name, price=9.99, quantity=3, sku=sku)
    db.add(product)
    await db.commit()
    return product


async def add_image(db, store, parent_id, order, name):
    return await store.add(
        db,
        parent_id=parent_id,
        image_path=f"resized-{name}.jpg",
        thumbnail_path=f"thumbnails/thumb-{name}.jpg",
        display_order=order,
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_list_orders_by_display_order(session_factory):
    async with session_factory() as db:
        product = await create_product(db)
        for order, name in [(2, "c"), (0, "a"), (1, "b")]:
            await add_image(db, crud.product_images, product.id, order, name)

        images = await crud.product_images.list(db, product.id)

    assert [img.display_order for img in images] == [0, 1, 2]
    assert [img.image_path for img in images] == ["resized-a.jpg", "resized-b.jpg", "resized-c.jpg"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_equal_orders_fall_back_to_insertion(session_factory):
    async with session_factory() as db:
        product = await create_product(db)
        for name in ["first", "second", "third"]:
            await add_image(db, crud.product_images, product.id, 0, name)

        images = await crud.product_images.list(db, product.id)

    assert [img.image_path for img in images] == ["resized-first.jpg", "resized-second.jpg", "resized-third.jpg"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_set_order_changes_only_target(session_factory):
    async with session_factory() as db:
        product = await create_product(db)
        first = await add_image(db, crud.product_images, product.id, 0, "a")
        second = await add_image(db, crud.product_images, product.id, 1, "b")

        updated = await crud.product_images.set_order(db, product.id, first.id, 5)
        images = await crud.product_images.list(db, product.id)

    assert updated.display_order == 5
    assert [(img.id, img.display_order) for img in images] == [(second.id, 1), (first.id, 5)]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_remove_returns_record_once(session_factory):
    async with session_factory() as db:
        product = await create_product(db)
        image = await add_image(db, crud.product_images, product.id, 0, "a")

        removed = await crud.product_images.remove(db, product.id, image.id)
        removed_again = await crud.product_images.remove(db, product.id, image.id)
        remaining = await crud.product_images.count(db, product.id)

    assert removed.image_path == "resized-a.jpg"
    assert removed.thumbnail_path == "thumbnails/thumb-a.jpg"
    assert removed_again is None
    assert remaining == 0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_operations_are_scoped_to_parent(session_factory):
    async with session_factory() as db:
        owner = await create_product(db, name="Owner", sku="OWN-1")
        other = await create_product(db, name="Other", sku="OTH-1")
        image = await add_image(db, crud.product_images, owner.id, 0, "a")

        assert await crud.product_images.get(db, other.id, image.id) is None
        assert await crud.product_images.set_order(db, other.id, image.id, 3) is None
        assert await crud.product_images.remove(db, other.id, image.id) is None
        assert await crud.product_images.list(db, other.id) == []
        assert await crud.product_images.count(db, owner.id) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_parent_types_use_separate_tables(session_factory):
    async with session_factory() as db:
        category = Category(name="Tools")
        db.add(category)
        await db.commit()
        image = await add_image(db, crud.category_images, category.id, 0, "tools")

        assert image.parent_id == category.id
        assert await crud.category_images.count(db, category.id) == 1
        assert await crud.product_images.count(db, category.id) == 0
        assert await crud.supplier_images.parent_exists(db, category.id) is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_parent_exists(session_factory):
    async with session_factory() as db:
        product = await create_product(db)

        assert await crud.product_images.parent_exists(db, product.id) is True
        assert await crud.product_images.parent_exists(db, uuid.uuid4()) is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unreachable_database_raises_store_error(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'missing-dir' / 'app.db'}", poolclass=NullPool
    )
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as db:
        with pytest.raises(StoreError):
            await crud.product_images.list(db, uuid.uuid4())
        with pytest.raises(StoreError):
            await crud.product_images.parent_exists(db, uuid.uuid4())

    await engine.dispose()

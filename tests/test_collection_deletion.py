import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from store_service.db.repositories import WishlistCollectionRepository, WishlistItemRepository
from store_service.errors import NotAuthorizedError, NotFoundError, TransientStoreError
from store_service.services import WishlistService


@pytest.fixture
def service():
    return WishlistService()


@pytest_asyncio.fixture
async def collection_with_items(seed):
    owner = await seed.user("owner@example.com")
    seller = await seed.user("seller@example.com", first_name="Sam")
    category = await seed.category()
    products = [await seed.product(seller, category, name=f"Thing {n}") for n in range(3)]
    collection = await seed.collection(owner, name="Birthday")
    keep = await seed.collection(owner, name="Later")
    items = [await seed.wishlist_item(owner, product, collection) for product in products]
    kept_item = await seed.wishlist_item(owner, products[0], keep)
    return owner, seller, collection, items, keep, kept_item


async def test_owner_deletes_collection_and_its_items(service, db, collection_with_items, fetch, count):
    owner, _, collection, items, keep, kept_item = collection_with_items

    await service.delete_collection(db, owner.id, collection.id)

    assert await fetch(WishlistCollectionRepository(), collection.id) is None
    assert await count(WishlistItemRepository(), group_id=collection.id) == 0
    assert await fetch(WishlistCollectionRepository(), keep.id) is not None
    assert await fetch(WishlistItemRepository(), kept_item.id) is not None


async def test_other_user_cannot_delete_collection(service, db, collection_with_items, fetch, count):
    _, seller, collection, items, _, _ = collection_with_items

    with pytest.raises(NotAuthorizedError):
        await service.delete_collection(db, seller.id, collection.id)

    assert await fetch(WishlistCollectionRepository(), collection.id) is not None
    assert await count(WishlistItemRepository(), group_id=collection.id) == len(items)


async def test_missing_collection_is_not_found(service, db, seed):
    caller = await seed.user()
    with pytest.raises(NotFoundError) as excinfo:
        await service.delete_collection(db, caller.id, 404)
    assert excinfo.value.code == "collection.not_found"


async def test_failure_after_items_removed_restores_them(service, db, collection_with_items, count, fetch, monkeypatch):
    owner, _, collection, items, _, _ = collection_with_items

    async def failing_delete(session, object_id):
        raise OperationalError("DELETE FROM wishlist_collections", {}, Exception("locked"))

    monkeypatch.setattr(service.collections, "delete_by_id", failing_delete)

    with pytest.raises(TransientStoreError):
        await service.delete_collection(db, owner.id, collection.id)

    assert await fetch(WishlistCollectionRepository(), collection.id) is not None
    assert await count(WishlistItemRepository(), group_id=collection.id) == len(items)


async def test_private_collection_items_are_hidden_from_others(service, db, seed, collection_with_items):
    owner, seller, _, _, _, _ = collection_with_items
    secret = await seed.collection(owner, name="Secret", privated=True)

    assert await service.list_collection_items(db, secret.id, owner.id) == []
    with pytest.raises(NotAuthorizedError):
        await service.list_collection_items(db, secret.id, seller.id)
    with pytest.raises(NotAuthorizedError):
        await service.list_collection_items(db, secret.id)

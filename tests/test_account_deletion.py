from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from store_service.db.repositories import (
    CartItemRepository,
    ProductRepository,
    ReviewRepository,
    TransactionRepository,
    UserRepository,
    WishlistCollectionRepository,
    WishlistItemRepository,
)
from store_service.errors import NotAuthorizedError, NotFoundError, TransientStoreError
from store_service.services import TransactionService, UserService


@pytest.fixture
def service(hasher, tokens):
    return UserService(hasher, tokens)


@pytest_asyncio.fixture
async def owner_graph(seed):
    """A user with 2 products, 1 review and 1 collection holding 3 items."""
    user = await seed.user("leaving@example.com", funds="50")
    other = await seed.user("other@example.com", funds="50", first_name="Otto")
    category = await seed.category()
    own_products = [
        await seed.product(user, category, name="Lamp"),
        await seed.product(user, category, name="Desk"),
    ]
    other_products = [
        await seed.product(other, category, name=f"Item {n}") for n in range(3)
    ]
    review = await seed.review(user, other_products[0])
    collection = await seed.collection(user)
    items = [await seed.wishlist_item(user, product, collection) for product in other_products]
    return user, other, own_products, other_products, review, collection, items


async def test_delete_account_removes_every_dependent(service, db, owner_graph, fetch, count):
    user, other, own_products, _, review, collection, items = owner_graph

    await service.delete_account(db, user.id, user.id)

    assert await fetch(UserRepository(), user.id) is None
    for product in own_products:
        assert await fetch(ProductRepository(), product.id) is None
    assert await fetch(ReviewRepository(), review.id) is None
    assert await fetch(WishlistCollectionRepository(), collection.id) is None
    for item in items:
        assert await fetch(WishlistItemRepository(), item.id) is None
    assert await fetch(UserRepository(), other.id) is not None
    assert await count(ProductRepository(), owner_id=other.id) == 3


async def test_delete_account_clears_references_from_other_users(service, db, seed, owner_graph, fetch, count):
    user, other, own_products, other_products, _, _, _ = owner_graph
    # Other users hold the leaving user's products in carts, wishlists and reviews
    cart_line = await seed.cart_item(other, own_products[0])
    bought = await seed.cart_item(user, other_products[1])
    other_collection = await seed.collection(other, name="Wants")
    wished = await seed.wishlist_item(other, own_products[1], other_collection)
    review_about_user = await seed.review(other, own_products[0], score=1)

    await service.delete_account(db, user.id, user.id)

    assert await fetch(CartItemRepository(), cart_line.id) is None
    assert await fetch(CartItemRepository(), bought.id) is None
    assert await fetch(WishlistItemRepository(), wished.id) is None
    assert await fetch(ReviewRepository(), review_about_user.id) is None
    assert await fetch(WishlistCollectionRepository(), other_collection.id) is not None
    assert await count(ReviewRepository(), author_id=other.id) == 0


async def test_transactions_survive_account_deletion(service, db, seed, owner_graph, fetch, count):
    user, _, _, other_products, _, _, _ = owner_graph
    await seed.cart_item(user, other_products[2])
    transaction = await TransactionService().checkout(db, user.id, "Boleto")

    await service.delete_account(db, user.id, user.id)

    assert await fetch(TransactionRepository(), transaction.id) is not None
    assert await count(TransactionRepository(), buyer_id=user.id) == 1


async def test_delete_account_of_someone_else_is_refused(service, db, owner_graph, fetch):
    user, other, own_products, *_ = owner_graph

    with pytest.raises(NotAuthorizedError):
        await service.delete_account(db, other.id, user.id)

    assert await fetch(UserRepository(), user.id) is not None
    assert await fetch(ProductRepository(), own_products[0].id) is not None


async def test_delete_missing_account_fails_before_authorization(service, db, seed):
    caller = await seed.user()
    with pytest.raises(NotFoundError) as excinfo:
        await service.delete_account(db, caller.id, 12345)
    assert excinfo.value.code == "user.not_found"


async def test_failure_while_deleting_products_keeps_everything(service, db, owner_graph, fetch, count, monkeypatch):
    user, _, own_products, _, review, collection, items = owner_graph

    async def failing_delete_many(session, *criteria, **filters):
        raise OperationalError("DELETE FROM products", {}, Exception("constraint failed"))

    monkeypatch.setattr(service.products, "delete_many", failing_delete_many)

    with pytest.raises(TransientStoreError):
        await service.delete_account(db, user.id, user.id)

    stored = await fetch(UserRepository(), user.id)
    assert stored is not None
    assert stored.funds == Decimal("50.00")
    assert await count(ProductRepository(), owner_id=user.id) == len(own_products)
    assert await fetch(ReviewRepository(), review.id) is not None
    assert await fetch(WishlistCollectionRepository(), collection.id) is not None
    assert await count(WishlistItemRepository(), group_id=collection.id) == len(items)

"""
Two requests can both pass a "does it already exist" check before either
commits. The unique constraints settle the race and the loser gets the
same ConflictError the pre-check would have raised.
"""
import pytest
from sqlalchemy.exc import IntegrityError

from store_service.db.repositories import (
    CartItemRepository,
    UserRepository,
    WishlistCollectionRepository,
)
from store_service.errors import ConflictError
from store_service.services import CartService, UserService, WishlistService


async def test_register_race_on_the_same_email(db, seed, count, hasher, tokens, monkeypatch):
    service = UserService(hasher, tokens)
    real_get_by_email = service.users.get_by_email

    async def get_by_email_then_rival_registers(session, email):
        found = await real_get_by_email(session, email)
        await seed.user(email, first_name="Rui")
        return found

    monkeypatch.setattr(service.users, "get_by_email", get_by_email_then_rival_registers)

    with pytest.raises(ConflictError) as excinfo:
        await service.register(db, "new@example.com", "password123", "Ana")

    assert excinfo.value.code == "user.email_taken"
    assert excinfo.value.message == "An account was already created with this email."
    assert isinstance(excinfo.value.__cause__, IntegrityError)
    assert await count(UserRepository(), email="new@example.com") == 1


async def test_cart_add_race_on_the_same_product(db, seed, count, monkeypatch):
    buyer = await seed.user("buyer@example.com", funds="100")
    seller = await seed.user("seller@example.com", first_name="Sam")
    product = await seed.product(seller, await seed.category())
    service = CartService()

    async def lookup_while_another_tab_adds(session, user_id, product_id):
        await seed.cart_item(buyer, product)
        return None

    monkeypatch.setattr(service.cart_items, "get_by_user_and_product", lookup_while_another_tab_adds)

    with pytest.raises(ConflictError) as excinfo:
        await service.add_item(db, buyer.id, product.id, 2)

    assert excinfo.value.code == "cart.duplicate"
    assert await count(CartItemRepository(), user_id=buyer.id) == 1


async def test_collection_create_race_on_the_same_name(db, seed, count, monkeypatch):
    owner = await seed.user("owner@example.com")
    service = WishlistService()

    async def lookup_while_another_tab_creates(session, user_id, name):
        await seed.collection(owner, name=name)
        return None

    monkeypatch.setattr(service.collections, "get_by_name_from_user", lookup_while_another_tab_creates)

    with pytest.raises(ConflictError) as excinfo:
        await service.create_collection(db, owner.id, "Gifts", False)

    assert excinfo.value.code == "collection.duplicate_name"
    assert await count(WishlistCollectionRepository(), user_id=owner.id) == 1


async def test_session_is_usable_after_a_lost_race(db, seed, monkeypatch):
    buyer = await seed.user("buyer@example.com")
    seller = await seed.user("seller@example.com", first_name="Sam")
    product = await seed.product(seller, await seed.category())
    service = CartService()
    real_lookup = service.cart_items.get_by_user_and_product

    async def lookup_while_another_tab_adds(session, user_id, product_id):
        await seed.cart_item(buyer, product)
        return None

    monkeypatch.setattr(service.cart_items, "get_by_user_and_product", lookup_while_another_tab_adds)
    with pytest.raises(ConflictError):
        await service.add_item(db, buyer.id, product.id)

    monkeypatch.setattr(service.cart_items, "get_by_user_and_product", real_lookup)
    with pytest.raises(ConflictError) as excinfo:
        await service.add_item(db, buyer.id, product.id)
    assert excinfo.value.code == "cart.duplicate"

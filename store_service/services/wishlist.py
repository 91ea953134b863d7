# store_service/services/wishlist.py
from typing import List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from store_service import validators
from store_service.db.database import transaction_scope
from store_service.db.models import WishlistCollection, WishlistItem
from store_service.db.repositories import (
    ProductRepository,
    UserRepository,
    WishlistCollectionRepository,
    WishlistItemRepository,
)
from store_service.errors import ConflictError, NotFoundError
from store_service.services.common import ensure_same_user, require

logger = structlog.get_logger()

COLLECTION_NOT_FOUND = "Collection not found."
ALREADY_IN_COLLECTION = "Product already added to the selected collection."
DUPLICATE_COLLECTION_NAME = "A collection with this name already exists."


class WishlistService:
    def __init__(
        self,
        wishlist_items: WishlistItemRepository = None,
        collections: WishlistCollectionRepository = None,
        users: UserRepository = None,
        products: ProductRepository = None,
    ):
        self.wishlist_items = wishlist_items or WishlistItemRepository()
        self.collections = collections or WishlistCollectionRepository()
        self.users = users or UserRepository()
        self.products = products or ProductRepository()

    async def _get_collection(self, db: AsyncSession, collection_id: int) -> WishlistCollection:
        return require(
            await self.collections.get_by_id(db, collection_id), COLLECTION_NOT_FOUND, "collection.not_found"
        )

    # Wishlist items

    async def list_items(self, db: AsyncSession, caller_id: int) -> List[WishlistItem]:
        user = require(await self.users.get_by_id(db, caller_id), "User not found.", "user.not_found")
        return await self.wishlist_items.find(db, user_id=user.id)

    async def add_item(self, db: AsyncSession, caller_id: int, product_id: int, group_id: int) -> WishlistItem:
        user = require(await self.users.get_by_id(db, caller_id), "User not found.", "user.not_found")
        product = require(await self.products.get_by_id(db, product_id), "Product not found.", "product.not_found")
        if product.owner_id == user.id:
            raise ConflictError("You cannot add your own product.", code="wishlist.own_product")

        collection = await self._get_collection(db, group_id)
        ensure_same_user(user.id, collection.user_id, "wishlist.add_item")

        if await self.wishlist_items.get_by_user_product_and_group(db, user.id, product.id, collection.id):
            raise ConflictError(ALREADY_IN_COLLECTION, code="wishlist.duplicate")

        async with transaction_scope(db, "wishlist.add_item", ALREADY_IN_COLLECTION, "wishlist.duplicate"):
            item = await self.wishlist_items.create(
                db, user_id=user.id, product_id=product.id, group_id=collection.id
            )
        return item

    async def remove_item(self, db: AsyncSession, caller_id: int, item_id: int) -> None:
        item = require(await self.wishlist_items.get_by_id(db, item_id), "Item not found.", "wishlist.item_not_found")
        ensure_same_user(caller_id, item.user_id, "wishlist.remove_item")

        async with transaction_scope(db, "wishlist.remove_item"):
            await self.wishlist_items.delete_by_id(db, item.id)

    # Collections

    async def list_collection_items(
        self, db: AsyncSession, collection_id: int, caller_id: Optional[int] = None
    ) -> List[WishlistItem]:
        collection = await self._get_collection(db, collection_id)
        if collection.privated:
            ensure_same_user(caller_id, collection.user_id, "collection.list_items")
        return await self.wishlist_items.find(db, group_id=collection.id)

    async def create_collection(self, db: AsyncSession, caller_id: int, name: str, privated: bool) -> WishlistCollection:
        validators.check_collection(name, privated).raise_if_invalid()
        user = require(await self.users.get_by_id(db, caller_id), "User not found.", "user.not_found")

        if await self.collections.get_by_name_from_user(db, user.id, name):
            raise ConflictError(DUPLICATE_COLLECTION_NAME, code="collection.duplicate_name")

        async with transaction_scope(
            db, "collection.create", DUPLICATE_COLLECTION_NAME, "collection.duplicate_name"
        ):
            collection = await self.collections.create(db, user_id=user.id, name=name, privated=privated)
        return collection

    async def update_collection(
        self, db: AsyncSession, caller_id: int, collection_id: int, name: str, privated: bool
    ) -> WishlistCollection:
        validators.check_collection(name, privated).raise_if_invalid()
        collection = await self._get_collection(db, collection_id)
        ensure_same_user(caller_id, collection.user_id, "collection.update")

        same_name = await self.collections.get_by_name_from_user(db, collection.user_id, name)
        if same_name is not None and same_name.id != collection.id:
            raise ConflictError(DUPLICATE_COLLECTION_NAME, code="collection.duplicate_name")

        async with transaction_scope(
            db, "collection.update", DUPLICATE_COLLECTION_NAME, "collection.duplicate_name"
        ):
            collection = await self.collections.update_by_id(db, collection.id, name=name, privated=privated)
        return collection

    async def delete_collection(self, db: AsyncSession, caller_id: int, collection_id: int) -> None:
        """Delete a collection and every wishlist item filed under it, atomically."""
        collection = await self.collections.get_by_id(db, collection_id)
        if collection is None:
            raise NotFoundError(COLLECTION_NOT_FOUND, code="collection.not_found")
        ensure_same_user(caller_id, collection.user_id, "collection.delete")

        async with transaction_scope(db, "collection_deletion"):
            removed = await self.wishlist_items.delete_many(db, group_id=collection.id)
            await self.collections.delete_by_id(db, collection.id)
        logger.info("collection.deleted", collection_id=collection_id, items_removed=removed)

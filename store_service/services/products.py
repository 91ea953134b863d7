# store_service/services/products.py
from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from store_service import validators
from store_service.db.database import transaction_scope
from store_service.db.models import Product, Review
from store_service.db.repositories import (
    CartItemRepository,
    CategoryRepository,
    ProductRepository,
    ReviewRepository,
    UserRepository,
    WishlistItemRepository,
)
from store_service.operations import to_money
from store_service.services.common import ensure_same_user, require

logger = structlog.get_logger()

PRODUCT_NOT_FOUND = "Product not found."


class ProductService:
    def __init__(
        self,
        products: ProductRepository = None,
        categories: CategoryRepository = None,
        users: UserRepository = None,
        reviews: ReviewRepository = None,
        cart_items: CartItemRepository = None,
        wishlist_items: WishlistItemRepository = None,
    ):
        self.products = products or ProductRepository()
        self.categories = categories or CategoryRepository()
        self.users = users or UserRepository()
        self.reviews = reviews or ReviewRepository()
        self.cart_items = cart_items or CartItemRepository()
        self.wishlist_items = wishlist_items or WishlistItemRepository()

    async def get_product(self, db: AsyncSession, product_id: int) -> Product:
        return require(await self.products.get_by_id(db, product_id), PRODUCT_NOT_FOUND, "product.not_found")

    async def list_recent(self, db: AsyncSession, limit: int = 20) -> List[Product]:
        return await self.products.get_recent(db, limit=limit)

    async def list_discounted(self, db: AsyncSession, limit: int = 20) -> List[Product]:
        return await self.products.get_discounted(db, limit=limit)

    async def get_details(self, db: AsyncSession, product_id: int) -> Product:
        return await self.get_product(db, product_id)

    async def get_rating(self, db: AsyncSession, product_id: int) -> dict:
        product = await self.get_product(db, product_id)
        average = await self.products.get_average_score(db, product.id)
        score_metrics = await self.products.get_score_metrics(db, product.id)
        return {"average": average, "score_metrics": score_metrics}

    async def list_reviews(self, db: AsyncSession, product_id: int) -> List[Review]:
        product = await self.get_product(db, product_id)
        return await self.reviews.find(db, product_id=product.id)

    async def _check_data(self, db: AsyncSession, data: dict) -> None:
        validators.check_product(
            data.get("name"),
            data.get("price"),
            data.get("quantity"),
            brand=data.get("brand"),
            description=data.get("description"),
            discount=data.get("discount", 0),
        ).raise_if_invalid()
        require(await self.categories.get_by_id(db, data.get("category_id")), "Category not found.", "category.not_found")

    async def create(self, db: AsyncSession, caller_id: int, data: dict) -> Product:
        owner = require(await self.users.get_by_id(db, caller_id), "User not found.", "user.not_found")
        await self._check_data(db, data)

        async with transaction_scope(db, "product.create"):
            product = await self.products.create(
                db,
                owner_id=owner.id,
                category_id=data["category_id"],
                name=data["name"],
                brand=data.get("brand"),
                description=data.get("description"),
                price=to_money(data["price"]),
                quantity=data["quantity"],
                on_sale=bool(data.get("on_sale", False)),
                discount=data.get("discount", 0),
                sales=0,
            )
        logger.info("product.created", product_id=product.id, owner_id=owner.id)
        return product

    async def update(self, db: AsyncSession, caller_id: int, product_id: int, data: dict) -> Product:
        product = await self.get_product(db, product_id)
        ensure_same_user(caller_id, product.owner_id, "product.update")
        await self._check_data(db, data)

        async with transaction_scope(db, "product.update"):
            product = await self.products.update_by_id(
                db,
                product.id,
                category_id=data["category_id"],
                name=data["name"],
                brand=data.get("brand"),
                description=data.get("description"),
                price=to_money(data["price"]),
                quantity=data["quantity"],
                on_sale=bool(data.get("on_sale", False)),
                discount=data.get("discount", 0),
            )
        return product

    async def delete(self, db: AsyncSession, caller_id: int, product_id: int) -> None:
        """Delete a product together with the cart lines, wishlist entries and reviews pointing at it."""
        product = await self.get_product(db, product_id)
        ensure_same_user(caller_id, product.owner_id, "product.delete")

        async with transaction_scope(db, "product.delete"):
            await self.cart_items.delete_many(db, product_id=product.id)
            await self.wishlist_items.delete_many(db, product_id=product.id)
            await self.reviews.delete_many(db, product_id=product.id)
            await self.products.delete_by_id(db, product.id)
        logger.info("product.deleted", product_id=product_id, owner_id=caller_id)

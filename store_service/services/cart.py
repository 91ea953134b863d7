# store_service/services/cart.py
from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from store_service import validators
from store_service.db.database import transaction_scope
from store_service.db.models import CartItem
from store_service.db.repositories import CartItemRepository, ProductRepository, UserRepository
from store_service.errors import ConflictError
from store_service.operations import calculate_discounted_value, to_money
from store_service.services.common import ensure_same_user, require

logger = structlog.get_logger()

ALREADY_IN_CART = "Item already added to the shopping cart."


class CartService:
    def __init__(
        self,
        cart_items: CartItemRepository = None,
        products: ProductRepository = None,
        users: UserRepository = None,
    ):
        self.cart_items = cart_items or CartItemRepository()
        self.products = products or ProductRepository()
        self.users = users or UserRepository()

    async def add_item(self, db: AsyncSession, caller_id: int, product_id: int, quantity: int = 1) -> CartItem:
        """
        Put a product in the caller's cart.

        The seller and the unit price (discounted when the product is on sale)
        are copied onto the cart line here and never change afterwards.
        """
        validators.check_cart_item(quantity).raise_if_invalid()
        buyer = require(await self.users.get_by_id(db, caller_id), "User not found.", "user.not_found")
        product = require(await self.products.get_by_id(db, product_id), "Product not found.", "product.not_found")

        if product.quantity <= 0 or quantity > product.quantity:
            raise ConflictError("Product unavailable.", code="product.out_of_stock")
        if product.owner_id == buyer.id:
            raise ConflictError("You cannot buy your own product.", code="cart.own_product")
        if await self.cart_items.get_by_user_and_product(db, buyer.id, product.id):
            raise ConflictError(ALREADY_IN_CART, code="cart.duplicate")

        if product.on_sale:
            price = calculate_discounted_value(product.price, product.discount)
        else:
            price = to_money(product.price)

        async with transaction_scope(db, "cart.add_item", ALREADY_IN_CART, "cart.duplicate"):
            item = await self.cart_items.create(
                db,
                user_id=buyer.id,
                seller_id=product.owner_id,
                product_id=product.id,
                price=price,
                quantity=quantity,
            )
        logger.info("cart.item_added", user_id=buyer.id, product_id=product.id, quantity=quantity)
        return item

    async def list_items(self, db: AsyncSession, caller_id: int) -> List[CartItem]:
        buyer = require(await self.users.get_by_id(db, caller_id), "User not found.", "user.not_found")
        return await self.cart_items.list_by_user(db, buyer.id)

    async def get_item(self, db: AsyncSession, caller_id: int, item_id: int) -> CartItem:
        item = require(await self.cart_items.get_by_id(db, item_id), "Item not found.", "cart.item_not_found")
        ensure_same_user(caller_id, item.user_id, "cart.get_item")
        return item

    async def delete_item(self, db: AsyncSession, caller_id: int, item_id: int) -> None:
        item = await self.get_item(db, caller_id, item_id)
        async with transaction_scope(db, "cart.delete_item"):
            await self.cart_items.delete_by_id(db, item.id)

# store_service/services/transactions.py
from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from store_service import validators
from store_service.db.database import transaction_scope
from store_service.db.models import Transaction
from store_service.db.repositories import (
    CartItemRepository,
    ProductRepository,
    TransactionRepository,
    UserRepository,
)
from store_service.errors import ConflictError, NotFoundError
from store_service.operations import get_total_from_products, line_total, to_money
from store_service.services.common import ensure_same_user, require

logger = structlog.get_logger()


def _insufficient_funds() -> ConflictError:
    return ConflictError("Insufficient funds.", code="funds.insufficient")


def _out_of_stock(product_id: int) -> ConflictError:
    return ConflictError(f"Product {product_id} does not have enough stock.", code="product.out_of_stock")


def _unavailable(product_id: int) -> ConflictError:
    return ConflictError(f"Product {product_id} is no longer available.", code="product.unavailable")


class TransactionService:
    def __init__(
        self,
        users: UserRepository = None,
        products: ProductRepository = None,
        cart_items: CartItemRepository = None,
        transactions: TransactionRepository = None,
    ):
        self.users = users or UserRepository()
        self.products = products or ProductRepository()
        self.cart_items = cart_items or CartItemRepository()
        self.transactions = transactions or TransactionRepository()

    async def checkout(self, db: AsyncSession, buyer_id: int, payment_method: str) -> Transaction:
        """
        Turn the buyer's cart into a Transaction.

        Checks, in order: buyer exists, payment method is accepted, cart is
        not empty, funds cover the total, every line's product and seller
        still exist and the product has stock. The buyer, products and sellers
        read here are the snapshot the writes are computed from. Their
        version columns make the commit fail with TransientStoreError when
        another request changed any of them in the meantime, so the funds and
        stock checks hold for the rows actually written. Either every write
        below lands or none does.
        """
        buyer = await self.users.get_by_id(db, buyer_id)
        if buyer is None:
            raise NotFoundError("User not found.", code="user.not_found")

        validators.check_payment_method(payment_method).raise_if_invalid(code="transaction.invalid_payment_method")

        cart_items = await self.cart_items.list_by_user(db, buyer.id)
        if not cart_items:
            raise ConflictError("There are no items in the shopping cart.", code="cart.empty")

        # Price snapshots on the cart lines, not the live product price
        total = get_total_from_products(cart_items)
        if to_money(buyer.funds) < total:
            raise _insufficient_funds()

        products, sellers = {}, {}
        for item in cart_items:
            product = await self.products.get_by_id(db, item.product_id)
            seller = await self.users.get_by_id(db, item.seller_id)
            if product is None or seller is None:
                raise _unavailable(item.product_id)
            if product.quantity < item.quantity:
                raise _out_of_stock(item.product_id)
            products[product.id] = product
            sellers[seller.id] = seller

        logger.info("checkout.started", buyer_id=buyer.id, items=len(cart_items), total=str(total))
        async with transaction_scope(db, "checkout"):
            transaction = await self.transactions.create(
                db,
                buyer_id=buyer.id,
                products=[item.id for item in cart_items],
                payment_method=payment_method,
                total_price=total,
            )
            await self.users.increment(db, buyer.id, funds=-total)

            for item in cart_items:
                seller, product = sellers[item.seller_id], products[item.product_id]
                await self.users.increment(db, seller.id, funds=line_total(item.price, item.quantity))
                await self.products.increment(db, product.id, quantity=-item.quantity, sales=item.quantity)
                await self.cart_items.delete_by_id(db, item.id)

        logger.info("checkout.committed", buyer_id=buyer_id, transaction_id=transaction.id, total=str(total))
        return transaction

    async def list_for_buyer(self, db: AsyncSession, caller_id: int, user_id: int) -> List[Transaction]:
        user = require(await self.users.get_by_id(db, user_id), "User not found.", "user.not_found")
        ensure_same_user(caller_id, user.id, "transaction.list")
        return await self.transactions.list_by_buyer(db, user.id)

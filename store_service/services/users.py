# store_service/services/users.py
from typing import List

import structlog
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from store_service import validators
from store_service.auth_utils import PasswordHasher, TokenService
from store_service.db.database import transaction_scope
from store_service.db.models import (
    CartItem,
    Product,
    Review,
    User,
    WishlistCollection,
    WishlistItem,
)
from store_service.db.repositories import (
    CartItemRepository,
    ProductRepository,
    ReviewRepository,
    UserRepository,
    WishlistCollectionRepository,
    WishlistItemRepository,
)
from store_service.errors import ConflictError, NotAuthorizedError, NotFoundError
from store_service.operations import to_money
from store_service.services.common import ensure_same_user, require

logger = structlog.get_logger()

USER_NOT_FOUND = "User not found."
EMAIL_TAKEN_AT_REGISTER = "An account was already created with this email."
EMAIL_IN_USE = "Email is already in use."


class UserService:
    def __init__(
        self,
        hasher: PasswordHasher,
        tokens: TokenService,
        users: UserRepository = None,
        products: ProductRepository = None,
        reviews: ReviewRepository = None,
        cart_items: CartItemRepository = None,
        collections: WishlistCollectionRepository = None,
        wishlist_items: WishlistItemRepository = None,
    ):
        self.hasher = hasher
        self.tokens = tokens
        self.users = users or UserRepository()
        self.products = products or ProductRepository()
        self.reviews = reviews or ReviewRepository()
        self.cart_items = cart_items or CartItemRepository()
        self.collections = collections or WishlistCollectionRepository()
        self.wishlist_items = wishlist_items or WishlistItemRepository()

    async def get_user(self, db: AsyncSession, user_id: int) -> User:
        return require(await self.users.get_by_id(db, user_id), USER_NOT_FOUND, "user.not_found")

    async def register(self, db: AsyncSession, email: str, password: str, first_name: str,
                       last_name: str = None, description: str = None) -> User:
        validators.check_registration(email, password, first_name, last_name, description).raise_if_invalid()

        if await self.users.get_by_email(db, email):
            raise ConflictError(EMAIL_TAKEN_AT_REGISTER, code="user.email_taken")

        async with transaction_scope(db, "register", EMAIL_TAKEN_AT_REGISTER, "user.email_taken"):
            user = await self.users.create(
                db,
                email=email,
                password=self.hasher.hash_password(password),
                first_name=first_name,
                last_name=last_name,
                description=description,
                funds=to_money(0),
            )
        logger.info("user.registered", user_id=user.id)
        return user

    async def login(self, db: AsyncSession, email: str, password: str) -> dict:
        validators.check_login(email, password).raise_if_invalid()

        user = require(await self.users.get_by_email(db, email), USER_NOT_FOUND, "user.not_found")
        if not self.hasher.verify_password(password, user.password):
            raise NotAuthorizedError("Invalid password.", code="auth.invalid_password")

        return {
            "id": user.id,
            "email": user.email,
            "first_name": user.first_name,
            "funds": user.funds,
            "token": self.tokens.create_access_token(user.id, user.email),
        }

    async def get_profile(self, db: AsyncSession, user_id: int) -> User:
        return await self.get_user(db, user_id)

    async def get_private_info(self, db: AsyncSession, caller_id: int, user_id: int) -> User:
        user = await self.get_user(db, user_id)
        ensure_same_user(caller_id, user.id, "user.private_info")
        return user

    async def list_products(self, db: AsyncSession, user_id: int) -> List[Product]:
        user = await self.get_user(db, user_id)
        return await self.products.find(db, owner_id=user.id)

    async def update_info(self, db: AsyncSession, caller_id: int, user_id: int, first_name: str,
                          last_name: str = None, description: str = None) -> User:
        validators.check_profile(first_name, last_name, description).raise_if_invalid()
        user = await self.get_user(db, user_id)
        ensure_same_user(caller_id, user.id, "user.update_info")

        async with transaction_scope(db, "user.update_info"):
            user = await self.users.update_by_id(
                db, user.id, first_name=first_name, last_name=last_name, description=description
            )
        return user

    async def update_password(self, db: AsyncSession, caller_id: int, password: str, new_password: str) -> None:
        validators.check_password_change(new_password).raise_if_invalid()
        user = await self.get_user(db, caller_id)
        if not self.hasher.verify_password(password, user.password):
            raise NotAuthorizedError("Invalid password.", code="auth.invalid_password")

        async with transaction_scope(db, "user.update_password"):
            await self.users.update_by_id(db, user.id, password=self.hasher.hash_password(new_password))

    async def update_email(self, db: AsyncSession, caller_id: int, email: str) -> None:
        validators.check_email_change(email).raise_if_invalid()
        user = await self.get_user(db, caller_id)
        if await self.users.get_by_email(db, email):
            raise ConflictError(EMAIL_IN_USE, code="user.email_taken")

        async with transaction_scope(db, "user.update_email", EMAIL_IN_USE, "user.email_taken"):
            await self.users.update_by_id(db, user.id, email=email)

    async def add_funds(self, db: AsyncSession, caller_id: int, amount) -> User:
        validators.check_fund_amount(amount).raise_if_invalid(code="funds.invalid_amount")
        user = await self.get_user(db, caller_id)

        async with transaction_scope(db, "user.add_funds"):
            user = await self.users.increment(db, user.id, funds=to_money(amount))
        logger.info("funds.added", user_id=user.id, amount=str(to_money(amount)))
        return user

    async def list_collections(self, db: AsyncSession, user_id: int) -> List[WishlistCollection]:
        user = await self.get_user(db, user_id)
        return await self.collections.list_by_user(db, user.id, public_only=True)

    async def list_every_collection(self, db: AsyncSession, caller_id: int, user_id: int) -> List[WishlistCollection]:
        user = await self.get_user(db, user_id)
        ensure_same_user(caller_id, user.id, "user.list_every_collection")
        return await self.collections.list_by_user(db, user.id)

    async def delete_account(self, db: AsyncSession, caller_id: int, user_id: int) -> None:
        """
        Remove a user and everything that depends on it in one atomic unit.

        Dependents are removed before what they reference: wishlist items
        (owned by the user, filed under the user's collections or pointing
        at the user's products), collections, cart items where the user buys
        or sells, reviews written by the user or about the user's products,
        products, then the user row. Transactions stay as the purchase record.
        """
        user = await self.users.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND, code="user.not_found")
        ensure_same_user(caller_id, user.id, "user.delete_account")

        owned_products = select(Product.id).where(Product.owner_id == user.id)
        owned_collections = select(WishlistCollection.id).where(WishlistCollection.user_id == user.id)

        logger.info("account_deletion.started", user_id=user.id)
        async with transaction_scope(db, "account_deletion"):
            await self.wishlist_items.delete_many(
                db,
                or_(
                    WishlistItem.user_id == user.id,
                    WishlistItem.group_id.in_(owned_collections),
                    WishlistItem.product_id.in_(owned_products),
                ),
            )
            await self.collections.delete_many(db, user_id=user.id)
            await self.cart_items.delete_many(db, CartItem.user_id == user.id)
            await self.cart_items.delete_many(
                db, or_(CartItem.seller_id == user.id, CartItem.product_id.in_(owned_products))
            )
            await self.reviews.delete_many(db, Review.author_id == user.id)
            await self.reviews.delete_many(
                db, or_(Review.product_owner_id == user.id, Review.product_id.in_(owned_products))
            )
            await self.products.delete_many(db, owner_id=user.id)
            await self.users.delete_by_id(db, user.id)
        logger.info("account_deletion.committed", user_id=user_id)

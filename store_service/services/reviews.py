# store_service/services/reviews.py
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from store_service import validators
from store_service.db.database import transaction_scope
from store_service.db.models import Review
from store_service.db.repositories import ProductRepository, ReviewRepository, UserRepository
from store_service.services.common import ensure_same_user, require

REVIEW_NOT_FOUND = "Review not found."


class ReviewService:
    def __init__(
        self,
        reviews: ReviewRepository = None,
        users: UserRepository = None,
        products: ProductRepository = None,
    ):
        self.reviews = reviews or ReviewRepository()
        self.users = users or UserRepository()
        self.products = products or ProductRepository()

    async def get(self, db: AsyncSession, review_id: int) -> Review:
        return require(await self.reviews.get_by_id(db, review_id), REVIEW_NOT_FOUND, "review.not_found")

    async def list_for_product(self, db: AsyncSession, product_id: int) -> List[Review]:
        product = require(await self.products.get_by_id(db, product_id), "Product not found.", "product.not_found")
        return await self.reviews.find(db, product_id=product.id)

    async def list_by_author(self, db: AsyncSession, user_id: int) -> List[Review]:
        user = require(await self.users.get_by_id(db, user_id), "User not found.", "user.not_found")
        return await self.reviews.find(db, author_id=user.id)

    async def list_for_owner(self, db: AsyncSession, user_id: int) -> List[Review]:
        """Reviews written about the products a user sells."""
        user = require(await self.users.get_by_id(db, user_id), "User not found.", "user.not_found")
        return await self.reviews.find(db, product_owner_id=user.id)

    async def submit(self, db: AsyncSession, caller_id: int, product_id: int, score: int, text: str) -> Review:
        validators.check_review(score, text).raise_if_invalid()
        author = require(await self.users.get_by_id(db, caller_id), "User not found.", "user.not_found")
        product = require(await self.products.get_by_id(db, product_id), "Product not found.", "product.not_found")

        async with transaction_scope(db, "review.submit"):
            review = await self.reviews.create(
                db,
                author_id=author.id,
                product_id=product.id,
                product_owner_id=product.owner_id,
                score=score,
                text=text,
            )
        return review

    async def update(self, db: AsyncSession, caller_id: int, review_id: int, score: int, text: str) -> Review:
        validators.check_review(score, text).raise_if_invalid()
        review = await self.get(db, review_id)
        ensure_same_user(caller_id, review.author_id, "review.update")

        async with transaction_scope(db, "review.update"):
            review = await self.reviews.update_by_id(db, review.id, score=score, text=text)
        return review

    async def delete(self, db: AsyncSession, caller_id: int, review_id: int) -> None:
        review = await self.get(db, review_id)
        ensure_same_user(caller_id, review.author_id, "review.delete")

        async with transaction_scope(db, "review.delete"):
            await self.reviews.delete_by_id(db, review.id)

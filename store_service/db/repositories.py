# store_service/db/repositories.py
from typing import List, Optional

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from store_service.db.models import (
    User,
    Category,
    Product,
    CartItem,
    Transaction,
    WishlistCollection,
    WishlistItem,
    Review,
)


class Repository:
    """
    Thin accessor over one model.

    Repositories never commit: every write is flushed into the caller's
    session so it joins whatever transaction_scope the service opened.
    """

    model = None

    def _criteria(self, filters: dict) -> list:
        return [getattr(self.model, field) == value for field, value in filters.items()]

    async def get_by_id(self, db: AsyncSession, object_id: int):
        result = await db.execute(select(self.model).filter(self.model.id == object_id))
        return result.scalar_one_or_none()

    async def get_by_field(self, db: AsyncSession, **filters):
        result = await db.execute(select(self.model).filter(*self._criteria(filters)).limit(1))
        return result.scalars().first()

    async def find(self, db: AsyncSession, *criteria, order_by=None, skip: int = 0, limit: int = None, **filters) -> list:
        query = select(self.model).filter(*criteria, *self._criteria(filters))
        query = query.order_by(order_by if order_by is not None else self.model.id)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, **data):
        instance = self.model(**data)
        db.add(instance)
        await db.flush()
        return instance

    async def update_by_id(self, db: AsyncSession, object_id: int, **patch):
        instance = await self.get_by_id(db, object_id)
        if instance is None:
            return None
        for field, value in patch.items():
            setattr(instance, field, value)
        await db.flush()
        return instance

    async def increment(self, db: AsyncSession, object_id: int, **deltas):
        """Add each delta to the current column value (negative to subtract)."""
        instance = await self.get_by_id(db, object_id)
        if instance is None:
            return None
        for field, delta in deltas.items():
            setattr(instance, field, getattr(instance, field) + delta)
        await db.flush()
        return instance

    async def delete_by_id(self, db: AsyncSession, object_id: int):
        instance = await self.get_by_id(db, object_id)
        if instance is None:
            return None
        await db.delete(instance)
        await db.flush()
        return instance

    async def delete_many(self, db: AsyncSession, *criteria, **filters) -> int:
        statement = delete(self.model).where(*criteria, *self._criteria(filters))
        result = await db.execute(statement.execution_options(synchronize_session="fetch"))
        return result.rowcount


class UserRepository(Repository):
    model = User

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        return await self.get_by_field(db, email=email)


class CategoryRepository(Repository):
    model = Category

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Category]:
        return await self.get_by_field(db, name=name)

    async def list_all(self, db: AsyncSession) -> List[Category]:
        return await self.find(db, order_by=Category.name)


class ProductRepository(Repository):
    model = Product

    # Most recently listed products that still have stock
    async def get_recent(self, db: AsyncSession, limit: int = 20) -> List[Product]:
        return await self.find(
            db, Product.quantity > 0, order_by=Product.created_at.desc(), limit=limit
        )

    async def get_discounted(self, db: AsyncSession, limit: int = 20) -> List[Product]:
        return await self.find(
            db, Product.quantity > 0, order_by=Product.discount.desc(), limit=limit, on_sale=True
        )

    async def get_average_score(self, db: AsyncSession, product_id: int) -> Optional[float]:
        result = await db.execute(select(func.avg(Review.score)).filter(Review.product_id == product_id))
        average = result.scalar_one_or_none()
        return round(float(average), 2) if average is not None else None

    async def get_score_metrics(self, db: AsyncSession, product_id: int) -> dict:
        """Number of reviews per integer score, 0 through 5."""
        result = await db.execute(
            select(Review.score, func.count(Review.id))
            .filter(Review.product_id == product_id)
            .group_by(Review.score)
        )
        metrics = {score: 0 for score in range(6)}
        for score, count in result.all():
            metrics[int(score)] = count
        return metrics


class CartItemRepository(Repository):
    model = CartItem

    async def get_by_user_and_product(self, db: AsyncSession, user_id: int, product_id: int) -> Optional[CartItem]:
        return await self.get_by_field(db, user_id=user_id, product_id=product_id)

    async def list_by_user(self, db: AsyncSession, user_id: int) -> List[CartItem]:
        return await self.find(db, user_id=user_id)


class TransactionRepository(Repository):
    model = Transaction

    async def list_by_buyer(self, db: AsyncSession, buyer_id: int) -> List[Transaction]:
        return await self.find(db, order_by=Transaction.created_at.desc(), buyer_id=buyer_id)


class WishlistCollectionRepository(Repository):
    model = WishlistCollection

    async def list_by_user(self, db: AsyncSession, user_id: int, public_only: bool = False) -> List[WishlistCollection]:
        if public_only:
            return await self.find(db, user_id=user_id, privated=False)
        return await self.find(db, user_id=user_id)

    async def get_by_name_from_user(self, db: AsyncSession, user_id: int, name: str) -> Optional[WishlistCollection]:
        return await self.get_by_field(db, user_id=user_id, name=name)


class WishlistItemRepository(Repository):
    model = WishlistItem

    async def get_by_user_product_and_group(
        self, db: AsyncSession, user_id: int, product_id: int, group_id: int
    ) -> Optional[WishlistItem]:
        return await self.get_by_field(db, user_id=user_id, product_id=product_id, group_id=group_id)


class ReviewRepository(Repository):
    model = Review

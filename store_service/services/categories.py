# store_service/services/categories.py
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from store_service.db.database import transaction_scope
from store_service.db.models import Category, Product
from store_service.db.repositories import CategoryRepository, ProductRepository
from store_service.errors import ConflictError, ValidationError
from store_service.services.common import require

CATEGORY_EXISTS = "Category already exists."


class CategoryService:
    def __init__(self, categories: CategoryRepository = None, products: ProductRepository = None):
        self.categories = categories or CategoryRepository()
        self.products = products or ProductRepository()

    async def create(self, db: AsyncSession, name: str) -> Category:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Invalid name field.")
        if await self.categories.get_by_name(db, name):
            raise ConflictError(CATEGORY_EXISTS, code="category.duplicate")

        async with transaction_scope(db, "category.create", CATEGORY_EXISTS, "category.duplicate"):
            category = await self.categories.create(db, name=name)
        return category

    async def list_all(self, db: AsyncSession) -> List[Category]:
        return await self.categories.list_all(db)

    async def get(self, db: AsyncSession, category_id: int) -> Category:
        return require(await self.categories.get_by_id(db, category_id), "Category not found.", "category.not_found")

    async def list_products(self, db: AsyncSession, category_id: int) -> List[Product]:
        category = await self.get(db, category_id)
        return await self.products.find(db, category_id=category.id)

# store_service/routes/categories.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from store_service.db.database import get_db
from store_service.db.schemas import CategoryCreate, CategorySchema, ProductSchema
from store_service.dependencies import get_category_service
from store_service.services import CategoryService

router = APIRouter(prefix="/api/category", tags=["category"])


@router.post("/", response_model=CategorySchema, status_code=201)
async def create_category(
    body: CategoryCreate, service: CategoryService = Depends(get_category_service), db: AsyncSession = Depends(get_db)
):
    return await service.create(db, body.name)


@router.get("/", response_model=List[CategorySchema])
async def get_categories(service: CategoryService = Depends(get_category_service), db: AsyncSession = Depends(get_db)):
    return await service.list_all(db)


@router.get("/{id}", response_model=CategorySchema)
async def get_category(id: int, service: CategoryService = Depends(get_category_service), db: AsyncSession = Depends(get_db)):
    return await service.get(db, id)


@router.get("/{id}/products", response_model=List[ProductSchema])
async def get_category_products(
    id: int, service: CategoryService = Depends(get_category_service), db: AsyncSession = Depends(get_db)
):
    return await service.list_products(db, id)

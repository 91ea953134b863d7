# store_service/routes/products.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from store_service.db.database import get_db
from store_service.db.schemas import (
    MessageResponse,
    ProductBase,
    ProductCreated,
    ProductRating,
    ProductSchema,
    ReviewSchema,
)
from store_service.dependencies import get_current_user_id, get_product_service
from store_service.services import ProductService

router = APIRouter(prefix="/api/product", tags=["product"])


@router.get("/", response_model=List[ProductSchema])
async def get_recent_products(
    limit: int = Query(default=20, ge=1, le=100),
    service: ProductService = Depends(get_product_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_recent(db, limit)


@router.get("/discount", response_model=List[ProductSchema])
async def get_discounted_products(
    limit: int = Query(default=20, ge=1, le=100),
    service: ProductService = Depends(get_product_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_discounted(db, limit)


@router.post("/create", response_model=ProductCreated, status_code=201)
async def create_product(
    product: ProductBase,
    user_id: int = Depends(get_current_user_id),
    service: ProductService = Depends(get_product_service),
    db: AsyncSession = Depends(get_db),
):
    created = await service.create(db, user_id, product.model_dump())
    return {"message": "Product created.", "product_id": created.id}


@router.get("/{id}", response_model=ProductSchema)
async def get_product_details(id: int, service: ProductService = Depends(get_product_service), db: AsyncSession = Depends(get_db)):
    return await service.get_details(db, id)


@router.get("/{id}/reviews", response_model=List[ReviewSchema])
async def get_product_reviews(id: int, service: ProductService = Depends(get_product_service), db: AsyncSession = Depends(get_db)):
    return await service.list_reviews(db, id)


@router.get("/{id}/reviews/score", response_model=ProductRating)
async def get_product_rating(id: int, service: ProductService = Depends(get_product_service), db: AsyncSession = Depends(get_db)):
    return await service.get_rating(db, id)


@router.put("/{id}", response_model=ProductSchema)
async def update_product(
    id: int,
    product: ProductBase,
    user_id: int = Depends(get_current_user_id),
    service: ProductService = Depends(get_product_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.update(db, user_id, id, product.model_dump())


@router.delete("/{id}", response_model=MessageResponse)
async def delete_product(
    id: int,
    user_id: int = Depends(get_current_user_id),
    service: ProductService = Depends(get_product_service),
    db: AsyncSession = Depends(get_db),
):
    await service.delete(db, user_id, id)
    return {"message": "Product deleted."}

# store_service/routes/cart.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from store_service.db.database import get_db
from store_service.db.schemas import CartItemCreate, CartItemSchema, MessageResponse
from store_service.dependencies import get_cart_service, get_current_user_id
from store_service.services import CartService

router = APIRouter(prefix="/api/shoppingcart", tags=["shoppingcart"])


@router.post("/", response_model=CartItemSchema, status_code=201)
async def add_to_cart(
    item: CartItemCreate,
    user_id: int = Depends(get_current_user_id),
    service: CartService = Depends(get_cart_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.add_item(db, user_id, item.product_id, item.quantity)


@router.get("/", response_model=List[CartItemSchema])
async def get_cart_items(
    user_id: int = Depends(get_current_user_id),
    service: CartService = Depends(get_cart_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_items(db, user_id)


@router.get("/{id}", response_model=CartItemSchema)
async def get_cart_item(
    id: int,
    user_id: int = Depends(get_current_user_id),
    service: CartService = Depends(get_cart_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.get_item(db, user_id, id)


@router.delete("/{id}", response_model=MessageResponse)
async def remove_from_cart(
    id: int,
    user_id: int = Depends(get_current_user_id),
    service: CartService = Depends(get_cart_service),
    db: AsyncSession = Depends(get_db),
):
    await service.delete_item(db, user_id, id)
    return {"message": "Item removed from the shopping cart."}

# store_service/routes/wishlist.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from store_service.db.database import get_db
from store_service.db.schemas import (
    CollectionCreate,
    CollectionSchema,
    MessageResponse,
    WishlistItemCreate,
    WishlistItemSchema,
)
from store_service.dependencies import get_current_user_id, get_optional_user_id, get_wishlist_service
from store_service.services import WishlistService

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])
collection_router = APIRouter(prefix="/api/collection", tags=["collection"])


@router.get("/", response_model=List[WishlistItemSchema])
async def get_wishlist(
    user_id: int = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_items(db, user_id)


@router.post("/", response_model=WishlistItemSchema, status_code=201)
async def add_to_wishlist(
    item: WishlistItemCreate,
    user_id: int = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.add_item(db, user_id, item.product_id, item.group_id)


@router.delete("/{id}", response_model=MessageResponse)
async def remove_from_wishlist(
    id: int,
    user_id: int = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service),
    db: AsyncSession = Depends(get_db),
):
    await service.remove_item(db, user_id, id)
    return {"message": "Item removed from the wishlist."}


# Private collections are only listed for their owner
@collection_router.get("/{id}/products", response_model=List[WishlistItemSchema])
async def get_collection_items(
    id: int,
    user_id: Optional[int] = Depends(get_optional_user_id),
    service: WishlistService = Depends(get_wishlist_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_collection_items(db, id, user_id)


@collection_router.post("/", response_model=CollectionSchema, status_code=201)
async def create_collection(
    body: CollectionCreate,
    user_id: int = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.create_collection(db, user_id, body.name, body.privated)


@collection_router.put("/{id}", response_model=CollectionSchema)
async def update_collection(
    id: int,
    body: CollectionCreate,
    user_id: int = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.update_collection(db, user_id, id, body.name, body.privated)


@collection_router.delete("/{id}", response_model=MessageResponse)
async def delete_collection(
    id: int,
    user_id: int = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service),
    db: AsyncSession = Depends(get_db),
):
    await service.delete_collection(db, user_id, id)
    return {"message": "Collection deleted."}

# store_service/routes/reviews.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from store_service.db.database import get_db
from store_service.db.schemas import MessageResponse, ReviewCreate, ReviewSchema, ReviewUpdate
from store_service.dependencies import get_current_user_id, get_review_service
from store_service.services import ReviewService

router = APIRouter(prefix="/api/review", tags=["review"])


@router.get("/{id}", response_model=ReviewSchema)
async def get_review(id: int, service: ReviewService = Depends(get_review_service), db: AsyncSession = Depends(get_db)):
    return await service.get(db, id)


@router.post("/", response_model=ReviewSchema, status_code=201)
async def submit_review(
    review: ReviewCreate,
    user_id: int = Depends(get_current_user_id),
    service: ReviewService = Depends(get_review_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.submit(db, user_id, review.product_id, review.score, review.text)


@router.patch("/{id}", response_model=ReviewSchema)
async def update_review(
    id: int,
    review: ReviewUpdate,
    user_id: int = Depends(get_current_user_id),
    service: ReviewService = Depends(get_review_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.update(db, user_id, id, review.score, review.text)


@router.delete("/{id}", response_model=MessageResponse)
async def delete_review(
    id: int,
    user_id: int = Depends(get_current_user_id),
    service: ReviewService = Depends(get_review_service),
    db: AsyncSession = Depends(get_db),
):
    await service.delete(db, user_id, id)
    return {"message": "Review deleted."}

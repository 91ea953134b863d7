# store_service/routes/users.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from store_service.db.database import get_db
from store_service.db.schemas import (
    CollectionSchema,
    EmailChange,
    FundsAdd,
    LoginResponse,
    MessageResponse,
    PasswordChange,
    ProductSchema,
    ReviewSchema,
    TransactionSchema,
    UserLogin,
    UserPrivate,
    UserPublic,
    UserRegister,
    UserUpdate,
)
from store_service.dependencies import (
    get_current_user_id,
    get_review_service,
    get_transaction_service,
    get_user_service,
)
from store_service.services import ReviewService, TransactionService, UserService

router = APIRouter(prefix="/api/user", tags=["user"])


@router.post("/login", response_model=LoginResponse)
async def login_user(body: UserLogin, service: UserService = Depends(get_user_service), db: AsyncSession = Depends(get_db)):
    return await service.login(db, body.email, body.password)


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register_user(body: UserRegister, service: UserService = Depends(get_user_service), db: AsyncSession = Depends(get_db)):
    await service.register(db, body.email, body.password, body.first_name, body.last_name, body.description)
    return {"message": "Account created."}


@router.patch("/private/details/password", response_model=MessageResponse)
async def update_user_password(
    body: PasswordChange,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db),
):
    await service.update_password(db, user_id, body.password, body.new_password)
    return {"message": "Password updated."}


@router.patch("/private/details/email", response_model=MessageResponse)
async def update_user_email(
    body: EmailChange,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db),
):
    await service.update_email(db, user_id, body.email)
    return {"message": "Email updated."}


@router.get("/private/{id}", response_model=UserPrivate)
async def get_user_private_info(
    id: int,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.get_private_info(db, user_id, id)


@router.post("/billings/add", response_model=UserPrivate)
async def add_funds(
    body: FundsAdd,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.add_funds(db, user_id, body.amount)


@router.get("/{id}", response_model=UserPublic)
async def get_profile_info(id: int, service: UserService = Depends(get_user_service), db: AsyncSession = Depends(get_db)):
    return await service.get_profile(db, id)


@router.get("/{id}/products", response_model=List[ProductSchema])
async def get_user_products(id: int, service: UserService = Depends(get_user_service), db: AsyncSession = Depends(get_db)):
    return await service.list_products(db, id)


@router.get("/{id}/products/reviews", response_model=List[ReviewSchema])
async def get_reviews_from_user_products(
    id: int, service: ReviewService = Depends(get_review_service), db: AsyncSession = Depends(get_db)
):
    return await service.list_for_owner(db, id)


@router.get("/{id}/reviews", response_model=List[ReviewSchema])
async def get_every_user_review(id: int, service: ReviewService = Depends(get_review_service), db: AsyncSession = Depends(get_db)):
    return await service.list_by_author(db, id)


@router.get("/{id}/collections", response_model=List[CollectionSchema])
async def get_user_public_collections(id: int, service: UserService = Depends(get_user_service), db: AsyncSession = Depends(get_db)):
    return await service.list_collections(db, id)


@router.get("/{id}/private/collections", response_model=List[CollectionSchema])
async def get_every_user_collection_owned(
    id: int,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_every_collection(db, user_id, id)


@router.get("/{id}/transactions", response_model=List[TransactionSchema])
async def get_user_transactions(
    id: int,
    user_id: int = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_for_buyer(db, user_id, id)


@router.put("/{id}", response_model=UserPublic)
async def update_user_info(
    id: int,
    body: UserUpdate,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.update_info(db, user_id, id, body.first_name, body.last_name, body.description)


@router.delete("/{id}", response_model=MessageResponse)
async def delete_account(
    id: int,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db),
):
    await service.delete_account(db, user_id, id)
    return {"message": "Account deleted."}

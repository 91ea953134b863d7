# store_service/dependencies.py
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from store_service.auth_utils import PasswordHasher, TokenService, default_token_service
from store_service.services import (
    CartService,
    CategoryService,
    ProductService,
    ReviewService,
    TransactionService,
    UserService,
    WishlistService,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/user/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/user/login", auto_error=False)


def get_token_service() -> TokenService:
    return default_token_service()


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


def get_current_user_id(
    token: str = Depends(oauth2_scheme), tokens: TokenService = Depends(get_token_service)
) -> int:
    return tokens.verify_token(token)


def get_optional_user_id(
    token: Optional[str] = Depends(optional_oauth2_scheme), tokens: TokenService = Depends(get_token_service)
) -> Optional[int]:
    if not token:
        return None
    return tokens.verify_token(token)


def get_user_service(
    hasher: PasswordHasher = Depends(get_password_hasher), tokens: TokenService = Depends(get_token_service)
) -> UserService:
    return UserService(hasher, tokens)


def get_category_service() -> CategoryService:
    return CategoryService()


def get_product_service() -> ProductService:
    return ProductService()


def get_cart_service() -> CartService:
    return CartService()


def get_review_service() -> ReviewService:
    return ReviewService()


def get_transaction_service() -> TransactionService:
    return TransactionService()


def get_wishlist_service() -> WishlistService:
    return WishlistService()

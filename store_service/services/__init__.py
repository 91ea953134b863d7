from store_service.services.cart import CartService
from store_service.services.categories import CategoryService
from store_service.services.products import ProductService
from store_service.services.reviews import ReviewService
from store_service.services.transactions import TransactionService
from store_service.services.users import UserService
from store_service.services.wishlist import WishlistService

__all__ = [
    "CartService",
    "CategoryService",
    "ProductService",
    "ReviewService",
    "TransactionService",
    "UserService",
    "WishlistService",
]

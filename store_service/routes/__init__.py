# store_service/routes/__init__.py
from store_service.routes import cart, categories, products, reviews, transactions, users, wishlist

routers = [
    users.router,
    categories.router,
    products.router,
    cart.router,
    reviews.router,
    transactions.router,
    wishlist.router,
    wishlist.collection_router,
]

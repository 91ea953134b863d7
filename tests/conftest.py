"""
Shared fixtures.

Every test gets its own sqlite file database, so sessions opened from the
same factory see each other's commits the way separate requests would.
"""
import os
# Set test environment variables before importing the package
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "console")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from store_service.auth_utils import PasswordHasher, TokenService, default_token_service
from store_service.db.database import get_db, make_engine, make_session_factory
from store_service.db.init_db import init_db
from store_service.db.repositories import (
    CartItemRepository,
    CategoryRepository,
    ProductRepository,
    ReviewRepository,
    UserRepository,
    WishlistCollectionRepository,
    WishlistItemRepository,
)
from store_service.main import create_app
from store_service.operations import to_money

TEST_PASSWORD = "password123"


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return PasswordHasher(iterations=1_000)


@pytest.fixture
def tokens():
    return TokenService("test-secret", expire_minutes=5)


class Seeder:
    """Writes fixture rows through the repositories, one committed session per call."""

    def __init__(self, session_factory, hasher):
        self.session_factory = session_factory
        self.hasher = hasher

    async def _create(self, repository, **data):
        async with self.session_factory() as session:
            instance = await repository.create(session, **data)
            await session.commit()
            return instance

    async def user(self, email="buyer@example.com", funds="0", first_name="Ana"):
        return await self._create(
            UserRepository(),
            email=email,
            password=self.hasher.hash_password(TEST_PASSWORD),
            first_name=first_name,
            funds=to_money(funds),
        )

    async def category(self, name="Books"):
        return await self._create(CategoryRepository(), name=name)

    async def product(self, owner, category, name="Notebook", price="40", quantity=10, on_sale=False, discount=0):
        return await self._create(
            ProductRepository(),
            owner_id=owner.id,
            category_id=category.id,
            name=name,
            price=to_money(price),
            quantity=quantity,
            sales=0,
            on_sale=on_sale,
            discount=discount,
        )

    async def cart_item(self, buyer, product, quantity=1, price=None):
        return await self._create(
            CartItemRepository(),
            user_id=buyer.id,
            seller_id=product.owner_id,
            product_id=product.id,
            price=to_money(price if price is not None else product.price),
            quantity=quantity,
        )

    async def review(self, author, product, score=4, text="Nice"):
        return await self._create(
            ReviewRepository(),
            author_id=author.id,
            product_id=product.id,
            product_owner_id=product.owner_id,
            score=score,
            text=text,
        )

    async def collection(self, owner, name="Favourites", privated=False):
        return await self._create(WishlistCollectionRepository(), user_id=owner.id, name=name, privated=privated)

    async def wishlist_item(self, owner, product, collection):
        return await self._create(
            WishlistItemRepository(), user_id=owner.id, product_id=product.id, group_id=collection.id
        )


@pytest.fixture
def seed(session_factory, hasher):
    return Seeder(session_factory, hasher)


@pytest.fixture
def fetch(session_factory):
    """Read a row back through a fresh session."""

    async def _fetch(repository, object_id):
        async with session_factory() as session:
            return await repository.get_by_id(session, object_id)

    return _fetch


@pytest.fixture
def count(session_factory):
    async def _count(repository, **filters):
        async with session_factory() as session:
            return len(await repository.find(session, **filters))

    return _count


@pytest.fixture
def app(session_factory):
    app = create_app(with_lifespan=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_header():
    """Bearer header for a user id, signed with the configured secret."""
    def _header(user_id: int) -> dict:
        return {"Authorization": f"Bearer {default_token_service().create_access_token(user_id)}"}

    return _header

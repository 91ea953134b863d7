# store_service/db/database.py
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from store_service import config
from store_service.errors import ConflictError, StoreError, TransientStoreError

logger = structlog.get_logger()


def make_engine(url: str, echo: bool = False):
    """Create the async engine; in-memory sqlite shares one connection."""
    engine_kwargs = {"echo": echo}
    if url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        engine_kwargs["poolclass"] = StaticPool
    return create_async_engine(url, **engine_kwargs)


def make_session_factory(bind):
    return sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Async engine
engine = make_engine(config.DATABASE_URL, echo=config.DB_ECHO)

# Async session factory
SessionLocal = make_session_factory(engine)

# Base class for models
Base = declarative_base()


# Session generator
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session


@asynccontextmanager
async def transaction_scope(
    db: AsyncSession,
    name: str = "write",
    conflict_message: str = "The operation conflicts with existing data.",
    conflict_code: str = "store.conflict",
):
    """
    Scoped atomic unit over a session.

    Every write issued through `db` inside the block becomes visible together
    on commit or not at all. A unique or check constraint refusing the writes
    rolls back and surfaces as ConflictError carrying `conflict_code`.
    Other store faults, optimistic version conflicts included, roll back and
    surface as TransientStoreError. Domain errors roll back and propagate
    unchanged.

    Usage:
        async with transaction_scope(db, "checkout"):
            await repository.update_by_id(db, ...)
    """
    try:
        yield db
        await db.flush()
        await db.commit()
    except StoreError as exc:
        await db.rollback()
        logger.info("transaction.aborted", scope=name, code=exc.code)
        raise
    except IntegrityError as exc:
        await db.rollback()
        logger.info("transaction.constraint_refused", scope=name, code=conflict_code)
        raise ConflictError(conflict_message, code=conflict_code) from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning("transaction.store_fault", scope=name, error=str(exc))
        raise TransientStoreError() from exc
    except BaseException:
        await db.rollback()
        logger.exception("transaction.failed", scope=name)
        raise
    else:
        logger.debug("transaction.committed", scope=name)

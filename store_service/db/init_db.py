# store_service/db/init_db.py
from store_service.db.database import engine, Base
from store_service.db import models  # noqa: F401  registers the tables


async def init_db(bind=None):
    async with (bind or engine).begin() as conn:
        # Create every table
        await conn.run_sync(Base.metadata.create_all)

# store_service/main.py
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from store_service import config
from store_service.db.init_db import init_db
from store_service.http_errors import register_exception_handlers
from store_service.log_config import configure_logging
from store_service.routes import routers

configure_logging()
logger = structlog.get_logger()


async def lifespan(app: FastAPI) -> AsyncGenerator:
    await init_db()
    logger.info("store_service.started")
    yield


def create_app(with_lifespan: bool = True) -> FastAPI:
    app = FastAPI(title="store_service", lifespan=lifespan if with_lifespan else None)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    for router in routers:
        app.include_router(router)

    @app.get("/")
    async def root():
        return {"status": "store_service running"}

    return app


app = create_app()

# store_service/http_errors.py
from typing import Any, Dict

import structlog
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from store_service.errors import StoreError

logger = structlog.get_logger()


def register_exception_handlers(app: FastAPI) -> None:
    """Map errors raised by the services onto `{"detail", "code"}` JSON responses."""

    @app.exception_handler(StoreError)
    async def _store_error_handler(request: Request, exc: StoreError) -> Response:
        logger.info("request.rejected", path=request.url.path, code=exc.code, status=exc.status_code)
        return JSONResponse(status_code=exc.status_code, content=exc.to_public_dict())

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        payload: Dict[str, Any] = {
            "detail": exc.detail,
            "code": f"http.{exc.status_code}",
        }
        headers = dict(exc.headers or {})
        return JSONResponse(status_code=int(exc.status_code), content=payload, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        payload: Dict[str, Any] = {
            "detail": jsonable_encoder(exc.errors()),
            "code": "http.validation_error",
        }
        return JSONResponse(status_code=422, content=payload)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        logger.exception("request.unhandled", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error", "code": "internal.unhandled"})

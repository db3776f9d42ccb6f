# app/api/__init__.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.errors import ShopError
from app.utils.logging import get_logger

logger = get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Kazdy ShopError -> jego status + {"message": ...}."""

    @app.exception_handler(ShopError)
    async def shop_error_handler(request: Request, exc: ShopError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

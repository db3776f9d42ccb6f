# app/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.api import register_exception_handlers
from app.api.routers import carts, health, users
from app.data.database import Base, engine
from app.utils.logging import get_logger

# import wszystkich modeli zanim ruszy create_all
from app.data import models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Shop Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(carts.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)

from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from app.api import router
from logging_config import configure_logging
from services.ingest import build_default_ingest_service
from settings import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    build_default_ingest_service()
    try:
        yield
    finally:
        build_default_ingest_service.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="IoT Sensor Store",
        description="Validates environmental sensor readings and stores them per device.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app


def main() -> None:
    settings = get_settings()
    logger.info("Listening on http://%s:%s", settings.api_host, settings.api_port)
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


app = create_app()


if __name__ == "__main__":
    main()

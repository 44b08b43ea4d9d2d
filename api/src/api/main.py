"""FastAPI application factory."""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from hushnote.config import get_settings
from hushnote.database import close_engine, init_models

from api.routers import health, onboarding

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stdout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    try:
        if settings.auto_create_tables:
            await init_models()
            logger.info("Ensured database tables exist")
        yield
    finally:
        await close_engine()


def create_app() -> FastAPI:
    _configure_logging()
    app = FastAPI(title="Hushnote API", version="0.1.0", lifespan=lifespan)
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health.router, tags=["health"])
    app.include_router(onboarding.router, prefix="/onboarding", tags=["onboarding"])
    return app


app = create_app()

from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from promptgate.api.v1.api import api_router
from promptgate.core.config import get_settings
from promptgate.core.errors import register_exception_handlers
from promptgate.core.logging import configure_logging
from promptgate.infrastructure.factory import InfrastructureFactory
from promptgate.infrastructure.llm.base import BaseLLMProvider

logger = logging.getLogger(__name__)


def create_app(provider: Optional[BaseLLMProvider] = None) -> FastAPI:
    """Create FastAPI application.

    ``provider`` replaces the one built from settings at startup; it is shared
    by every request and never reassigned afterwards.
    """
    configure_logging()
    settings = get_settings()
    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    register_exception_handlers(app)

    if provider is not None:
        app.state.provider = provider

    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info("Starting API service...")
        if getattr(app.state, "provider", None) is None:
            app.state.provider = InfrastructureFactory.get_llm_provider(settings)
            logger.info("LLM provider ready client=%s", settings.chat_client)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        logger.info("Shutting down API service...")

        current = getattr(app.state, "provider", None)
        if current is not None:
            await current.aclose()

        logger.info("Shutdown complete")

    @app.get("/healthz")
    async def healthz() -> dict:
        return {"ok": True}

    app.include_router(api_router)
    return app


def run() -> None:
    """Serve the gateway with uvicorn."""
    settings = get_settings()
    uvicorn.run(create_app(), host=settings.api_host, port=settings.api_port, log_config=None)

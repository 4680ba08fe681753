"""API router for version 1 of the API."""
from __future__ import annotations

from fastapi import APIRouter

from promptgate.api.v1.endpoints.chat import router as chat_router
from promptgate.api.v1.endpoints.evaluate import router as evaluate_router

api_router = APIRouter(prefix="/api")
api_router.include_router(chat_router)
api_router.include_router(evaluate_router)

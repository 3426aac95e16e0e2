"""
API routes aggregation
"""
from fastapi import APIRouter
from slowapi import Limiter

from vibely.api import auth, chat, users
from vibely.core.config import Settings


def create_api_router(settings: Settings, limiter: Limiter) -> APIRouter:
    api_router = APIRouter()

    # Authentication
    api_router.include_router(
        auth.create_router(limiter, settings.AUTH_RATE_LIMIT), prefix="/auth", tags=["authentication"]
    )

    # Users, friends and friend requests
    api_router.include_router(users.router, prefix="/users", tags=["users"])

    # Chat provider
    api_router.include_router(chat.router, prefix="/chat", tags=["chat"])

    return api_router

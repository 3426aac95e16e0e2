"""
Authentication endpoints - signup, login, logout, onboarding
"""

from fastapi import APIRouter, Depends, Request, Response, status
from slowapi import Limiter

from vibely.core.config import Settings
from vibely.core.dependencies import get_auth_service, get_current_user, get_settings
from vibely.models.user import User
from vibely.schemas.auth import (
    AuthResponse,
    LoginRequest,
    LogoutResponse,
    OnboardingRequest,
    SignupRequest,
)
from vibely.services.auth_service import AuthService

router = APIRouter()


def _set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,       # not readable from page scripts
        samesite="strict",
        secure=settings.is_production,
    )


@router.post("/logout", response_model=LogoutResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    """
    Logout user

    Session tokens are stateless, so this only clears the cookie.
    """
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"success": True, "message": "Logout successful"}


@router.post("/onboarding", response_model=AuthResponse)
def onboard(
    data: OnboardingRequest,
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Complete the profile; the user then shows up in recommendations"""
    user = auth_service.onboard(current_user.id, data)
    return {"success": True, "user": user}


@router.get("/me", response_model=AuthResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Return the signed-in user"""
    return {"success": True, "user": current_user}


def create_router(limiter: Limiter, rate_limit: str) -> APIRouter:
    """
    Auth router for one application.

    Signup and login are limited to rate_limit per client by that
    application's limiter; the remaining endpoints come from ``router``.
    """
    auth_router = APIRouter()

    @auth_router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
    @limiter.limit(rate_limit)
    def signup(
        request: Request,
        response: Response,
        data: SignupRequest,
        settings: Settings = Depends(get_settings),
        auth_service: AuthService = Depends(get_auth_service),
    ):
        """
        Create an account and start a session

        - **email**: unique, compared case-insensitively
        - **password**: at least 6 characters
        - **fullName**: display name
        """
        user = auth_service.signup(data)
        _set_session_cookie(response, settings, auth_service.create_access_token_for_user(user))
        return {"success": True, "user": user}

    @auth_router.post("/login", response_model=AuthResponse)
    @limiter.limit(rate_limit)
    def login(
        request: Request,
        response: Response,
        data: LoginRequest,
        settings: Settings = Depends(get_settings),
        auth_service: AuthService = Depends(get_auth_service),
    ):
        """Start a session with email and password"""
        user = auth_service.login(data)
        _set_session_cookie(response, settings, auth_service.create_access_token_for_user(user))
        return {"success": True, "user": user}

    auth_router.include_router(router)
    return auth_router

"""
FastAPI dependencies.

Everything here reads from ``request.app.state``, which the application
factory fills once at startup; nothing is kept in module globals.
"""
from typing import Iterator, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from vibely.core.config import Settings
from vibely.core.exceptions import AuthenticationError
from vibely.core.locks import PairLockRegistry
from vibely.core.security import decode_access_token
from vibely.models.user import User
from vibely.services.auth_service import AuthService
from vibely.services.chat_service import ChatService
from vibely.services.friendship_service import FriendshipService
from vibely.services.user_service import UserService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Iterator[Session]:
    """
    Dependency for getting database session in endpoints

    Usage in FastAPI endpoints:
        def my_endpoint(db: Session = Depends(get_db)):
            ...
    """
    yield from request.app.state.database.session()


def get_pair_locks(request: Request) -> PairLockRegistry:
    return request.app.state.pair_locks


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    chat: ChatService = Depends(get_chat_service),
) -> AuthService:
    return AuthService(db, settings, chat)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_friendship_service(
    db: Session = Depends(get_db),
    locks: PairLockRegistry = Depends(get_pair_locks),
) -> FriendshipService:
    return FriendshipService(db, locks)


def _session_token(request: Request, settings: Settings) -> Optional[str]:
    # An explicit Authorization header wins over the browser cookie
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the signed-in user from the session cookie or bearer token"""
    token = _session_token(request, settings)
    if not token:
        raise AuthenticationError("Unauthorized - no token provided")

    user = auth_service.user_for_token(decode_access_token(settings, token))
    if user is None:
        raise AuthenticationError("Unauthorized - invalid token")
    return user

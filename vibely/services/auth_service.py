"""
Authentication Service - signup, login, onboarding and session tokens
"""
import logging
import re
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from vibely.core.config import Settings
from vibely.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from vibely.core.security import create_access_token, get_password_hash, verify_password
from vibely.database import atomic
from vibely.models.user import User
from vibely.repositories import UserRepository
from vibely.schemas.auth import LoginRequest, OnboardingRequest, SignupRequest
from vibely.services.chat_service import ChatService

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
ONBOARDING_FIELDS = ("full_name", "bio", "native_language", "learning_language", "location")


class AuthService:
    """Service for authentication operations"""

    def __init__(self, db: Session, settings: Settings, chat: Optional[ChatService] = None):
        self.db = db
        self.settings = settings
        self.chat = chat
        self.users = UserRepository(db)

    def signup(self, data: SignupRequest) -> User:
        """Create an account with the default avatar"""
        if not data.email or not data.password or not data.full_name:
            raise ValidationError("All fields are required")

        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        if not EMAIL_PATTERN.match(data.email.strip()):
            raise ValidationError("Invalid email format")

        if self.users.get_by_email(data.email):
            raise ValidationError("This email is already registered, please use a different one")

        with atomic(self.db):
            user = self.users.create(
                email=data.email,
                password_hash=get_password_hash(data.password),
                full_name=data.full_name.strip(),
                profile_pic=self.settings.DEFAULT_AVATAR_URL,
            )

        logger.info(f"Created new user with ID: {user.id}")
        self._sync_chat_user(user)
        return user

    def login(self, data: LoginRequest) -> User:
        if not data.email or not data.password:
            raise ValidationError("All fields are required")

        user = self.users.get_by_email(data.email)
        if not user or not verify_password(data.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        logger.info(f"User logged in: {user.id}")
        return user

    def onboard(self, user_id: UUID, data: OnboardingRequest) -> User:
        """Fill in the profile and mark the user as onboarded"""
        values = data.model_dump()
        missing = [field for field in ONBOARDING_FIELDS if not values.get(field)]
        if missing:
            raise ValidationError(
                "All fields are required",
                missing_fields=[self._wire_name(data, field) for field in missing],
            )

        user = self.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        updates = {field: values[field] for field in ONBOARDING_FIELDS}
        if data.profile_pic:
            updates["profile_pic"] = data.profile_pic
        updates["is_onboarded"] = True

        with atomic(self.db):
            self.users.update(user, updates, allow={"is_onboarded"})

        logger.info(f"User onboarded: {user.id}")
        self._sync_chat_user(user)
        return user

    def user_for_token(self, user_id: Optional[str]) -> Optional[User]:
        """Resolve the user id carried by a session token"""
        if not user_id:
            return None
        try:
            return self.users.get_by_id(UUID(str(user_id)))
        except (ValueError, TypeError):
            return None

    def create_access_token_for_user(self, user: User) -> str:
        """Create session token for user"""
        return create_access_token(self.settings, str(user.id))

    def _sync_chat_user(self, user: User) -> None:
        if self.chat is not None:
            self.chat.upsert_user(user)

    @staticmethod
    def _wire_name(data: OnboardingRequest, field: str) -> str:
        return type(data).model_fields[field].alias or field

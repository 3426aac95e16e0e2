"""
User Service - profile edits, password changes and account deletion
"""
import logging
from uuid import UUID

from sqlalchemy.orm import Session

from vibely.core.exceptions import NotFoundError, ValidationError
from vibely.core.security import get_password_hash, verify_password
from vibely.database import atomic
from vibely.models.user import User
from vibely.repositories import FriendRequestRepository, UserRepository
from vibely.schemas.user import ChangePasswordRequest, ProfileUpdate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.requests = FriendRequestRepository(db)

    def _get_user(self, user_id: UUID) -> User:
        user = self.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: UUID, data: ProfileUpdate) -> User:
        """Update display name and bio; an empty name is ignored, an empty bio is applied"""
        user = self._get_user(user_id)

        updates = {}
        if data.full_name:
            updates["full_name"] = data.full_name.strip()
        if data.bio is not None:
            updates["bio"] = data.bio

        if updates:
            with atomic(self.db):
                self.users.update(user, updates)
            logger.info(f"Updated profile for user: {user.id}")
        return user

    def change_password(self, user_id: UUID, data: ChangePasswordRequest) -> None:
        user = self._get_user(user_id)

        if not verify_password(data.current_password, user.password_hash):
            raise ValidationError("Current password is incorrect")

        with atomic(self.db):
            self.users.update_password(user, get_password_hash(data.new_password))
        logger.info(f"Password changed for user: {user.id}")

    def delete_account(self, user_id: UUID, password: str) -> None:
        """
        Delete the account after checking its password.

        Every friend request involving the user is purged and the user is
        removed from its friends' friend sets, all in one transaction.
        """
        user = self._get_user(user_id)

        if not verify_password(password, user.password_hash):
            raise ValidationError("Incorrect password")

        with atomic(self.db):
            purged = self.requests.delete_all_involving(user.id)
            unlinked = self.users.delete(user)

        logger.info(
            f"Deleted account {user_id}: {purged} friend requests purged, "
            f"removed from {unlinked} friend lists"
        )

"""
User directory: identity/profile records and each user's friend set.

Methods flush but never commit; the calling service owns the transaction.
"""
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, insert, or_, select
from sqlalchemy.orm import Session

from vibely.models.user import User, user_friends
from vibely.utils.time_utils import utc_now

# Fields a profile update may never touch
PROTECTED_FIELDS = {"id", "email", "password_hash", "created_at", "updated_at", "is_onboarded"}


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Retrieves a User by primary id"""
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieves a User by email, compared case-insensitively"""
        if not email:
            return None
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def create(self, email: str, password_hash: str, full_name: str, profile_pic: str = "") -> User:
        user = User(
            email=email.strip().lower(),
            password_hash=password_hash,
            full_name=full_name,
            profile_pic=profile_pic,
            is_onboarded=False,
        )
        self.db.add(user)
        self.db.flush()
        return user

    def update(self, user: User, update_data: Dict[str, Any], allow: Optional[set] = None) -> User:
        """Apply field updates, skipping protected attributes unless allowed"""
        allow = allow or set()
        for key, value in update_data.items():
            if key in PROTECTED_FIELDS and key not in allow:
                continue
            if hasattr(user, key):
                setattr(user, key, value)
        user.updated_at = utc_now()
        self.db.flush()
        return user

    def update_password(self, user: User, new_password_hash: str) -> None:
        user.password_hash = new_password_hash
        user.updated_at = utc_now()
        self.db.flush()

    # Friend set

    def is_friend(self, user_id: UUID, other_id: UUID) -> bool:
        stmt = select(user_friends.c.user_id).where(
            user_friends.c.user_id == user_id,
            user_friends.c.friend_id == other_id,
        )
        return self.db.execute(stmt).first() is not None

    def add_to_friend_set(self, user_id: UUID, other_id: UUID) -> bool:
        """Add other_id to user_id's friend set. Returns False when already present."""
        if user_id == other_id:
            raise ValueError("A user cannot be their own friend")
        if self.is_friend(user_id, other_id):
            return False
        self.db.execute(
            insert(user_friends).values(user_id=user_id, friend_id=other_id, created_at=utc_now())
        )
        return True

    def remove_from_friend_set(self, user_id: UUID, other_id: UUID) -> bool:
        """Remove other_id from user_id's friend set. Returns False when absent."""
        result = self.db.execute(
            delete(user_friends).where(
                user_friends.c.user_id == user_id,
                user_friends.c.friend_id == other_id,
            )
        )
        return result.rowcount > 0

    def friend_ids(self, user_id: UUID) -> List[UUID]:
        stmt = select(user_friends.c.friend_id).where(user_friends.c.user_id == user_id)
        return list(self.db.execute(stmt).scalars())

    def list_friends(self, user_id: UUID) -> List[User]:
        return (
            self.db.query(User)
            .join(user_friends, user_friends.c.friend_id == User.id)
            .filter(user_friends.c.user_id == user_id)
            .order_by(User.full_name)
            .all()
        )

    def list_recommendations(self, user_id: UUID) -> List[User]:
        """Onboarded users that are neither user_id nor already its friends"""
        friends_of_user = select(user_friends.c.friend_id).where(user_friends.c.user_id == user_id)
        return (
            self.db.query(User)
            .filter(
                User.id != user_id,
                User.id.not_in(friends_of_user),
                User.is_onboarded.is_(True),
            )
            .order_by(User.created_at)
            .all()
        )

    def delete(self, user: User) -> int:
        """
        Delete a user and strip it from every friend set.

        Returns the number of counterpart friend sets it was removed from.
        """
        removed = self.db.execute(
            delete(user_friends).where(
                or_(
                    user_friends.c.friend_id == user.id,
                    user_friends.c.user_id == user.id,
                )
            )
        )
        self.db.delete(user)
        self.db.flush()
        # Each friendship is two rows
        return removed.rowcount // 2

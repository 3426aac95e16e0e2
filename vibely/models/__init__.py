"""
Database models for Vibely Backend

All models should be imported here for Alembic to detect them.
"""
from vibely.models.user import User, user_friends
from vibely.models.friend_request import (
    FriendRequest,
    STATUS_ACCEPTED,
    STATUS_PENDING,
    make_pair_key,
)

__all__ = [
    # User
    "User",
    "user_friends",
    # Friend requests
    "FriendRequest",
    "STATUS_ACCEPTED",
    "STATUS_PENDING",
    "make_pair_key",
]

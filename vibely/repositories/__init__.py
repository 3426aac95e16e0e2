from .friend_request_repository import FriendRequestRepository
from .user_repository import UserRepository

__all__ = ["FriendRequestRepository", "UserRepository"]

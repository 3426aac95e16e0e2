"""
User, friend and friend request endpoints
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from vibely.core.dependencies import (
    get_current_user,
    get_friendship_service,
    get_user_service,
)
from vibely.models.user import User
from vibely.schemas.friend_request import (
    FriendRequestCreated,
    FriendRequestResponse,
    FriendRequestsResponse,
    OutgoingFriendRequest,
)
from vibely.schemas.user import (
    ChangePasswordRequest,
    DeleteAccountRequest,
    MessageResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    RecommendedUser,
    RecommendedUsersResponse,
    UserSummary,
)
from vibely.services.friendship_service import FriendshipService
from vibely.services.user_service import UserService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=RecommendedUsersResponse)
def get_recommended_users(
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    """Onboarded users who are neither you nor already your friends"""
    users = friendship_service.list_recommendations(current_user.id)
    return {"recommended_user": [RecommendedUser.model_validate(u) for u in users]}


@router.get("/friends", response_model=List[UserSummary])
def get_my_friends(
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    """Get current user's friends list"""
    return friendship_service.list_friends(current_user.id)


@router.post(
    "/friend-request/{recipient_id}",
    response_model=FriendRequestCreated,
    status_code=status.HTTP_201_CREATED,
)
def send_friend_request(
    recipient_id: UUID,
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    """Send a friend request to another user"""
    friend_request = friendship_service.send_request(current_user.id, recipient_id)
    return {"friend_request": FriendRequestResponse(
        id=friend_request.id,
        sender=friend_request.sender_id,
        recipient=friend_request.recipient_id,
        status=friend_request.status,
        created_at=friend_request.created_at,
        updated_at=friend_request.updated_at,
    )}


@router.put("/friend-request/{request_id}/accept", response_model=MessageResponse)
def accept_friend_request(
    request_id: UUID,
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    """Accept a friend request addressed to you"""
    friendship_service.accept_request(current_user.id, request_id)
    return {"message": "Friend request accepted"}


@router.delete("/friend-requests/{request_id}/decline", response_model=MessageResponse)
def decline_friend_request(
    request_id: UUID,
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    """Decline a pending friend request addressed to you"""
    friendship_service.decline_request(current_user.id, request_id)
    return {"message": "Friend request declined"}


@router.delete("/friend-requests/{request_id}/cancel", response_model=MessageResponse)
def cancel_friend_request(
    request_id: UUID,
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    """Withdraw a pending friend request you sent"""
    friendship_service.cancel_request(current_user.id, request_id)
    return {"message": "Friend request cancelled"}


@router.get("/friend-requests", response_model=FriendRequestsResponse)
def get_friend_requests(
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    """Incoming pending requests plus accepted ones for the notifications feed"""
    return friendship_service.get_friend_requests(current_user.id)


@router.get("/outgoing-friend-requests", response_model=List[OutgoingFriendRequest])
def get_outgoing_friend_requests(
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    """Pending requests you sent"""
    return friendship_service.list_outgoing(current_user.id)


@router.delete("/friends/{friend_id}", response_model=MessageResponse)
def remove_friend(
    friend_id: UUID,
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    """Remove a friend; succeeds even if you were not friends"""
    friendship_service.remove_friend(current_user.id, friend_id)
    return {"message": "Friend removed successfully"}


@router.patch("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    update_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Update current user's display name and bio"""
    user = user_service.update_profile(current_user.id, update_data)
    return {"message": "Profile updated successfully", "user": user}


@router.patch("/change-password", response_model=MessageResponse)
def change_password(
    data: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Change password after confirming the current one"""
    user_service.change_password(current_user.id, data)
    return {"message": "Password updated successfully"}


@router.delete("/account", response_model=MessageResponse)
def delete_account(
    data: DeleteAccountRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """
    Delete your account

    Removes you from every friend list and deletes all friend requests you
    sent or received.
    """
    user_id = current_user.id
    user_service.delete_account(user_id, data.password)
    logger.info(f"Account deleted on request: {user_id}")
    return {"message": "Account deleted successfully"}

"""
Friend request schemas
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from vibely.schemas.base import CamelModel
from vibely.schemas.user import UserSummary


class FriendRequestResponse(CamelModel):
    """Friend request record"""
    id: UUID
    sender: UUID
    recipient: UUID
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class FriendRequestCreated(CamelModel):
    friend_request: FriendRequestResponse


class IncomingFriendRequest(CamelModel):
    """Pending request joined with the sender's public profile"""
    id: UUID
    sender: UserSummary
    recipient: UUID
    status: str
    created_at: datetime


class OutgoingFriendRequest(CamelModel):
    """Pending request joined with the recipient's public profile"""
    id: UUID
    sender: UUID
    recipient: UserSummary
    status: str
    created_at: datetime


class AcceptedFriendRequest(CamelModel):
    """Accepted request joined with the other party, for the notifications feed"""
    id: UUID
    sender: UUID
    recipient: UUID
    counterpart: UserSummary
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class FriendRequestsResponse(CamelModel):
    incoming_reqs: List[IncomingFriendRequest]
    accepted_reqs: List[AcceptedFriendRequest]

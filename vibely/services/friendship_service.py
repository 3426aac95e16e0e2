"""
Friendship service: friend requests, friend sets and recommendations
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vibely.core.exceptions import (
    AlreadyFriendsError,
    DuplicateRequestError,
    ForbiddenError,
    NotFoundError,
    SelfReferenceError,
)
from vibely.core.locks import PairLockRegistry
from vibely.database import atomic
from vibely.models.friend_request import FriendRequest
from vibely.models.user import User
from vibely.repositories import FriendRequestRepository, UserRepository
from vibely.schemas.friend_request import (
    AcceptedFriendRequest,
    FriendRequestsResponse,
    IncomingFriendRequest,
    OutgoingFriendRequest,
)
from vibely.schemas.user import UserSummary

logger = logging.getLogger(__name__)

REQUEST_NOT_FOUND = "Friend request not found"


class FriendshipService:
    """
    Moves a pair of users between strangers, pending and friends.

    Every check runs before any write. Writes touching both users happen
    under the pair lock and inside one transaction, so a friend set is never
    observed with only one side of a friendship.
    """

    def __init__(self, db: Session, locks: PairLockRegistry):
        self.db = db
        self.locks = locks
        self.users = UserRepository(db)
        self.requests = FriendRequestRepository(db)

    # Reads

    def list_recommendations(self, user_id: UUID) -> List[User]:
        """Onboarded users other than user_id and its current friends"""
        return self.users.list_recommendations(user_id)

    def list_friends(self, user_id: UUID) -> List[User]:
        return self.users.list_friends(user_id)

    def are_friends(self, user_id: UUID, other_user_id: UUID) -> bool:
        return self.users.is_friend(user_id, other_user_id)

    # Transitions

    def send_request(self, sender_id: UUID, recipient_id: UUID) -> FriendRequest:
        """Create a pending request from sender_id to recipient_id"""
        if sender_id == recipient_id:
            raise SelfReferenceError("You can't send a friend request to yourself")

        with self.locks.hold(sender_id, recipient_id):
            recipient = self.users.get_by_id(recipient_id)
            if not recipient:
                raise NotFoundError("Recipient not found")

            if self.users.is_friend(recipient_id, sender_id):
                raise AlreadyFriendsError("You are already friends with this user")

            if self.requests.find_pending(sender_id, recipient_id):
                raise DuplicateRequestError(
                    "A friend request already exists between you and this user"
                )

            try:
                with atomic(self.db):
                    friend_request = self.requests.create(sender_id, recipient_id)
            except IntegrityError:
                # Another process created the pending request first
                raise DuplicateRequestError(
                    "A friend request already exists between you and this user"
                )

        logger.info(f"Friend request {friend_request.id} sent: {sender_id} -> {recipient_id}")
        return friend_request

    def accept_request(self, acting_user_id: UUID, request_id: UUID) -> FriendRequest:
        """Accept a pending request addressed to acting_user_id and link both friend sets"""
        friend_request = self.requests.get_by_id(request_id)
        if not friend_request:
            raise NotFoundError(REQUEST_NOT_FOUND)

        if friend_request.recipient_id != acting_user_id:
            raise ForbiddenError("You are not authorized to accept this request")

        sender_id, recipient_id = friend_request.sender_id, friend_request.recipient_id
        with self.locks.hold(sender_id, recipient_id):
            friend_request = self._reload(request_id)
            # Only a pending request can create a friendship
            if not friend_request or not friend_request.is_pending:
                raise NotFoundError(REQUEST_NOT_FOUND)

            with atomic(self.db):
                self.requests.set_accepted(friend_request)
                self.users.add_to_friend_set(sender_id, recipient_id)
                self.users.add_to_friend_set(recipient_id, sender_id)

        logger.info(f"Friend request {request_id} accepted: {sender_id} <-> {recipient_id}")
        return friend_request

    def decline_request(self, acting_user_id: UUID, request_id: UUID) -> None:
        """Recipient turns down a pending request; the record is deleted"""
        self._delete_pending(request_id, lambda r: r.recipient_id == acting_user_id)
        logger.info(f"Friend request {request_id} declined by {acting_user_id}")

    def cancel_request(self, acting_user_id: UUID, request_id: UUID) -> None:
        """Sender withdraws a pending request; the record is deleted"""
        self._delete_pending(request_id, lambda r: r.sender_id == acting_user_id)
        logger.info(f"Friend request {request_id} cancelled by {acting_user_id}")

    def remove_friend(self, user_id: UUID, friend_id: UUID) -> bool:
        """
        Unlink user_id and friend_id on both sides.

        Removing someone who is not a friend is a no-op. Request history is
        left untouched. Returns whether anything changed.
        """
        if user_id == friend_id:
            return False

        with self.locks.hold(user_id, friend_id):
            with atomic(self.db):
                removed = self.users.remove_from_friend_set(user_id, friend_id)
                removed_back = self.users.remove_from_friend_set(friend_id, user_id)

        if removed or removed_back:
            logger.info(f"Friendship removed: {user_id} <-> {friend_id}")
        return removed or removed_back

    # Joined views

    def list_incoming(self, user_id: UUID) -> List[IncomingFriendRequest]:
        """Pending requests addressed to user_id, with the sender's profile"""
        incoming = []
        for fr in self.requests.list_incoming(user_id):
            sender = self._summary(fr.sender_id, fr.id)
            if sender is None:
                continue
            incoming.append(IncomingFriendRequest(
                id=fr.id,
                sender=sender,
                recipient=fr.recipient_id,
                status=fr.status,
                created_at=fr.created_at,
            ))
        return incoming

    def list_outgoing(self, user_id: UUID) -> List[OutgoingFriendRequest]:
        """Pending requests sent by user_id, with the recipient's profile"""
        outgoing = []
        for fr in self.requests.list_outgoing(user_id):
            recipient = self._summary(fr.recipient_id, fr.id)
            if recipient is None:
                continue
            outgoing.append(OutgoingFriendRequest(
                id=fr.id,
                sender=fr.sender_id,
                recipient=recipient,
                status=fr.status,
                created_at=fr.created_at,
            ))
        return outgoing

    def list_accepted(self, user_id: UUID) -> List[AcceptedFriendRequest]:
        """
        Accepted requests involving user_id, with the other party's profile.

        This feeds the "recently connected" notifications only; the friend
        set is what decides whether two users are friends.
        """
        accepted = []
        for fr in self.requests.list_accepted(user_id):
            counterpart = self._summary(fr.counterpart_id(user_id), fr.id)
            if counterpart is None:
                continue
            accepted.append(AcceptedFriendRequest(
                id=fr.id,
                sender=fr.sender_id,
                recipient=fr.recipient_id,
                counterpart=counterpart,
                status=fr.status,
                created_at=fr.created_at,
                updated_at=fr.updated_at,
            ))
        return accepted

    def get_friend_requests(self, user_id: UUID) -> FriendRequestsResponse:
        return FriendRequestsResponse(
            incoming_reqs=self.list_incoming(user_id),
            accepted_reqs=self.list_accepted(user_id),
        )

    # Helpers

    def _reload(self, request_id: UUID) -> Optional[FriendRequest]:
        """Re-read a request after taking its pair lock"""
        self.db.expire_all()
        return self.requests.get_by_id(request_id)

    def _delete_pending(self, request_id: UUID, is_owner) -> None:
        friend_request = self.requests.get_by_id(request_id)
        if not friend_request or not friend_request.is_pending or not is_owner(friend_request):
            raise NotFoundError(REQUEST_NOT_FOUND)

        with self.locks.hold(friend_request.sender_id, friend_request.recipient_id):
            friend_request = self._reload(request_id)
            if not friend_request or not friend_request.is_pending:
                raise NotFoundError(REQUEST_NOT_FOUND)

            with atomic(self.db):
                self.requests.delete(friend_request)

    def _summary(self, user_id: UUID, request_id: UUID) -> Optional[UserSummary]:
        user = self.users.get_by_id(user_id)
        if user is None:
            logger.warning(f"Friend request {request_id} references missing user {user_id}; skipped")
            return None
        return UserSummary.model_validate(user)

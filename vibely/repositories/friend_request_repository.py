"""
Friend request ledger.

Methods flush but never commit; the calling service owns the transaction.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, delete, or_
from sqlalchemy.orm import Session

from vibely.models.friend_request import (
    STATUS_ACCEPTED,
    STATUS_PENDING,
    FriendRequest,
    make_pair_key,
)
from vibely.utils.time_utils import utc_now


class FriendRequestRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, request_id: UUID) -> Optional[FriendRequest]:
        return self.db.get(FriendRequest, request_id)

    def find_pending(self, a: UUID, b: UUID) -> Optional[FriendRequest]:
        """Pending request between a and b, in either direction"""
        return self.db.query(FriendRequest).filter(
            or_(
                and_(FriendRequest.sender_id == a, FriendRequest.recipient_id == b),
                and_(FriendRequest.sender_id == b, FriendRequest.recipient_id == a),
            ),
            FriendRequest.status == STATUS_PENDING,
        ).first()

    def create(self, sender_id: UUID, recipient_id: UUID) -> FriendRequest:
        friend_request = FriendRequest(
            sender_id=sender_id,
            recipient_id=recipient_id,
            pair_key=make_pair_key(sender_id, recipient_id),
            status=STATUS_PENDING,
        )
        self.db.add(friend_request)
        self.db.flush()
        return friend_request

    def set_accepted(self, friend_request: FriendRequest) -> FriendRequest:
        friend_request.status = STATUS_ACCEPTED
        friend_request.updated_at = utc_now()
        self.db.flush()
        return friend_request

    def delete(self, friend_request: FriendRequest) -> None:
        self.db.delete(friend_request)
        self.db.flush()

    def delete_all_involving(self, user_id: UUID) -> int:
        result = self.db.execute(
            delete(FriendRequest).where(
                or_(FriendRequest.sender_id == user_id, FriendRequest.recipient_id == user_id)
            )
        )
        return result.rowcount

    def list_incoming(self, user_id: UUID) -> List[FriendRequest]:
        return self.db.query(FriendRequest).filter(
            FriendRequest.recipient_id == user_id,
            FriendRequest.status == STATUS_PENDING,
        ).order_by(FriendRequest.created_at.desc()).all()

    def list_outgoing(self, user_id: UUID) -> List[FriendRequest]:
        return self.db.query(FriendRequest).filter(
            FriendRequest.sender_id == user_id,
            FriendRequest.status == STATUS_PENDING,
        ).order_by(FriendRequest.created_at.desc()).all()

    def list_accepted(self, user_id: UUID) -> List[FriendRequest]:
        return self.db.query(FriendRequest).filter(
            or_(FriendRequest.sender_id == user_id, FriendRequest.recipient_id == user_id),
            FriendRequest.status == STATUS_ACCEPTED,
        ).order_by(FriendRequest.updated_at.desc()).all()

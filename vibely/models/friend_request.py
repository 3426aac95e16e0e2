"""
Friend request ledger model
"""
from uuid import uuid4
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, Uuid, text
from sqlalchemy.orm import relationship
from vibely.database import Base
from vibely.utils.time_utils import utc_now

STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"


def make_pair_key(a, b) -> str:
    """Canonical key for the unordered pair {a, b}"""
    low, high = sorted((str(a), str(b)))
    return f"{low}:{high}"


class FriendRequest(Base):
    """Directional friend request from sender to recipient"""
    __tablename__ = "friend_requests"

    id = Column(Uuid, primary_key=True, default=uuid4)
    sender_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    pair_key = Column(String(80), nullable=False, index=True)

    # Status: 'pending', 'accepted'
    status = Column(String(20), default=STATUS_PENDING, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    __table_args__ = (
        CheckConstraint("sender_id <> recipient_id", name="ck_friend_requests_no_self"),
        CheckConstraint("status IN ('pending', 'accepted')", name="ck_friend_requests_status"),
        # At most one pending request per unordered pair
        Index(
            "uq_friend_requests_pending_pair",
            "pair_key",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )

    # Relationships
    sender = relationship("User", foreign_keys=[sender_id])
    recipient = relationship("User", foreign_keys=[recipient_id])

    @property
    def is_pending(self) -> bool:
        return self.status == STATUS_PENDING

    def counterpart_id(self, user_id):
        """The other party of this request, seen from user_id"""
        return self.recipient_id if self.sender_id == user_id else self.sender_id

"""
User model and the friend association table
"""
from uuid import uuid4
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship
from vibely.database import Base
from vibely.utils.time_utils import utc_now


# One row per direction: a friendship between A and B is the pair of rows
# (A, B) and (B, A), always written and removed in the same transaction.
user_friends = Table(
    "user_friends",
    Base.metadata,
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("friend_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True),
    Column("created_at", DateTime, default=utc_now),
    CheckConstraint("user_id <> friend_id", name="ck_user_friends_no_self"),
)


class User(Base):
    """User account model"""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Profile
    full_name = Column(String(255), nullable=False)
    bio = Column(Text, default="")
    profile_pic = Column(Text, default="")
    native_language = Column(String(64), default="")
    learning_language = Column(String(64), default="")
    location = Column(String(255), default="")
    is_onboarded = Column(Boolean, default=False, nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Relationships
    friends = relationship(
        "User",
        secondary=user_friends,
        primaryjoin=id == user_friends.c.user_id,
        secondaryjoin=id == user_friends.c.friend_id,
        viewonly=True,
        order_by=full_name,
    )

    @property
    def friend_ids(self):
        return [friend.id for friend in self.friends]

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"

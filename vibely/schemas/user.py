"""User schemas for request/response validation"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_serializer

from vibely.schemas.base import CamelModel


class UserResponse(CamelModel):
    """Full user profile, without the password hash"""
    id: UUID
    email: str
    full_name: str
    bio: Optional[str] = ""
    profile_pic: Optional[str] = ""
    native_language: Optional[str] = ""
    learning_language: Optional[str] = ""
    location: Optional[str] = ""
    is_onboarded: bool
    friends: List[UUID] = Field(default_factory=list, validation_alias="friend_ids")
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_serializer('created_at', 'updated_at')
    def serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        return value.isoformat()


class UserSummary(CamelModel):
    """Public profile fields shown on cards and request lists"""
    id: UUID
    full_name: str
    profile_pic: Optional[str] = ""
    native_language: Optional[str] = ""
    learning_language: Optional[str] = ""


class RecommendedUser(UserSummary):
    """Recommendation card"""
    bio: Optional[str] = ""
    location: Optional[str] = ""


class RecommendedUsersResponse(CamelModel):
    recommended_user: List[RecommendedUser]


class ProfileUpdate(CamelModel):
    """Schema for updating user profile"""
    full_name: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = Field(None, max_length=2000)


class ProfileUpdateResponse(CamelModel):
    message: str
    user: UserResponse


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class DeleteAccountRequest(CamelModel):
    password: str = Field(..., min_length=1)


class MessageResponse(CamelModel):
    message: str

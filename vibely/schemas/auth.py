"""Authentication schemas"""
from typing import Optional

from pydantic import Field

from vibely.schemas.base import CamelModel
from vibely.schemas.user import UserResponse


class SignupRequest(CamelModel):
    """Signup body; completeness and format are checked by AuthService"""
    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class OnboardingRequest(CamelModel):
    full_name: Optional[str] = None
    bio: Optional[str] = None
    native_language: Optional[str] = None
    learning_language: Optional[str] = None
    location: Optional[str] = None
    profile_pic: Optional[str] = Field(None, max_length=2048)


class AuthResponse(CamelModel):
    """Response carrying the authenticated user"""
    success: bool = True
    user: UserResponse


class LogoutResponse(CamelModel):
    success: bool = True
    message: str

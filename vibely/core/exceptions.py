"""
Application error taxonomy.

Services raise these; the handlers installed in ``vibely.main`` render them as
``{"message": ...}`` with the matching status code.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a client-facing response"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None, **extra):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class SelfReferenceError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "You can't send a friend request to yourself"


class AlreadyFriendsError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "You are already friends with this user"


class DuplicateRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "A friend request already exists between you and this user"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized - no valid session"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not authorized to perform this action"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ChatProviderError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Chat service is unavailable"

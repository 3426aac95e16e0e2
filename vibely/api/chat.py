"""
Chat provider endpoints
"""
from fastapi import APIRouter, Depends

from vibely.core.dependencies import get_chat_service, get_current_user
from vibely.models.user import User
from vibely.schemas.chat import ChatTokenResponse
from vibely.services.chat_service import ChatService

router = APIRouter()


@router.get("/token", response_model=ChatTokenResponse)
def get_chat_token(
    current_user: User = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
):
    """Token the frontend chat/video SDK connects with"""
    return {"token": chat_service.create_token(current_user.id)}

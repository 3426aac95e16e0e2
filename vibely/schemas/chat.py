"""Chat provider schemas"""
from vibely.schemas.base import CamelModel


class ChatTokenResponse(CamelModel):
    token: str

"""
Chat Service - hosted chat/video provider (Stream) integration

Only two things are needed from the provider: a user token the frontend SDK
connects with, and keeping the provider's copy of each user's name and
avatar in sync.
"""
import logging
from typing import Optional

from stream_chat import StreamChat

from vibely.core.config import Settings
from vibely.core.exceptions import ChatProviderError
from vibely.models.user import User

logger = logging.getLogger(__name__)


class ChatService:
    """Service for chat provider operations"""

    def __init__(self, settings: Settings, client: Optional[StreamChat] = None):
        self.settings = settings
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self.settings.chat_configured

    @property
    def client(self) -> StreamChat:
        """Server-side SDK client, built on first use"""
        if self._client is None:
            self._client = StreamChat(
                api_key=self.settings.STREAM_API_KEY,
                api_secret=self.settings.STREAM_API_SECRET,
                timeout=self.settings.STREAM_TIMEOUT_SECONDS,
            )
        return self._client

    def create_token(self, user_id) -> str:
        """Sign a chat user token for user_id"""
        if not self.is_configured:
            logger.error("Chat token requested but STREAM_API_KEY/STREAM_API_SECRET are not set")
            raise ChatProviderError("Chat service is not configured")
        return self.client.create_token(str(user_id))

    def upsert_user(self, user: User) -> bool:
        """
        Create or update the provider's record of a user.

        Failures are logged and reported as False; they never break the
        account operation that triggered the sync.
        """
        if not self.is_configured:
            logger.warning(f"Chat service not configured; skipping upsert for user {user.id}")
            return False

        user_id = str(user.id)
        try:
            self.client.upsert_user({
                "id": user_id,
                "name": user.full_name,
                "image": user.profile_pic or "",
            })
        except Exception as e:
            logger.error(f"Error upserting chat user {user_id}: {e}")
            return False

        logger.info(f"Chat user upserted: {user.full_name} ({user_id})")
        return True

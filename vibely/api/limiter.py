"""
Rate limiter construction; each application builds and owns its own
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from vibely.core.config import Settings


def create_limiter(settings: Settings) -> Limiter:
    """Limiter keyed by client address, switched by RATE_LIMIT_ENABLED"""
    return Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

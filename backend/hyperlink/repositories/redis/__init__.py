"""
Redis Repository Implementation Module Initialization
"""

from hyperlink.repositories.redis.message_repo import RedisMessageRepository

__all__ = [
    "RedisMessageRepository",
]

"""
Connection Management Module Initialization
"""

from hyperlink.db.redis import create_redis_client, ping_redis

__all__ = [
    "create_redis_client",
    "ping_redis",
]

"""
Message Repository Factory Module

Creates the configured message storage backend.
"""

import logging
from typing import Optional

from redis.asyncio import Redis

from hyperlink.common.errors import UnsupportedBackendError
from hyperlink.db.redis import create_redis_client
from hyperlink.domain.storage import StorageConfig
from hyperlink.repositories.memory import MemoryMessageRepository
from hyperlink.repositories.message_repo import MessageRepository
from hyperlink.repositories.redis import RedisMessageRepository

logger = logging.getLogger(__name__)

CLIENT_MEMORY = "memory"
CLIENT_REDIS = "external-kv"

_CLIENT_ALIASES = {
    "memory": CLIENT_MEMORY,
    "external-kv": CLIENT_REDIS,
    "redis": CLIENT_REDIS,
}


def resolve_client(client: str) -> str:
    """
    Normalize a storage client name

    Args:
        client: Configured client name (case insensitive)

    Returns:
        str: CLIENT_MEMORY or CLIENT_REDIS

    Raises:
        UnsupportedBackendError: Unknown client name
    """
    resolved = _CLIENT_ALIASES.get((client or "").strip().lower())
    if resolved is None:
        raise UnsupportedBackendError(client)
    return resolved


def create_message_repository(
    config: StorageConfig,
    redis_client: Optional[Redis] = None,
) -> MessageRepository:
    """
    Create the message repository for the configured client

    The configured TTL is passed to whichever backend is built.

    Args:
        config: Storage configuration
        redis_client: Existing Redis client to use instead of creating one

    Returns:
        MessageRepository: Initialized backend

    Raises:
        UnsupportedBackendError: Unknown client name
    """
    client = resolve_client(config.client)

    if client == CLIENT_MEMORY:
        repo = MemoryMessageRepository(
            ttl=config.ttl,
            prune_interval=config.memory.prune_interval,
            key_length=config.key_length,
        )
    else:
        owns_client = redis_client is None
        if redis_client is None:
            redis_client = create_redis_client(config.redis)
        repo = RedisMessageRepository(
            redis_client,
            ttl=config.ttl,
            key_length=config.key_length,
            owns_client=owns_client,
        )

    logger.info(
        f"Message storage initialized: client={client}, ttl={config.ttl.total_seconds()}s"
    )
    return repo

"""
Redis Connection Management Module

Provides Redis client construction for the message store backend.
Only used when STORAGE_CLIENT selects Redis.
"""

import logging
import warnings

from redis.asyncio import Redis
from redis.exceptions import RedisError

from hyperlink.common.errors import BackendError
from hyperlink.domain.storage import RedisStorageConfig

logger = logging.getLogger(__name__)

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


def _check_redis_security(config: RedisStorageConfig) -> None:
    """
    Check Redis connection security.

    Warns if no password is configured and the server is not on localhost.
    """
    if config.password or config.host in _LOCAL_HOSTS:
        return

    warnings.warn(
        "SECURITY WARNING: Redis connection has no password and is not connecting to localhost. "
        "This is insecure for production environments. "
        "Please set STORAGE_REDIS_PASSWORD.",
        UserWarning,
        stacklevel=3,
    )
    logger.warning(
        "Redis connection without password to non-localhost host detected. "
        "Consider adding password authentication for production."
    )


def create_redis_client(config: RedisStorageConfig) -> Redis:
    """
    Create Redis Client

    Responses are not decoded so binary payloads round-trip unchanged.
    The connection pool connects lazily on first command.

    Args:
        config: Redis backend options

    Returns:
        Redis: Async Redis client
    """
    _check_redis_security(config)

    return Redis(
        host=config.host,
        port=config.port,
        db=config.db,
        password=config.password or None,
        decode_responses=False,
    )


async def ping_redis(client: Redis) -> None:
    """
    Verify Redis connectivity

    Raises:
        BackendError: If the server cannot be reached
    """
    try:
        await client.ping()
    except RedisError as e:
        raise BackendError(
            f"Redis server is unreachable: {str(e)}",
            code="backend_unavailable",
        ) from e
    logger.info("Redis connection established")

"""
Message Repository Redis Implementation

Stores each message as a Redis hash with the fields `data`, `created`,
`filename` and `content-type`. Uses Redis native TTL for expiration.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Any, Mapping

from redis.asyncio import Redis
from redis.exceptions import RedisError

from hyperlink.common.errors import BackendError, MessageNotFoundError
from hyperlink.common.keys import DEFAULT_KEY_LENGTH
from hyperlink.common.time import from_unix_seconds, to_unix_seconds
from hyperlink.domain.message import Message, Metadata
from hyperlink.repositories.message_repo import MessageRepository

logger = logging.getLogger(__name__)

FIELD_DATA = "data"
FIELD_CREATED = "created"
FIELD_FILENAME = "filename"
FIELD_CONTENT_TYPE = "content-type"


class RedisMessageRepository(MessageRepository):
    """
    Message Repository Redis Implementation

    Writes (HSET + PEXPIRE) and consuming reads (HGETALL + DEL) each run in a
    single MULTI/EXEC transaction, so an entry never lives without a TTL and
    is handed to at most one reader.
    """

    def __init__(
        self,
        client: Redis,
        ttl: timedelta,
        key_length: int = DEFAULT_KEY_LENGTH,
        owns_client: bool = False,
    ):
        """
        Initialize Repository

        Args:
            client: Async Redis client instance (decode_responses=False)
            ttl: Time to live for messages
            key_length: Length of generated keys
            owns_client: Close the client in close()
        """
        super().__init__(ttl, key_length)
        self.client = client
        self.owns_client = owns_client

    @property
    def ttl_ms(self) -> int:
        return max(1, int(self.ttl.total_seconds() * 1000))

    def _serialize(self, message: Message) -> dict[str, Any]:
        """Convert a message to Redis hash fields"""
        return {
            FIELD_DATA: message.data,
            FIELD_CREATED: to_unix_seconds(message.meta.created),
            FIELD_FILENAME: message.meta.filename,
            FIELD_CONTENT_TYPE: message.meta.content_type,
        }

    def _deserialize_metadata(self, raw: Mapping) -> Metadata:
        """Convert Redis hash fields to metadata"""
        return Metadata(
            created=from_unix_seconds(_field(raw, FIELD_CREATED)),
            filename=_text(_field(raw, FIELD_FILENAME)),
            content_type=_text(_field(raw, FIELD_CONTENT_TYPE)),
        )

    def _deserialize(self, raw: Mapping) -> Message:
        """Convert Redis hash fields to a message"""
        data = _field(raw, FIELD_DATA)
        if isinstance(data, str):
            data = data.encode("utf-8")
        return Message(data=data, meta=self._deserialize_metadata(raw))

    async def get_metadata(self, key: str) -> Metadata:
        """Get metadata of a live message"""
        try:
            raw = await self.client.hgetall(key)
        except RedisError as e:
            logger.error(f"Redis metadata lookup failed for key {key}: {str(e)}")
            raise BackendError(details={"operation": "get_metadata"}) from e

        if not raw:
            raise MessageNotFoundError(key)
        return self._deserialize_metadata(raw)

    async def get_message(self, key: str) -> Message:
        """Get a live message and remove it in one transaction"""
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.hgetall(key)
                pipe.delete(key)
                raw, deleted_count = await pipe.execute()
        except RedisError as e:
            logger.error(f"Redis message fetch failed for key {key}: {str(e)}")
            raise BackendError(details={"operation": "get_message"}) from e

        if not raw or not deleted_count:
            raise MessageNotFoundError(key)
        return self._deserialize(raw)

    async def set_message(self, key: str, message: Message) -> None:
        """Store a message and arm its TTL in one transaction"""
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.hset(key, mapping=self._serialize(message))
                pipe.pexpire(key, self.ttl_ms)
                await pipe.execute()
        except RedisError as e:
            logger.error(f"Redis message store failed for key {key}: {str(e)}")
            raise BackendError(details={"operation": "set_message"}) from e

    async def run(self, stop_event: asyncio.Event) -> None:
        """
        No-op for Redis backend.

        Redis manages key expiration natively via TTL,
        so this only waits for the stop signal.
        """
        await stop_event.wait()

    async def close(self) -> None:
        if self.owns_client:
            await self.client.aclose()
            logger.info("Redis connection closed")


def _field(raw: Mapping, name: str) -> Any:
    """Read a hash field whether the client decodes responses or not"""
    value = raw.get(name.encode("utf-8"))
    if value is None:
        value = raw.get(name, b"")
    return value


def _text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value or ""

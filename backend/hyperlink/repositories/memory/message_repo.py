"""
Message Repository In-Memory Implementation

Keeps messages in a process-local dict. Contents are lost on restart.
"""

import asyncio
import logging
from datetime import timedelta

from hyperlink.common.errors import MessageNotFoundError
from hyperlink.common.keys import DEFAULT_KEY_LENGTH
from hyperlink.common.time import utc_now
from hyperlink.domain.message import Message, Metadata
from hyperlink.repositories.message_repo import MessageRepository

logger = logging.getLogger(__name__)


class MemoryMessageRepository(MessageRepository):
    """
    Message Repository In-Memory Implementation

    A single lock serializes every operation, including metadata reads.
    Expired entries are hidden on read and reclaimed by `run`.
    """

    def __init__(
        self,
        ttl: timedelta,
        prune_interval: timedelta = timedelta(minutes=5),
        key_length: int = DEFAULT_KEY_LENGTH,
    ):
        """
        Initialize Repository

        Args:
            ttl: Time to live for messages
            prune_interval: How often run() reclaims expired entries
            key_length: Length of generated keys
        """
        super().__init__(ttl, key_length)
        self.prune_interval = prune_interval
        self._data: dict[str, Message] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._data)

    async def get_metadata(self, key: str) -> Metadata:
        """Get metadata of a live message"""
        async with self._lock:
            message = self._data.get(key)
            if message is None or self.is_expired(message.meta):
                raise MessageNotFoundError(key)
            return message.meta

    async def get_message(self, key: str) -> Message:
        """Get a live message and remove it"""
        async with self._lock:
            message = self._data.get(key)
            if message is None or self.is_expired(message.meta):
                raise MessageNotFoundError(key)
            # Messages are only valid for one view
            del self._data[key]
            return message

    async def set_message(self, key: str, message: Message) -> None:
        """Store a message"""
        async with self._lock:
            self._data[key] = message

    async def prune_expired(self) -> int:
        """
        Delete all expired messages

        Returns:
            Number of deleted messages
        """
        async with self._lock:
            now = utc_now()
            expired = [
                key for key, message in self._data.items()
                if self.is_expired(message.meta, now)
            ]
            for key in expired:
                del self._data[key]
                logger.debug(f"Deleted expired message: {key}")
            return len(expired)

    async def run(self, stop_event: asyncio.Event) -> None:
        """Prune expired messages every prune_interval until stop_event is set"""
        interval = self.prune_interval.total_seconds()
        logger.info(f"Memory message pruner started (interval: {interval}s)")

        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass
            else:
                break

            try:
                deleted_count = await self.prune_expired()
                logger.debug(
                    f"Memory message prune completed: {deleted_count} expired messages deleted"
                )
            except Exception as e:
                logger.error(f"Memory message prune failed: {str(e)}", exc_info=True)

        logger.info("Memory message pruner stopped")

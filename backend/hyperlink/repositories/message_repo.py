"""
Message Repository Interface

Defines the storage contract every message backend must honor.
"""

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional

from hyperlink.common.keys import DEFAULT_KEY_LENGTH, new_key
from hyperlink.common.time import utc_now
from hyperlink.domain.message import Message, Metadata


class MessageRepository(ABC):
    """
    Message Repository Interface

    Messages are one-shot: the first successful `get_message` removes the
    entry. Entries become unobservable once `created + ttl` has passed,
    whether or not background maintenance has reclaimed them yet.
    """

    def __init__(self, ttl: timedelta, key_length: int = DEFAULT_KEY_LENGTH):
        """
        Initialize Repository

        Args:
            ttl: Time to live shared by all entries of this backend
            key_length: Length of keys returned by new_message_key
        """
        self.ttl = ttl
        self.key_length = key_length

    def is_expired(self, meta: Metadata, now: Optional[datetime] = None) -> bool:
        """Check whether an entry created at meta.created has outlived the TTL"""
        now = now or utc_now()
        return now - meta.created >= self.ttl

    @abstractmethod
    async def get_metadata(self, key: str) -> Metadata:
        """
        Get message metadata without consuming the message

        Args:
            key: Message key

        Returns:
            Metadata: Metadata of a live message

        Raises:
            MessageNotFoundError: If the key is absent, expired or consumed
        """
        pass

    @abstractmethod
    async def get_message(self, key: str) -> Message:
        """
        Get and remove a message

        The fetch and the removal happen atomically, so concurrent readers
        never both receive the same message.

        Args:
            key: Message key

        Returns:
            Message: The stored message

        Raises:
            MessageNotFoundError: If the key is absent, expired or consumed
        """
        pass

    @abstractmethod
    async def set_message(self, key: str, message: Message) -> None:
        """
        Store a message

        An existing entry at the same key may be overwritten.

        Args:
            key: Message key, usually from new_message_key()
            message: Message to store

        Raises:
            BackendError: If the underlying storage fails
        """
        pass

    def new_message_key(self) -> str:
        """
        Return a fresh random key

        The key is not reserved; collisions are left to the size of the key space.
        """
        return new_key(self.key_length)

    @abstractmethod
    async def run(self, stop_event: asyncio.Event) -> None:
        """
        Run background maintenance until stop_event is set

        Args:
            stop_event: Cancellation signal
        """
        pass

    async def close(self) -> None:
        """Release backend resources"""
        return None

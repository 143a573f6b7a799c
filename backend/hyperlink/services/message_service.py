"""
Message Service Module

Implements the submission and retrieval flows on top of a message repository.
"""

import logging
from typing import Optional

from hyperlink.common.errors import MessageNotFoundError, PayloadTooLargeError
from hyperlink.common.keys import is_valid_key
from hyperlink.common.utils import base_filename
from hyperlink.domain.message import LinkView, Message, new_message
from hyperlink.repositories.message_repo import MessageRepository

logger = logging.getLogger(__name__)


class MessageService:
    """
    Message Service

    Handles message creation, one-shot retrieval and link views.
    Consumed messages are never re-read or retried.
    """

    def __init__(self, repo: MessageRepository, max_upload_size: int = 0):
        """
        Initialize service

        Args:
            repo: Message repository
            max_upload_size: Max payload size in bytes, 0 means unlimited
        """
        self.repo = repo
        self.max_upload_size = max_upload_size

    def check_upload_size(self, size: Optional[int]) -> None:
        """
        Reject payloads over the configured limit

        Raises:
            PayloadTooLargeError: If size exceeds max_upload_size
        """
        if self.max_upload_size > 0 and size is not None and size > self.max_upload_size:
            raise PayloadTooLargeError(
                details={"size": size, "max_size": self.max_upload_size}
            )

    async def create(
        self,
        data: bytes,
        filename: str = "",
        content_type: str = "",
    ) -> str:
        """
        Store a new message

        Args:
            data: Payload bytes
            filename: Filename for file uploads, empty for text.
                Directory parts are dropped.
            content_type: MIME type of the payload

        Returns:
            str: Key addressing the stored message

        Raises:
            PayloadTooLargeError: Payload exceeds the limit
            BackendError: Storage failure
        """
        self.check_upload_size(len(data))

        message = new_message(
            data=data,
            filename=base_filename(filename),
            content_type=content_type,
        )
        key = self.repo.new_message_key()
        await self.repo.set_message(key, message)

        kind = "file" if message.meta.is_file else "message"
        logger.info(f"Stored {kind} {key} ({len(data)} bytes)")
        return key

    async def consume(self, key: str) -> Message:
        """
        Retrieve a message once

        Raises:
            MessageNotFoundError: Unknown, expired or already consumed key
        """
        if not is_valid_key(key):
            raise MessageNotFoundError(key)
        return await self.repo.get_message(key)

    async def describe(self, key: str) -> LinkView:
        """
        Describe a message without consuming it

        Raises:
            MessageNotFoundError: Unknown, expired or already consumed key
        """
        if not is_valid_key(key):
            raise MessageNotFoundError(key)
        meta = await self.repo.get_metadata(key)
        return LinkView.from_metadata(key, meta)

"""
API Dependency Injection Module

Provides dependencies required by FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends, Request

from hyperlink.config import get_settings
from hyperlink.repositories.message_repo import MessageRepository
from hyperlink.services.message_service import MessageService


def get_message_repo(request: Request) -> MessageRepository:
    """Get the message repository created during application startup"""
    repo = getattr(request.app.state, "message_repo", None)
    if repo is None:
        raise RuntimeError("Message storage not initialized")
    return repo


MessageRepoDep = Annotated[MessageRepository, Depends(get_message_repo)]


def get_message_service(repo: MessageRepoDep) -> MessageService:
    """Get message service"""
    settings = get_settings()
    return MessageService(
        repo,
        max_upload_size=settings.MAX_UPLOAD_SIZE,
    )


MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]

"""
Domain Model Module
"""

from hyperlink.domain.message import (
    LinkType,
    LinkView,
    Message,
    Metadata,
    new_message,
)

__all__ = [
    "LinkType",
    "LinkView",
    "Message",
    "Metadata",
    "new_message",
]

"""
Business Logic Layer Module Initialization
"""

from hyperlink.services.message_service import MessageService

__all__ = [
    "MessageService",
]

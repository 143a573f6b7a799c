"""
Data Access Layer Module Initialization
"""

from hyperlink.repositories.message_repo import MessageRepository

__all__ = [
    "MessageRepository",
]

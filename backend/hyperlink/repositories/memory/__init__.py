"""
In-Memory Repository Implementation Module Initialization
"""

from hyperlink.repositories.memory.message_repo import MemoryMessageRepository

__all__ = [
    "MemoryMessageRepository",
]

"""
API Router Module Initialization
"""

from hyperlink.api.messages import api_router, view_router

__all__ = [
    "api_router",
    "view_router",
]

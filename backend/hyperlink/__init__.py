"""
Hyperlink

Ephemeral one-shot message and file sharing service.
"""

__version__ = "0.1.0"

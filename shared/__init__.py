"""
Keyward Shared Module
======================

Configuration, structured logging, console presentation and the async
HTTP client used across the Keyward toolkit.
"""

from shared.config import KeywardConfig

__all__ = ["KeywardConfig"]

"""
Keyward Output Module
======================

Console display for Keyward results.
"""

from keyward.output.console import KeywardConsoleOutput

__all__ = ["KeywardConsoleOutput"]

"""
Keyward Analyzers
==================

Charset entropy, rule-based strength scoring and the k-anonymity breach
lookup.
"""

from keyward.analyzers.breach import BreachChecker
from keyward.analyzers.entropy import charset_size, entropy
from keyward.analyzers.strength import StrengthScorer

__all__ = [
    "BreachChecker",
    "StrengthScorer",
    "charset_size",
    "entropy",
]

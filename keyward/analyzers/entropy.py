"""
Charset Entropy Calculator
===========================

Combinatorial password entropy: ``length * log2(charset_size)``, where
the charset is the union of the character classes actually present.

This is the theoretical maximum for a password drawn uniformly at random
from the detected classes.  It says nothing about structure, so
``"aaaaaaaa"`` scores exactly like a random eight-letter string;
repetition, sequences and common words are handled by the strength scorer.

Character classes and their pool sizes:

- Lowercase ASCII letters: 26
- Uppercase ASCII letters: 26
- Digits: 10
- Symbols (anything else): 32, the printable non-alphanumeric ASCII set

References:
    - NIST SP 800-63-2 (2013) Appendix A. Estimating Password Entropy.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
"""

from __future__ import annotations

import math
import string

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = string.punctuation

CLASS_SIZES: dict[str, int] = {
    "lowercase": len(LOWERCASE),
    "uppercase": len(UPPERCASE),
    "digits": len(DIGITS),
    "symbols": len(SYMBOLS),
}

_ALNUM = frozenset(LOWERCASE + UPPERCASE + DIGITS)


def character_classes(password: str) -> dict[str, bool]:
    """Report which of the four character classes occur in *password*."""
    return {
        "lowercase": any(c in LOWERCASE for c in password),
        "uppercase": any(c in UPPERCASE for c in password),
        "digits": any(c in DIGITS for c in password),
        "symbols": any(c not in _ALNUM for c in password),
    }


def charset_size(password: str) -> int:
    """Sum of the pool sizes of the classes present (0 for ``""``)."""
    present = character_classes(password)
    return sum(size for name, size in CLASS_SIZES.items() if present[name])


def entropy(password: str) -> float:
    """Return the charset entropy of *password* in bits.

    Args:
        password: Password to measure.  Anything that is not a ``str``
            (typically ``None`` from an unset field) counts as empty.

    Returns:
        ``len(password) * log2(charset_size)``; ``0.0`` for an empty string.
    """
    if not isinstance(password, str):
        return 0.0
    pool = charset_size(password)
    if pool == 0:
        return 0.0
    return len(password) * math.log2(pool)

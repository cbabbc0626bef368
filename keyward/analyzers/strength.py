"""
Password Strength Scorer
=========================

Rule-based 0-4 strength score with pattern penalties, actionable
feedback and coarse crack-time estimates.

Scoring
-------
One point each for: length >= 8, >= 12, >= 16; lowercase, uppercase and
digits all present; symbols present with a unique-character ratio above
0.7; entropy above 50 bits; entropy above 70 bits (seven at most).

Penalties, each floored at zero: a sequential run such as ``abc`` or
``987`` costs 1; three or more identical characters in a row cost 1; a
common weak substring such as ``password`` or ``qwerty`` costs 2.

The penalised total is halved, rounding half-points up, and clamped to
[0, 4].

Crack times
-----------
``2 ** (entropy / 2)`` seconds (the square root of the keyspace) divided
by four guess rates.  This is a presentation heuristic, not an attack
model.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines, Section 5.1.1.2.
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
"""

from __future__ import annotations

import math
import re

from keyward.analyzers.entropy import character_classes, entropy
from keyward.core.models import AnalysisResult, CrackTimeEstimates, PatternKind


# ===================================================================== #
#  Pattern Databases
# ===================================================================== #

# Matched as case-insensitive substrings.
COMMON_SUBSTRINGS: tuple[str, ...] = (
    "password", "passw0rd", "123456", "qwerty", "azerty", "admin",
    "login", "welcome", "letmein", "iloveyou", "abc123", "111111",
    "monkey", "dragon", "master", "sunshine", "princess", "football",
    "baseball", "trustno1", "changeme", "secret", "default",
)

_REPEATED_RE = re.compile(r"(.)\1{2,}")

# Attack-rate scenarios, in guesses per second.
GUESS_RATES: tuple[tuple[str, float], ...] = (
    ("offline_slow_hashing_1e4_per_second", 1e4),
    ("offline_fast_hashing_1e10_per_second", 1e10),
    ("online_throttling_100_per_hour", 100 / 3600),
    ("online_no_throttling_10_per_second", 10.0),
)

_MINUTE = 60
_HOUR = 3600
_DAY = 86400
_YEAR = 31_536_000

MIN_LENGTH = 8
RECOMMENDED_LENGTH = 16

WARNING_TOO_SHORT = "Password is too short"
WARNING_COMMON = "This is similar to a commonly used password"


class StrengthScorer:
    """Scores passwords on the 0-4 scale.

    Usage::

        scorer = StrengthScorer()
        result = scorer.score("correct-horse-battery-staple")
        print(result.score, result.strength.label)
    """

    def __init__(self, common_substrings: tuple[str, ...] = COMMON_SUBSTRINGS) -> None:
        self._common = tuple(s.lower() for s in common_substrings)

    def score(self, password: str) -> AnalysisResult:
        """Analyse *password* and return an immutable :class:`AnalysisResult`.

        Non-string input is treated as the empty password.
        """
        if not isinstance(password, str):
            password = ""

        length = len(password)
        classes = character_classes(password)
        bits = entropy(password)
        unique_ratio = len(set(password)) / length if length else 0.0

        patterns: list[PatternKind] = []
        if has_sequential_run(password):
            patterns.append(PatternKind.SEQUENTIAL)
        if has_repeated_run(password):
            patterns.append(PatternKind.REPEATED)
        if self.common_substring(password) is not None:
            patterns.append(PatternKind.COMMON_SUBSTRING)

        points = sum((
            length >= 8,
            length >= 12,
            length >= 16,
            classes["lowercase"] and classes["uppercase"] and classes["digits"],
            classes["symbols"] and unique_ratio > 0.7,
            bits > 50,
            bits > 70,
        ))
        for kind in patterns:
            cost = 2 if kind is PatternKind.COMMON_SUBSTRING else 1
            points = max(0, points - cost)

        warning = self._warning(length, patterns)
        suggestions = self._suggestions(
            length, classes, unique_ratio, patterns, warning
        )

        return AnalysisResult(
            score=max(0, min(4, (points + 1) // 2)),
            entropy_bits=bits,
            length=length,
            crack_times=estimate_crack_times(bits),
            warning=warning,
            suggestions=tuple(suggestions),
            patterns=tuple(patterns),
        )

    def common_substring(self, password: str) -> str | None:
        """Return the first denylisted substring found in *password*, if any."""
        lowered = password.lower()
        for candidate in self._common:
            if candidate in lowered:
                return candidate
        return None

    # ------------------------------------------------------------------ #
    #  Feedback
    # ------------------------------------------------------------------ #

    @staticmethod
    def _warning(length: int, patterns: list[PatternKind]) -> str | None:
        if length < MIN_LENGTH:
            return WARNING_TOO_SHORT
        if PatternKind.COMMON_SUBSTRING in patterns:
            return WARNING_COMMON
        return None

    @staticmethod
    def _suggestions(
        length: int,
        classes: dict[str, bool],
        unique_ratio: float,
        patterns: list[PatternKind],
        warning: str | None,
    ) -> list[str]:
        """Build advice in its fixed evaluation order, warning first."""
        suggestions: list[str] = [warning] if warning else []

        if length < MIN_LENGTH:
            suggestions.append(f"Use at least {MIN_LENGTH} characters")
        if length < RECOMMENDED_LENGTH:
            suggestions.append(
                f"Use {RECOMMENDED_LENGTH} or more characters for strong protection"
            )
        if not classes["lowercase"]:
            suggestions.append("Add lowercase letters")
        if not classes["uppercase"]:
            suggestions.append("Add uppercase letters")
        if not classes["digits"]:
            suggestions.append("Add numbers")
        if not classes["symbols"]:
            suggestions.append("Add symbols")
        if length and unique_ratio < 0.5:
            suggestions.append("Avoid repeated characters")
        if PatternKind.SEQUENTIAL in patterns:
            suggestions.append("Avoid sequences like 'abc' or '123'")
        if PatternKind.COMMON_SUBSTRING in patterns:
            suggestions.append(
                "Avoid common words and patterns such as 'password' or 'qwerty'"
            )
        return suggestions


# ===================================================================== #
#  Pattern Detection
# ===================================================================== #


def has_sequential_run(password: str, run: int = 3) -> bool:
    """Detect *run* or more consecutive letters or digits in sequence.

    Ascending (``abc``, ``345``) and descending (``cba``) runs both count;
    letters are compared case-insensitively and a run never mixes letters
    with digits.
    """
    lowered = password.lower()
    for start in range(len(lowered) - run + 1):
        window = lowered[start : start + run]
        if not (window.isascii() and (window.isdigit() or window.isalpha())):
            continue
        steps = {ord(b) - ord(a) for a, b in zip(window, window[1:])}
        if steps == {1} or steps == {-1}:
            return True
    return False


def has_repeated_run(password: str) -> bool:
    """Detect three or more identical characters in a row (``aaa``, ``111``)."""
    return _REPEATED_RE.search(password) is not None


# ===================================================================== #
#  Crack Time Estimation
# ===================================================================== #


def estimate_crack_times(entropy_bits: float) -> CrackTimeEstimates:
    """Format ``2 ** (entropy / 2)`` seconds against each guess rate."""
    exponent = entropy_bits / 2
    crack_seconds = math.inf if exponent >= 1000 else 2.0 ** exponent
    return CrackTimeEstimates(
        **{name: format_duration(crack_seconds / rate) for name, rate in GUESS_RATES}
    )


def format_duration(seconds: float) -> str:
    """Bucket a second count into a coarse human-readable string."""
    if seconds < 1:
        return "instant"
    if seconds < _MINUTE:
        return "less than a minute"
    if seconds < _HOUR:
        return _plural(round(seconds / _MINUTE), "minute")
    if seconds < _DAY:
        return _plural(round(seconds / _HOUR), "hour")
    if seconds < _YEAR:
        return _plural(round(seconds / _DAY), "day")
    if seconds < 100 * _YEAR:
        return _plural(round(seconds / _YEAR), "year")
    return "centuries"


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


_default_scorer = StrengthScorer()


def score(password: str) -> AnalysisResult:
    """Score *password* with the default denylist."""
    return _default_scorer.score(password)

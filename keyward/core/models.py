"""
Keyward Core Data Models
=========================

Pydantic models for the Keyward analysis and generation engine. They
carry strength analyses, breach-lookup outcomes, generation policies,
generated candidates, history entries and the analysis state machine's
state.

Result models are frozen: once produced they are shared between the
controller, the history and the presentation layer without copying.
None of them stores a plaintext password except :class:`GeneratedPassword`,
whose whole purpose is to hand a fresh password back to the caller; its
``password`` field is excluded from ``repr``.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ===================================================================== #
#  Strength Tiers
# ===================================================================== #


class StrengthLevel(int, enum.Enum):
    """Five fixed strength tiers keyed by the 0-4 score.

    Attributes:
        CRITICAL: 0 -- Immediately vulnerable.
        WEAK:     1 -- Easily compromised.
        MODERATE: 2 -- Reasonably secure.
        STRONG:   3 -- Highly secure.
        FORTRESS: 4 -- Virtually uncrackable.
    """

    CRITICAL = 0
    WEAK = 1
    MODERATE = 2
    STRONG = 3
    FORTRESS = 4

    @property
    def label(self) -> str:
        return self.name.title()

    @property
    def description(self) -> str:
        return _TIER_DESCRIPTIONS[self]

    @property
    def colour(self) -> str:
        """Rich style used when rendering this tier."""
        return _TIER_COLOURS[self]

    @classmethod
    def from_score(cls, score: int) -> StrengthLevel:
        """Map a score to its tier, clamping into [0, 4]."""
        return cls(max(0, min(4, int(score))))


_TIER_DESCRIPTIONS: dict[StrengthLevel, str] = {
    StrengthLevel.CRITICAL: "Immediately vulnerable",
    StrengthLevel.WEAK: "Easily compromised",
    StrengthLevel.MODERATE: "Reasonably secure",
    StrengthLevel.STRONG: "Highly secure",
    StrengthLevel.FORTRESS: "Virtually uncrackable",
}

_TIER_COLOURS: dict[StrengthLevel, str] = {
    StrengthLevel.CRITICAL: "bold red",
    StrengthLevel.WEAK: "dark_orange",
    StrengthLevel.MODERATE: "bold yellow",
    StrengthLevel.STRONG: "green",
    StrengthLevel.FORTRESS: "bold bright_green",
}


# ===================================================================== #
#  Analysis Models
# ===================================================================== #


class PatternKind(str, enum.Enum):
    """Weakening patterns that cost the password score points."""

    SEQUENTIAL = "sequential"
    REPEATED = "repeated"
    COMMON_SUBSTRING = "common_substring"


class CrackTimeEstimates(BaseModel):
    """Formatted crack-time figures for four attack-rate scenarios.

    The underlying figure is ``2 ** (entropy / 2)`` seconds, a
    square-root-of-keyspace heuristic rather than an attack model.

    Attributes:
        offline_slow_hashing_1e4_per_second:  Slow hash, 10^4 guesses/s.
        offline_fast_hashing_1e10_per_second: Fast hash, 10^10 guesses/s.
        online_throttling_100_per_hour:       Rate-limited login, 100/hour.
        online_no_throttling_10_per_second:   Unthrottled login, 10/s.
    """

    model_config = ConfigDict(frozen=True)

    offline_slow_hashing_1e4_per_second: str
    offline_fast_hashing_1e10_per_second: str
    online_throttling_100_per_hour: str
    online_no_throttling_10_per_second: str


class AnalysisResult(BaseModel):
    """Immutable strength analysis of one password.

    Attributes:
        score: Strength score from 0 (critical) to 4 (fortress).
        entropy_bits: Charset-derived entropy upper bound in bits.
        length: Password length in characters.
        crack_times: Formatted crack-time estimates.
        warning: Blocking problem, if any.
        suggestions: Ordered advice; the warning, when present, comes first.
        patterns: Weakening patterns that were penalised.
    """

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=4)
    entropy_bits: float = Field(..., ge=0.0)
    length: int = Field(default=0, ge=0)
    crack_times: CrackTimeEstimates
    warning: Optional[str] = None
    suggestions: tuple[str, ...] = ()
    patterns: tuple[PatternKind, ...] = ()

    @property
    def strength(self) -> StrengthLevel:
        return StrengthLevel.from_score(self.score)


# ===================================================================== #
#  Breach Lookup
# ===================================================================== #


class BreachStatus(str, enum.Enum):
    NOT_FOUND = "not_found"
    FOUND = "found"
    UNKNOWN = "unknown"


class BreachOutcome(BaseModel):
    """Tagged result of a k-anonymity breach lookup.

    ``UNKNOWN`` means the lookup could not be completed; it must never be
    treated as ``NOT_FOUND``.

    Attributes:
        status: Which of the three outcomes this is.
        count: Times the password appears in the corpus (``FOUND`` only).
        reason: Short failure description (``UNKNOWN`` only).
    """

    model_config = ConfigDict(frozen=True)

    status: BreachStatus
    count: Optional[int] = Field(default=None, ge=0)
    reason: Optional[str] = None

    @model_validator(mode="after")
    def _check_tag(self) -> BreachOutcome:
        if (self.status == BreachStatus.FOUND) != (self.count is not None):
            raise ValueError("count is required for, and only for, FOUND")
        return self

    @classmethod
    def not_found(cls) -> BreachOutcome:
        return cls(status=BreachStatus.NOT_FOUND)

    @classmethod
    def found(cls, count: int) -> BreachOutcome:
        return cls(status=BreachStatus.FOUND, count=count)

    @classmethod
    def unknown(cls, reason: str = "lookup unavailable") -> BreachOutcome:
        return cls(status=BreachStatus.UNKNOWN, reason=reason)

    @property
    def is_breached(self) -> bool:
        return self.status == BreachStatus.FOUND

    @property
    def is_known(self) -> bool:
        return self.status != BreachStatus.UNKNOWN

    @property
    def display(self) -> str:
        """User-facing status text; each outcome renders differently."""
        if self.status == BreachStatus.FOUND:
            return f"Breached {self.count:,} times"
        if self.status == BreachStatus.NOT_FOUND:
            return "Secure"
        return "Check failed"


# ===================================================================== #
#  Reports
# ===================================================================== #


class AnalysisReport(BaseModel):
    """One-shot analysis of a password: strength plus breach outcome."""

    model_config = ConfigDict(frozen=True)

    result: AnalysisResult
    breach: BreachOutcome
    analysed_at: datetime = Field(default_factory=_utcnow)


# ===================================================================== #
#  Generation Models
# ===================================================================== #


class GenerationMode(str, enum.Enum):
    RANDOM = "random"
    PASSPHRASE = "passphrase"
    MEMORABLE = "memorable"


class GenerationConfig(BaseModel):
    """Validated generation policy.

    Attributes:
        mode: Generation mode.
        length: Target length, Random mode only (8-64).
        use_uppercase: Include uppercase letters (Random mode).
        use_numbers: Include digits / numeric suffix.
        use_symbols: Include symbols / symbol separator.
        count: Batch size (1-20).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: GenerationMode = GenerationMode.RANDOM
    length: int = Field(default=16, ge=8, le=64)
    use_uppercase: bool = True
    use_numbers: bool = True
    use_symbols: bool = True
    count: int = Field(default=6, ge=1, le=20)


class GeneratedPassword(BaseModel):
    """One member of a generated batch, with its analysis."""

    model_config = ConfigDict(frozen=True)

    password: str = Field(..., repr=False)
    analysis: AnalysisResult
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def score(self) -> int:
        return self.analysis.score


# ===================================================================== #
#  History
# ===================================================================== #


class HistoryEntry(BaseModel):
    """Privacy-preserving record of one completed analysis.

    Attributes:
        truncated_hash: Short keyed-hash tag of the password (hex).
        score: Strength score at analysis time.
        entropy_bits: Entropy rounded to a whole bit.
        strength_label: Tier label for the score.
        timestamp: UTC time of the analysis.
    """

    model_config = ConfigDict(frozen=True)

    truncated_hash: str = Field(..., pattern=r"^[0-9a-f]+$")
    score: int = Field(..., ge=0, le=4)
    entropy_bits: float = Field(..., ge=0.0)
    strength_label: str
    timestamp: datetime = Field(default_factory=_utcnow)


# ===================================================================== #
#  Analysis State Machine
# ===================================================================== #


class AnalysisStatus(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class AnalysisState(BaseModel):
    """Snapshot of the analysis controller.

    Attributes:
        status: Current state.
        request_id: Id of the latest input change; results issued under
            any other id are stale.
        result: Latest strength analysis (kept while a newer one loads).
        breach: Latest breach outcome.
        error: Failure message in the ``ERROR`` state.
    """

    model_config = ConfigDict(frozen=True)

    status: AnalysisStatus = AnalysisStatus.IDLE
    request_id: int = 0
    result: Optional[AnalysisResult] = None
    breach: Optional[BreachOutcome] = None
    error: Optional[str] = None

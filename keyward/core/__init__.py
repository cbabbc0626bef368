"""
Keyward Core Module
====================

Data models, the exception hierarchy and the history store.  The engine
and the analysis controller live in :mod:`keyward.core.engine` and
:mod:`keyward.core.controller`.
"""

from keyward.core.errors import (
    AnalysisError,
    GenerationError,
    KeywardError,
    RandomSourceError,
)
from keyward.core.history import HistoryStore
from keyward.core.models import (
    AnalysisReport,
    AnalysisResult,
    AnalysisState,
    AnalysisStatus,
    BreachOutcome,
    BreachStatus,
    GeneratedPassword,
    GenerationConfig,
    GenerationMode,
    HistoryEntry,
    StrengthLevel,
)

__all__ = [
    "AnalysisError",
    "AnalysisReport",
    "AnalysisResult",
    "AnalysisState",
    "AnalysisStatus",
    "BreachOutcome",
    "BreachStatus",
    "GeneratedPassword",
    "GenerationConfig",
    "GenerationError",
    "GenerationMode",
    "HistoryEntry",
    "HistoryStore",
    "KeywardError",
    "RandomSourceError",
    "StrengthLevel",
]

"""
Analysis History
=================

Bounded, newest-first, in-memory log of completed analyses.

Entries identify a password only by a short keyed tag: the first few hex
characters of ``HMAC-SHA-256(store_key, password)``, where ``store_key``
is random per store and never leaves it.  Repeat analyses of one password
share a tag within a session, but the tag cannot be matched against a
precomputed hash list and has nothing in common with the SHA-1 digest the
breach lookup uses.
"""

from __future__ import annotations

import hashlib
import hmac
import os
from collections import deque
from typing import Iterator, Optional

from keyward.core.models import AnalysisResult, HistoryEntry

DEFAULT_LIMIT = 50
DEFAULT_HASH_LENGTH = 12


class HistoryStore:
    """Capped history of :class:`HistoryEntry` records, newest first.

    Args:
        limit: Maximum number of entries kept; older ones are evicted.
        hash_length: Hex characters kept from the keyed hash.
    """

    def __init__(
        self,
        limit: int = DEFAULT_LIMIT,
        hash_length: int = DEFAULT_HASH_LENGTH,
    ) -> None:
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        if not 4 <= hash_length <= 32:
            raise ValueError("hash_length must be between 4 and 32")
        self._entries: deque[HistoryEntry] = deque(maxlen=limit)
        self._hash_length = hash_length
        self._key = os.urandom(32)

    def tag(self, password: str) -> str:
        """Truncated keyed hash identifying *password* within this store."""
        digest = hmac.new(self._key, password.encode("utf-8"), hashlib.sha256)
        return digest.hexdigest()[: self._hash_length]

    def append(self, password: str, analysis: AnalysisResult) -> HistoryEntry:
        """Record a completed analysis and return the new entry."""
        entry = HistoryEntry(
            truncated_hash=self.tag(password),
            score=analysis.score,
            entropy_bits=round(analysis.entropy_bits),
            strength_label=analysis.strength.label,
        )
        self._entries.appendleft(entry)
        return entry

    def entries(self) -> list[HistoryEntry]:
        """Snapshot of all entries, newest first."""
        return list(self._entries)

    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[0] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    @property
    def limit(self) -> int:
        return self._entries.maxlen or DEFAULT_LIMIT

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))

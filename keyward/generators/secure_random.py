"""
CSPRNG-backed selection primitives.

Every random choice made during generation goes through
:class:`SecureRandom`: an unbiased bounded integer drawn by rejection
sampling over bytes from a cryptographically secure source
(:func:`os.urandom` by default), plus ``choice`` and an in-place
Fisher-Yates ``shuffle`` built on it.

The byte source is injectable so tests can replay a fixed sequence.  A
failing source raises :class:`RandomSourceError`; there is no fallback to
:mod:`random`.
"""

from __future__ import annotations

import os
from typing import Callable, MutableSequence, Sequence, TypeVar

from keyward.core.errors import RandomSourceError

T = TypeVar("T")

ByteSource = Callable[[int], bytes]


class SecureRandom:
    """Bounded integers, choices and shuffles from a secure byte source."""

    def __init__(self, source: ByteSource = os.urandom) -> None:
        self._source = source

    def _bytes(self, count: int) -> bytes:
        try:
            data = self._source(count)
        except (OSError, NotImplementedError) as exc:
            raise RandomSourceError("secure random source unavailable") from exc
        if len(data) != count:
            raise RandomSourceError(
                f"secure random source returned {len(data)} of {count} bytes"
            )
        return data

    def randbelow(self, upper: int) -> int:
        """Uniform integer in ``[0, upper)``.

        Draws just enough bits to cover ``upper - 1`` and rejects values
        outside the range, so no index is favoured the way ``value % upper``
        would favour low ones.
        """
        if upper <= 0:
            raise ValueError("upper bound must be positive")
        if upper == 1:
            return 0
        bits = (upper - 1).bit_length()
        mask = (1 << bits) - 1
        nbytes = (bits + 7) // 8
        while True:
            value = int.from_bytes(self._bytes(nbytes), "big") & mask
            if value < upper:
                return value

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.randbelow(len(seq))]

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place, one secure draw per swap."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randbelow(i + 1)
            items[i], items[j] = items[j], items[i]

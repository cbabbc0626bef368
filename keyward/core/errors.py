"""
Keyward Exception Hierarchy
============================

Breach-lookup failures never appear here: they are absorbed into
:meth:`BreachOutcome.unknown <keyward.core.models.BreachOutcome.unknown>`.
Generation failures propagate to the caller.
"""

from __future__ import annotations


class KeywardError(Exception):
    """Base class for all Keyward errors."""


class AnalysisError(KeywardError):
    """Strength scoring failed; the controller moves to the error state."""


class GenerationError(KeywardError):
    """A password could not be generated for the requested policy."""


class RandomSourceError(GenerationError):
    """The cryptographically secure random source is unavailable.

    Generation never degrades to a non-cryptographic generator, so this
    is fatal for the call that raised it.
    """

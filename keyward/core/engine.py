"""
Keyward Engine
===============

Central orchestrator for the Keyward toolkit.  :class:`KeywardEngine`
builds the scorer, breach checker, generator and history from one
:class:`~shared.config.KeywardConfig` and exposes them through a small
async interface used by the CLI:

- :meth:`KeywardEngine.analyze`: score plus breach lookup, run
  concurrently, recorded in history.
- :meth:`KeywardEngine.generate_batch`: batch members generated in worker
  threads and scored, returned in request order.
- :meth:`KeywardEngine.controller`: a debounced
  :class:`~keyward.core.controller.AnalysisController` sharing the
  engine's components for interactive use.

Architecture follows the Facade pattern (Gamma et al., 1994).

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from shared.config import KeywardConfig
from shared.logger import KeywardLogger

from keyward.analyzers.breach import BreachChecker
from keyward.analyzers.strength import StrengthScorer
from keyward.core.controller import AnalysisController
from keyward.core.errors import AnalysisError
from keyward.core.history import HistoryStore
from keyward.core.models import (
    AnalysisReport,
    BreachOutcome,
    GeneratedPassword,
    GenerationConfig,
)
from keyward.generators.password import PasswordGenerator
from keyward.generators.secure_random import SecureRandom


class KeywardEngine:
    """Orchestrates analysis, breach lookups and generation.

    Usage::

        engine = KeywardEngine()
        report = await engine.analyze("correct horse battery staple")
        batch = await engine.generate_batch(engine.default_generation())
        best = engine.generator.select_strongest(batch)
        await engine.close()

    Args:
        config: Keyward configuration; defaults to built-in values.
        checker: Breach checker override (tests inject one over a mock
            transport).
        rng: Secure random source override for the generator.
    """

    def __init__(
        self,
        config: Optional[KeywardConfig] = None,
        *,
        checker: Optional[BreachChecker] = None,
        rng: Optional[SecureRandom] = None,
    ) -> None:
        self.config = config or KeywardConfig()
        self.logger = KeywardLogger("engine")

        self.scorer = StrengthScorer()
        self.checker = checker or BreachChecker(self.config.breach)
        self.generator = PasswordGenerator(self.scorer, rng)
        self.history = HistoryStore(
            limit=self.config.analysis.history_limit,
            hash_length=self.config.analysis.history_hash_length,
        )

    async def __aenter__(self) -> KeywardEngine:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self.checker.close()

    # ------------------------------------------------------------------ #
    #  Analysis
    # ------------------------------------------------------------------ #

    def controller(self) -> AnalysisController:
        """Debounced controller wired to this engine's components."""
        analysis = self.config.analysis
        return AnalysisController(
            self.scorer,
            self.checker if analysis.check_breaches else None,
            self.history,
            debounce=analysis.debounce_ms / 1000.0,
        )

    async def analyze(
        self,
        password: str,
        *,
        check_breach: Optional[bool] = None,
    ) -> AnalysisReport:
        """Score *password* and look it up in the breach corpus.

        Args:
            password: Password to analyse; never logged or stored.
            check_breach: Override for ``[analysis] check_breaches``.
                When disabled the breach outcome is ``unknown``.

        Returns:
            The combined report, also recorded in :attr:`history`.

        Raises:
            AnalysisError: If strength scoring fails.
        """
        if check_breach is None:
            check_breach = self.config.analysis.check_breaches

        with self.logger.operation("analyze"):
            breach_task = asyncio.create_task(self.check_breach(password, check_breach))
            try:
                result = self.scorer.score(password)
            except Exception as exc:
                breach_task.cancel()
                raise AnalysisError(f"strength scoring failed: {exc}") from exc
            breach = await breach_task

        self.logger.info(
            "Analysis complete: score=%d entropy=%.1f breach=%s",
            result.score,
            result.entropy_bits,
            breach.status.value,
        )
        if password:
            self.history.append(password, result)
        return AnalysisReport(result=result, breach=breach)

    async def check_breach(self, password: str, enabled: bool = True) -> BreachOutcome:
        """Breach lookup; disabled checks and empty input never hit the network."""
        if not enabled:
            return BreachOutcome.unknown("breach check disabled")
        if not password:
            return BreachOutcome.unknown("empty password")
        return await self.checker.check(password)

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    def default_generation(self, **overrides: object) -> GenerationConfig:
        """Generation policy from ``[generator]`` with *overrides* applied.

        ``None`` overrides are ignored so CLI options can pass through
        unset values.

        Raises:
            pydantic.ValidationError: If the merged policy is out of range.
        """
        section = self.config.generator
        values: dict[str, object] = {
            "mode": section.mode,
            "length": section.length,
            "use_uppercase": section.use_uppercase,
            "use_numbers": section.use_numbers,
            "use_symbols": section.use_symbols,
            "count": section.count,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GenerationConfig(**values)

    async def generate_batch(self, config: GenerationConfig) -> list[GeneratedPassword]:
        """Generate ``config.count`` scored passwords concurrently.

        Raises:
            GenerationError: If any member fails; no partial batch is
                returned.
        """
        loop = asyncio.get_running_loop()
        with self.logger.timed(f"{config.mode.value} batch of {config.count}"):
            tasks = [
                loop.run_in_executor(None, self.generator.generate_one, config)
                for _ in range(config.count)
            ]
            batch = await asyncio.gather(*tasks)
        return list(batch)

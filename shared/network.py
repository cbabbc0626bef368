"""
Keyward HTTP Layer
===================

Async text-over-HTTP client used by the breach lookup.

:class:`KeywardHTTP` wraps :class:`httpx.AsyncClient` and adds three
safeguards around each GET:

- a :class:`TTLCache` of response bodies keyed by request path, so a
  password re-typed within a few minutes does not cost another round trip;
- a :class:`CircuitBreaker` that stops calling an upstream which keeps
  failing, then lets one probe through after a cooldown;
- optional retries on transport errors and 429/5xx answers, spaced by
  capped exponential backoff with full jitter.

Every failure mode surfaces as :class:`KeywardHTTPError`; callers never see
raw :mod:`httpx` exceptions.

References:
    - Nygard, M. T. (2018). Release It!: Design and Deploy
      Production-Ready Software (2nd ed.). Circuit Breaker pattern.
    - Brooker, M. (2015). Exponential Backoff and Jitter. AWS
      Architecture Blog.
"""

from __future__ import annotations

import asyncio
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import httpx

from shared.logger import KeywardLogger

logger = KeywardLogger("network")

DEFAULT_USER_AGENT = "Keyward/1.0 (Password Analysis Toolkit)"


class KeywardHTTPError(Exception):
    """A request failed: transport error, bad status, or open circuit."""


# ===================================================================== #
#  Circuit Breaker
# ===================================================================== #


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass
class CircuitBreaker:
    """Fails fast once an upstream has failed *threshold* times in a row.

    While open, :meth:`allow` refuses every call until *cooldown* seconds
    have passed; the next call is then a half-open probe whose outcome
    closes the circuit again or re-opens it.
    """

    threshold: int = 5
    cooldown: float = 30.0
    state: CircuitState = CircuitState.CLOSED
    failures: int = 0
    opened_at: float = 0.0

    def allow(self) -> bool:
        if (
            self.state is CircuitState.OPEN
            and time.monotonic() - self.opened_at >= self.cooldown
        ):
            self.state = CircuitState.HALF_OPEN
            logger.info("Circuit half-open, probing upstream")
        return self.state is not CircuitState.OPEN

    def succeeded(self) -> None:
        self.failures = 0
        self.state = CircuitState.CLOSED

    def failed(self) -> None:
        self.failures += 1
        if self.state is CircuitState.HALF_OPEN or self.failures >= self.threshold:
            if self.state is not CircuitState.OPEN:
                logger.warning("Circuit open after %d failure(s)", self.failures)
            self.state = CircuitState.OPEN
            self.opened_at = time.monotonic()


# ===================================================================== #
#  Response Cache
# ===================================================================== #


@dataclass
class TTLCache:
    """Response bodies keyed by request path.

    Entries expire *ttl* seconds after they are stored; a non-positive
    *ttl* turns the cache off.  Each :meth:`put` sweeps expired entries
    and, past *max_entries*, evicts the oldest ones.
    """

    ttl: float = 300.0
    max_entries: int = 1024
    _entries: dict[str, tuple[float, str]] = field(default_factory=dict, repr=False)

    def get(self, key: str) -> Optional[str]:
        hit = self._entries.get(key)
        if hit is None:
            return None
        expires_at, body = hit
        if time.monotonic() >= expires_at:
            del self._entries[key]
            return None
        return body

    def put(self, key: str, body: str, ttl: Optional[float] = None) -> None:
        lifetime = self.ttl if ttl is None else ttl
        if lifetime <= 0:
            return
        now = time.monotonic()
        self._purge(now)
        # re-insert so dict order stays oldest-first
        self._entries.pop(key, None)
        while self._entries and len(self._entries) >= self.max_entries:
            del self._entries[next(iter(self._entries))]
        self._entries[key] = (now + lifetime, body)

    def discard(self, key: str) -> None:
        self._entries.pop(key, None)

    def _purge(self, now: float) -> None:
        expired = [
            key for key, (expires_at, _) in self._entries.items() if now >= expires_at
        ]
        for key in expired:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


# ===================================================================== #
#  Client
# ===================================================================== #


class KeywardHTTP:
    """Cached, circuit-protected async GET client.

    Usage::

        async with KeywardHTTP(base_url="https://api.pwnedpasswords.com") as http:
            body = await http.get_text("/range/21BD1")

    Args:
        base_url: Prefix for every request path.
        timeout: Per-request timeout in seconds.
        max_retries: Extra attempts after a transport error or 429/5xx.
        backoff_base: First retry delay ceiling in seconds; doubles per
            attempt.
        backoff_max: Upper bound for the delay ceiling.
        cache_ttl: Lifetime of cached bodies; ``0`` disables the cache.
        cb_failure_threshold: Consecutive failures that open the circuit.
        cb_recovery_timeout: Seconds the circuit stays open before a probe.
        user_agent: ``User-Agent`` sent with every request.
        transport: Replacement httpx transport (tests pass a
            :class:`httpx.MockTransport`).
    """

    RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout: float = 10.0,
        max_retries: int = 0,
        backoff_base: float = 0.5,
        backoff_max: float = 8.0,
        cache_ttl: float = 300.0,
        cb_failure_threshold: int = 5,
        cb_recovery_timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._max_retries = max(0, max_retries)
        self._backoff_base = backoff_base
        self._backoff_max = backoff_max
        self._cache = TTLCache(ttl=cache_ttl)
        self._breaker = CircuitBreaker(
            threshold=cb_failure_threshold, cooldown=cb_recovery_timeout
        )
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    async def __aenter__(self) -> KeywardHTTP:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def cache(self) -> TTLCache:
        return self._cache

    @property
    def circuit_breaker(self) -> CircuitBreaker:
        return self._breaker

    async def get_text(
        self,
        path: str,
        *,
        headers: Optional[dict[str, str]] = None,
        use_cache: bool = True,
    ) -> str:
        """GET *path* and return the decoded body of a 2xx answer.

        Raises:
            KeywardHTTPError: If the circuit is open or the request fails
                after all attempts.
        """
        if use_cache:
            cached = self._cache.get(path)
            if cached is not None:
                logger.debug("Served from cache")
                return cached

        if not self._breaker.allow():
            raise KeywardHTTPError("circuit open, upstream recently failing")

        try:
            response = await self._send(path, headers)
        except KeywardHTTPError:
            self._breaker.failed()
            raise
        self._breaker.succeeded()

        body = response.text
        if use_cache:
            self._cache.put(path, body)
        return body

    def reject(self, path: str) -> None:
        """Mark the last body for *path* as unusable.

        The cached copy is dropped and the circuit breaker counts a
        failure, so a broken 2xx answer is refetched rather than reused.
        """
        self._cache.discard(path)
        self._breaker.failed()

    async def _send(
        self, path: str, headers: Optional[dict[str, str]]
    ) -> httpx.Response:
        attempts = self._max_retries + 1
        for attempt in range(1, attempts + 1):
            cause: Optional[BaseException] = None
            try:
                response = await self._client.get(path, headers=headers)
            except httpx.HTTPError as exc:
                cause = exc
                failure = f"transport error ({type(exc).__name__})"
            else:
                if response.is_success:
                    return response
                failure = f"HTTP {response.status_code}"
                if response.status_code not in self.RETRY_STATUSES:
                    break

            if attempt < attempts:
                logger.warning("%s on attempt %d/%d", failure, attempt, attempts)
                await asyncio.sleep(self._retry_delay(attempt))

        raise KeywardHTTPError(failure) from cause

    def _retry_delay(self, attempt: int) -> float:
        ceiling = min(self._backoff_max, self._backoff_base * 2 ** (attempt - 1))
        return random.uniform(0, ceiling)

"""
k-Anonymity Breach Checker
===========================

Looks a password up in a breach corpus without disclosing it, using the
Pwned Passwords range protocol:

1. Hash the UTF-8 password with SHA-1 and render it as uppercase hex.
2. Send only the first five hex characters (the *prefix*) to
   ``GET {api_url}/range/{prefix}``.
3. The service answers with every known suffix sharing that prefix, one
   ``SUFFIX:COUNT`` record per CRLF-terminated line.
4. Match the remaining 35 characters (the *suffix*) locally.

The password and the full digest never leave this module, on success or
failure, and neither is logged.  Every failure (transport, non-2xx
status, open circuit breaker, malformed body) yields
:meth:`BreachOutcome.unknown`, which callers must keep distinct from
:meth:`BreachOutcome.not_found`.

SHA-1 is used purely for interoperability with the range API.

References:
    - Hunt, T. (2018). I've Just Launched "Pwned Passwords" V2 With Half a
      Billion Passwords for Download.
    - Ali, J. (2018). Validating Leaked Passwords with k-Anonymity.
      Cloudflare Blog.
    - Li, L. et al. (2019). Protocols for Checking Compromised Credentials.
      ACM CCS.
"""

from __future__ import annotations

import hashlib
import re
from typing import Optional

from shared.config import BreachConfig
from shared.logger import KeywardLogger
from shared.network import KeywardHTTP, KeywardHTTPError

from keyward.core.models import BreachOutcome

PREFIX_LENGTH = 5

_SUFFIX_RE = re.compile(r"^[0-9A-F]{35}$")
_COUNT_RE = re.compile(r"^[0-9]+$")


class MalformedRangeResponse(ValueError):
    """The range response contained a record that is not ``SUFFIX:COUNT``."""


def sha1_hex(password: str) -> str:
    """Uppercase hex SHA-1 digest of the UTF-8 encoded password."""
    return hashlib.sha1(password.encode("utf-8")).hexdigest().upper()


def split_digest(digest: str) -> tuple[str, str]:
    """Split a 40-character hex digest into ``(prefix, suffix)``."""
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]


def parse_range_response(body: str) -> dict[str, int]:
    """Parse a range response into ``{suffix: count}``.

    Blank lines are ignored.  Any other line that is not a 35-character hex
    suffix, a colon and a non-negative integer raises
    :class:`MalformedRangeResponse`.
    """
    records: dict[str, int] = {}
    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue
        suffix, sep, count = line.partition(":")
        suffix = suffix.strip().upper()
        count = count.strip()
        if not sep or not _SUFFIX_RE.match(suffix) or not _COUNT_RE.match(count):
            raise MalformedRangeResponse("unparseable range record")
        records[suffix] = int(count)
    return records


class BreachChecker:
    """Async breach lookup over the k-anonymity range API.

    Usage::

        async with BreachChecker() as checker:
            outcome = await checker.check("hunter2")
            print(outcome.display)

    Args:
        config: Endpoint, timeout, retry, padding and cache settings.
        http: Pre-built client; when omitted one is created from *config*
            (and closed by :meth:`close`).
    """

    def __init__(
        self,
        config: Optional[BreachConfig] = None,
        *,
        http: Optional[KeywardHTTP] = None,
    ) -> None:
        self.config = config or BreachConfig()
        self.logger = KeywardLogger("breach")
        self._owns_http = http is None
        self._http = http or KeywardHTTP(
            base_url=self.config.api_url,
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
            cache_ttl=self.config.cache_ttl,
            cb_failure_threshold=self.config.cb_failure_threshold,
            cb_recovery_timeout=self.config.cb_recovery_timeout,
            user_agent=self.config.user_agent,
        )

    async def __aenter__(self) -> BreachChecker:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_http:
            await self._http.close()

    async def check(self, password: str) -> BreachOutcome:
        """Return how often *password* appears in the breach corpus.

        Returns:
            ``found(count)`` on a match with a positive count,
            ``not_found`` when the suffix is absent (or only present as a
            zero-count padding record), ``unknown`` on any failure.
        """
        prefix, suffix = split_digest(sha1_hex(password))
        headers = {"Add-Padding": "true"} if self.config.add_padding else None
        path = f"/range/{prefix}"

        with self.logger.operation("range_query"):
            try:
                body = await self._http.get_text(path, headers=headers)
                records = parse_range_response(body)
            except KeywardHTTPError as exc:
                self.logger.warning("Breach lookup failed: %s", exc)
                return BreachOutcome.unknown(str(exc))
            except MalformedRangeResponse as exc:
                # drop the cached body so the next lookup asks again
                self._http.reject(path)
                self.logger.warning("Breach lookup failed: %s", exc)
                return BreachOutcome.unknown("malformed response")

            self.logger.debug("Range response held %d records", len(records))

        count = records.get(suffix, 0)
        if count > 0:
            return BreachOutcome.found(count)
        return BreachOutcome.not_found()

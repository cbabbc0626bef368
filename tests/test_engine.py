# Tests for keyward.core.engine
import asyncio
import unittest

import httpx
from pydantic import ValidationError

from shared.config import KeywardConfig
from shared.network import KeywardHTTP
from keyward.analyzers.breach import BreachChecker
from keyward.core.engine import KeywardEngine
from keyward.core.errors import RandomSourceError
from keyward.core.models import BreachStatus, GenerationMode
from keyward.generators.secure_random import SecureRandom

# SHA-1("password") suffix after the 5BAA6 prefix
PASSWORD_SUFFIX = "1E4C9B93F3F0682250B6CF8331B7EE68FD8"


def _engine(config=None, **kwargs):
    def handler(request):
        return httpx.Response(200, text=f"{PASSWORD_SUFFIX}:9545824\r\n")

    config = config or KeywardConfig()
    http = KeywardHTTP(
        base_url=config.breach.api_url, transport=httpx.MockTransport(handler)
    )
    checker = BreachChecker(config.breach, http=http)
    return KeywardEngine(config, checker=checker, **kwargs), http


class TestAnalyze(unittest.TestCase):
    def test_report_combines_score_and_breach(self):
        engine, http = _engine()

        async def go():
            try:
                return await engine.analyze("password")
            finally:
                await http.close()

        report = asyncio.run(go())
        self.assertEqual(report.result.score, 0)
        self.assertEqual(report.breach.status, BreachStatus.FOUND)
        self.assertEqual(report.breach.count, 9545824)
        self.assertEqual(len(engine.history), 1)

    def test_breach_check_can_be_skipped(self):
        engine, http = _engine()

        async def go():
            try:
                return await engine.analyze("password", check_breach=False)
            finally:
                await http.close()

        report = asyncio.run(go())
        self.assertEqual(report.breach.status, BreachStatus.UNKNOWN)

    def test_empty_password_not_recorded(self):
        engine, http = _engine()

        async def go():
            try:
                return await engine.analyze("", check_breach=False)
            finally:
                await http.close()

        report = asyncio.run(go())
        self.assertEqual(report.result.score, 0)
        self.assertEqual(len(engine.history), 0)

    def test_empty_password_skips_range_query(self):
        calls = []

        def handler(request):
            calls.append(request.url.path)
            return httpx.Response(200, text="")

        config = KeywardConfig()
        http = KeywardHTTP(
            base_url=config.breach.api_url, transport=httpx.MockTransport(handler)
        )
        engine = KeywardEngine(config, checker=BreachChecker(config.breach, http=http))

        async def go():
            try:
                return await engine.analyze("")
            finally:
                await http.close()

        report = asyncio.run(go())
        self.assertEqual(report.breach.status, BreachStatus.UNKNOWN)
        self.assertEqual(report.breach.reason, "empty password")
        self.assertEqual(calls, [])

    def test_history_limits_follow_config(self):
        config = KeywardConfig()
        config.analysis.history_limit = 5
        config.analysis.history_hash_length = 6
        engine, _ = _engine(config)
        self.assertEqual(engine.history.limit, 5)

    def test_controller_respects_breach_toggle(self):
        config = KeywardConfig()
        config.analysis.check_breaches = False
        config.analysis.debounce_ms = 50
        engine, _ = _engine(config)
        controller = engine.controller()
        self.assertIsNone(controller.checker)
        self.assertAlmostEqual(controller.debounce, 0.05)
        self.assertIs(controller.history, engine.history)


class TestGenerate(unittest.TestCase):
    def test_default_generation_applies_overrides(self):
        engine, _ = _engine()
        policy = engine.default_generation(mode="memorable", count=None, length=20)
        self.assertIs(policy.mode, GenerationMode.MEMORABLE)
        self.assertEqual(policy.count, 6)
        self.assertEqual(policy.length, 20)
        with self.assertRaises(ValidationError):
            engine.default_generation(length=4)

    def test_batch_generated_concurrently(self):
        engine, _ = _engine()
        policy = engine.default_generation(count=8, length=24)
        batch = asyncio.run(engine.generate_batch(policy))
        self.assertEqual(len(batch), 8)
        self.assertTrue(all(len(item.password) == 24 for item in batch))
        self.assertEqual(len({item.password for item in batch}), 8)

    def test_random_source_failure_propagates(self):
        def broken(n):
            raise OSError("no entropy")

        engine, _ = _engine(rng=SecureRandom(broken))
        with self.assertRaises(RandomSourceError):
            asyncio.run(engine.generate_batch(engine.default_generation(count=3)))


if __name__ == "__main__":
    unittest.main()

# Tests for keyward.analyzers.strength
import math
import unittest

from keyward.analyzers.strength import (
    WARNING_COMMON,
    WARNING_TOO_SHORT,
    StrengthScorer,
    estimate_crack_times,
    format_duration,
    has_repeated_run,
    has_sequential_run,
    score,
)
from keyward.core.models import PatternKind, StrengthLevel

STRONG_SAMPLE = "Kx7#mQ2$vN9!pR4&wT6@"


class TestScoring(unittest.TestCase):
    def setUp(self):
        self.scorer = StrengthScorer()

    def test_common_password_is_critical(self):
        result = self.scorer.score("password")
        self.assertEqual(result.score, 0)
        self.assertEqual(result.warning, WARNING_COMMON)
        self.assertIn(PatternKind.COMMON_SUBSTRING, result.patterns)
        self.assertEqual(result.suggestions[0], WARNING_COMMON)
        self.assertEqual(result.strength, StrengthLevel.CRITICAL)

    def test_random_four_class_twenty_chars_is_fortress(self):
        result = self.scorer.score(STRONG_SAMPLE)
        self.assertEqual(result.score, 4)
        self.assertIsNone(result.warning)
        self.assertEqual(result.patterns, ())
        self.assertEqual(result.length, 20)
        self.assertAlmostEqual(result.entropy_bits, 20 * math.log2(94))
        self.assertEqual(result.strength.label, "Fortress")

    def test_empty_and_none_are_scored_as_empty(self):
        for value in ("", None):
            result = self.scorer.score(value)
            self.assertEqual(result.score, 0)
            self.assertEqual(result.entropy_bits, 0.0)
            self.assertEqual(result.length, 0)
            self.assertEqual(result.warning, WARNING_TOO_SHORT)

    def test_denylist_is_case_insensitive(self):
        self.assertEqual(self.scorer.common_substring("MyQWERTYpad"), "qwerty")
        self.assertIsNone(self.scorer.common_substring("Kx7#mQ2$"))

    def test_custom_denylist(self):
        scorer = StrengthScorer(common_substrings=("Keyward",))
        result = scorer.score("my-keyward-Vault-2931")
        self.assertIn(PatternKind.COMMON_SUBSTRING, result.patterns)

    def test_pattern_penalty_lowers_score(self):
        clean = self.scorer.score("Tr7!kLp2#qWz5^Hs")
        with_run = self.scorer.score("Tr7!kLp2#qWz5abc")
        self.assertLess(with_run.score, clean.score)
        self.assertIn(PatternKind.SEQUENTIAL, with_run.patterns)

    def test_score_stays_in_range(self):
        for sample in ["", "a", "aaaaaaaaaaaa", "password123", STRONG_SAMPLE * 3]:
            self.assertIn(self.scorer.score(sample).score, range(5))


class TestSuggestions(unittest.TestCase):
    def test_order_for_short_sequence(self):
        result = score("abc")
        self.assertEqual(
            list(result.suggestions),
            [
                WARNING_TOO_SHORT,
                "Use at least 8 characters",
                "Use 16 or more characters for strong protection",
                "Add uppercase letters",
                "Add numbers",
                "Add symbols",
                "Avoid sequences like 'abc' or '123'",
            ],
        )

    def test_repeated_characters(self):
        result = score("aaaaaaaa")
        self.assertIn("Avoid repeated characters", result.suggestions)
        self.assertIn(PatternKind.REPEATED, result.patterns)

    def test_strong_sample_has_no_advice(self):
        self.assertEqual(score(STRONG_SAMPLE).suggestions, ())


class TestPatterns(unittest.TestCase):
    def test_sequential_runs(self):
        self.assertTrue(has_sequential_run("xyz"))
        self.assertTrue(has_sequential_run("CBA"))
        self.assertTrue(has_sequential_run("pw-789"))
        self.assertTrue(has_sequential_run("aBc"))
        self.assertFalse(has_sequential_run("a1b"))
        self.assertFalse(has_sequential_run("135"))
        self.assertFalse(has_sequential_run("ab"))
        self.assertFalse(has_sequential_run("89a"))

    def test_repeated_runs(self):
        self.assertTrue(has_repeated_run("xx111yy"))
        self.assertFalse(has_repeated_run("aabbcc"))


class TestCrackTimes(unittest.TestCase):
    def test_duration_buckets(self):
        self.assertEqual(format_duration(0.5), "instant")
        self.assertEqual(format_duration(30), "less than a minute")
        self.assertEqual(format_duration(60), "1 minute")
        self.assertEqual(format_duration(7200), "2 hours")
        self.assertEqual(format_duration(86400), "1 day")
        self.assertEqual(format_duration(5 * 31_536_000), "5 years")
        self.assertEqual(format_duration(101 * 31_536_000), "centuries")
        self.assertEqual(format_duration(math.inf), "centuries")

    def test_zero_entropy_is_instant_offline(self):
        times = estimate_crack_times(0.0)
        self.assertEqual(times.offline_fast_hashing_1e10_per_second, "instant")
        self.assertEqual(times.offline_slow_hashing_1e4_per_second, "instant")

    def test_huge_entropy_does_not_overflow(self):
        times = estimate_crack_times(5000.0)
        self.assertEqual(times.online_throttling_100_per_hour, "centuries")
        self.assertEqual(times.offline_fast_hashing_1e10_per_second, "centuries")


def test_module_level_score_matches_scorer():
    assert score("correct-horse").score == StrengthScorer().score("correct-horse").score


if __name__ == "__main__":
    unittest.main()

# Tests for keyward.generators
import itertools
import re
import string
import unittest

import pytest
from pydantic import ValidationError

from keyward.analyzers.strength import COMMON_SUBSTRINGS, StrengthScorer
from keyward.core.errors import GenerationError, RandomSourceError
from keyward.core.models import GeneratedPassword, GenerationConfig, GenerationMode
from keyward.generators.password import (
    PASSPHRASE_SEPARATORS,
    SYMBOLS,
    PasswordGenerator,
)
from keyward.generators.secure_random import SecureRandom
from keyward.generators.wordlists import MEMORABLE_WORDS, PASSPHRASE_WORDS


def counting_source():
    """Deterministic byte source cycling through 0..255."""
    counter = itertools.count()

    def source(n):
        return bytes(next(counter) % 256 for _ in range(n))

    return source


def replay_source(values):
    it = iter(values)

    def source(n):
        return bytes(next(it) for _ in range(n))

    return source


class TestSecureRandom(unittest.TestCase):
    def test_randbelow_uses_masked_bytes(self):
        rng = SecureRandom(replay_source([5]))
        self.assertEqual(rng.randbelow(10), 5)

    def test_randbelow_rejects_out_of_range(self):
        # 15 is within the 4-bit mask but not below 10, so it is redrawn.
        rng = SecureRandom(replay_source([15, 12, 3]))
        self.assertEqual(rng.randbelow(10), 3)

    def test_randbelow_bounds(self):
        rng = SecureRandom()
        self.assertEqual(rng.randbelow(1), 0)
        with self.assertRaises(ValueError):
            rng.randbelow(0)
        for _ in range(200):
            self.assertIn(rng.randbelow(7), range(7))

    def test_choice_empty(self):
        with self.assertRaises(IndexError):
            SecureRandom().choice("")

    def test_shuffle_is_permutation(self):
        items = list(range(30))
        SecureRandom().shuffle(items)
        self.assertEqual(sorted(items), list(range(30)))

    def test_failing_source_raises(self):
        def broken(n):
            raise OSError("no entropy")

        with self.assertRaises(RandomSourceError):
            SecureRandom(broken).randbelow(10)

    def test_short_read_raises(self):
        with self.assertRaises(RandomSourceError):
            SecureRandom(lambda n: b"").randbelow(10)


class TestRandomMode(unittest.TestCase):
    def setUp(self):
        self.generator = PasswordGenerator()

    def test_every_enabled_class_present(self):
        config = GenerationConfig(length=16)
        for _ in range(100):
            password = self.generator.generate(config)
            self.assertEqual(len(password), 16)
            self.assertTrue(any(c in string.ascii_lowercase for c in password))
            self.assertTrue(any(c in string.ascii_uppercase for c in password))
            self.assertTrue(any(c in string.digits for c in password))
            self.assertTrue(any(c in SYMBOLS for c in password))

    def test_disabled_classes_absent(self):
        config = GenerationConfig(
            length=12, use_uppercase=False, use_numbers=False, use_symbols=False
        )
        for _ in range(50):
            password = self.generator.generate(config)
            self.assertEqual(len(password), 12)
            self.assertTrue(set(password) <= set(string.ascii_lowercase))

    def test_length_bounds(self):
        for length in (8, 64):
            password = self.generator.generate(GenerationConfig(length=length))
            self.assertEqual(len(password), length)

    def test_deterministic_with_fixed_source(self):
        config = GenerationConfig(length=20)
        first = PasswordGenerator(rng=SecureRandom(counting_source())).generate(config)
        second = PasswordGenerator(rng=SecureRandom(counting_source())).generate(config)
        self.assertEqual(first, second)

    def test_random_source_failure_propagates(self):
        def broken(n):
            raise OSError("no entropy")

        generator = PasswordGenerator(rng=SecureRandom(broken))
        with self.assertRaises(RandomSourceError):
            generator.generate(GenerationConfig())
        with self.assertRaises(GenerationError):
            generator.generate_batch(GenerationConfig(count=3))


class TestWordModes(unittest.TestCase):
    def setUp(self):
        self.generator = PasswordGenerator()

    def test_word_lists_avoid_common_substrings(self):
        for word in PASSPHRASE_WORDS + MEMORABLE_WORDS:
            for common in COMMON_SUBSTRINGS:
                self.assertNotIn(common, word)
        self.assertEqual(len(set(PASSPHRASE_WORDS)), 128)

    def test_passphrase_plain_separator(self):
        config = GenerationConfig(mode="passphrase", use_symbols=False)
        for _ in range(30):
            parts = self.generator.generate(config).split("-")
            self.assertEqual(len(parts), 5)
            for word in parts[:4]:
                self.assertIn(word, PASSPHRASE_WORDS)
            self.assertRegex(parts[4], r"^\d{2}$")

    def test_passphrase_without_numbers(self):
        config = GenerationConfig(
            mode="passphrase", use_symbols=False, use_numbers=False
        )
        parts = self.generator.generate(config).split("-")
        self.assertEqual(len(parts), 4)

    def test_passphrase_symbol_separator(self):
        config = GenerationConfig(mode="passphrase")
        for _ in range(30):
            password = self.generator.generate(config)
            separators = {c for c in password if not c.isalnum()}
            self.assertEqual(len(separators), 1)
            separator = separators.pop()
            self.assertIn(separator, PASSPHRASE_SEPARATORS)
            self.assertEqual(len(password.split(separator)), 5)

    def test_memorable_shape(self):
        capitalised = {w.capitalize() for w in MEMORABLE_WORDS}
        pattern = re.compile(r"^((?:[A-Z][a-z]+){3})(\d{2})(.)$")
        config = GenerationConfig(mode="memorable")
        for _ in range(30):
            match = pattern.match(self.generator.generate(config))
            self.assertIsNotNone(match)
            words = re.findall(r"[A-Z][a-z]+", match.group(1))
            self.assertEqual(len(words), 3)
            self.assertTrue(set(words) <= capitalised)
            self.assertIn(match.group(3), SYMBOLS)

    def test_memorable_letters_only(self):
        config = GenerationConfig(
            mode="memorable", use_numbers=False, use_symbols=False
        )
        self.assertRegex(self.generator.generate(config), r"^(?:[A-Z][a-z]+){3}$")

    def test_unsupported_mode(self):
        config = GenerationConfig.model_construct(mode="bogus")
        with self.assertRaises(GenerationError):
            self.generator.generate(config)


class TestBatch(unittest.TestCase):
    def test_batch_scored_in_order(self):
        scorer = StrengthScorer()
        batch = PasswordGenerator(scorer).generate_batch(GenerationConfig(count=5))
        self.assertEqual(len(batch), 5)
        self.assertEqual(len({item.id for item in batch}), 5)
        for item in batch:
            self.assertEqual(item.analysis, scorer.score(item.password))

    def test_select_strongest_prefers_earliest_tie(self):
        scorer = StrengthScorer()
        weak = GeneratedPassword(password="password", analysis=scorer.score("password"))
        first = GeneratedPassword(
            password="Kx7#mQ2$vN9!pR4&wT6@", analysis=scorer.score("Kx7#mQ2$vN9!pR4&wT6@")
        )
        second = GeneratedPassword(
            password="Tr7!kLp2#qWz5^Hs", analysis=scorer.score("Tr7!kLp2#qWz5^Hs")
        )
        self.assertEqual(first.score, second.score)
        self.assertIs(PasswordGenerator.select_strongest([weak, first, second]), first)

    def test_select_strongest_empty(self):
        with self.assertRaises(ValueError):
            PasswordGenerator.select_strongest([])

    def test_password_hidden_from_repr(self):
        item = PasswordGenerator().generate_one(GenerationConfig())
        self.assertNotIn(item.password, repr(item))


@pytest.mark.parametrize(
    "overrides",
    [
        {"length": 7},
        {"length": 65},
        {"count": 0},
        {"count": 21},
        {"mode": "pronounceable"},
        {"unknown": True},
    ],
)
def test_generation_config_rejects_invalid(overrides):
    with pytest.raises(ValidationError):
        GenerationConfig(**overrides)


def test_generation_config_defaults():
    config = GenerationConfig()
    assert config.mode is GenerationMode.RANDOM
    assert (config.length, config.count) == (16, 6)


if __name__ == "__main__":
    unittest.main()

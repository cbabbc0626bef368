"""
Secure Password Generator
==========================

Generates passwords in three modes, every choice drawn from
:class:`~keyward.generators.secure_random.SecureRandom`:

- **random**: lowercase always, plus uppercase, digits and symbols per
  policy.  One character from each enabled class is guaranteed, the rest
  is filled uniformly from the combined alphabet, and the result is
  Fisher-Yates shuffled so the guaranteed characters land anywhere.  The
  effective length is ``max(length, enabled_class_count)``.
- **passphrase**: four words joined by one random separator symbol
  (``-`` when symbols are off), with a two-digit suffix when numbers are on.
- **memorable**: three capitalised words run together, with a two-digit
  suffix and/or one trailing symbol per policy.

Batches are scored with :class:`~keyward.analyzers.strength.StrengthScorer`
and keep request order.

References:
    - Knuth, D. E. (1997). The Art of Computer Programming, Vol. 2,
      Section 3.4.2 (Algorithm P, the Fisher-Yates shuffle).
    - Reinhold, A. G. (1995). The Diceware Passphrase Home Page.
"""

from __future__ import annotations

import string
from typing import Optional, Sequence

from shared.logger import KeywardLogger

from keyward.analyzers.strength import StrengthScorer
from keyward.core.errors import GenerationError
from keyward.core.models import GeneratedPassword, GenerationConfig, GenerationMode
from keyward.generators.secure_random import SecureRandom
from keyward.generators.wordlists import MEMORABLE_WORDS, PASSPHRASE_WORDS

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?~`"

PASSPHRASE_SEPARATORS = "-_.!@#$%&*+="
DEFAULT_SEPARATOR = "-"
PASSPHRASE_WORD_COUNT = 4
MEMORABLE_WORD_COUNT = 3
SUFFIX_DIGITS = 2


class PasswordGenerator:
    """Policy-driven password generation on a secure random source.

    Usage::

        generator = PasswordGenerator()
        config = GenerationConfig(mode="passphrase", count=5)
        batch = generator.generate_batch(config)
        best = generator.select_strongest(batch)

    Args:
        scorer: Scorer applied to each batch member.
        rng: Secure random source; defaults to one backed by ``os.urandom``.
    """

    def __init__(
        self,
        scorer: Optional[StrengthScorer] = None,
        rng: Optional[SecureRandom] = None,
    ) -> None:
        self.scorer = scorer or StrengthScorer()
        self.rng = rng or SecureRandom()
        self.logger = KeywardLogger("generator")

    def generate(self, config: GenerationConfig) -> str:
        """Generate one password under *config*.

        Raises:
            RandomSourceError: If the secure random source fails.
        """
        if config.mode is GenerationMode.RANDOM:
            return self._random(config)
        if config.mode is GenerationMode.PASSPHRASE:
            return self._passphrase(config)
        if config.mode is GenerationMode.MEMORABLE:
            return self._memorable(config)
        raise GenerationError(f"unsupported generation mode: {config.mode!r}")

    def generate_one(self, config: GenerationConfig) -> GeneratedPassword:
        """Generate and score a single batch member."""
        password = self.generate(config)
        return GeneratedPassword(password=password, analysis=self.scorer.score(password))

    def generate_batch(self, config: GenerationConfig) -> list[GeneratedPassword]:
        """Generate ``config.count`` independent, scored passwords in order."""
        with self.logger.timed(f"{config.mode.value} batch of {config.count}"):
            return [self.generate_one(config) for _ in range(config.count)]

    @staticmethod
    def select_strongest(batch: Sequence[GeneratedPassword]) -> GeneratedPassword:
        """Highest-scoring member; ties go to the earliest generated."""
        if not batch:
            raise ValueError("cannot select from an empty batch")
        best = batch[0]
        for candidate in batch[1:]:
            if candidate.score > best.score:
                best = candidate
        return best

    # ------------------------------------------------------------------ #
    #  Modes
    # ------------------------------------------------------------------ #

    def _random(self, config: GenerationConfig) -> str:
        alphabets = [LOWERCASE]
        if config.use_uppercase:
            alphabets.append(UPPERCASE)
        if config.use_numbers:
            alphabets.append(DIGITS)
        if config.use_symbols:
            alphabets.append(SYMBOLS)
        combined = "".join(alphabets)

        chars = [self.rng.choice(alphabet) for alphabet in alphabets]
        filler = max(0, config.length - len(chars))
        chars.extend(self.rng.choice(combined) for _ in range(filler))
        self.rng.shuffle(chars)
        return "".join(chars)

    def _passphrase(self, config: GenerationConfig) -> str:
        words = [self.rng.choice(PASSPHRASE_WORDS) for _ in range(PASSPHRASE_WORD_COUNT)]
        separator = (
            self.rng.choice(PASSPHRASE_SEPARATORS)
            if config.use_symbols
            else DEFAULT_SEPARATOR
        )
        if config.use_numbers:
            words.append(self._numeric_suffix())
        return separator.join(words)

    def _memorable(self, config: GenerationConfig) -> str:
        words = [
            self.rng.choice(MEMORABLE_WORDS).capitalize()
            for _ in range(MEMORABLE_WORD_COUNT)
        ]
        password = "".join(words)
        if config.use_numbers:
            password += self._numeric_suffix()
        if config.use_symbols:
            password += self.rng.choice(SYMBOLS)
        return password

    def _numeric_suffix(self) -> str:
        return str(self.rng.randbelow(10 ** SUFFIX_DIGITS)).zfill(SUFFIX_DIGITS)

"""
Keyward Generators
===================

Random, passphrase and memorable password generation on a secure random
source.
"""

from keyward.generators.password import PasswordGenerator
from keyward.generators.secure_random import SecureRandom

__all__ = ["PasswordGenerator", "SecureRandom"]

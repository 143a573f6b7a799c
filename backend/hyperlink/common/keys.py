"""
Message Key Generation

Keys are drawn uniformly from a fixed 62-character alphanumeric alphabet.
Uniqueness is not guaranteed here; callers rely on the size of the key space.
"""

import os
import random
from typing import Optional

from hyperlink.common.errors import ValidationError

KEY_LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

DEFAULT_KEY_LENGTH = 12


class KeyGenerator:
    """
    Random key generator

    Wraps a `random.Random` instance so tests can inject a seeded one.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random(os.urandom(32))

    def seed(self, value) -> None:
        """Reseed the underlying generator (deterministic sequences in tests)."""
        self._rng.seed(value)

    def new_key(self, length: int = DEFAULT_KEY_LENGTH) -> str:
        """
        Generate a random key

        Args:
            length: Number of characters

        Returns:
            str: Key of exactly `length` characters from KEY_LETTERS

        Raises:
            ValidationError: If length is negative
        """
        if length < 0:
            raise ValidationError(
                f"Key length must not be negative: {length}",
                code="invalid_key_length",
            )
        return "".join(self._rng.choice(KEY_LETTERS) for _ in range(length))


# Process-wide generator, seeded from OS entropy at import time
_default_generator = KeyGenerator()


def new_key(length: int = DEFAULT_KEY_LENGTH) -> str:
    """Generate a key with the process-wide generator."""
    return _default_generator.new_key(length)


def seed(value) -> None:
    """Reseed the process-wide generator."""
    _default_generator.seed(value)


def is_valid_key(key: str) -> bool:
    """Check that a key is non-empty and uses only KEY_LETTERS."""
    return bool(key) and all(ch in KEY_LETTERS for ch in key)

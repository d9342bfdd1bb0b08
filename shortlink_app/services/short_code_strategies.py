"""
Short code generation strategies for the short link service.
Uses Strategy Pattern so the allocator does not care how tokens are drawn.
"""

import secrets
import string
from abc import ABC, abstractmethod

# Alphanumerics without the look-alikes 0/O, 1/l/I
UNAMBIGUOUS_ALPHABET = "".join(
    c for c in string.digits + string.ascii_lowercase + string.ascii_uppercase
    if c not in "0O1lI"
)


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a candidate short code.

        Uniqueness is NOT guaranteed here; the caller checks the store
        and asks for another candidate on collision.

        Returns:
            A short code string
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random generation strategy.
    Draws every character independently from the alphabet with a CSPRNG.

    Pros: Unpredictable, no coordination between workers
    Cons: Collisions are possible, so the caller must probe the store
    """

    def __init__(self, length: int = 7, alphabet: str = UNAMBIGUOUS_ALPHABET):
        if length < 1:
            raise ValueError(f"Short code length must be positive, got {length}")
        if len(set(alphabet)) < 2:
            raise ValueError("Alphabet needs at least two distinct characters")
        self.length = length
        self.alphabet = alphabet

    def generate(self) -> str:
        """Generate a random string of the configured length"""
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))

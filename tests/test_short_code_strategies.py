"""
Tests for short code generation strategies.
"""
import pytest

from shortlink_app.services.short_code_strategies import (
    RandomShortCodeStrategy,
    ShortCodeStrategy,
    UNAMBIGUOUS_ALPHABET,
)


class TestRandomStrategy:
    """Test random short code strategy"""

    def test_default_length_is_seven(self):
        strategy = RandomShortCodeStrategy()

        code = strategy.generate()

        assert len(code) == 7

    def test_custom_length(self):
        strategy = RandomShortCodeStrategy(length=12)
        assert len(strategy.generate()) == 12

    def test_codes_use_alphabet_only(self):
        strategy = RandomShortCodeStrategy()

        for _ in range(200):
            code = strategy.generate()
            assert set(code) <= set(UNAMBIGUOUS_ALPHABET)

    def test_codes_are_random(self):
        """Test that consecutive codes differ (55^7 possibilities)"""
        strategy = RandomShortCodeStrategy()

        codes = {strategy.generate() for _ in range(100)}

        assert len(codes) == 100

    def test_custom_alphabet(self):
        strategy = RandomShortCodeStrategy(length=5, alphabet="ab")
        assert set(strategy.generate()) <= {"a", "b"}

    @pytest.mark.parametrize("length", [0, -3])
    def test_rejects_non_positive_length(self, length):
        with pytest.raises(ValueError):
            RandomShortCodeStrategy(length=length)

    def test_rejects_single_character_alphabet(self):
        with pytest.raises(ValueError):
            RandomShortCodeStrategy(alphabet="aaaa")

    def test_is_a_strategy(self):
        assert isinstance(RandomShortCodeStrategy(), ShortCodeStrategy)


def test_alphabet_has_no_ambiguous_characters():
    for ch in "0O1lI":
        assert ch not in UNAMBIGUOUS_ALPHABET
    assert UNAMBIGUOUS_ALPHABET.isalnum()
    assert len(set(UNAMBIGUOUS_ALPHABET)) == len(UNAMBIGUOUS_ALPHABET)

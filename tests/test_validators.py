"""
Unit Tests for Input Normalization

Typed entries are parsed, clamped and rounded before they reach the engine.
Parse failures become 0, which then clamps to the range floor.
"""

import pytest
from decimal import Decimal
from payout_engine.validators import InputNormalizer, clamp_deals, commit_ppw, commit_watts


class TestCommitPpw:
    """PPW text commit: parse, clamp to [2.4, 5.0], round to cents."""

    @pytest.fixture
    def normalizer(self):
        return InputNormalizer()

    def test_valid_value_kept(self, normalizer):
        assert normalizer.commit_ppw("3.05") == Decimal('3.05')

    def test_rounded_to_two_places(self, normalizer):
        assert normalizer.commit_ppw("3.333") == Decimal('3.33')
        assert normalizer.commit_ppw("3.456") == Decimal('3.46')

    def test_clamped_to_maximum(self, normalizer):
        assert normalizer.commit_ppw("10") == Decimal('5.00')

    def test_clamped_to_minimum(self, normalizer):
        assert normalizer.commit_ppw("1.9") == Decimal('2.40')
        assert normalizer.commit_ppw("-3") == Decimal('2.40')

    def test_unparsable_becomes_zero_then_clamps(self, normalizer):
        assert normalizer.commit_ppw("abc") == Decimal('2.40')
        assert normalizer.commit_ppw("") == Decimal('2.40')

    def test_leading_number_is_parsed(self, normalizer):
        """Trailing junk is ignored, like a browser float parse."""
        assert normalizer.commit_ppw("3.1 $/W") == Decimal('3.10')
        assert normalizer.commit_ppw("  2.9") == Decimal('2.90')

    def test_accepts_numbers(self, normalizer):
        assert normalizer.commit_ppw(3.2) == Decimal('3.20')


class TestCommitWatts:
    """Watts text commit: digits only, clamp to [4001, 30000]."""

    @pytest.fixture
    def normalizer(self):
        return InputNormalizer()

    def test_valid_value_kept(self, normalizer):
        assert normalizer.commit_watts("8500") == Decimal('8500')

    def test_non_digits_stripped(self, normalizer):
        assert normalizer.commit_watts("8,500 W") == Decimal('8500')

    def test_minus_sign_stripped(self, normalizer):
        assert normalizer.commit_watts("-9000") == Decimal('9000')

    def test_clamped_to_minimum(self, normalizer):
        assert normalizer.commit_watts("4000") == Decimal('4001')

    def test_clamped_to_maximum(self, normalizer):
        assert normalizer.commit_watts("45000") == Decimal('30000')

    def test_unparsable_becomes_zero_then_clamps(self, normalizer):
        assert normalizer.commit_watts("abc") == Decimal('4001')
        assert normalizer.commit_watts("") == Decimal('4001')

    def test_decimal_point_is_stripped_too(self, normalizer):
        # "8000.5" -> "80005" -> clamped
        assert normalizer.commit_watts("8000.5") == Decimal('30000')


class TestClampDeals:
    """Deals clamp to [0, 50] on change."""

    @pytest.fixture
    def normalizer(self):
        return InputNormalizer()

    @pytest.mark.parametrize("value,expected", [
        (7, '7'),
        (0, '0'),
        (-1, '0'),
        (51, '50'),
        (3.5, '3.5'),
    ])
    def test_clamp(self, normalizer, value, expected):
        assert normalizer.clamp_deals(value) == Decimal(expected)

    def test_garbage_becomes_zero(self, normalizer):
        assert normalizer.clamp_deals("many") == Decimal('0')
        assert normalizer.clamp_deals(float("nan")) == Decimal('0')

    def test_infinity_clamps_to_maximum(self, normalizer):
        assert normalizer.clamp_deals(float("inf")) == Decimal('50')


class TestModuleHelpers:
    """The module-level helpers delegate to a shared normalizer."""

    def test_helpers(self):
        assert commit_ppw("3.0") == Decimal('3.00')
        assert commit_watts("12000") == Decimal('12000')
        assert clamp_deals(60) == Decimal('50')

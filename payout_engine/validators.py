"""
Input Normalization for the Payout Engine

Turns raw calculator entries into values in the sane editing ranges.
The engine itself never clamps; hosts call these before computing.
Parse failures are not errors here: they become 0 before clamping.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

# Leading numeric prefix, the way a browser's parseFloat reads "3.05abc"
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_NON_DIGITS = re.compile(r"[^0-9]")


def _clamp(value: Decimal, lower: Decimal, upper: Decimal) -> Decimal:
    return max(lower, min(upper, value))


class InputNormalizer:
    """Clamps and parses calculator inputs."""

    PPW_MIN = Decimal("2.4")
    PPW_MAX = Decimal("5.0")
    WATTS_MIN = Decimal("4001")
    WATTS_MAX = Decimal("30000")
    DEALS_MIN = Decimal("0")
    DEALS_MAX = Decimal("50")

    def commit_ppw(self, text) -> Decimal:
        """
        Commit a typed PPW entry.

        Parse as a float (failure gives 0), clamp to [2.4, 5.0],
        round to 2 decimal places.
        """
        match = _FLOAT_PREFIX.match(str(text))
        value = Decimal("0")
        if match:
            try:
                value = Decimal(match.group(1))
            except InvalidOperation:
                value = Decimal("0")
        value = _clamp(value, self.PPW_MIN, self.PPW_MAX)
        return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def commit_watts(self, text) -> Decimal:
        """
        Commit a typed watts entry.

        Strip everything but digits, parse as an integer (failure gives 0),
        clamp to [4001, 30000].
        """
        digits = _NON_DIGITS.sub("", str(text))
        value = Decimal(int(digits)) if digits else Decimal("0")
        return _clamp(value, self.WATTS_MIN, self.WATTS_MAX)

    def clamp_deals(self, value) -> Decimal:
        """Clamp the deals count to [0, 50]; there is no separate commit step."""
        try:
            deals = Decimal(str(value))
        except InvalidOperation:
            deals = Decimal("0")
        if deals.is_nan():
            deals = Decimal("0")
        return _clamp(deals, self.DEALS_MIN, self.DEALS_MAX)


_normalizer = InputNormalizer()


def commit_ppw(text) -> Decimal:
    return _normalizer.commit_ppw(text)


def commit_watts(text) -> Decimal:
    return _normalizer.commit_watts(text)


def clamp_deals(value) -> Decimal:
    return _normalizer.clamp_deals(value)

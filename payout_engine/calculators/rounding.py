from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal


def round_dollars(value: Decimal) -> int:
    """Round to whole dollars, halves toward positive infinity.

    -0.5 rounds to 0 and 0.5 rounds to 1, the same as a browser Math.round.
    """
    rounding = ROUND_HALF_DOWN if value < 0 else ROUND_HALF_UP
    return int(value.to_integral_value(rounding=rounding))

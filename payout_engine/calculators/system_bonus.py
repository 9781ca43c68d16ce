"""
Big System Bonus Calculator

Rewards larger installations above a size floor.
"""

from decimal import Decimal

from .rounding import round_dollars


class SystemBonusCalculator:
    """Calculates the big-system bonus from system size in kW."""

    FLOOR_KW = Decimal("10")
    CAP_KW = Decimal("20")
    FLOOR_BONUS = Decimal("200")
    PER_KW = Decimal("50")

    def calculate(self, kw: Decimal) -> int:
        """
        $200 at 10 kW, plus $50 per additional kW.

        Size is capped at 20 kW, so the bonus never exceeds $700.
        Systems under 10 kW earn nothing.
        """
        if kw < self.FLOOR_KW:
            return 0
        clamped = min(kw, self.CAP_KW)
        return round_dollars(self.FLOOR_BONUS + self.PER_KW * (clamped - self.FLOOR_KW))

"""
Payout Calculator

Combines the base, PPW bonus and big-system bonus into the final payout
for each sale structure.
"""

from ..models import PayoutInput, PayoutResult
from .base import BasePayoutCalculator
from .ppw_bonus import PpwBonusCalculator
from .rounding import round_dollars
from .system_bonus import SystemBonusCalculator


class PayoutCalculator:
    """Calculates the commission payout for loan/cash and TPO sales."""

    def __init__(self):
        self.base_calculator = BasePayoutCalculator()
        self.ppw_bonus_calculator = PpwBonusCalculator()
        self.system_bonus_calculator = SystemBonusCalculator()

    def calculate_loan(self, payout_input: PayoutInput) -> PayoutResult:
        """
        Loan/Cash payout.

        Total = Base
              + PPW Bonus
              + Big System Bonus

        Base and PPW bonus are rounded to whole dollars independently
        before they are added.
        """
        kw = payout_input.kw

        base = round_dollars(self.base_calculator.calculate(payout_input.deals))
        ppw_bonus = round_dollars(self.ppw_bonus_calculator.calculate(payout_input.ppw, kw))
        big_system_bonus = self.system_bonus_calculator.calculate(kw)

        total = base + ppw_bonus + big_system_bonus

        return PayoutResult(
            base=base,
            ppw_bonus=ppw_bonus,
            big_system_bonus=big_system_bonus,
            total=total,
        )

    def calculate_tpo(self, payout_input: PayoutInput) -> PayoutResult:
        """
        TPO/PPA payout.

        Commission depends only on deal volume: bonuses are forced to zero
        and the total is the base.
        """
        loan = self.calculate_loan(payout_input)
        return PayoutResult(base=loan.base, ppw_bonus=0, big_system_bonus=0, total=loan.base)

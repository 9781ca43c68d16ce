"""
PPW Bonus Calculator

Rewards pricing above cost thresholds, scaled by system size.
"""

from decimal import Decimal

from .tiers import PPW_TIERS, lookup


class PpwBonusCalculator:
    """Calculates the un-rounded PPW bonus."""

    def rate_per_kw(self, ppw: Decimal) -> Decimal:
        return lookup(PPW_TIERS, ppw)

    def calculate(self, ppw: Decimal, kw: Decimal) -> Decimal:
        """
        Per-kW rate for the PPW tier times system kW.

        Not rounded here; the payout step rounds it with the base.
        """
        return self.rate_per_kw(ppw) * kw

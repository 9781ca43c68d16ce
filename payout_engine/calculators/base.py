"""
Base Payout Calculator

Base commission keyed solely to the number of deals closed.
"""

from decimal import Decimal

from .tiers import BASE_TIERS, lookup


class BasePayoutCalculator:
    """Looks up the base payout on the deals ladder."""

    def calculate(self, deals: Decimal) -> Decimal:
        """
        Base payout by deals closed:
        - 7 or more: $2,500
        - 4 to 6: $2,200
        - 1 to 3: $1,800
        - fewer than 1: $0
        """
        return lookup(BASE_TIERS, deals)

"""
Calculators Package

Provides all calculation components for the payout engine.
"""

from .base import BasePayoutCalculator
from .celebration import should_celebrate
from .payout import PayoutCalculator
from .ppw_bonus import PpwBonusCalculator
from .system_bonus import SystemBonusCalculator

__all__ = [
    "BasePayoutCalculator",
    "PpwBonusCalculator",
    "SystemBonusCalculator",
    "PayoutCalculator",
    "should_celebrate",
]

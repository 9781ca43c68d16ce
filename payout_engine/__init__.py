"""
SOLAR COMMISSION PAYOUT ENGINE
"""

from .calculators import should_celebrate
from .models import PayoutInput, PayoutResult, SaleKind, SavedDeal
from .processor import PayoutProcessor, compute, compute_loan_payout, compute_tpo_payout

__all__ = [
    "PayoutProcessor",
    "PayoutInput",
    "PayoutResult",
    "SaleKind",
    "SavedDeal",
    "compute",
    "compute_loan_payout",
    "compute_tpo_payout",
    "should_celebrate",
]

"""
Payout Processor - Main Orchestrator

Dispatches a payout computation to the formula for its sale structure and
builds the response for hosts.
"""

from typing import Dict, Any

from .calculators import PayoutCalculator, should_celebrate
from .models import PayoutInput, PayoutResult, SaleKind
from .output import OutputBuilder


class PayoutProcessor:
    """
    Main orchestrator for payout computation.

    Pipeline:
    1. Build Input (parse and convert to Decimal)
    2. Dispatch on sale kind
    3. Compute Payout
    4. Build Output (celebration flag and coaching tip)
    """

    def __init__(self):
        self.payout_calculator = PayoutCalculator()
        self.output_builder = OutputBuilder()

    def process(self, payout_input: PayoutInput) -> PayoutResult:
        """
        Compute the payout for one set of inputs.

        Args:
            payout_input: PayoutInput with Decimal values and a SaleKind

        Returns:
            PayoutResult with whole-dollar components
        """
        if payout_input.sale_kind is SaleKind.LOAN:
            return self.payout_calculator.calculate_loan(payout_input)
        if payout_input.sale_kind is SaleKind.TPO:
            return self.payout_calculator.calculate_tpo(payout_input)
        raise ValueError(f"Unhandled sale kind: {payout_input.sale_kind!r}")

    def process_from_dict(self, data: Dict[str, Any], default_sale_kind=SaleKind.LOAN) -> Dict[str, Any]:
        """
        Compute a payout from raw dictionary input.

        Convenience method for API usage.
        """
        payout_input = PayoutInput.from_dict(data, default_sale_kind=default_sale_kind)
        return self.process_to_dict(payout_input)

    def process_to_dict(self, payout_input: PayoutInput) -> Dict[str, Any]:
        """Compute and build the full response: payout, celebration flag, coaching tip."""
        result = self.process(payout_input)
        return self.output_builder.build(payout_input, result)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_processor = PayoutProcessor()


def compute(sale_kind, deals, ppw, watts) -> PayoutResult:
    """Compute the payout for a sale kind ('loan' or 'tpo')."""
    return _processor.process(PayoutInput.create(deals, ppw, watts, sale_kind))


def compute_loan_payout(deals, ppw, watts) -> PayoutResult:
    return compute(SaleKind.LOAN, deals, ppw, watts)


def compute_tpo_payout(deals, ppw, watts) -> PayoutResult:
    return compute(SaleKind.TPO, deals, ppw, watts)


__all__ = [
    "PayoutProcessor",
    "compute",
    "compute_loan_payout",
    "compute_tpo_payout",
    "should_celebrate",
]

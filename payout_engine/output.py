"""
Output Builder

Constructs the API response for a computed payout.
"""

from decimal import Decimal

from .calculators.celebration import should_celebrate
from .calculators.ppw_bonus import PpwBonusCalculator
from .coaching import coach_tip
from .models import PayoutInput, PayoutResult, SaleKind


def currency(value) -> str:
    """Whole-dollar amount with thousands separators."""
    return f"{round(float(value)):,}"


def _fmt(value) -> str:
    return f"${currency(value)}"


class OutputBuilder:
    """Builds the final output response."""

    def build(self, payout_input: PayoutInput, result: PayoutResult) -> dict:
        return {
            "inputs": self._build_inputs(payout_input),
            "payout": self._build_payout(payout_input, result),
            "celebrate": should_celebrate(result.total),
            "coach_tip": coach_tip(payout_input, result),
        }

    def _build_inputs(self, payout_input: PayoutInput) -> dict:
        inputs = payout_input.to_dict()
        inputs["kw"] = float(payout_input.kw)
        inputs["sale_kind_label"] = payout_input.sale_kind.label
        return inputs

    def _build_payout(self, payout_input: PayoutInput, result: PayoutResult) -> dict:
        """Build payout section with value and dynamic description for each field."""
        is_tpo = payout_input.sale_kind is SaleKind.TPO
        kw = payout_input.kw
        kw_text = f"{kw.normalize():f} kW"

        if is_tpo:
            ppw_desc = "PPW bonus not applied to TPO/PPA sales"
            system_desc = "System bonus not applied to TPO/PPA sales"
            total_desc = f"TPO/PPA total equals base ({_fmt(result.base)})"
        else:
            rate = int(PpwBonusCalculator().rate_per_kw(payout_input.ppw))
            ppw_desc = (
                f"${rate}/kW at PPW ${payout_input.ppw:.2f} × {kw_text} = {_fmt(result.ppw_bonus)}"
                if rate
                else f"PPW ${payout_input.ppw:.2f} is outside the bonus tiers"
            )
            system_desc = (
                f"$200 at 10 kW + $50 per kW above, capped at 20 kW: {kw_text} = {_fmt(result.big_system_bonus)}"
                if kw >= Decimal("10")
                else f"{kw_text} is under the 10 kW floor"
            )
            total_desc = (
                f"base ({_fmt(result.base)}) + ppw ({_fmt(result.ppw_bonus)}) "
                f"+ system ({_fmt(result.big_system_bonus)}) = {_fmt(result.total)}"
            )

        return {
            "base": {
                "value": result.base,
                "description": f"Base payout for {payout_input.deals.normalize():f} deals this month",
            },
            "ppw_bonus": {
                "value": result.ppw_bonus,
                "description": ppw_desc,
            },
            "big_system_bonus": {
                "value": result.big_system_bonus,
                "description": system_desc,
            },
            "total": {
                "value": result.total,
                "description": total_desc,
            },
        }

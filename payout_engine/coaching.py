"""
Coaching

Micro-coaching tips derived from the current inputs and payout, plus the
rotating motivational quote shown beside the calculator.
"""

import math
import time
from decimal import Decimal

from .calculators.celebration import CELEBRATION_THRESHOLD
from .models import PayoutInput, PayoutResult, SaleKind

QUOTES = (
    "Momentum wins. Execution > hesitation.",
    "One-call close: go for the decision today.",
    "Price is a story. Value is the plot.",
    "Clarity + urgency = signatures.",
    "Every objection is a request for confidence.",
    "Anchor on lifetime savings, not today's bill.",
)

QUOTE_INTERVAL_SECONDS = 15

TPO_TIP = "TPO/PPA selected: Only base payout varies with monthly deals. PPW & system bonuses are not applied."
PUSH_TIP = "Push to $2.5k: raise PPW slightly or add panels to reach the next bonus tier."
LOCK_IN_TIP = "Nice! Lock it in. If homeowner is value-focused, anchor on lifetime savings vs. payment."

PPW_NUDGE = Decimal("0.1")
KW_NUDGE = Decimal("1")


def current_quote(now: float | None = None) -> str:
    """Quote for the given epoch time; advances every 15 seconds."""
    if now is None:
        now = time.time()
    return QUOTES[int(now // QUOTE_INTERVAL_SECONDS) % len(QUOTES)]


def next_ppw_tier(ppw: Decimal) -> Decimal | None:
    """Lowest price that reaches a better-paying PPW tier, if one exists."""
    if ppw < Decimal("3.0"):
        return Decimal("3.0")
    if ppw <= Decimal("3.2"):
        return Decimal("3.21")
    if ppw <= Decimal("3.5"):
        return Decimal("3.51")
    # Above 3.5 the next step (past 4.5) pays nothing
    return None


def _tier_rate(tier: Decimal) -> int:
    if tier >= Decimal("3.5"):
        return 100
    if tier > Decimal("3.2"):
        return 75
    if tier >= Decimal("3.0"):
        return 50
    return 25


def next_kw_step(kw: Decimal) -> Decimal | None:
    """Next whole kW that adds system bonus, or None past the 20 kW cap."""
    if kw < Decimal("10"):
        return Decimal("10")
    if kw < Decimal("20"):
        if kw == kw.to_integral_value():
            return kw + 1
        return Decimal(math.ceil(kw))
    return None


def coach_tip(payout_input: PayoutInput, result: PayoutResult | None = None) -> str:
    """Pick the single most useful nudge for the rep."""
    if payout_input.sale_kind is SaleKind.TPO:
        return TPO_TIP

    ppw = payout_input.ppw
    tier = next_ppw_tier(ppw)
    if tier is not None:
        delta = tier - ppw
        if 0 < delta <= PPW_NUDGE:
            return f"Bump PPW by {delta:.2f} to reach tier {tier:.2f} and unlock ~${_tier_rate(tier)}/kW."

    kw = payout_input.kw
    step = next_kw_step(kw)
    if step is not None:
        delta = step - kw
        if 0 < delta <= KW_NUDGE:
            goal = "start the $200 system bonus" if step == 10 else "add another $50 system bonus"
            watts_needed = math.ceil(delta * 1000)
            return f"Add ~{watts_needed} watts to hit {int(step)} kW and {goal}."

    if result is not None and result.total < CELEBRATION_THRESHOLD:
        return PUSH_TIP
    return LOCK_IN_TIP

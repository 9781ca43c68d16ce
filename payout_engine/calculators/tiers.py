"""
Tier Tables

Ordered range tables for the step-function ladders of the payout engine.
Each row states its own bounds and whether they are inclusive, so boundary
tests map directly to table rows.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class RangeTier:
    """A single row in a tier ladder."""

    lower_bound: Decimal | None  # None = unbounded below
    upper_bound: Decimal | None  # None = unbounded above
    amount: Decimal
    lower_inclusive: bool = True
    upper_inclusive: bool = True

    def contains(self, value: Decimal) -> bool:
        if self.lower_bound is not None:
            if value < self.lower_bound:
                return False
            if value == self.lower_bound and not self.lower_inclusive:
                return False
        if self.upper_bound is not None:
            if value > self.upper_bound:
                return False
            if value == self.upper_bound and not self.upper_inclusive:
                return False
        return True


def lookup(tiers: tuple[RangeTier, ...], value: Decimal, default: Decimal = Decimal("0")) -> Decimal:
    """Return the amount of the first tier containing value."""
    for tier in tiers:
        if tier.contains(value):
            return tier.amount
    return default


# Base payout by deals closed this month
BASE_TIERS = (
    RangeTier(Decimal("7"), None, Decimal("2500")),
    RangeTier(Decimal("4"), Decimal("7"), Decimal("2200"), upper_inclusive=False),
    RangeTier(Decimal("1"), Decimal("4"), Decimal("1800"), upper_inclusive=False),
)

# PPW bonus in dollars per kW. Prices in (2.99, 3.0) fall between rows.
PPW_TIERS = (
    RangeTier(Decimal("2.8"), Decimal("2.99"), Decimal("25")),
    RangeTier(Decimal("3.0"), Decimal("3.2"), Decimal("50")),
    RangeTier(Decimal("3.2"), Decimal("3.5"), Decimal("75"), lower_inclusive=False),
    RangeTier(Decimal("3.5"), Decimal("4.5"), Decimal("100"), lower_inclusive=False),
)

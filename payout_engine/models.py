"""
Domain Models for the Solar Commission Payout Engine

These dataclasses provide type-safe representations of payout inputs,
results, and saved deal snapshots.
Inputs are held as Decimal so tier boundaries compare exactly.
"""

import sys
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

# Largest magnitude a browser number can hold; anything past it is Infinity
MAX_MAGNITUDE = Decimal(sys.float_info.max)


def to_decimal(value, field_name: str = "value") -> Decimal:
    """Convert a number or numeric string to a finite Decimal.

    Raises ValueError for anything that is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number, got: {value!r}")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"{field_name} must be a number, got: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"{field_name} must be finite, got: {value!r}")
    if abs(result) > MAX_MAGNITUDE:
        raise ValueError(f"{field_name} is too large, got: {value!r}")
    return result


# =============================================================================
# INPUT MODELS
# =============================================================================


class SaleKind(str, Enum):
    """Sale structure that selects the payout formula."""

    LOAN = "loan"  # loan or cash
    TPO = "tpo"  # third-party ownership: lease / PPA

    @classmethod
    def parse(cls, value) -> "SaleKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Invalid sale_kind: {value!r}. Must be 'loan' or 'tpo'") from None

    @property
    def label(self) -> str:
        return "Loan/Cash" if self is SaleKind.LOAN else "TPO/PPA"


@dataclass(frozen=True)
class PayoutInput:
    """The three calculator inputs plus the sale structure."""

    deals: Decimal
    ppw: Decimal
    watts: Decimal
    sale_kind: SaleKind = SaleKind.LOAN

    @property
    def kw(self) -> Decimal:
        return self.watts / Decimal("1000")

    @classmethod
    def create(cls, deals, ppw, watts, sale_kind=SaleKind.LOAN) -> "PayoutInput":
        return cls(
            deals=to_decimal(deals, "deals"),
            ppw=to_decimal(ppw, "ppw"),
            watts=to_decimal(watts, "watts"),
            sale_kind=SaleKind.parse(sale_kind),
        )

    @classmethod
    def from_dict(cls, data: dict, default_sale_kind=SaleKind.LOAN) -> "PayoutInput":
        # Accept the camelCase key used by the browser store
        sale_kind = data.get("sale_kind", data.get("saleKind")) or default_sale_kind
        return cls.create(data["deals"], data["ppw"], data["watts"], sale_kind)

    def to_dict(self) -> dict:
        return {
            "deals": _plain_number(self.deals),
            "ppw": _plain_number(self.ppw),
            "watts": _plain_number(self.watts),
            "sale_kind": self.sale_kind.value,
        }


def _plain_number(value: Decimal):
    """Integral Decimals become int, everything else float."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class PayoutResult:
    """Commission breakdown in whole dollars."""

    base: int = 0
    ppw_bonus: int = 0
    big_system_bonus: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        return {
            "base": self.base,
            "ppw_bonus": self.ppw_bonus,
            "big_system_bonus": self.big_system_bonus,
            "total": self.total,
        }


@dataclass
class SavedDeal:
    """A frozen snapshot of one input/result pair plus metadata.

    Only `name` changes after creation (rename).
    """

    id: str
    name: str
    deals: float
    ppw: float
    watts: float
    total: int
    created_at: int  # epoch milliseconds
    sale_kind: SaleKind | None = None  # absent on legacy records

    def to_input(self) -> PayoutInput:
        return PayoutInput.create(self.deals, self.ppw, self.watts, self.sale_kind or SaleKind.LOAN)

    @classmethod
    def from_dict(cls, data: dict) -> "SavedDeal":
        kind = data.get("saleKind", data.get("sale_kind"))
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            deals=_plain_number(to_decimal(data["deals"], "deals")),
            ppw=_plain_number(to_decimal(data["ppw"], "ppw")),
            watts=_plain_number(to_decimal(data["watts"], "watts")),
            total=int(data["total"]),
            created_at=int(data.get("createdAt", data.get("created_at", 0))),
            sale_kind=SaleKind.parse(kind) if kind in ("loan", "tpo") else None,
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "deals": self.deals,
            "ppw": self.ppw,
            "watts": self.watts,
            "total": self.total,
            "createdAt": self.created_at,
        }
        if self.sale_kind is not None:
            data["saleKind"] = self.sale_kind.value
        return data

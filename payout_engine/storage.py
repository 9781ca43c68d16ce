"""
Local Key-Value Storage

A string-keyed get/set store for one user, and the records the calculator
keeps in it: UI preferences, the recompute tracker, and saved deals.
The payout engine never touches this module.
"""

import json
import logging
import math
import os
import time
from pathlib import Path
from typing import Protocol

from .models import PayoutInput, PayoutResult, SaleKind, SavedDeal

logger = logging.getLogger(__name__)

MODE_KEY = "sx_mode"
ACCENT_KEY = "sx_accent"
SALE_KIND_KEY = "sx_saleKind"
MY_DEALS_KEY = "sx_myDeals"
MY_EARNINGS_KEY = "sx_myEarn"
SAVED_DEALS_KEY = "sx_savedDeals"

MODES = ("light", "dark")
ACCENTS = ("none", "sunset", "bw")

MAX_SAVED_DEALS = 12


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """In-process store; nothing survives a restart."""

    def __init__(self, data: dict[str, str] | None = None):
        self._data = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """
    Store backed by a single JSON object file.

    The whole file is rewritten on every change. A missing file is an empty
    store; a corrupt one is logged and treated as empty.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring store {self.path}: expected a JSON object")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


# =============================================================================
# PREFERENCES
# =============================================================================


class Preferences:
    """Display mode, accent and default sale kind."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    @property
    def mode(self) -> str:
        value = self.store.get(MODE_KEY)
        return value if value in MODES else "light"

    @property
    def accent(self) -> str:
        value = self.store.get(ACCENT_KEY)
        return value if value in ACCENTS else "none"

    @property
    def sale_kind(self) -> SaleKind:
        value = self.store.get(SALE_KIND_KEY)
        return SaleKind(value) if value in ("loan", "tpo") else SaleKind.LOAN

    def to_dict(self) -> dict:
        return {"mode": self.mode, "accent": self.accent, "sale_kind": self.sale_kind.value}

    def update(self, mode: str | None = None, accent: str | None = None, sale_kind=None) -> dict:
        """Validate every given value first, then write them."""
        if mode is not None and mode not in MODES:
            raise ValueError(f"Invalid mode: {mode!r}. Must be one of {MODES}")
        if accent is not None and accent not in ACCENTS:
            raise ValueError(f"Invalid accent: {accent!r}. Must be one of {ACCENTS}")
        kind = SaleKind.parse(sale_kind) if sale_kind is not None else None

        if mode is not None:
            self.store.set(MODE_KEY, mode)
        if accent is not None:
            self.store.set(ACCENT_KEY, accent)
        if kind is not None:
            self.store.set(SALE_KIND_KEY, kind.value)
        return self.to_dict()


# =============================================================================
# RECOMPUTE TRACKER
# =============================================================================


def _read_number(store: KeyValueStore, key: str) -> float:
    raw = store.get(key)
    if raw is None:
        return 0
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Non-numeric value for {key}: {raw!r}")
        return 0
    return value if math.isfinite(value) else 0


class RecomputeTracker:
    """Personal tally of explicit recomputes and the earnings they showed."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    @property
    def deals(self) -> int:
        return int(_read_number(self.store, MY_DEALS_KEY))

    @property
    def earnings(self) -> int:
        return int(_read_number(self.store, MY_EARNINGS_KEY))

    def record(self, total: int) -> bool:
        """Count a recompute. Zero totals are not counted."""
        if not total:
            return False
        self.store.set(MY_DEALS_KEY, str(self.deals + 1))
        self.store.set(MY_EARNINGS_KEY, str(self.earnings + total))
        return True

    def reset(self) -> None:
        self.store.remove(MY_DEALS_KEY)
        self.store.remove(MY_EARNINGS_KEY)

    def to_dict(self) -> dict:
        return {"deals": self.deals, "earnings": self.earnings}


# =============================================================================
# SAVED DEALS
# =============================================================================


def _now_ms() -> int:
    return int(time.time() * 1000)


class SavedDealBook:
    """
    The most recent saved deals, newest first.

    Holds at most 12 records; saving past the cap evicts the oldest.
    """

    def __init__(self, store: KeyValueStore, clock=_now_ms):
        self.store = store
        self.clock = clock

    def entries(self) -> list[SavedDeal]:
        raw = self.store.get(SAVED_DEALS_KEY)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding unreadable saved deals: {e}")
            return []
        if not isinstance(items, list):
            return []

        deals = []
        for item in items:
            try:
                deals.append(SavedDeal.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed saved deal {item!r}: {e}")
        return deals

    def _persist(self, deals: list[SavedDeal]) -> None:
        self.store.set(SAVED_DEALS_KEY, json.dumps([d.to_dict() for d in deals]))

    def get(self, deal_id: str) -> SavedDeal:
        for deal in self.entries():
            if deal.id == deal_id:
                return deal
        raise KeyError(deal_id)

    def save(self, payout_input: PayoutInput, result: PayoutResult, name: str | None = None) -> SavedDeal:
        deals = self.entries()
        created_at = self.clock()
        existing_ids = {d.id for d in deals}
        deal_id = str(created_at)
        while deal_id in existing_ids:
            created_at += 1
            deal_id = str(created_at)

        plain = payout_input.to_dict()
        item = SavedDeal(
            id=deal_id,
            name=_clean_name(name) or f"Deal {len(deals) + 1}",
            deals=plain["deals"],
            ppw=plain["ppw"],
            watts=plain["watts"],
            total=result.total,
            created_at=created_at,
            sale_kind=payout_input.sale_kind,
        )
        self._persist([item, *deals][:MAX_SAVED_DEALS])
        return item

    def rename(self, deal_id: str, name: str) -> SavedDeal:
        """Rename a saved deal. A blank name leaves it unchanged."""
        deals = self.entries()
        for deal in deals:
            if deal.id == deal_id:
                if _clean_name(name):
                    deal.name = _clean_name(name)
                    self._persist(deals)
                return deal
        raise KeyError(deal_id)

    def delete(self, deal_id: str) -> None:
        deals = self.entries()
        remaining = [d for d in deals if d.id != deal_id]
        if len(remaining) == len(deals):
            raise KeyError(deal_id)
        self._persist(remaining)

    def search(self, query: str | None) -> list[SavedDeal]:
        """Every whitespace-separated token must appear, case-insensitively."""
        deals = self.entries()
        tokens = (query or "").strip().lower().split()
        if not tokens:
            return deals
        return [d for d in deals if all(tok in _haystack(d) for tok in tokens)]


def _clean_name(name) -> str:
    return str(name).strip() if name is not None else ""


def _haystack(deal: SavedDeal) -> str:
    kind = deal.sale_kind.value if deal.sale_kind else ""
    return f"{deal.name} {float(deal.ppw):.2f} {deal.watts} {deal.total} {kind}".lower()

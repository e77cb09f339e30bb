"""Kitchen module price tiers.

Kitchen modules may carry three catalog prices (low, medium and high
finish). The tier chosen for a design selects which one feeds the pricing
pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .money import ZERO, round_money, to_number
from .value_objects import PriceTier


@dataclass(frozen=True)
class TierPrices:
    """Catalog prices for a kitchen module, in USD.

    Attributes:
        low: Price for the LOW tier, if set.
        medium: Price for the MEDIUM tier, if set.
        high: Price for the HIGH tier, if set.
        base: Base price used when the tier price is missing.
        list_price: Last-resort list price.
    """

    low: Any = None
    medium: Any = None
    high: Any = None
    base: Any = None
    list_price: Any = None


def normalize_tier(value: Any) -> PriceTier:
    """Map loose input to a tier, defaulting to MEDIUM."""
    if isinstance(value, PriceTier):
        return value
    try:
        return PriceTier(str(value or "").strip().upper())
    except ValueError:
        return PriceTier.MEDIUM


def resolve_tier_price(prices: TierPrices, tier: Any = None) -> Decimal:
    """Pick the price for a tier.

    Falls back to the base price, then to the list price. Returns zero when
    no positive price exists, which callers treat as "not priceable".
    """
    chosen = normalize_tier(tier)
    by_tier = {
        PriceTier.LOW: prices.low,
        PriceTier.MEDIUM: prices.medium,
        PriceTier.HIGH: prices.high,
    }
    for candidate in (by_tier[chosen], prices.base, prices.list_price):
        value = to_number(candidate, 0.0)
        if value > 0:
            return round_money(value)
    return ZERO

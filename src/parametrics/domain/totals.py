"""Design budget aggregation."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from .money import ZERO, round_money
from .price_adjustments import PriceAdjustmentSettings, apply_payment_discount
from .value_objects import DesignTotals, PlacedModule


def aggregate_totals(
    modules: Iterable[PlacedModule],
    *,
    currency: str | None = None,
    settings: PriceAdjustmentSettings | None = None,
) -> DesignTotals:
    """Sum the unit prices of a design's placed modules.

    Always a full recompute over the modules passed in. The payment discount
    is applied only when both ``currency`` and ``settings`` are given;
    otherwise ``total`` equals ``subtotal``.
    """
    count = 0
    subtotal = Decimal(0)
    for module in modules:
        subtotal += module.unit_price_usd
        count += 1
    subtotal = round_money(subtotal)

    if currency is None or settings is None:
        return DesignTotals(subtotal=subtotal, discount=ZERO, total=subtotal, module_count=count)

    discount = apply_payment_discount(subtotal, currency, settings)
    return DesignTotals(
        subtotal=subtotal,
        discount=discount.amount,
        total=discount.subtotal_after_discount,
        module_count=count,
    )

"""Price adjustment pipeline.

Applies the store-wide percentage surcharges to a base USD price in a
fixed order:

1. Category surcharge (sparse per-category map).
2. Currency surcharge (per-currency map, gated by ``currency_enabled``).
3. Global surcharge (gated by ``global_enabled``).

Each step compounds on the running value. A step that would make the
running value zero or negative is skipped. Rounding to cents happens once,
at the end.

The payment discount for USD-denominated instruments is a separate step
applied to order or design subtotals, see :func:`apply_payment_discount`.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from .money import ZERO, round_money, to_decimal
from .value_objects import CurrencyBasis, PaymentDiscount

logger = logging.getLogger(__name__)

USD_INSTRUMENTS: frozenset[str] = frozenset({"USD", "USDT"})


class PricingError(ValueError):
    """Raised when pricing input is unusable (e.g. non-positive base price)."""


def _frozen_map(values: Mapping[str, float] | None, upper: bool = False) -> Mapping[str, float]:
    items = {}
    for key, pct in (values or {}).items():
        name = str(key).strip()
        items[name.upper() if upper else name] = float(pct)
    return MappingProxyType(items)


@dataclass(frozen=True)
class PriceAdjustmentSettings:
    """Immutable snapshot of the store's price adjustment settings.

    Attributes:
        global_percent: Surcharge applied to every product (default 0).
        global_enabled: Gate for the global surcharge (default False).
        currency_percent: Surcharge by upper-case currency code
            (default empty).
        currency_enabled: Gate for currency surcharges (default False).
        category_percent: Surcharge by category id; absent ids mean 0
            (default empty).
        usd_discount_percent: Discount for USD/USDT payments (default 20).
        usd_discount_enabled: Gate for the payment discount (default True).
    """

    global_percent: float = 0.0
    global_enabled: bool = False
    currency_percent: Mapping[str, float] = field(default_factory=dict)
    currency_enabled: bool = False
    category_percent: Mapping[str, float] = field(default_factory=dict)
    usd_discount_percent: float = 20.0
    usd_discount_enabled: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "currency_percent", _frozen_map(self.currency_percent, upper=True)
        )
        object.__setattr__(self, "category_percent", _frozen_map(self.category_percent))

    def percent_for_currency(self, currency: str | None) -> float:
        if not currency:
            return 0.0
        return self.currency_percent.get(str(currency).strip().upper(), 0.0)

    def percent_for_category(self, category_id: str | None) -> float:
        if category_id is None:
            return 0.0
        return self.category_percent.get(str(category_id), 0.0)


DEFAULT_SETTINGS = PriceAdjustmentSettings()


def _surcharge(running: Decimal, percent: float, step: str) -> Decimal:
    if not percent:
        return running
    candidate = running + running * to_decimal(percent) / Decimal(100)
    if candidate <= 0:
        logger.debug(f"Skipping {step} adjustment of {percent}%: result {candidate} not positive")
        return running
    return candidate


def compute_adjusted_price(
    base_price_usd: Any,
    currency: str,
    category_id: str | None,
    settings: PriceAdjustmentSettings,
    *,
    currency_basis: CurrencyBasis = CurrencyBasis.PAYMENT,
    settlement_currency: str | None = None,
) -> Decimal:
    """Compute the adjusted reference price.

    Args:
        base_price_usd: Positive base price in USD.
        currency: Currency the customer pays with.
        category_id: Product category id, or None.
        settings: Adjustment settings snapshot.
        currency_basis: Whether the currency surcharge is keyed on the paying
            currency or on ``settlement_currency``.
        settlement_currency: Currency the supplier charges in. Only consulted
            with ``CurrencyBasis.SETTLEMENT``; when absent no currency
            surcharge applies.

    Returns:
        Adjusted price rounded to cents.

    Raises:
        PricingError: If the base price is not a finite positive number.
    """
    try:
        base = to_decimal(base_price_usd)
    except (ArithmeticError, ValueError) as e:
        raise PricingError(f"Base price is not a number: {base_price_usd!r}") from e
    if not base.is_finite() or base <= 0:
        raise PricingError(f"Base price must be positive, got {base_price_usd!r}")

    running = base
    running = _surcharge(running, settings.percent_for_category(category_id), "category")

    if settings.currency_enabled:
        matched = currency if currency_basis == CurrencyBasis.PAYMENT else settlement_currency
        running = _surcharge(running, settings.percent_for_currency(matched), "currency")

    if settings.global_enabled:
        running = _surcharge(running, settings.global_percent, "global")

    return round_money(running)


def is_usd_instrument(currency: str | None) -> bool:
    return str(currency or "USD").strip().upper() in USD_INSTRUMENTS


def apply_payment_discount(
    subtotal_usd: Any,
    currency: str | None,
    settings: PriceAdjustmentSettings,
) -> PaymentDiscount:
    """Apply the discount granted to USD-denominated payments.

    Args:
        subtotal_usd: Subtotal to discount.
        currency: Paying currency. ``USD`` and ``USDT`` qualify.
        settings: Adjustment settings snapshot.

    Returns:
        PaymentDiscount with the percent used, the discount amount and the
        discounted subtotal, all rounded to cents.
    """
    subtotal = to_decimal(subtotal_usd)
    percent = 0.0
    if settings.usd_discount_enabled and is_usd_instrument(currency):
        percent = settings.usd_discount_percent
    if not math.isfinite(percent) or percent <= 0:
        return PaymentDiscount(
            percent=0.0, amount=ZERO, subtotal_after_discount=round_money(subtotal)
        )
    amount = subtotal * to_decimal(percent) / Decimal(100)
    return PaymentDiscount(
        percent=percent,
        amount=round_money(amount),
        subtotal_after_discount=round_money(subtotal - amount),
    )

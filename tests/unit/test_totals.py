"""Unit tests for design totals and kitchen price tiers."""

from decimal import Decimal

import pytest

from parametrics.domain import (
    DEFAULT_SETTINGS,
    PriceTier,
    TierPrices,
    aggregate_totals,
    resolve_tier_price,
)
from parametrics.domain.tiers import normalize_tier


class TestAggregateTotals:
    """Tests for aggregate_totals."""

    def test_empty_design(self) -> None:
        totals = aggregate_totals([])
        assert totals.subtotal == Decimal("0")
        assert totals.total == Decimal("0")
        assert totals.module_count == 0

    def test_single_module(self, module_factory) -> None:
        totals = aggregate_totals([module_factory("m1", 0, 600, price="149.90")])
        assert totals.subtotal == Decimal("149.90")
        assert totals.total == Decimal("149.90")
        assert totals.discount == Decimal("0.00")

    def test_sums_modules(self, module_factory) -> None:
        modules = [
            module_factory("m1", 0, 600, price="100.10"),
            module_factory("m2", 600, 600, price="50.05"),
            module_factory("m3", 0, 600, position_y=1, price="0.01"),
        ]
        totals = aggregate_totals(modules)
        assert totals.subtotal == Decimal("150.16")
        assert totals.module_count == 3

    def test_generator_input(self, module_factory) -> None:
        totals = aggregate_totals(
            module_factory(f"m{i}", i * 600, 600, price="10.00") for i in range(4)
        )
        assert totals.subtotal == Decimal("40.00")

    def test_usd_discount(self, module_factory) -> None:
        modules = [module_factory("m1", 0, 600, price="150.00")]
        totals = aggregate_totals(modules, currency="USD", settings=DEFAULT_SETTINGS)
        assert totals.subtotal == Decimal("150.00")
        assert totals.discount == Decimal("30.00")
        assert totals.total == Decimal("120.00")

    def test_no_discount_for_other_currency(self, module_factory) -> None:
        modules = [module_factory("m1", 0, 600, price="150.00")]
        totals = aggregate_totals(modules, currency="VES", settings=DEFAULT_SETTINGS)
        assert totals.total == Decimal("150.00")

    def test_discount_needs_settings(self, module_factory) -> None:
        modules = [module_factory("m1", 0, 600, price="150.00")]
        totals = aggregate_totals(modules, currency="USD")
        assert totals.total == Decimal("150.00")


class TestTierPrices:
    """Tests for kitchen tier price selection."""

    @pytest.fixture
    def prices(self) -> TierPrices:
        return TierPrices(low=100, medium=150, high=200, base=140, list_price=160)

    @pytest.mark.parametrize(
        ("tier", "expected"),
        [
            (PriceTier.LOW, "100.00"),
            ("high", "200.00"),
            ("MEDIUM", "150.00"),
            (None, "150.00"),
            ("premium", "150.00"),
        ],
    )
    def test_tier_selection(self, prices: TierPrices, tier: object, expected: str) -> None:
        assert resolve_tier_price(prices, tier) == Decimal(expected)

    def test_missing_tier_falls_back_to_base(self) -> None:
        prices = TierPrices(low=100, base=140, list_price=160)
        assert resolve_tier_price(prices, "HIGH") == Decimal("140.00")

    def test_missing_base_falls_back_to_list(self) -> None:
        prices = TierPrices(medium=0, list_price="160")
        assert resolve_tier_price(prices, "MEDIUM") == Decimal("160.00")

    def test_nothing_priced(self) -> None:
        assert resolve_tier_price(TierPrices(), "LOW") == Decimal("0")

    def test_normalize_tier(self) -> None:
        assert normalize_tier(" low ") == PriceTier.LOW
        assert normalize_tier("") == PriceTier.MEDIUM

"""Unit tests for the QuotePriceCommand and PlaceModuleCommand use cases."""

from decimal import Decimal

import pytest

from parametrics.application import (
    PlaceModuleCommand,
    ProductInput,
    QuotePriceCommand,
)
from parametrics.application.factory import ServiceFactory, get_factory, set_factory
from parametrics.domain import (
    CurrencyBasis,
    PlacementDraft,
    PriceAdjustmentSettings,
    ProductFamily,
    Zone,
)
from parametrics.infrastructure import JsonSettingsStore, StaticSettingsStore


class TestQuotePriceCommand:
    """Tests for QuotePriceCommand."""

    def test_plain_quote(self, shelf_product: ProductInput) -> None:
        output = QuotePriceCommand().execute(shelf_product, {"width_mm": 600})
        assert output.is_valid
        assert output.quote is not None
        assert output.quote.adjusted_reference_price == Decimal("100.00")
        assert output.quote.unit_price == Decimal("100.00")
        assert output.quote.formula_applied is False

    def test_settings_from_store(self, shelf_product: ProductInput) -> None:
        store = StaticSettingsStore(PriceAdjustmentSettings(global_percent=10, global_enabled=True))
        output = QuotePriceCommand(store).execute(shelf_product)
        assert output.quote is not None
        assert output.quote.adjusted_reference_price == Decimal("110.00")

    def test_explicit_settings_override_store(self, shelf_product: ProductInput) -> None:
        store = StaticSettingsStore(PriceAdjustmentSettings(global_percent=10, global_enabled=True))
        output = QuotePriceCommand(store).execute(
            shelf_product, settings=PriceAdjustmentSettings()
        )
        assert output.quote is not None
        assert output.quote.unit_price == Decimal("100.00")

    def test_formula_uses_adjusted_price(self, shelf_product: ProductInput) -> None:
        shelf_product.pricing_formula = "basePriceUsd * (widthMm / 600)"
        store = StaticSettingsStore(PriceAdjustmentSettings(global_percent=20, global_enabled=True))
        output = QuotePriceCommand(store).execute(shelf_product, {"width_mm": 900})
        assert output.quote is not None
        assert output.quote.adjusted_reference_price == Decimal("120.00")
        assert output.quote.unit_price == Decimal("180.00")
        assert output.quote.formula_applied is True

    def test_broken_formula_noted(self, shelf_product: ProductInput) -> None:
        shelf_product.pricing_formula = "basePriceUsd * lengthMm"
        output = QuotePriceCommand().execute(shelf_product, {"width_mm": 900})
        assert output.is_valid
        assert output.quote is not None
        assert output.quote.unit_price == Decimal("100.00")
        assert output.quote.formula_applied is False
        assert "lengthMm" in output.quote.notes[0]

    def test_formula_failing_at_width_not_applied(self, shelf_product: ProductInput) -> None:
        shelf_product.pricing_formula = "basePriceUsd / (widthMm - 600)"
        output = QuotePriceCommand().execute(shelf_product, {"width_mm": 600})
        assert output.is_valid
        assert output.quote is not None
        assert output.quote.unit_price == Decimal("100.00")
        assert output.quote.formula_applied is False
        assert output.quote.notes == ("Formula ignored: Division by zero",)

    def test_non_positive_formula_result_not_applied(self, shelf_product: ProductInput) -> None:
        shelf_product.pricing_formula = "basePriceUsd - widthMm"
        output = QuotePriceCommand().execute(shelf_product, {"width_mm": 900})
        assert output.quote is not None
        assert output.quote.unit_price == Decimal("100.00")
        assert output.quote.formula_applied is False
        assert len(output.quote.notes) == 1

    def test_out_of_range_width_uses_default(self, shelf_product: ProductInput) -> None:
        output = QuotePriceCommand().execute(shelf_product, {"width_mm": 5000})
        assert output.quote is not None
        assert output.quote.dimensions.width_mm == 600

    def test_list_price_fallback(self, shelf_product: ProductInput) -> None:
        shelf_product.base_price_usd = None
        shelf_product.list_price_usd = Decimal("80")
        output = QuotePriceCommand().execute(shelf_product)
        assert output.quote is not None
        assert output.quote.unit_price == Decimal("80.00")

    def test_unpriced_product(self, shelf_product: ProductInput) -> None:
        shelf_product.base_price_usd = None
        output = QuotePriceCommand().execute(shelf_product)
        assert not output.is_valid
        assert "no positive price" in output.errors[0]

    def test_undefined_dimensions(self) -> None:
        product = ProductInput(product_id="p1", base_price_usd=10, width_mm=600)
        output = QuotePriceCommand().execute(product)
        assert not output.is_valid
        assert len(output.errors) == 2

    @pytest.mark.parametrize(
        ("tier", "expected"),
        [("LOW", "100.00"), ("MEDIUM", "150.00"), ("HIGH", "200.00"), (None, "150.00")],
    )
    def test_kitchen_tiers(
        self, base_module_product: ProductInput, tier: str | None, expected: str
    ) -> None:
        output = QuotePriceCommand().execute(base_module_product, tier=tier)
        assert output.quote is not None
        assert output.quote.unit_price == Decimal(expected)

    def test_tier_ignored_for_other_families(self, shelf_product: ProductInput) -> None:
        shelf_product.tier_high_usd = Decimal("999")
        output = QuotePriceCommand().execute(shelf_product, tier="HIGH")
        assert output.quote is not None
        assert output.quote.unit_price == Decimal("100.00")

    def test_settlement_currency_basis(self, shelf_product: ProductInput) -> None:
        shelf_product.supplier_currency = "VES"
        settings = PriceAdjustmentSettings(currency_percent={"VES": 30}, currency_enabled=True)
        command = QuotePriceCommand()

        by_payment = command.execute(shelf_product, currency="USD", settings=settings)
        by_settlement = command.execute(
            shelf_product,
            currency="USD",
            currency_basis=CurrencyBasis.SETTLEMENT,
            settings=settings,
        )
        assert by_payment.quote is not None and by_settlement.quote is not None
        assert by_payment.quote.unit_price == Decimal("100.00")
        assert by_settlement.quote.unit_price == Decimal("130.00")

    def test_store_read_per_call(self, shelf_product: ProductInput, tmp_path) -> None:
        path = tmp_path / "settings.json"
        path.write_text('{"global_percent": 10, "global_enabled": true}')
        command = QuotePriceCommand(JsonSettingsStore(path))
        first = command.execute(shelf_product)

        path.write_text('{"global_percent": 50, "global_enabled": true}')
        second = command.execute(shelf_product)

        assert first.quote is not None and second.quote is not None
        assert first.quote.unit_price == Decimal("110.00")
        assert second.quote.unit_price == Decimal("150.00")


class TestPlaceModuleCommand:
    """Tests for PlaceModuleCommand."""

    def _draft(self, width: float, **kwargs) -> PlacementDraft:
        kwargs.setdefault("product_id", "base-600")
        kwargs.setdefault("position_x", 0)
        kwargs.setdefault("position_y", 0)
        return PlacementDraft(width_mm=width, **kwargs)

    def test_first_module(self, base_module_product: ProductInput) -> None:
        output = PlaceModuleCommand().execute(self._draft(600), base_module_product, [])
        assert output.is_valid
        assert output.module is not None
        assert output.module.position_x == 0
        assert output.module.unit_price_usd == Decimal("150.00")
        assert output.totals is not None
        assert output.totals.subtotal == Decimal("150.00")
        assert output.totals.discount == Decimal("30.00")
        assert output.totals.total == Decimal("120.00")

    def test_appends_and_totals(
        self, base_module_product: ProductInput, module_factory
    ) -> None:
        existing = [module_factory("m1", 0, 600, price="150.00")]
        output = PlaceModuleCommand().execute(
            self._draft(900, position_x=4000),
            base_module_product,
            existing,
            currency="VES",
        )
        assert output.module is not None
        assert output.module.position_x == 600
        assert output.totals is not None
        assert output.totals.subtotal == Decimal("300.00")
        assert output.totals.total == Decimal("300.00")
        assert output.totals.module_count == 2

    def test_formula_priced_at_normalized_width(
        self, base_module_product: ProductInput
    ) -> None:
        base_module_product.pricing_formula = "basePriceUsd * widthRatio"
        output = PlaceModuleCommand().execute(self._draft(900), base_module_product, [])
        assert output.module is not None
        assert output.module.unit_price_usd == Decimal("225.00")

    def test_update_replaces_module_in_totals(
        self, base_module_product: ProductInput, module_factory
    ) -> None:
        existing = [
            module_factory("m1", 0, 600, price="150.00"),
            module_factory("m2", 600, 600, price="150.00"),
        ]
        output = PlaceModuleCommand().execute(
            self._draft(900, position_x=600, module_id="m2"),
            base_module_product,
            existing,
            currency="VES",
        )
        assert output.is_valid
        assert output.module is not None
        assert output.module.id == "m2"
        assert output.totals is not None
        assert output.totals.module_count == 2
        assert output.totals.subtotal == Decimal("300.00")

    def test_generated_ids_are_unique(self, base_module_product: ProductInput) -> None:
        command = PlaceModuleCommand()
        first = command.execute(self._draft(600), base_module_product, [])
        second = command.execute(self._draft(600), base_module_product, [])
        assert first.module is not None and second.module is not None
        assert first.module.id != second.module.id

    def test_invalid_width_not_priced(self, base_module_product: ProductInput) -> None:
        output = PlaceModuleCommand().execute(self._draft(5000), base_module_product, [])
        assert not output.is_valid
        assert output.module is None
        assert output.totals is None
        assert output.errors == output.placement.errors

    def test_wall_module(self) -> None:
        product = ProductInput(
            product_id="wall-600",
            family=ProductFamily.KITCHEN_MODULE,
            base_price_usd=80,
            width_mm=600,
            width_min_mm=300,
            width_max_mm=900,
            height_mm=700,
            depth_mm=350,
            wall_mounted=True,
        )
        output = PlaceModuleCommand().execute(
            self._draft(600, product_id="wall-600"), product, []
        )
        assert output.module is not None
        assert output.module.zone == Zone.WALL
        assert output.module.locked_mount_height_mm == 1400


class TestServiceFactory:
    """Tests for command wiring."""

    def test_default_store_without_env(self) -> None:
        assert isinstance(ServiceFactory().get_settings_store(), StaticSettingsStore)

    def test_env_selects_json_store(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.setenv("PARAMETRICS_SETTINGS", str(tmp_path / "settings.json"))
        store = ServiceFactory().get_settings_store()
        assert isinstance(store, JsonSettingsStore)
        assert store.path == tmp_path / "settings.json"

    def test_explicit_store(self) -> None:
        store = StaticSettingsStore()
        command = ServiceFactory(settings_store=store).create_place_command()
        assert command.quote_command.settings_store is store

    def test_set_factory(self) -> None:
        factory = ServiceFactory()
        set_factory(factory)
        assert get_factory() is factory

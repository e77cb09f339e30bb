"""End-to-end pricing and placement scenarios.

These tests drive the configuration loaders, commands and domain services
together, from JSON files to final prices and module positions.
"""

from decimal import Decimal
from pathlib import Path

from parametrics.application import PlaceModuleCommand, QuotePriceCommand
from parametrics.application.config import (
    config_to_modules,
    config_to_product,
    config_to_products,
    load_design,
    load_product,
)
from parametrics.domain import PlacementDraft, Zone, aggregate_totals
from parametrics.infrastructure import JsonSettingsStore, StaticSettingsStore

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"


class TestPricingScenarios:
    """Quotes for catalog products."""

    def test_plain_product_keeps_base_price(self) -> None:
        product = config_to_product(load_product(FIXTURES_PATH / "product_shelf.json"))
        output = QuotePriceCommand(StaticSettingsStore()).execute(product)
        assert output.quote is not None
        assert output.quote.unit_price == Decimal("100.00")

    def test_global_surcharge(self) -> None:
        product = config_to_product(load_product(FIXTURES_PATH / "product_shelf.json"))
        store = JsonSettingsStore(FIXTURES_PATH / "settings_global10.json")
        output = QuotePriceCommand(store).execute(product)
        assert output.quote is not None
        assert output.quote.unit_price == Decimal("110.00")

    def test_formula_scales_with_width(self) -> None:
        product = config_to_product(load_product(FIXTURES_PATH / "product_formula.json"))
        output = QuotePriceCommand().execute(product, {"width_mm": 900})
        assert output.quote is not None
        assert output.quote.dimensions.width_mm == 900
        assert output.quote.unit_price == Decimal("180.00")

    def test_legacy_settings_compound(self) -> None:
        product = config_to_product(load_product(FIXTURES_PATH / "product_shelf.json"))
        product.category_id = "12"
        store = JsonSettingsStore(FIXTURES_PATH / "settings_legacy.json")
        output = QuotePriceCommand(store).execute(product, currency="VES")
        assert output.quote is not None
        # 100 * 1.10 (category) * 1.30 (VES) * 1.05 (global)
        assert output.quote.unit_price == Decimal("150.15")


class TestKitchenScenarios:
    """Module placement against a saved design."""

    def test_first_module_starts_at_origin(self) -> None:
        design = load_design(FIXTURES_PATH / "design_empty.json")
        products = config_to_products(load_design(FIXTURES_PATH / "design_kitchen.json"))
        output = PlaceModuleCommand().execute(
            PlacementDraft(product_id="base-600", position_x=750, position_y=0, width_mm=600),
            products["base-600"],
            config_to_modules(design),
            currency=design.currency,
        )
        assert output.module is not None
        assert output.module.position_x == 0

    def test_build_a_run(self) -> None:
        design = load_design(FIXTURES_PATH / "design_kitchen.json")
        products = config_to_products(design)
        command = PlaceModuleCommand()
        modules = config_to_modules(design)

        for width in (900, 450):
            output = command.execute(
                PlacementDraft(product_id="base-600", position_x=0, position_y=0, width_mm=width),
                products["base-600"],
                modules,
                currency=design.currency,
                tier=design.price_tier,
            )
            assert output.module is not None
            modules.append(output.module)

        assert [(m.position_x, m.width_mm) for m in modules] == [(0, 600), (600, 900), (1500, 450)]
        totals = aggregate_totals(modules)
        assert totals.subtotal == Decimal("450.00")

    def test_wall_and_floor_rows_are_independent(self) -> None:
        design = load_design(FIXTURES_PATH / "design_kitchen.json")
        products = config_to_products(design)
        output = PlaceModuleCommand().execute(
            PlacementDraft(
                product_id="wall-600", position_x=0, position_y=0, width_mm=600, zone=Zone.WALL
            ),
            products["wall-600"],
            config_to_modules(design),
            currency=design.currency,
        )
        assert output.module is not None
        assert output.module.position_x == 0
        assert output.totals is not None
        assert output.totals.subtotal == Decimal("230.00")
        assert output.totals.total == Decimal("184.00")

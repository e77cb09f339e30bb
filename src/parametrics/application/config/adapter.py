"""Conversion from configuration models to domain objects and DTOs."""

from __future__ import annotations

from parametrics.application.config.schema import (
    KitchenDesignConfig,
    KitchenSpaceConfig,
    PlacedModuleConfig,
    PriceAdjustmentSettingsConfig,
    ProductConfig,
)
from parametrics.application.dtos import ProductInput
from parametrics.domain import (
    KitchenSpaceResult,
    PlacedModule,
    PriceAdjustmentSettings,
    validate_kitchen_space,
)


def config_to_settings(config: PriceAdjustmentSettingsConfig) -> PriceAdjustmentSettings:
    """Convert a settings config into the immutable domain snapshot."""
    return PriceAdjustmentSettings(
        global_percent=config.global_percent,
        global_enabled=config.global_enabled,
        currency_percent=dict(config.currency_percent),
        currency_enabled=config.currency_enabled,
        category_percent=dict(config.category_percent),
        usd_discount_percent=config.usd_discount_percent,
        usd_discount_enabled=config.usd_discount_enabled,
    )


def config_to_product(config: ProductConfig) -> ProductInput:
    """Convert a product config into the application ProductInput DTO."""
    return ProductInput(**config.model_dump())


def config_to_module(config: PlacedModuleConfig) -> PlacedModule:
    return PlacedModule(
        id=config.id,
        product_id=config.product_id,
        position_x=config.position_x,
        position_y=config.position_y,
        width_mm=config.width_mm,
        depth_mm=config.depth_mm,
        zone=config.zone,
        locked_mount_height_mm=config.locked_mount_height_mm,
        unit_price_usd=config.unit_price_usd,
    )


def config_to_modules(config: KitchenDesignConfig) -> list[PlacedModule]:
    """Convert every placed module of a design."""
    return [config_to_module(m) for m in config.modules]


def config_to_products(config: KitchenDesignConfig) -> dict[str, ProductInput]:
    """Index a design's products by product id."""
    return {p.product_id: config_to_product(p) for p in config.products}


def check_space(config: KitchenSpaceConfig) -> KitchenSpaceResult:
    """Validate a configured kitchen space."""
    return validate_kitchen_space(
        config.layout_type,
        [wall.model_dump() for wall in config.walls],
    )

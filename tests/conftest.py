"""Pytest configuration and shared fixtures for parametrics tests."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from parametrics.application.dtos import ProductInput
from parametrics.application.factory import reset_factory
from parametrics.domain import (
    DEFAULT_SETTINGS,
    AxisRange,
    DimensionSchema,
    PlacedModule,
    PriceAdjustmentSettings,
    ProductConstraints,
    ProductFamily,
    Zone,
)

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "configs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


@pytest.fixture(autouse=True)
def _clean_factory(monkeypatch: pytest.MonkeyPatch):
    """Isolate tests from the default service factory and the environment."""
    monkeypatch.delenv("PARAMETRICS_SETTINGS", raising=False)
    reset_factory()
    yield
    reset_factory()


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def default_settings() -> PriceAdjustmentSettings:
    return DEFAULT_SETTINGS


@pytest.fixture
def no_discount_settings() -> PriceAdjustmentSettings:
    """Settings with every adjustment and the payment discount switched off."""
    return PriceAdjustmentSettings(usd_discount_enabled=False)


@pytest.fixture
def shelf_schema() -> DimensionSchema:
    """Configurable shelf: width 400-1200 (default 600), fixed height and depth."""
    return DimensionSchema(
        width=AxisRange(min_mm=400, max_mm=1200, default_mm=600),
        height=AxisRange.fixed(2000),
        depth=AxisRange.fixed(400),
        reference_price=Decimal("100.00"),
        family=ProductFamily.CONFIGURABLE,
    )


@pytest.fixture
def shelf_product() -> ProductInput:
    return ProductInput(
        product_id="shelf-oak",
        family=ProductFamily.CONFIGURABLE,
        base_price_usd=Decimal("100"),
        width_mm=600,
        width_min_mm=400,
        width_max_mm=1200,
        height_mm=2000,
        depth_mm=400,
    )


@pytest.fixture
def base_module_product() -> ProductInput:
    """Floor kitchen module with tier prices."""
    return ProductInput(
        product_id="base-600",
        family=ProductFamily.KITCHEN_MODULE,
        base_price_usd=Decimal("140"),
        width_mm=600,
        width_min_mm=300,
        width_max_mm=1200,
        height_mm=720,
        depth_mm=560,
        tier_low_usd=Decimal("100"),
        tier_medium_usd=Decimal("150"),
        tier_high_usd=Decimal("200"),
    )


@pytest.fixture
def base_constraints() -> ProductConstraints:
    return ProductConstraints(
        product_id="base-600",
        family=ProductFamily.KITCHEN_MODULE,
        depth_mm=560,
        height_mm=720,
        width_min_mm=300,
        width_max_mm=1200,
    )


@pytest.fixture
def wall_constraints() -> ProductConstraints:
    return ProductConstraints(
        product_id="wall-600",
        family=ProductFamily.KITCHEN_MODULE,
        depth_mm=350,
        height_mm=700,
        width_min_mm=300,
        width_max_mm=900,
        wall_mounted=True,
    )


def make_module(
    module_id: str,
    position_x: int,
    width_mm: int,
    *,
    position_y: int = 0,
    zone: Zone = Zone.FLOOR,
    price: str = "100.00",
    product_id: str = "base-600",
) -> PlacedModule:
    """Build a placed module for layout tests."""
    return PlacedModule(
        id=module_id,
        product_id=product_id,
        position_x=position_x,
        position_y=position_y,
        width_mm=width_mm,
        depth_mm=560,
        zone=zone,
        locked_mount_height_mm=1400 if zone == Zone.WALL else 0,
        unit_price_usd=Decimal(price),
    )


@pytest.fixture
def module_factory():
    """Factory fixture returning :func:`make_module`."""
    return make_module

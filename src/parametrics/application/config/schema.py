"""Pydantic models for settings, product and design configuration.

Settings payloads come from an admin settings store and are historically
loose: numbers may arrive as strings, booleans as ``"yes"``/``"on"`` and
category maps may contain junk. The settings model accepts those shapes
and normalizes them; product and design models are strict
(``extra="forbid"``).
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from parametrics.domain.kitchen_space import KitchenLayoutType
from parametrics.domain.money import to_number
from parametrics.domain.value_objects import PriceTier, ProductFamily, Zone

# Supported schema versions for design files
# Version 1.0: Products and placed modules
# Version 1.1: Added kitchen space description and price tiers
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})

# Legacy per-currency fields folded into ``currency_percent``.
_LEGACY_CURRENCY_FIELDS = {
    "priceAdjustmentUSDPercent": "USD",
    "priceAdjustmentVESPercent": "VES",
}


def to_bool(value: Any, fallback: bool) -> bool:
    """Coerce loose boolean input, returning ``fallback`` when unrecognized."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return fallback


class PriceAdjustmentSettingsConfig(BaseModel):
    """Price adjustment settings as stored by the admin settings page.

    Both snake_case names and the store's legacy camelCase names are
    accepted. Missing or unusable values fall back to the defaults below.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    global_percent: float = Field(
        default=0.0,
        validation_alias=AliasChoices("global_percent", "globalPriceAdjustmentPercent"),
    )
    global_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("global_enabled", "globalPriceAdjustmentEnabled"),
    )
    currency_percent: dict[str, float] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("currency_percent", "currencyPriceAdjustments"),
    )
    currency_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("currency_enabled", "priceAdjustmentByCurrencyEnabled"),
    )
    category_percent: dict[str, float] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("category_percent", "categoryPriceAdjustments"),
    )
    usd_discount_percent: float = Field(
        default=20.0,
        ge=0,
        le=100,
        validation_alias=AliasChoices("usd_discount_percent", "usdPaymentDiscountPercent"),
    )
    usd_discount_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices("usd_discount_enabled", "usdPaymentDiscountEnabled"),
    )

    @model_validator(mode="before")
    @classmethod
    def fold_legacy_currency_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        legacy = {
            code: data.pop(key)
            for key, code in _LEGACY_CURRENCY_FIELDS.items()
            if key in data
        }
        if legacy:
            existing = data.get("currency_percent", data.get("currencyPriceAdjustments")) or {}
            merged = {**legacy, **existing} if isinstance(existing, dict) else legacy
            data.pop("currencyPriceAdjustments", None)
            data["currency_percent"] = merged
        return data

    @field_validator("global_percent", "usd_discount_percent", mode="before")
    @classmethod
    def coerce_percent(cls, value: Any, info: Any) -> float:
        default = 20.0 if info.field_name == "usd_discount_percent" else 0.0
        return to_number(value, default)

    @field_validator("global_enabled", "currency_enabled", mode="before")
    @classmethod
    def coerce_flag(cls, value: Any) -> bool:
        return to_bool(value, False)

    @field_validator("usd_discount_enabled", mode="before")
    @classmethod
    def coerce_discount_flag(cls, value: Any) -> bool:
        return to_bool(value, True)

    @field_validator("currency_percent", "category_percent", mode="before")
    @classmethod
    def drop_unusable_entries(cls, value: Any, info: Any) -> dict[str, float]:
        if not isinstance(value, dict):
            return {}
        upper = info.field_name == "currency_percent"
        cleaned: dict[str, float] = {}
        for key, raw in value.items():
            number = to_number(raw, float("nan"))
            if math.isnan(number):
                continue
            name = str(key).strip()
            cleaned[name.upper() if upper else name] = number
        return cleaned


class ProductConfig(BaseModel):
    """Catalog product description."""

    model_config = ConfigDict(extra="forbid")

    product_id: str = Field(..., min_length=1)
    family: ProductFamily = ProductFamily.STANDARD
    base_price_usd: Decimal | None = Field(default=None, ge=0)
    list_price_usd: Decimal | None = Field(default=None, ge=0)
    pricing_formula: str | None = Field(default=None, max_length=500)
    category_id: str | None = None
    supplier_currency: str | None = None
    width_mm: float | None = Field(default=None, gt=0)
    height_mm: float | None = Field(default=None, gt=0)
    depth_mm: float | None = Field(default=None, gt=0)
    width_min_mm: float | None = Field(default=None, gt=0)
    width_max_mm: float | None = Field(default=None, gt=0)
    height_min_mm: float | None = Field(default=None, gt=0)
    height_max_mm: float | None = Field(default=None, gt=0)
    depth_min_mm: float | None = Field(default=None, gt=0)
    depth_max_mm: float | None = Field(default=None, gt=0)
    wall_mounted: bool = False
    tier_low_usd: Decimal | None = Field(default=None, ge=0)
    tier_medium_usd: Decimal | None = Field(default=None, ge=0)
    tier_high_usd: Decimal | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_ranges(self) -> ProductConfig:
        for axis in ("width", "height", "depth"):
            low = getattr(self, f"{axis}_min_mm")
            high = getattr(self, f"{axis}_max_mm")
            if low is not None and high is not None and low > high:
                raise ValueError(f"{axis}_min_mm ({low}) exceeds {axis}_max_mm ({high})")
        return self


class PlacedModuleConfig(BaseModel):
    """A module already placed in a design."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    position_x: int = Field(..., ge=0)
    position_y: int = Field(default=0, ge=0)
    width_mm: int = Field(..., gt=0)
    depth_mm: int = Field(default=0, ge=0)
    zone: Zone = Zone.FLOOR
    locked_mount_height_mm: int = Field(default=0, ge=0)
    unit_price_usd: Decimal = Field(default=Decimal("0"), ge=0)


class WallConfig(BaseModel):
    """One wall measurement of a kitchen space."""

    model_config = ConfigDict(extra="forbid")

    wall_name: str
    width_mm: float | None = None
    height_mm: float | None = None


class KitchenSpaceConfig(BaseModel):
    """Kitchen room description."""

    model_config = ConfigDict(extra="forbid")

    layout_type: KitchenLayoutType
    walls: list[WallConfig] = Field(default_factory=list)


class KitchenDesignConfig(BaseModel):
    """A kitchen design: catalog products and the modules placed so far."""

    model_config = ConfigDict(extra="forbid")

    version: str = Field(default="1.1")
    design_id: str = Field(default="design")
    currency: str = Field(default="USD", min_length=3, max_length=4)
    price_tier: PriceTier = PriceTier.MEDIUM
    products: list[ProductConfig] = Field(default_factory=list)
    modules: list[PlacedModuleConfig] = Field(default_factory=list)
    space: KitchenSpaceConfig | None = None

    @field_validator("version")
    @classmethod
    def check_version(cls, value: str) -> str:
        if value not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(f"Unsupported version {value!r}; supported: {supported}")
        return value

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def check_references(self) -> KitchenDesignConfig:
        known = {p.product_id for p in self.products}
        for module in self.modules:
            if module.product_id not in known:
                raise ValueError(
                    f"Module {module.id!r} references unknown product {module.product_id!r}"
                )
        ids = [m.id for m in self.modules]
        if len(ids) != len(set(ids)):
            raise ValueError("Module ids must be unique")
        return self

    def product(self, product_id: str) -> ProductConfig | None:
        return next((p for p in self.products if p.product_id == product_id), None)

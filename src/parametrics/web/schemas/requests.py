"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from parametrics.domain import CurrencyBasis, Zone


class RequestedDimensionsSchema(BaseModel):
    """Caller-requested dimensions in millimeters. Any axis may be omitted."""

    width_mm: float | None = Field(default=None, description="Requested width in mm")
    height_mm: float | None = Field(default=None, description="Requested height in mm")
    depth_mm: float | None = Field(default=None, description="Requested depth in mm")


class QuoteRequest(BaseModel):
    """Request for pricing a product."""

    product: dict[str, Any] = Field(..., description="Product description JSON")
    dimensions: RequestedDimensionsSchema | None = Field(
        default=None, description="Requested dimensions"
    )
    currency: str = Field(default="USD", min_length=3, max_length=4, description="Paying currency")
    tier: str | None = Field(default=None, description="Kitchen price tier: LOW, MEDIUM, HIGH")
    currency_basis: CurrencyBasis = Field(
        default=CurrencyBasis.PAYMENT,
        description="Currency that keys the currency surcharge",
    )
    settings: dict[str, Any] | None = Field(
        default=None, description="Price settings overriding the configured store"
    )


class FormulaCheckRequest(BaseModel):
    """Request for checking, and optionally evaluating, a pricing formula."""

    formula: str = Field(..., description="Pricing formula")
    dimensions: RequestedDimensionsSchema | None = Field(
        default=None, description="Dimensions to evaluate with (all three axes)"
    )
    base_price_usd: float | None = Field(
        default=None, gt=0, description="Adjusted price to evaluate with"
    )
    category_id: str | None = Field(default=None, description="Category id")


class PlacementDraftSchema(BaseModel):
    """Proposed module placement."""

    product_id: str = Field(..., min_length=1, description="Catalog id of the module")
    position_x: float = Field(default=0, description="Requested X position in mm")
    position_y: float = Field(default=0, description="Row Y position in mm")
    width_mm: float = Field(default=0, description="Requested width in mm")
    zone: Zone | None = Field(default=None, description="Requested zone")
    module_id: str | None = Field(default=None, description="Module to move or resize")


class PlacementRequest(BaseModel):
    """Request for validating and pricing a module placement."""

    design: dict[str, Any] = Field(..., description="Kitchen design JSON")
    draft: PlacementDraftSchema = Field(..., description="Placement draft")
    settings: dict[str, Any] | None = Field(
        default=None, description="Price settings overriding the configured store"
    )


class TotalsRequest(BaseModel):
    """Request for recomputing design totals."""

    design: dict[str, Any] = Field(..., description="Kitchen design JSON")
    currency: str | None = Field(default=None, description="Paying currency override")
    settings: dict[str, Any] | None = Field(
        default=None, description="Price settings overriding the configured store"
    )


class WallSchema(BaseModel):
    """A wall measurement."""

    wall_name: str = Field(..., description="Wall name, e.g. WALL_A")
    width_mm: float | None = Field(default=None, description="Wall width in mm")
    height_mm: float | None = Field(default=None, description="Wall height in mm")


class KitchenSpaceRequest(BaseModel):
    """Request for validating a kitchen space."""

    layout_type: str = Field(..., description="Kitchen layout type")
    walls: list[WallSchema] = Field(default_factory=list, description="Wall measurements")

"""Pydantic response schemas for the REST API."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class DimensionsSchema(BaseModel):
    """Working dimensions in millimeters."""

    width_mm: float = Field(..., description="Width in mm")
    height_mm: float = Field(..., description="Height in mm")
    depth_mm: float = Field(..., description="Depth in mm")


class QuoteResponseSchema(BaseModel):
    """Response for a price quote."""

    is_valid: bool = Field(..., description="Whether the product could be priced")
    errors: list[str] = Field(default_factory=list, description="Error messages")
    dimensions: DimensionsSchema | None = Field(default=None, description="Working dimensions")
    adjusted_reference_price: Decimal | None = Field(
        default=None, description="Reference price after adjustments, USD"
    )
    unit_price: Decimal | None = Field(default=None, description="Final unit price, USD")
    formula_applied: bool = Field(default=False, description="Whether a formula was used")
    notes: list[str] = Field(default_factory=list, description="Pricing notes")


class FormulaCheckResponseSchema(BaseModel):
    """Response for a formula check."""

    is_valid: bool = Field(..., description="Whether the formula parses")
    errors: list[str] = Field(default_factory=list, description="Parse errors")
    variables: list[str] = Field(default_factory=list, description="Variables referenced")
    value: Decimal | None = Field(
        default=None, description="Evaluated price, when dimensions and price were given"
    )


class GeometrySchema(BaseModel):
    """Normalized module geometry."""

    position_x: int
    position_y: int
    width_mm: int
    locked_mount_height_mm: int
    zone: str


class PlacedModuleSchema(BaseModel):
    """A module ready to persist."""

    id: str
    product_id: str
    position_x: int
    position_y: int
    width_mm: int
    depth_mm: int
    zone: str
    locked_mount_height_mm: int
    unit_price_usd: Decimal


class TotalsSchema(BaseModel):
    """Design totals."""

    subtotal: Decimal = Field(..., description="Sum of unit prices, USD")
    discount: Decimal = Field(..., description="Payment discount, USD")
    total: Decimal = Field(..., description="Subtotal minus discount, USD")
    module_count: int = Field(..., description="Number of modules")


class PlacementResponseSchema(BaseModel):
    """Response for a placement validation."""

    is_valid: bool = Field(..., description="Whether the placement can be persisted")
    errors: list[str] = Field(default_factory=list, description="Validation errors")
    normalized: GeometrySchema = Field(..., description="Normalized geometry")
    module: PlacedModuleSchema | None = Field(default=None, description="Module to persist")
    totals: TotalsSchema | None = Field(default=None, description="Totals with the module")


class WallMeasurementSchema(BaseModel):
    """An accepted wall."""

    wall_name: str
    width_mm: float
    height_mm: float | None = None


class KitchenSpaceResponseSchema(BaseModel):
    """Response for a kitchen space validation."""

    is_valid: bool = Field(..., description="Whether the space is complete and valid")
    errors: list[str] = Field(default_factory=list, description="Validation errors")
    walls: list[WallMeasurementSchema] = Field(default_factory=list, description="Accepted walls")
    total_run_mm: float = Field(default=0.0, description="Usable wall length in mm")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )

"""Pydantic schemas for the REST API."""

from parametrics.web.schemas.requests import (
    FormulaCheckRequest,
    KitchenSpaceRequest,
    PlacementDraftSchema,
    PlacementRequest,
    QuoteRequest,
    RequestedDimensionsSchema,
    TotalsRequest,
    WallSchema,
)
from parametrics.web.schemas.responses import (
    DimensionsSchema,
    ErrorResponseSchema,
    FormulaCheckResponseSchema,
    GeometrySchema,
    KitchenSpaceResponseSchema,
    PlacedModuleSchema,
    PlacementResponseSchema,
    QuoteResponseSchema,
    TotalsSchema,
    WallMeasurementSchema,
)

__all__ = [
    # Requests
    "FormulaCheckRequest",
    "KitchenSpaceRequest",
    "PlacementDraftSchema",
    "PlacementRequest",
    "QuoteRequest",
    "RequestedDimensionsSchema",
    "TotalsRequest",
    "WallSchema",
    # Responses
    "DimensionsSchema",
    "ErrorResponseSchema",
    "FormulaCheckResponseSchema",
    "GeometrySchema",
    "KitchenSpaceResponseSchema",
    "PlacedModuleSchema",
    "PlacementResponseSchema",
    "QuoteResponseSchema",
    "TotalsSchema",
    "WallMeasurementSchema",
]

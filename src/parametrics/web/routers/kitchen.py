"""Kitchen space endpoints."""

from fastapi import APIRouter

from parametrics.domain import validate_kitchen_space
from parametrics.web.schemas.requests import KitchenSpaceRequest
from parametrics.web.schemas.responses import (
    KitchenSpaceResponseSchema,
    WallMeasurementSchema,
)

router = APIRouter(prefix="/kitchen", tags=["kitchen"])


@router.post("/space/validate", response_model=KitchenSpaceResponseSchema)
async def validate_space(request: KitchenSpaceRequest) -> KitchenSpaceResponseSchema:
    """Validate wall measurements for a kitchen layout type."""
    result = validate_kitchen_space(
        request.layout_type,
        [wall.model_dump() for wall in request.walls],
    )
    return KitchenSpaceResponseSchema(
        is_valid=result.is_valid,
        errors=list(result.errors),
        walls=[
            WallMeasurementSchema(
                wall_name=wall.wall_name,
                width_mm=wall.width_mm,
                height_mm=wall.height_mm,
            )
            for wall in result.walls
        ],
        total_run_mm=result.total_run_mm if result.is_valid else 0.0,
    )

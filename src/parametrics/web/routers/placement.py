"""Module placement and design totals endpoints."""

from fastapi import APIRouter, HTTPException

from parametrics.application.config import (
    config_to_modules,
    config_to_product,
    load_design_from_dict,
)
from parametrics.application.dtos import PlacementOutput
from parametrics.domain import PlacementDraft, Zone, aggregate_totals
from parametrics.infrastructure import geometry_to_dict, module_to_dict, totals_to_dict
from parametrics.web.dependencies import (
    PlaceCommandDep,
    ServiceFactoryDep,
    settings_from_request,
)
from parametrics.web.schemas.requests import PlacementRequest, TotalsRequest
from parametrics.web.schemas.responses import (
    GeometrySchema,
    PlacedModuleSchema,
    PlacementResponseSchema,
    TotalsSchema,
)

router = APIRouter(prefix="/placement", tags=["placement"])


def _placement_output_to_schema(output: PlacementOutput) -> PlacementResponseSchema:
    """Convert PlacementOutput to response schema."""
    return PlacementResponseSchema(
        is_valid=output.is_valid,
        errors=output.errors,
        normalized=GeometrySchema(**geometry_to_dict(output.placement.normalized)),
        module=PlacedModuleSchema(**module_to_dict(output.module)) if output.module else None,
        totals=TotalsSchema(**totals_to_dict(output.totals)) if output.totals else None,
    )


@router.post("/validate", response_model=PlacementResponseSchema)
async def validate_placement(
    request: PlacementRequest,
    command: PlaceCommandDep,
) -> PlacementResponseSchema:
    """Validate, normalize and price a module placement.

    Placement errors are returned with ``is_valid=false``; the caller must
    not persist the module in that case.
    """
    design = load_design_from_dict(request.design)
    draft_schema = request.draft

    product_config = design.product(draft_schema.product_id)
    if product_config is None:
        raise HTTPException(
            status_code=422,
            detail={
                "error": f"Product {draft_schema.product_id!r} is not in the design",
                "error_type": "unknown_product",
            },
        )
    product = config_to_product(product_config)

    draft = PlacementDraft(
        product_id=draft_schema.product_id,
        position_x=draft_schema.position_x,
        position_y=draft_schema.position_y,
        width_mm=draft_schema.width_mm,
        zone=draft_schema.zone or (Zone.WALL if product.wall_mounted else Zone.FLOOR),
        module_id=draft_schema.module_id,
    )
    output = command.execute(
        draft,
        product,
        config_to_modules(design),
        currency=design.currency,
        tier=design.price_tier,
        settings=settings_from_request(request.settings),
    )
    return _placement_output_to_schema(output)


@router.post("/totals", response_model=TotalsSchema)
async def design_totals(
    request: TotalsRequest,
    factory: ServiceFactoryDep,
) -> TotalsSchema:
    """Recompute the totals of a design from its placed modules."""
    design = load_design_from_dict(request.design)
    settings = settings_from_request(request.settings)
    if settings is None:
        settings = factory.get_settings_store().load()

    totals = aggregate_totals(
        config_to_modules(design),
        currency=request.currency or design.currency,
        settings=settings,
    )
    return TotalsSchema(**totals_to_dict(totals))

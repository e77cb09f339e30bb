"""Pricing endpoints."""

from fastapi import APIRouter

from parametrics.application.config import config_to_product, load_product_from_dict
from parametrics.application.dtos import QuoteOutput
from parametrics.domain import (
    FormulaError,
    WorkingDimensions,
    evaluate_formula,
    parse_formula,
    referenced_variables,
)
from parametrics.web.dependencies import QuoteCommandDep, settings_from_request
from parametrics.web.schemas.requests import FormulaCheckRequest, QuoteRequest
from parametrics.web.schemas.responses import (
    DimensionsSchema,
    FormulaCheckResponseSchema,
    QuoteResponseSchema,
)

router = APIRouter(prefix="/pricing", tags=["pricing"])


def _quote_output_to_schema(output: QuoteOutput) -> QuoteResponseSchema:
    """Convert QuoteOutput to response schema."""
    if output.quote is None:
        return QuoteResponseSchema(is_valid=False, errors=output.errors)

    quote = output.quote
    return QuoteResponseSchema(
        is_valid=output.is_valid,
        errors=output.errors,
        dimensions=DimensionsSchema(
            width_mm=quote.dimensions.width_mm,
            height_mm=quote.dimensions.height_mm,
            depth_mm=quote.dimensions.depth_mm,
        ),
        adjusted_reference_price=quote.adjusted_reference_price,
        unit_price=quote.unit_price,
        formula_applied=quote.formula_applied,
        notes=list(quote.notes),
    )


@router.post("/quote", response_model=QuoteResponseSchema)
async def quote_price(
    request: QuoteRequest,
    command: QuoteCommandDep,
) -> QuoteResponseSchema:
    """Price a product at the requested dimensions.

    Invalid product or settings payloads are rejected with 422. A product
    that cannot be priced returns ``is_valid=false`` with the reasons.
    """
    product = config_to_product(load_product_from_dict(request.product))
    requested = request.dimensions.model_dump() if request.dimensions else None

    output = command.execute(
        product,
        requested=requested,
        currency=request.currency,
        tier=request.tier,
        currency_basis=request.currency_basis,
        settings=settings_from_request(request.settings),
    )
    return _quote_output_to_schema(output)


@router.post("/formula/check", response_model=FormulaCheckResponseSchema)
async def check_formula(request: FormulaCheckRequest) -> FormulaCheckResponseSchema:
    """Check a formula and, given dimensions and a price, evaluate it."""
    try:
        node = parse_formula(request.formula)
    except FormulaError as e:
        return FormulaCheckResponseSchema(is_valid=False, errors=[str(e)])

    value = None
    dims = request.dimensions
    if (
        dims is not None
        and request.base_price_usd is not None
        and None not in (dims.width_mm, dims.height_mm, dims.depth_mm)
    ):
        value = evaluate_formula(
            request.formula,
            WorkingDimensions(
                width_mm=dims.width_mm,
                height_mm=dims.height_mm,
                depth_mm=dims.depth_mm,
            ),
            request.base_price_usd,
            request.category_id,
        )

    return FormulaCheckResponseSchema(
        is_valid=True,
        variables=sorted(referenced_variables(node)),
        value=value,
    )

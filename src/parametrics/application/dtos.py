"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from parametrics.domain import (
    AxisRange,
    DesignTotals,
    DimensionSchema,
    PlacedModule,
    PlacementResult,
    PriceQuote,
    ProductConstraints,
    ProductFamily,
    TierPrices,
)
from parametrics.domain.money import to_number


def _axis(
    value: float | None, minimum: float | None, maximum: float | None
) -> AxisRange | None:
    """Build an axis from catalog fields.

    A min/max pair gives an adjustable axis (catalog value as default when it
    fits); otherwise the catalog value becomes a fixed axis.
    """
    low = to_number(minimum, 0.0)
    high = to_number(maximum, 0.0)
    nominal = to_number(value, 0.0)
    if low > 0 and high >= low:
        default = nominal if low <= nominal <= high else None
        return AxisRange(min_mm=low, max_mm=high, default_mm=default)
    if nominal > 0:
        return AxisRange.fixed(nominal)
    return None


@dataclass
class ProductInput:
    """Catalog facts about a product, as supplied by the catalog collaborator.

    Attributes:
        product_id: Catalog id.
        family: Product family (STANDARD, KITCHEN_MODULE, CONFIGURABLE).
        base_price_usd: Base price; falls back to ``list_price_usd``.
        list_price_usd: Public list price.
        pricing_formula: Optional parametric pricing formula.
        category_id: Category id used for category surcharges.
        supplier_currency: Currency the supplier charges in.
        width_mm / height_mm / depth_mm: Catalog dimensions.
        width_min_mm ... depth_max_mm: Adjustable ranges, when any.
        wall_mounted: True for wall-category kitchen modules.
        tier_low_usd / tier_medium_usd / tier_high_usd: Kitchen tier prices.
    """

    product_id: str
    family: ProductFamily = ProductFamily.STANDARD
    base_price_usd: Decimal | float | None = None
    list_price_usd: Decimal | float | None = None
    pricing_formula: str | None = None
    category_id: str | None = None
    supplier_currency: str | None = None
    width_mm: float | None = None
    height_mm: float | None = None
    depth_mm: float | None = None
    width_min_mm: float | None = None
    width_max_mm: float | None = None
    height_min_mm: float | None = None
    height_max_mm: float | None = None
    depth_min_mm: float | None = None
    depth_max_mm: float | None = None
    wall_mounted: bool = False
    tier_low_usd: Decimal | float | None = None
    tier_medium_usd: Decimal | float | None = None
    tier_high_usd: Decimal | float | None = None

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if not self.product_id:
            errors.append("Product id is required")
        for axis in ("width", "height", "depth"):
            if self.axis_range(axis) is None:
                errors.append(f"Product {axis} is not defined")
        low = to_number(self.width_min_mm, 0.0)
        high = to_number(self.width_max_mm, 0.0)
        if low > 0 and high > 0 and low > high:
            errors.append("Product width minimum exceeds maximum")
        return errors

    def axis_range(self, axis: str) -> AxisRange | None:
        return _axis(
            getattr(self, f"{axis}_mm"),
            getattr(self, f"{axis}_min_mm"),
            getattr(self, f"{axis}_max_mm"),
        )

    def tier_prices(self) -> TierPrices:
        return TierPrices(
            low=self.tier_low_usd,
            medium=self.tier_medium_usd,
            high=self.tier_high_usd,
            base=self.base_price_usd,
            list_price=self.list_price_usd,
        )

    def to_schema(self, reference_price: Decimal) -> DimensionSchema:
        """Convert to the domain dimension schema.

        Raises:
            ValueError: If an axis is undefined or the price is not positive.
        """
        axes = {axis: self.axis_range(axis) for axis in ("width", "height", "depth")}
        missing = [axis for axis, value in axes.items() if value is None]
        if missing:
            raise ValueError(f"Product dimensions not defined: {', '.join(missing)}")
        return DimensionSchema(
            width=axes["width"],
            height=axes["height"],
            depth=axes["depth"],
            reference_price=reference_price,
            family=self.family,
        )

    def to_constraints(self) -> ProductConstraints:
        """Convert to placement constraints."""
        has_range = (
            to_number(self.width_min_mm, 0.0) > 0 and to_number(self.width_max_mm, 0.0) > 0
        )
        fixed_width = None
        if not has_range and to_number(self.width_mm, 0.0) > 0:
            fixed_width = float(self.width_mm)  # type: ignore[arg-type]
        return ProductConstraints(
            product_id=self.product_id,
            family=self.family,
            depth_mm=to_number(self.depth_mm, 0.0),
            height_mm=to_number(self.height_mm, 0.0),
            width_min_mm=float(self.width_min_mm) if has_range else None,  # type: ignore[arg-type]
            width_max_mm=float(self.width_max_mm) if has_range else None,  # type: ignore[arg-type]
            fixed_width_mm=fixed_width,
            wall_mounted=self.wall_mounted,
        )


@dataclass
class QuoteOutput:
    """Output DTO for a price quote.

    Attributes:
        quote: Computed quote, None when the product could not be priced.
        errors: List of error messages if pricing failed.
    """

    quote: PriceQuote | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0 and self.quote is not None


@dataclass
class PlacementOutput:
    """Output DTO for a module placement.

    Attributes:
        placement: Raw validation result (normalized geometry and errors).
        module: Module to persist, None when placement failed.
        totals: Design totals recomputed with the new module in place.
        errors: Validation or pricing errors. Caller must not persist when
            non-empty.
    """

    placement: PlacementResult
    module: PlacedModule | None = None
    totals: DesignTotals | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0 and self.module is not None

"""Domain layer - pricing and placement rules."""

from .dimension_resolver import resolve_axis, resolve_dimensions
from .formula import (
    ALLOWED_VARIABLES,
    FormulaError,
    FormulaOutcome,
    apply_formula,
    evaluate_formula,
    parse_formula,
    referenced_variables,
    validate_formula,
)
from .kitchen_space import KitchenLayoutType, KitchenSpaceResult, validate_kitchen_space
from .money import round_money
from .placement import PlacementResult, build_placed_module, validate_placement
from .price_adjustments import (
    DEFAULT_SETTINGS,
    PriceAdjustmentSettings,
    PricingError,
    apply_payment_discount,
    compute_adjusted_price,
)
from .tiers import TierPrices, resolve_tier_price
from .totals import aggregate_totals
from .value_objects import (
    WALL_MOUNT_HEIGHT_MM,
    AxisRange,
    CurrencyBasis,
    DesignTotals,
    DimensionSchema,
    ModuleGeometry,
    PaymentDiscount,
    PlacedModule,
    PlacementDraft,
    PriceQuote,
    PriceTier,
    ProductConstraints,
    ProductFamily,
    WorkingDimensions,
    Zone,
)

__all__ = [
    "ALLOWED_VARIABLES",
    "AxisRange",
    "CurrencyBasis",
    "DEFAULT_SETTINGS",
    "DesignTotals",
    "DimensionSchema",
    "FormulaError",
    "FormulaOutcome",
    "KitchenLayoutType",
    "KitchenSpaceResult",
    "ModuleGeometry",
    "PaymentDiscount",
    "PlacedModule",
    "PlacementDraft",
    "PlacementResult",
    "PriceAdjustmentSettings",
    "PriceQuote",
    "PriceTier",
    "PricingError",
    "ProductConstraints",
    "ProductFamily",
    "TierPrices",
    "WALL_MOUNT_HEIGHT_MM",
    "WorkingDimensions",
    "Zone",
    "aggregate_totals",
    "apply_formula",
    "apply_payment_discount",
    "build_placed_module",
    "compute_adjusted_price",
    "evaluate_formula",
    "parse_formula",
    "referenced_variables",
    "resolve_axis",
    "resolve_dimensions",
    "resolve_tier_price",
    "round_money",
    "validate_formula",
    "validate_kitchen_space",
]

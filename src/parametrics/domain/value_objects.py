"""Value objects for parametric pricing and module placement."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from .money import ZERO


class Zone(str, Enum):
    """Layout zone a module is mounted in."""

    FLOOR = "FLOOR"
    WALL = "WALL"


class ProductFamily(str, Enum):
    """Catalog product families relevant to the engine."""

    STANDARD = "STANDARD"
    KITCHEN_MODULE = "KITCHEN_MODULE"
    CONFIGURABLE = "CONFIGURABLE"


class CurrencyBasis(str, Enum):
    """Which currency the currency surcharge is keyed on.

    - PAYMENT: the currency the customer pays with
    - SETTLEMENT: the currency the supplier charges in
    """

    PAYMENT = "payment"
    SETTLEMENT = "settlement"


class PriceTier(str, Enum):
    """Kitchen module price tiers."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# Standard height from the floor at which every wall-zone module hangs.
WALL_MOUNT_HEIGHT_MM = 1400


@dataclass(frozen=True)
class AxisRange:
    """Adjustable range for one product axis, in millimeters.

    Attributes:
        min_mm: Smallest allowed value.
        max_mm: Largest allowed value.
        default_mm: Value used when the caller supplies nothing usable.
            Falls back to ``min_mm`` when not declared.
    """

    min_mm: float
    max_mm: float
    default_mm: float | None = None

    def __post_init__(self) -> None:
        if not (math.isfinite(self.min_mm) and math.isfinite(self.max_mm)):
            raise ValueError("Axis range bounds must be finite")
        if self.min_mm <= 0:
            raise ValueError("Axis range minimum must be positive")
        if self.min_mm > self.max_mm:
            raise ValueError(
                f"Axis range minimum ({self.min_mm}) exceeds maximum ({self.max_mm})"
            )

    @classmethod
    def fixed(cls, value_mm: float) -> AxisRange:
        """Create a non-adjustable axis."""
        return cls(min_mm=value_mm, max_mm=value_mm, default_mm=value_mm)

    @property
    def is_fixed(self) -> bool:
        return self.min_mm == self.max_mm

    @property
    def fallback_mm(self) -> float:
        """Schema default for this axis, before clamping."""
        return self.default_mm if self.default_mm is not None else self.min_mm

    def clamp(self, value: float) -> float:
        return min(max(value, self.min_mm), self.max_mm)

    def contains(self, value: float) -> bool:
        return self.min_mm <= value <= self.max_mm


@dataclass(frozen=True)
class DimensionSchema:
    """Declared dimension ranges and reference price of a product."""

    width: AxisRange
    height: AxisRange
    depth: AxisRange
    reference_price: Decimal
    family: ProductFamily = ProductFamily.STANDARD

    def __post_init__(self) -> None:
        if self.reference_price <= 0:
            raise ValueError("Reference price must be positive")

    @property
    def base_dimensions(self) -> WorkingDimensions:
        """Dimensions the reference price was quoted for."""
        return WorkingDimensions(
            width_mm=self.width.clamp(self.width.fallback_mm),
            height_mm=self.height.clamp(self.height.fallback_mm),
            depth_mm=self.depth.clamp(self.depth.fallback_mm),
        )


@dataclass(frozen=True)
class WorkingDimensions:
    """Resolved dimensions for a single pricing call, in millimeters."""

    width_mm: float
    height_mm: float
    depth_mm: float

    @property
    def reference_volume(self) -> float:
        """Volume in cubic millimeters."""
        return self.width_mm * self.depth_mm * self.height_mm


@dataclass(frozen=True)
class ProductConstraints:
    """Geometry and eligibility facts about a product being placed.

    Attributes:
        product_id: Catalog id of the product.
        family: Product family; placement requires a matching family.
        depth_mm: Declared module depth.
        height_mm: Declared module height.
        width_min_mm: Lower bound of the adjustable width, if any.
        width_max_mm: Upper bound of the adjustable width, if any.
        fixed_width_mm: Non-adjustable width, if the product has no range.
        wall_mounted: True for wall-category modules (uppers).
    """

    product_id: str
    family: ProductFamily = ProductFamily.KITCHEN_MODULE
    depth_mm: float = 0.0
    height_mm: float = 0.0
    width_min_mm: float | None = None
    width_max_mm: float | None = None
    fixed_width_mm: float | None = None
    wall_mounted: bool = False

    @property
    def has_width_range(self) -> bool:
        return self.width_min_mm is not None and self.width_max_mm is not None

    @property
    def zone(self) -> Zone:
        return Zone.WALL if self.wall_mounted else Zone.FLOOR

    @property
    def mount_height_mm(self) -> int:
        return WALL_MOUNT_HEIGHT_MM if self.wall_mounted else 0


@dataclass(frozen=True)
class PlacementDraft:
    """Unvalidated proposal to place or resize a module.

    A draft carrying ``module_id`` updates that module; otherwise it is
    appended to the end of its row.
    """

    product_id: str
    position_x: float
    position_y: float
    width_mm: float
    zone: Zone = Zone.FLOOR
    module_id: str | None = None

    @property
    def is_update(self) -> bool:
        return self.module_id is not None


@dataclass(frozen=True)
class ModuleGeometry:
    """Normalized geometry returned by placement validation."""

    position_x: int
    position_y: int
    width_mm: int
    locked_mount_height_mm: int
    zone: Zone

    @property
    def right_edge(self) -> int:
        return self.position_x + self.width_mm


@dataclass(frozen=True)
class PlacedModule:
    """A module persisted in a design layout."""

    id: str
    product_id: str
    position_x: int
    position_y: int
    width_mm: int
    depth_mm: int
    zone: Zone
    locked_mount_height_mm: int
    unit_price_usd: Decimal

    @property
    def right_edge(self) -> int:
        return self.position_x + self.width_mm

    @property
    def row(self) -> tuple[Zone, int]:
        return (self.zone, self.position_y)


@dataclass(frozen=True)
class PaymentDiscount:
    """Outcome of applying the payment-currency discount to a subtotal."""

    percent: float
    amount: Decimal
    subtotal_after_discount: Decimal


@dataclass(frozen=True)
class DesignTotals:
    """Aggregate over a design's placed modules."""

    subtotal: Decimal = ZERO
    discount: Decimal = ZERO
    total: Decimal = ZERO
    module_count: int = 0


@dataclass(frozen=True)
class PriceQuote:
    """Result of pricing one product at one set of dimensions."""

    dimensions: WorkingDimensions
    adjusted_reference_price: Decimal
    unit_price: Decimal
    formula_applied: bool = False
    notes: tuple[str, ...] = field(default_factory=tuple)

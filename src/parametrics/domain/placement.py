"""Module placement validation and normalization.

Modules are laid out in rows. A row is identified by ``(zone, position_y)``
and modules inside a row occupy ``[position_x, position_x + width_mm)`` on
the X axis. New modules are appended at the right edge of their row with no
gap. Resizing or moving an existing module never shifts its neighbors: the
edit is rejected if it would collide with any of them.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from .money import round_money
from .value_objects import (
    ModuleGeometry,
    PlacedModule,
    PlacementDraft,
    ProductConstraints,
    ProductFamily,
    Zone,
)

logger = logging.getLogger(__name__)

ERROR_WIDTH_INVALID = "width invalid"
ERROR_OVERLAP = "overlap detected"
ERROR_NOT_ELIGIBLE = "product not eligible"
ERROR_POSITION_INVALID = "position invalid"
ERROR_MODULE_NOT_FOUND = "module not found"


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of placement validation.

    Attributes:
        normalized: Geometry the caller should persist when valid. When
            invalid it echoes the draft as submitted.
        errors: Validation failures. The caller must not persist when
            non-empty.
    """

    normalized: ModuleGeometry
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0


def overlaps_1d(a_start: float, a_end: float, b_start: float, b_end: float) -> bool:
    """Check whether two half-open intervals intersect."""
    return a_start < b_end and a_end > b_start


def _round_mm(value: float) -> int | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(round(number))


def row_modules(
    modules: Iterable[PlacedModule], zone: Zone, position_y: int
) -> list[PlacedModule]:
    """Modules sharing a row, ordered left to right."""
    row = [m for m in modules if m.zone == zone and m.position_y == position_y]
    return sorted(row, key=lambda m: m.position_x)


def row_right_edge(modules: Iterable[PlacedModule], zone: Zone, position_y: int) -> int:
    """Right edge of the last module in a row, 0 for an empty row."""
    return max((m.right_edge for m in row_modules(modules, zone, position_y)), default=0)


def resolve_width(draft_width: float, constraints: ProductConstraints) -> tuple[int | None, str | None]:
    """Resolve the module width for a draft.

    Returns:
        Tuple of (width, error). Width is None when no usable width exists.
    """
    if constraints.fixed_width_mm is not None:
        width = _round_mm(constraints.fixed_width_mm)
        if width is None or width <= 0:
            return None, f"{ERROR_WIDTH_INVALID}: product fixed width is not positive"
        return width, None

    width = _round_mm(draft_width)
    if width is None or width <= 0:
        return None, f"{ERROR_WIDTH_INVALID}: width must be a positive number"

    if not constraints.has_width_range:
        return None, f"{ERROR_WIDTH_INVALID}: product has no width range"

    assert constraints.width_min_mm is not None and constraints.width_max_mm is not None
    if width < constraints.width_min_mm or width > constraints.width_max_mm:
        return None, (
            f"{ERROR_WIDTH_INVALID}: {width} mm outside range "
            f"({constraints.width_min_mm:g}-{constraints.width_max_mm:g})"
        )
    return width, None


def validate_placement(
    draft: PlacementDraft,
    constraints: ProductConstraints,
    existing: Iterable[PlacedModule],
    *,
    required_family: ProductFamily = ProductFamily.KITCHEN_MODULE,
) -> PlacementResult:
    """Validate and normalize a placement draft.

    Appends are packed at the row's right edge. Updates (drafts carrying a
    ``module_id``) keep their requested position and are rejected on any
    collision with another module in the row.

    Args:
        draft: Proposed placement or resize.
        constraints: Width range, depth and eligibility of the product.
        existing: Every module already placed in the same design.
        required_family: Product family accepted by this layout.

    Returns:
        PlacementResult with normalized geometry and any errors.
    """
    modules = list(existing)
    errors: list[str] = []

    zone = constraints.zone
    mount_height = constraints.mount_height_mm
    if draft.zone != zone:
        logger.debug(f"Draft zone {draft.zone.value} replaced by product zone {zone.value}")

    requested_x = _round_mm(draft.position_x)
    requested_y = _round_mm(draft.position_y)
    requested_width = _round_mm(draft.width_mm)

    echo = ModuleGeometry(
        position_x=requested_x if requested_x is not None else 0,
        position_y=requested_y if requested_y is not None else 0,
        width_mm=requested_width if requested_width is not None else 0,
        locked_mount_height_mm=mount_height,
        zone=zone,
    )

    if constraints.family != required_family or constraints.product_id != draft.product_id:
        errors.append(
            f"{ERROR_NOT_ELIGIBLE}: {constraints.family.value} product "
            f"{constraints.product_id!r} cannot be placed in a "
            f"{required_family.value} layout"
        )
        return PlacementResult(normalized=echo, errors=errors)

    width, width_error = resolve_width(draft.width_mm, constraints)
    if width_error:
        errors.append(width_error)

    if requested_x is None or requested_x < 0 or requested_y is None or requested_y < 0:
        errors.append(f"{ERROR_POSITION_INVALID}: positions must be non-negative numbers")

    if errors:
        return PlacementResult(normalized=echo, errors=errors)

    assert width is not None and requested_x is not None and requested_y is not None

    if draft.is_update:
        current = next((m for m in modules if m.id == draft.module_id), None)
        if current is None:
            errors.append(f"{ERROR_MODULE_NOT_FOUND}: {draft.module_id!r}")
            return PlacementResult(normalized=echo, errors=errors)

        position_x = requested_x
        neighbors = [
            m for m in row_modules(modules, zone, requested_y) if m.id != draft.module_id
        ]
        for other in neighbors:
            if overlaps_1d(position_x, position_x + width, other.position_x, other.right_edge):
                errors.append(
                    f"{ERROR_OVERLAP}: module {other.id!r} occupies "
                    f"{other.position_x}-{other.right_edge} mm in this row"
                )
                break
        if errors:
            return PlacementResult(normalized=echo, errors=errors)
    else:
        position_x = row_right_edge(modules, zone, requested_y)
        if position_x != requested_x:
            logger.debug(f"Packed module at x={position_x} (requested {requested_x})")

    normalized = ModuleGeometry(
        position_x=position_x,
        position_y=requested_y,
        width_mm=width,
        locked_mount_height_mm=mount_height,
        zone=zone,
    )
    return PlacementResult(normalized=normalized)


def build_placed_module(
    result: PlacementResult,
    constraints: ProductConstraints,
    module_id: str,
    unit_price_usd: Decimal | float,
) -> PlacedModule:
    """Create the module to persist from a valid placement result.

    Raises:
        ValueError: If the placement result carries errors.
    """
    if not result.is_valid:
        raise ValueError(f"Cannot build module from invalid placement: {result.errors}")
    geometry = result.normalized
    return PlacedModule(
        id=module_id,
        product_id=constraints.product_id,
        position_x=geometry.position_x,
        position_y=geometry.position_y,
        width_mm=geometry.width_mm,
        depth_mm=int(round(constraints.depth_mm)),
        zone=geometry.zone,
        locked_mount_height_mm=geometry.locked_mount_height_mm,
        unit_price_usd=round_money(unit_price_usd),
    )

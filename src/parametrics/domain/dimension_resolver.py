"""Working dimension resolution.

Turns a product's declared axis ranges plus whatever dimensions the caller
asked for into dimensions that are guaranteed to satisfy the schema. Input
outside the schema is never an error: each axis falls back to its declared
default and is finally clamped to ``[min, max]``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from .money import to_number
from .value_objects import AxisRange, DimensionSchema, ProductFamily, WorkingDimensions

logger = logging.getLogger(__name__)

_AXES = ("width", "height", "depth")


def _requested_value(requested: Any, axis: str) -> float | None:
    if requested is None:
        return None
    key = f"{axis}_mm"
    if isinstance(requested, Mapping):
        raw = requested.get(key, requested.get(f"{axis}Mm"))
    else:
        raw = getattr(requested, key, None)
    value = to_number(raw, fallback=math.nan)
    return None if math.isnan(value) else value


def resolve_axis(axis_range: AxisRange, requested: float | None) -> float:
    """Resolve one axis.

    Args:
        axis_range: Declared range for the axis.
        requested: Caller-supplied value, or None.

    Returns:
        The requested value when it is positive and inside the range,
        otherwise the axis default clamped into the range.
    """
    if requested is not None and requested > 0 and axis_range.contains(requested):
        return float(requested)
    return float(axis_range.clamp(axis_range.fallback_mm))


def resolve_dimensions(
    schema: DimensionSchema,
    requested: Mapping[str, Any] | WorkingDimensions | None = None,
) -> WorkingDimensions:
    """Resolve schema-valid working dimensions.

    Kitchen modules are priced at their catalog height, so a requested
    height is ignored for that family.

    Args:
        schema: Product dimension schema.
        requested: Optional caller dimensions, either a WorkingDimensions or a
            mapping with ``width_mm``/``height_mm``/``depth_mm`` keys (camel
            case ``widthMm`` style keys are accepted too). Missing, zero,
            non-numeric or out-of-range values are replaced silently.

    Returns:
        WorkingDimensions whose every axis lies within the schema range.
    """
    resolved: dict[str, float] = {}
    for axis in _AXES:
        axis_range: AxisRange = getattr(schema, axis)
        value = _requested_value(requested, axis)
        if axis == "height" and schema.family == ProductFamily.KITCHEN_MODULE:
            value = None
        result = resolve_axis(axis_range, value)
        if value is not None and value != result:
            logger.debug(
                f"Requested {axis} {value} outside "
                f"[{axis_range.min_mm}, {axis_range.max_mm}], using {result}"
            )
        resolved[f"{axis}_mm"] = result

    return WorkingDimensions(**resolved)

"""Kitchen space validation.

Before modules are placed the customer describes the room: a layout type
and the length (and optionally the height) of each wall it needs.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .money import to_number


class KitchenLayoutType(str, Enum):
    """Supported kitchen layout shapes."""

    LINEAL = "LINEAL"
    L_SHAPE = "L_SHAPE"
    DOUBLE_LINE = "DOUBLE_LINE"
    LINEAL_WITH_ISLAND = "LINEAL_WITH_ISLAND"
    L_WITH_ISLAND = "L_WITH_ISLAND"
    L_WITH_PENINSULA = "L_WITH_PENINSULA"
    CUSTOM_SPACE = "CUSTOM_SPACE"


@dataclass(frozen=True)
class WallDefinition:
    wall_name: str
    label: str
    is_separation: bool = False


LAYOUT_WALLS: dict[KitchenLayoutType, tuple[WallDefinition, ...]] = {
    KitchenLayoutType.LINEAL: (WallDefinition("WALL_A", "Wall length"),),
    KitchenLayoutType.L_SHAPE: (
        WallDefinition("WALL_A", "Wall A length"),
        WallDefinition("WALL_B", "Wall B length"),
    ),
    KitchenLayoutType.DOUBLE_LINE: (
        WallDefinition("LINE_A", "Line A length"),
        WallDefinition("LINE_B", "Line B length"),
        WallDefinition("SEPARATION", "Separation between lines", is_separation=True),
    ),
    KitchenLayoutType.LINEAL_WITH_ISLAND: (WallDefinition("WALL_A", "Wall length"),),
    KitchenLayoutType.L_WITH_ISLAND: (
        WallDefinition("WALL_A", "Wall A length"),
        WallDefinition("WALL_B", "Wall B length"),
    ),
    KitchenLayoutType.L_WITH_PENINSULA: (
        WallDefinition("WALL_A", "Wall A length"),
        WallDefinition("WALL_B", "Wall B length"),
    ),
    KitchenLayoutType.CUSTOM_SPACE: (),
}

WALL_WIDTH_MIN_MM = 300
WALL_WIDTH_MAX_MM = 20000
WALL_HEIGHT_MIN_MM = 2000
WALL_HEIGHT_MAX_MM = 4000


@dataclass(frozen=True)
class WallMeasurement:
    """A validated wall of the kitchen space."""

    wall_name: str
    width_mm: float
    height_mm: float | None = None


@dataclass(frozen=True)
class KitchenSpaceResult:
    walls: tuple[WallMeasurement, ...] = field(default_factory=tuple)
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def total_run_mm(self) -> float:
        """Usable wall length, excluding separations."""
        separations = {"SEPARATION"}
        return sum(w.width_mm for w in self.walls if w.wall_name not in separations)


def _optional_number(value: Any) -> float | None:
    if value is None or value == "":
        return None
    number = to_number(value, fallback=float("nan"))
    return None if math.isnan(number) else number


def validate_kitchen_space(
    layout_type: KitchenLayoutType | str,
    walls: Iterable[Mapping[str, Any]],
) -> KitchenSpaceResult:
    """Validate wall measurements for a kitchen layout.

    Wall names are upper-cased; repeated walls after the first are ignored.
    Every wall the layout defines is required, except for CUSTOM_SPACE which
    accepts any wall names. Separation walls never carry a height.

    Args:
        layout_type: Layout shape.
        walls: Mappings with ``wall_name``, ``width_mm`` and optional
            ``height_mm``.

    Returns:
        KitchenSpaceResult with accepted walls and error messages.
    """
    try:
        raw = layout_type.value if isinstance(layout_type, KitchenLayoutType) else str(layout_type)
        layout = KitchenLayoutType(raw.strip().upper())
    except ValueError:
        return KitchenSpaceResult(errors=(f"Unknown kitchen layout {layout_type!r}",))

    definitions = {d.wall_name: d for d in LAYOUT_WALLS[layout]}
    custom = layout == KitchenLayoutType.CUSTOM_SPACE
    errors: list[str] = []
    accepted: list[WallMeasurement] = []
    seen: set[str] = set()

    for wall in walls:
        name = str(wall.get("wall_name") or "").strip().upper()
        if not name:
            continue
        if not custom and name not in definitions:
            errors.append(f"Wall {name!r} is not valid for {layout.value}")
            continue
        if name in seen:
            continue
        seen.add(name)

        width = _optional_number(wall.get("width_mm"))
        if width is None:
            errors.append(f"Wall {name!r} requires width_mm")
            continue
        if width < WALL_WIDTH_MIN_MM or width > WALL_WIDTH_MAX_MM:
            errors.append(
                f"Wall {name!r} width_mm outside range "
                f"({WALL_WIDTH_MIN_MM}-{WALL_WIDTH_MAX_MM})"
            )
            continue

        height = _optional_number(wall.get("height_mm"))
        definition = definitions.get(name)
        if definition is not None and definition.is_separation:
            height = None
        elif height is not None and (height < WALL_HEIGHT_MIN_MM or height > WALL_HEIGHT_MAX_MM):
            errors.append(
                f"Wall {name!r} height_mm outside range "
                f"({WALL_HEIGHT_MIN_MM}-{WALL_HEIGHT_MAX_MM})"
            )
            continue

        accepted.append(WallMeasurement(wall_name=name, width_mm=width, height_mm=height))

    if not custom:
        for name in definitions:
            if name not in seen:
                errors.append(f"Wall {name!r} is required for {layout.value}")

    return KitchenSpaceResult(walls=tuple(accepted), errors=tuple(errors))

"""Unit tests for module placement validation and normalization.

These tests verify:
- Appends are packed at the right edge of their row
- Rows are keyed by zone and Y position
- Width ranges and fixed widths are enforced
- Updates never shift neighbors and are rejected on collision
- Invalid drafts are echoed back unchanged with errors
"""

from decimal import Decimal

import pytest

from parametrics.domain import (
    WALL_MOUNT_HEIGHT_MM,
    PlacementDraft,
    ProductConstraints,
    ProductFamily,
    Zone,
    build_placed_module,
    validate_placement,
)
from parametrics.domain.placement import (
    ERROR_MODULE_NOT_FOUND,
    ERROR_NOT_ELIGIBLE,
    ERROR_OVERLAP,
    ERROR_POSITION_INVALID,
    ERROR_WIDTH_INVALID,
    overlaps_1d,
    row_right_edge,
)


def _draft(width: float, x: float = 0, y: float = 0, **kwargs) -> PlacementDraft:
    kwargs.setdefault("product_id", "base-600")
    return PlacementDraft(position_x=x, position_y=y, width_mm=width, **kwargs)


class TestOverlap:
    """Tests for the half-open interval check."""

    def test_touching_intervals_do_not_overlap(self) -> None:
        assert not overlaps_1d(0, 600, 600, 1200)

    def test_intersecting_intervals_overlap(self) -> None:
        assert overlaps_1d(0, 601, 600, 1200)
        assert overlaps_1d(100, 200, 0, 1200)


class TestAppend:
    """Tests for appending modules to a row."""

    def test_first_module_starts_at_zero(self, base_constraints: ProductConstraints) -> None:
        result = validate_placement(_draft(600, x=500), base_constraints, [])
        assert result.is_valid
        assert result.normalized.position_x == 0
        assert result.normalized.width_mm == 600
        assert result.normalized.locked_mount_height_mm == 0
        assert result.normalized.zone == Zone.FLOOR

    def test_packs_at_right_edge(
        self, base_constraints: ProductConstraints, module_factory
    ) -> None:
        existing = [module_factory("m1", 0, 600), module_factory("m2", 600, 450)]
        result = validate_placement(_draft(900, x=0), base_constraints, existing)
        assert result.is_valid
        assert result.normalized.position_x == 1050

    def test_sequential_appends_never_overlap(
        self, base_constraints: ProductConstraints
    ) -> None:
        widths = [600, 450, 900, 300, 1200]
        placed = []
        for index, width in enumerate(widths):
            result = validate_placement(_draft(width), base_constraints, placed)
            assert result.is_valid
            placed.append(
                build_placed_module(result, base_constraints, f"m{index}", Decimal("10"))
            )

        assert row_right_edge(placed, Zone.FLOOR, 0) == sum(widths)
        for i, a in enumerate(placed):
            for b in placed[i + 1:]:
                assert not overlaps_1d(a.position_x, a.right_edge, b.position_x, b.right_edge)

    def test_rows_are_independent(
        self, base_constraints: ProductConstraints, module_factory
    ) -> None:
        existing = [module_factory("m1", 0, 600, position_y=0)]
        result = validate_placement(_draft(600, y=1), base_constraints, existing)
        assert result.normalized.position_x == 0
        assert result.normalized.position_y == 1

    def test_wall_module_uses_wall_row(
        self, wall_constraints: ProductConstraints, module_factory
    ) -> None:
        existing = [module_factory("m1", 0, 600, zone=Zone.FLOOR)]
        draft = _draft(600, product_id="wall-600", zone=Zone.FLOOR)
        result = validate_placement(draft, wall_constraints, existing)
        assert result.is_valid
        assert result.normalized.zone == Zone.WALL
        assert result.normalized.position_x == 0
        assert result.normalized.locked_mount_height_mm == WALL_MOUNT_HEIGHT_MM

    def test_fractional_values_rounded(self, base_constraints: ProductConstraints) -> None:
        result = validate_placement(_draft(600.4, y=0.2), base_constraints, [])
        assert result.normalized.width_mm == 600
        assert result.normalized.position_y == 0


class TestWidth:
    """Tests for width resolution."""

    @pytest.mark.parametrize("width", [299, 1201, 5000])
    def test_out_of_range_rejected(
        self, base_constraints: ProductConstraints, width: int
    ) -> None:
        result = validate_placement(_draft(width, x=250), base_constraints, [])
        assert not result.is_valid
        assert result.errors[0].startswith(ERROR_WIDTH_INVALID)
        assert result.normalized.width_mm == width
        assert result.normalized.position_x == 250

    @pytest.mark.parametrize("width", [0, -10, float("nan")])
    def test_non_positive_rejected(
        self, base_constraints: ProductConstraints, width: float
    ) -> None:
        result = validate_placement(_draft(width), base_constraints, [])
        assert any(e.startswith(ERROR_WIDTH_INVALID) for e in result.errors)

    def test_fixed_width_overrides_request(self) -> None:
        constraints = ProductConstraints(product_id="base-600", fixed_width_mm=600)
        result = validate_placement(_draft(900), constraints, [])
        assert result.is_valid
        assert result.normalized.width_mm == 600

    def test_no_width_information(self) -> None:
        constraints = ProductConstraints(product_id="base-600")
        result = validate_placement(_draft(600), constraints, [])
        assert not result.is_valid
        assert "no width range" in result.errors[0]


class TestEligibility:
    """Tests for product eligibility and position checks."""

    def test_wrong_family_rejected(self) -> None:
        constraints = ProductConstraints(
            product_id="chair",
            family=ProductFamily.STANDARD,
            fixed_width_mm=450,
        )
        result = validate_placement(_draft(450, product_id="chair"), constraints, [])
        assert not result.is_valid
        assert result.errors[0].startswith(ERROR_NOT_ELIGIBLE)

    def test_product_mismatch_rejected(self, base_constraints: ProductConstraints) -> None:
        result = validate_placement(_draft(600, product_id="other"), base_constraints, [])
        assert result.errors[0].startswith(ERROR_NOT_ELIGIBLE)

    def test_custom_family_accepted(self) -> None:
        constraints = ProductConstraints(
            product_id="panel",
            family=ProductFamily.CONFIGURABLE,
            width_min_mm=100,
            width_max_mm=500,
        )
        result = validate_placement(
            _draft(300, product_id="panel"),
            constraints,
            [],
            required_family=ProductFamily.CONFIGURABLE,
        )
        assert result.is_valid

    def test_negative_position_rejected(self, base_constraints: ProductConstraints) -> None:
        result = validate_placement(_draft(600, y=-1), base_constraints, [])
        assert result.errors == [
            f"{ERROR_POSITION_INVALID}: positions must be non-negative numbers"
        ]


class TestUpdate:
    """Tests for resizing and moving existing modules."""

    @pytest.fixture
    def row(self, module_factory):
        return [module_factory("m1", 0, 600), module_factory("m2", 600, 600)]

    def test_grow_into_neighbor_rejected(
        self, base_constraints: ProductConstraints, row
    ) -> None:
        result = validate_placement(_draft(800, module_id="m1"), base_constraints, row)
        assert not result.is_valid
        assert result.errors[0].startswith(ERROR_OVERLAP)
        assert "'m2'" in result.errors[0]

    def test_grow_last_module(self, base_constraints: ProductConstraints, row) -> None:
        result = validate_placement(
            _draft(900, x=600, module_id="m2"), base_constraints, row
        )
        assert result.is_valid
        assert result.normalized.position_x == 600
        assert result.normalized.width_mm == 900

    def test_shrink_keeps_neighbors(self, base_constraints: ProductConstraints, row) -> None:
        result = validate_placement(_draft(450, module_id="m1"), base_constraints, row)
        assert result.is_valid
        assert result.normalized.position_x == 0
        assert result.normalized.width_mm == 450

    def test_move_within_row(self, base_constraints: ProductConstraints, row) -> None:
        result = validate_placement(
            _draft(500, x=700, module_id="m2"), base_constraints, row
        )
        assert result.is_valid
        assert result.normalized.position_x == 700

    def test_unknown_module(self, base_constraints: ProductConstraints, row) -> None:
        result = validate_placement(_draft(600, module_id="ghost"), base_constraints, row)
        assert result.errors[0].startswith(ERROR_MODULE_NOT_FOUND)


class TestBuildPlacedModule:
    """Tests for build_placed_module."""

    def test_builds_module(self, base_constraints: ProductConstraints) -> None:
        result = validate_placement(_draft(600), base_constraints, [])
        module = build_placed_module(result, base_constraints, "m1", 149.999)
        assert module.id == "m1"
        assert module.product_id == "base-600"
        assert module.depth_mm == 560
        assert module.unit_price_usd == Decimal("150.00")
        assert module.right_edge == 600
        assert module.row == (Zone.FLOOR, 0)

    def test_invalid_result_rejected(self, base_constraints: ProductConstraints) -> None:
        result = validate_placement(_draft(5000), base_constraints, [])
        with pytest.raises(ValueError, match="invalid placement"):
            build_placed_module(result, base_constraints, "m1", Decimal("1"))

"""Output formatters for quotes, placements and kitchen spaces."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from parametrics.application.dtos import PlacementOutput, QuoteOutput
from parametrics.domain import (
    DesignTotals,
    KitchenSpaceResult,
    ModuleGeometry,
    PlacedModule,
    PriceQuote,
)


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def quote_to_dict(quote: PriceQuote) -> dict[str, Any]:
    dims = quote.dimensions
    return {
        "dimensions": {
            "width_mm": dims.width_mm,
            "height_mm": dims.height_mm,
            "depth_mm": dims.depth_mm,
        },
        "adjusted_reference_price": _money(quote.adjusted_reference_price),
        "unit_price": _money(quote.unit_price),
        "formula_applied": quote.formula_applied,
        "notes": list(quote.notes),
    }


def geometry_to_dict(geometry: ModuleGeometry) -> dict[str, Any]:
    return {
        "position_x": geometry.position_x,
        "position_y": geometry.position_y,
        "width_mm": geometry.width_mm,
        "locked_mount_height_mm": geometry.locked_mount_height_mm,
        "zone": geometry.zone.value,
    }


def module_to_dict(module: PlacedModule) -> dict[str, Any]:
    return {
        "id": module.id,
        "product_id": module.product_id,
        "position_x": module.position_x,
        "position_y": module.position_y,
        "width_mm": module.width_mm,
        "depth_mm": module.depth_mm,
        "zone": module.zone.value,
        "locked_mount_height_mm": module.locked_mount_height_mm,
        "unit_price_usd": _money(module.unit_price_usd),
    }


def totals_to_dict(totals: DesignTotals) -> dict[str, Any]:
    return {
        "subtotal": _money(totals.subtotal),
        "discount": _money(totals.discount),
        "total": _money(totals.total),
        "module_count": totals.module_count,
    }


class QuoteFormatter:
    """Formats a price quote for terminal display."""

    def format(self, output: QuoteOutput) -> str:
        if not output.is_valid or output.quote is None:
            return "\n".join(f"Error: {err}" for err in output.errors)

        quote = output.quote
        dims = quote.dimensions
        lines = [
            "PRICE QUOTE",
            "=" * 40,
            f"Dimensions:      {dims.width_mm:g} x {dims.height_mm:g} x {dims.depth_mm:g} mm",
            f"Adjusted price:  {_money(quote.adjusted_reference_price)} USD",
            f"Unit price:      {_money(quote.unit_price)} USD",
            f"Formula applied: {'yes' if quote.formula_applied else 'no'}",
        ]
        lines.extend(f"Note: {note}" for note in quote.notes)
        return "\n".join(lines)


class PlacementFormatter:
    """Formats a placement outcome for terminal display."""

    def format(self, output: PlacementOutput) -> str:
        if not output.is_valid or output.module is None:
            return "\n".join(f"Error: {err}" for err in output.errors)

        module = output.module
        lines = [
            "MODULE PLACEMENT",
            "=" * 40,
            f"Module:    {module.id}",
            f"Product:   {module.product_id}",
            f"Zone:      {module.zone.value}",
            f"Position:  x={module.position_x} y={module.position_y} mm",
            f"Width:     {module.width_mm} mm",
            f"Mount:     {module.locked_mount_height_mm} mm",
            f"Price:     {_money(module.unit_price_usd)} USD",
        ]
        if output.totals is not None:
            lines.append("")
            lines.append(TotalsFormatter().format(output.totals))
        return "\n".join(lines)


class TotalsFormatter:
    """Formats design totals."""

    def format(self, totals: DesignTotals) -> str:
        return "\n".join(
            [
                f"Modules:   {totals.module_count}",
                f"Subtotal:  {_money(totals.subtotal)} USD",
                f"Discount:  {_money(totals.discount)} USD",
                f"Total:     {_money(totals.total)} USD",
            ]
        )


class KitchenSpaceFormatter:
    """Formats a kitchen space validation result."""

    def format(self, result: KitchenSpaceResult) -> str:
        lines = ["KITCHEN SPACE", "=" * 40]
        for wall in result.walls:
            height = f"{wall.height_mm:g} mm" if wall.height_mm is not None else "-"
            lines.append(f"{wall.wall_name:<12} width {wall.width_mm:g} mm, height {height}")
        if result.is_valid:
            lines.append(f"Total run: {result.total_run_mm:g} mm")
        else:
            lines.extend(f"Error: {err}" for err in result.errors)
        return "\n".join(lines)


class JsonExporter:
    """Exports outputs as JSON strings."""

    def export_quote(self, output: QuoteOutput) -> str:
        if not output.is_valid or output.quote is None:
            return json.dumps({"errors": output.errors}, indent=2)
        return json.dumps(quote_to_dict(output.quote), indent=2)

    def export_placement(self, output: PlacementOutput) -> str:
        data: dict[str, Any] = {
            "is_valid": output.is_valid,
            "normalized": geometry_to_dict(output.placement.normalized),
            "errors": output.errors,
        }
        if output.module is not None:
            data["module"] = module_to_dict(output.module)
        if output.totals is not None:
            data["totals"] = totals_to_dict(output.totals)
        return json.dumps(data, indent=2)

    def export_totals(self, totals: DesignTotals) -> str:
        return json.dumps(totals_to_dict(totals), indent=2)

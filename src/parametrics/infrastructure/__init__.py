"""Infrastructure layer - settings stores and formatters."""

from .formatters import (
    JsonExporter,
    KitchenSpaceFormatter,
    PlacementFormatter,
    QuoteFormatter,
    TotalsFormatter,
    geometry_to_dict,
    module_to_dict,
    quote_to_dict,
    totals_to_dict,
)
from .settings_store import JsonSettingsStore, StaticSettingsStore

__all__ = [
    "JsonExporter",
    "JsonSettingsStore",
    "KitchenSpaceFormatter",
    "PlacementFormatter",
    "QuoteFormatter",
    "StaticSettingsStore",
    "TotalsFormatter",
    "geometry_to_dict",
    "module_to_dict",
    "quote_to_dict",
    "totals_to_dict",
]

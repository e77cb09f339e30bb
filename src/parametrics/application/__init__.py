"""Application layer - use cases and orchestration."""

from .commands import PlaceModuleCommand, QuotePriceCommand
from .dtos import PlacementOutput, ProductInput, QuoteOutput

__all__ = [
    "PlaceModuleCommand",
    "PlacementOutput",
    "ProductInput",
    "QuoteOutput",
    "QuotePriceCommand",
]

"""FastAPI dependency injection for pricing services."""

from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends

from parametrics.application.commands import PlaceModuleCommand, QuotePriceCommand
from parametrics.application.config import config_to_settings, load_settings_from_dict
from parametrics.application.factory import ServiceFactory, get_factory
from parametrics.domain import PriceAdjustmentSettings


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


def get_quote_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> QuotePriceCommand:
    """Dependency for QuotePriceCommand."""
    return factory.create_quote_command()


def get_place_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> PlaceModuleCommand:
    """Dependency for PlaceModuleCommand."""
    return factory.create_place_command()


# Type aliases for cleaner endpoint signatures
ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
QuoteCommandDep = Annotated[QuotePriceCommand, Depends(get_quote_command)]
PlaceCommandDep = Annotated[PlaceModuleCommand, Depends(get_place_command)]


def settings_from_request(data: dict[str, Any] | None) -> PriceAdjustmentSettings | None:
    """Build a settings snapshot from an inline request payload.

    Returns None when the request carries no settings, so the command falls
    back to its store.

    Raises:
        ConfigError: If the payload is not a valid settings object.
    """
    if data is None:
        return None
    return config_to_settings(load_settings_from_dict(data))

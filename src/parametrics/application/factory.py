"""Service factory for dependency injection."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from parametrics.application.commands import PlaceModuleCommand, QuotePriceCommand
    from parametrics.contracts import SettingsStoreProtocol

SETTINGS_ENV_VAR = "PARAMETRICS_SETTINGS"


@dataclass
class ServiceFactory:
    """Factory for creating commands wired to a settings store.

    When no store is given, the store is chosen from the
    ``PARAMETRICS_SETTINGS`` environment variable: a JSON file store when it
    is set, otherwise the default settings.
    """

    settings_store: "SettingsStoreProtocol | None" = None
    _resolved_store: "SettingsStoreProtocol | None" = field(
        default=None, init=False, repr=False
    )

    def get_settings_store(self) -> "SettingsStoreProtocol":
        if self.settings_store is not None:
            return self.settings_store
        if self._resolved_store is None:
            from parametrics.infrastructure import JsonSettingsStore, StaticSettingsStore

            path = os.environ.get(SETTINGS_ENV_VAR)
            self._resolved_store = JsonSettingsStore(path) if path else StaticSettingsStore()
        return self._resolved_store

    def create_quote_command(self) -> "QuotePriceCommand":
        from parametrics.application.commands import QuotePriceCommand

        return QuotePriceCommand(self.get_settings_store())

    def create_place_command(self) -> "PlaceModuleCommand":
        from parametrics.application.commands import PlaceModuleCommand

        return PlaceModuleCommand(self.create_quote_command())


_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None

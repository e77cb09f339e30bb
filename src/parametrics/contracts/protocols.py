"""Collaborator protocols.

The engine never reads from a database. Collaborators that own persisted
state implement these protocols and hand the engine plain data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from parametrics.domain import PriceAdjustmentSettings


@runtime_checkable
class SettingsStoreProtocol(Protocol):
    """Source of price adjustment settings.

    Implementations return a fresh, immutable snapshot on every call so each
    pricing request sees the settings in force at that moment.

    Example:
        ```python
        class DatabaseSettingsStore:
            def load(self) -> PriceAdjustmentSettings:
                row = fetch_site_settings()
                return config_to_settings(load_settings_from_dict(row))
        ```
    """

    def load(self) -> "PriceAdjustmentSettings":
        """Return the current settings snapshot."""
        ...

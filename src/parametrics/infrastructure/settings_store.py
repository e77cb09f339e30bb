"""Settings store implementations."""

from __future__ import annotations

import logging
from pathlib import Path

from parametrics.application.config import ConfigError, config_to_settings, load_settings
from parametrics.domain import DEFAULT_SETTINGS, PriceAdjustmentSettings

logger = logging.getLogger(__name__)


class StaticSettingsStore:
    """Settings store returning a fixed snapshot."""

    def __init__(self, settings: PriceAdjustmentSettings | None = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS

    def load(self) -> PriceAdjustmentSettings:
        return self._settings


class JsonSettingsStore:
    """Settings store backed by a JSON file.

    The file is read on every call so each pricing request sees the
    settings currently on disk. A missing or invalid file yields the
    default settings.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> PriceAdjustmentSettings:
        try:
            config = load_settings(self.path)
        except ConfigError as e:
            logger.warning(f"Using default price settings ({e.error_type}): {e.message}")
            return DEFAULT_SETTINGS
        return config_to_settings(config)

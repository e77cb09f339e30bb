"""Configuration schema and loading for settings, products and designs.

Public API:
    - PriceAdjustmentSettingsConfig: Store-wide price adjustment settings
    - ProductConfig: Catalog product description
    - PlacedModuleConfig: Module already placed in a design
    - KitchenDesignConfig: Products plus placed modules of a kitchen design
    - KitchenSpaceConfig / WallConfig: Kitchen room description
    - load_settings / load_settings_from_dict
    - load_product / load_product_from_dict
    - load_design / load_design_from_dict
    - ConfigError: Exception for configuration errors
    - config_to_*: Conversion to domain objects

Example:
    >>> from pathlib import Path
    >>> from parametrics.application.config import load_settings, ConfigError
    >>>
    >>> try:
    ...     settings = load_settings(Path("settings.json"))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from parametrics.application.config.adapter import (
    check_space,
    config_to_module,
    config_to_modules,
    config_to_product,
    config_to_products,
    config_to_settings,
)
from parametrics.application.config.loader import (
    ConfigError,
    load_design,
    load_design_from_dict,
    load_product,
    load_product_from_dict,
    load_settings,
    load_settings_from_dict,
    read_json,
)
from parametrics.application.config.schema import (
    SUPPORTED_VERSIONS,
    KitchenDesignConfig,
    KitchenSpaceConfig,
    PlacedModuleConfig,
    PriceAdjustmentSettingsConfig,
    ProductConfig,
    WallConfig,
    to_bool,
)

__all__ = [
    "ConfigError",
    "KitchenDesignConfig",
    "KitchenSpaceConfig",
    "PlacedModuleConfig",
    "PriceAdjustmentSettingsConfig",
    "ProductConfig",
    "SUPPORTED_VERSIONS",
    "WallConfig",
    "check_space",
    "config_to_module",
    "config_to_modules",
    "config_to_product",
    "config_to_products",
    "config_to_settings",
    "load_design",
    "load_design_from_dict",
    "load_product",
    "load_product_from_dict",
    "load_settings",
    "load_settings_from_dict",
    "read_json",
    "to_bool",
]

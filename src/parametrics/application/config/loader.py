"""Configuration file loader with comprehensive error handling.

This module loads and validates JSON settings, product and design files.
It handles file system errors, JSON parsing errors, and Pydantic validation
errors with clear, actionable error messages.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from parametrics.application.config.schema import (
    KitchenDesignConfig,
    PriceAdjustmentSettingsConfig,
    ProductConfig,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the configuration file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message for display."""
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("modules", 0, "width_mm"))
        'modules[0].width_mm'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts) or "(root)"


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Extract path, message, value and error_type from a ValidationError."""
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Configuration validation failed:"]
    for detail in details:
        path = detail["path"]
        message = detail["message"]
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {message} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {message}")
    return "\n".join(lines)


def _validate(model: type[ModelT], data: Any, path: Path | None = None) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def read_json(path: Path) -> Any:
    """Read and parse a JSON file.

    Raises:
        ConfigError: With error_type ``file_not_found``, ``permission_denied``,
            ``file_read_error`` or ``json_parse``.
    """
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in config file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e


def load_settings(path: Path) -> PriceAdjustmentSettingsConfig:
    """Load price adjustment settings from a JSON file."""
    return _validate(PriceAdjustmentSettingsConfig, read_json(path), path)


def load_settings_from_dict(data: dict[str, Any]) -> PriceAdjustmentSettingsConfig:
    """Load price adjustment settings from a dictionary."""
    return _validate(PriceAdjustmentSettingsConfig, data)


def load_product(path: Path) -> ProductConfig:
    """Load a single product description from a JSON file."""
    return _validate(ProductConfig, read_json(path), path)


def load_product_from_dict(data: dict[str, Any]) -> ProductConfig:
    return _validate(ProductConfig, data)


def load_design(path: Path) -> KitchenDesignConfig:
    """Load a kitchen design (products and placed modules) from a JSON file.

    Example:
        >>> try:
        ...     design = load_design(Path("kitchen.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(f"  {detail['path']}: {detail['message']}")
    """
    return _validate(KitchenDesignConfig, read_json(path), path)


def load_design_from_dict(data: dict[str, Any]) -> KitchenDesignConfig:
    return _validate(KitchenDesignConfig, data)

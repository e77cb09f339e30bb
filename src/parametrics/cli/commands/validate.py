"""Validate command for checking price settings files.

This module provides the `validate-settings` command that loads a JSON
settings file, reports schema errors and prints the normalized settings the
pricing engine would use.
"""

from pathlib import Path
from typing import Annotated

import typer

from parametrics.application.config import (
    ConfigError,
    config_to_settings,
    load_settings,
)
from parametrics.domain import PriceAdjustmentSettings


def validate_settings_command(
    settings_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON price settings file to validate"),
    ],
) -> None:
    """Validate a price adjustment settings file.

    Exit codes:
        0 - Settings are valid
        1 - Settings file is missing, malformed or invalid

    Example:
        parametrics validate-settings settings.json
    """
    typer.echo(f"Validating {settings_file}...")
    typer.echo()

    try:
        config = load_settings(settings_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    _display_settings(config_to_settings(config))
    typer.echo()
    typer.echo("Validation passed. Settings are valid.")


def display_load_error(error: ConfigError) -> None:
    """Display a configuration loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo(err=True)
    typer.echo("Validation failed.", err=True)


def _on_off(flag: bool) -> str:
    return "enabled" if flag else "disabled"


def _display_settings(settings: PriceAdjustmentSettings) -> None:
    typer.echo(f"Global adjustment:   {settings.global_percent:g}% ({_on_off(settings.global_enabled)})")
    typer.echo(f"Currency adjustment: {_on_off(settings.currency_enabled)}")
    for code, percent in sorted(settings.currency_percent.items()):
        typer.echo(f"  {code}: {percent:g}%")
    typer.echo(f"Category adjustments: {len(settings.category_percent)}")
    for category, percent in sorted(settings.category_percent.items()):
        typer.echo(f"  {category}: {percent:g}%")
    typer.echo(
        f"USD payment discount: {settings.usd_discount_percent:g}% "
        f"({_on_off(settings.usd_discount_enabled)})"
    )

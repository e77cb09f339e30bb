"""Typer CLI for parametric pricing and module placement."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from parametrics.application import PlaceModuleCommand, QuotePriceCommand
from parametrics.application.config import (
    ConfigError,
    KitchenDesignConfig,
    check_space,
    config_to_modules,
    config_to_product,
    load_design,
    load_product,
)
from parametrics.cli.commands import (
    check_formula_command,
    display_load_error,
    validate_settings_command,
)
from parametrics.contracts import SettingsStoreProtocol
from parametrics.domain import CurrencyBasis, PlacementDraft, Zone, aggregate_totals
from parametrics.infrastructure import (
    JsonExporter,
    JsonSettingsStore,
    KitchenSpaceFormatter,
    PlacementFormatter,
    QuoteFormatter,
    StaticSettingsStore,
    TotalsFormatter,
)

app = typer.Typer(
    name="parametrics",
    help="Price parametric products and place kitchen modules.",
)

app.command(name="validate-settings")(validate_settings_command)
app.command(name="check-formula")(check_formula_command)

SettingsOption = Annotated[
    Path | None,
    typer.Option(
        "--settings",
        "-s",
        envvar="PARAMETRICS_SETTINGS",
        help="Path to price settings JSON (defaults apply when omitted)",
    ),
]
FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format: text, json"),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Parametric pricing and spatial placement engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _settings_store(settings_file: Path | None) -> SettingsStoreProtocol:
    if settings_file is None:
        return StaticSettingsStore()
    return JsonSettingsStore(settings_file)


def _check_format(output_format: str) -> str:
    value = output_format.lower()
    if value not in ("text", "json"):
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo("Available formats: text, json", err=True)
        raise typer.Exit(code=1)
    return value


def _load_design(design_file: Path) -> KitchenDesignConfig:
    try:
        return load_design(design_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


@app.command()
def quote(
    product_file: Annotated[
        Path,
        typer.Argument(help="Path to product JSON file"),
    ],
    width: Annotated[
        float | None,
        typer.Option("--width", "-w", help="Requested width in mm"),
    ] = None,
    height: Annotated[
        float | None,
        typer.Option("--height", "-h", help="Requested height in mm"),
    ] = None,
    depth: Annotated[
        float | None,
        typer.Option("--depth", "-d", help="Requested depth in mm"),
    ] = None,
    currency: Annotated[
        str,
        typer.Option("--currency", "-c", help="Paying currency code"),
    ] = "USD",
    tier: Annotated[
        str | None,
        typer.Option("--tier", help="Kitchen price tier: LOW, MEDIUM, HIGH"),
    ] = None,
    basis: Annotated[
        CurrencyBasis,
        typer.Option("--basis", help="Currency used for currency surcharges"),
    ] = CurrencyBasis.PAYMENT,
    settings_file: SettingsOption = None,
    output_format: FormatOption = "text",
) -> None:
    """Quote the unit price of a product at the requested dimensions."""
    fmt = _check_format(output_format)
    try:
        product = config_to_product(load_product(product_file))
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    requested = {"width_mm": width, "height_mm": height, "depth_mm": depth}
    command = QuotePriceCommand(_settings_store(settings_file))
    result = command.execute(
        product,
        requested=requested,
        currency=currency,
        tier=tier,
        currency_basis=basis,
    )

    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if fmt == "json":
        typer.echo(JsonExporter().export_quote(result))
    else:
        typer.echo(QuoteFormatter().format(result))


@app.command()
def place(
    design_file: Annotated[
        Path,
        typer.Argument(help="Path to kitchen design JSON file"),
    ],
    product_id: Annotated[
        str,
        typer.Option("--product", "-p", help="Catalog id of the module to place"),
    ],
    width: Annotated[
        float,
        typer.Option("--width", "-w", help="Module width in mm"),
    ] = 0.0,
    position_x: Annotated[
        float,
        typer.Option("--x", help="Requested X position in mm"),
    ] = 0.0,
    position_y: Annotated[
        float,
        typer.Option("--y", help="Row Y position in mm"),
    ] = 0.0,
    module_id: Annotated[
        str | None,
        typer.Option("--module-id", help="Existing module to move or resize"),
    ] = None,
    settings_file: SettingsOption = None,
    output_format: FormatOption = "text",
) -> None:
    """Validate and price a module placement within a design.

    The design file is not modified; the module to persist is printed.
    """
    fmt = _check_format(output_format)
    design = _load_design(design_file)

    product_config = design.product(product_id)
    if product_config is None:
        typer.echo(f"Error: product {product_id!r} is not in {design_file}", err=True)
        raise typer.Exit(code=1)
    product = config_to_product(product_config)

    draft = PlacementDraft(
        product_id=product_id,
        position_x=position_x,
        position_y=position_y,
        width_mm=width,
        zone=Zone.WALL if product.wall_mounted else Zone.FLOOR,
        module_id=module_id,
    )
    command = PlaceModuleCommand(QuotePriceCommand(_settings_store(settings_file)))
    result = command.execute(
        draft,
        product,
        config_to_modules(design),
        currency=design.currency,
        tier=design.price_tier,
    )

    if fmt == "json":
        typer.echo(JsonExporter().export_placement(result))
        if not result.is_valid:
            raise typer.Exit(code=1)
        return

    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(PlacementFormatter().format(result))


@app.command()
def totals(
    design_file: Annotated[
        Path,
        typer.Argument(help="Path to kitchen design JSON file"),
    ],
    currency: Annotated[
        str | None,
        typer.Option("--currency", "-c", help="Paying currency (defaults to the design's)"),
    ] = None,
    settings_file: SettingsOption = None,
    output_format: FormatOption = "text",
) -> None:
    """Show the budget totals of a design."""
    fmt = _check_format(output_format)
    design = _load_design(design_file)

    result = aggregate_totals(
        config_to_modules(design),
        currency=currency or design.currency,
        settings=_settings_store(settings_file).load(),
    )
    if fmt == "json":
        typer.echo(JsonExporter().export_totals(result))
    else:
        typer.echo(TotalsFormatter().format(result))


@app.command(name="check-space")
def check_space_command(
    design_file: Annotated[
        Path,
        typer.Argument(help="Path to kitchen design JSON file"),
    ],
) -> None:
    """Validate the kitchen space (walls) described in a design."""
    design = _load_design(design_file)
    if design.space is None:
        typer.echo(f"Error: {design_file} has no kitchen space", err=True)
        raise typer.Exit(code=1)

    result = check_space(design.space)
    output = KitchenSpaceFormatter().format(result)
    if not result.is_valid:
        typer.echo(output, err=True)
        raise typer.Exit(code=1)
    typer.echo(output)


if __name__ == "__main__":
    app()

"""Formula checking command."""

from typing import Annotated

import typer

from parametrics.domain import FormulaError, parse_formula, referenced_variables


def check_formula_command(
    formula: Annotated[
        str,
        typer.Argument(help="Pricing formula, e.g. 'basePriceUsd * widthMm / 600'"),
    ],
) -> None:
    """Check that a pricing formula parses and uses only known variables.

    Example:
        parametrics check-formula "basePriceUsd * widthRatio + 15"
    """
    try:
        node = parse_formula(formula)
    except FormulaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    variables = sorted(referenced_variables(node))
    typer.echo("Formula is valid.")
    if variables:
        typer.echo(f"Variables: {', '.join(variables)}")

"""CLI command implementations for the parametrics application.

This package contains subcommands for the parametrics CLI, including:
- validate-settings: Validate a price settings file
- check-formula: Check a pricing formula
"""

from parametrics.cli.commands.formula import check_formula_command
from parametrics.cli.commands.validate import display_load_error, validate_settings_command

__all__ = ["check_formula_command", "display_load_error", "validate_settings_command"]

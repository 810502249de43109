"""CLI command implementations for the casework application.

This package contains subcommands for the casework CLI, including:
- validate: Validate the formulas of a module library
- templates: List and copy the bundled starter files
"""

from casework.cli.commands.templates import templates_app
from casework.cli.commands.validate import validate_command

__all__ = ["templates_app", "validate_command"]

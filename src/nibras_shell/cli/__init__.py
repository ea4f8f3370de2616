"""Command-line interface for nibras-shell."""

from nibras_shell.cli.parser import CLIParser
from nibras_shell.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]

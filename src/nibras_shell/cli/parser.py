"""CLI argument parser for nibras-shell.

Handles parsing of command-line arguments and provides a clean
interface for defining CLI commands and their options.
"""

import argparse
from argparse import Namespace
from collections.abc import Sequence

from nibras_shell.core.workflows import UninstallMethod
from nibras_shell.domain.managed import MANAGED_PATHS
from nibras_shell.domain.types import GlobalConfig


class CLIParser:
    """Command-line argument parser for nibras-shell."""

    def __init__(self, global_config: GlobalConfig | None = None) -> None:
        """Initialize the CLI parser.

        Args:
            global_config: Loaded settings, used for help text defaults

        """
        self.global_config = global_config

    def build(self) -> argparse.ArgumentParser:
        """Build the full parser with global options and subcommands."""
        parser = self._create_main_parser()
        self._add_global_options(parser)
        self._add_subcommands(parser)
        return parser

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse, defaults to ``sys.argv[1:]``

        Returns:
            Parsed arguments namespace.

        """
        return self.build().parse_args(argv)

    def _create_main_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog="nibras-shell",
            description="NibrasShell Hyprland configuration installer",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Install packages and configuration (backs up existing configs)
  %(prog)s install

  # Restore a previous configuration
  %(prog)s uninstall --method restore

  # Manage backups
  %(prog)s backup list
  %(prog)s backup create
  %(prog)s backup restore --index 1 --delete
            """,
        )

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        # Long form only; subcommands use -v for --verbose
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show nibras-shell version and exit",
        )

    @staticmethod
    def _add_common_options(
        parser: argparse.ArgumentParser, *, yes: bool = True
    ) -> None:
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Show debug output on the console",
        )
        if yes:
            parser.add_argument(
                "-y",
                "--yes",
                action="store_true",
                help="Answer yes to every question (non-interactive)",
            )

    def _add_subcommands(self, parser: argparse.ArgumentParser) -> None:
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )
        self._add_install_command(subparsers)
        self._add_uninstall_command(subparsers)
        self._add_backup_command(subparsers)

    def _add_install_command(self, subparsers) -> None:  # noqa: ANN001
        """Add install command parser."""
        install_parser = subparsers.add_parser(
            "install",
            help="Install NibrasShell packages and configuration",
        )
        self._add_common_options(install_parser)

    def _add_uninstall_command(self, subparsers) -> None:  # noqa: ANN001
        """Add uninstall command parser."""
        uninstall_parser = subparsers.add_parser(
            "uninstall",
            help="Restore a backup or remove NibrasShell",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Methods:
  restore   Restore configuration from a backup (recommended)
  complete  Remove everything
  custom    Choose what to remove
            """,
        )
        uninstall_parser.add_argument(
            "--method",
            choices=[method.value for method in UninstallMethod],
            help="Uninstall method (asks when omitted)",
        )
        self._add_common_options(uninstall_parser)

    def _add_backup_command(self, subparsers) -> None:  # noqa: ANN001
        """Add backup command parser with list/create/restore actions."""
        backup_parser = subparsers.add_parser(
            "backup",
            help="List, create or restore configuration backups",
        )
        actions = backup_parser.add_subparsers(
            dest="backup_action", required=True, help="Backup actions"
        )

        list_parser = actions.add_parser("list", help="List backups, newest first")
        self._add_common_options(list_parser, yes=False)

        create_parser = actions.add_parser(
            "create", help="Move current configuration into a new backup"
        )
        self._add_common_options(create_parser, yes=False)

        restore_parser = actions.add_parser(
            "restore", help="Restore configuration from a backup"
        )
        restore_parser.add_argument(
            "--index",
            type=int,
            help="1-based backup number from 'backup list' (0 skips)",
        )
        restore_parser.add_argument(
            "--delete",
            action="store_true",
            help="Delete the backup after restoring it",
        )
        restore_parser.add_argument(
            "--only",
            action="append",
            choices=[managed.name for managed in MANAGED_PATHS],
            metavar="NAME",
            help="Restore only this managed path (repeatable)",
        )
        self._add_common_options(restore_parser)

"""CLI runner for nibras-shell.

Orchestrates the execution of CLI commands by routing parsed
arguments to the appropriate command handlers, and maps errors to exit
codes: 0 on success or a clean cancel, 1 on a fatal error.
"""

import sys
from argparse import Namespace
from collections.abc import Sequence

from nibras_shell import __version__
from nibras_shell.cli.commands import (
    BackupHandler,
    BaseCommandHandler,
    InstallHandler,
    UninstallHandler,
)
from nibras_shell.cli.parser import CLIParser
from nibras_shell.config import ConfigManager
from nibras_shell.config.schemas import SchemaValidationError
from nibras_shell.core.locking import LockManager
from nibras_shell.core.prompts import Prompter
from nibras_shell.core.system import ensure_not_root
from nibras_shell.exceptions import InstallCancelledError, NibrasShellError
from nibras_shell.logger import (
    get_logger,
    set_console_level,
    update_logger_from_config,
)

logger = get_logger(__name__)


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(
        self,
        argv: Sequence[str] | None = None,
        config_manager: ConfigManager | None = None,
        prompter: Prompter | None = None,
    ) -> None:
        """Initialize CLI runner with shared dependencies.

        Args:
            argv: Arguments to parse, defaults to ``sys.argv[1:]``
            config_manager: Configuration facade, created when omitted
            prompter: Prompter injected into every handler (tests)

        """
        self.argv = argv
        self.config_manager = config_manager or ConfigManager()
        self.global_config = self.config_manager.load_global_config()
        self.prompter = prompter
        update_logger_from_config()
        self._init_command_handlers()

    def _init_command_handlers(self) -> None:
        self.command_handlers: dict[str, BaseCommandHandler] = {
            "install": InstallHandler(self.config_manager, self.prompter),
            "uninstall": UninstallHandler(self.config_manager, self.prompter),
            "backup": BackupHandler(self.config_manager, self.prompter),
        }

    async def run(self) -> None:
        """Run the CLI application.

        Raises:
            SystemExit: With status 1 on a fatal error or interrupt

        """
        try:
            args = CLIParser(self.global_config).parse_args(self.argv)

            if getattr(args, "version", False):
                print(__version__)
                return

            if not args.command:
                print("No command specified. Use --help.")
                sys.exit(1)

            ensure_not_root()
            async with LockManager(self.config_manager.lock_file):
                await self._execute_command(args)

        except KeyboardInterrupt:
            print("\nOperation cancelled by user")
            sys.exit(1)
        except InstallCancelledError as e:
            logger.info("%s", e)
        except (NibrasShellError, SchemaValidationError) as e:
            logger.error("%s", e)
            sys.exit(1)

    async def _execute_command(self, args: Namespace) -> None:
        handler = self.command_handlers.get(args.command)
        if handler is None:
            print(f"Unknown command: {args.command}")
            sys.exit(1)

        if getattr(args, "verbose", False):
            set_console_level("DEBUG")
        try:
            await handler.execute(args)
        finally:
            if getattr(args, "verbose", False):
                set_console_level(self.global_config["console_log_level"])

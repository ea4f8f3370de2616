"""Uninstall command handler."""

from argparse import Namespace

from nibras_shell.core.workflows import UninstallMethod, UninstallWorkflow
from nibras_shell.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class UninstallHandler(BaseCommandHandler):
    """Runs the uninstall workflow."""

    async def execute(self, args: Namespace) -> None:
        """Execute the uninstall command."""
        method = UninstallMethod(args.method) if args.method else None
        workflow = UninstallWorkflow(
            self.global_config,
            self.config_manager.load_profile(),
            self.get_prompter(args),
        )
        await workflow.run(method)

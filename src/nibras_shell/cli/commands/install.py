"""Install command handler."""

from argparse import Namespace

from nibras_shell.core.workflows import InstallWorkflow
from nibras_shell.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class InstallHandler(BaseCommandHandler):
    """Runs the install workflow."""

    async def execute(self, args: Namespace) -> None:
        """Execute the install command."""
        self._ensure_directories()
        workflow = InstallWorkflow(
            self.global_config,
            self.config_manager.load_profile(),
            self.get_prompter(args),
        )
        report = await workflow.run()
        for step in report.failed_steps:
            logger.warning("Step %s failed: %s", step.name, step.detail)

"""Base command handler for nibras-shell CLI commands.

This module provides the abstract base class that all command handlers
inherit from, ensuring consistent interface and shared functionality
across commands.
"""

from abc import ABC, abstractmethod
from argparse import Namespace

from nibras_shell.config import ConfigManager
from nibras_shell.core.prompts import ConsolePrompter, Prompter, ScriptedPrompter
from nibras_shell.logger import get_logger

logger = get_logger(__name__)


class BaseCommandHandler(ABC):
    """Abstract base class for all command handlers.

    Usage:
        handler = ConcreteHandler(config_manager=ConfigManager())
        await handler.execute(args)

    Tests inject a ``prompter`` so no handler reads stdin.
    """

    def __init__(
        self,
        config_manager: ConfigManager,
        prompter: Prompter | None = None,
    ) -> None:
        """Initialize the command handler with shared dependencies.

        Args:
            config_manager: Configuration management instance
            prompter: Optional prompter overriding the console/``--yes``
                choice

        """
        self.config_manager = config_manager
        self.global_config = config_manager.load_global_config()
        self._prompter = prompter

    @abstractmethod
    async def execute(self, args: Namespace) -> None:
        """Execute the command with the given arguments.

        This method must be implemented by all concrete command handlers.
        """

    def get_prompter(self, args: Namespace) -> Prompter:
        """Return the injected prompter, or one matching ``--yes``."""
        if self._prompter is not None:
            return self._prompter
        if getattr(args, "yes", False):
            return ScriptedPrompter.always_yes()
        return ConsolePrompter()

    def _ensure_directories(self) -> None:
        """Ensure required directories exist based on global config."""
        self.config_manager.ensure_directories_from_config(self.global_config)

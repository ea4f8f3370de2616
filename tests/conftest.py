"""Pytest configuration and fixtures for nibras-shell tests."""

import logging
from pathlib import Path

import pytest

from nibras_shell.config import ProfileLoader
from nibras_shell.core.process import CommandResult
from nibras_shell.domain.types import (
    DirectoryConfig,
    GlobalConfig,
    InstallConfig,
    Profile,
)


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("nibras_shell"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


class FakeRunner:
    """Stand-in for ``run_command`` that records calls.

    Every command succeeds unless a rule registered with ``on`` matches
    its leading arguments; later rules win.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self._rules: list[tuple[tuple[str, ...], CommandResult]] = []

    def on(self, *prefix: str, returncode: int = 0, timed_out: bool = False) -> None:
        self._rules.insert(
            0, (prefix, CommandResult(returncode, timed_out=timed_out))
        )

    async def __call__(
        self,
        cmd: list[str],
        *,
        timeout: float | None = None,
        capture: bool = True,
    ) -> CommandResult:
        self.calls.append(list(cmd))
        for prefix, result in self._rules:
            if tuple(cmd[: len(prefix)]) == prefix:
                return result
        return CommandResult(0)

    def commands(self, *prefix: str) -> list[list[str]]:
        """Return recorded calls starting with ``prefix``."""
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


@pytest.fixture
def fake_runner(monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    """Patch ``run_command`` so no external tool is ever executed."""
    runner = FakeRunner()
    monkeypatch.setattr("nibras_shell.core.process.run_command", runner)
    return runner


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Fake home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def config_root(home: Path) -> Path:
    """Fake ~/.config."""
    path = home / ".config"
    path.mkdir()
    return path


@pytest.fixture
def global_config(home: Path, config_root: Path) -> GlobalConfig:
    """Settings pointing every directory into the fake home."""
    return GlobalConfig(
        config_version="1.0.0",
        log_level="INFO",
        console_log_level="INFO",
        directory=DirectoryConfig(
            config_root=config_root,
            repo=home / "NibrasShell",
            venv=home / ".nibras-venv",
            themes=home / ".themes",
            icons=home / ".local" / "share" / "icons",
            fonts=home / ".fonts",
        ),
        install=InstallConfig(
            aur_helper="yay",
            repo_url="https://example.invalid/NibrasShell.git",
            batch_timeout=1800,
            package_timeout=600,
            keepalive_interval=60,
        ),
    )


@pytest.fixture
def profile() -> Profile:
    """The bundled install profile."""
    return ProfileLoader().load()

"""Tests for CLIRunner."""

import pytest

from nibras_shell import __version__
from nibras_shell.cli.runner import CLIRunner
from nibras_shell.core import system
from nibras_shell.core.locking import LockManager
from nibras_shell.core.prompts import ScriptedPrompter
from nibras_shell.core.workflows import install


class TestCLIRunner:
    """Test dispatch and exit codes."""

    @pytest.mark.asyncio
    async def test_version(self, config_manager, capsys):
        await CLIRunner(["--version"], config_manager).run()

        assert capsys.readouterr().out.strip() == __version__

    @pytest.mark.asyncio
    async def test_no_command(self, config_manager, capsys):
        with pytest.raises(SystemExit) as exc_info:
            await CLIRunner([], config_manager).run()

        assert exc_info.value.code == 1
        assert "No command specified" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_backup_create(self, config_manager, live_root):
        (live_root / "hypr").mkdir()
        prompter = ScriptedPrompter()

        await CLIRunner(["backup", "create"], config_manager, prompter).run()

        assert len(prompter.shown) == 1
        assert prompter.shown[0].startswith("Backup created: ")
        assert not (live_root / "hypr").exists()

    @pytest.mark.asyncio
    async def test_invalid_index_is_fatal(self, config_manager, live_root):
        (live_root / "nibras-backup-20240101-000000" / "hypr-old").mkdir(parents=True)

        with pytest.raises(SystemExit) as exc_info:
            await CLIRunner(
                ["backup", "restore", "--index", "5"],
                config_manager,
                ScriptedPrompter(),
            ).run()

        assert exc_info.value.code == 1

    @pytest.mark.asyncio
    async def test_cancelled_install_exits_cleanly(
        self, config_manager, fake_runner, monkeypatch
    ):
        monkeypatch.setattr(install, "require_tool", lambda name: name)
        prompter = ScriptedPrompter(confirms=[False])

        await CLIRunner(["install"], config_manager, prompter).run()

        assert prompter.questions == ["Do you want to continue?"]
        assert fake_runner.calls == []

    @pytest.mark.asyncio
    async def test_refuses_root(self, config_manager, monkeypatch):
        monkeypatch.setattr(system.os, "geteuid", lambda: 0)

        with pytest.raises(SystemExit) as exc_info:
            await CLIRunner(["backup", "list"], config_manager).run()

        assert exc_info.value.code == 1

    @pytest.mark.asyncio
    async def test_second_instance_is_refused(self, config_manager, live_root):
        async with LockManager(config_manager.lock_file):
            with pytest.raises(SystemExit) as exc_info:
                await CLIRunner(["backup", "list"], config_manager).run()

        assert exc_info.value.code == 1

    @pytest.mark.asyncio
    async def test_keyboard_interrupt(self, config_manager, capsys, monkeypatch):
        async def interrupted(self, args):
            raise KeyboardInterrupt

        monkeypatch.setattr(CLIRunner, "_execute_command", interrupted)

        with pytest.raises(SystemExit) as exc_info:
            await CLIRunner(["backup", "list"], config_manager).run()

        assert exc_info.value.code == 1
        assert "Operation cancelled by user" in capsys.readouterr().out

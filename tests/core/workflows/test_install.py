"""Tests for the install workflow."""

import pytest

from nibras_shell.core.prompts import ScriptedPrompter
from nibras_shell.core.workflows import InstallWorkflow, install
from nibras_shell.domain.backup import StepStatus
from nibras_shell.exceptions import (
    InstallCancelledError,
    MissingDirectoryError,
    NibrasShellError,
    PreconditionError,
)


def make_workflow(global_config, profile, home, prompter=None):
    return InstallWorkflow(
        global_config,
        profile,
        prompter or ScriptedPrompter(default=True),
        home=home,
    )


class TestInstallRun:
    """Test the full install flow with external tools faked."""

    @pytest.mark.asyncio
    async def test_backs_up_then_overlays(
        self, global_config, profile, home, repo, live_config, fake_runner
    ):
        prompter = ScriptedPrompter(confirms=[True, False])
        workflow = make_workflow(global_config, profile, home, prompter)

        report = await workflow.run()

        assert report.backup is not None
        backup = report.backup.path
        assert (backup / "hypr-old" / "hyprland.conf").read_text() == "old hyprland"
        assert (backup / "config.fish.backup").read_text() == "old fish"
        assert (live_config / "hypr" / "hyprland.conf").read_text() == "new hyprland"
        assert (live_config / "fish" / "config.fish").read_text() == "new fish"
        assert not (live_config / "hypr" / ".git").exists()
        assert (home / ".config" / "quickshell" / "shell.qml").exists()
        assert (home / ".themes" / "Nibras-Dark" / "index.theme").exists()
        assert fake_runner.commands("fc-cache")
        assert fake_runner.commands("tar") == [
            [
                "tar",
                "xf",
                str(live_config / "hypr" / "config" / "icons" / "Magma.tar.gz"),
                "-C",
                str(global_config["directory"]["icons"]),
            ]
        ]
        assert report.failed_steps == []

    @pytest.mark.asyncio
    async def test_optional_group_asks(
        self, global_config, profile, home, repo, fake_runner
    ):
        prompter = ScriptedPrompter(confirms=[True, False])

        await make_workflow(global_config, profile, home, prompter).run()

        assert prompter.questions == [
            "Do you want to continue?",
            "Do you want to install Optional applications (VS Code, Strawberry, etc.)?",
        ]

    @pytest.mark.asyncio
    async def test_declined(self, global_config, profile, home, fake_runner):
        prompter = ScriptedPrompter(confirms=[False])

        with pytest.raises(InstallCancelledError):
            await make_workflow(global_config, profile, home, prompter).run()

        assert fake_runner.calls == []

    @pytest.mark.asyncio
    async def test_missing_helper(
        self, global_config, profile, home, fake_runner, monkeypatch
    ):
        def missing(name):
            raise PreconditionError("not installed", target=name)

        monkeypatch.setattr(install, "require_tool", missing)

        with pytest.raises(PreconditionError):
            await make_workflow(global_config, profile, home).run()

        assert fake_runner.calls == []

    @pytest.mark.asyncio
    async def test_missing_repository(self, global_config, profile, home, fake_runner):
        with pytest.raises(MissingDirectoryError):
            await make_workflow(global_config, profile, home).run()

    @pytest.mark.asyncio
    async def test_sudo_failure_stops_before_packages(
        self, global_config, profile, home, repo, fake_runner
    ):
        fake_runner.on("sudo", "-v", returncode=1)

        with pytest.raises(PreconditionError):
            await make_workflow(global_config, profile, home).run()

        assert fake_runner.commands("yay") == []


class TestInstallSteps:
    """Test individual install steps."""

    @pytest.mark.asyncio
    async def test_install_packages(self, global_config, profile, home, fake_runner):
        fake_runner.on("yay", "-Qi", returncode=1)
        workflow = make_workflow(global_config, profile, home)

        report = await workflow.install_packages()

        assert "quickshell" in report.processed
        assert "strawberry" in report.processed
        assert report.failed == []
        assert len(fake_runner.commands("yay", "-S")) == 3

    @pytest.mark.asyncio
    async def test_installed_packages_unchanged(
        self, global_config, profile, home, fake_runner
    ):
        workflow = make_workflow(global_config, profile, home)

        report = await workflow.install_packages()

        assert report.processed == []
        assert "fish" in report.unchanged
        assert fake_runner.commands("yay", "-S") == []

    def test_incomplete_backup_aborts(
        self, global_config, profile, home, live_config, monkeypatch
    ):
        def broken_move(source, target):
            raise OSError("device busy")

        monkeypatch.setattr("nibras_shell.core.backup.recorder.move_path", broken_move)
        workflow = make_workflow(global_config, profile, home)

        with pytest.raises(NibrasShellError, match="hypr"):
            workflow.backup_configs()

        assert (live_config / "hypr" / "hyprland.conf").exists()

    def test_backup_of_fresh_system(self, global_config, profile, home):
        workflow = make_workflow(global_config, profile, home)

        container = workflow.backup_configs()

        assert container.entries == ()
        assert all(
            r.status is StepStatus.SKIPPED for r in workflow.recorder.last_results
        )

"""Tests for BackupRecorder: moving live configuration into containers."""

from pathlib import Path

import orjson
import pytest

from nibras_shell.constants import BACKUP_MANIFEST_FILENAME
from nibras_shell.core.backup import BackupRecorder
from nibras_shell.domain.backup import StepStatus
from nibras_shell.domain.managed import MANAGED_PATHS, get_managed_path


@pytest.fixture
def hypr_and_quickshell():
    return (get_managed_path("hypr"), get_managed_path("quickshell"))


class TestCreateBackup:
    """Test create_backup over the managed path table."""

    def test_present_path_moved_absent_path_skipped(
        self, recorder, config_root, hypr_and_quickshell, write_tree
    ):
        """hypr present with content, quickshell absent."""
        write_tree(config_root / "hypr", {"hyprland.conf": "A"})

        container = recorder.create_backup(hypr_and_quickshell)

        assert container.name == "nibras-backup-20240101-000000"
        assert container.path == config_root / container.name
        assert container.entry_names() == ["hypr"]
        assert container.entries[0].relative_path == "hypr-old"
        assert (container.path / "hypr-old" / "hyprland.conf").read_text() == "A"
        assert not (container.path / "quickshell-old").exists()
        assert not (config_root / "hypr").exists()

    def test_step_results_distinguish_skipped_from_done(
        self, recorder, config_root, hypr_and_quickshell, write_tree
    ):
        write_tree(config_root / "hypr", {"hyprland.conf": "A"})

        recorder.create_backup(hypr_and_quickshell)

        statuses = {r.name: r.status for r in recorder.last_results}
        assert statuses == {
            "hypr": StepStatus.DONE,
            "quickshell": StepStatus.SKIPPED,
        }

    def test_nothing_present_is_not_an_error(self, recorder, config_root):
        container = recorder.create_backup()

        assert container.entries == ()
        assert container.path.is_dir()
        assert all(r.status is StepStatus.SKIPPED for r in recorder.last_results)

    def test_directory_contents_preserved_exactly(
        self, recorder, config_root, write_tree, read_tree
    ):
        files = {
            "hyprland.conf": "monitor=,preferred,auto,1",
            "scripts/wall.sh": "#!/bin/sh\necho hi\n",
            "config/deep/nested/file.txt": "x" * 1000,
        }
        write_tree(config_root / "hypr", files)
        write_tree(config_root / "wofi", {"style.css": "window {}"})

        container = recorder.create_backup()

        assert read_tree(container.path / "hypr-old") == files
        assert read_tree(container.path / "wofi-old") == {"style.css": "window {}"}
        assert container.entry_names() == ["hypr", "wofi"]

    def test_entries_follow_table_order(self, recorder, config_root):
        for managed in reversed(MANAGED_PATHS):
            live = managed.resolve(config_root)
            live.parent.mkdir(parents=True, exist_ok=True)
            if managed.live_path.endswith(".fish"):
                live.write_text("fish")
            else:
                live.mkdir()

        container = recorder.create_backup()

        assert container.entry_names() == [m.name for m in MANAGED_PATHS]

    def test_fish_config_is_copied_not_moved(self, recorder, config_root):
        fish = config_root / "fish" / "config.fish"
        fish.parent.mkdir()
        fish.write_text("set -g fish_greeting")

        container = recorder.create_backup()

        assert fish.read_text() == "set -g fish_greeting"
        backup = container.path / "config.fish.backup"
        assert backup.read_text() == "set -g fish_greeting"
        assert container.entry_names() == ["fish-config"]

    def test_dangling_fish_symlink_is_skipped(self, recorder, config_root):
        fish = config_root / "fish" / "config.fish"
        fish.parent.mkdir()
        fish.symlink_to(config_root / "dotfiles" / "config.fish")

        container = recorder.create_backup()

        statuses = {r.name: r.status for r in recorder.last_results}
        assert statuses["fish-config"] is StepStatus.SKIPPED
        assert StepStatus.FAILED not in statuses.values()
        assert container.entries == ()
        assert fish.is_symlink()

    def test_same_second_gets_disambiguator(self, recorder, config_root):
        first = recorder.create_backup()
        second = recorder.create_backup()

        assert first.name == "nibras-backup-20240101-000000"
        assert second.name == "nibras-backup-20240101-000000-1"
        assert second.sequence == 1
        assert first.path.is_dir()
        assert second.path.is_dir()

    def test_creates_config_root_if_missing(self, tmp_path, clock):
        root = tmp_path / "missing" / ".config"

        container = BackupRecorder(root, clock=clock).create_backup()

        assert container.path.parent == root
        assert container.path.is_dir()

    def test_failed_move_is_reported_and_not_recorded(
        self, recorder, config_root, monkeypatch, write_tree
    ):
        write_tree(config_root / "hypr", {"a": "1"})
        write_tree(config_root / "wofi", {"b": "2"})

        def fail_for_hypr(source: Path, destination: Path) -> None:
            if source.name == "hypr":
                raise PermissionError("denied")
            source.rename(destination)

        monkeypatch.setattr(
            "nibras_shell.core.backup.recorder.move_path", fail_for_hypr
        )

        container = recorder.create_backup()

        statuses = {r.name: r.status for r in recorder.last_results}
        assert statuses["hypr"] is StepStatus.FAILED
        assert statuses["wofi"] is StepStatus.DONE
        assert container.entry_names() == ["wofi"]
        assert (config_root / "hypr" / "a").read_text() == "1"


class TestManifest:
    """Test the manifest written after the loop."""

    def test_manifest_lists_entries(self, recorder, config_root, write_tree):
        write_tree(config_root / "hypr", {"hyprland.conf": "A"})
        write_tree(config_root / "easyeffects", {"output/x.json": "{}"})

        container = recorder.create_backup()

        data = orjson.loads((container.path / BACKUP_MANIFEST_FILENAME).read_bytes())
        assert data["name"] == container.name
        assert data["entries"] == [
            {"name": "hypr", "relative_path": "hypr-old"},
            {"name": "easyeffects", "relative_path": "easyeffects-old"},
        ]
        assert data["created"].startswith("2024-01-01T00:00:00")

    def test_manifest_write_failure_keeps_container(
        self, recorder, config_root, monkeypatch, write_tree
    ):
        write_tree(config_root / "hypr", {"hyprland.conf": "A"})

        def broken_save(self, container, created_iso):
            raise OSError("disk full")

        monkeypatch.setattr(
            "nibras_shell.core.backup.recorder.BackupManifest.save", broken_save
        )

        container = recorder.create_backup()

        assert container.entry_names() == ["hypr"]
        assert not (container.path / BACKUP_MANIFEST_FILENAME).exists()

"""Fixtures for backup recorder and restore selector tests."""

from datetime import datetime
from pathlib import Path

import pytest

from nibras_shell.core.backup import BackupRecorder, RestoreSelector


def write_tree(root: Path, files: dict[str, str]) -> None:
    """Create ``files`` (relative path -> text) under ``root``."""
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)


def read_tree(root: Path) -> dict[str, str]:
    """Return every file under ``root`` as relative path -> text."""
    return {
        str(p.relative_to(root)): p.read_text()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


class FixedClock:
    """Clock returning preset datetimes in order, repeating the last."""

    def __init__(self, *moments: datetime) -> None:
        self._moments = list(moments)

    def __call__(self) -> datetime:
        if len(self._moments) > 1:
            return self._moments.pop(0)
        return self._moments[0]


@pytest.fixture
def clock() -> FixedClock:
    """Clock fixed at 2024-01-01 00:00:00."""
    return FixedClock(datetime(2024, 1, 1, 0, 0, 0))


@pytest.fixture
def recorder(config_root: Path, clock: FixedClock) -> BackupRecorder:
    """Recorder writing containers into the fake config root."""
    return BackupRecorder(config_root, clock=clock)


@pytest.fixture
def selector(config_root: Path) -> RestoreSelector:
    """Selector reading containers from the fake config root."""
    return RestoreSelector(config_root)


@pytest.fixture(name="write_tree")
def write_tree_fixture():
    """Expose ``write_tree`` to tests."""
    return write_tree


@pytest.fixture(name="read_tree")
def read_tree_fixture():
    """Expose ``read_tree`` to tests."""
    return read_tree

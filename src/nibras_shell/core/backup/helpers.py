"""Helper functions for backup container naming and filesystem moves.

This module provides utilities for:
- Building and parsing ``nibras-backup-<stamp>[-N]`` container names
- Allocating a fresh container directory
- Removing and moving live configuration paths
"""

import re
import shutil
from datetime import datetime
from pathlib import Path

from nibras_shell.constants import BACKUP_NAME_PATTERN, BACKUP_PREFIX
from nibras_shell.logger import get_logger
from nibras_shell.utils.datetime_utils import (
    format_backup_stamp,
    parse_backup_stamp,
)

logger = get_logger(__name__)

_NAME_RE = re.compile(BACKUP_NAME_PATTERN)


def container_name_for(moment: datetime, sequence: int = 0) -> str:
    """Build a container name.

    Args:
        moment: Creation time
        sequence: Disambiguator for several backups within one second

    Returns:
        e.g. ``nibras-backup-20240101-000000`` or ``...-000000-1``

    """
    name = f"{BACKUP_PREFIX}{format_backup_stamp(moment)}"
    if sequence:
        return f"{name}-{sequence}"
    return name


def parse_container_name(name: str) -> tuple[datetime, int] | None:
    """Parse a container name into its timestamp and disambiguator.

    Returns:
        ``(created, sequence)`` or None when the name is not a container

    """
    match = _NAME_RE.match(name)
    if match is None:
        return None
    try:
        created = parse_backup_stamp(match.group("stamp"))
    except ValueError:
        # Matches the digit pattern but is not a real date, e.g. month 13
        return None
    seq = match.group("seq")
    return created, int(seq) if seq else 0


def allocate_container(config_root: Path, moment: datetime) -> tuple[Path, int]:
    """Create a fresh, empty container directory under ``config_root``.

    Args:
        config_root: Directory that holds the containers
        moment: Creation time used for the name

    Returns:
        Tuple of the container path and its disambiguator

    """
    config_root.mkdir(parents=True, exist_ok=True)
    sequence = 0
    while True:
        path = config_root / container_name_for(moment, sequence)
        try:
            path.mkdir(exist_ok=False)
        except FileExistsError:
            sequence += 1
            continue
        if sequence:
            logger.debug(
                "Container name for %s taken, using suffix -%d",
                format_backup_stamp(moment),
                sequence,
            )
        return path, sequence


def path_exists(path: Path) -> bool:
    """Return True for existing paths, including dangling symlinks."""
    return path.is_symlink() or path.exists()


def remove_path(path: Path) -> bool:
    """Remove a file, symlink or directory tree.

    Args:
        path: Path to remove

    Returns:
        True if something was removed, False if the path was absent

    """
    if not path_exists(path):
        return False
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
    logger.debug("Removed %s", path)
    return True


def move_path(source: Path, destination: Path) -> None:
    """Move ``source`` to ``destination``, creating parent directories.

    Raises:
        OSError: If the move fails

    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(source), str(destination))
    logger.debug("Moved %s -> %s", source, destination)

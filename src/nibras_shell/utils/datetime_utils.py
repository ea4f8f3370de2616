"""Datetime utilities for consistent timestamp handling.

Backup container names embed a local, second-resolution timestamp; the
manifest stores the same moment as an ISO 8601 string with offset.
"""

from datetime import datetime

from nibras_shell.constants import BACKUP_TIMESTAMP_FORMAT


def get_current_datetime_local() -> datetime:
    """Get current datetime in local timezone.

    Returns:
        datetime object in local timezone.

    """
    return datetime.now().astimezone()


def format_backup_stamp(moment: datetime) -> str:
    """Format a datetime as a container stamp, e.g. ``20240101-000000``."""
    return moment.strftime(BACKUP_TIMESTAMP_FORMAT)


def parse_backup_stamp(stamp: str) -> datetime:
    """Parse a container stamp back into a naive datetime.

    Raises:
        ValueError: If the stamp does not match ``YYYYMMDD-HHMMSS``

    """
    return datetime.strptime(stamp, BACKUP_TIMESTAMP_FORMAT)  # noqa: DTZ007

"""Logging formatters for console and file output.

- PrefixConsoleFormatter: ``[INFO] message`` with a colored level label,
  the format the NibrasShell shell installers always printed
- HybridConsoleFormatter: prefix format for INFO and above, structured
  format (time, module, level) for DEBUG
"""

import logging

from nibras_shell.constants import LOG_COLORS, LOG_LABELS


class PrefixConsoleFormatter(logging.Formatter):
    """Console formatter with a severity-colored ``[LEVEL]`` prefix.

    WARNING is shortened to ``WARN``. The level name is swapped on the
    record only for the duration of ``format()``.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        use_color: bool = True,
    ) -> None:
        """Initialize the formatter.

        Args:
            fmt: Format string, expected to contain ``%(levelname)s``
            datefmt: Date format string
            use_color: Wrap the label in ANSI color codes

        """
        super().__init__(fmt, datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a short, optionally colored, label."""
        original_levelname = record.levelname
        label = LOG_LABELS.get(original_levelname, original_levelname)
        if self.use_color and original_levelname in LOG_COLORS:
            label = f"{LOG_COLORS[original_levelname]}{label}{LOG_COLORS['RESET']}"

        record.levelname = label
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class HybridConsoleFormatter(logging.Formatter):
    """Prefix format for user-facing levels, structured format for DEBUG.

    Example Output:
        INFO:     "[INFO] Backing up existing configurations..."
        WARNING:  "[WARN] Icon archive Magma.tar.gz not found, skipping..."
        DEBUG:    "12:30:45 - nibras_shell.core.process - DEBUG - Running yay"

    """

    def __init__(
        self,
        fmt: str | None = None,
        debug_fmt: str | None = None,
        datefmt: str | None = None,
        *,
        use_color: bool = True,
    ) -> None:
        """Initialize hybrid formatter.

        Args:
            fmt: Format string for INFO and above
            debug_fmt: Format string for DEBUG records
            datefmt: Date format string for timestamps
            use_color: Whether ANSI colors are emitted

        """
        super().__init__(fmt, datefmt)
        self._prefix_formatter = PrefixConsoleFormatter(
            fmt, datefmt, use_color=use_color
        )
        self._debug_formatter = PrefixConsoleFormatter(
            debug_fmt or fmt, datefmt, use_color=use_color
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record using the prefix or structured layout."""
        if record.levelno <= logging.DEBUG:
            return self._debug_formatter.format(record)
        return self._prefix_formatter.format(record)

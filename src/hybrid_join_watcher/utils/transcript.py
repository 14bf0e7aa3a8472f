"""
Transcript logging for Hybrid Join Watcher.

A run writes every diagnostic line both to stdout and to a persistent
transcript file. The transcript is a scoped resource: handlers are attached
on entry and always detached and closed on exit, including when the process
is leaving through sys.exit().
"""

import logging
import os
import sys
from typing import List, Optional

from src.hybrid_join_watcher.utils.logging_formatter import UTCTimestampFormatter

DEFAULT_FORMAT = "%(levelname)s: %(message)s"


def parse_log_level(level_config: str) -> int:
    """Resolve a pipe-separated level list to the logging level of its first entry."""
    level_name = (level_config or "INFO").split("|")[0].strip().upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        return logging.INFO
    return level


class Transcript:
    """Mirrors root logger output into a transcript file and the console."""

    def __init__(
        self,
        path: str,
        level: str = "INFO",
        log_format: str = DEFAULT_FORMAT,
        console: bool = True,
    ):
        self.path = path
        self.level = parse_log_level(level)
        self.log_format = log_format
        self.console = console
        self.handlers: List[logging.Handler] = []
        self._displaced: List[logging.Handler] = []
        self._previous_level: Optional[int] = None

    def __enter__(self) -> "Transcript":
        self.open()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def open(self) -> None:
        """Attach the transcript and console handlers to the root logger."""
        root_logger = logging.getLogger()
        # Set aside existing handlers to prevent double logging
        self._displaced = root_logger.handlers[:]
        for handler in self._displaced:
            root_logger.removeHandler(handler)

        formatter = UTCTimestampFormatter(self.log_format)

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(self.path, mode="a", encoding="utf-8")
        file_handler.setLevel(self.level)
        file_handler.setFormatter(formatter)
        self.handlers.append(file_handler)

        if self.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.level)
            console_handler.setFormatter(formatter)
            self.handlers.append(console_handler)

        for handler in self.handlers:
            root_logger.addHandler(handler)
        self._previous_level = root_logger.level
        root_logger.setLevel(self.level)

        logging.getLogger(__name__).info("Transcript started, output file is %s", self.path)

    def close(self) -> None:
        """Detach and close every handler installed by open()."""
        if not self.handlers:
            return
        root_logger = logging.getLogger()
        logging.getLogger(__name__).info("Transcript stopped, output file is %s", self.path)
        for handler in self.handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self.handlers = []
        for handler in self._displaced:
            root_logger.addHandler(handler)
        self._displaced = []
        if self._previous_level is not None:
            root_logger.setLevel(self._previous_level)

"""Log handlers for opbridge."""

import sys
from typing import Any, List

from .core import LogEntry, LogHandler
from .formatters import TextFormatter


class ConsoleHandler(LogHandler):
    """Console log handler.

    Writes to stderr by default so diagnostics never interleave with the
    operator-facing report printed on stdout.
    """

    def __init__(self, stream: Any = None):
        super().__init__()
        self.stream = stream

    def emit(self, entry: LogEntry) -> None:
        """Emit log entry to console."""
        with self._lock:
            formatter = self.formatter or TextFormatter()
            # Resolved per write so stream redirection (pytest capsys) is honored.
            stream = self.stream or sys.stderr
            stream.write(formatter.format(entry) + "\n")
            stream.flush()

    def close(self) -> None:
        """Close handler. Standard streams are only flushed."""
        with self._lock:
            if self.stream is not None:
                self.stream.flush()


class MemoryHandler(LogHandler):
    """Keeps entries in memory for inspection."""

    def __init__(self):
        super().__init__()
        self.buffer: List[LogEntry] = []

    def emit(self, entry: LogEntry) -> None:
        with self._lock:
            self.buffer.append(entry)

    def get_entries(self) -> List[LogEntry]:
        """Get a copy of the buffered entries."""
        with self._lock:
            return list(self.buffer)

    def get_messages(self) -> List[str]:
        with self._lock:
            return [entry.message for entry in self.buffer]

"""Log formatters for opbridge.

``LOG_FORMAT`` selects between them: ``text`` for operators, ``json`` for
log collectors reading one object per line.
"""

import json
import time
import traceback

from .core import LogEntry, LogFormatter


class JSONFormatter(LogFormatter):
    """JSON log formatter."""

    def format(self, entry: LogEntry) -> str:
        """Format log entry as JSON."""
        data = {
            "timestamp": self._format_timestamp(entry.timestamp),
            "level": entry.level.value,
            "logger": entry.logger_name,
            "context": entry.context.to_dict(),
        }

        if entry.exception:
            data["exception"] = {
                "type": type(entry.exception).__name__,
                "message": str(entry.exception),
                "traceback": self._get_traceback(entry.exception),
            }

        data["message"] = entry.message

        return json.dumps(data, ensure_ascii=False, default=str)

    def _format_timestamp(self, timestamp: float) -> str:
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(timestamp))
            + f".{int((timestamp % 1) * 1000000):06d}Z"
        )

    def _get_traceback(self, exception: BaseException) -> str:
        return "".join(
            traceback.format_exception(
                type(exception), exception, exception.__traceback__
            )
        )


class TextFormatter(LogFormatter):
    """Text log formatter: ``<utc time> [LEVEL] logger: message``."""

    timestamp_format = "%Y-%m-%d %H:%M:%S"

    def format(self, entry: LogEntry) -> str:
        """Format log entry."""
        line = "{} [{}] {}: {}".format(
            time.strftime(self.timestamp_format, time.gmtime(entry.timestamp)),
            entry.level.value.upper(),
            entry.logger_name,
            entry.message,
        )
        if entry.context.tx_hash:
            line += f" (tx={entry.context.tx_hash})"
        return line

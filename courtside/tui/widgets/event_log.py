"""EventLog widget - timestamped, color-coded log messages."""

from __future__ import annotations

import logging
from datetime import datetime

from rich.markup import escape
from textual.widgets import RichLog


class EventLog(RichLog):
    """Scrollable event log with timestamps and color-coded messages."""

    DEFAULT_CSS = """
    EventLog {
        width: 1fr;
        border-left: solid $accent;
        padding: 0 1;
    }
    """

    MAX_LINES = 500
    _line_count: int = 0

    def _write_line(self, message: str, style: str | None = None) -> None:
        ts = datetime.now().strftime("%H:%M:%S")
        body = escape(message)
        if style:
            body = f"[{style}]{body}[/]"
        self.write(f"[dim]{ts}[/]  {body}")
        self._line_count += 1
        self._trim()

    def log_info(self, message: str) -> None:
        self._write_line(message)

    def log_success(self, message: str) -> None:
        self._write_line(message, "green")

    def log_warning(self, message: str) -> None:
        self._write_line(message, "yellow")

    def log_error(self, message: str) -> None:
        self._write_line(message, "bold red")

    def _trim(self) -> None:
        if self._line_count > self.MAX_LINES:
            self.clear()
            self._line_count = 0


class EventLogHandler(logging.Handler):
    """Forwards log records to an EventLog widget."""

    def __init__(self, event_log: EventLog, level: int = logging.INFO) -> None:
        super().__init__(level)
        self._event_log = event_log
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                self._event_log.log_error(message)
            elif record.levelno >= logging.WARNING:
                self._event_log.log_warning(message)
            else:
                self._event_log.log_info(message)
        except Exception:
            self.handleError(record)

"""
Shroud Zones - Structured Logging

Module-scoped JSON log records for the zone loader.

Loggers are created per component and passed in explicitly. The parser never
reaches for a process-wide logger, so tests can inspect exactly what a single
parse emitted. Only the most recent `max_entries` records are kept in memory,
so a parser reused across configuration refreshes does not grow without bound.
"""

import json
from collections import deque
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional


DEFAULT_MAX_ENTRIES = 1000

_CONSOLE_COLORS = {
    "DEBUG": "\033[36m",     # Cyan
    "INFO": "\033[32m",      # Green
    "WARNING": "\033[33m",   # Yellow
}
_RESET = "\033[0m"
_BASE_FIELDS = ("timestamp", "module", "level", "message")


class LogLevel(Enum):
    """Log severity levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"


class StructuredLogger:
    """
    Structured logger scoped to one component.

    Every record carries timestamp, module, level and message, plus any
    context fields. Enum context values are stored by value so records
    stay JSON serializable.
    """

    def __init__(
        self,
        module_name: str,
        log_dir: Optional[Path] = None,
        console_output: bool = True,
        file_output: bool = True,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        """
        Args:
            module_name: Name of the component (e.g., "ZoneConfigParser")
            log_dir: Directory for JSONL log files
            console_output: Whether to print to console
            file_output: Whether to write to file
            max_entries: How many records to keep for get_entries()
        """
        self.module_name = module_name
        self.console_output = console_output
        self._entries = deque(maxlen=max_entries)
        self._log_file: Optional[Path] = None

        if log_dir and file_output:
            directory = Path(log_dir)
            directory.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self._log_file = directory / f"{module_name.lower()}_{timestamp}.jsonl"

    def _record(self, level: LogLevel, message: str, **context: Any) -> None:
        entry = {
            "timestamp": datetime.now().isoformat(),
            "module": self.module_name,
            "level": level.value,
            "message": message,
        }
        for key, value in context.items():
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, Path):
                value = str(value)
            entry[key] = value

        if self.console_output:
            color = _CONSOLE_COLORS.get(level.value, "")
            print(f"{color}[{self.module_name}] {message}{_RESET}")
            for key, value in entry.items():
                if key not in _BASE_FIELDS:
                    print(f"  {key}: {value}")

        if self._log_file:
            with open(self._log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, default=str) + "\n")

        self._entries.append(entry)

    def debug(self, message: str, **context: Any) -> None:
        self._record(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self._record(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._record(LogLevel.WARNING, message, **context)

    def log_input(self, description: str, **data: Any) -> None:
        """Log input received by the component."""
        self.debug(f"Input: {description}", **data)

    def log_output(self, description: str, **data: Any) -> None:
        """Log output produced by the component."""
        self.info(f"Output: {description}", **data)

    def log_skipped_entry(
        self,
        entry: str,
        reason: Enum,
        detail: Optional[Enum] = None,
    ) -> None:
        """Warn about a config entry that was left out, echoing its text."""
        self.warning(
            "Unable to parse shroud zone entry",
            entry=entry,
            reason=reason,
            detail=detail,
        )

    def get_entries(self, level: Optional[LogLevel] = None) -> list[dict]:
        """Get retained records, optionally filtered by level."""
        if level is None:
            return list(self._entries)
        return [e for e in self._entries if e["level"] == level.value]

    def clear_entries(self) -> None:
        self._entries.clear()

    def get_summary(self) -> dict:
        counts = {level.value: 0 for level in LogLevel}
        for entry in self._entries:
            counts[entry["level"]] += 1
        return {
            "module": self.module_name,
            "retained_entries": len(self._entries),
            "by_level": counts,
            "log_file": str(self._log_file) if self._log_file else None,
        }

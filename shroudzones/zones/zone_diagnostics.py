"""
Zone Parse Diagnostics

Errors raised by the entry decoders, and the collector that records
skipped entries so operators can find the exact malformed line.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from .zone_types import ParseFailure


class ZoneParseError(ValueError):
    """Raised by a decoder when an entry (or part of one) cannot be decoded."""

    def __init__(
        self,
        failure: ParseFailure,
        entry: str,
        detail: Optional[ParseFailure] = None,
    ):
        self.failure = failure
        self.entry = entry
        self.detail = detail
        reason = failure.description
        if detail is not None:
            reason = f"{reason} ({detail.description})"
        super().__init__(f"Unable to parse shroud zone entry, {reason}: {entry!r}")


@dataclass(frozen=True)
class ParseDiagnostic:
    """One skipped entry and why it was skipped."""
    entry: str
    failure: ParseFailure
    detail: Optional[ParseFailure] = None

    @classmethod
    def from_error(cls, error: ZoneParseError) -> "ParseDiagnostic":
        return cls(entry=error.entry, failure=error.failure, detail=error.detail)

    def to_dict(self) -> dict:
        return {
            "entry": self.entry,
            "failure": self.failure.value,
            "detail": self.detail.value if self.detail else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ParseDiagnostic":
        detail = data.get("detail")
        return cls(
            entry=data["entry"],
            failure=ParseFailure.from_string(data["failure"]),
            detail=ParseFailure.from_string(detail) if detail else None,
        )


class DiagnosticCollector:
    """
    Collects ParseDiagnostic records emitted during a parse.

    Pass one to ZoneConfigParser.parse() to receive every skipped entry.
    """

    def __init__(self):
        self._diagnostics: list[ParseDiagnostic] = []

    def record(self, diagnostic: ParseDiagnostic) -> None:
        self._diagnostics.append(diagnostic)

    @property
    def diagnostics(self) -> tuple[ParseDiagnostic, ...]:
        return tuple(self._diagnostics)

    def by_failure(self, failure: ParseFailure) -> list[ParseDiagnostic]:
        """Get diagnostics with the given failure, matching either level."""
        return [
            d for d in self._diagnostics
            if d.failure == failure or d.detail == failure
        ]

    def get_summary(self) -> dict:
        counts: dict[str, int] = {}
        for diagnostic in self._diagnostics:
            key = diagnostic.failure.value
            counts[key] = counts.get(key, 0) + 1
        return {
            "skipped_entries": len(self._diagnostics),
            "by_failure": counts,
        }

    def __iter__(self) -> Iterator[ParseDiagnostic]:
        return iter(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)

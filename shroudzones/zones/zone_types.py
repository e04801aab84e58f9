"""
Zone Parse Failure Types

Strict enumeration of the reasons a shroud zone entry can be rejected.
"""

from enum import Enum


class ParseFailure(Enum):
    """
    Why a single entry was skipped.

    Entry-level failures:
    - MISSING_SEGMENTS: fewer than three pipe-delimited segments
    - INVALID_POSITION: the position block failed to decode
    - INVALID_RADIUS: radius is not a finite number > 0
    - INVALID_MAX_DISTANCE: ejection distance is not a finite number > 0

    Position-level failures (reported as the detail of INVALID_POSITION):
    - EMPTY_POSITION, MISSING_REGION_TOKEN, INVALID_REGION_TOKEN,
      MISSING_BRACKETS, INVALID_COORDINATES, INVALID_ORIENTATION
    """
    MISSING_SEGMENTS = "missing_segments"
    INVALID_POSITION = "invalid_position"
    INVALID_RADIUS = "invalid_radius"
    INVALID_MAX_DISTANCE = "invalid_max_distance"

    EMPTY_POSITION = "empty_position"
    MISSING_REGION_TOKEN = "missing_region_token"
    INVALID_REGION_TOKEN = "invalid_region_token"
    MISSING_BRACKETS = "missing_brackets"
    INVALID_COORDINATES = "invalid_coordinates"
    INVALID_ORIENTATION = "invalid_orientation"

    @property
    def is_position_failure(self) -> bool:
        """True for the failures subsumed by INVALID_POSITION."""
        return self in _POSITION_FAILURES

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def from_string(cls, value: str) -> "ParseFailure":
        """Parse failure kind from string (case-insensitive)."""
        normalized = value.lower().strip()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Invalid parse failure: '{value}'. "
            f"Valid failures: {[m.value for m in cls]}"
        )


_POSITION_FAILURES = frozenset({
    ParseFailure.EMPTY_POSITION,
    ParseFailure.MISSING_REGION_TOKEN,
    ParseFailure.INVALID_REGION_TOKEN,
    ParseFailure.MISSING_BRACKETS,
    ParseFailure.INVALID_COORDINATES,
    ParseFailure.INVALID_ORIENTATION,
})

_DESCRIPTIONS = {
    ParseFailure.MISSING_SEGMENTS: "missing segments",
    ParseFailure.INVALID_POSITION: "invalid position",
    ParseFailure.INVALID_RADIUS: "invalid radius",
    ParseFailure.INVALID_MAX_DISTANCE: "invalid ejection distance",
    ParseFailure.EMPTY_POSITION: "empty position",
    ParseFailure.MISSING_REGION_TOKEN: "missing region token",
    ParseFailure.INVALID_REGION_TOKEN: "invalid region token",
    ParseFailure.MISSING_BRACKETS: "missing coordinate brackets",
    ParseFailure.INVALID_COORDINATES: "invalid coordinates",
    ParseFailure.INVALID_ORIENTATION: "invalid orientation",
}

"""
Zone Config Parser

Turns the raw shroud zone property string into a ZoneSet.

Entry format (one per line, or separated by ';'):

    <cell> [<x> <y> <z>] <qx> <qy> <qz> <qw>|<radius>|<max_distance>

    0xD2A80024 [100.684067 87.626068 20.004999] 0.015540 0.000000 0.000000 0.999879|10|40

<cell> is a 0x-prefixed hex or plain decimal 32-bit id. Malformed entries are
skipped with a warning; the rest of the configuration still loads.
"""

import math
import string
from typing import Optional

from .zone_data import MAX_CELL_ID, Position, Quaternion, Vector3, Zone, ZoneSet
from .zone_diagnostics import DiagnosticCollector, ParseDiagnostic, ZoneParseError
from .zone_types import ParseFailure
from ..logging_utils import StructuredLogger


_HEX_DIGITS = frozenset(string.hexdigits)
_DECIMAL_DIGITS = frozenset(string.digits)


# ========================================
# NUMERIC DECODERS
# ========================================

def parse_float(token: str) -> float:
    """
    Parse a finite, locale-independent float.

    Accepts an optional sign, '.' as the decimal point and an optional
    exponent. Rejects NaN/Infinity spellings, digit-group underscores and
    values that overflow to infinity.
    """
    text = token.strip()
    if not text or not text.isascii() or "_" in text:
        raise ValueError(f"Not a number: {token!r}")

    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Not a finite number: {token!r}")
    return value


def parse_cell_id(token: str) -> int:
    """Parse a 32-bit cell id, either `0x`-prefixed hex or plain decimal."""
    if token.startswith("0x"):
        digits = token[2:]
        if not digits or any(c not in _HEX_DIGITS for c in digits):
            raise ValueError(f"Invalid hex cell id: {token!r}")
        value = int(digits, 16)
    else:
        if not token or any(c not in _DECIMAL_DIGITS for c in token):
            raise ValueError(f"Invalid decimal cell id: {token!r}")
        value = int(token)

    if value > MAX_CELL_ID:
        raise ValueError(f"Cell id exceeds 32 bits: {token!r}")
    return value


def _parse_positive(token: str) -> Optional[float]:
    try:
        value = parse_float(token)
    except ValueError:
        return None
    return value if value > 0 else None


def _split_tokens(text: str, separator: str = " ") -> list[str]:
    """Split on a separator, trimming pieces and dropping empty ones."""
    return [piece.strip() for piece in text.split(separator) if piece.strip()]


# ========================================
# PIPELINE STAGES
# ========================================

def split_entries(raw: Optional[str]) -> list[str]:
    """Break raw input into trimmed, non-empty entry candidates, in order."""
    if raw is None or not raw.strip():
        return []
    return _split_tokens(raw.replace(";", "\n"), "\n")


def decode_position(segment: str) -> Position:
    """
    Decode `<cell> [<x> <y> <z>] <qx> <qy> <qz> <qw>` into a Position.

    Tokens after the fourth orientation component are ignored.

    Raises:
        ZoneParseError: with the position-level failure that stopped decoding
    """
    trimmed = segment.strip()
    if not trimmed:
        raise ZoneParseError(ParseFailure.EMPTY_POSITION, segment)

    first_space = trimmed.find(" ")
    if first_space <= 0:
        raise ZoneParseError(ParseFailure.MISSING_REGION_TOKEN, segment)

    try:
        cell_id = parse_cell_id(trimmed[:first_space])
    except ValueError as e:
        raise ZoneParseError(ParseFailure.INVALID_REGION_TOKEN, segment) from e

    start_bracket = trimmed.find("[", first_space)
    if start_bracket < 0:
        raise ZoneParseError(ParseFailure.MISSING_BRACKETS, segment)
    end_bracket = trimmed.find("]", start_bracket + 1)
    if end_bracket < 0:
        raise ZoneParseError(ParseFailure.MISSING_BRACKETS, segment)

    coordinate_tokens = _split_tokens(trimmed[start_bracket + 1:end_bracket])
    if len(coordinate_tokens) != 3:
        raise ZoneParseError(ParseFailure.INVALID_COORDINATES, segment)
    try:
        x, y, z = (parse_float(t) for t in coordinate_tokens)
    except ValueError as e:
        raise ZoneParseError(ParseFailure.INVALID_COORDINATES, segment) from e

    rotation_tokens = _split_tokens(trimmed[end_bracket + 1:])
    if len(rotation_tokens) < 4:
        raise ZoneParseError(ParseFailure.INVALID_ORIENTATION, segment)
    try:
        qx, qy, qz, qw = (parse_float(t) for t in rotation_tokens[:4])
    except ValueError as e:
        raise ZoneParseError(ParseFailure.INVALID_ORIENTATION, segment) from e

    return Position(
        cell_id=cell_id,
        coordinates=Vector3(x, y, z),
        orientation=Quaternion(qx, qy, qz, qw),
    )


def decode_entry(line: str) -> Zone:
    """
    Decode one `position|radius|max_distance` entry into a Zone.

    Raises:
        ZoneParseError: MISSING_SEGMENTS, INVALID_POSITION (with the position
            failure as detail), INVALID_RADIUS or INVALID_MAX_DISTANCE
    """
    segments = _split_tokens(line, "|")
    if len(segments) < 3:
        raise ZoneParseError(ParseFailure.MISSING_SEGMENTS, line)

    try:
        center = decode_position(segments[0])
    except ZoneParseError as e:
        raise ZoneParseError(ParseFailure.INVALID_POSITION, line, detail=e.failure) from e

    radius = _parse_positive(segments[1])
    if radius is None:
        raise ZoneParseError(ParseFailure.INVALID_RADIUS, line)

    max_distance = _parse_positive(segments[2])
    if max_distance is None:
        raise ZoneParseError(ParseFailure.INVALID_MAX_DISTANCE, line)

    return Zone(center=center, radius=radius, max_distance=max_distance)


# ========================================
# PARSER
# ========================================

class ZoneConfigParser:
    """
    Parses shroud zone configuration text.

    parse() never raises: each malformed entry is logged as a warning,
    recorded in the optional DiagnosticCollector and left out of the result.
    """

    MODULE_NAME = "ZoneConfigParser"

    def __init__(self, logger: Optional[StructuredLogger] = None):
        self.logger = logger or StructuredLogger(self.MODULE_NAME)

    def parse(
        self,
        raw: Optional[str],
        diagnostics: Optional[DiagnosticCollector] = None,
    ) -> ZoneSet:
        """
        Parse raw configuration text.

        Args:
            raw: Property value; None or blank yields an empty ZoneSet
            diagnostics: Receives one ParseDiagnostic per skipped entry

        Returns:
            ZoneSet of every entry that decoded, in input order
        """
        entries = split_entries(raw)
        self.logger.log_input("shroud zone entries", candidates=len(entries))

        zones = []
        skipped = 0
        for line in entries:
            try:
                zones.append(decode_entry(line))
            except ZoneParseError as e:
                skipped += 1
                self.logger.log_skipped_entry(line, e.failure, e.detail)
                if diagnostics is not None:
                    diagnostics.record(ParseDiagnostic.from_error(e))

        zone_set = ZoneSet(tuple(zones))
        self.logger.log_output(
            "shroud zones loaded",
            zone_count=len(zone_set),
            skipped=skipped,
        )
        return zone_set


def parse_zones(
    raw: Optional[str],
    diagnostics: Optional[DiagnosticCollector] = None,
    logger: Optional[StructuredLogger] = None,
) -> ZoneSet:
    """Parse with a fresh ZoneConfigParser."""
    return ZoneConfigParser(logger=logger).parse(raw, diagnostics=diagnostics)

"""
Shroud Zone System

Circular zones anchored at a cell position. An occupant that comes within
`radius` of the center is ejected out to `max_distance`.

Zones are loaded from a single property string:

    0xD2A80024 [100.684067 87.626068 20.004999] 0.015540 0.000000 0.000000 0.999879|10|40

Usage:
    from shroudzones.zones import ShroudZoneConfig, DiagnosticCollector

    config = ShroudZoneConfig.from_properties(store)
    for zone in config.zones.by_region(0xD2A8):
        ...

    # Or parse text directly
    collector = DiagnosticCollector()
    zones = parse_zones(raw, diagnostics=collector)
"""

from .zone_types import ParseFailure
from .zone_data import Vector3, Quaternion, Position, Zone, ZoneSet
from .zone_diagnostics import ZoneParseError, ParseDiagnostic, DiagnosticCollector
from .zone_parser import (
    ZoneConfigParser,
    parse_zones,
    split_entries,
    decode_entry,
    decode_position,
    parse_float,
    parse_cell_id,
)
from .zone_config import ZoneConfig, ShroudZoneConfig, PROPERTY_KEY

__all__ = [
    # Types
    "ParseFailure",
    # Geometry
    "Vector3",
    "Quaternion",
    "Position",
    # Data structures
    "Zone",
    "ZoneSet",
    # Diagnostics
    "ZoneParseError",
    "ParseDiagnostic",
    "DiagnosticCollector",
    # Parser
    "ZoneConfigParser",
    "parse_zones",
    "split_entries",
    "decode_entry",
    "decode_position",
    "parse_float",
    "parse_cell_id",
    # Config
    "ZoneConfig",
    "ShroudZoneConfig",
    "PROPERTY_KEY",
]

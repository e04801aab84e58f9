#==============================================================================
# Shroud Zones - Package Initialization
#==============================================================================
# File: __init__.py
# Description: Package initialization for the shroud zone config loader
#==============================================================================

"""
Shroud Zones: configuration loader for circular ejection zones.

Decodes the `shroud_zone_entries` server property into validated, immutable
zone records, skipping malformed entries instead of rejecting the whole list.
"""

__version__ = "0.1.0"

from .logging_utils import StructuredLogger, LogLevel
from .properties import PropertyStore
from .zones import ShroudZoneConfig, ZoneConfigParser, ZoneSet, Zone, parse_zones

__all__ = [
    "StructuredLogger",
    "LogLevel",
    "PropertyStore",
    "ShroudZoneConfig",
    "ZoneConfigParser",
    "ZoneSet",
    "Zone",
    "parse_zones",
]

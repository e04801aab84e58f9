"""
Zone Configuration

Integration between the zone parser and the server property store.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .zone_data import ZoneSet
from .zone_diagnostics import DiagnosticCollector, ParseDiagnostic
from .zone_parser import ZoneConfigParser
from ..logging_utils import StructuredLogger
from ..properties import PropertyStore


PROPERTY_KEY = "shroud_zone_entries"


@dataclass
class ZoneConfig:
    """
    Zone loading settings.

    Controls where the property file lives, which key holds the entries,
    and where parse logs go.
    """
    # Properties file path (relative to project root or absolute)
    properties_path: str = "configs/server.properties.yaml"
    property_key: str = PROPERTY_KEY

    # Logging
    log_dir: Optional[str] = None
    console_logging: bool = True

    def get_properties_path(self, base_dir: Optional[Path] = None) -> Path:
        """Get absolute path to the properties file."""
        path = Path(self.properties_path)
        if path.is_absolute():
            return path
        if base_dir:
            return base_dir / path
        return Path.cwd() / path

    def create_logger(self, module_name: str) -> StructuredLogger:
        return StructuredLogger(
            module_name,
            log_dir=Path(self.log_dir) if self.log_dir else None,
            console_output=self.console_logging,
        )

    def to_dict(self) -> dict:
        return {
            "properties_path": self.properties_path,
            "property_key": self.property_key,
            "log_dir": self.log_dir,
            "console_logging": self.console_logging,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ZoneConfig":
        return cls(
            properties_path=data.get("properties_path", "configs/server.properties.yaml"),
            property_key=data.get("property_key", PROPERTY_KEY),
            log_dir=data.get("log_dir"),
            console_logging=data.get("console_logging", True),
        )


@dataclass(frozen=True)
class ShroudZoneConfig:
    """
    Parsed shroud zone configuration.

    Built wholesale from the property value on every refresh; nothing
    carries over from a previous load.
    """
    zones: ZoneSet
    diagnostics: tuple[ParseDiagnostic, ...] = field(default_factory=tuple)

    @classmethod
    def from_string(
        cls,
        raw: Optional[str],
        logger: Optional[StructuredLogger] = None,
    ) -> "ShroudZoneConfig":
        collector = DiagnosticCollector()
        zones = ZoneConfigParser(logger=logger).parse(raw, diagnostics=collector)
        return cls(zones=zones, diagnostics=collector.diagnostics)

    @classmethod
    def from_properties(
        cls,
        store: PropertyStore,
        key: str = PROPERTY_KEY,
        logger: Optional[StructuredLogger] = None,
    ) -> "ShroudZoneConfig":
        """Parse the entries stored under `key`; an unset key loads no zones."""
        return cls.from_string(store.get_string(key, ""), logger=logger)

    @classmethod
    def load(
        cls,
        settings: ZoneConfig,
        base_dir: Optional[Path] = None,
    ) -> "ShroudZoneConfig":
        """
        Load the properties file named by settings and parse its entries.

        Raises:
            FileNotFoundError: if the properties file does not exist
        """
        store = PropertyStore.from_file(settings.get_properties_path(base_dir))
        logger = settings.create_logger(ZoneConfigParser.MODULE_NAME)
        return cls.from_properties(store, key=settings.property_key, logger=logger)

    @property
    def skipped_count(self) -> int:
        return len(self.diagnostics)

    def to_dict(self) -> dict:
        return {
            "zone_count": len(self.zones),
            "skipped_count": self.skipped_count,
            "regions": [f"0x{r:04X}" for r in self.zones.regions],
            "skipped": [d.to_dict() for d in self.diagnostics],
        }

"""
Zone Data Structures

Immutable data classes representing shroud zones and their anchor positions.
Everything here is constructed once per parse and never mutated.
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

import numpy as np


MAX_CELL_ID = 0xFFFFFFFF


def _format_float(value: float) -> str:
    return repr(float(value))


@dataclass(frozen=True)
class Vector3:
    """Immutable 3D vector."""
    x: float
    y: float
    z: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: dict) -> "Vector3":
        return cls(
            x=float(data.get("x", 0)),
            y=float(data.get("y", 0)),
            z=float(data.get("z", 0)),
        )

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def distance_squared(self, other: "Vector3") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz


@dataclass(frozen=True)
class Quaternion:
    """Immutable orientation quaternion. Stored exactly as given, never normalized."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def identity(cls) -> "Quaternion":
        return cls(0.0, 0.0, 0.0, 1.0)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z, "w": self.w}

    @classmethod
    def from_dict(cls, data: dict) -> "Quaternion":
        return cls(
            x=float(data.get("x", 0)),
            y=float(data.get("y", 0)),
            z=float(data.get("z", 0)),
            w=float(data.get("w", 1)),
        )


@dataclass(frozen=True)
class Position:
    """
    Spatial anchor: a 32-bit cell id plus coordinates and orientation.

    The top 16 bits of the cell id name the region (landblock) the
    position belongs to; the low 16 bits name the cell inside it.
    """
    cell_id: int
    coordinates: Vector3
    orientation: Quaternion = field(default_factory=Quaternion.identity)

    def __post_init__(self):
        if isinstance(self.cell_id, bool) or not isinstance(self.cell_id, int):
            raise ValueError(f"cell_id must be an integer, got {self.cell_id!r}")
        if not 0 <= self.cell_id <= MAX_CELL_ID:
            raise ValueError(f"cell_id out of 32-bit range: {self.cell_id}")

    @property
    def region_id(self) -> int:
        return self.cell_id >> 16

    def to_loc_string(self) -> str:
        """
        Format as `0xCCCCCCCC [x y z] qx qy qz qw`, the entry position block.

        Floats use their shortest round-trip form, so parsing the result
        gives back exactly the same values.
        """
        c = self.coordinates
        q = self.orientation
        coords = " ".join(_format_float(v) for v in (c.x, c.y, c.z))
        rotation = " ".join(_format_float(v) for v in (q.x, q.y, q.z, q.w))
        return f"0x{self.cell_id:08X} [{coords}] {rotation}"

    def to_dict(self) -> dict:
        return {
            "cell_id": self.cell_id,
            "region_id": self.region_id,
            "coordinates": self.coordinates.to_dict(),
            "orientation": self.orientation.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Position":
        cell_id = data.get("cell_id", 0)
        if isinstance(cell_id, str):
            cell_id = int(cell_id, 0)
        return cls(
            cell_id=cell_id,
            coordinates=Vector3.from_dict(data.get("coordinates", {})),
            orientation=Quaternion.from_dict(data.get("orientation", {})),
        )


@dataclass(frozen=True)
class Zone:
    """
    A circular shroud zone.

    - center: Anchor position and orientation
    - radius: Trigger distance
    - max_distance: Distance an occupant is ejected to
    - radius_squared: Cached radius * radius for distance checks
    """
    center: Position
    radius: float
    max_distance: float
    radius_squared: float = field(init=False)

    def __post_init__(self):
        radius = float(self.radius)
        max_distance = float(self.max_distance)
        if not math.isfinite(radius) or radius <= 0:
            raise ValueError(f"radius must be finite and > 0, got {self.radius!r}")
        if not math.isfinite(max_distance) or max_distance <= 0:
            raise ValueError(f"max_distance must be finite and > 0, got {self.max_distance!r}")

        object.__setattr__(self, "radius", radius)
        object.__setattr__(self, "max_distance", max_distance)
        object.__setattr__(self, "radius_squared", radius * radius)

    @property
    def region_id(self) -> int:
        return self.center.region_id

    def contains(self, point: Vector3) -> bool:
        """Check if a point lies within the trigger radius."""
        return self.center.coordinates.distance_squared(point) <= self.radius_squared

    def to_entry(self) -> str:
        """Serialize back to a `position|radius|max_distance` config entry."""
        return (
            f"{self.center.to_loc_string()}"
            f"|{_format_float(self.radius)}|{_format_float(self.max_distance)}"
        )

    def to_dict(self) -> dict:
        return {
            "center": self.center.to_dict(),
            "region_id": self.region_id,
            "radius": self.radius,
            "radius_squared": self.radius_squared,
            "max_distance": self.max_distance,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Zone":
        return cls(
            center=Position.from_dict(data["center"]),
            radius=float(data["radius"]),
            max_distance=float(data["max_distance"]),
        )


@dataclass(frozen=True)
class ZoneSet:
    """
    Ordered, immutable collection of parsed zones.

    Iteration order is input order. Region queries keep that order so
    callers can rely on first-match-wins for overlapping zones.
    """
    zones: tuple[Zone, ...] = ()

    _by_region: dict = field(init=False, repr=False, compare=False)
    _region_arrays: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        zones = tuple(self.zones)
        object.__setattr__(self, "zones", zones)

        by_region: dict[int, list[int]] = {}
        for index, zone in enumerate(zones):
            by_region.setdefault(zone.region_id, []).append(index)

        region_arrays = {}
        for region_id, indices in by_region.items():
            centers = np.array(
                [[zones[i].center.coordinates.x,
                  zones[i].center.coordinates.y,
                  zones[i].center.coordinates.z] for i in indices],
                dtype=np.float64,
            )
            radii_squared = np.array([zones[i].radius_squared for i in indices], dtype=np.float64)
            region_arrays[region_id] = (centers, radii_squared)

        object.__setattr__(self, "_by_region", {r: tuple(i) for r, i in by_region.items()})
        object.__setattr__(self, "_region_arrays", region_arrays)

    @property
    def regions(self) -> tuple[int, ...]:
        """Region ids in the order they first appear."""
        return tuple(self._by_region)

    def by_region(self, region_id: int) -> tuple[Zone, ...]:
        """Get all zones in a region, in input order."""
        return tuple(self.zones[i] for i in self._by_region.get(region_id, ()))

    def zones_at(self, region_id: int, point: Vector3) -> tuple[Zone, ...]:
        """Get every zone in a region whose radius contains the point."""
        indices = self._by_region.get(region_id)
        if not indices:
            return ()

        centers, radii_squared = self._region_arrays[region_id]
        deltas = centers - point.to_array()
        inside = np.sum(deltas * deltas, axis=1) <= radii_squared
        return tuple(self.zones[indices[i]] for i in np.flatnonzero(inside))

    def find_zone(self, region_id: int, point: Vector3) -> Optional[Zone]:
        """Get the first zone (input order) containing the point."""
        matches = self.zones_at(region_id, point)
        return matches[0] if matches else None

    def to_dict(self) -> dict:
        return {
            "zone_count": len(self.zones),
            "regions": [f"0x{r:04X}" for r in self.regions],
            "zones": [z.to_dict() for z in self.zones],
        }

    def __iter__(self) -> Iterator[Zone]:
        return iter(self.zones)

    def __len__(self) -> int:
        return len(self.zones)

    def __getitem__(self, index: Union[int, slice]) -> Union[Zone, "ZoneSet"]:
        if isinstance(index, slice):
            return ZoneSet(self.zones[index])
        return self.zones[index]

"""
Shroud Zone Data Tests

Value-object invariants and ZoneSet region queries.
"""

import sys
from pathlib import Path
from dataclasses import FrozenInstanceError

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shroudzones.logging_utils import StructuredLogger
from shroudzones.zones import (
    Position,
    Quaternion,
    Vector3,
    Zone,
    ZoneSet,
    parse_zones,
)


def make_zone(cell_id: int, x: float, y: float, radius: float = 10.0) -> Zone:
    return Zone(
        center=Position(cell_id, Vector3(x, y, 0.0)),
        radius=radius,
        max_distance=radius * 4,
    )


# ========================================
# VALUE OBJECTS
# ========================================

def test_zone_derives_radius_squared_and_region() -> None:
    zone = make_zone(0xD2A80024, 0, 0, radius=3)
    assert zone.radius == 3.0
    assert isinstance(zone.radius, float)
    assert zone.radius_squared == 9.0
    assert zone.region_id == 0xD2A8


@pytest.mark.parametrize("radius, max_distance", [
    (0, 40), (-1, 40), (float("nan"), 40), (float("inf"), 40),
    (10, 0), (10, -5), (10, float("nan")),
])
def test_zone_rejects_invalid_distances(radius, max_distance) -> None:
    with pytest.raises(ValueError):
        Zone(Position(1, Vector3(0, 0, 0)), radius=radius, max_distance=max_distance)


@pytest.mark.parametrize("cell_id", [-1, 0x100000000, "0x1", 1.5, True])
def test_position_rejects_invalid_cell_id(cell_id) -> None:
    with pytest.raises(ValueError):
        Position(cell_id, Vector3(0, 0, 0))


def test_position_defaults_to_identity_orientation() -> None:
    position = Position(0x00010001, Vector3(1, 2, 3))
    assert position.orientation == Quaternion.identity()
    assert position.region_id == 0x0001


def test_value_objects_are_immutable() -> None:
    zone = make_zone(0xD2A80024, 0, 0)
    with pytest.raises(FrozenInstanceError):
        zone.radius = 20.0
    with pytest.raises(FrozenInstanceError):
        zone.center.cell_id = 0


def test_contains_is_inclusive_at_radius() -> None:
    zone = make_zone(0xD2A80024, 0, 0, radius=10)
    assert zone.contains(Vector3(10, 0, 0)), "Point exactly on the radius should be inside"
    assert zone.contains(Vector3(3, 4, 0))
    assert not zone.contains(Vector3(10, 0.5, 0))
    assert not zone.contains(Vector3(0, 0, 10.01)), "Distance check is three dimensional"


@pytest.mark.parametrize("coordinates, orientation, radius", [
    (Vector3(100.684067, 87.626068, 20.004999), Quaternion(0.01554, 0.0, 0.0, 0.999879), 10.0),
    (Vector3(1e-7, 2, 3), Quaternion(4.9e-7, 0, 0, 1), 10.0),
    (Vector3(-0.1234567891234, 1e20, 0.3), Quaternion(0.1, 0.2, 0.3, 0.9), 0.123456789),
])
def test_to_entry_parses_back(coordinates, orientation, radius) -> None:
    """An entry written by to_entry() decodes to exactly the same zone."""
    zone = Zone(
        center=Position(0xD2A80024, coordinates, orientation),
        radius=radius,
        max_distance=40.0,
    )
    entry = zone.to_entry()
    assert entry.startswith("0xD2A80024 [")

    parsed = parse_zones(entry, logger=StructuredLogger("Test", console_output=False))
    assert len(parsed) == 1
    assert parsed[0] == zone, f"{entry!r} decoded to {parsed[0]!r}"


def test_zone_dict_round_trip() -> None:
    zone = make_zone(0x01D9001C, 12.5, -30.0, radius=5)
    data = zone.to_dict()
    assert data["region_id"] == 0x01D9
    assert data["radius_squared"] == 25.0
    assert Zone.from_dict(data) == zone


def test_position_from_dict_accepts_hex_string() -> None:
    position = Position.from_dict({"cell_id": "0xD2A80024", "coordinates": {"x": 1}})
    assert position.cell_id == 0xD2A80024
    assert position.coordinates == Vector3(1.0, 0.0, 0.0)


# ========================================
# ZONE SET
# ========================================

def test_zone_set_groups_by_region_in_input_order() -> None:
    """
    Validates:
        - regions are listed in first-seen order
        - by_region keeps input order inside each region
    """
    a = make_zone(0xD2A80024, 0, 0)
    b = make_zone(0x01D9001C, 5, 5)
    c = make_zone(0xD2A80001, 50, 50)
    zones = ZoneSet((a, b, c))

    assert zones.regions == (0xD2A8, 0x01D9)
    assert zones.by_region(0xD2A8) == (a, c)
    assert zones.by_region(0x01D9) == (b,)
    assert zones.by_region(0x1234) == ()
    assert list(zones) == [a, b, c]


def test_find_zone_is_first_match() -> None:
    """Overlapping zones resolve to the earliest one in input order."""
    first = make_zone(0xD2A80024, 0, 0, radius=10)
    second = make_zone(0xD2A80024, 2, 0, radius=10)
    far = make_zone(0xD2A80024, 100, 100, radius=10)
    zones = ZoneSet([far, first, second])

    point = Vector3(1, 0, 0)
    assert zones.find_zone(0xD2A8, point) is first
    assert zones.zones_at(0xD2A8, point) == (first, second)
    assert zones.find_zone(0xD2A8, Vector3(500, 500, 0)) is None


def test_find_zone_only_checks_requested_region() -> None:
    zone = make_zone(0xD2A80024, 0, 0)
    zones = ZoneSet([zone])
    assert zones.find_zone(0x01D9, Vector3(0, 0, 0)) is None
    assert zones.zones_at(0x01D9, Vector3(0, 0, 0)) == ()


def test_zone_set_matches_zone_contains() -> None:
    """Region queries agree with Zone.contains for every zone."""
    zones = ZoneSet([make_zone(0xD2A80000 + i, i * 3.0, 0, radius=2) for i in range(10)])
    point = Vector3(7.5, 0.5, 0)
    expected = tuple(z for z in zones if z.contains(point))
    assert zones.zones_at(0xD2A8, point) == expected
    assert len(expected) == 2


def test_empty_zone_set() -> None:
    zones = ZoneSet()
    assert len(zones) == 0
    assert zones.regions == ()
    assert zones.find_zone(0xD2A8, Vector3(0, 0, 0)) is None
    assert zones.to_dict() == {"zone_count": 0, "regions": [], "zones": []}


def test_zone_set_is_immutable_and_hashable() -> None:
    zones = ZoneSet([make_zone(0xD2A80024, 0, 0)])
    assert isinstance(zones.zones, tuple)
    with pytest.raises(FrozenInstanceError):
        zones.zones = ()
    assert hash(zones) == hash(ZoneSet([make_zone(0xD2A80024, 0, 0)]))


def test_zone_set_slicing_returns_zone_set() -> None:
    a = make_zone(0xD2A80024, 0, 0)
    b = make_zone(0x01D9001C, 5, 5)
    c = make_zone(0xD2A80001, 50, 50)
    zones = ZoneSet((a, b, c))

    assert zones[1] is b
    assert zones[-1] is c
    tail = zones[1:]
    assert isinstance(tail, ZoneSet), "Slices should stay ZoneSets"
    assert list(tail) == [b, c]
    assert tail.regions == (0x01D9, 0xD2A8)
    assert tail.by_region(0xD2A8) == (c,)

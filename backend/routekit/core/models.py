"""
Normalized result types shared by every routing adapter.

Each result keeps the parsed, provider-neutral view next to the raw
provider payload it was built from, so callers can reach provider-specific
fields without re-requesting.
"""
from dataclasses import dataclass, field
from typing import Any, Iterator, Literal, Mapping, Optional, Sequence, Union

IntervalType = Literal["time", "distance"]


@dataclass(frozen=True)
class Waypoint:
    """A geographic coordinate."""
    lat: float
    lon: float


#: Accepted waypoint inputs: ``(lat, lon)`` pair, ``{"lat", "lon"}`` mapping
#: or an object with lat/lon attributes.
WaypointLike = Union[Sequence[float], Mapping[str, float], Waypoint]


def as_lat_lon(location: WaypointLike) -> tuple[float, float]:
    """Normalize a waypoint input to a ``(lat, lon)`` tuple."""
    if isinstance(location, Mapping):
        return location["lat"], location["lon"]
    if isinstance(location, Sequence) and not isinstance(location, str):
        return location[0], location[1]
    return location.lat, location.lon


def as_lon_lat(location: WaypointLike) -> list[float]:
    """Normalize a waypoint input to a ``[lon, lat]`` list (POST body order)."""
    lat, lon = as_lat_lon(location)
    return [lon, lat]


@dataclass(frozen=True)
class Direction:
    """One route alternative as a GeoJSON feature plus the raw path."""
    feature: dict
    raw: Optional[dict] = None

    @property
    def geometry(self) -> dict:
        return self.feature["geometry"]

    @property
    def duration(self) -> Optional[float]:
        return self.feature["properties"].get("duration")

    @property
    def distance(self) -> Optional[float]:
        return self.feature["properties"].get("distance")


@dataclass(frozen=True)
class Directions:
    """Result of a directions request."""
    directions: tuple[Direction, ...] = ()
    raw: Optional[dict] = None

    def __iter__(self) -> Iterator[Direction]:
        return iter(self.directions)

    def __len__(self) -> int:
        return len(self.directions)

    def __getitem__(self, index: int) -> Direction:
        return self.directions[index]


@dataclass(frozen=True)
class Isochrone:
    """A reachability polygon around a center."""
    center: tuple[float, float]  # (lat, lon)
    interval: Any  # bucket index
    interval_type: IntervalType
    feature: dict

    @property
    def geometry(self) -> dict:
        return self.feature.get("geometry", {})


@dataclass(frozen=True)
class Isochrones:
    """Result of a reachability request."""
    isochrones: tuple[Isochrone, ...] = ()
    raw: Optional[dict] = None

    def __iter__(self) -> Iterator[Isochrone]:
        return iter(self.isochrones)

    def __len__(self) -> int:
        return len(self.isochrones)

    def __getitem__(self, index: int) -> Isochrone:
        return self.isochrones[index]


@dataclass(frozen=True)
class Matrix:
    """Durations and distances between source and destination points."""
    durations: list[list[Optional[float]]] = field(default_factory=lambda: [[]])  # seconds
    distances: list[list[Optional[float]]] = field(default_factory=lambda: [[]])  # meters
    raw: Optional[dict] = None

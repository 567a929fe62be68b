"""GeoRSS module and its geometry value objects.

Geometries are plain value objects: they compare by class and coordinates and
clone deeply, so the bean engine can hold them as module properties.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator

from .bean import CopyFromBean
from .exceptions import CopyFromTypeError
from .modules import Module, register_module

GEORSS_URI = "http://www.georss.org/georss"


class Position:
    """A latitude/longitude pair in decimal degrees."""

    def __init__(self, latitude: float = 0.0, longitude: float = 0.0):
        self.latitude = latitude
        self.longitude = longitude

    def clone(self) -> "Position":
        return Position(self.latitude, self.longitude)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return False
        return (self.latitude, self.longitude) == (other.latitude, other.longitude)

    def __hash__(self) -> int:
        return hash((self.latitude, self.longitude))

    def __repr__(self) -> str:
        return f"Position({self.latitude}, {self.longitude})"


class PositionList:
    """Ordered list of positions."""

    def __init__(self, positions: list[Position] | None = None):
        self.positions: list[Position] = list(positions or [])

    def add(self, latitude: float, longitude: float) -> None:
        self.positions.append(Position(latitude, longitude))

    def insert(self, index: int, latitude: float, longitude: float) -> None:
        self.positions.insert(index, Position(latitude, longitude))

    def replace(self, index: int, latitude: float, longitude: float) -> None:
        self.positions[index] = Position(latitude, longitude)

    def remove(self, index: int) -> None:
        del self.positions[index]

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions)

    def __getitem__(self, index: int) -> Position:
        return self.positions[index]

    def clone(self) -> "PositionList":
        return PositionList([p.clone() for p in self.positions])

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PositionList) and self.positions == other.positions

    def __hash__(self) -> int:
        return hash(tuple(self.positions))

    def __repr__(self) -> str:
        return f"PositionList({self.positions!r})"


class AbstractGeometry(ABC):
    """Base class for geometries; two geometries are only equal within a class."""

    @abstractmethod
    def _coordinates(self) -> tuple:
        """Values compared, hashed and shown for this geometry."""

    @abstractmethod
    def clone(self) -> "AbstractGeometry":
        """Deep copy of the geometry."""

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if other is None or type(other) is not type(self):
            return False
        return self._coordinates() == other._coordinates()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._coordinates()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self._coordinates()!r}"


class Point(AbstractGeometry):
    def __init__(self, position: Position | None = None):
        self._position = position

    @property
    def position(self) -> Position:
        if self._position is None:
            self._position = Position()
        return self._position

    @position.setter
    def position(self, value: Position | None) -> None:
        self._position = value

    def _coordinates(self) -> tuple:
        return (self.position,)

    def clone(self) -> "Point":
        return Point(self._position.clone() if self._position is not None else None)


class _PositionListGeometry(AbstractGeometry):
    def __init__(self, position_list: PositionList | None = None):
        self._position_list = position_list

    @property
    def position_list(self) -> PositionList:
        if self._position_list is None:
            self._position_list = PositionList()
        return self._position_list

    @position_list.setter
    def position_list(self, value: PositionList | None) -> None:
        self._position_list = value

    def _coordinates(self) -> tuple:
        return (self.position_list,)

    def clone(self):
        return type(self)(
            self._position_list.clone() if self._position_list is not None else None
        )


class LineString(_PositionListGeometry):
    """Open path through a list of positions."""


class LinearRing(_PositionListGeometry):
    """Closed path through a list of positions."""


class Polygon(AbstractGeometry):
    """Area bounded by an exterior ring, minus optional interior rings."""

    def __init__(
        self,
        exterior: LinearRing | None = None,
        interior: list[LinearRing] | None = None,
    ):
        self.exterior = exterior
        self.interior: list[LinearRing] = list(interior or [])

    def _coordinates(self) -> tuple:
        return (self.exterior, tuple(self.interior))

    def clone(self) -> "Polygon":
        return Polygon(
            self.exterior.clone() if self.exterior is not None else None,
            [ring.clone() for ring in self.interior],
        )


class Envelope(AbstractGeometry):
    """Bounding box given by its lower and upper corners."""

    def __init__(
        self,
        min_latitude: float = 0.0,
        min_longitude: float = 0.0,
        max_latitude: float = 0.0,
        max_longitude: float = 0.0,
    ):
        self.min_latitude = min_latitude
        self.min_longitude = min_longitude
        self.max_latitude = max_latitude
        self.max_longitude = max_longitude

    def _coordinates(self) -> tuple:
        return (self.min_latitude, self.min_longitude, self.max_latitude, self.max_longitude)

    def clone(self) -> "Envelope":
        return Envelope(*self._coordinates())


class GeoRSSModule(Module):
    """GeoRSS Simple module: one geometry per feed or entry."""

    URI = GEORSS_URI
    PROPERTIES = ("geometry",)


class GeoRSSModuleImpl(CopyFromBean, GeoRSSModule):
    bean_interface = GeoRSSModule

    def __init__(self, geometry: AbstractGeometry | None = None):
        self.geometry = geometry

    @property
    def position(self) -> Position | None:
        """Position of a Point geometry, None for other geometries."""
        if isinstance(self.geometry, Point):
            return self.geometry.position
        return None

    @position.setter
    def position(self, value: Position) -> None:
        self.geometry = Point(value)

    def is_empty(self) -> bool:
        return self.geometry is None

    def copy_from(self, source: Any) -> None:
        if not isinstance(source, GeoRSSModule):
            raise CopyFromTypeError(
                f"Cannot copy {type(source).__name__} into {type(self).__name__}"
            )
        self.geometry = source.geometry.clone() if source.geometry is not None else None


def _position_list(coordinates: Any) -> PositionList:
    # feedparser coordinates are (longitude, latitude)
    return PositionList([Position(lat, lon) for lon, lat in coordinates])


def geometry_from_where(where: dict[str, Any] | None) -> AbstractGeometry | None:
    """Build a geometry from a feedparser ``where`` mapping.

    Returns:
        The geometry, or None for missing or unsupported shapes
    """
    if not where:
        return None

    kind = where.get("type")
    coordinates = where.get("coordinates")
    if not coordinates:
        return None

    if kind == "Point":
        lon, lat = coordinates[:2]
        return Point(Position(lat, lon))
    if kind == "LineString":
        return LineString(_position_list(coordinates))
    if kind == "Polygon":
        rings = [LinearRing(_position_list(ring)) for ring in coordinates]
        return Polygon(rings[0], rings[1:])
    if kind == "Box":
        (min_lon, min_lat), (max_lon, max_lat) = coordinates[0], coordinates[1]
        return Envelope(min_lat, min_lon, max_lat, max_lon)
    return None


def _format_positions(positions: PositionList) -> str:
    return " ".join(f"{p.latitude} {p.longitude}" for p in positions)


def geometry_to_text(geometry: AbstractGeometry) -> tuple[str, str] | None:
    """Render a geometry as a GeoRSS Simple (element name, text) pair."""
    if isinstance(geometry, Point):
        return "point", f"{geometry.position.latitude} {geometry.position.longitude}"
    if isinstance(geometry, LineString):
        return "line", _format_positions(geometry.position_list)
    if isinstance(geometry, Polygon) and geometry.exterior is not None:
        return "polygon", _format_positions(geometry.exterior.position_list)
    if isinstance(geometry, Envelope):
        return "box", " ".join(str(v) for v in geometry._coordinates())
    return None


register_module(GEORSS_URI, GeoRSSModuleImpl)

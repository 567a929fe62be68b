"""Unit tests for the GeoRSS module and geometries."""

import pytest

from syndbind.exceptions import CopyFromTypeError
from syndbind.georss import (
    GEORSS_URI,
    AbstractGeometry,
    Envelope,
    GeoRSSModuleImpl,
    LinearRing,
    LineString,
    Point,
    Polygon,
    Position,
    PositionList,
    geometry_from_where,
    geometry_to_text,
)
from syndbind.modules import DCModuleImpl
from syndbind.synd_entry import SyndEntryImpl


class TestGeometryUnit:
    """Unit tests for positions and geometries."""

    def test_abstract_geometry_cannot_be_created(self):
        with pytest.raises(TypeError):
            AbstractGeometry()

    def test_position_defaults_to_origin(self):
        assert Position() == Position(0.0, 0.0)
        assert Point().position == Position(0.0, 0.0)

    def test_position_list_operations(self):
        """Positions can be added, inserted, replaced and removed."""
        positions = PositionList()
        positions.add(1.0, 2.0)
        positions.add(5.0, 6.0)
        positions.insert(1, 3.0, 4.0)
        assert [p.latitude for p in positions] == [1.0, 3.0, 5.0]

        positions.replace(0, 9.0, 9.5)
        positions.remove(2)
        assert list(positions) == [Position(9.0, 9.5), Position(3.0, 4.0)]
        assert len(positions) == 2

    def test_geometries_equal_only_within_class(self):
        """A LineString never equals a LinearRing with the same points."""
        points = PositionList([Position(1, 2), Position(3, 4)])
        assert LineString(points) == LineString(points.clone())
        assert LineString(points) != LinearRing(points)

    def test_clone_is_deep(self):
        exterior = LinearRing(PositionList([Position(0, 0), Position(0, 1), Position(1, 1)]))
        polygon = Polygon(exterior)

        cloned = polygon.clone()
        cloned.exterior.position_list.add(2, 2)

        assert len(polygon.exterior.position_list) == 3
        assert cloned != polygon

    def test_envelope_equality_and_hash(self):
        assert Envelope(1, 2, 3, 4) == Envelope(1, 2, 3, 4)
        assert hash(Envelope(1, 2, 3, 4)) == hash(Envelope(1, 2, 3, 4))
        assert Envelope(1, 2, 3, 4) != Envelope(1, 2, 3, 5)


class TestGeoRSSModuleUnit:
    """Unit tests for GeoRSSModuleImpl and feedparser geometry conversion."""

    def test_position_accessor(self):
        module = GeoRSSModuleImpl()
        assert module.position is None

        module.position = Position(45.256, -71.92)
        assert module.geometry == Point(Position(45.256, -71.92))
        assert module.position.latitude == 45.256

    def test_clone_and_equality(self):
        module = GeoRSSModuleImpl(Point(Position(1.5, 2.5)))
        cloned = module.clone()

        assert cloned == module
        assert cloned.geometry is not module.geometry
        assert module.uri == GEORSS_URI

    def test_copy_from(self):
        source = GeoRSSModuleImpl(LineString(PositionList([Position(1, 2)])))
        target = GeoRSSModuleImpl()
        target.copy_from(source)
        assert target == source
        assert target.geometry is not source.geometry

    def test_copy_from_wrong_module_raises(self):
        with pytest.raises(CopyFromTypeError):
            GeoRSSModuleImpl().copy_from(DCModuleImpl())

    def test_registered_for_lookup(self):
        """Entries create a GeoRSS module on lookup."""
        entry = SyndEntryImpl()
        module = entry.get_module(GEORSS_URI)
        assert isinstance(module, GeoRSSModuleImpl)
        assert module in entry.modules

    def test_point_from_where(self):
        """feedparser coordinates are (longitude, latitude)."""
        geometry = geometry_from_where({"type": "Point", "coordinates": (-71.92, 45.256)})
        assert geometry == Point(Position(45.256, -71.92))

    def test_polygon_and_box_from_where(self):
        polygon = geometry_from_where(
            {"type": "Polygon", "coordinates": [[(0, 0), (1, 0), (1, 1), (0, 0)]]}
        )
        assert isinstance(polygon, Polygon)
        assert polygon.exterior.position_list[1] == Position(0, 1)
        assert polygon.interior == []

        box = geometry_from_where({"type": "Box", "coordinates": [(-10, 40), (10, 50)]})
        assert box == Envelope(40, -10, 50, 10)

    def test_unsupported_where(self):
        assert geometry_from_where(None) is None
        assert geometry_from_where({"type": "Circle", "coordinates": [(1, 2)]}) is None

    def test_geometry_to_text(self):
        """Geometries render as GeoRSS Simple "lat lon" text."""
        assert geometry_to_text(Point(Position(45.5, -71.0))) == ("point", "45.5 -71.0")
        line = LineString(PositionList([Position(1.0, 2.0), Position(3.0, 4.0)]))
        assert geometry_to_text(line) == ("line", "1.0 2.0 3.0 4.0")
        assert geometry_to_text(Envelope(1.0, 2.0, 3.0, 4.0)) == ("box", "1.0 2.0 3.0 4.0")

from __future__ import annotations

from hypothesis import given, strategies as st

from conftest import feature, square
from riskmap.services.geometry import combine_geometries, coords_to_kml, geometry_to_kml


class TestCombineGeometries:
    def test_polygon_and_multipolygon_are_flattened_in_order(self):
        a = feature("AAA", "A", square(0, 0))
        b = feature("BBB", "B", [square(5, 5), square(7, 7)], gtype="MultiPolygon")
        merged = combine_geometries([a, b])
        assert merged == {
            "type": "MultiPolygon",
            "coordinates": [square(0, 0), square(5, 5), square(7, 7)],
        }

    def test_empty_input(self):
        assert combine_geometries([]) is None
        assert combine_geometries([None, {"type": "Feature", "geometry": None}]) is None

    def test_other_geometry_types_are_skipped(self):
        point = {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}}
        merged = combine_geometries([point, feature("AAA", "A", square(0, 0))])
        assert merged["coordinates"] == [square(0, 0)]

    def test_non_object_geometry_is_skipped(self):
        broken = {"type": "Feature", "properties": {}, "geometry": [1, 2]}
        merged = combine_geometries([broken, feature("AAA", "A", square(0, 0))])
        assert merged["coordinates"] == [square(0, 0)]


_coord = st.integers(min_value=-180, max_value=180)
_ring = st.lists(st.lists(_coord, min_size=2, max_size=2), min_size=4, max_size=6)
_polygon = st.lists(_ring, min_size=1, max_size=3)


@given(st.lists(_polygon, min_size=1, max_size=4), st.lists(_polygon, min_size=1, max_size=4))
def test_merge_is_concatenation_not_union(left, right):
    a = feature("AAA", "A", left, gtype="MultiPolygon")
    b = feature("BBB", "B", right, gtype="MultiPolygon")
    ab = combine_geometries([a, b])["coordinates"]
    ba = combine_geometries([b, a])["coordinates"]
    assert ab == left + right
    assert ba == right + left
    assert len(ab) == len(left) + len(right)


class TestCoordsToKml:
    def test_nested_ring(self):
        assert coords_to_kml([[[1, 2], [3, 4]]]) == "1,2,0 3,4,0"

    def test_altitude_is_dropped_and_floats_kept(self):
        assert coords_to_kml([[10.25, -3.5, 120.0]]) == "10.25,-3.5,0"

    def test_integral_floats_render_as_integers(self):
        assert coords_to_kml([2.0, 3.0]) == "2,3,0"

    @given(st.lists(st.tuples(_coord, _coord), min_size=1, max_size=20))
    def test_preserves_order(self, points):
        out = coords_to_kml([list(p) for p in points]).split(" ")
        assert out == [f"{x},{y},0" for x, y in points]


class TestGeometryToKml:
    def test_polygon_with_hole(self):
        outer = [[0, 0], [4, 0], [4, 4], [0, 0]]
        hole = [[1, 1], [2, 1], [2, 2], [1, 1]]
        kml = geometry_to_kml({"type": "Polygon", "coordinates": [outer, hole]})
        assert kml.index("<outerBoundaryIs>") < kml.index("<innerBoundaryIs>")
        assert "0,0,0 4,0,0 4,4,0 0,0,0" in kml
        assert "1,1,0 2,1,0 2,2,0 1,1,0" in kml
        assert "<MultiGeometry>" not in kml

    def test_multipolygon(self):
        kml = geometry_to_kml({"type": "MultiPolygon", "coordinates": [square(0, 0), square(5, 5)]})
        assert kml.strip().startswith("<MultiGeometry>")
        assert kml.count("<Polygon>") == 2
        assert "<innerBoundaryIs>" not in kml

    def test_unsupported_type(self):
        assert geometry_to_kml({"type": "Point", "coordinates": [1, 2]}) == ""


def test_small_coordinates_stay_positional():
    assert coords_to_kml([0.00005, -0.00001]) == "0.00005,-0.00001,0"
    assert coords_to_kml([[12.5, 0.0001], [3.0, -7.25]]) == "12.5,0.0001,0 3,-7.25,0"

"""Tests for region persistence to JSON and YAML"""

import json
import math

import pytest

from yapbsp.errors import RegionFormatError
from yapbsp.euclidean.oned import IntervalsSet
from yapbsp.euclidean.polygons import PolygonsSet
from yapbsp.io.region_json import (
    SCHEMA_ID,
    read_region,
    region_from_dict,
    region_to_dict,
    write_region,
)
from yapbsp.partitioning.factory import RegionFactory
from yapbsp.partitioning.region import Location
from yapbsp.spherical.oned import ArcsSet


def frame():
    return RegionFactory().difference(PolygonsSet.from_box(0, 3, 0, 3),
                                      PolygonsSet.from_box(1, 2, 1, 2))


class TestRegionDict:
    """dictionary encoding"""

    def test_intervals_document(self):
        doc = region_to_dict(IntervalsSet.from_bounds(1.0, 2.0))
        assert doc["schema"] == SCHEMA_ID
        assert doc["kind"] == "intervals"
        assert doc["tolerance"] == pytest.approx(1.0e-10)
        assert doc["tree"]["cut"] == {"location": 1.0, "direct": False}
        # the document is plain data
        json.dumps(doc)

    def test_leaf_document(self):
        doc = region_to_dict(PolygonsSet())
        assert doc["tree"] == {"inside": True}

    def test_intervals(self):
        region = RegionFactory().union(IntervalsSet.from_bounds(0, 1),
                                       IntervalsSet.from_bounds(2, math.inf))
        restored = region_from_dict(region_to_dict(region))
        assert list(restored) == [(0.0, 1.0), (2.0, math.inf)]

    def test_arcs(self):
        arcs = ArcsSet.from_bounds(1.5 * math.pi, 0.5 * math.pi, 1.0e-8)
        restored = region_from_dict(region_to_dict(arcs))
        assert isinstance(restored, ArcsSet)
        assert restored.tolerance == pytest.approx(1.0e-8)
        assert restored.size == pytest.approx(math.pi)
        assert restored.check_point(0.0) is Location.INSIDE

    def test_polygons(self):
        restored = region_from_dict(region_to_dict(frame()))
        assert isinstance(restored, PolygonsSet)
        assert restored.size == pytest.approx(8.0)
        assert restored.check_point((1.5, 1.5)) is Location.OUTSIDE
        assert restored.check_point((0.5, 0.5)) is Location.INSIDE
        assert len(restored.vertices) == 2

    def test_unsupported_region(self):
        with pytest.raises(TypeError):
            region_to_dict([1, 2])


class TestRegionDictErrors:
    """malformed documents"""

    def test_bad_schema(self):
        doc = region_to_dict(IntervalsSet.from_bounds(0, 1))
        doc["schema"] = "other-v9"
        with pytest.raises(RegionFormatError):
            region_from_dict(doc)

    def test_bad_kind(self):
        doc = region_to_dict(IntervalsSet.from_bounds(0, 1))
        doc["kind"] = "spheres"
        with pytest.raises(RegionFormatError):
            region_from_dict(doc)

    def test_bad_tolerance(self):
        doc = region_to_dict(IntervalsSet.from_bounds(0, 1))
        doc["tolerance"] = -1.0
        with pytest.raises(RegionFormatError):
            region_from_dict(doc)

    def test_missing_child(self):
        doc = region_to_dict(IntervalsSet.from_bounds(0, 1))
        del doc["tree"]["plus"]
        with pytest.raises(RegionFormatError):
            region_from_dict(doc)

    def test_bad_leaf(self):
        doc = region_to_dict(IntervalsSet.from_bounds(0, 1))
        doc["tree"]["plus"] = {"inside": "yes"}
        with pytest.raises(RegionFormatError):
            region_from_dict(doc)

    def test_not_a_mapping(self):
        with pytest.raises(RegionFormatError):
            region_from_dict(["intervals"])

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            region_from_dict({"schema": SCHEMA_ID})


class TestRegionFiles:
    """json and yaml files"""

    def test_json_file(self, tmp_path):
        target = write_region(frame(), tmp_path / "frame.json")
        assert target.exists()
        assert json.loads(target.read_text())["kind"] == "polygons"
        assert read_region(target).size == pytest.approx(8.0)

    def test_yaml_file(self, tmp_path):
        target = write_region(ArcsSet.from_bounds(0.0, math.pi), tmp_path / "arcs.yaml")
        assert "schema: " + SCHEMA_ID in target.read_text()
        restored = read_region(target)
        assert list(restored) == [pytest.approx((0.0, math.pi))]

    def test_yml_suffix(self, tmp_path):
        target = write_region(IntervalsSet.from_bounds(-1, 1), tmp_path / "line.yml")
        assert list(read_region(target)) == [(-1.0, 1.0)]

    def test_invalid_json(self, tmp_path):
        target = tmp_path / "broken.json"
        target.write_text("{not json")
        with pytest.raises(RegionFormatError):
            read_region(target)

    def test_invalid_yaml(self, tmp_path):
        target = tmp_path / "broken.yaml"
        target.write_text("schema: [unclosed")
        with pytest.raises(RegionFormatError):
            read_region(target)

"""Tests for DXF export of region boundaries"""

import math

import ezdxf
import pytest

from yapbsp.euclidean.oned import IntervalsSet
from yapbsp.euclidean.polygons import PolygonsSet
from yapbsp.io.dxf import write_dxf
from yapbsp.partitioning.factory import RegionFactory
from yapbsp.spherical.oned import ArcsSet


def entities(path, kind):
    doc = ezdxf.readfile(str(path))
    return list(doc.modelspace().query(kind))


class TestWriteDxf:
    """boundaries written as dxf entities"""

    def test_box(self, tmp_path):
        target = write_dxf(PolygonsSet.from_box(0, 2, 0, 1), tmp_path / "box.dxf")
        lines = entities(target, "LINE")
        assert len(lines) == 4
        assert all(line.dxf.layer == "PATHS" for line in lines)
        total = sum(line.dxf.start.distance(line.dxf.end) for line in lines)
        assert total == pytest.approx(6.0)

    def test_layer(self, tmp_path):
        target = write_dxf(PolygonsSet.from_box(0, 1, 0, 1), tmp_path / "box.dxf",
                           layer="OUTLINE", color=1)
        doc = ezdxf.readfile(str(target))
        assert doc.layers.get("OUTLINE").color == 1
        assert len(doc.modelspace().query('LINE[layer=="OUTLINE"]')) == 4

    def test_frame(self, tmp_path):
        frame = RegionFactory().difference(PolygonsSet.from_box(0, 3, 0, 3),
                                           PolygonsSet.from_box(1, 2, 1, 2))
        assert len(entities(write_dxf(frame, tmp_path / "frame.dxf"), "LINE")) == 8

    def test_intervals(self, tmp_path):
        region = RegionFactory().union(IntervalsSet.from_bounds(0, 1),
                                       IntervalsSet.from_bounds(2, 4))
        lines = entities(write_dxf(region, tmp_path / "line.dxf"), "LINE")
        assert sorted(line.dxf.end.x - line.dxf.start.x for line in lines) == \
            pytest.approx([1.0, 2.0])

    def test_arcs(self, tmp_path):
        arcs = ArcsSet.from_bounds(1.5 * math.pi, 0.5 * math.pi)
        (arc,) = entities(write_dxf(arcs, tmp_path / "arc.dxf", center=(1, 1), radius=2.0),
                          "ARC")
        assert arc.dxf.radius == pytest.approx(2.0)
        assert arc.dxf.start_angle == pytest.approx(270.0)
        assert arc.dxf.end_angle == pytest.approx(90.0)

    def test_full_circle(self, tmp_path):
        target = write_dxf(ArcsSet(), tmp_path / "circle.dxf")
        assert len(entities(target, "CIRCLE")) == 1
        assert entities(target, "ARC") == []


class TestWriteDxfErrors:
    """regions that cannot be drawn"""

    def test_unbounded_polygons(self, tmp_path):
        with pytest.raises(ValueError):
            write_dxf(PolygonsSet(), tmp_path / "plane.dxf")

    def test_unbounded_intervals(self, tmp_path):
        with pytest.raises(ValueError):
            write_dxf(IntervalsSet.from_bounds(0, math.inf), tmp_path / "ray.dxf")

    def test_bad_radius(self, tmp_path):
        with pytest.raises(ValueError):
            write_dxf(ArcsSet(), tmp_path / "circle.dxf", radius=0.0)

    def test_unsupported_region(self, tmp_path):
        with pytest.raises(TypeError):
            write_dxf("square", tmp_path / "square.dxf")

import math

import pytest

from yapbsp.errors import NonInvertibleTransformError
from yapbsp.euclidean.oned import IntervalsSet, OrientedPoint
from yapbsp.euclidean.polygons import PolygonsSet
from yapbsp.euclidean.twod import (
    Line,
    SubLine,
    line_transform,
    rotation,
    scale,
    translation,
)
from yapbsp.partitioning.bsptree import BSPTree
from yapbsp.partitioning.hyperplane import Side
from yapbsp.partitioning.region import Location

"""Tests for the generic region operations, on intervals and polygons"""


def unit_square(tolerance=1.0e-10):
    return PolygonsSet.from_hyperplanes([Line((0, 0), (1, 0), tolerance),
                                         Line((1, 0), (1, 1), tolerance),
                                         Line((1, 1), (0, 1), tolerance),
                                         Line((0, 1), (0, 0), tolerance)],
                                        tolerance)


def square_boundary():
    return [SubLine.from_points((0, 0), (1, 0)),
            SubLine.from_points((1, 0), (1, 1)),
            SubLine.from_points((1, 1), (0, 1)),
            SubLine.from_points((0, 1), (0, 0))]


class TestRegionConstruction:
    """building regions from trees, hyperplanes and boundaries"""

    def test_whole_space(self):
        region = PolygonsSet()
        assert region.is_full()
        assert not region.is_empty()
        assert region.check_point((1.0e6, -3.0)) is Location.INSIDE

    def test_empty_space(self):
        region = PolygonsSet(BSPTree(attribute=False))
        assert region.is_empty()
        assert not region.is_full()
        assert region.check_point((0, 0)) is Location.OUTSIDE

    def test_bad_tolerance(self):
        with pytest.raises(ValueError):
            PolygonsSet(tolerance=-1.0)
        with pytest.raises(ValueError):
            IntervalsSet(tolerance=math.nan)

    def test_no_hyperplanes(self):
        with pytest.raises(ValueError):
            PolygonsSet.from_hyperplanes([])

    def test_half_plane(self):
        region = PolygonsSet.from_hyperplanes([Line((0, 0), (1, 0))])
        assert region.check_point((3, 1)) is Location.INSIDE
        assert region.check_point((3, -1)) is Location.OUTSIDE
        assert region.check_point((3, 0)) is Location.BOUNDARY

    def test_square_from_hyperplanes(self):
        square = unit_square()
        assert square.check_point((0.5, 0.5)) is Location.INSIDE
        assert square.check_point((2, 2)) is Location.OUTSIDE
        assert square.check_point((0, 0.5)) is Location.BOUNDARY
        assert square.check_point((1, 1)) is Location.BOUNDARY

    def test_redundant_hyperplane_is_skipped(self):
        lines = [Line((0, 0), (1, 0)), Line((1, 0), (1, 1)),
                 Line((1, 1), (0, 1)), Line((0, 1), (0, 0)),
                 Line((5, 0), (5, 1))]
        region = PolygonsSet.from_hyperplanes(lines)
        assert region.size == pytest.approx(1.0)

    def test_empty_boundary_is_whole_space(self):
        assert PolygonsSet.from_boundary([]).is_full()

    def test_square_from_boundary(self):
        square = PolygonsSet.from_boundary(square_boundary())
        assert square.check_point((0.5, 0.5)) is Location.INSIDE
        assert square.check_point((2, 2)) is Location.OUTSIDE
        assert square.check_point((0, 0.5)) is Location.BOUNDARY
        assert square.size == pytest.approx(1.0)

    def test_boundary_leaves_are_boolean(self):
        square = PolygonsSet.from_boundary(square_boundary())
        for leaf in square.get_tree(False).leaves():
            assert leaf.attribute in (True, False)

    def test_intervals_from_boundary(self):
        boundary = [OrientedPoint(0.0, False).whole_hyperplane(),
                    OrientedPoint(1.0, True).whole_hyperplane()]
        region = IntervalsSet.from_boundary(boundary)
        assert list(region) == [(0.0, 1.0)]

    def test_point_dimension_is_checked(self):
        from yapbsp.errors import DimensionMismatchError
        with pytest.raises(DimensionMismatchError):
            unit_square().check_point((1, 2, 3))


class TestRegionQueries:
    """boundary, projection, side and intersection"""

    def test_boundary_size(self):
        assert unit_square().boundary_size == pytest.approx(4.0)

    def test_boundary_attributes(self):
        tree = unit_square().get_tree(True)
        node = tree
        while node.cut is not None:
            attribute = node.attribute
            assert attribute.plus_outside is not None
            assert attribute.plus_outside.size == pytest.approx(1.0)
            assert attribute.plus_inside is None
            node = node.minus

    def test_size_and_barycenter(self):
        square = unit_square()
        assert square.size == pytest.approx(1.0)
        assert square.barycenter.x == pytest.approx(0.5)
        assert square.barycenter.y == pytest.approx(0.5)

    def test_project_inside_point(self):
        projection = unit_square().project_to_boundary((0.5, 0.2))
        assert projection.offset == pytest.approx(-0.2)
        assert projection.projected.x == pytest.approx(0.5)
        assert projection.projected.y == pytest.approx(0.0, abs=1.0e-12)

    def test_project_outside_point(self):
        projection = unit_square().project_to_boundary((2, 0.5))
        assert projection.offset == pytest.approx(1.0)
        assert projection.projected.x == pytest.approx(1.0)
        assert projection.projected.y == pytest.approx(0.5)

    def test_project_to_corner(self):
        projection = unit_square().project_to_boundary((2, 2))
        assert projection.offset == pytest.approx(math.sqrt(2.0))
        assert projection.projected.x == pytest.approx(1.0)
        assert projection.projected.y == pytest.approx(1.0)

    def test_side(self):
        square = unit_square()
        assert square.side(Line((2, 0), (2, 1))) is Side.MINUS
        assert square.side(Line((2, 1), (2, 0))) is Side.PLUS
        assert square.side(Line((0.5, 0), (0.5, 1))) is Side.BOTH

    def test_intersection(self):
        square = unit_square()
        chord = square.intersection(Line((-1, 0.5), (2, 0.5)).whole_hyperplane())
        assert chord is not None
        assert chord.size == pytest.approx(1.0)
        (segment,) = chord.segments
        assert sorted([segment.start.x, segment.end.x]) == pytest.approx([0.0, 1.0])

        assert square.intersection(Line((-1, 3), (2, 3)).whole_hyperplane()) is None

    def test_copy_self(self):
        square = unit_square()
        copy = square.copy_self()
        assert copy is not square
        assert copy.get_tree(False) is not square.get_tree(False)
        assert copy.size == pytest.approx(1.0)


class TestRegionTransform:
    """affine transforms of regions"""

    def test_translation(self):
        moved = unit_square().apply_transform(line_transform(translation((2, 3))))
        assert moved.check_point((2.5, 3.5)) is Location.INSIDE
        assert moved.check_point((0.5, 0.5)) is Location.OUTSIDE
        assert moved.size == pytest.approx(1.0)
        assert moved.barycenter.x == pytest.approx(2.5)
        assert moved.barycenter.y == pytest.approx(3.5)

    def test_rotation(self):
        turned = unit_square().apply_transform(line_transform(rotation(90.0)))
        assert turned.check_point((-0.5, 0.5)) is Location.INSIDE
        assert turned.check_point((0.5, 0.5)) is Location.OUTSIDE
        assert turned.size == pytest.approx(1.0)

    def test_rotation_about_center(self):
        turned = unit_square().apply_transform(line_transform(rotation(45.0, center=(0.5, 0.5))))
        assert turned.check_point((0.5, 1.2)) is Location.INSIDE
        assert turned.check_point((0.95, 0.95)) is Location.OUTSIDE
        assert turned.barycenter.x == pytest.approx(0.5)

    def test_scale(self):
        scaled = unit_square().apply_transform(line_transform(scale(2.0, 3.0)))
        assert scaled.size == pytest.approx(6.0)
        assert scaled.check_point((1.9, 2.9)) is Location.INSIDE

    def test_transformed_boundary(self):
        square = unit_square()
        square.get_tree(True)
        moved = square.apply_transform(line_transform(translation((1, 0))))
        assert moved.boundary_size == pytest.approx(4.0)

    def test_non_invertible(self):
        with pytest.raises(NonInvertibleTransformError):
            line_transform([[1.0, 2.0, 0.0], [2.0, 4.0, 0.0]])

    def test_bad_matrix_shape(self):
        with pytest.raises(ValueError):
            line_transform([[1.0, 0.0], [0.0, 1.0]])

import math

import numpy as np
import pytest

from yapbsp.errors import DimensionMismatchError
from yapbsp.euclidean.oned import IntervalsSet, Vector1D
from yapbsp.euclidean.twod import (
    Line,
    LineTransform,
    Segment,
    SubLine,
    Vector2D,
    rotation,
    scale,
    translation,
)
from yapbsp.partitioning.hyperplane import Side

## unit tests for yapBSP twod.py


class TestVector2D:
    """points of the plane"""

    def test_arithmetic(self):
        a = Vector2D(1, 2)
        b = Vector2D(3, -1)
        assert a + b == Vector2D(4, 1)
        assert a - b == Vector2D(-2, 3)
        assert -a == Vector2D(-1, -2)
        assert 2 * a == Vector2D(2, 4)
        assert a.dot(b) == 1.0
        assert Vector2D(3, 4).norm() == 5.0
        assert Vector2D(3, 4).norm_sq() == 25.0
        assert a.distance(b) == pytest.approx(math.sqrt(13))
        assert list(a) == [1.0, 2.0]

    def test_angle(self):
        assert Vector2D.angle(Vector2D(1, 0), Vector2D(0, 2)) == pytest.approx(math.pi / 2)
        assert Vector2D.angle(Vector2D(1, 0), Vector2D(1, 1.0e-9)) == pytest.approx(1.0e-9)
        with pytest.raises(ValueError):
            Vector2D.angle(Vector2D.ZERO, Vector2D(1, 0))

    def test_cross_product(self):
        p = Vector2D(0.5, 1)
        assert p.cross_product(Vector2D(0, 0), Vector2D(1, 0)) > 0
        assert Vector2D(0.5, -1).cross_product(Vector2D(0, 0), Vector2D(1, 0)) < 0

    def test_nan(self):
        assert Vector2D.NAN.is_nan()
        assert Vector2D(math.nan, 0) == Vector2D.NAN
        assert Vector2D(math.inf, 0).is_infinite()


class TestLine:
    """oriented lines"""

    def test_offsets(self):
        line = Line((0, 0), (1, 0))
        # minus side on the left
        assert line.get_offset((3, 2)) == pytest.approx(-2.0)
        assert line.get_offset((3, -2)) == pytest.approx(2.0)
        assert line.reverse().get_offset((3, 2)) == pytest.approx(2.0)
        assert line.contains((7, 0))
        assert line.distance((1, -4)) == pytest.approx(4.0)

    def test_from_point_angle(self):
        line = Line.from_point_angle((1, 1), math.pi / 2)
        assert line.contains((1, 5))
        assert line.angle == pytest.approx(math.pi / 2)
        assert line.get_offset((0, 0)) == pytest.approx(-1.0)

    def test_embedding(self):
        line = Line((0, 1), (1, 2))
        p = Vector2D(3, 4)
        assert line.to_space(line.to_sub_space(p)).distance(p) == pytest.approx(0.0, abs=1.0e-12)
        assert line.project((0, 3)).distance(Vector2D(1, 2)) == pytest.approx(0.0, abs=1.0e-12)

    def test_intersection(self):
        a = Line((0, 0), (1, 1))
        b = Line((0, 2), (2, 0))
        crossing = a.intersection(b)
        assert crossing.x == pytest.approx(1.0)
        assert crossing.y == pytest.approx(1.0)
        assert a.intersection(Line((0, 1), (1, 2))) is None
        assert a.is_parallel_to(Line((5, 0), (6, 1)))

    def test_orientation(self):
        a = Line((0, 0), (1, 0))
        assert a.same_orientation_as(Line((0, 5), (2, 5)))
        assert not a.same_orientation_as(Line((2, 5), (0, 5)))
        assert a.get_line_offset(Line((0, 5), (2, 5))) == pytest.approx(-5.0)

    def test_translated_to_point(self):
        line = Line((0, 0), (1, 1)).translated_to_point((0, 1))
        assert line.contains((1, 2))
        assert line.same_orientation_as(Line((0, 0), (1, 1)))

    def test_point_at(self):
        line = Line((0, 0), (1, 0))
        p = line.get_point_at(Vector1D(2.0), -3.0)
        assert p.x == pytest.approx(2.0)
        assert line.get_offset(p) == pytest.approx(-3.0)

    def test_bad_point(self):
        with pytest.raises(DimensionMismatchError):
            Line((0, 0, 0), (1, 0))


class TestSubLine:
    """segments of lines"""

    def test_from_points(self):
        sub = SubLine.from_points((0, 0), (2, 0))
        assert sub.size == pytest.approx(2.0)
        (segment,) = sub.segments
        assert segment.start.distance(Vector2D(0, 0)) == pytest.approx(0.0, abs=1.0e-12)
        assert segment.end.distance(Vector2D(2, 0)) == pytest.approx(0.0, abs=1.0e-12)

    def test_from_segment(self):
        line = Line((0, 0), (1, 1))
        sub = SubLine.from_segment(Segment(Vector2D(0, 0), Vector2D(2, 2), line))
        assert sub.size == pytest.approx(2 * math.sqrt(2))

    def test_intersection(self):
        a = SubLine.from_points((0, 0), (2, 2))
        b = SubLine.from_points((0, 2), (2, 0))
        assert a.intersection(b).distance(Vector2D(1, 1)) == pytest.approx(0.0, abs=1.0e-12)

        touching = SubLine.from_points((1, 1), (3, 0))
        assert a.intersection(touching, True) is not None
        assert a.intersection(touching, False) is None
        assert a.intersection(SubLine.from_points((5, 0), (6, -1))) is None

    def test_side(self):
        sub = SubLine.from_points((0, 1), (2, 1))
        assert sub.side(Line((0, 0), (1, 0))) is Side.MINUS
        assert sub.side(Line((1, 0), (0, 0))) is Side.PLUS
        assert sub.side(Line((1, -1), (1, 3))) is Side.BOTH
        assert sub.side(Line((5, -1), (5, 3))) is Side.MINUS
        assert sub.side(Line((0, 1), (3, 1))) is Side.HYPER

    def test_split(self):
        sub = SubLine.from_points((0, 1), (2, 1))
        split = sub.split(Line((1, -1), (1, 3)))
        assert split.side is Side.BOTH
        assert split.plus.size == pytest.approx(1.0)
        assert split.minus.size == pytest.approx(1.0)
        (plus_segment,) = split.plus.segments
        # the plus side of an upward line is on its right
        assert min(plus_segment.start.x, plus_segment.end.x) == pytest.approx(1.0)

    def test_split_parallel(self):
        sub = SubLine.from_points((0, 1), (2, 1))
        split = sub.split(Line((0, 0), (1, 0)))
        assert split.plus is None
        assert split.minus is sub
        coincident = sub.split(Line((0, 1), (3, 1)))
        assert coincident.plus is None and coincident.minus is None

    def test_reunite(self):
        line = Line((0, 0), (1, 0))
        a = SubLine(line, IntervalsSet.from_bounds(0, 1))
        b = SubLine(line, IntervalsSet.from_bounds(2, 3))
        assert a.reunite(b).size == pytest.approx(2.0)


class TestSegment:
    """segments"""

    def test_distance(self):
        line = Line((0, 0), (2, 0))
        segment = Segment(Vector2D(0, 0), Vector2D(2, 0), line)
        assert segment.length == pytest.approx(2.0)
        assert segment.distance((1, 3)) == pytest.approx(3.0)
        assert segment.distance((5, 4)) == pytest.approx(5.0)

    def test_unbounded_length(self):
        line = Line((0, 0), (1, 0))
        assert math.isinf(Segment(None, Vector2D(0, 0), line).length)


class TestMatrices:
    """homogeneous matrices and line transforms"""

    def test_translation(self):
        t = LineTransform(translation((1, 2)))
        p = t.apply_to_point((1, 1))
        assert (p.x, p.y) == pytest.approx((2.0, 3.0))
        back = LineTransform(translation((1, 2), inverse=True)).apply_to_point(p)
        assert (back.x, back.y) == pytest.approx((1.0, 1.0))

    def test_rotation(self):
        m = rotation(90.0)
        assert np.allclose(m @ np.array([1.0, 0.0, 1.0]), [0.0, 1.0, 1.0])
        m = rotation(90.0, center=(1, 1))
        assert np.allclose(m @ np.array([2.0, 1.0, 1.0]), [1.0, 2.0, 1.0])

    def test_scale(self):
        assert np.allclose(scale(2.0), np.diag([2.0, 2.0, 1.0]))
        assert np.allclose(scale(2.0, 4.0, inverse=True), np.diag([0.5, 0.25, 1.0]))
        with pytest.raises(ValueError):
            scale("big")

    def test_transformed_line(self):
        t = LineTransform(rotation(90.0))
        line = t.apply_to_hyperplane(Line((0, 0), (1, 0)))
        assert line.angle == pytest.approx(math.pi / 2)
        assert line.contains((0, 5))
        # the minus side stays on the left
        assert line.get_offset((-1, 0)) < 0

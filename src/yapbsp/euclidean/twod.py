## two dimensional Euclidean space for yapBSP
## Copyright (c) 2026 yapBSP contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Two dimensional Euclidean space: points, oriented lines as hyperplanes,
sub-lines and affine transforms.

A ``Line`` is also the embedding of the line abscissa (a one dimensional
space) in the plane, so a ``SubLine`` is a line together with the
``IntervalsSet`` of abscissas it covers.
"""

from __future__ import annotations

import math
import numbers
from typing import List, Optional

import numpy as np

from yapbsp.errors import DimensionMismatchError, NonInvertibleTransformError
from yapbsp.euclidean.oned import IntervalsSet, OrientedPoint, Vector1D, as_vector1d
from yapbsp.geom import DEFAULT_TOLERANCE, normalize_angle, pi2
from yapbsp.partitioning.hyperplane import (
    Embedding,
    Hyperplane,
    Side,
    SplitSubHyperplane,
    Transform,
)
from yapbsp.partitioning.bsptree import BSPTree
from yapbsp.partitioning.region import Location
from yapbsp.partitioning.subhyperplane import AbstractSubHyperplane

__all__ = [
    "Vector2D",
    "Line",
    "Segment",
    "SubLine",
    "LineTransform",
    "line_transform",
    "translation",
    "rotation",
    "scale",
]


class Vector2D:
    """A point (or vector) of the plane."""

    __slots__ = ("x", "y")

    def __init__(self, x: float, y: float):
        self.x = float(x)
        self.y = float(y)

    def __repr__(self):
        return f"Vector2D({self.x!r}, {self.y!r})"

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other):
        if not isinstance(other, Vector2D):
            return NotImplemented
        if self.is_nan() or other.is_nan():
            return self.is_nan() and other.is_nan()
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return 542 if self.is_nan() else hash((self.x, self.y))

    def __add__(self, other):
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vector2D(self.x - other.x, self.y - other.y)

    def __neg__(self):
        return Vector2D(-self.x, -self.y)

    def __mul__(self, a):
        return Vector2D(a * self.x, a * self.y)

    __rmul__ = __mul__

    def is_nan(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y)

    def is_infinite(self) -> bool:
        return not self.is_nan() and (math.isinf(self.x) or math.isinf(self.y))

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def norm_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def distance(self, other: "Vector2D") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def cross_product(self, p1: "Vector2D", p2: "Vector2D") -> float:
        """z component of ``(p2 - p1) x (self - p1)``; positive when this
        point is on the left of the directed line from ``p1`` to ``p2``"""
        x1 = p2.x - p1.x
        y1 = self.y - p1.y
        x2 = self.x - p1.x
        y2 = p2.y - p1.y
        return x1 * y1 - x2 * y2

    @staticmethod
    def angle(v1: "Vector2D", v2: "Vector2D") -> float:
        """angular separation of two vectors, in ``[0, pi]``"""
        norm_product = v1.norm() * v2.norm()
        if norm_product == 0:
            raise ValueError('zero norm vector has no angle')

        dot = v1.dot(v2)
        threshold = norm_product * 0.9999
        if dot < -threshold or dot > threshold:
            # almost aligned, acos is inaccurate here
            n = abs(v1.x * v2.y - v1.y * v2.x)
            if dot >= 0:
                return math.asin(n / norm_product)
            return math.pi - math.asin(n / norm_product)
        return math.acos(dot / norm_product)


Vector2D.NAN = Vector2D(math.nan, math.nan)
Vector2D.ZERO = Vector2D(0.0, 0.0)


def as_vector2d(point) -> Vector2D:
    """coerce a two element sequence to a ``Vector2D``"""
    if isinstance(point, Vector2D):
        return point
    values = list(point)
    if len(values) != 2:
        raise DimensionMismatchError(len(values), 2)
    return Vector2D(values[0], values[1])


class Line(Hyperplane, Embedding):
    """An oriented line of the plane.

    The line through ``p1`` and ``p2`` is directed from ``p1`` to
    ``p2``; its plus side is on the right, its minus side on the left.
    Points of the line are embedded in a one dimensional space by their
    abscissa along the line direction.
    """

    def __init__(self, p1, p2, tolerance: float = DEFAULT_TOLERANCE):
        p1 = as_vector2d(p1)
        p2 = as_vector2d(p2)
        dx = p2.x - p1.x
        dy = p2.y - p1.y
        d = math.hypot(dx, dy)
        if d == 0.0:
            self._set(0.0, 1.0, 0.0, p1.y, tolerance)
        else:
            angle = math.pi + math.atan2(-dy, -dx)
            self._set(angle, math.cos(angle), math.sin(angle),
                      (p2.x * p1.y - p1.x * p2.y) / d, tolerance)

    def _set(self, angle, cos, sin, origin_offset, tolerance):
        self._angle = angle
        self._cos = cos
        self._sin = sin
        self._origin_offset = origin_offset
        self._tolerance = tolerance

    @classmethod
    def _from_components(cls, angle, cos, sin, origin_offset, tolerance) -> "Line":
        line = cls.__new__(cls)
        line._set(angle, cos, sin, origin_offset, tolerance)
        return line

    @classmethod
    def from_point_angle(cls, p, alpha: float,
                         tolerance: float = DEFAULT_TOLERANCE) -> "Line":
        """line through ``p`` with direction angle ``alpha``"""
        p = as_vector2d(p)
        angle = normalize_angle(alpha, math.pi)
        cos = math.cos(angle)
        sin = math.sin(angle)
        return cls._from_components(angle, cos, sin, cos * p.y - sin * p.x, tolerance)

    def __repr__(self):
        return f"Line(angle={self.angle!r}, origin_offset={self._origin_offset!r})"

    def copy_self(self) -> "Line":
        angle = normalize_angle(self._angle, math.pi)
        return Line._from_components(angle, math.cos(angle), math.sin(angle),
                                     self._origin_offset, self._tolerance)

    @property
    def angle(self) -> float:
        """direction angle, in ``[0, 2 pi)``"""
        return normalize_angle(self._angle, math.pi)

    @property
    def origin_offset(self) -> float:
        return self._origin_offset

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def reverse(self) -> "Line":
        angle = self._angle + math.pi if self._angle < math.pi else self._angle - math.pi
        return Line._from_components(angle, -self._cos, -self._sin,
                                     -self._origin_offset, self._tolerance)

    def to_sub_space(self, point) -> Vector1D:
        p = as_vector2d(point)
        return Vector1D(self._cos * p.x + self._sin * p.y)

    def to_space(self, point) -> Vector2D:
        abscissa = as_vector1d(point).x
        return Vector2D(abscissa * self._cos - self._origin_offset * self._sin,
                        abscissa * self._sin + self._origin_offset * self._cos)

    def intersection(self, other: "Line") -> Optional[Vector2D]:
        """intersection point, ``None`` for parallel lines"""
        d = self._sin * other._cos - other._sin * self._cos
        if abs(d) < self._tolerance:
            return None
        return Vector2D((self._cos * other._origin_offset - other._cos * self._origin_offset) / d,
                        (self._sin * other._origin_offset - other._sin * self._origin_offset) / d)

    def project(self, point) -> Vector2D:
        return self.to_space(self.to_sub_space(point))

    def get_offset(self, point) -> float:
        p = as_vector2d(point)
        return self._sin * p.x - self._cos * p.y + self._origin_offset

    def get_line_offset(self, line: "Line") -> float:
        """offset of a parallel line, with respect to this one"""
        if self._cos * line._cos + self._sin * line._sin > 0:
            return self._origin_offset - line._origin_offset
        return self._origin_offset + line._origin_offset

    def same_orientation_as(self, other: "Line") -> bool:
        return self._sin * other._sin + self._cos * other._cos >= 0.0

    def get_point_at(self, abscissa, offset: float) -> Vector2D:
        """point at given abscissa along the line and offset from it"""
        x = as_vector1d(abscissa).x
        d_offset = offset - self._origin_offset
        return Vector2D(x * self._cos + d_offset * self._sin,
                        x * self._sin - d_offset * self._cos)

    def contains(self, point) -> bool:
        return abs(self.get_offset(point)) < self._tolerance

    def distance(self, point) -> float:
        return abs(self.get_offset(point))

    def is_parallel_to(self, line: "Line") -> bool:
        return abs(self._sin * line._cos - self._cos * line._sin) < self._tolerance

    def translated_to_point(self, p) -> "Line":
        """parallel line with the same orientation through ``p``"""
        p = as_vector2d(p)
        return Line._from_components(self._angle, self._cos, self._sin,
                                     self._cos * p.y - self._sin * p.x, self._tolerance)

    def whole_hyperplane(self) -> "SubLine":
        return SubLine(self, IntervalsSet(tolerance=self._tolerance))

    def whole_space(self):
        from yapbsp.euclidean.polygons import PolygonsSet
        return PolygonsSet(tolerance=self._tolerance)


class Segment:
    """A segment of a line between two points.

    Either end may be ``None`` for a segment that extends to infinity on
    that side.
    """

    def __init__(self, start: Optional[Vector2D], end: Optional[Vector2D], line: Line):
        self.start = start
        self.end = end
        self.line = line

    def __repr__(self):
        return f"Segment({self.start!r}, {self.end!r})"

    @property
    def length(self) -> float:
        if self.start is None or self.end is None:
            return math.inf
        return self.start.distance(self.end)

    def distance(self, p) -> float:
        """distance from ``p`` to the closest point of the segment"""
        p = as_vector2d(p)
        delta_x = self.end.x - self.start.x
        delta_y = self.end.y - self.start.y
        r = ((p.x - self.start.x) * delta_x + (p.y - self.start.y) * delta_y) / \
            (delta_x * delta_x + delta_y * delta_y)
        if r < 0 or r > 1:
            return min(self.start.distance(p), self.end.distance(p))
        return Vector2D(self.start.x + r * delta_x, self.start.y + r * delta_y).distance(p)


class SubLine(AbstractSubHyperplane):
    """A part of a line: the line plus the intervals of abscissas it covers."""

    @classmethod
    def from_points(cls, start, end, tolerance: float = DEFAULT_TOLERANCE) -> "SubLine":
        """the segment from ``start`` to ``end``, directed along them"""
        start = as_vector2d(start)
        end = as_vector2d(end)
        line = Line(start, end, tolerance)
        return cls(line, IntervalsSet.from_bounds(line.to_sub_space(start).x,
                                                   line.to_sub_space(end).x,
                                                   tolerance))

    @classmethod
    def from_segment(cls, segment: Segment) -> "SubLine":
        line = segment.line
        return cls(line, IntervalsSet.from_bounds(line.to_sub_space(segment.start).x,
                                                   line.to_sub_space(segment.end).x,
                                                   line.tolerance))

    def build_new(self, hyperplane, remaining_region):
        return SubLine(hyperplane, remaining_region)

    @property
    def segments(self) -> List[Segment]:
        """the segments covered by the sub-line, in abscissa order"""
        line = self.hyperplane
        segments = []
        for lower, upper in self.remaining_region:
            start = None if math.isinf(lower) else line.to_space(Vector1D(lower))
            end = None if math.isinf(upper) else line.to_space(Vector1D(upper))
            segments.append(Segment(start, end, line))
        return segments

    def intersection(self, sub_line: "SubLine", include_end_points: bool = True) -> Optional[Vector2D]:
        """crossing point of two sub-lines, ``None`` if they do not cross"""
        line1 = self.hyperplane
        line2 = sub_line.hyperplane
        crossing = line1.intersection(line2)
        if crossing is None:
            return None

        loc1 = self.remaining_region.check_point(line1.to_sub_space(crossing))
        loc2 = sub_line.remaining_region.check_point(line2.to_sub_space(crossing))
        if include_end_points:
            if loc1 is not Location.OUTSIDE and loc2 is not Location.OUTSIDE:
                return crossing
            return None
        if loc1 is Location.INSIDE and loc2 is Location.INSIDE:
            return crossing
        return None

    def side(self, hyperplane: Line) -> Side:
        this_line = self.hyperplane
        crossing = this_line.intersection(hyperplane)
        if crossing is None:
            # parallel lines
            offset = hyperplane.get_line_offset(this_line)
            if offset < -this_line.tolerance:
                return Side.MINUS
            if offset > this_line.tolerance:
                return Side.PLUS
            return Side.HYPER

        direct = math.sin(this_line.angle - hyperplane.angle) < 0
        x = this_line.to_sub_space(crossing)
        return self.remaining_region.side(OrientedPoint(x, direct, this_line.tolerance))

    def split(self, hyperplane: Line) -> SplitSubHyperplane:
        this_line = self.hyperplane
        crossing = this_line.intersection(hyperplane)
        tolerance = this_line.tolerance

        if crossing is None:
            offset = hyperplane.get_line_offset(this_line)
            if offset < -tolerance:
                return SplitSubHyperplane(None, self)
            if offset > tolerance:
                return SplitSubHyperplane(self, None)
            return SplitSubHyperplane(None, None)

        # the lines cross, split the remaining intervals at the crossing
        direct = math.sin(this_line.angle - hyperplane.angle) < 0
        x = this_line.to_sub_space(crossing)
        sub_plus = OrientedPoint(x, not direct, tolerance).whole_hyperplane()
        sub_minus = OrientedPoint(x, direct, tolerance).whole_hyperplane()

        remaining = self.remaining_region
        split_tree = remaining.get_tree(False).split(sub_minus)
        if remaining.is_empty(split_tree.plus):
            plus_tree = BSPTree(attribute=False)
        else:
            plus_tree = BSPTree(sub_plus, BSPTree(attribute=False), split_tree.plus, None)
        if remaining.is_empty(split_tree.minus):
            minus_tree = BSPTree(attribute=False)
        else:
            minus_tree = BSPTree(sub_minus, BSPTree(attribute=False), split_tree.minus, None)

        return SplitSubHyperplane(SubLine(this_line.copy_self(), IntervalsSet(plus_tree, tolerance)),
                                  SubLine(this_line.copy_self(), IntervalsSet(minus_tree, tolerance)))


class LineTransform(Transform):
    """Affine transform of the plane applied to lines and sub-lines.

    ``matrix`` is a 2x3 or 3x3 homogeneous matrix; only the first two
    rows are used.
    """

    def __init__(self, matrix):
        m = np.asarray(matrix, dtype=float)
        if m.shape not in ((2, 3), (3, 3)):
            raise ValueError('bad affine matrix shape: {}'.format(m.shape))
        self.matrix = m[:2, :]

        self.c_xx, self.c_xy, self.c_x1 = (float(c) for c in m[0])
        self.c_yx, self.c_yy, self.c_y1 = (float(c) for c in m[1])
        self.c_1y = self.c_xy * self.c_y1 - self.c_yy * self.c_x1
        self.c_1x = self.c_xx * self.c_y1 - self.c_yx * self.c_x1
        self.c_11 = float(np.linalg.det(m[:2, :2]))
        if abs(self.c_11) < 1.0e-20:
            raise NonInvertibleTransformError(self.c_11)

    def apply_to_point(self, point) -> Vector2D:
        x, y = self.matrix @ np.array([*as_vector2d(point), 1.0])
        return Vector2D(x, y)

    def apply_to_hyperplane(self, line: Line) -> Line:
        r_offset = self.c_1x * line._cos + self.c_1y * line._sin + self.c_11 * line._origin_offset
        r_cos = self.c_xx * line._cos + self.c_xy * line._sin
        r_sin = self.c_yx * line._cos + self.c_yy * line._sin
        inv = 1.0 / math.sqrt(r_sin * r_sin + r_cos * r_cos)
        return Line._from_components(math.pi + math.atan2(-r_sin, -r_cos),
                                     inv * r_cos, inv * r_sin, inv * r_offset,
                                     line.tolerance)

    def apply_to_sub(self, sub, original: Line, transformed: Line):
        op = sub.hyperplane
        new_location = transformed.to_sub_space(self.apply_to_point(original.to_space(op.location)))
        return OrientedPoint(new_location, op.direct, original.tolerance).whole_hyperplane()


def line_transform(matrix) -> LineTransform:
    """transform usable with ``PolygonsSet.apply_transform``"""
    return LineTransform(matrix)


## homogeneous 3x3 matrix helpers, angles in degrees

def translation(delta, inverse=False):
    dx, dy = float(delta[0]), float(delta[1])
    if inverse:
        dx, dy = -dx, -dy
    return np.array([[1.0, 0.0, dx],
                     [0.0, 1.0, dy],
                     [0.0, 0.0, 1.0]])


def rotation(angle, center=None, inverse=False):
    if inverse:
        angle *= -1.0
    rad = (angle % 360.0) * pi2 / 360.0
    c = math.cos(rad)
    s = math.sin(rad)
    r = np.array([[c, -s, 0.0],
                  [s, c, 0.0],
                  [0.0, 0.0, 1.0]])
    if center is None:
        return r
    return translation(center) @ r @ translation(center, inverse=True)


def scale(x, y=None, inverse=False):
    if not isinstance(x, numbers.Real) or (y is not None and not isinstance(y, numbers.Real)):
        raise ValueError('bad scaling values passed to scale')
    sx = float(x)
    sy = sx if y is None else float(y)
    if inverse:
        sx, sy = 1.0 / sx, 1.0 / sy
    return np.array([[sx, 0.0, 0.0],
                     [0.0, sy, 0.0],
                     [0.0, 0.0, 1.0]])

## one dimensional Euclidean space for yapBSP
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
One dimensional Euclidean space: points on a line, oriented points as
hyperplanes and sets of intervals as regions.
"""

from __future__ import annotations

import math
import numbers
from typing import Iterator, List, Optional, Tuple

from yapbsp.errors import DimensionMismatchError, NumberIsTooLargeError
from yapbsp.geom import DEFAULT_TOLERANCE, SAFE_MIN
from yapbsp.partitioning.bsptree import BSPTree
from yapbsp.partitioning.hyperplane import Hyperplane, Side, SplitSubHyperplane
from yapbsp.partitioning.ordered import OrderedLimitsMixin
from yapbsp.partitioning.region import AbstractRegion, BoundaryProjection, Location
from yapbsp.partitioning.subhyperplane import AbstractSubHyperplane

__all__ = [
    "Vector1D",
    "OrientedPoint",
    "SubOrientedPoint",
    "Interval",
    "IntervalsSet",
]


class Vector1D:
    """A point (or vector) on the line."""

    __slots__ = ("x",)

    def __init__(self, x: float):
        self.x = float(x)

    def __repr__(self):
        return f"Vector1D({self.x!r})"

    def __eq__(self, other):
        if not isinstance(other, Vector1D):
            return NotImplemented
        if self.is_nan() or other.is_nan():
            return self.is_nan() and other.is_nan()
        return self.x == other.x

    def __hash__(self):
        return 7785 if self.is_nan() else hash(self.x)

    def __add__(self, other):
        return Vector1D(self.x + other.x)

    def __sub__(self, other):
        return Vector1D(self.x - other.x)

    def __neg__(self):
        return Vector1D(-self.x)

    def __mul__(self, a):
        return Vector1D(a * self.x)

    __rmul__ = __mul__

    def is_nan(self) -> bool:
        return math.isnan(self.x)

    def norm(self) -> float:
        return abs(self.x)

    def distance(self, other: "Vector1D") -> float:
        return abs(other.x - self.x)


Vector1D.NAN = Vector1D(math.nan)


def as_vector1d(point) -> Vector1D:
    """coerce a number or a one element sequence to a ``Vector1D``"""
    if isinstance(point, Vector1D):
        return point
    if isinstance(point, numbers.Real):
        return Vector1D(point)
    values = list(point)
    if len(values) != 1:
        raise DimensionMismatchError(len(values), 1)
    return Vector1D(values[0])


class OrientedPoint(Hyperplane):
    """A point on the line seen as a hyperplane.

    A direct oriented point has its plus side towards increasing
    abscissas, an indirect one towards decreasing abscissas.
    """

    def __init__(self, location: Vector1D, direct: bool,
                 tolerance: float = DEFAULT_TOLERANCE):
        self._location = as_vector1d(location)
        self._direct = direct
        self._tolerance = tolerance

    def __repr__(self):
        return f"OrientedPoint({self._location.x!r}, direct={self._direct})"

    def copy_self(self):
        # immutable
        return self

    @property
    def location(self) -> Vector1D:
        return self._location

    @property
    def direct(self) -> bool:
        return self._direct

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def get_offset(self, point) -> float:
        delta = as_vector1d(point).x - self._location.x
        return delta if self._direct else -delta

    def project(self, point):
        return self._location

    def same_orientation_as(self, other) -> bool:
        return self._direct == other.direct

    def reverse(self) -> "OrientedPoint":
        return OrientedPoint(self._location, not self._direct, self._tolerance)

    def whole_hyperplane(self) -> "SubOrientedPoint":
        return SubOrientedPoint(self, None)

    def whole_space(self) -> "IntervalsSet":
        return IntervalsSet(tolerance=self._tolerance)


class SubOrientedPoint(AbstractSubHyperplane):
    """The only sub-hyperplane of an oriented point: the point itself."""

    def build_new(self, hyperplane, remaining_region):
        return SubOrientedPoint(hyperplane, remaining_region)

    @property
    def size(self) -> float:
        return 0.0

    def is_empty(self) -> bool:
        return False

    def side(self, hyperplane) -> Side:
        offset = hyperplane.get_offset(self.hyperplane.location)
        if offset < -hyperplane.tolerance:
            return Side.MINUS
        if offset > hyperplane.tolerance:
            return Side.PLUS
        return Side.HYPER

    def split(self, hyperplane) -> SplitSubHyperplane:
        offset = hyperplane.get_offset(self.hyperplane.location)
        if offset < -hyperplane.tolerance:
            return SplitSubHyperplane(None, self)
        if offset > hyperplane.tolerance:
            return SplitSubHyperplane(self, None)
        return SplitSubHyperplane(None, None)


class Interval:
    """A closed interval ``[lower, upper]`` of the line."""

    def __init__(self, lower: float, upper: float):
        if upper < lower:
            raise NumberIsTooLargeError(lower, upper)
        self.lower = lower
        self.upper = upper

    def __repr__(self):
        return f"Interval({self.lower!r}, {self.upper!r})"

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        return self.lower == other.lower and self.upper == other.upper

    def __hash__(self):
        return hash((self.lower, self.upper))

    @property
    def inf(self) -> float:
        return self.lower

    @property
    def sup(self) -> float:
        return self.upper

    @property
    def size(self) -> float:
        return self.upper - self.lower

    @property
    def barycenter(self) -> float:
        return 0.5 * (self.lower + self.upper)

    def check_point(self, point: float, tolerance: float) -> Location:
        if point < self.lower - tolerance or point > self.upper + tolerance:
            return Location.OUTSIDE
        if self.lower + tolerance < point < self.upper - tolerance:
            return Location.INSIDE
        return Location.BOUNDARY


def _finite_or_none(x):
    return None if math.isinf(x) else Vector1D(x)


class IntervalsSet(OrderedLimitsMixin, AbstractRegion):
    """A set of intervals of the line, possibly unbounded.

    ``IntervalsSet(tolerance=t)`` is the whole line.  Iterating yields
    the ``(lower, upper)`` pairs of the disjoint intervals in increasing
    order; infinite ends are reported as ``-inf`` / ``inf``.
    """

    @classmethod
    def from_bounds(cls, lower: float, upper: float,
                    tolerance: float = DEFAULT_TOLERANCE) -> "IntervalsSet":
        """the single interval ``[lower, upper]``, infinite bounds allowed"""
        if upper < lower:
            raise NumberIsTooLargeError(lower, upper)
        return cls(_build_interval_tree(lower, upper, tolerance), tolerance)

    def build_new(self, tree):
        return IntervalsSet(tree, self.tolerance)

    def _as_point(self, point):
        return as_vector1d(point)

    def _limit_value(self, node) -> float:
        return node.cut.hyperplane.location.x

    def compute_geometrical_properties(self):
        tree = self.get_tree(False)
        if tree.cut is None:
            self._set_barycenter(Vector1D.NAN)
            self._set_size(math.inf if tree.attribute else 0.0)
            return

        size = 0.0
        total = 0.0
        for interval in self.as_list():
            size += interval.size
            total += interval.size * interval.barycenter
        self._set_size(size)
        if math.isinf(size):
            self._set_barycenter(Vector1D.NAN)
        elif size >= SAFE_MIN:
            self._set_barycenter(Vector1D(total / size))
        else:
            self._set_barycenter(tree.cut.hyperplane.location)

    @property
    def inf(self) -> float:
        """lowest value belonging to the set, ``-inf`` if unbounded"""
        node = self.get_tree(False)
        inf = math.inf
        while node.cut is not None:
            op = node.cut.hyperplane
            inf = op.location.x
            node = node.minus if op.direct else node.plus
        return -math.inf if node.attribute else inf

    @property
    def sup(self) -> float:
        """highest value belonging to the set, ``inf`` if unbounded"""
        node = self.get_tree(False)
        sup = -math.inf
        while node.cut is not None:
            op = node.cut.hyperplane
            sup = op.location.x
            node = node.plus if op.direct else node.minus
        return math.inf if node.attribute else sup

    def project_to_boundary(self, point) -> BoundaryProjection:
        point = as_vector1d(point)
        x = point.x
        previous = -math.inf
        for lower, upper in self:
            if x < lower:
                # between two intervals
                previous_offset = x - previous
                current_offset = lower - x
                if previous_offset < current_offset:
                    return BoundaryProjection(point, _finite_or_none(previous), previous_offset)
                return BoundaryProjection(point, _finite_or_none(lower), current_offset)
            if x <= upper:
                # inside an interval, offsets are negative
                offset0 = lower - x
                offset1 = x - upper
                if offset0 < offset1:
                    return BoundaryProjection(point, _finite_or_none(upper), offset1)
                return BoundaryProjection(point, _finite_or_none(lower), offset0)
            previous = upper
        return BoundaryProjection(point, _finite_or_none(previous), x - previous)

    def as_list(self) -> List[Interval]:
        return [Interval(lower, upper) for lower, upper in self]

    def _first_boundary(self) -> Optional[BSPTree]:
        node = self.get_tree(False)
        if node.cut is None:
            return None
        node = self._first_leaf(node).parent
        return self._next_matching(node, lambda n: self._is_start(n) or self._is_end(n))

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        current = self._first_boundary()
        if current is None:
            if self._first_leaf(self.get_tree(False)).attribute:
                yield (-math.inf, math.inf)
            return

        if self._is_end(current):
            # the first interval is unbounded below
            yield (-math.inf, self._limit_value(current))

        while current is not None:
            start = self._next_matching(current, self._is_start)
            if start is None:
                return
            end = self._next_matching(start, self._is_end)
            if end is None:
                yield (self._limit_value(start), math.inf)
                return
            yield (self._limit_value(start), self._limit_value(end))
            current = end


def _build_interval_tree(lower, upper, tolerance):
    if math.isinf(lower) and lower < 0:
        if math.isinf(upper) and upper > 0:
            return BSPTree(attribute=True)
        upper_cut = OrientedPoint(Vector1D(upper), True, tolerance).whole_hyperplane()
        return BSPTree(upper_cut, BSPTree(attribute=False), BSPTree(attribute=True), None)

    lower_cut = OrientedPoint(Vector1D(lower), False, tolerance).whole_hyperplane()
    if math.isinf(upper) and upper > 0:
        return BSPTree(lower_cut, BSPTree(attribute=False), BSPTree(attribute=True), None)

    upper_cut = OrientedPoint(Vector1D(upper), True, tolerance).whole_hyperplane()
    return BSPTree(lower_cut,
                   BSPTree(attribute=False),
                   BSPTree(upper_cut, BSPTree(attribute=False), BSPTree(attribute=True), None),
                   None)

## arcs sets on the unit circle for yapBSP
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
The unit circle as a one dimensional space.

Points are angles normalised to ``[0, 2 pi)``, hyperplanes are limit
angles and regions are sets of arcs.  The tree of an ``ArcsSet`` splits
the ``[0, 2 pi)`` range like an interval tree does the real line, so the
cells just below 2 pi and just above 0 are the same arc of the circle:
their leaves must agree, which is checked whenever a set is built from
an arbitrary tree or boundary.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from yapbsp.errors import InconsistentStateAt2PiWrapping, MathInternalError
from yapbsp.euclidean.twod import Vector2D
from yapbsp.geom import DEFAULT_TOLERANCE, SAFE_MIN, normalize_angle, pi2
from yapbsp.partitioning.bsptree import BSPTree
from yapbsp.partitioning.hyperplane import Hyperplane, Side, SplitSubHyperplane
from yapbsp.partitioning.ordered import OrderedLimitsMixin
from yapbsp.partitioning.region import AbstractRegion, BoundaryProjection, Location
from yapbsp.partitioning.subhyperplane import AbstractSubHyperplane

__all__ = [
    "S1Point",
    "LimitAngle",
    "SubLimitAngle",
    "Arc",
    "ArcsSet",
    "ArcsSplit",
]

logger = logging.getLogger(__name__)


class S1Point:
    """A point on the unit circle, given by its angle."""

    __slots__ = ("alpha", "vector")

    def __init__(self, alpha: float):
        alpha = float(alpha)
        self.alpha = normalize_angle(alpha, math.pi)
        self.vector = Vector2D(math.cos(self.alpha), math.sin(self.alpha))

    def __repr__(self):
        return f"S1Point({self.alpha!r})"

    def __eq__(self, other):
        if not isinstance(other, S1Point):
            return NotImplemented
        if self.is_nan() or other.is_nan():
            return self.is_nan() and other.is_nan()
        return self.alpha == other.alpha

    def __hash__(self):
        return 1759 if self.is_nan() else hash(self.alpha)

    def is_nan(self) -> bool:
        return math.isnan(self.alpha)

    def distance(self, other: "S1Point") -> float:
        """angular distance, in ``[0, pi]``"""
        return Vector2D.angle(self.vector, other.vector)


S1Point.NAN = S1Point(math.nan)


def as_s1point(point) -> S1Point:
    if isinstance(point, S1Point):
        return point
    if isinstance(point, numbers.Real):
        return S1Point(point)
    raise TypeError(f"bad point on the circle: {point!r}")


class LimitAngle(Hyperplane):
    """An oriented point of the circle.

    A direct limit angle has its plus side towards increasing angles.
    Offsets are plain angle differences in ``[0, 2 pi)``; they are not
    wrapped around.
    """

    def __init__(self, location, direct: bool, tolerance: float = DEFAULT_TOLERANCE):
        self._location = as_s1point(location)
        self._direct = direct
        self._tolerance = tolerance

    def __repr__(self):
        return f"LimitAngle({self._location.alpha!r}, direct={self._direct})"

    def copy_self(self):
        return self

    @property
    def location(self) -> S1Point:
        return self._location

    @property
    def direct(self) -> bool:
        return self._direct

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def get_offset(self, point) -> float:
        delta = as_s1point(point).alpha - self._location.alpha
        return delta if self._direct else -delta

    def project(self, point):
        return self._location

    def same_orientation_as(self, other) -> bool:
        return self._direct == other.direct

    def reverse(self) -> "LimitAngle":
        return LimitAngle(self._location, not self._direct, self._tolerance)

    def whole_hyperplane(self) -> "SubLimitAngle":
        return SubLimitAngle(self, None)

    def whole_space(self) -> "ArcsSet":
        return ArcsSet(tolerance=self._tolerance)


class SubLimitAngle(AbstractSubHyperplane):
    """The only sub-hyperplane of a limit angle: the angle itself."""

    def build_new(self, hyperplane, remaining_region):
        return SubLimitAngle(hyperplane, remaining_region)

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


def _arc_bounds(lower, upper):
    """Normalised ``(lower, upper)`` with ``0 <= lower < 2 pi`` and
    ``lower < upper < lower + 2 pi``, or ``None`` for the full circle.

    ``lower > upper`` describes an arc running counterclockwise from
    ``lower`` across angle 0 up to ``upper``.
    """
    if lower == upper or upper - lower >= pi2:
        return None
    if lower > upper:
        upper = normalize_angle(upper, lower + math.pi)
        if upper == lower:
            return None
    normalized_lower = normalize_angle(lower, math.pi)
    return normalized_lower, normalized_lower + (upper - lower)


class Arc:
    """A single arc of the circle, from ``inf`` counterclockwise to ``sup``."""

    def __init__(self, lower: float, upper: float, tolerance: float = DEFAULT_TOLERANCE):
        bounds = _arc_bounds(lower, upper)
        if bounds is None:
            self.lower, self.upper = 0.0, pi2
        else:
            self.lower, self.upper = bounds
        self.middle = 0.5 * (self.lower + self.upper)
        self.tolerance = tolerance

    def __repr__(self):
        return f"Arc({self.lower!r}, {self.upper!r})"

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
        return self.middle

    def check_point(self, point: float) -> Location:
        normalized = normalize_angle(point, self.middle)
        if normalized < self.lower - self.tolerance or normalized > self.upper + self.tolerance:
            return Location.OUTSIDE
        if self.lower + self.tolerance < normalized < self.upper - self.tolerance:
            return Location.INSIDE
        # near a limit: the full circle has no boundary
        return Location.INSIDE if self.size >= pi2 - self.tolerance else Location.BOUNDARY


@dataclass
class ArcsSplit:
    """Parts of an ``ArcsSet`` on each side of an arc.

    ``minus`` is the part inside the arc, ``plus`` the part outside; a
    missing part is ``None``.
    """
    plus: Optional["ArcsSet"]
    minus: Optional["ArcsSet"]

    @property
    def side(self) -> Side:
        if self.plus is not None:
            return Side.BOTH if self.minus is not None else Side.PLUS
        return Side.MINUS if self.minus is not None else Side.HYPER


class ArcsSet(OrderedLimitsMixin, AbstractRegion):
    """A set of arcs of the circle.

    ``ArcsSet(tolerance=t)`` is the whole circle.  Iterating yields the
    ``(lower, upper)`` pairs of the disjoint arcs in increasing order of
    their start; an arc crossing angle 0 is reported last, with an upper
    bound above 2 pi.
    """

    def __init__(self, tree: Optional[BSPTree] = None,
                 tolerance: float = DEFAULT_TOLERANCE):
        super().__init__(tree, tolerance)
        if tree is not None:
            self._check_2pi_consistency()

    @classmethod
    def from_bounds(cls, lower: float, upper: float,
                    tolerance: float = DEFAULT_TOLERANCE) -> "ArcsSet":
        """the arc running counterclockwise from ``lower`` to ``upper``"""
        return cls(_build_arc_tree(lower, upper, tolerance), tolerance)

    def build_new(self, tree):
        return ArcsSet(tree, self.tolerance)

    def _as_point(self, point):
        return as_s1point(point)

    def _limit_value(self, node) -> float:
        return node.cut.hyperplane.location.alpha

    def _check_2pi_consistency(self):
        root = self.get_tree(False)
        if root.cut is None:
            return
        state_before = bool(self._first_leaf(root).attribute)
        state_after = bool(self._last_leaf(root).attribute)
        if state_before != state_after:
            logger.debug("arcs tree leaves disagree across the 0/2pi seam")
            raise InconsistentStateAt2PiWrapping()

    def _first_arc_start(self) -> Optional[BSPTree]:
        node = self.get_tree(False)
        if node.cut is None:
            return None
        node = self._first_leaf(node).parent
        return self._next_matching(node, self._is_start)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        first_start = self._first_arc_start()
        if first_start is None:
            if self._first_leaf(self.get_tree(False)).attribute:
                yield (0.0, pi2)
            return

        current = first_start
        while current is not None:
            start = self._next_matching(current, self._is_start)
            if start is None:
                return
            end = self._next_matching(start, self._is_end)
            if end is not None:
                yield (self._limit_value(start), self._limit_value(end))
                current = end
                continue

            # the last arc wraps around 2 pi and ends before the first start
            end = self._previous_matching(first_start, self._is_end)
            if end is None:
                raise MathInternalError()
            yield (self._limit_value(start), self._limit_value(end) + pi2)
            return

    def as_list(self) -> List[Arc]:
        return [Arc(lower, upper, self.tolerance) for lower, upper in self]

    def compute_geometrical_properties(self):
        tree = self.get_tree(False)
        if tree.cut is None:
            self._set_barycenter(S1Point.NAN)
            self._set_size(pi2 if tree.attribute else 0.0)
            return

        size = 0.0
        total = 0.0
        for lower, upper in self:
            length = upper - lower
            size += length
            total += length * (lower + upper)
        self._set_size(size)
        if size == pi2:
            self._set_barycenter(S1Point.NAN)
        elif size >= SAFE_MIN:
            self._set_barycenter(S1Point(total / (2 * size)))
        else:
            self._set_barycenter(tree.cut.hyperplane.location)

    def project_to_boundary(self, point) -> BoundaryProjection:
        point = as_s1point(point)
        alpha = point.alpha

        wrap_first = False
        first = math.nan
        previous = math.nan
        for lower, upper in self:
            if math.isnan(first):
                first = lower

            if not wrap_first:
                if alpha < lower:
                    if math.isnan(previous):
                        # before the first arc, handled after the loop
                        wrap_first = True
                    else:
                        previous_offset = alpha - previous
                        current_offset = lower - alpha
                        if previous_offset < current_offset:
                            return BoundaryProjection(point, S1Point(previous), previous_offset)
                        return BoundaryProjection(point, S1Point(lower), current_offset)
                elif alpha <= upper:
                    offset0 = lower - alpha
                    offset1 = alpha - upper
                    if offset0 < offset1:
                        return BoundaryProjection(point, S1Point(upper), offset1)
                    return BoundaryProjection(point, S1Point(lower), offset0)
            previous = upper

        if math.isnan(previous):
            # no arcs: the set is empty or the full circle
            return BoundaryProjection(point, None, pi2)

        if wrap_first:
            previous_offset = alpha - (previous - pi2)
            current_offset = first - alpha
        else:
            previous_offset = alpha - previous
            current_offset = first + pi2 - alpha
        if previous_offset < current_offset:
            return BoundaryProjection(point, S1Point(previous), previous_offset)
        return BoundaryProjection(point, S1Point(first), current_offset)

    def _synced(self, arc: Arc):
        reference = math.pi + arc.inf
        for lower, upper in self:
            synced_start = normalize_angle(lower, reference) - arc.inf
            arc_offset = lower - synced_start
            synced_end = upper - arc_offset
            yield lower, upper, synced_start, synced_end, arc_offset

    def side(self, arc) -> Side:
        """Position of the set with respect to ``arc``.

        MINUS means inside the arc, PLUS outside.  Given a ``LimitAngle``
        the generic hyperplane classification is used instead.
        """
        if not isinstance(arc, Arc):
            return super().side(arc)

        arc_length = arc.sup - arc.inf
        in_minus = False
        in_plus = False
        for _, _, synced_start, synced_end, _ in self._synced(arc):
            if synced_start <= arc_length - self.tolerance or synced_end >= pi2 + self.tolerance:
                in_minus = True
            if synced_end >= arc_length + self.tolerance:
                in_plus = True

        if in_minus:
            return Side.BOTH if in_plus else Side.MINUS
        return Side.PLUS if in_plus else Side.HYPER

    def split(self, arc: Arc) -> ArcsSplit:
        """split the set in its parts outside (plus) and inside (minus) ``arc``"""
        minus: List[float] = []
        plus: List[float] = []
        arc_length = arc.sup - arc.inf

        for lower, upper, synced_start, synced_end, arc_offset in self._synced(arc):
            if synced_start < arc_length:
                # the start point is inside the arc
                minus.append(lower)
                if synced_end > arc_length:
                    minus_to_plus = arc_length + arc_offset
                    minus.append(minus_to_plus)
                    plus.append(minus_to_plus)
                    if synced_end > pi2:
                        plus_to_minus = pi2 + arc_offset
                        plus.append(plus_to_minus)
                        minus.append(plus_to_minus)
                        minus.append(upper)
                    else:
                        plus.append(upper)
                else:
                    minus.append(upper)
            else:
                # the start point is outside the arc
                plus.append(lower)
                if synced_end > pi2:
                    plus_to_minus = pi2 + arc_offset
                    plus.append(plus_to_minus)
                    minus.append(plus_to_minus)
                    if synced_end > pi2 + arc_length:
                        minus_to_plus = pi2 + arc_length + arc_offset
                        minus.append(minus_to_plus)
                        plus.append(minus_to_plus)
                        plus.append(upper)
                    else:
                        minus.append(upper)
                else:
                    plus.append(upper)

        return ArcsSplit(self._create_split_part(plus), self._create_split_part(minus))

    def _add_arc_limit(self, tree, alpha, is_start):
        limit = LimitAngle(S1Point(alpha), not is_start, self.tolerance)
        node = tree.get_cell(limit.location, self.tolerance)
        if node.cut is not None:
            # limits are separated by more than the tolerance
            raise MathInternalError()
        node.insert_cut(limit)
        node.attribute = None
        node.plus.attribute = False
        node.minus.attribute = True

    def _create_split_part(self, limits: List[float]) -> Optional["ArcsSet"]:
        if not limits:
            return None

        # merge consecutive limits closer than the tolerance
        i = 0
        while i < len(limits):
            j = (i + 1) % len(limits)
            l_a = limits[i]
            l_b = normalize_angle(limits[j], l_a)
            if abs(l_b - l_a) <= self.tolerance:
                if j > 0:
                    del limits[j]
                    del limits[i]
                    i -= 1
                else:
                    l_end = limits.pop()
                    l_start = limits.pop(0)
                    if not limits:
                        if l_end - l_start > math.pi:
                            # the limits are the two ends of the full circle
                            return ArcsSet(BSPTree(attribute=True), self.tolerance)
                        return None
                    # the first arc now starts at the end of the list
                    limits.append(limits.pop(0) + pi2)
            i += 1

        tree = BSPTree(attribute=False)
        for k in range(0, len(limits) - 1, 2):
            self._add_arc_limit(tree, limits[k], True)
            self._add_arc_limit(tree, limits[k + 1], False)
        if tree.cut is None:
            return None
        return ArcsSet(tree, self.tolerance)


def _build_arc_tree(lower, upper, tolerance):
    bounds = _arc_bounds(lower, upper)
    if bounds is None:
        return BSPTree(attribute=True)

    normalized_lower, normalized_upper = bounds
    lower_cut = LimitAngle(S1Point(normalized_lower), False, tolerance).whole_hyperplane()
    if normalized_upper < pi2:
        upper_cut = LimitAngle(S1Point(normalized_upper), True, tolerance).whole_hyperplane()
        return BSPTree(lower_cut,
                       BSPTree(attribute=False),
                       BSPTree(upper_cut, BSPTree(attribute=False), BSPTree(attribute=True), None),
                       None)

    # the arc reaches or crosses angle 0
    upper_cut = LimitAngle(S1Point(normalized_upper - pi2), True, tolerance).whole_hyperplane()
    return BSPTree(lower_cut,
                   BSPTree(upper_cut, BSPTree(attribute=False), BSPTree(attribute=True), None),
                   BSPTree(attribute=True),
                   None)

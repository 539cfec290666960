## regions represented by BSP trees with boolean leaves
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
Regions of a space represented by a BSP tree.

The leaves of the tree carry ``True`` for cells inside the region and
``False`` for cells outside of it.  Internal nodes carry ``None`` until
the boundary is needed; ``AbstractRegion.get_tree(True)`` then replaces
it with a ``BoundaryAttribute`` describing which parts of the node's cut
belong to the region boundary.

Concrete spaces subclass ``AbstractRegion`` and provide ``build_new``
and ``compute_geometrical_properties``.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from yapbsp.errors import MathInternalError
from yapbsp.geom import DEFAULT_TOLERANCE, check_tolerance
from yapbsp.partitioning.bsptree import BSPTree, BSPTreeVisitor, FunctionVisitor, VisitOrder
from yapbsp.partitioning.hyperplane import Hyperplane, Side, SubHyperplane

__all__ = [
    "Location",
    "BoundaryAttribute",
    "BoundaryProjection",
    "AbstractRegion",
]

logger = logging.getLogger(__name__)


class Location(Enum):
    """Position of a point with respect to a region."""
    INSIDE = "inside"
    OUTSIDE = "outside"
    BOUNDARY = "boundary"


class BoundaryAttribute:
    """Boundary parts of the cut of an internal node.

    ``plus_outside`` is the part of the cut with the outside on its plus
    side and the inside on its minus side, ``plus_inside`` the part with
    the inside on its plus side.  Either may be ``None``.
    """

    def __init__(self, plus_outside: Optional[SubHyperplane],
                 plus_inside: Optional[SubHyperplane]):
        self.plus_outside = plus_outside
        self.plus_inside = plus_inside

    def __repr__(self):
        return (f"BoundaryAttribute(plus_outside={self.plus_outside!r}, "
                f"plus_inside={self.plus_inside!r})")


@dataclass
class BoundaryProjection:
    """Projection of a point on a region boundary.

    ``offset`` is the signed distance from ``original`` to ``projected``,
    negative when the point is inside the region.  ``projected`` is
    ``None`` when the region has no boundary.
    """
    original: object
    projected: object
    offset: float


class AbstractRegion(ABC):
    """A region of a space held as a BSP tree with boolean leaves.

    ``AbstractRegion(tolerance=t)`` is the whole space,
    ``AbstractRegion(tree, t)`` wraps an existing tree.  The
    ``from_boundary`` and ``from_hyperplanes`` class methods build the
    tree from a boundary representation or from the hyperplanes of a
    convex region.
    """

    def __init__(self, tree: Optional[BSPTree] = None,
                 tolerance: float = DEFAULT_TOLERANCE):
        self._tolerance = check_tolerance(tolerance)
        self._tree = BSPTree(attribute=True) if tree is None else tree
        self._size = None
        self._barycenter = None

    @classmethod
    def from_boundary(cls, boundary: Iterable[SubHyperplane],
                      tolerance: float = DEFAULT_TOLERANCE):
        """Build a region from the sub-hyperplanes of its boundary.

        The boundary must be closed and oriented with the inside on the
        minus side of every element.  An empty boundary gives the whole
        space.
        """
        return cls(build_tree_from_boundary(boundary), tolerance)

    @classmethod
    def from_hyperplanes(cls, hyperplanes: Sequence[Hyperplane],
                         tolerance: float = DEFAULT_TOLERANCE):
        """Build the convex region on the minus side of all ``hyperplanes``."""
        return cls(build_convex_tree(hyperplanes), tolerance)

    @abstractmethod
    def build_new(self, tree: BSPTree) -> "AbstractRegion":
        """region of the same kind and tolerance wrapping ``tree``"""

    @abstractmethod
    def compute_geometrical_properties(self) -> None:
        """compute size and barycenter, storing them with the setters"""

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def copy_self(self):
        return self.build_new(self._tree.copy_self())

    def _as_point(self, point):
        return point

    def is_empty(self, node: Optional[BSPTree] = None) -> bool:
        """true if no leaf below ``node`` (the root by default) is inside"""
        if node is None:
            node = self._tree
        if node.cut is None:
            return not node.attribute
        return self.is_empty(node.minus) and self.is_empty(node.plus)

    def is_full(self, node: Optional[BSPTree] = None) -> bool:
        """true if every leaf below ``node`` (the root by default) is inside"""
        if node is None:
            node = self._tree
        if node.cut is None:
            return bool(node.attribute)
        return self.is_full(node.minus) and self.is_full(node.plus)

    def contains(self, region: "AbstractRegion") -> bool:
        from yapbsp.partitioning.factory import RegionFactory
        return RegionFactory().difference(region, self).is_empty()

    def check_point(self, point, node: Optional[BSPTree] = None) -> Location:
        """Classify ``point`` against the region (or the subtree ``node``)."""
        point = self._as_point(point)
        if node is None:
            node = self._tree
        return self._check_point(node, point)

    def _check_point(self, node, point):
        cell = node.get_cell(point, self._tolerance)
        if cell.cut is None:
            return Location.INSIDE if cell.attribute else Location.OUTSIDE

        # the point lies on a cut, it is on the boundary if the two
        # sides disagree
        minus_code = self._check_point(cell.minus, point)
        plus_code = self._check_point(cell.plus, point)
        return minus_code if minus_code is plus_code else Location.BOUNDARY

    def get_tree(self, include_boundary_attributes: bool = False) -> BSPTree:
        """The underlying tree.

        With ``include_boundary_attributes`` the internal nodes are
        first given their ``BoundaryAttribute``, if not already done.
        """
        tree = self._tree
        if include_boundary_attributes and tree.cut is not None and tree.attribute is None:
            tree.visit(_BoundaryBuilder())
        return tree

    @property
    def boundary_size(self) -> float:
        total = 0.0

        def add_sizes(node):
            nonlocal total
            attribute = node.attribute
            if attribute.plus_outside is not None:
                total += attribute.plus_outside.size
            if attribute.plus_inside is not None:
                total += attribute.plus_inside.size

        self.get_tree(True).visit(FunctionVisitor(VisitOrder.MINUS_SUB_PLUS,
                                                  on_internal=add_sizes))
        return total

    @property
    def size(self) -> float:
        if self._barycenter is None:
            self.compute_geometrical_properties()
        return self._size

    @property
    def barycenter(self):
        if self._barycenter is None:
            self.compute_geometrical_properties()
        return self._barycenter

    def _set_size(self, size: float) -> None:
        self._size = size

    def _set_barycenter(self, barycenter) -> None:
        self._barycenter = barycenter

    def project_to_boundary(self, point) -> BoundaryProjection:
        point = self._as_point(point)
        projector = BoundaryProjector(point)
        self.get_tree(True).visit(projector)
        return projector.projection()

    def side(self, hyperplane: Hyperplane) -> Side:
        """Position of the region with respect to ``hyperplane``."""
        sides = _Sides()
        self._recurse_sides(self._tree, hyperplane.whole_hyperplane(), sides)
        if sides.plus_found:
            return Side.BOTH if sides.minus_found else Side.PLUS
        return Side.MINUS if sides.minus_found else Side.HYPER

    def _recurse_sides(self, node, sub, sides):
        if node.cut is None:
            if node.attribute:
                # an inside cell expanding across the hyperplane
                sides.plus_found = True
                sides.minus_found = True
            return

        hyperplane = node.cut.hyperplane
        side = sub.side(hyperplane)
        if side is Side.PLUS:
            # the sub-hyperplane is entirely in the plus subtree
            if not self.is_empty(node.minus):
                if node.cut.side(sub.hyperplane) is Side.PLUS:
                    sides.plus_found = True
                else:
                    sides.minus_found = True
            if not sides.done():
                self._recurse_sides(node.plus, sub, sides)
        elif side is Side.MINUS:
            if not self.is_empty(node.plus):
                if node.cut.side(sub.hyperplane) is Side.PLUS:
                    sides.plus_found = True
                else:
                    sides.minus_found = True
            if not sides.done():
                self._recurse_sides(node.minus, sub, sides)
        elif side is Side.BOTH:
            split = sub.split(hyperplane)
            self._recurse_sides(node.plus, split.plus, sides)
            if not sides.done():
                self._recurse_sides(node.minus, split.minus, sides)
        else:
            # the cut shares the hyperplane, only orientation matters
            plus_used = node.plus.cut is not None or bool(node.plus.attribute)
            minus_used = node.minus.cut is not None or bool(node.minus.attribute)
            if node.cut.hyperplane.same_orientation_as(sub.hyperplane):
                sides.plus_found = sides.plus_found or plus_used
                sides.minus_found = sides.minus_found or minus_used
            else:
                sides.minus_found = sides.minus_found or plus_used
                sides.plus_found = sides.plus_found or minus_used

    def intersection(self, sub: SubHyperplane) -> Optional[SubHyperplane]:
        """the part of ``sub`` inside the region, ``None`` if there is none"""
        return self._recurse_intersection(self._tree, sub)

    def _recurse_intersection(self, node, sub):
        if sub is None:
            return None
        if node.cut is None:
            return sub.copy_self() if node.attribute else None

        hyperplane = node.cut.hyperplane
        side = sub.side(hyperplane)
        if side is Side.PLUS:
            return self._recurse_intersection(node.plus, sub)
        if side is Side.MINUS:
            return self._recurse_intersection(node.minus, sub)
        if side is Side.BOTH:
            split = sub.split(hyperplane)
            plus = self._recurse_intersection(node.plus, split.plus)
            minus = self._recurse_intersection(node.minus, split.minus)
            if plus is None:
                return minus
            if minus is None:
                return plus
            return plus.reunite(minus)
        return self._recurse_intersection(node.plus,
                                          self._recurse_intersection(node.minus, sub))

    def apply_transform(self, transform) -> "AbstractRegion":
        """new region, image of this one by ``transform``"""
        return self.build_new(self._recurse_transform(self.get_tree(False), transform))

    def _recurse_transform(self, node, transform):
        if node.cut is None:
            return BSPTree(attribute=node.attribute)

        t_sub = node.cut.apply_transform(transform)
        attribute = node.attribute
        if attribute is not None:
            t_po = (None if attribute.plus_outside is None
                    else attribute.plus_outside.apply_transform(transform))
            t_pi = (None if attribute.plus_inside is None
                    else attribute.plus_inside.apply_transform(transform))
            attribute = BoundaryAttribute(t_po, t_pi)
        return BSPTree(t_sub,
                       self._recurse_transform(node.plus, transform),
                       self._recurse_transform(node.minus, transform),
                       attribute)


class _Sides:
    def __init__(self):
        self.plus_found = False
        self.minus_found = False

    def done(self):
        return self.plus_found and self.minus_found


def build_tree_from_boundary(boundary: Iterable[SubHyperplane]) -> BSPTree:
    """Build a tree whose cuts follow the given oriented boundary.

    Larger elements are inserted first.  Leaves end up inside when they
    are a minus child (or the root), outside when they are a plus child.
    """
    ordered: List[SubHyperplane] = []
    seen = set()
    for sub in boundary:
        if id(sub) not in seen:
            seen.add(id(sub))
            ordered.append(sub)
    if not ordered:
        return BSPTree(attribute=True)

    ordered.sort(key=lambda s: s.size, reverse=True)
    logger.debug("building tree from %d boundary elements", len(ordered))

    tree = BSPTree()
    _insert_cuts(tree, ordered)

    def set_inside(node):
        node.attribute = node.parent is None or node is node.parent.minus

    tree.visit(FunctionVisitor(VisitOrder.PLUS_SUB_MINUS, on_leaf=set_inside))
    return tree


def _insert_cuts(node: BSPTree, boundary: List[SubHyperplane]) -> None:
    iterator = iter(boundary)

    inserted = None
    for candidate in iterator:
        if node.insert_cut(candidate.hyperplane.copy_self()):
            inserted = candidate.hyperplane
            break
    if inserted is None:
        return

    # distribute the remaining elements in the two subtrees
    plus_list = []
    minus_list = []
    for other in iterator:
        side = other.side(inserted)
        if side is Side.PLUS:
            plus_list.append(other)
        elif side is Side.MINUS:
            minus_list.append(other)
        elif side is Side.BOTH:
            split = other.split(inserted)
            plus_list.append(split.plus)
            minus_list.append(split.minus)
        # elements lying in the cut hyperplane are already represented

    _insert_cuts(node.plus, plus_list)
    _insert_cuts(node.minus, minus_list)


def build_convex_tree(hyperplanes: Sequence[Hyperplane]) -> BSPTree:
    """Tree of the convex region on the minus side of every hyperplane.

    Hyperplanes that do not meet the current inside cell are skipped.
    """
    if not hyperplanes:
        raise ValueError('bad hyperplanes: at least one hyperplane is required')

    tree = hyperplanes[0].whole_space().get_tree(False)
    node = tree
    node.attribute = True
    for hyperplane in hyperplanes:
        if node.insert_cut(hyperplane):
            node.attribute = None
            node.plus.attribute = False
            node = node.minus
            node.attribute = True
    return tree


class _BoundaryBuilder(BSPTreeVisitor):
    """Compute the ``BoundaryAttribute`` of every internal node."""

    def visit_order(self, node):
        return VisitOrder.PLUS_MINUS_SUB

    def visit_internal_node(self, node):
        plus_outside = None
        plus_inside = None

        # characterize the cut against the plus subtree first
        plus_char = [None, None]
        self._characterize(node.plus, node.cut.copy_self(), plus_char)

        if plus_char[0] is not None and not plus_char[0].is_empty():
            # outside on the plus side, look for inside on the minus side
            minus_char = [None, None]
            self._characterize(node.minus, plus_char[0], minus_char)
            if minus_char[1] is not None and not minus_char[1].is_empty():
                plus_outside = minus_char[1]

        if plus_char[1] is not None and not plus_char[1].is_empty():
            # inside on the plus side, look for outside on the minus side
            minus_char = [None, None]
            self._characterize(node.minus, plus_char[1], minus_char)
            if minus_char[0] is not None and not minus_char[0].is_empty():
                plus_inside = minus_char[0]

        node.attribute = BoundaryAttribute(plus_outside, plus_inside)

    def visit_leaf_node(self, node):
        pass

    def _characterize(self, node, sub, characterization):
        """split ``sub`` into the parts facing outside (slot 0) and
        inside (slot 1) cells of ``node``"""
        if node.cut is None:
            slot = 1 if node.attribute else 0
            if characterization[slot] is None:
                characterization[slot] = sub
            else:
                characterization[slot] = characterization[slot].reunite(sub)
            return

        hyperplane = node.cut.hyperplane
        side = sub.side(hyperplane)
        if side is Side.PLUS:
            self._characterize(node.plus, sub, characterization)
        elif side is Side.MINUS:
            self._characterize(node.minus, sub, characterization)
        elif side is Side.BOTH:
            split = sub.split(hyperplane)
            self._characterize(node.plus, split.plus, characterization)
            self._characterize(node.minus, split.minus, characterization)
        else:
            # cuts of a subtree never lie in an ancestor's hyperplane
            raise MathInternalError()


class BoundaryProjector(BSPTreeVisitor):
    """Visitor finding the boundary point closest to a given point.

    The tree must carry boundary attributes.  The boundary parts of each
    cut are the remaining regions of its ``BoundaryAttribute``
    sub-hyperplanes, so this only finds projections for spaces whose
    hyperplanes have a sub-space (lines in the plane, for instance).
    """

    def __init__(self, original):
        self.original = original
        self.projected = None
        self.leaf = None
        self.offset = math.inf

    def visit_order(self, node):
        if node.cut.hyperplane.get_offset(self.original) <= 0:
            return VisitOrder.MINUS_SUB_PLUS
        return VisitOrder.PLUS_SUB_MINUS

    def visit_internal_node(self, node):
        hyperplane = node.cut.hyperplane
        signed_offset = hyperplane.get_offset(self.original)
        if abs(signed_offset) >= self.offset:
            return

        regular = hyperplane.project(self.original)
        parts = self._boundary_regions(node)
        for part in parts:
            if part.check_point(hyperplane.to_sub_space(regular)) is not Location.OUTSIDE:
                self.projected = regular
                self.offset = abs(signed_offset)
                return

        # the regular projection misses the boundary, try the part ends
        for part in parts:
            bp = part.project_to_boundary(hyperplane.to_sub_space(regular))
            if bp.projected is None:
                continue
            singular = hyperplane.to_space(bp.projected)
            distance = self.original.distance(singular)
            if distance < self.offset:
                self.projected = singular
                self.offset = distance

    def visit_leaf_node(self, node):
        if self.leaf is None:
            self.leaf = node

    def projection(self) -> BoundaryProjection:
        offset = -self.offset if self.leaf.attribute else self.offset
        return BoundaryProjection(self.original, self.projected, offset)

    @staticmethod
    def _boundary_regions(node):
        regions = []
        attribute = node.attribute
        for sub in (attribute.plus_inside, attribute.plus_outside):
            if sub is not None and sub.remaining_region is not None:
                regions.append(sub.remaining_region)
        return regions

## sub-hyperplanes carrying a remaining region
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
Sub-hyperplanes described by a region of the hyperplane's sub-space.

A segment of a line, for instance, is the line plus the interval of
abscissas it covers along that line.  Zero dimensional hyperplanes (the
points limiting intervals or arcs) have no sub-space: their
``remaining_region`` is ``None``.
"""

from __future__ import annotations

from abc import abstractmethod

from yapbsp.partitioning.bsptree import BSPTree
from yapbsp.partitioning.hyperplane import Hyperplane, SubHyperplane
from yapbsp.partitioning.region import BoundaryAttribute

__all__ = ["AbstractSubHyperplane"]


class AbstractSubHyperplane(SubHyperplane):
    """Sub-hyperplane made of a hyperplane and a remaining region."""

    def __init__(self, hyperplane: Hyperplane, remaining_region):
        self._hyperplane = hyperplane
        self._remaining_region = remaining_region

    @abstractmethod
    def build_new(self, hyperplane: Hyperplane, remaining_region) -> "AbstractSubHyperplane":
        ...

    def __repr__(self):
        return f"{type(self).__name__}({self._hyperplane!r})"

    def copy_self(self):
        # the remaining region is never modified in place, it can be shared
        return self.build_new(self._hyperplane.copy_self(), self._remaining_region)

    @property
    def hyperplane(self) -> Hyperplane:
        return self._hyperplane

    @property
    def remaining_region(self):
        return self._remaining_region

    @property
    def size(self) -> float:
        return self._remaining_region.size

    def is_empty(self) -> bool:
        return self._remaining_region.is_empty()

    def reunite(self, other: "AbstractSubHyperplane") -> "AbstractSubHyperplane":
        """union with a sub-hyperplane lying in the same hyperplane"""
        from yapbsp.partitioning.factory import RegionFactory
        if self._remaining_region is None:
            return self.build_new(self._hyperplane, None)
        return self.build_new(self._hyperplane,
                              RegionFactory().union(self._remaining_region,
                                                    other.remaining_region))

    def apply_transform(self, transform) -> "AbstractSubHyperplane":
        t_hyperplane = transform.apply_to_hyperplane(self._hyperplane)
        if self._remaining_region is None:
            return self.build_new(t_hyperplane, None)
        t_tree = self._recurse_transform(self._remaining_region.get_tree(False),
                                         t_hyperplane, transform)
        return self.build_new(t_hyperplane, self._remaining_region.build_new(t_tree))

    def _recurse_transform(self, node: BSPTree, transformed: Hyperplane,
                           transform) -> BSPTree:
        if node.cut is None:
            return BSPTree(attribute=node.attribute)

        attribute = node.attribute
        if attribute is not None:
            t_po = (None if attribute.plus_outside is None else
                    transform.apply_to_sub(attribute.plus_outside, self._hyperplane, transformed))
            t_pi = (None if attribute.plus_inside is None else
                    transform.apply_to_sub(attribute.plus_inside, self._hyperplane, transformed))
            attribute = BoundaryAttribute(t_po, t_pi)

        return BSPTree(transform.apply_to_sub(node.cut, self._hyperplane, transformed),
                       self._recurse_transform(node.plus, transformed, transform),
                       self._recurse_transform(node.minus, transformed, transform),
                       attribute)

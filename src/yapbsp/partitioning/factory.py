## boolean operations on yapBSP regions
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
Boolean operations on regions.

All operations work on copies of their operand trees, so the regions
passed in are left untouched.  The result has the type and tolerance of
the first operand.
"""

from __future__ import annotations

import logging

from yapbsp.partitioning.bsptree import BSPTree, FunctionVisitor, LeafMerger, VisitOrder
from yapbsp.partitioning.region import BoundaryAttribute, build_convex_tree

__all__ = ["RegionFactory"]

logger = logging.getLogger(__name__)


def _complement(node: BSPTree) -> BSPTree:
    if node.cut is None:
        return BSPTree(attribute=not node.attribute)

    attribute = node.attribute
    if attribute is not None:
        # inside and outside swap, so do the two boundary parts
        plus_outside = None if attribute.plus_inside is None else attribute.plus_inside.copy_self()
        plus_inside = None if attribute.plus_outside is None else attribute.plus_outside.copy_self()
        attribute = BoundaryAttribute(plus_outside, plus_inside)

    return BSPTree(node.cut.copy_self(), _complement(node.plus),
                   _complement(node.minus), attribute)


class _UnionMerger(LeafMerger):
    def merge(self, leaf, tree, parent_tree, is_plus_child, leaf_from_instance):
        if leaf.attribute:
            # the inside leaf absorbs the whole other subtree
            leaf.insert_in_tree(parent_tree, is_plus_child)
            return leaf
        tree.insert_in_tree(parent_tree, is_plus_child)
        return tree


class _IntersectionMerger(LeafMerger):
    def merge(self, leaf, tree, parent_tree, is_plus_child, leaf_from_instance):
        if leaf.attribute:
            tree.insert_in_tree(parent_tree, is_plus_child)
            return tree
        leaf.insert_in_tree(parent_tree, is_plus_child)
        return leaf


class _XorMerger(LeafMerger):
    def merge(self, leaf, tree, parent_tree, is_plus_child, leaf_from_instance):
        t = _complement(tree) if leaf.attribute else tree
        t.insert_in_tree(parent_tree, is_plus_child)
        return t


class _DifferenceMerger(LeafMerger):
    def merge(self, leaf, tree, parent_tree, is_plus_child, leaf_from_instance):
        if leaf.attribute:
            arg_tree = _complement(tree if leaf_from_instance else leaf)
            arg_tree.insert_in_tree(parent_tree, is_plus_child)
            return arg_tree
        instance_tree = leaf if leaf_from_instance else tree
        instance_tree.insert_in_tree(parent_tree, is_plus_child)
        return instance_tree


def _clean_node(node):
    node.attribute = None


class RegionFactory:
    """Build regions by combining other regions."""

    def __init__(self):
        self._nodes_cleaner = FunctionVisitor(VisitOrder.PLUS_SUB_MINUS,
                                              on_internal=_clean_node)

    def build_convex(self, *hyperplanes):
        """convex region on the minus side of all ``hyperplanes``"""
        if not hyperplanes:
            raise ValueError('bad hyperplanes: at least one hyperplane is required')
        return hyperplanes[0].whole_space().build_new(build_convex_tree(hyperplanes))

    def _combine(self, region1, region2, merger, name):
        logger.debug("computing %s of %s and %s", name,
                     type(region1).__name__, type(region2).__name__)
        tree = region1.get_tree(False).copy_self().merge(
            region2.get_tree(False).copy_self(), merger)
        tree.visit(self._nodes_cleaner)
        return region1.build_new(tree)

    def union(self, region1, region2):
        return self._combine(region1, region2, _UnionMerger(), "union")

    def intersection(self, region1, region2):
        return self._combine(region1, region2, _IntersectionMerger(), "intersection")

    def xor(self, region1, region2):
        return self._combine(region1, region2, _XorMerger(), "xor")

    def difference(self, region1, region2):
        """the part of ``region1`` outside of ``region2``"""
        return self._combine(region1, region2, _DifferenceMerger(), "difference")

    def get_complement(self, region):
        return region.build_new(_complement(region.get_tree(False)))

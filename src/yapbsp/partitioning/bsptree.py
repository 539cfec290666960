## binary space partitioning trees for yapBSP
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
Binary space partitioning trees.

A ``BSPTree`` node is either a leaf or an internal node carrying a cut
sub-hyperplane and two children.  The plus child holds the part of the
node's cell on the plus side of the cut hyperplane, the minus child the
part on its minus side.  Any node may carry an opaque ``attribute``;
regions put ``True``/``False`` on leaves to mean inside/outside and
boundary information on internal nodes.

Trees are built top-down with ``insert_cut``, which always clips the
inserted hyperplane to the cell of the node.  Two trees are combined
with ``merge``, the core of the boolean operations of
:mod:`yapbsp.partitioning.factory`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, List, Optional

from yapbsp.partitioning.hyperplane import Hyperplane, Side, SubHyperplane

__all__ = [
    "VisitOrder",
    "BSPTreeVisitor",
    "FunctionVisitor",
    "LeafMerger",
    "BSPTree",
]

logger = logging.getLogger(__name__)


class VisitOrder(Enum):
    """Order in which an internal node and its two subtrees are visited.

    ``SUB`` stands for the internal node itself.
    """
    PLUS_MINUS_SUB = ("plus", "minus", "sub")
    PLUS_SUB_MINUS = ("plus", "sub", "minus")
    MINUS_PLUS_SUB = ("minus", "plus", "sub")
    MINUS_SUB_PLUS = ("minus", "sub", "plus")
    SUB_PLUS_MINUS = ("sub", "plus", "minus")
    SUB_MINUS_PLUS = ("sub", "minus", "plus")


class BSPTreeVisitor(ABC):
    """Visitor walked over a tree by ``BSPTree.visit``."""

    @abstractmethod
    def visit_order(self, node: "BSPTree") -> VisitOrder:
        ...

    @abstractmethod
    def visit_internal_node(self, node: "BSPTree") -> None:
        ...

    @abstractmethod
    def visit_leaf_node(self, node: "BSPTree") -> None:
        ...


class FunctionVisitor(BSPTreeVisitor):
    """Visitor built from plain callables.

    ``order`` is either a fixed ``VisitOrder`` or a callable returning
    one for each internal node.  Missing callbacks do nothing.
    """

    def __init__(self, order=VisitOrder.SUB_MINUS_PLUS,
                 on_internal: Optional[Callable[["BSPTree"], None]] = None,
                 on_leaf: Optional[Callable[["BSPTree"], None]] = None):
        self._order = order
        self._on_internal = on_internal
        self._on_leaf = on_leaf

    def visit_order(self, node):
        if isinstance(self._order, VisitOrder):
            return self._order
        return self._order(node)

    def visit_internal_node(self, node):
        if self._on_internal is not None:
            self._on_internal(node)

    def visit_leaf_node(self, node):
        if self._on_leaf is not None:
            self._on_leaf(node)


class LeafMerger(ABC):
    """Merges a leaf of one tree with a whole subtree of the other one.

    ``leaf`` is the leaf node, ``tree`` the subtree it is merged with.
    The result must be attached below ``parent_tree`` on the side given
    by ``is_plus_child`` (``BSPTree.insert_in_tree`` does that) and
    returned.  ``leaf_from_instance`` is true when ``leaf`` comes from
    the tree ``merge`` was called on, false when it comes from the
    argument tree; it only matters for non commutative operations.
    """

    @abstractmethod
    def merge(self, leaf: "BSPTree", tree: "BSPTree",
              parent_tree: Optional["BSPTree"], is_plus_child: bool,
              leaf_from_instance: bool) -> "BSPTree":
        ...


class BSPTree:
    """A node of a binary space partitioning tree.

    ``BSPTree()`` and ``BSPTree(attribute=a)`` build leaves.
    ``BSPTree(cut, plus, minus, attribute)`` builds an internal node from
    an already fitted cut and two existing subtrees, which are attached
    to the new node.
    """

    def __init__(self, cut: Optional[SubHyperplane] = None,
                 plus: Optional["BSPTree"] = None,
                 minus: Optional["BSPTree"] = None,
                 attribute=None):
        if cut is None:
            if plus is not None or minus is not None:
                raise ValueError('bad tree: children given without a cut')
        elif plus is None or minus is None:
            raise ValueError('bad tree: a cut needs both children')
        self.cut = cut
        self.plus = plus
        self.minus = minus
        self.parent: Optional[BSPTree] = None
        self.attribute = attribute
        if cut is not None:
            plus.parent = self
            minus.parent = self

    def __repr__(self):
        if self.cut is None:
            return f"BSPTree(attribute={self.attribute!r})"
        return f"BSPTree(cut={self.cut!r}, attribute={self.attribute!r})"

    def is_leaf(self) -> bool:
        return self.cut is None

    def insert_cut(self, hyperplane: Hyperplane) -> bool:
        """Cut this node with ``hyperplane``.

        The whole hyperplane is first clipped to the cell of the node.
        If nothing remains the node becomes (or stays) a leaf and false
        is returned.  Otherwise the node gets the clipped cut and two new
        leaf children, any previous children are detached, and true is
        returned.  The node attribute is left untouched.
        """
        if self.cut is not None:
            self.plus.parent = None
            self.minus.parent = None

        chopped = self._fit_to_cell(hyperplane.whole_hyperplane())
        if chopped is None or chopped.is_empty():
            self.cut = None
            self.plus = None
            self.minus = None
            return False

        self.cut = chopped
        self.plus = BSPTree()
        self.plus.parent = self
        self.minus = BSPTree()
        self.minus.parent = self
        return True

    def copy_self(self) -> "BSPTree":
        """copy of the subtree rooted here; attributes are shared"""
        if self.cut is None:
            return BSPTree(attribute=self.attribute)
        return BSPTree(self.cut.copy_self(), self.plus.copy_self(),
                       self.minus.copy_self(), self.attribute)

    def visit(self, visitor: BSPTreeVisitor) -> None:
        if self.cut is None:
            visitor.visit_leaf_node(self)
            return
        for step in visitor.visit_order(self).value:
            if step == "plus":
                self.plus.visit(visitor)
            elif step == "minus":
                self.minus.visit(visitor)
            else:
                visitor.visit_internal_node(self)

    def leaves(self) -> List["BSPTree"]:
        """leaf nodes of the subtree, minus side first"""
        found = []
        self.visit(FunctionVisitor(VisitOrder.MINUS_PLUS_SUB,
                                   on_leaf=found.append))
        return found

    def _fit_to_cell(self, sub: Optional[SubHyperplane]) -> Optional[SubHyperplane]:
        # clip against every ancestor cut, keeping the side this node is on
        s = sub
        tree = self
        while tree.parent is not None and s is not None:
            parts = s.split(tree.parent.cut.hyperplane)
            s = parts.plus if tree is tree.parent.plus else parts.minus
            tree = tree.parent
        return s

    def get_cell(self, point, tolerance: float) -> "BSPTree":
        """Return the deepest node whose cell contains ``point``.

        This is a leaf, unless the point lies within ``tolerance`` of the
        cut of an internal node, in which case that node is returned.
        """
        if self.cut is None:
            return self

        offset = self.cut.hyperplane.get_offset(point)
        if abs(offset) < tolerance:
            return self
        if offset <= 0:
            return self.minus.get_cell(point, tolerance)
        return self.plus.get_cell(point, tolerance)

    def get_close_cuts(self, point, max_offset: float) -> List["BSPTree"]:
        """internal nodes whose cut hyperplane is within ``max_offset`` of ``point``"""
        close: List[BSPTree] = []
        self._recurse_close_cuts(point, max_offset, close)
        return close

    def _recurse_close_cuts(self, point, max_offset, close):
        if self.cut is None:
            return
        offset = self.cut.hyperplane.get_offset(point)
        if offset < -max_offset:
            self.minus._recurse_close_cuts(point, max_offset, close)
        elif offset > max_offset:
            self.plus._recurse_close_cuts(point, max_offset, close)
        else:
            close.append(self)
            self.plus._recurse_close_cuts(point, max_offset, close)
            self.minus._recurse_close_cuts(point, max_offset, close)

    def _condense(self):
        if (self.cut is not None
                and self.plus.cut is None and self.minus.cut is None
                and ((self.plus.attribute is None and self.minus.attribute is None)
                     or (self.plus.attribute is not None
                         and self.plus.attribute == self.minus.attribute))):
            self.attribute = (self.minus.attribute if self.plus.attribute is None
                              else self.plus.attribute)
            self.cut = None
            self.plus = None
            self.minus = None

    def merge(self, tree: "BSPTree", leaf_merger: LeafMerger) -> "BSPTree":
        """Merge ``tree`` into this tree.

        Both trees are consumed: their nodes are reused to build the
        result, so neither should be used afterwards.
        """
        return self._merge(tree, leaf_merger, None, False)

    def _merge(self, tree, leaf_merger, parent_tree, is_plus_child):
        if self.cut is None:
            return leaf_merger.merge(self, tree, parent_tree, is_plus_child, True)
        if tree.cut is None:
            return leaf_merger.merge(tree, self, parent_tree, is_plus_child, False)

        merged = tree.split(self.cut)
        if parent_tree is not None:
            merged.parent = parent_tree
            if is_plus_child:
                parent_tree.plus = merged
            else:
                parent_tree.minus = merged

        self.plus._merge(merged.plus, leaf_merger, merged, True)
        self.minus._merge(merged.minus, leaf_merger, merged, False)
        merged._condense()
        if merged.cut is not None:
            merged.cut = merged._fit_to_cell(merged.cut.hyperplane.whole_hyperplane())
        return merged

    def split(self, sub: SubHyperplane) -> "BSPTree":
        """Split the tree by a sub-hyperplane.

        Returns a new tree whose root cut is ``sub`` and whose children
        are the parts of this tree on each side of it.  This tree is not
        modified.  ``sub`` is expected to be already fitted to the cell
        the result will live in.
        """
        if self.cut is None:
            return BSPTree(sub, self.copy_self(), BSPTree(attribute=self.attribute), None)

        c_hyperplane = self.cut.hyperplane
        s_hyperplane = sub.hyperplane
        side = sub.side(c_hyperplane)

        if side is Side.PLUS:
            # the sub-hyperplane lies entirely on the plus side of our cut
            split = self.plus.split(sub)
            if self.cut.side(s_hyperplane) is Side.PLUS:
                split.plus = BSPTree(self.cut.copy_self(), split.plus,
                                     self.minus.copy_self(), self.attribute)
                split.plus._condense()
                split.plus.parent = split
            else:
                split.minus = BSPTree(self.cut.copy_self(), split.minus,
                                      self.minus.copy_self(), self.attribute)
                split.minus._condense()
                split.minus.parent = split
            return split

        if side is Side.MINUS:
            split = self.minus.split(sub)
            if self.cut.side(s_hyperplane) is Side.PLUS:
                split.plus = BSPTree(self.cut.copy_self(), self.plus.copy_self(),
                                     split.plus, self.attribute)
                split.plus._condense()
                split.plus.parent = split
            else:
                split.minus = BSPTree(self.cut.copy_self(), self.plus.copy_self(),
                                      split.minus, self.attribute)
                split.minus._condense()
                split.minus.parent = split
            return split

        if side is Side.BOTH:
            cut_parts = self.cut.split(s_hyperplane)
            sub_parts = sub.split(c_hyperplane)
            split = BSPTree(sub,
                            self.plus.split(sub_parts.plus),
                            self.minus.split(sub_parts.minus),
                            None)
            split.plus.cut = cut_parts.plus
            split.minus.cut = cut_parts.minus
            # exchange the cross quadrants so each side keeps its own cut
            tmp = split.plus.minus
            split.plus.minus = split.minus.plus
            split.plus.minus.parent = split.plus
            split.minus.plus = tmp
            split.minus.plus.parent = split.minus
            split.plus._condense()
            split.minus._condense()
            return split

        # the sub-hyperplane lies in our cut hyperplane
        if c_hyperplane.same_orientation_as(s_hyperplane):
            return BSPTree(sub, self.plus.copy_self(), self.minus.copy_self(), self.attribute)
        return BSPTree(sub, self.minus.copy_self(), self.plus.copy_self(), self.attribute)

    def insert_in_tree(self, parent_tree: Optional["BSPTree"], is_plus_child: bool) -> None:
        """Attach this subtree below ``parent_tree``.

        Every cut of the subtree is chopped so that it lies in the cell
        defined by the new ancestors, and the subtree is condensed.
        """
        self.parent = parent_tree
        if parent_tree is not None:
            if is_plus_child:
                parent_tree.plus = self
            else:
                parent_tree.minus = self

        if self.cut is None:
            return

        tree = self
        while tree.parent is not None and self.cut is not None:
            anchor = tree.parent.cut
            hyperplane = self.cut.hyperplane
            keep_plus = tree is tree.parent.plus
            if keep_plus:
                self.cut = self.cut.split(anchor.hyperplane).plus
                self.plus._chop_off_minus(anchor)
                self.minus._chop_off_minus(anchor)
            else:
                self.cut = self.cut.split(anchor.hyperplane).minus
                self.plus._chop_off_plus(anchor)
                self.minus._chop_off_plus(anchor)
            if self.cut is None:
                self._collapse_vanished_cut(hyperplane, anchor, keep_plus)
            tree = tree.parent

        self._condense()

    def prune_around_convex_cell(self, cell_attribute, other_leafs_attribute,
                                 internal_attribute) -> "BSPTree":
        """Build a tree keeping only the path from the root to this cell.

        Every sibling along the path becomes a leaf carrying
        ``other_leafs_attribute``; this cell becomes a leaf carrying
        ``cell_attribute`` and the rebuilt internal nodes carry
        ``internal_attribute``.
        """
        tree = BSPTree(attribute=cell_attribute)
        current = self
        while current.parent is not None:
            parent_cut = current.parent.cut.copy_self()
            sibling = BSPTree(attribute=other_leafs_attribute)
            if current is current.parent.plus:
                tree = BSPTree(parent_cut, tree, sibling, internal_attribute)
            else:
                tree = BSPTree(parent_cut, sibling, tree, internal_attribute)
            current = current.parent
        return tree

    def _chop_off_minus(self, anchor):
        if self.cut is not None:
            hyperplane = self.cut.hyperplane
            self.cut = self.cut.split(anchor.hyperplane).plus
            self.plus._chop_off_minus(anchor)
            self.minus._chop_off_minus(anchor)
            if self.cut is None:
                self._collapse_vanished_cut(hyperplane, anchor, True)

    def _chop_off_plus(self, anchor):
        if self.cut is not None:
            hyperplane = self.cut.hyperplane
            self.cut = self.cut.split(anchor.hyperplane).minus
            self.plus._chop_off_plus(anchor)
            self.minus._chop_off_plus(anchor)
            if self.cut is None:
                self._collapse_vanished_cut(hyperplane, anchor, False)

    @staticmethod
    def _vanished_cut_side(hyperplane, anchor, keep_plus) -> Side:
        """side of ``hyperplane`` holding the chopped cell, judged from the
        ancestor cut ``anchor`` that bounds it"""
        side = anchor.side(hyperplane)
        if side is Side.HYPER:
            # the cell is on the kept side of the anchor
            same = anchor.hyperplane.same_orientation_as(hyperplane)
            return Side.PLUS if keep_plus == same else Side.MINUS
        return side

    def _collapse_vanished_cut(self, hyperplane, anchor, keep_plus):
        # the chopped cell no longer meets the cut hyperplane, so it lies on
        # one side of it and every cut on the other side vanished as well
        plus, minus = self.plus, self.minus
        if plus.cut is not None and minus.cut is None:
            kept = plus
        elif minus.cut is not None and plus.cut is None:
            kept = minus
        elif plus.cut is None and plus.attribute == minus.attribute:
            kept = plus
        else:
            side = BSPTree._vanished_cut_side(hyperplane, anchor, keep_plus)
            if side is Side.PLUS:
                kept = plus
            elif side is Side.MINUS:
                kept = minus
            else:
                logger.debug("vanished cut straddled by %r, keeping the minus subtree", anchor)
                kept = minus

        self.cut = kept.cut
        self.plus = kept.plus
        self.minus = kept.minus
        self.attribute = kept.attribute
        if self.cut is not None:
            self.plus.parent = self
            self.minus.parent = self

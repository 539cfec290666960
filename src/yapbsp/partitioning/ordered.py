"""
In-order navigation of one dimensional region trees.

In a one dimensional space every cut is a single oriented point, so the
internal nodes of a tree can be ordered along the line (or around the
circle).  ``OrderedLimitsMixin`` provides the walk used by intervals and
arcs to enumerate their limits; the host class supplies
``_limit_value(node)``, the abscissa or angle of a node's cut.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from yapbsp.partitioning.bsptree import BSPTree

__all__ = ["OrderedLimitsMixin"]


class OrderedLimitsMixin(ABC):

    @abstractmethod
    def _limit_value(self, node: BSPTree) -> float:
        ...

    @staticmethod
    def _is_direct(node: BSPTree) -> bool:
        return node.cut.hyperplane.direct

    def _child_before(self, node):
        return node.minus if self._is_direct(node) else node.plus

    def _child_after(self, node):
        return node.plus if self._is_direct(node) else node.minus

    def _is_before_parent(self, node):
        parent = node.parent
        return parent is not None and node is self._child_before(parent)

    def _is_after_parent(self, node):
        parent = node.parent
        return parent is not None and node is self._child_after(parent)

    def _leaf_before(self, node):
        node = self._child_before(node)
        while node.cut is not None:
            node = self._child_after(node)
        return node

    def _leaf_after(self, node):
        node = self._child_after(node)
        while node.cut is not None:
            node = self._child_before(node)
        return node

    def _next_internal_node(self, node) -> Optional[BSPTree]:
        if self._child_after(node).cut is not None:
            return self._leaf_after(node).parent
        while self._is_after_parent(node):
            node = node.parent
        return node.parent

    def _previous_internal_node(self, node) -> Optional[BSPTree]:
        if self._child_before(node).cut is not None:
            return self._leaf_before(node).parent
        while self._is_before_parent(node):
            node = node.parent
        return node.parent

    def _first_leaf(self, root):
        if root.cut is None:
            return root
        smallest = root
        n = self._previous_internal_node(root)
        while n is not None:
            smallest = n
            n = self._previous_internal_node(n)
        return self._leaf_before(smallest)

    def _last_leaf(self, root):
        if root.cut is None:
            return root
        largest = root
        n = self._next_internal_node(root)
        while n is not None:
            largest = n
            n = self._next_internal_node(n)
        return self._leaf_after(largest)

    def _is_start(self, node) -> bool:
        """true if the region starts at this limit"""
        return not self._leaf_before(node).attribute and bool(self._leaf_after(node).attribute)

    def _is_end(self, node) -> bool:
        """true if the region ends at this limit"""
        return bool(self._leaf_before(node).attribute) and not self._leaf_after(node).attribute

    def _next_matching(self, node, predicate):
        while node is not None and not predicate(node):
            node = self._next_internal_node(node)
        return node

    def _previous_matching(self, node, predicate):
        while node is not None and not predicate(node):
            node = self._previous_internal_node(node)
        return node

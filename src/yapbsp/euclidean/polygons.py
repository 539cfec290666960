## polygons sets of the plane for yapBSP
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
Regions of the plane bounded by straight edges.

A ``PolygonsSet`` may have several disjoint parts, holes, and unbounded
parts.  Its boundary is recovered from the tree as a list of loops of
vertices: closed loops are counterclockwise around inside parts and
clockwise around holes, open loops start with ``None``.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from yapbsp.errors import MathInternalError
from yapbsp.euclidean.oned import Vector1D
from yapbsp.euclidean.twod import Line, Segment, Vector2D, as_vector2d
from yapbsp.geom import DEFAULT_TOLERANCE
from yapbsp.partitioning.bsptree import BSPTree, FunctionVisitor, VisitOrder
from yapbsp.partitioning.hyperplane import Side
from yapbsp.partitioning.region import AbstractRegion

__all__ = ["PolygonsSet"]

logger = logging.getLogger(__name__)

## largest single precision float, used to materialise infinite lines
_FLOAT_MAX = 3.4028234663852886e+38

## distance below which two loop vertices are considered identical
_LOOP_TOLERANCE = 1.0e-10


class PolygonsSet(AbstractRegion):
    """A set of polygons of the plane.

    ``PolygonsSet(tolerance=t)`` is the whole plane,
    ``PolygonsSet(tree, t)`` wraps an existing tree.  See also
    ``from_box``, ``from_vertices``, ``from_boundary`` and
    ``from_hyperplanes``.
    """

    def __init__(self, tree: Optional[BSPTree] = None,
                 tolerance: float = DEFAULT_TOLERANCE):
        super().__init__(tree, tolerance)
        self._vertices = None

    @classmethod
    def from_box(cls, x_min: float, x_max: float, y_min: float, y_max: float,
                 tolerance: float = DEFAULT_TOLERANCE) -> "PolygonsSet":
        """axis aligned rectangle; empty if thinner than the tolerance"""
        lines = _box_boundary(x_min, x_max, y_min, y_max, tolerance)
        if lines is None:
            return cls(BSPTree(attribute=False), tolerance)
        return cls.from_hyperplanes(lines, tolerance)

    @classmethod
    def from_vertices(cls, vertices: Sequence,
                      hyperplane_thickness: float = DEFAULT_TOLERANCE) -> "PolygonsSet":
        """Build a simple polygon from its vertices.

        The vertices must be given counterclockwise, without repeating
        the first one at the end; the polygon must not self-intersect.
        Vertices closer than ``hyperplane_thickness`` to the line of an
        edge are considered to lie on it.
        """
        return cls(_vertices_to_tree(hyperplane_thickness,
                                     [as_vector2d(v) for v in vertices]),
                   hyperplane_thickness)

    def build_new(self, tree):
        return PolygonsSet(tree, self.tolerance)

    def _as_point(self, point):
        return as_vector2d(point)

    def boundary_segments(self) -> List[Segment]:
        """Oriented boundary segments, inside on their left.

        Unbounded segments have ``None`` for their missing end.
        """
        if self.get_tree(False).cut is None:
            return []
        segments: List[Segment] = []

        def add_contribution(sub, reversed_):
            for segment in sub.segments:
                if reversed_:
                    segments.append(Segment(segment.end, segment.start, segment.line.reverse()))
                else:
                    segments.append(segment)

        def visit_internal(node):
            attribute = node.attribute
            if attribute.plus_outside is not None:
                add_contribution(attribute.plus_outside, False)
            if attribute.plus_inside is not None:
                add_contribution(attribute.plus_inside, True)

        self.get_tree(True).visit(FunctionVisitor(VisitOrder.MINUS_SUB_PLUS,
                                                  on_internal=visit_internal))
        return segments

    @property
    def vertices(self) -> List[List[Optional[Vector2D]]]:
        """Boundary loops as lists of vertices.

        Closed loops list each vertex once.  Open loops start with
        ``None`` followed by a point on the first (infinite) edge, their
        finite vertices, and a point on the last (infinite) edge.
        """
        if self._vertices is None:
            self._vertices = self._compute_vertices()
        return [list(loop) for loop in self._vertices]

    def _compute_vertices(self):
        if self.get_tree(False).cut is None:
            return []

        remaining = sorted(self.boundary_segments(), key=_segment_key)
        loops = []
        while remaining:
            loop = _follow_loop(remaining.pop(0), remaining)
            if loop is not None:
                loops.append(loop)
        logger.debug("found %d boundary loops", len(loops))

        vertices = []
        for loop in loops:
            if len(loop) < 2:
                # a single infinite line
                line = loop[0].line
                vertices.append([None,
                                 line.to_space(Vector1D(-_FLOAT_MAX)),
                                 line.to_space(Vector1D(_FLOAT_MAX))])
            elif loop[0].start is None:
                first = loop[0]
                x = first.line.to_sub_space(first.end).x
                x -= max(1.0, abs(x / 2))
                array = [None, first.line.to_space(Vector1D(x))]
                array.extend(segment.end for segment in loop[:-1])
                last = loop[-1]
                x = last.line.to_sub_space(last.start).x
                x += max(1.0, abs(x / 2))
                array.append(last.line.to_space(Vector1D(x)))
                vertices.append(array)
            else:
                vertices.append([segment.start for segment in loop])
        return vertices

    def compute_geometrical_properties(self):
        v = self.vertices
        if not v:
            tree = self.get_tree(False)
            if tree.cut is None and tree.attribute:
                self._set_size(math.inf)
                self._set_barycenter(Vector2D.NAN)
            else:
                self._set_size(0.0)
                self._set_barycenter(Vector2D(0.0, 0.0))
            return

        if v[0][0] is None:
            self._set_size(math.inf)
            self._set_barycenter(Vector2D.NAN)
            return

        # shoelace sums over every closed loop
        total = 0.0
        sum_x = 0.0
        sum_y = 0.0
        for loop in v:
            x1, y1 = loop[-1].x, loop[-1].y
            for point in loop:
                x0, y0 = x1, y1
                x1, y1 = point.x, point.y
                factor = x0 * y1 - y0 * x1
                total += factor
                sum_x += factor * (x0 + x1)
                sum_y += factor * (y0 + y1)

        if total < 0:
            # outer loops run clockwise: the region is the unbounded outside
            self._set_size(math.inf)
            self._set_barycenter(Vector2D.NAN)
        else:
            self._set_size(total / 2)
            self._set_barycenter(Vector2D(sum_x / (3 * total), sum_y / (3 * total)))


def _segment_key(segment):
    if segment.start is None:
        return (-math.inf, -math.inf)
    return (segment.start.x, segment.start.y)


def _follow_loop(segment, remaining):
    """chain segments end to start, starting from ``segment``"""
    loop = [segment]
    global_start = segment.start
    end = segment.end
    is_open = segment.start is None

    while end is not None and (is_open or global_start.distance(end) > _LOOP_TOLERANCE):
        selected = None
        selected_distance = math.inf
        for index, candidate in enumerate(remaining):
            if candidate.start is None:
                continue
            distance = end.distance(candidate.start)
            if distance < selected_distance:
                selected = index
                selected_distance = distance
        if selected_distance > _LOOP_TOLERANCE:
            # the boundary is not closed here, drop this loop
            return None
        segment = remaining.pop(selected)
        end = segment.end
        loop.append(segment)

    if len(loop) == 2 and not is_open:
        # a degenerate back and forth loop
        return None
    if end is None and not is_open:
        raise MathInternalError()
    return loop


def _box_boundary(x_min, x_max, y_min, y_max, tolerance):
    if x_min >= x_max - tolerance or y_min >= y_max - tolerance:
        return None
    min_min = Vector2D(x_min, y_min)
    min_max = Vector2D(x_min, y_max)
    max_min = Vector2D(x_max, y_min)
    max_max = Vector2D(x_max, y_max)
    return [Line(min_min, max_min, tolerance),
            Line(max_min, max_max, tolerance),
            Line(max_max, min_max, tolerance),
            Line(min_max, min_min, tolerance)]


class _Vertex:
    def __init__(self, location: Vector2D):
        self.location = location
        self.incoming = None
        self.outgoing = None
        self.lines = []

    def bind_with(self, line):
        self.lines.append(line)

    def shared_line_with(self, vertex):
        for line1 in self.lines:
            for line2 in vertex.lines:
                if line1 is line2:
                    return line1
        return None

    def set_incoming(self, edge):
        self.incoming = edge
        self.bind_with(edge.line)

    def set_outgoing(self, edge):
        self.outgoing = edge
        self.bind_with(edge.line)


class _Edge:
    def __init__(self, start: _Vertex, end: _Vertex, line: Line):
        self.start = start
        self.end = end
        self.line = line
        self.node = None
        start.set_outgoing(self)
        end.set_incoming(self)

    def split(self, split_line: Line) -> _Vertex:
        split_vertex = _Vertex(self.line.intersection(split_line))
        split_vertex.bind_with(split_line)
        start_half = _Edge(self.start, split_vertex, self.line)
        end_half = _Edge(split_vertex, self.end, self.line)
        start_half.node = self.node
        end_half.node = self.node
        return split_vertex


def _vertices_to_tree(hyperplane_thickness, vertices):
    n = len(vertices)
    if n == 0:
        return BSPTree(attribute=True)

    v_array = [_Vertex(v) for v in vertices]

    # build the edges, reusing the line of aligned neighbours
    edges = []
    for i in range(n):
        start = v_array[i]
        end = v_array[(i + 1) % n]
        line = start.shared_line_with(end)
        if line is None:
            line = Line(start.location, end.location, hyperplane_thickness)
        edges.append(_Edge(start, end, line))

        for vertex in v_array:
            if (vertex is not start and vertex is not end
                    and abs(line.get_offset(vertex.location)) <= hyperplane_thickness):
                vertex.bind_with(line)

    tree = BSPTree()
    _insert_edges(hyperplane_thickness, tree, edges)
    return tree


def _point_side(offset, thickness):
    if abs(offset) <= thickness:
        return Side.HYPER
    return Side.MINUS if offset < 0 else Side.PLUS


def _insert_edges(hyperplane_thickness, node, edges):
    inserted = None
    for edge in edges:
        if edge.node is None and node.insert_cut(edge.line):
            edge.node = node
            inserted = edge
            break

    if inserted is None:
        parent = node.parent
        node.attribute = parent is None or node is parent.minus
        return

    # distribute the remaining edges in the two subtrees
    plus_list = []
    minus_list = []
    for edge in edges:
        if edge is inserted:
            continue
        start_side = _point_side(inserted.line.get_offset(edge.start.location), hyperplane_thickness)
        end_side = _point_side(inserted.line.get_offset(edge.end.location), hyperplane_thickness)
        if start_side is Side.PLUS:
            if end_side is Side.MINUS:
                split_point = edge.split(inserted.line)
                minus_list.append(split_point.outgoing)
                plus_list.append(split_point.incoming)
            else:
                plus_list.append(edge)
        elif start_side is Side.MINUS:
            if end_side is Side.PLUS:
                split_point = edge.split(inserted.line)
                minus_list.append(split_point.incoming)
                plus_list.append(split_point.outgoing)
            else:
                minus_list.append(edge)
        elif end_side is Side.PLUS:
            plus_list.append(edge)
        elif end_side is Side.MINUS:
            minus_list.append(edge)
        # edges lying in the inserted line are already represented

    if plus_list:
        _insert_edges(hyperplane_thickness, node.plus, plus_list)
    else:
        node.plus.attribute = False
    if minus_list:
        _insert_edges(hyperplane_thickness, node.minus, minus_list)
    else:
        node.minus.attribute = True

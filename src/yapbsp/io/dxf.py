"""DXF export of region boundaries with ezdxf."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import ezdxf

from yapbsp.euclidean.oned import IntervalsSet
from yapbsp.euclidean.polygons import PolygonsSet
from yapbsp.geom import pi2
from yapbsp.spherical.oned import ArcsSet

__all__ = ["write_dxf"]

logger = logging.getLogger(__name__)


def _draw_polygons(msp, region: PolygonsSet, dxfattribs):
    if math.isinf(region.size):
        raise ValueError('cannot export an unbounded polygons set to DXF')
    count = 0
    for segment in region.boundary_segments():
        if segment.start is None or segment.end is None:
            raise ValueError('cannot export an unbounded polygons set to DXF')
        msp.add_line((segment.start.x, segment.start.y),
                     (segment.end.x, segment.end.y),
                     dxfattribs=dxfattribs)
        count += 1
    return count


def _draw_intervals(msp, region: IntervalsSet, dxfattribs):
    count = 0
    for lower, upper in region:
        if math.isinf(lower) or math.isinf(upper):
            raise ValueError('cannot export an unbounded intervals set to DXF')
        msp.add_line((lower, 0.0), (upper, 0.0), dxfattribs=dxfattribs)
        count += 1
    return count


def _draw_arcs(msp, region: ArcsSet, center, radius, dxfattribs):
    count = 0
    for lower, upper in region:
        if upper - lower >= pi2:
            msp.add_circle((center[0], center[1]), radius, dxfattribs=dxfattribs)
        else:
            msp.add_arc((center[0], center[1]), radius,
                        math.degrees(lower), math.degrees(upper) % 360.0,
                        dxfattribs=dxfattribs)
        count += 1
    return count


def write_dxf(region, path, layer="PATHS", color=7, center=(0.0, 0.0), radius=1.0) -> Path:
    """Write the boundary of ``region`` to the DXF file ``path``.

    Polygons sets are written as lines, intervals sets as lines along the
    x axis, arcs sets as arcs (or a circle) of the given ``center`` and
    ``radius``.  Unbounded regions raise ``ValueError``.
    """
    if radius <= 0.0:
        raise ValueError('bad radius passed to write_dxf: {}'.format(radius))

    doc = ezdxf.new(dxfversion='R2010')
    if layer != '0':
        doc.layers.new(layer, dxfattribs={'color': color})
    msp = doc.modelspace()
    dxfattribs = {'layer': layer, 'color': 256}  # bylayer

    if isinstance(region, PolygonsSet):
        count = _draw_polygons(msp, region, dxfattribs)
    elif isinstance(region, IntervalsSet):
        count = _draw_intervals(msp, region, dxfattribs)
    elif isinstance(region, ArcsSet):
        count = _draw_arcs(msp, region, center, radius, dxfattribs)
    else:
        raise TypeError(f"unsupported region type: {type(region).__name__}")

    target = Path(path)
    doc.saveas(target)
    logger.debug("wrote %d entities to %s", count, target)
    return target

"""Region serialization/deserialization helpers.

A region document is a plain dictionary::

    {"schema": "yapbsp-region-v0.1",
     "kind": "intervals" | "arcs" | "polygons",
     "tolerance": 1e-10,
     "tree": <node>}

where a leaf node is ``{"inside": bool}`` and an internal node is
``{"cut": <cut>, "plus": <node>, "minus": <node>}``.  Cuts of intervals
and arcs are ``{"location": float, "direct": bool}``; cuts of polygons
are ``{"angle": float, "offset": float, "region": <node>}`` where
``region`` is the intervals tree of the abscissas covered by the cut.

Boundary attributes are not stored, they are recomputed on demand.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict

from yapbsp.errors import RegionFormatError
from yapbsp.euclidean.oned import IntervalsSet, OrientedPoint
from yapbsp.euclidean.polygons import PolygonsSet
from yapbsp.euclidean.twod import Line, SubLine
from yapbsp.partitioning.bsptree import BSPTree
from yapbsp.spherical.oned import ArcsSet, LimitAngle

__all__ = [
    "SCHEMA_ID",
    "region_to_dict",
    "region_from_dict",
    "write_region",
    "read_region",
]

logger = logging.getLogger(__name__)

SCHEMA_ID = "yapbsp-region-v0.1"

_YAML_SUFFIXES = (".yaml", ".yml")


def _kind_of(region) -> str:
    if isinstance(region, IntervalsSet):
        return "intervals"
    if isinstance(region, ArcsSet):
        return "arcs"
    if isinstance(region, PolygonsSet):
        return "polygons"
    raise TypeError(f"unsupported region type: {type(region).__name__}")


def _encode_point_cut(sub) -> Dict[str, Any]:
    hyperplane = sub.hyperplane
    location = hyperplane.location
    value = location.x if hasattr(location, "x") else location.alpha
    return {"location": float(value), "direct": bool(hyperplane.direct)}


def _encode_line_cut(sub) -> Dict[str, Any]:
    line = sub.hyperplane
    return {
        "angle": float(line.angle),
        "offset": float(line.origin_offset),
        "region": _encode_tree(sub.remaining_region.get_tree(False), _encode_point_cut),
    }


def _encode_tree(node: BSPTree, encode_cut) -> Dict[str, Any]:
    if node.cut is None:
        return {"inside": bool(node.attribute)}
    return {
        "cut": encode_cut(node.cut),
        "plus": _encode_tree(node.plus, encode_cut),
        "minus": _encode_tree(node.minus, encode_cut),
    }


def region_to_dict(region) -> Dict[str, Any]:
    """Serialize an ``IntervalsSet``, ``ArcsSet`` or ``PolygonsSet``."""
    kind = _kind_of(region)
    encode_cut = _encode_line_cut if kind == "polygons" else _encode_point_cut
    return {
        "schema": SCHEMA_ID,
        "kind": kind,
        "tolerance": float(region.tolerance),
        "tree": _encode_tree(region.get_tree(False), encode_cut),
    }


def _require(entry: Dict[str, Any], key: str):
    if not isinstance(entry, dict):
        raise RegionFormatError(f"expected a mapping, got {entry!r}")
    if key not in entry:
        raise RegionFormatError(f"node missing '{key}': {entry!r}")
    return entry[key]


def _number(entry: Dict[str, Any], key: str) -> float:
    value = _require(entry, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RegionFormatError(f"'{key}' must be a number, got {value!r}")
    return float(value)


def _flag(entry: Dict[str, Any], key: str) -> bool:
    value = _require(entry, key)
    if not isinstance(value, bool):
        raise RegionFormatError(f"'{key}' must be a boolean, got {value!r}")
    return value


def _decode_tree(entry: Dict[str, Any], decode_cut) -> BSPTree:
    if isinstance(entry, dict) and "cut" not in entry:
        return BSPTree(attribute=_flag(entry, "inside"))
    cut = decode_cut(_require(entry, "cut"))
    return BSPTree(cut,
                   _decode_tree(_require(entry, "plus"), decode_cut),
                   _decode_tree(_require(entry, "minus"), decode_cut),
                   None)


def _cut_decoders(tolerance: float):
    def oriented_point(entry):
        return OrientedPoint(_number(entry, "location"), _flag(entry, "direct"),
                             tolerance).whole_hyperplane()

    def limit_angle(entry):
        return LimitAngle(_number(entry, "location"), _flag(entry, "direct"),
                          tolerance).whole_hyperplane()

    def sub_line(entry):
        angle = _number(entry, "angle")
        offset = _number(entry, "offset")
        # the point of the line closest to the origin
        p = (-offset * math.sin(angle), offset * math.cos(angle))
        line = Line.from_point_angle(p, angle, tolerance)
        remaining = IntervalsSet(_decode_tree(_require(entry, "region"), oriented_point),
                                 tolerance)
        return SubLine(line, remaining)

    return {"intervals": oriented_point, "arcs": limit_angle, "polygons": sub_line}


_REGION_TYPES = {"intervals": IntervalsSet, "arcs": ArcsSet, "polygons": PolygonsSet}


def region_from_dict(doc: Dict[str, Any]):
    """Rebuild a region from ``region_to_dict`` output."""
    if not isinstance(doc, dict):
        raise RegionFormatError(f"region document must be a mapping, got {type(doc).__name__}")
    if doc.get("schema") != SCHEMA_ID:
        raise RegionFormatError(f"unsupported region schema: {doc.get('schema')}")
    kind = doc.get("kind")
    if kind not in _REGION_TYPES:
        raise RegionFormatError(f"unsupported region kind: {kind}")
    tolerance = _number(doc, "tolerance")
    if math.isnan(tolerance) or tolerance < 0.0:
        raise RegionFormatError(f"bad tolerance: {tolerance}")

    tree = _decode_tree(_require(doc, "tree"), _cut_decoders(tolerance)[kind])
    logger.debug("decoded %s region", kind)
    return _REGION_TYPES[kind](tree, tolerance)


def write_region(region, path) -> Path:
    """Write ``region`` to ``path`` as YAML (``.yaml``/``.yml``) or JSON."""
    target = Path(path)
    doc = region_to_dict(region)
    with target.open("w", encoding="utf-8") as fp:
        if target.suffix.lower() in _YAML_SUFFIXES:
            import yaml
            yaml.safe_dump(doc, fp, sort_keys=False)
        else:
            json.dump(doc, fp, indent=2, sort_keys=False)
    logger.debug("wrote %s region to %s", doc["kind"], target)
    return target


def read_region(path):
    """Read a region written by ``write_region``."""
    source = Path(path)
    with source.open("r", encoding="utf-8") as fp:
        if source.suffix.lower() in _YAML_SUFFIXES:
            import yaml
            try:
                doc = yaml.safe_load(fp)
            except yaml.YAMLError as exc:
                raise RegionFormatError(f"invalid region YAML in {source}: {exc}") from exc
        else:
            try:
                doc = json.load(fp)
            except json.JSONDecodeError as exc:
                raise RegionFormatError(f"invalid region JSON in {source}: {exc}") from exc
    return region_from_dict(doc)

# riskmap/services/geometry.py
"""
GeoJSON → KML geometry helpers.

Merging is plain concatenation of polygon coordinate sets: no union, no
reprojection, no ring validation.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from riskmap.core.contracts import GeoJSON


def feature_geometry(feature: Optional[GeoJSON]) -> Optional[GeoJSON]:
    """The feature's geometry object, or None when absent or not an object."""
    if not isinstance(feature, dict):
        return None
    geom = feature.get("geometry")
    return geom if isinstance(geom, dict) and geom else None


def combine_geometries(features: Iterable[Optional[GeoJSON]]) -> Optional[GeoJSON]:
    """Collect every Polygon / MultiPolygon member into one MultiPolygon, in input order."""
    polygons: List[Any] = []

    for feature in features:
        geom = feature_geometry(feature)
        if geom is None:
            continue
        gtype = geom.get("type")
        if gtype == "Polygon":
            polygons.append(geom.get("coordinates") or [])
        elif gtype == "MultiPolygon":
            polygons.extend(geom.get("coordinates") or [])

    if not polygons:
        return None

    return {"type": "MultiPolygon", "coordinates": polygons}


def _fmt_number(v: Any) -> str:
    if isinstance(v, float):
        if v.is_integer():
            return str(int(v))
        text = repr(v)
        if "e" in text:
            # Positional notation, never 5e-05
            text = format(v, ".20f").rstrip("0").rstrip(".")
        return text
    return str(v)


def coords_to_kml(coords: Any) -> str:
    """
    Flatten nested GeoJSON positions into "lng,lat,0" triplets.

    >>> coords_to_kml([[1, 2], [3, 4]])
    '1,2,0 3,4,0'
    """
    if coords and isinstance(coords[0], (int, float)):
        return f"{_fmt_number(coords[0])},{_fmt_number(coords[1])},0"
    return " ".join(coords_to_kml(c) for c in coords)


def _polygon_to_kml(rings: List[Any], indent: str) -> List[str]:
    lines = [f"{indent}<Polygon>"]
    if rings:
        lines.append(f"{indent}  <outerBoundaryIs><LinearRing><coordinates>")
        lines.append(f"{indent}    {coords_to_kml(rings[0])}")
        lines.append(f"{indent}  </coordinates></LinearRing></outerBoundaryIs>")

    # Holes
    for ring in rings[1:]:
        lines.append(f"{indent}  <innerBoundaryIs><LinearRing><coordinates>")
        lines.append(f"{indent}    {coords_to_kml(ring)}")
        lines.append(f"{indent}  </coordinates></LinearRing></innerBoundaryIs>")

    lines.append(f"{indent}</Polygon>")
    return lines


def geometry_to_kml(geometry: GeoJSON, indent: str = "        ") -> str:
    """Polygon → <Polygon>, MultiPolygon → <MultiGeometry>; anything else renders empty."""
    gtype = geometry.get("type")
    coords = geometry.get("coordinates") or []

    if gtype == "Polygon":
        return "\n".join(_polygon_to_kml(coords, indent))

    if gtype == "MultiPolygon":
        lines = [f"{indent}<MultiGeometry>"]
        for polygon in coords:
            lines.extend(_polygon_to_kml(polygon, indent + "  "))
        lines.append(f"{indent}</MultiGeometry>")
        return "\n".join(lines)

    return ""

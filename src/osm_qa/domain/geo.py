"""
Pure geometry helpers on (lon, lat) degree pairs.

Distances use a local equirectangular form: fine for the few metres
the validators look at, wrong across continents. Area and length of whole
features use great-circle math on the unit sphere.
"""

import math
from collections.abc import Sequence

import numpy as np

from osm_qa.domain.entities.geography import Loc

# Latitude degrees scale by 6378137.0,
# longitude degrees by 6356752.314245179.
_LAT_RADIUS_M = 6378137.0
_LON_RADIUS_M = 6356752.314245179
_M_PER_DEG_LAT = 2 * math.pi * _LAT_RADIUS_M / 360
_M_PER_DEG_LON = 2 * math.pi * _LON_RADIUS_M / 360

AUTHALIC_RADIUS_M = 6371007.1809
EARTH_SURFACE_M2 = 510065621724000.0

Segment = tuple[Loc, Loc]


# ------------------ degree <-> metre ----------------------------


def lat_to_meters(dlat: float) -> float:
    return dlat * _M_PER_DEG_LAT


def lon_to_meters(dlon: float, at_lat: float) -> float:
    if abs(at_lat) >= 90:
        return 0.0
    return dlon * _M_PER_DEG_LON * abs(math.cos(math.radians(at_lat)))


def meters_to_lat(m: float) -> float:
    return m / _M_PER_DEG_LAT


def meters_to_lon(m: float, at_lat: float) -> float:
    if abs(at_lat) >= 90:
        return 0.0
    return m / _M_PER_DEG_LON / abs(math.cos(math.radians(at_lat)))


def spherical_distance(a: Loc, b: Loc) -> float:
    """Distance in metres between two nearby locations."""
    x = lon_to_meters(a[0] - b[0], (a[1] + b[1]) / 2)
    y = lat_to_meters(a[1] - b[1])
    return math.sqrt(x * x + y * y)


# ------------------ vectors & segments ----------------------------


# |sin| of the angle below which two directions count as parallel.
EPS_PARALLEL = 1e-7


def vec_interp(a: Loc, b: Loc, t: float) -> Loc:
    """Point at parameter t on a->b; t > 1 extrapolates past b."""
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def _sub(a: Loc, b: Loc) -> Loc:
    return (a[0] - b[0], a[1] - b[1])


def _dot(a: Loc, b: Loc) -> float:
    return a[0] * b[0] + a[1] * b[1]


def _cross(o: Loc, a: Loc, b: Loc) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def line_intersection(a: Segment, b: Segment) -> Loc | None:
    """Crossing point of two segments, None if they miss or are parallel."""
    (p, p2), (q, q2) = a, b
    r = _sub(p2, p)
    s = _sub(q2, q)
    qp = _sub(q, p)
    denom = r[0] * s[1] - r[1] * s[0]
    if abs(denom) <= EPS_PARALLEL * math.hypot(*r) * math.hypot(*s):
        return None
    t = (qp[0] * s[1] - qp[1] * s[0]) / denom
    u = (qp[0] * r[1] - qp[1] * r[0]) / denom
    if 0 <= t <= 1 and 0 <= u <= 1:
        return vec_interp(p, p2, t)
    return None


def segments_intersect(a: Segment, b: Segment) -> bool:
    """Like line_intersection, but collinear overlap and touching also count."""
    if line_intersection(a, b) is not None:
        return True
    # project onto the longer segment
    if _dot(_sub(a[1], a[0]), _sub(a[1], a[0])) < _dot(_sub(b[1], b[0]), _sub(b[1], b[0])):
        a, b = b, a
    (p, p2), (q, q2) = a, b
    r = _sub(p2, p)
    rr = _dot(r, r)
    if rr == 0:
        return p == q
    # lateral offset allowed: EPS_PARALLEL * |r|
    tol = EPS_PARALLEL * rr
    if abs(_cross(p, p2, q)) > tol or abs(_cross(p, p2, q2)) > tol:
        return False
    t0, t1 = sorted((_dot(_sub(q, p), r) / rr, _dot(_sub(q2, p), r) / rr))
    return t0 <= 1 + EPS_PARALLEL and t1 >= -EPS_PARALLEL


# ------------------ whole-feature measures ----------------------------


def radians_to_meters(r: float) -> float:
    return r * AUTHALIC_RADIUS_M


def steradians_to_sqmeters(sr: float) -> float:
    return sr / (4 * math.pi) * EARTH_SURFACE_M2


def _as_radians(coords: Sequence[Loc]) -> tuple[np.ndarray, np.ndarray]:
    arr = np.radians(np.asarray(coords, dtype=float).reshape(-1, 2))
    return arr[:, 0], arr[:, 1]


def angular_length(coords: Sequence[Loc]) -> float:
    """Great-circle length of a polyline, in radians."""
    if len(coords) < 2:
        return 0.0
    lon, lat = _as_radians(coords)
    dlon, dlat = np.diff(lon), np.diff(lat)
    h = np.sin(dlat / 2) ** 2 + np.cos(lat[:-1]) * np.cos(lat[1:]) * np.sin(dlon / 2) ** 2
    return float(np.sum(2 * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))))


def spherical_area(ring: Sequence[Loc]) -> float:
    """
    Area enclosed by a ring, in steradians.
    Winding does not matter: the smaller side of the ring is returned.
    """
    if len(ring) < 3:
        return 0.0
    pts = list(ring)
    if pts[0] != pts[-1]:
        pts.append(pts[0])
    lon, lat = _as_radians(pts)
    dlon = np.diff(lon)
    dlon = (dlon + np.pi) % (2 * np.pi) - np.pi
    s = float(np.sum(dlon * (2 + np.sin(lat[:-1]) + np.sin(lat[1:]))) / 2)
    area = abs(s)
    return min(area, 4 * math.pi - area)


def centroid(coords: Sequence[Loc], closed: bool = False) -> Loc | None:
    """
    Centroid of a line (length weighted) or of a closed ring (area weighted,
    planar in degrees). Falls back to the vertex mean for degenerate input.
    """
    if not coords:
        return None
    arr = np.asarray(coords, dtype=float).reshape(-1, 2)
    if closed and len(arr) >= 3:
        if not np.array_equal(arr[0], arr[-1]):
            arr = np.vstack([arr, arr[:1]])
        x, y = arr[:-1, 0], arr[:-1, 1]
        x1, y1 = arr[1:, 0], arr[1:, 1]
        cross = x * y1 - x1 * y
        a = cross.sum() / 2
        if a != 0:
            cx = ((x + x1) * cross).sum() / (6 * a)
            cy = ((y + y1) * cross).sum() / (6 * a)
            return (float(cx), float(cy))
    if len(arr) >= 2:
        seg = np.hypot(*np.diff(arr, axis=0).T)
        if seg.sum() > 0:
            mids = (arr[:-1] + arr[1:]) / 2
            c = (mids * seg[:, None]).sum(axis=0) / seg.sum()
            return (float(c[0]), float(c[1]))
    c = arr.mean(axis=0)
    return (float(c[0]), float(c[1]))

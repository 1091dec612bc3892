import math

from osm_qa.domain.entities.geography import Loc

OSM_PRECISION = 7

_UNITS = {
    "meters": "{} m",
    "kilometers": "{} km",
    "feet": "{} ft",
    "miles": "{} mi",
    "square_meters": "{} m²",
    "square_kilometers": "{} km²",
    "square_feet": "{} sq ft",
    "square_miles": "{} sq mi",
    "hectares": "{} ha",
    "acres": "{} ac",
}


def _sig4(d: float) -> str:
    v = float(f"{d:.4g}")
    if v.is_integer():
        return f"{int(v):,}"
    # fixed point, never exponent form
    places = max(0, 3 - math.floor(math.log10(abs(v))))
    return f"{v:,.{places}f}".rstrip("0").rstrip(".")


def _unit(unit: str, d: float) -> str:
    return _UNITS[unit].format(_sig4(d))


def display_length(m: float, imperial: bool = False) -> str:
    d = m * (3.28084 if imperial else 1)
    if imperial:
        unit = "miles" if d >= 5280 else "feet"
        d = d / 5280 if d >= 5280 else d
    else:
        unit = "kilometers" if d >= 1000 else "meters"
        d = d / 1000 if d >= 1000 else d
    return _unit(unit, d)


def display_area(m2: float, imperial: bool = False) -> str:
    d = m2 * (10.7639111056 if imperial else 1)
    second = None
    if imperial:
        main = _unit("square_miles", d / 27878400) if d >= 6969600 else _unit("square_feet", d)
        if 4356 < d < 43560000:
            second = _unit("acres", d / 43560)
    else:
        main = _unit("square_kilometers", d / 1e6) if d >= 250000 else _unit("square_meters", d)
        if 1000 < d < 10000000:
            second = _unit("hectares", d / 10000)
    return f"{main} ({second})" if second else main


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _wrap(x: float, lo: float, hi: float) -> float:
    span = hi - lo
    return ((x - lo) % span + span) % span + lo


def decimal_coordinate_pair(loc: Loc) -> str:
    lat = _clamp(loc[1], -90, 90)
    lon = _wrap(loc[0], -180, 180)
    return f"{lat:.{OSM_PRECISION}f}, {lon:.{OSM_PRECISION}f}"


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _dms(deg: float, pos: str, neg: str) -> str:
    a = abs(deg)
    minutes = (a - math.floor(a)) * 60
    sec = (minutes - math.floor(minutes)) * 60
    degrees = f"{math.floor(a)}°"
    if math.floor(sec) > 0:
        s = f"{degrees}{math.floor(minutes)}′{_round_half_up(sec)}″"
    elif math.floor(minutes) > 0:
        s = f"{degrees}{_round_half_up(minutes)}′"
    else:
        s = f"{_round_half_up(a)}°"
    if deg == 0:
        return s
    return f"{s} {pos if deg > 0 else neg}"


def dms_coordinate_pair(loc: Loc) -> str:
    return f"{_dms(_clamp(loc[1], -90, 90), 'N', 'S')}, {_dms(_wrap(loc[0], -180, 180), 'E', 'W')}"

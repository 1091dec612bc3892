from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

# (lon, lat) in degrees
Loc = tuple[float, float]


@dataclass(frozen=True)
class Extent:
    min_lon: float = math.inf
    min_lat: float = math.inf
    max_lon: float = -math.inf
    max_lat: float = -math.inf

    @classmethod
    def from_points(cls, points: Iterable[Loc]) -> Extent:
        ext = cls()
        for p in points:
            ext = ext.extend(p)
        return ext

    def is_empty(self) -> bool:
        return self.min_lon > self.max_lon or self.min_lat > self.max_lat

    def extend(self, other: Extent | Loc) -> Extent:
        if isinstance(other, Extent):
            lo, hi = (other.min_lon, other.min_lat), (other.max_lon, other.max_lat)
        else:
            lo = hi = (other[0], other[1])
        return Extent(
            min(self.min_lon, lo[0]),
            min(self.min_lat, lo[1]),
            max(self.max_lon, hi[0]),
            max(self.max_lat, hi[1]),
        )

    def intersects(self, other: Extent) -> bool:
        return (
            other.min_lon <= self.max_lon
            and other.min_lat <= self.max_lat
            and other.max_lon >= self.min_lon
            and other.max_lat >= self.min_lat
        )

    def center(self) -> Loc:
        return ((self.min_lon + self.max_lon) / 2, (self.min_lat + self.max_lat) / 2)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_lon, self.min_lat, self.max_lon, self.max_lat)

import numpy as np

from osm_qa.domain.entities.geography import Extent
from osm_qa.domain.entities.osm import Way
from osm_qa.domain.graph import Graph


class SpatialIndex:
    """
    Bounding-box index over the ways of a graph snapshot.

    Boxes live in one (n, 4) array so a query is a single vectorised compare.
    Results come back in insertion order, so callers that take the first
    hit are deterministic for a given snapshot.
    """

    def __init__(self, ways: list[Way], boxes: np.ndarray):
        self._ways = ways
        self._boxes = boxes.reshape(-1, 4)

    @classmethod
    def from_graph(cls, graph: Graph) -> "SpatialIndex":
        ways, boxes = [], []
        for w in graph.iter_ways():
            if not w.nodes:
                continue
            ext = Extent.from_points(graph.way_locs(w))
            ways.append(w)
            boxes.append(ext.as_tuple())
        return cls(ways, np.asarray(boxes, dtype=float))

    def __len__(self) -> int:
        return len(self._ways)

    def intersects(self, extent: Extent) -> list[Way]:
        if not self._ways or extent.is_empty():
            return []
        b = self._boxes
        hit = (
            (b[:, 0] <= extent.max_lon)
            & (b[:, 1] <= extent.max_lat)
            & (b[:, 2] >= extent.min_lon)
            & (b[:, 3] >= extent.min_lat)
        )
        return [self._ways[i] for i in np.flatnonzero(hit)]

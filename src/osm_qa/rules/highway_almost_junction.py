"""
Look for highways that could be joined to another highway with a short extension.

A dangling end of an edited highway is flagged when pushing its last segment
a few metres further would cross another highway. The first crossing found in
index order wins; there is no ranking by distance.
"""

from dataclasses import dataclass

from osm_qa.app.protocols import SpatialTree
from osm_qa.domain.entities.geography import Extent
from osm_qa.domain.entities.issue import Issue, IssueFix, Severity
from osm_qa.domain.entities.osm import Changes, Node, Way
from osm_qa.domain.geo import (
    meters_to_lat,
    meters_to_lon,
    segments_intersect,
    spherical_distance,
    vec_interp,
)
from osm_qa.domain.graph import Graph
from osm_qa.rules.labels import display_label, t

KIND = "highway_almost_junction"
EXTEND_TH_METERS = 5.0


@dataclass(frozen=True)
class Candidate:
    node: Node
    way_id: str


class HighwayAlmostJunction:
    kind = KIND

    def __init__(
        self,
        *,
        extend_threshold_m: float = EXTEND_TH_METERS,
        noexit_key: str = "noexit",
        noexit_value: str = "yes",
    ):
        self.extend_m = extend_threshold_m
        self.noexit_key, self.noexit_value = noexit_key, noexit_value

    def __call__(self, changes: Changes, graph: Graph, tree: SpatialTree) -> list[Issue]:
        issues: list[Issue] = []
        for way in changes.edited():
            if not way.is_highway():
                continue
            for cand in self.find_connectable_ends(way, graph, tree):
                issues.append(self._issue(way, cand, graph))
        return issues

    # ---------------- candidates ----------------

    def is_noexit(self, node: Node) -> bool:
        return node.tags.get(self.noexit_key) == self.noexit_value

    def find_connectable_ends(self, way: Way, graph: Graph, tree: SpatialTree) -> list[Candidate]:
        if way.first() == way.last():
            return []
        out = []
        for idx in (0, len(way.nodes) - 1):
            node = graph.entity(way.nodes[idx])
            if self.is_noexit(node) or len(graph.parent_ways(node.id)) > 1:
                continue
            wid = self.can_extend(way, idx, graph, tree)
            if wid is not None:
                out.append(Candidate(node=node, way_id=wid))
        return out

    def can_extend(self, way: Way, end_idx: int, graph: Graph, tree: SpatialTree) -> str | None:
        mid_idx = 1 if end_idx == 0 else len(way.nodes) - 2
        tip = graph.entity(way.nodes[end_idx]).loc
        mid = graph.entity(way.nodes[mid_idx]).loc

        edge_len = spherical_distance(mid, tip)
        if edge_len == 0:
            return None
        ext_tip = vec_interp(mid, tip, self.extend_m / edge_len + 1.0)

        lon, lat = tip
        lon_range = meters_to_lon(self.extend_m, lat) / 2
        lat_range = meters_to_lat(self.extend_m) / 2
        query = Extent(lon - lon_range, lat - lat_range, lon + lon_range, lat + lat_range)
        query = query.extend(ext_tip)

        extension = (tip, ext_tip)
        for other in tree.intersects(query):
            if not other.is_highway() or other.id == way.id:
                continue
            locs = graph.way_locs(other)
            for a, b in zip(locs, locs[1:]):
                if segments_intersect(extension, (a, b)):
                    return other.id
        return None

    # ---------------- issues ----------------

    def _issue(self, way: Way, cand: Candidate, graph: Graph) -> Issue:
        other = graph.entity(cand.way_id)
        fixes: tuple[IssueFix, ...] = ()
        if not cand.node.tags:
            # tagged nodes are left alone so user data is never overwritten
            fixes = (
                IssueFix(
                    kind="tag_as_disconnected",
                    title=t("issues.fix.tag_as_disconnected.title"),
                    entity_id=cand.node.id,
                    tags={self.noexit_key: self.noexit_value},
                    annotation=t("issues.fix.tag_as_disconnected.undo_redo"),
                ),
            )
        return Issue(
            kind=KIND,
            severity=Severity.WARNING,
            message=t(
                "issues.highway_almost_junction.message",
                highway=display_label(way),
                highway2=display_label(other),
            ),
            tooltip="issues.highway_almost_junction.tooltip",
            entities=(way.id, cand.node.id, other.id),
            coordinates=cand.node.loc,
            fixes=fixes,
        )


def detect(changes: Changes, graph: Graph, tree: SpatialTree) -> list[Issue]:
    return HighwayAlmostJunction()(changes, graph, tree)

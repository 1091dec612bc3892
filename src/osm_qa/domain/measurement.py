from collections.abc import Iterable
from dataclasses import dataclass

from osm_qa.domain.entities.geography import Extent, Loc
from osm_qa.domain.entities.osm import Node, Way
from osm_qa.domain.geo import (
    angular_length,
    centroid,
    radians_to_meters,
    spherical_area,
    spherical_distance,
    steradians_to_sqmeters,
)
from osm_qa.domain.graph import Graph


@dataclass
class Measurement:
    heading: str | None = None
    geometry: str | None = None
    closed: bool | None = None
    node_count: int | None = None
    length_m: float = 0.0
    area_m2: float = 0.0
    distance_m: float | None = None
    location: Loc | None = None
    centroid: Loc | None = None
    center: Loc | None = None


def _node_geometry(node: Node, graph: Graph) -> str:
    return "vertex" if graph.parent_ways(node.id) else "point"


def _all_node_ids(entities: Iterable[Node | Way]) -> set[str]:
    out: set[str] = set()
    for e in entities:
        if isinstance(e, Way):
            out.update(e.nodes)
        else:
            out.add(e.id)
    return out


def measure(selected_ids: Iterable[str], graph: Graph) -> Measurement:
    """
    Length, area, distance and position figures for a selection.
    Ids missing from the graph are ignored.
    """
    ids = [i for i in selected_ids if graph.has_entity(i)]
    selected = [graph.entity(i) for i in ids]
    m = Measurement()
    if not selected:
        return m

    m.heading = selected[0].id if len(selected) == 1 else f"{len(selected)} features"
    extent = Extent()
    for e in selected:
        if isinstance(e, Node):
            extent = extent.extend(e.loc)
            m.geometry = _node_geometry(e, graph)
            continue
        locs = graph.way_locs(e)
        extent = extent.extend(Extent.from_points(locs))
        m.geometry = e.geometry()
        m.closed = e.is_closed() and not e.is_degenerate()
        m.length_m += radians_to_meters(angular_length(locs))
        m.centroid = centroid(locs, closed=m.geometry == "area")
        if m.closed:
            m.area_m2 += steradians_to_sqmeters(spherical_area(locs))

    if len(selected) > 1:
        m.geometry = m.closed = m.centroid = None

    if len(selected) == 2 and all(isinstance(e, Node) for e in selected):
        m.distance_m = spherical_distance(selected[0].loc, selected[1].loc)

    if len(selected) == 1 and isinstance(selected[0], Node):
        m.location = selected[0].loc
    else:
        m.node_count = len(_all_node_ids(selected))

    if m.location is None and m.centroid is None:
        m.center = extent.center()
    return m

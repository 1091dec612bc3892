from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from osm_qa.domain.entities.osm import Node, Way

Entity = Node | Way


class EntityNotFound(KeyError):
    pass


@dataclass(frozen=True)
class Graph:
    """
    Immutable snapshot of the edit graph.
    Entities are looked up by id; ways hold node ids, never node objects.
    """

    nodes: dict[str, Node] = field(default_factory=dict)
    ways: dict[str, Way] = field(default_factory=dict)
    # node_id -> ids of ways referencing it, in way insertion order
    _parents: dict[str, tuple[str, ...]] = field(default_factory=dict, repr=False)

    @classmethod
    def from_entities(cls, nodes: Iterable[Node], ways: Iterable[Way]) -> "Graph":
        ns = {n.id: n for n in nodes}
        ws = {w.id: w for w in ways}
        return cls(nodes=ns, ways=ws, _parents=_index_parents(ws.values()))

    def entity(self, eid: str) -> Entity:
        if eid in self.nodes:
            return self.nodes[eid]
        if eid in self.ways:
            return self.ways[eid]
        raise EntityNotFound(eid)

    def has_entity(self, eid: str) -> bool:
        return eid in self.nodes or eid in self.ways

    def parent_ways(self, node_id: str) -> list[Way]:
        return [self.ways[wid] for wid in self._parents.get(node_id, ())]

    def way_locs(self, way: Way) -> list[tuple[float, float]]:
        return [self.entity(nid).loc for nid in way.nodes]

    def iter_ways(self) -> Iterator[Way]:
        return iter(self.ways.values())

    def with_entity(self, entity: Entity) -> "Graph":
        if isinstance(entity, Node):
            return Graph(
                nodes={**self.nodes, entity.id: entity}, ways=self.ways, _parents=self._parents
            )
        ways = {**self.ways, entity.id: entity}
        return Graph(nodes=self.nodes, ways=ways, _parents=_index_parents(ways.values()))


def _index_parents(ways: Iterable[Way]) -> dict[str, tuple[str, ...]]:
    parents: dict[str, list[str]] = {}
    for w in ways:
        for nid in dict.fromkeys(w.nodes):  # closed ways list their first node twice
            parents.setdefault(nid, []).append(w.id)
    return {k: tuple(v) for k, v in parents.items()}

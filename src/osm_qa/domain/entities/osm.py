from dataclasses import dataclass, field

from osm_qa.domain.entities.geography import Loc

OsmTags = dict[str, str]

# keys that make a closed way an area unless area=no
AREA_KEYS = frozenset(
    {
        "amenity",
        "building",
        "landuse",
        "leisure",
        "natural",
        "place",
        "shop",
        "tourism",
        "water",
    }
)


@dataclass(frozen=True)
class Node:
    id: str
    loc: Loc
    tags: OsmTags = field(default_factory=dict)

    __hash__ = None  # tags is a dict


@dataclass(frozen=True)
class Way:
    id: str
    nodes: tuple[str, ...]
    tags: OsmTags = field(default_factory=dict)

    __hash__ = None  # tags is a dict

    def first(self) -> str | None:
        return self.nodes[0] if self.nodes else None

    def last(self) -> str | None:
        return self.nodes[-1] if self.nodes else None

    def is_closed(self) -> bool:
        return len(self.nodes) > 1 and self.nodes[0] == self.nodes[-1]

    def is_degenerate(self) -> bool:
        """Fewer distinct nodes than needed for a line (or a ring, when closed)."""
        distinct = len(set(self.nodes))
        return distinct < (3 if self.is_closed() else 2)

    def is_highway(self) -> bool:
        v = self.tags.get("highway")
        return bool(v) and v != "no"

    def geometry(self) -> str:
        if not self.is_closed():
            return "line"
        area = self.tags.get("area")
        if area == "yes":
            return "area"
        if area == "no" or self.is_highway():
            return "line"
        return "area" if AREA_KEYS.intersection(self.tags) else "line"


@dataclass
class Changes:
    created: list[Way] = field(default_factory=list)
    modified: list[Way] = field(default_factory=list)

    def edited(self) -> list[Way]:
        return [*self.created, *self.modified]

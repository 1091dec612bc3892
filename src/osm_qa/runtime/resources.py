# osm_qa/runtime/resources.py
import json
import pickle
from functools import lru_cache

from osm_qa.domain.entities.osm import Node, Way
from osm_qa.domain.graph import Graph


def osm_id(kind: str, raw) -> str:
    """Entity ids carry a type prefix (n/w) so nodes and ways share one keyspace."""
    return f"{kind[0]}{raw}"


def graph_from_osm_json(doc: dict) -> Graph:
    """Build a snapshot from an Overpass-style document: {"elements": [...]}."""
    nodes, ways = [], []
    for el in doc.get("elements", ()):
        tags = {str(k): str(v) for k, v in (el.get("tags") or {}).items()}
        if el["type"] == "node":
            nodes.append(Node(osm_id("node", el["id"]), (float(el["lon"]), float(el["lat"])), tags))
        elif el["type"] == "way":
            refs = tuple(osm_id("node", n) for n in el.get("nodes", ()))
            ways.append(Way(osm_id("way", el["id"]), refs, tags))
        # relations are not part of the snapshot
    return Graph.from_entities(nodes, ways)


@lru_cache(maxsize=8)
def load_graph_from_path(file: str, fmt: str) -> Graph:
    if fmt == "osm_json":
        with open(file, encoding="utf-8") as f:
            return graph_from_osm_json(json.load(f))
    if fmt == "pickle":
        with open(file, "rb") as f:
            g = pickle.load(f)
        if not isinstance(g, Graph):
            raise TypeError(f"{file} does not hold a Graph")
        return g
    raise ValueError(f"Unsupported graph fmt {fmt!r}")

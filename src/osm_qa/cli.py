import argparse
import json
import sys
from dataclasses import asdict

from osm_qa.app.build import build
from osm_qa.config.models import GraphByPath, ValidationModel
from osm_qa.domain.entities.osm import Changes
from osm_qa.domain.measurement import measure
from osm_qa.io.units import display_area, display_length
from osm_qa.runtime.resources import load_graph_from_path


def _parse_args(argv):
    ap = argparse.ArgumentParser(prog="osm-qa", description="Checks and measurements for OSM data.")
    sub = ap.add_subparsers(dest="command", required=True)

    v = sub.add_parser("validate", help="run validation rules and print issues as JSON lines")
    v.add_argument("graph", help="Overpass-style OSM JSON file")
    v.add_argument("--config", help="JSON file with a validation config")
    v.add_argument(
        "--edited",
        nargs="*",
        default=None,
        help="way ids to treat as modified (default: every way)",
    )

    m = sub.add_parser("measure", help="print measurements for a selection")
    m.add_argument("graph")
    m.add_argument("ids", nargs="+")
    m.add_argument("--imperial", action="store_true")
    return ap.parse_args(argv)


def _load_model(path: str | None) -> ValidationModel:
    if not path:
        return ValidationModel()
    with open(path, encoding="utf-8") as f:
        return ValidationModel.model_validate(json.load(f))


def cmd_validate(args) -> int:
    model = _load_model(args.config)
    model = model.model_copy(update={"graph": GraphByPath(file=args.graph)})
    app = build(model)
    graph, tree = app.graph, app.tree
    ids = args.edited if args.edited is not None else list(graph.ways)
    changes = Changes(modified=[graph.ways[i] for i in ids if i in graph.ways])
    app.validator.run(changes, graph, tree)
    return 1 if app.validator.failed else 0


def cmd_measure(args) -> int:
    graph = load_graph_from_path(args.graph, "osm_json")
    res = asdict(measure(args.ids, graph))
    if res["length_m"]:
        res["length"] = display_length(res["length_m"], args.imperial)
    if res["area_m2"]:
        res["area"] = display_area(res["area_m2"], args.imperial)
    if res["distance_m"] is not None:
        res["distance"] = display_length(res["distance_m"], args.imperial)
    print(json.dumps(res))
    return 0


def main(argv=None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    if args.command == "validate":
        return cmd_validate(args)
    return cmd_measure(args)

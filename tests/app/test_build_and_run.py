# tests/app/test_build_and_run.py
import json

import pytest
from pydantic import ValidationError

from osm_qa.app.build import build
from osm_qa.config.models import ValidationModel
from osm_qa.domain.entities.osm import Changes
from osm_qa.io.recorder import MemorySink
from osm_qa.rules.highway_almost_junction import HighwayAlmostJunction
from osm_qa.runtime.registries import make_rule

DOC = {
    "elements": [
        {"type": "node", "id": 1, "lat": 0.0, "lon": 0.0},
        {"type": "node", "id": 2, "lat": 0.00003, "lon": 0.0},
        {"type": "node", "id": 3, "lat": 0.00006, "lon": 0.0},
        {"type": "node", "id": 4, "lat": 0.0001, "lon": 0.0},
        {"type": "way", "id": 10, "nodes": [1, 2], "tags": {"highway": "residential", "name": "Elm St"}},
        {"type": "way", "id": 11, "nodes": [3, 4], "tags": {"highway": "residential", "ref": "B1"}},
    ]
}


@pytest.fixture
def graph_file(tmp_path):
    p = tmp_path / "g.json"
    p.write_text(json.dumps(DOC), encoding="utf-8")
    return str(p)


def test_build_runs(graph_file):
    cfg = {
        "name": "test",
        "run_id": "t-1",
        "rules": [{"kind": "highway_almost_junction"}],
        "graph": {"by": "path", "file": graph_file},
    }
    sink = MemorySink()
    app = build(cfg, sinks=[sink])
    issues = app.validator.run(Changes(modified=[app.graph.entity("w10")]), app.graph, app.tree)

    assert [i.entities for i in issues] == [("w10", "n2", "w11")]
    assert issues[0].message == "Elm St is very close but not connected to B1."
    assert [r["id"] for r in sink.records] == ["highway_almost_junction-w10-n2-w11"]
    assert sink.records[0]["severity"] == "warning"


def test_build_without_logging_skips_recorder(graph_file):
    sink = MemorySink()
    app = build({"graph": {"file": graph_file}}, use_logging=False, sinks=[sink])
    app.validator.run(Changes(modified=list(app.graph.iter_ways())), app.graph, app.tree)
    assert sink.records == []


def test_default_config_has_one_rule_and_no_graph():
    app = build({}, use_logging=False)
    assert [r.kind for r in app.validator.rules] == ["highway_almost_junction"]
    assert app.graph is None and app.tree is None


def test_optional_graph_may_be_missing(tmp_path):
    app = build(
        {"graph": {"file": str(tmp_path / "nope.json"), "must_exist": False}}, use_logging=False
    )
    assert app.graph is None


def test_required_graph_must_exist(tmp_path):
    with pytest.raises(FileNotFoundError):
        build({"graph": {"file": str(tmp_path / "nope.json")}}, use_logging=False)


def test_config_rejects_unknown_fields_and_bad_threshold():
    with pytest.raises(ValidationError):
        ValidationModel.model_validate({"rules": [{"kind": "highway_almost_junction", "x": 1}]})
    with pytest.raises(ValidationError):
        ValidationModel.model_validate(
            {"rules": [{"kind": "highway_almost_junction", "extend_threshold_m": 0}]}
        )
    with pytest.raises(ValidationError):
        ValidationModel.model_validate({"rules": [{"kind": "crossing_ways"}]})


def test_make_rule_passes_settings_through():
    cfg = ValidationModel.model_validate(
        {"rules": [{"kind": "highway_almost_junction", "extend_threshold_m": 12.5}]}
    )
    rule = make_rule(cfg.rules[0])
    assert isinstance(rule, HighwayAlmostJunction)
    assert rule.extend_m == 12.5

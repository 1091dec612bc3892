# tests/app/test_fixes.py
import pytest

from osm_qa.app.fixes import GraphTagEditor, apply_fix
from osm_qa.app.protocols import TagEditor
from osm_qa.domain.entities.issue import IssueFix
from osm_qa.domain.entities.osm import Changes, Node, Way
from osm_qa.domain.graph import Graph
from osm_qa.domain.spatial_index import SpatialIndex
from osm_qa.rules.highway_almost_junction import detect


class RecordingEditor:
    def __init__(self):
        self.calls = []

    def change_tags(self, entity_id, tags, annotation):
        self.calls.append((entity_id, tags, annotation))


def _graph() -> Graph:
    nodes = [
        Node("a1", (0.0, 0.0)),
        Node("a2", (0.0, 0.00003)),
        Node("b1", (0.0, 0.00006)),
        Node("b2", (0.0, 0.0001)),
    ]
    ways = [
        Way("wA", ("a1", "a2"), {"highway": "residential"}),
        Way("wB", ("b1", "b2"), {"highway": "residential"}),
    ]
    return Graph.from_entities(nodes, ways)


def test_apply_fix_calls_editor_once_with_annotation():
    g = _graph()
    fix = IssueFix(
        kind="tag_as_disconnected",
        title="Tag as disconnected",
        entity_id="a2",
        tags={"noexit": "yes"},
        annotation="tagged",
    )
    ed = RecordingEditor()
    assert isinstance(ed, TagEditor)
    apply_fix(fix, ed, g)
    assert ed.calls == [("a2", {"noexit": "yes"}, "tagged")]


def test_apply_fix_rejects_unknown_kind():
    fix = IssueFix(kind="delete_everything", title="", entity_id="a2")
    with pytest.raises(ValueError):
        apply_fix(fix, RecordingEditor(), _graph())


def test_fix_round_trip_silences_the_issue():
    g = _graph()
    changes = Changes(modified=[g.entity("wA")])
    (issue,) = detect(changes, g, SpatialIndex.from_graph(g))

    editor = GraphTagEditor(g)
    apply_fix(issue.fixes[0], editor, editor.graph)

    assert editor.graph.entity("a2").tags == {"noexit": "yes"}
    assert len(editor.edits) == 1 and editor.edits[0][1] == "a2"
    # the snapshot used for detection is untouched
    assert g.entity("a2").tags == {}

    g2 = editor.graph
    assert detect(changes, g2, SpatialIndex.from_graph(g2)) == []


def test_editor_replaces_tags_wholesale():
    editor = GraphTagEditor(_graph())
    editor.change_tags("wB", {"highway": "service"}, "retag")
    editor.change_tags("wB", {"highway": "track"}, "retag again")
    assert editor.graph.entity("wB").tags == {"highway": "track"}
    assert [a for a, _ in editor.edits] == ["retag", "retag again"]

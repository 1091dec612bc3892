# tests/app/test_validator.py
from osm_qa.domain.entities.issue import Issue, Severity
from osm_qa.domain.entities.osm import Changes, Node, Way
from osm_qa.domain.graph import Graph
from osm_qa.domain.spatial_index import SpatialIndex
from osm_qa.rules.highway_almost_junction import HighwayAlmostJunction
from osm_qa.validate.hooks import NoopHooks
from osm_qa.validate.validator import Validator


class Boom:
    kind = "boom"

    def __call__(self, changes, graph, tree):
        raise RuntimeError("rule exploded")


class Fixed:
    kind = "fixed"

    def __call__(self, changes, graph, tree):
        return [
            Issue(
                kind="fixed",
                severity=Severity.ERROR,
                message="m",
                tooltip="t",
                entities=("w1",),
                coordinates=(0.0, 0.0),
            )
        ]


# --- test hooks that record the call sequence ---
class TraceHooks(NoopHooks):
    def __init__(self):
        self.trace = []

    def rule_start(self, rule, *, seq):
        self.trace.append(("start", rule.kind))

    def rule_end(self, rule, *, produced, ms):
        self.trace.append(("end", rule.kind, produced))

    def error(self, rule, *, exc, **kw):
        self.trace.append(("error", rule.kind, str(exc)))

    def run_end(self, *, issues, failed, wall_ms):
        self.trace.append(("run_end", issues, failed))


def _inputs():
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
    g = Graph.from_entities(nodes, ways)
    return Changes(modified=[g.entity("wA")]), g, SpatialIndex.from_graph(g)


def test_failing_rule_does_not_stop_the_others():
    hooks = TraceHooks()
    v = Validator([Boom(), HighwayAlmostJunction(), Fixed()], hooks=hooks)
    issues = v.run(*_inputs())

    assert [i.kind for i in issues] == ["highway_almost_junction", "fixed"]
    assert v.failed == ["boom"]
    assert hooks.trace == [
        ("start", "boom"),
        ("error", "boom", "rule exploded"),
        ("start", "highway_almost_junction"),
        ("end", "highway_almost_junction", 1),
        ("start", "fixed"),
        ("end", "fixed", 1),
        ("run_end", 2, 1),
    ]


def test_failed_list_resets_between_runs():
    class FailsOnce(Boom):
        calls = 0

        def __call__(self, changes, graph, tree):
            self.calls += 1
            if self.calls == 1:
                super().__call__(changes, graph, tree)
            return []

    v = Validator([FailsOnce()])
    v.run(*_inputs())
    assert v.failed == ["boom"]
    v.run(*_inputs())
    assert v.failed == []


def test_add_appends_in_order():
    v = Validator()
    v.add(Fixed())
    v.add(HighwayAlmostJunction())
    assert [r.kind for r in v.rules] == ["fixed", "highway_almost_junction"]

# validate/validator.py

import time
from collections.abc import Iterable

from osm_qa.app.protocols import SpatialTree, ValidationRule
from osm_qa.domain.entities.issue import Issue
from osm_qa.domain.entities.osm import Changes
from osm_qa.domain.graph import Graph

from .hooks import NoopHooks, ValidationHooks


class Validator:
    """
    Runs rules over one batch of edits.
    A rule that raises is reported through hooks and skipped; the others still run.
    """

    def __init__(self, rules: Iterable[ValidationRule] = (), hooks: ValidationHooks | None = None):
        self._rules: list[ValidationRule] = list(rules)
        self._hooks = hooks or NoopHooks()
        self.failed: list[str] = []

    @property
    def rules(self) -> list[ValidationRule]:
        return list(self._rules)

    def add(self, rule: ValidationRule) -> None:
        self._rules.append(rule)

    def run(self, changes: Changes, graph: Graph, tree: SpatialTree) -> list[Issue]:
        t0 = time.perf_counter()
        self._hooks.run_start(rules=len(self._rules), edited=len(changes.edited()))
        self.failed = []
        issues: list[Issue] = []
        for seq, rule in enumerate(self._rules):
            self._hooks.rule_start(rule, seq=seq)
            t1 = time.perf_counter()
            try:
                found = rule(changes, graph, tree)
            except Exception as exc:
                self.failed.append(rule.kind)
                self._hooks.error(rule, exc=exc, seq=seq)
                continue
            for issue in found:
                self._hooks.issue(issue)
            issues.extend(found)
            self._hooks.rule_end(rule, produced=len(found), ms=(time.perf_counter() - t1) * 1000)
        self._hooks.run_end(
            issues=len(issues),
            failed=len(self.failed),
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return issues

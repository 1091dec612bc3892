# validate/hooks.py
from typing import Protocol

from osm_qa.domain.entities.issue import Issue


class ValidationHooks(Protocol):
    def run_start(self, *, rules, edited): ...
    def run_end(self, *, issues, failed, wall_ms): ...
    def rule_start(self, rule, *, seq): ...
    def rule_end(self, rule, *, produced, ms): ...
    def issue(self, issue: Issue): ...
    def error(self, rule, *, exc: BaseException, **kw): ...


class NoopHooks:
    def run_start(self, **_):
        pass

    def run_end(self, **_):
        pass

    def rule_start(self, *_, **__):
        pass

    def rule_end(self, *_, **__):
        pass

    def issue(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass

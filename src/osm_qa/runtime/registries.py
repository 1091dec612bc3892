# runtime/registries.py
from collections.abc import Callable

from osm_qa.app.protocols import ValidationRule
from osm_qa.config.models import HighwayAlmostJunctionModel, RuleUnion
from osm_qa.rules.highway_almost_junction import HighwayAlmostJunction

RuleFactory = Callable[[RuleUnion], ValidationRule]

_rule_registry: dict[str, RuleFactory] = {}


# ------------------- Rule registry ---------------------------


def register_rule(kind: str):
    def deco(fn: RuleFactory):
        _rule_registry[kind] = fn
        return fn

    return deco


def make_rule(cfg: RuleUnion) -> ValidationRule:
    try:
        factory = _rule_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown rule kind {cfg.kind!r}")
    return factory(cfg)


@register_rule("highway_almost_junction")
def _make_almost_junction(cfg: HighwayAlmostJunctionModel):
    return HighwayAlmostJunction(
        extend_threshold_m=cfg.extend_threshold_m,
        noexit_key=cfg.noexit_key,
        noexit_value=cfg.noexit_value,
    )

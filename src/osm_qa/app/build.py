# osm_qa/app/build.py
import os
from collections.abc import Mapping
from dataclasses import dataclass

from osm_qa.config.models import GraphByPath, ValidationModel
from osm_qa.domain.graph import Graph
from osm_qa.domain.spatial_index import SpatialIndex
from osm_qa.io.recorder import JsonlSink, Recorder, Sink
from osm_qa.io.validation_logging import ValidationLogging  # JSON logs
from osm_qa.runtime.registries import make_rule
from osm_qa.runtime.resources import load_graph_from_path
from osm_qa.validate.hooks import NoopHooks
from osm_qa.validate.validator import Validator


@dataclass
class App:
    model: ValidationModel
    validator: Validator
    recorder: Recorder
    graph: Graph | None = None
    tree: SpatialIndex | None = None


def resolve_graph(ref: GraphByPath | None) -> Graph | None:
    if ref is None:
        return None
    if not ref.must_exist and not os.path.exists(ref.file):
        return None
    return load_graph_from_path(ref.file, ref.fmt)


def build(
    cfg: ValidationModel | Mapping,
    *,
    use_logging: bool = True,
    sinks: list[Sink] | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ValidationModel) else ValidationModel.model_validate(cfg)

    # 1) Recorder for issues
    recorder = Recorder(*(sinks or [JsonlSink()]))

    # 2) Hooks
    hooks = (
        ValidationLogging(
            run_id=model.run_id,
            recorder=recorder,
            level=model.log.level,
            debug=model.log.debug,
        )
        if use_logging
        else NoopHooks()
    )

    # 3) Rules, in config order
    validator = Validator([make_rule(r) for r in model.rules], hooks=hooks)

    # 4) Optional input snapshot
    graph = resolve_graph(model.graph)
    tree = SpatialIndex.from_graph(graph) if graph is not None else None

    return App(model, validator, recorder, graph, tree)

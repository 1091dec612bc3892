from dataclasses import dataclass, field, replace

from osm_qa.app.protocols import TagEditor
from osm_qa.domain.entities.issue import IssueFix
from osm_qa.domain.graph import Graph


def apply_fix(fix: IssueFix, editor: TagEditor, graph: Graph) -> None:
    """Merge the fix's tags into the target's current tags as a single edit."""
    if fix.kind != "tag_as_disconnected":
        raise ValueError(f"Unknown fix kind {fix.kind!r}")
    current = graph.entity(fix.entity_id).tags
    editor.change_tags(fix.entity_id, {**current, **fix.tags}, fix.annotation)


@dataclass
class GraphTagEditor(TagEditor):
    """In-memory editor: every change yields a new snapshot and one logged edit."""

    graph: Graph
    edits: list[tuple[str, str]] = field(default_factory=list)  # (annotation, entity_id)

    def change_tags(self, entity_id: str, tags: dict[str, str], annotation: str) -> None:
        entity = self.graph.entity(entity_id)
        self.graph = self.graph.with_entity(replace(entity, tags=dict(tags)))
        self.edits.append((annotation, entity_id))

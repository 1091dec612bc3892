from typing import Protocol, runtime_checkable

from osm_qa.domain.entities.geography import Extent
from osm_qa.domain.entities.issue import Issue
from osm_qa.domain.entities.osm import Changes, Way
from osm_qa.domain.graph import Graph


# ------------- Inputs --------------------
@runtime_checkable
class SpatialTree(Protocol):
    """
    Responsibilities:
      • Return every way whose bounding box overlaps an extent.
      • Keep result order stable for a given snapshot.
    """

    def intersects(self, extent: Extent) -> list[Way]: ...


# ------------- Rules --------------------
@runtime_checkable
class ValidationRule(Protocol):
    """
    A rule looks at one batch of edits and returns issues.
    Rules are read-only over their inputs; fixes are returned as data.
    """

    kind: str

    def __call__(self, changes: Changes, graph: Graph, tree: SpatialTree) -> list[Issue]: ...


# ------------- Outputs --------------------
@runtime_checkable
class TagEditor(Protocol):
    def change_tags(self, entity_id: str, tags: dict[str, str], annotation: str) -> None:
        """Replace the entity's tags as one undoable edit described by annotation."""

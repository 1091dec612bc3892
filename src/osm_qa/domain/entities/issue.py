from dataclasses import asdict, dataclass, field
from enum import Enum

from osm_qa.domain.entities.geography import Loc


class Severity(Enum):
    WARNING = "warning"
    ERROR = "error"


# Data-only fix: interpreted later by app.fixes, never by the rule that made it
@dataclass(frozen=True)
class IssueFix:
    kind: str
    title: str
    entity_id: str
    tags: dict[str, str] = field(default_factory=dict)
    annotation: str = ""

    __hash__ = None  # tags is a dict


@dataclass(frozen=True)
class Issue:
    kind: str
    severity: Severity
    message: str
    tooltip: str
    entities: tuple[str, ...]
    coordinates: Loc
    fixes: tuple[IssueFix, ...] = ()

    __hash__ = None  # fixes are unhashable

    @property
    def id(self) -> str:
        return f"{self.kind}-{'-'.join(self.entities)}"

    def to_dict(self) -> dict:
        d = asdict(self)
        d["id"] = self.id
        d["severity"] = self.severity.value
        d["entities"] = list(self.entities)
        d["coordinates"] = list(self.coordinates)
        d["fixes"] = [asdict(f) for f in self.fixes]
        return d

import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- RULES ---------------------


class HighwayAlmostJunctionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["highway_almost_junction"] = "highway_almost_junction"
    extend_threshold_m: float = 5.0
    noexit_key: str = "noexit"
    noexit_value: str = "yes"

    @field_validator("extend_threshold_m")
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


RuleUnion = Annotated[HighwayAlmostJunctionModel, Field(discriminator="kind")]


# ----------------- INPUTS ---------------------


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    fmt: Literal["osm_json", "pickle"] = "osm_json"
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


# ------------------------------------------------------------------


class ValidationModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "default"
    run_id: str = "local"
    log: LogModel = LogModel()
    rules: list[RuleUnion] = Field(default_factory=lambda: [HighwayAlmostJunctionModel()])
    graph: GraphByPath | None = None

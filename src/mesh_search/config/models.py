import os
from math import isfinite
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

Vec3 = tuple[float, float, float]


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1

    @field_validator("sample_every")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("sample_every must be >= 1")
        return v


# ----------------- MESH ---------------------


class MeshModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    file: str
    fmt: Literal["obj", "npz"] = "obj"
    offset: Vec3 = (0.0, 0.0, 0.0)  # translation applied at load
    bidirectional: bool = False  # add reverse face edges

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))

    @field_validator("offset")
    @classmethod
    def _finite(cls, v: Vec3) -> Vec3:
        if not all(isfinite(c) for c in v):
            raise ValueError("offset must be finite")
        return v


# ----------------- SEARCH ---------------------


class SearchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    mode: Literal["tree", "dijkstra", "astar"] = "astar"
    heuristic: Literal["euclidean", "zero"] = "euclidean"
    strict: bool = True  # raise when stepping a finished search
    animate: bool = True  # batched ticks instead of run-to-completion
    batch_size: int = 32

    @field_validator("batch_size")
    @classmethod
    def _positive(cls, v: int, info: ValidationInfo) -> int:
        if v < 1:
            raise ValueError(f"{info.field_name} must be >= 1")
        return v

    @property
    def tree_mode(self) -> bool:
        return self.mode == "tree"

    @property
    def use_heuristic(self) -> bool:
        return self.mode == "astar"


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    mesh: MeshModel
    search: SearchModel = Field(default_factory=SearchModel)
    log: LogModel = Field(default_factory=LogModel)
    picks: list[Vec3] = Field(default_factory=list)

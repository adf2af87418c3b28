from __future__ import annotations

from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

import numpy as np
import yaml
from pydantic import BaseModel, Field, model_validator

Vec3 = tuple[float, float, float]


def _is_zero(v: Vec3) -> bool:
    return all(c == 0.0 for c in v)


def _parallel(a: Vec3, b: Vec3) -> bool:
    return not np.any(np.cross(np.asarray(a, dtype=np.float32), np.asarray(b, dtype=np.float32)))


class TriangleConfig(BaseModel):
    corners: tuple[Vec3, Vec3, Vec3]


class TranslateConfig(BaseModel):
    kind: Literal["translate"]
    delta: Vec3


class RotateConfig(BaseModel):
    kind: Literal["rotate"]
    axis: Literal["x", "y", "z"]
    angle_deg: float


TransformConfig = Annotated[
    Union[TranslateConfig, RotateConfig],
    Field(discriminator="kind"),
]


class RaySpec(BaseModel):
    start: Vec3
    direction: Vec3

    @model_validator(mode="after")
    def _nonzero_direction(self) -> "RaySpec":
        if _is_zero(self.direction):
            raise ValueError("ray direction must be non-zero")
        return self


class RayListConfig(BaseModel):
    kind: Literal["list"]
    rays: List[RaySpec]


class RayGridConfig(BaseModel):
    kind: Literal["grid"]
    center: Vec3
    direction: Vec3
    up: Vec3 = (0.0, 1.0, 0.0)
    extent: tuple[float, float]
    count: tuple[int, int]

    @model_validator(mode="after")
    def _validate_grid(self) -> "RayGridConfig":
        if self.count[0] < 1 or self.count[1] < 1:
            raise ValueError("grid count must be at least 1 in both directions")
        if self.extent[0] < 0.0 or self.extent[1] < 0.0:
            raise ValueError("grid extent must be non-negative")
        if _is_zero(self.direction):
            raise ValueError("grid direction must be non-zero")
        if _is_zero(self.up) or _parallel(self.up, self.direction):
            raise ValueError("grid up must be non-zero and not parallel to direction")
        return self


RaySourceConfig = Annotated[
    Union[RayListConfig, RayGridConfig],
    Field(discriminator="kind"),
]


class LookAtViewConfig(BaseModel):
    kind: Literal["look_at"] = "look_at"
    eye: Vec3
    target: Vec3
    up: Vec3 = (0.0, 1.0, 0.0)

    @model_validator(mode="after")
    def _validate_view(self) -> "LookAtViewConfig":
        forward = tuple(t - e for t, e in zip(self.target, self.eye))
        if _is_zero(forward):
            raise ValueError("view eye and target must differ")
        if _is_zero(self.up) or _parallel(self.up, forward):
            raise ValueError("view up must be non-zero and not parallel to target - eye")
        return self


class TracerConfigModel(BaseModel):
    reflect: bool = True
    forward_only: bool = False
    workers: int = Field(default=1, ge=1)


class OutputConfig(BaseModel):
    path: Path
    format: Literal["npz", "json"] = "npz"

    @model_validator(mode="after")
    def _validate_format(self) -> "OutputConfig":
        ext = self.path.suffix.lower().lstrip(".")
        if ext and ext != self.format:
            raise ValueError(f"output path extension '.{ext}' does not match format '{self.format}'")
        return self


class ScenarioConfig(BaseModel):
    triangle: TriangleConfig
    transform: List[TransformConfig] = Field(default_factory=list)
    rays: RaySourceConfig
    view: Optional[LookAtViewConfig] = None
    tracer: TracerConfigModel = TracerConfigModel()
    output: Optional[OutputConfig] = None


def load_config(path: str | Path) -> ScenarioConfig:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError("Configuration root must be a mapping.")
    cfg = ScenarioConfig.model_validate(data)
    if cfg.output is not None and not cfg.output.path.is_absolute():
        cfg.output.path = (path.parent / cfg.output.path).resolve()
    return cfg

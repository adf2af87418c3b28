from __future__ import annotations

from typing import List, Optional

import numpy as np

from ..config import ScenarioConfig
from ..config.schema import RayGridConfig, TransformConfig
from ..core.exporter import JsonWriter, NpzWriter
from ..core.matrix import Matrix
from ..core.ray import Ray
from ..core.tracer import TracerConfig
from ..core.utils import get_logger, radians
from ..core.vector import Vector
from ..shapes.triangle import Triangle

_log = get_logger()

_ROTATIONS = {"x": Matrix.rot_x, "y": Matrix.rot_y, "z": Matrix.rot_z}


def _transform_matrix(op: TransformConfig) -> Matrix:
    if op.kind == "translate":
        return Matrix.translate(Vector.from_iter(op.delta))
    if op.kind == "rotate":
        return _ROTATIONS[op.axis](float(radians(op.angle_deg)))
    raise ValueError(f"Unsupported transform kind: {op.kind}")


def build_transform(cfg: ScenarioConfig) -> Optional[Matrix]:
    """Compose the configured transform ops, first op applied first."""
    if not cfg.transform:
        return None
    mat = Matrix.identity()
    for op in cfg.transform:
        mat = _transform_matrix(op) * mat
    return mat


def build_triangle(cfg: ScenarioConfig) -> Triangle:
    a, b, c = (Vector.from_iter(corner) for corner in cfg.triangle.corners)
    triangle = Triangle(a, b, c)
    transform = build_transform(cfg)
    if transform is not None:
        triangle = triangle.transformed(transform)
    if triangle.area() == 0.0:
        _log.warning("Triangle %r is degenerate; no ray will hit it.", triangle)
    return triangle


def _grid_rays(grid: RayGridConfig) -> List[Ray]:
    center = Vector.from_iter(grid.center)
    forward = Vector.from_iter(grid.direction).norm()
    side = Vector.from_iter(grid.up).cross(forward).norm()
    up = forward.cross(side).norm()

    nx, ny = grid.count
    width, height = grid.extent
    xs = np.linspace(-width / 2.0, width / 2.0, nx) if nx > 1 else np.zeros(1)
    ys = np.linspace(-height / 2.0, height / 2.0, ny) if ny > 1 else np.zeros(1)

    rays: List[Ray] = []
    for oy in ys:
        for ox in xs:
            start = center + side * float(ox) + up * float(oy)
            rays.append(Ray(start, forward))
    return rays


def build_rays(cfg: ScenarioConfig) -> List[Ray]:
    src = cfg.rays
    if src.kind == "list":
        return [Ray(Vector.from_iter(r.start), Vector.from_iter(r.direction)) for r in src.rays]
    if src.kind == "grid":
        return _grid_rays(src)
    raise ValueError(f"Unsupported ray source kind: {src.kind}")


def build_view(cfg: ScenarioConfig) -> Optional[Matrix]:
    view_cfg = cfg.view
    if view_cfg is None:
        return None
    if view_cfg.kind == "look_at":
        return Matrix.look_at(
            Vector.from_iter(view_cfg.eye),
            Vector.from_iter(view_cfg.target),
            Vector.from_iter(view_cfg.up),
        )
    raise ValueError(f"Unsupported view kind: {view_cfg.kind}")


def build_tracer_config(cfg: ScenarioConfig) -> TracerConfig:
    return TracerConfig(
        reflect=cfg.tracer.reflect,
        forward_only=cfg.tracer.forward_only,
        workers=cfg.tracer.workers,
    )


def build_writer(cfg: ScenarioConfig):
    out_cfg = cfg.output
    if out_cfg is None:
        return None
    format_lower = out_cfg.format.lower()
    if format_lower == "npz":
        return NpzWriter(str(out_cfg.path))
    if format_lower == "json":
        return JsonWriter(str(out_cfg.path))
    raise ValueError(f"Unsupported output format: {out_cfg.format}")

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .matrix import Matrix
from .ray import Ray
from .target import HitInfo, RayTarget
from .vector import Vector
from .utils import get_logger

_log = get_logger()


@dataclass
class TracerConfig:
    reflect: bool = True
    forward_only: bool = False
    workers: int = 1


@dataclass
class TraceRecord:
    """Outcome of casting one ray against a target."""
    ray_index: int
    ray: Ray
    hit: Optional[HitInfo] = None
    distance: Optional[float] = None     # signed, along ray.direction
    reflected: Optional[Ray] = None      # single bounce only
    view_point: Optional[Vector] = None  # hit point in view space

    @property
    def is_hit(self) -> bool:
        return self.hit is not None


class Tracer:
    """Casts batches of rays against a single :class:`RayTarget`.

    Each ray is tested once; with ``cfg.reflect`` a hit also yields the
    mirrored ray, which is not traced further. Targets and rays are only read,
    so with ``cfg.workers > 1`` the batch is spread over a thread pool and
    the records still come back in input order.
    """
    def __init__(self, target: RayTarget, cfg: Optional[TracerConfig] = None, view: Optional[Matrix] = None) -> None:
        self.target = target
        self.cfg = cfg or TracerConfig()
        self.view = view
        if self.cfg.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.cfg.workers}")

    def trace(self, ray: Ray, index: int = 0) -> TraceRecord:
        hit = self.target.hit_info(ray)
        if hit is None:
            _log.debug("ray %d: no hit", index)
            return TraceRecord(ray_index=index, ray=ray)

        distance = ray.distance_to(hit.point)
        if self.cfg.forward_only and distance < 0.0:
            _log.debug("ray %d: hit behind origin (t=%.4g) dropped", index, distance)
            return TraceRecord(ray_index=index, ray=ray)

        record = TraceRecord(ray_index=index, ray=ray, hit=hit, distance=distance)
        if self.cfg.reflect:
            record.reflected = ray.reflect(hit)
        if self.view is not None:
            record.view_point = self.view * hit.point
        _log.debug("ray %d: hit at %s", index, hit.point)
        return record

    def run(self, rays: Sequence[Ray]) -> List[TraceRecord]:
        rays = list(rays)
        if self.cfg.workers == 1 or len(rays) <= 1:
            return [self.trace(ray, i) for i, ray in enumerate(rays)]
        with ThreadPoolExecutor(max_workers=self.cfg.workers) as pool:
            return list(pool.map(self.trace, rays, range(len(rays))))

    @staticmethod
    def stats(records: Sequence[TraceRecord]) -> Dict[str, Any]:
        n_hits = sum(1 for r in records if r.is_hit)
        n_reflected = sum(1 for r in records if r.reflected is not None)
        stats = {"rays": len(records), "hits": n_hits, "reflected": n_reflected}
        _log.info("Tracer finished: %d rays → %d hits (%d reflected)", len(records), n_hits, n_reflected)
        return stats

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .ray import Ray
from .vector import Vector


@dataclass(frozen=True)
class HitInfo:
    """Result of a successful ray hit.

    ``point`` and ``normal`` are always provided. ``color`` and
    ``reflect_factor`` are only set by targets that know them.
    """
    point: Vector
    normal: Vector
    color: Optional[int] = None
    reflect_factor: Optional[float] = None


class RayTarget(ABC):
    """Anything a :class:`Ray` can be cast against.

    Subclasses implement :meth:`hit_info` only; the point and boolean queries
    are derived from it so the three can never disagree.
    """

    @abstractmethod
    def hit_info(self, ray: Ray) -> Optional[HitInfo]:
        """Full hit information, or ``None`` if the ray misses."""

    def hit_point(self, ray: Ray) -> Optional[Vector]:
        info = self.hit_info(ray)
        return info.point if info is not None else None

    def hits(self, ray: Ray) -> bool:
        return self.hit_point(ray) is not None

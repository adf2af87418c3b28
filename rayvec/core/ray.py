from __future__ import annotations
from typing import TYPE_CHECKING

from .vector import Vector

if TYPE_CHECKING:  # pragma: no cover
    from .target import HitInfo


class Ray:
    """A ray starting at ``start`` and heading along ``direction``.

    The constructor normalizes ``direction``. Assigning ``direction`` later is
    allowed and is not re-normalized, so downstream code must not assume a
    unit direction on rays it did not build itself.
    """

    __slots__ = ("start", "direction")

    def __init__(self, start: Vector, direction: Vector) -> None:
        self.start = start.copy()
        self.direction = direction.norm()

    def at(self, t: float) -> Vector:
        return self.start + self.direction * t

    def distance_to(self, point: Vector) -> float:
        """Signed parameter of ``point`` along the ray; negative is behind ``start``."""
        return (point - self.start) * self.direction

    def reflect(self, hit: "HitInfo") -> "Ray":
        """Mirror this ray about the hit normal, starting exactly at the hit point."""
        n = hit.normal
        direction = self.direction - n * 2.0 * (n * self.direction)
        return Ray(hit.point, direction)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ray):
            return NotImplemented
        return self.start == other.start and self.direction == other.direction

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Ray(start={self.start}, direction={self.direction})"

from __future__ import annotations
from itertools import combinations
from typing import Iterator, Optional

import numpy as np

from ..core.matrix import Matrix
from ..core.ray import Ray
from ..core.target import HitInfo, RayTarget
from ..core.vector import Vector


class Triangle(RayTarget):
    """A triangle given by three corners.

    Corner order defines the winding and therefore the sign of :meth:`normal`.
    Zero-area triangles are representable; their normal is NaN and rays never
    hit them.
    """

    def __init__(self, a: Vector, b: Vector, c: Vector) -> None:
        self.corners = [a.copy(), b.copy(), c.copy()]

    def _edge_cross(self) -> Vector:
        return (self[1] - self[0]).cross(self[2] - self[0])

    def area(self) -> float:
        # half the parallelogram spanned by the two edges from corner 0
        return 0.5 * self._edge_cross().length()

    def normal(self) -> Vector:
        return self._edge_cross().norm()

    def contains(self, point: Vector) -> bool:
        """Check whether ``point`` lies within the triangle.

        Assumes ``point`` is on the triangle's plane. Counts corner pairs whose
        vectors towards ``point`` point away from each other (non-positive dot
        product); at least two such pairs means the point is inside. Points on
        an edge count as inside.
        """
        count = 0
        for i, j in combinations(range(3), 2):
            if (self[i] - point) * (self[j] - point) <= 0.0:
                count += 1
        return count >= 2

    def hit_info(self, ray: Ray) -> Optional[HitInfo]:
        n = self.normal()
        a = (self[0] - ray.start) * n
        b = ray.direction * n
        if b == 0.0:
            # ray runs parallel to the plane
            return None
        # no t >= 0 check: points behind the ray start are reported as hits
        point = ray.start + ray.direction * (a / b)
        if self.contains(point):
            return HitInfo(point=point, normal=n)
        return None

    def transformed(self, matrix: Matrix) -> "Triangle":
        return Triangle(*(matrix * corner for corner in self.corners))

    # -- container protocol --
    @staticmethod
    def _check_index(index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)) or not 0 <= index <= 2:
            raise IndexError(f"Triangle corner out of range: {index} given, max 2")
        return int(index)

    def __getitem__(self, index: int) -> Vector:
        return self.corners[self._check_index(index)]

    def __setitem__(self, index: int, value: Vector) -> None:
        self.corners[self._check_index(index)] = value.copy()

    def __iter__(self) -> Iterator[Vector]:
        return iter(self.corners)

    def __len__(self) -> int:
        return 3

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Triangle):
            return NotImplemented
        return all(a == b for a, b in zip(self.corners, other.corners))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Triangle({self.corners[0]}, {self.corners[1]}, {self.corners[2]})"

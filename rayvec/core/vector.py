from __future__ import annotations
from numbers import Real
from typing import Iterable, Iterator, Tuple
import numpy as np

from .utils import EPSILON, as_float32


class Vector:
    """A 3D vector with float32 ``x``, ``y``, ``z`` components.

    ``a * b`` is the dot product when ``b`` is a Vector and scaling when ``b``
    is a scalar. Equality is approximate: components may differ by at most
    :data:`~rayvec.core.utils.EPSILON`.

    Degenerate operations (normalizing a zero vector, the angle against a
    zero vector) do not raise; they produce NaN components.
    """

    __slots__ = ("_v",)
    __hash__ = None  # type: ignore[assignment]
    # keep numpy scalars from broadcasting over the components
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self._v = np.array([x, y, z], dtype=np.float32)

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> "Vector":
        vec = cls.__new__(cls)
        vec._v = np.asarray(arr, dtype=np.float32)
        return vec

    @classmethod
    def from_iter(cls, values: Iterable[float] | np.ndarray) -> "Vector":
        return cls._wrap(as_float32(values, (3,)))

    # -- components --
    @property
    def x(self) -> float:
        return float(self._v[0])

    @x.setter
    def x(self, value: float) -> None:
        self._v[0] = value

    @property
    def y(self) -> float:
        return float(self._v[1])

    @y.setter
    def y(self, value: float) -> None:
        self._v[1] = value

    @property
    def z(self) -> float:
        return float(self._v[2])

    @z.setter
    def z(self, value: float) -> None:
        self._v[2] = value

    def with_x(self, x: float) -> "Vector":
        return Vector(x, self._v[1], self._v[2])

    def with_y(self, y: float) -> "Vector":
        return Vector(self._v[0], y, self._v[2])

    def with_z(self, z: float) -> "Vector":
        return Vector(self._v[0], self._v[1], z)

    def copy(self) -> "Vector":
        return Vector._wrap(self._v.copy())

    def to_numpy(self) -> np.ndarray:
        return self._v.copy()

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    # -- geometry --
    def dot(self, other: "Vector") -> float:
        return float(np.dot(self._v, other._v))

    def cross(self, other: "Vector") -> "Vector":
        a, b = self._v, other._v
        return Vector._wrap([
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ])

    def length_sq(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return float(np.sqrt(np.float32(self.length_sq())))

    def norm(self) -> "Vector":
        return self / self.length()

    def angle(self, other: "Vector") -> float:
        """Smallest angle between the two vectors, in radians within [0, pi]."""
        with np.errstate(divide="ignore", invalid="ignore"):
            # squared lengths stay unrounded so angle(v, v) clamps to exactly 0
            denom = np.sqrt(np.float64(self.length_sq()) * np.float64(other.length_sq()))
            ratio = np.float64(self.dot(other)) / denom
            return float(np.arccos(np.clip(ratio, -1.0, 1.0)))

    # -- operators --
    def __add__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector._wrap(self._v + other._v)

    def __sub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector._wrap(self._v - other._v)

    def __neg__(self) -> "Vector":
        return Vector._wrap(-self._v)

    def __mul__(self, other):
        if isinstance(other, Vector):
            return self.dot(other)
        if isinstance(other, Real):
            return Vector._wrap(self._v * np.float32(other))
        # Vector * Matrix is resolved by Matrix.__rmul__
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return Vector._wrap(self._v * np.float32(other))
        return NotImplemented

    def __truediv__(self, other: float) -> "Vector":
        if not isinstance(other, Real):
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vector._wrap(self._v / np.float32(other))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return bool(np.all(np.abs(self._v - other._v) <= EPSILON))

    # -- container protocol --
    @staticmethod
    def _check_index(index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)) or not 0 <= index <= 2:
            raise IndexError(f"Vector index out of range: {index} given, max 2")
        return int(index)

    def __getitem__(self, index: int) -> float:
        return float(self._v[self._check_index(index)])

    def __setitem__(self, index: int, value: float) -> None:
        self._v[self._check_index(index)] = value

    def __len__(self) -> int:
        return 3

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_tuple())

    def __str__(self) -> str:
        x, y, z = self._v
        return f"({x}, {y}, {z})"

    def __repr__(self) -> str:
        x, y, z = self._v
        return f"Vector({x}, {y}, {z})"

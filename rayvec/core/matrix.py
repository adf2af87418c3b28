from __future__ import annotations
from functools import reduce
from numbers import Real
from typing import Iterable, Sequence, Tuple
import numpy as np

from .utils import EPSILON, as_float32
from .vector import Vector


class Matrix:
    """A 4x4 float32 matrix for transforming 3D vectors in homogeneous coordinates.

    Entries are stored row-major in :attr:`data`. ``m[row]`` returns a mutable
    view of one row, so ``m[0][3] = 1.0`` edits the matrix in place.

    ``m * v`` with a :class:`Vector` promotes ``v`` to ``(x, y, z, 1)``,
    multiplies, and divides by the resulting ``w``. The division is always
    performed; ``w == 0`` gives non-finite components.
    """

    __slots__ = ("data",)
    __hash__ = None  # type: ignore[assignment]
    __array_ufunc__ = None

    def __init__(self, data: np.ndarray | Sequence[Sequence[float]] | None = None) -> None:
        if data is None:
            self.data = np.zeros((4, 4), dtype=np.float32)
        else:
            self.data = as_float32(data, (4, 4))

    # -- builders --
    @classmethod
    def zeros(cls) -> "Matrix":
        return cls()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]] | np.ndarray) -> "Matrix":
        return cls(rows)

    @classmethod
    def identity(cls) -> "Matrix":
        return cls(np.eye(4, dtype=np.float32))

    @classmethod
    def look_at(cls, position: Vector, looking_at: Vector, up: Vector) -> "Matrix":
        """View matrix for a camera at ``position`` facing ``looking_at``."""
        return cls.view(position, looking_at - position, up)

    @classmethod
    def view(cls, position: Vector, direction: Vector, up: Vector) -> "Matrix":
        """View matrix for a camera at ``position`` facing along ``direction``.

        Rows hold the camera basis (side, up, forward), so the camera position
        maps to the origin and ``direction`` maps onto +z.
        """
        f = direction.norm()
        s = up.cross(f).norm()
        u = f.cross(s).norm()
        p = -position
        return cls([
            [s.x, s.y, s.z, p * s],
            [u.x, u.y, u.z, p * u],
            [f.x, f.y, f.z, p * f],
            [0.0, 0.0, 0.0, 1.0],
        ])

    @classmethod
    def projection(cls, size: Tuple[int, int], fov: float, near: float, far: float) -> "Matrix":
        """Perspective projection for a ``(width, height)`` viewport, ``fov`` in radians."""
        width, height = size
        aspect_ratio = np.float32(height) / np.float32(width)
        f = np.float32(1.0) / np.tan(np.float32(fov) / np.float32(2.0))
        dz = -(2.0 * far * near) / (far - near)
        return cls([
            [f * aspect_ratio, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, (far + near) / (far - near), dz],
            [0.0, 0.0, 1.0, 0.0],
        ])

    @classmethod
    def frustum(cls, left: float, right: float, top: float, bottom: float, near: float, far: float) -> "Matrix":
        rml = right - left
        tmb = top - bottom
        fmn = far - near
        return cls([
            [2.0 * near / rml, 0.0, (right + left) / rml, 0.0],
            [0.0, 2.0 * near / tmb, (top + bottom) / tmb, 0.0],
            [0.0, 0.0, -(far + near) / fmn, -2.0 * far * near / fmn],
            [0.0, 0.0, -1.0, 0.0],
        ])

    @classmethod
    def translate(cls, delta: Vector) -> "Matrix":
        mat = cls.identity()
        mat.data[:3, 3] = delta.to_numpy()
        return mat

    @classmethod
    def rot_x(cls, radians: float) -> "Matrix":
        s, c = np.sin(np.float32(radians)), np.cos(np.float32(radians))
        return cls([
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    @classmethod
    def rot_y(cls, radians: float) -> "Matrix":
        s, c = np.sin(np.float32(radians)), np.cos(np.float32(radians))
        return cls([
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    @classmethod
    def rot_z(cls, radians: float) -> "Matrix":
        s, c = np.sin(np.float32(radians)), np.cos(np.float32(radians))
        return cls([
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    @classmethod
    def sum(cls, matrices: Iterable["Matrix"]) -> "Matrix":
        """Add up ``matrices`` starting from the zero matrix."""
        return reduce(lambda acc, m: acc + m, matrices, cls())

    # -- operations --
    def transposed(self) -> "Matrix":
        return Matrix(self.data.T)

    def copy(self) -> "Matrix":
        return Matrix(self.data)

    def allclose(self, other: "Matrix", atol: float = 1e-6) -> bool:
        return bool(np.allclose(self.data, other.data, rtol=0.0, atol=atol))

    def _transform(self, vec: Vector) -> Vector:
        hom = np.append(vec.to_numpy(), np.float32(1.0))
        out = self.data @ hom
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vector.from_iter(out[:3] * (np.float32(1.0) / out[3]))

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return Matrix(self.data @ other.data)
        if isinstance(other, Vector):
            return self._transform(other)
        if isinstance(other, Real):
            return Matrix(self.data * np.float32(other))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Vector):
            return self._transform(other)
        if isinstance(other, Real):
            return Matrix(self.data * np.float32(other))
        return NotImplemented

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix(self.data + other.data)

    def __radd__(self, other):
        # lets the builtin sum() start from 0
        if isinstance(other, Real) and other == 0:
            return self.copy()
        return NotImplemented

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix(self.data - other.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.all(np.abs(self.data - other.data) <= EPSILON))

    def __getitem__(self, row: int) -> np.ndarray:
        if isinstance(row, bool) or not isinstance(row, (int, np.integer)) or not 0 <= row <= 3:
            raise IndexError(f"Matrix row out of range: {row} given, max 3")
        return self.data[row]

    def __iter__(self):
        return iter(self.data)

    def __str__(self) -> str:
        return "\n".join(
            "[" + ", ".join(str(v) for v in row) + "]" for row in self.data
        )

    def __repr__(self) -> str:
        return f"Matrix({self.data.tolist()!r})"

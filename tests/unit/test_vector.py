from __future__ import annotations

import math
import warnings

import numpy as np
import pytest

from rayvec.core.matrix import Matrix
from rayvec.core.utils import EPSILON
from rayvec.core.vector import Vector


def test_vector_defaults_to_zero() -> None:
    v = Vector()
    assert v.x == 0.0 and v.y == 0.0 and v.z == 0.0
    assert v == Vector(0.0, 0.0, 0.0)


def test_vector_stores_float32() -> None:
    v = Vector(0.1, 0.2, 0.3)
    assert v.to_numpy().dtype == np.float32
    assert v.x == float(np.float32(0.1))


def test_from_iter_accepts_sequences_and_arrays() -> None:
    assert Vector.from_iter([1.0, 2.0, 3.0]) == Vector(1.0, 2.0, 3.0)
    assert Vector.from_iter((1.0, 2.0, 3.0)) == Vector(1.0, 2.0, 3.0)
    assert Vector.from_iter(np.array([1.0, 2.0, 3.0])) == Vector(1.0, 2.0, 3.0)


@pytest.mark.parametrize("values", [[1.0, 2.0], [1.0, 2.0, 3.0, 4.0], []])
def test_from_iter_rejects_wrong_length(values) -> None:
    with pytest.raises(AssertionError):
        Vector.from_iter(values)


def test_component_builders_return_copies() -> None:
    v = Vector(1.0, 2.0, 3.0)
    assert v.with_x(9.0) == Vector(9.0, 2.0, 3.0)
    assert v.with_y(9.0) == Vector(1.0, 9.0, 3.0)
    assert v.with_z(9.0) == Vector(1.0, 2.0, 9.0)
    assert v == Vector(1.0, 2.0, 3.0)


def test_cross_matches_component_formula() -> None:
    assert Vector(1.0, 0.0, 0.0).cross(Vector(0.0, 1.0, 0.0)) == Vector(0.0, 0.0, 1.0)
    a = Vector(2.0, 3.0, 4.0)
    b = Vector(5.0, 6.0, 7.0)
    assert a.cross(b) == Vector(3 * 7 - 4 * 6, 4 * 5 - 2 * 7, 2 * 6 - 3 * 5)


def test_cross_is_anticommutative_and_perpendicular() -> None:
    a = Vector(1.5, -2.0, 3.0)
    b = Vector(0.5, 4.0, -1.0)
    c = a.cross(b)
    assert c == -b.cross(a)
    assert a * c == pytest.approx(0.0, abs=1e-5)
    assert b * c == pytest.approx(0.0, abs=1e-5)


def test_vector_times_vector_is_dot_and_times_scalar_scales() -> None:
    a = Vector(1.0, 2.0, 3.0)
    b = Vector(4.0, -5.0, 6.0)
    dot = a * b
    assert isinstance(dot, float)
    assert dot == 4.0 - 10.0 + 18.0
    assert a.dot(b) == dot
    assert a * 2.0 == Vector(2.0, 4.0, 6.0)
    assert 2 * a == Vector(2.0, 4.0, 6.0)
    assert a / 2.0 == Vector(0.5, 1.0, 1.5)


def test_vector_times_matrix_delegates_to_transform() -> None:
    m = Matrix.translate(Vector(1.0, 2.0, 3.0))
    v = Vector(1.0, 1.0, 1.0)
    assert v * m == m * v == Vector(2.0, 3.0, 4.0)


def test_length_and_length_sq() -> None:
    v = Vector(3.0, 4.0, 12.0)
    assert v.length_sq() == 169.0
    assert v.length() == 13.0


@pytest.mark.parametrize(
    "v",
    [Vector(5.0, 1.0, -3.5), Vector(0.001, 0.0, 0.0), Vector(-1e4, 2e4, 3.0), Vector(1.0, 1.0, 1.0)],
)
def test_norm_has_unit_length(v: Vector) -> None:
    assert abs(v.norm().length() - 1.0) <= 1e-6


def test_norm_of_zero_vector_is_silent_nan() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        n = Vector().norm()
    assert np.all(np.isnan(n.to_numpy()))


def test_angle_properties() -> None:
    a = Vector(1.0, 0.0, 0.0)
    b = Vector(0.0, 1.0, 0.0)
    assert a.angle(b) == pytest.approx(math.pi / 2.0, abs=1e-6)

    c = Vector(0.3, -1.2, 2.5)
    d = Vector(-4.0, 0.7, 1.1)
    assert c.angle(d) == d.angle(c)

    e = Vector(3.0, 4.0, 0.0)
    assert e.angle(e) == 0.0
    assert e.angle(-e) == pytest.approx(math.pi)


@pytest.mark.parametrize(
    "v",
    [Vector(1.0, 2.0, 3.0), Vector(0.1, 0.2, 0.3), Vector(-4.0, 0.7, 1.1), Vector(0.3, -1.2, 2.5), Vector(1e3, -7.0, 0.01)],
)
def test_angle_with_itself_and_opposite_is_exact(v: Vector) -> None:
    assert v.angle(v) == pytest.approx(0.0, abs=1e-6)
    assert v.angle(-v) == pytest.approx(math.pi, abs=1e-6)


def test_angle_is_clamped_for_near_parallel_vectors() -> None:
    a = Vector(0.1, 0.2, 0.3)
    for scale in (3.0, 7.0, 1e3):
        angle = a.angle(a * scale)
        assert not math.isnan(angle)
        assert angle == pytest.approx(0.0, abs=2e-3)


def test_angle_against_zero_vector_is_nan() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert math.isnan(Vector(1.0, 0.0, 0.0).angle(Vector()))


def test_augmented_assignment_rebinds_without_aliasing() -> None:
    v = Vector(1.0, 2.0, 3.0)
    alias = v
    v += Vector(1.0, 1.0, 1.0)
    v -= Vector(0.0, 0.0, 1.0)
    v *= 2.0
    v /= 4.0
    assert v == Vector(1.0, 1.5, 1.5)
    assert alias == Vector(1.0, 2.0, 3.0)


def test_equality_is_approximate() -> None:
    base = Vector(1.0, 2.0, 3.0)
    assert base == Vector(1.0 + EPSILON / 2.0, 2.0, 3.0)
    assert base != Vector(1.0, 2.0, 3.001)
    assert base != (1.0, 2.0, 3.0)
    with pytest.raises(TypeError):
        hash(base)


def test_indexing_reads_and_writes_components() -> None:
    v = Vector(1.0, 2.0, 3.0)
    assert [v[0], v[1], v[2]] == [1.0, 2.0, 3.0]
    v[1] = 5.0
    v.z = 7.0
    assert v == Vector(1.0, 5.0, 7.0)
    assert list(v) == [1.0, 5.0, 7.0]


@pytest.mark.parametrize("index", [3, -1, 10])
def test_indexing_out_of_range_raises(index: int) -> None:
    v = Vector(1.0, 2.0, 3.0)
    with pytest.raises(IndexError):
        v[index]
    with pytest.raises(IndexError):
        v[index] = 0.0


def test_text_rendering() -> None:
    v = Vector(1.0, 2.5, -3.0)
    assert str(v) == "(1.0, 2.5, -3.0)"
    assert repr(v) == "Vector(1.0, 2.5, -3.0)"

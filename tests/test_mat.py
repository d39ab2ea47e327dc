"""Tests for Mat."""

import math

import pytest
from polykit import MatrixNotInvertibleError
from polykit.geometry import Mat, Vect


def assert_mat_approx(m: Mat, expected):
    assert m.to_array() == pytest.approx(list(expected), abs=1e-9)


def test_identity_by_default():
    m = Mat()
    assert m.is_identity
    assert m.to_array() == [1, 0, 0, 1, 0, 0]


def test_construct_from_string():
    """CSS matrix string, comma separated."""
    m = Mat("matrix(1, 0, 0, 1, 10, 20)")
    assert m.to_array() == [1, 0, 0, 1, 10, 20]
    p = m.transform_point(Vect(1, 1))
    assert (p.x, p.y) == (11, 21)


def test_construct_from_mapping_and_tuple():
    fields = {"a": 2, "b": 0, "c": 0, "d": 3, "e": 1, "f": 1}
    assert Mat(fields).to_array() == [2, 0, 0, 3, 1, 1]
    assert Mat((2, 0, 0, 3, 1, 1)) == Mat(fields)
    assert Mat(Mat(fields)) == Mat(fields)


def test_str_round_trip():
    m = Mat([2, 0.5, 0, 1, -3, 4])
    assert str(m) == "matrix(2, 0.5, 0, 1, -3, 4)"
    assert Mat(str(m)) == m


def test_determinant_and_invertible():
    assert Mat([2, 0, 0, 3, 0, 0]).determinant == 6
    assert not Mat([1, 2, 2, 4, 0, 0]).is_invertible


def test_inverse_of_inverse():
    """Inverting twice gives back the original matrix."""
    m = Mat([2, 1, -1, 3, 5, -7])
    assert_mat_approx(m.get_inverse_matrix().get_inverse_matrix(), m.to_array())


def test_inverse_composes_to_identity():
    m = Mat([2, 1, -1, 3, 5, -7])
    product = m.clone().post_multiply(m.get_inverse_matrix())
    assert_mat_approx(product, [1, 0, 0, 1, 0, 0])


def test_inverse_does_not_mutate():
    m = Mat([2, 0, 0, 2, 1, 1])
    m.get_inverse_matrix()
    assert m.to_array() == [2, 0, 0, 2, 1, 1]


def test_identity_inverse_fast_path():
    inverse = Mat().get_inverse_matrix()
    assert inverse.is_identity


def test_singular_matrix_raises():
    with pytest.raises(MatrixNotInvertibleError):
        Mat([1, 2, 2, 4, 5, 6]).get_inverse_matrix()

    with pytest.raises(ValueError):
        Mat([0, 0, 0, 0, 0, 0]).get_inverse_matrix()


def test_post_and_pre_multiply_order():
    """post_multiply applies the argument last, pre_multiply applies it first."""
    translate = Mat([1, 0, 0, 1, 10, 0])
    scale = Mat([2, 0, 0, 2, 0, 0])

    post = scale.clone().post_multiply(translate)
    p = post.transform_point(Vect(1, 1))
    assert (p.x, p.y) == (12, 2)

    pre = scale.clone().pre_multiply(translate)
    q = pre.transform_point(Vect(1, 1))
    assert (q.x, q.y) == (22, 2)


def test_multiply_returns_self():
    m = Mat()
    assert m.post_multiply([1, 0, 0, 1, 1, 1]) is m
    assert m.pre_multiply(Mat()) is m


@pytest.mark.parametrize("theta", [0.0, 0.5, 2.0, -1.2, math.pi])
def test_rotation_transforms_angle(theta):
    angle = Mat().set_rotation(theta).transform_angle(0)
    assert angle == pytest.approx(theta)


def test_set_rotation_zeroes_translation():
    m = Mat([1, 0, 0, 1, 5, 5]).set_rotation(1)
    assert (m.e, m.f) == (0, 0)


def test_rotation_about_point():
    """180 degrees about (1, 0) maps the origin to (2, 0)."""
    p = Mat().set_rotation_about(math.pi, Vect(1, 0)).transform_point(Vect(0, 0))
    assert p.x == pytest.approx(2)
    assert p.y == pytest.approx(0, abs=1e-12)


def test_transform_sans_translate():
    m = Mat([2, 0, 0, 2, 100, 100])
    p = m.transform_sans_translate(Vect(1, 2))
    assert (p.x, p.y) == (2, 4)


def test_transform_point_mutates():
    v = Vect(1, 1)
    assert Mat([1, 0, 0, 1, 1, 1]).transform_point(v) is v
    assert (v.x, v.y) == (2, 2)


def test_transform_degrees():
    """Degrees are normalized into [0, 360) and rounded."""
    quarter = Mat().set_rotation(math.pi / 2)
    assert quarter.transform_degrees(0) == 90
    assert quarter.transform_degrees(200) == 290
    assert quarter.transform_degrees(270) == 0
    assert Mat([-1, 0, 0, 1, 0, 0]).transform_degrees(30) == 150


def test_transform_degrees_wraps_to_zero():
    """Just below 360 rounds up to 360, which wraps to 0."""
    assert Mat().set_rotation(math.radians(-0.4)).transform_degrees(0) == 0
    assert Mat().transform_degrees(359.6) == 0
    assert Mat().transform_degrees(359.4) == 359


def test_precision():
    m = Mat([1.23456, 0, 0, 1, 0.00004, 9.87654]).precision(3)
    assert m.to_array() == [1.235, 0, 0, 1, 0, 9.877]


def test_precision_ties_away_from_zero():
    m = Mat([0.125, -0.125, 2.5, 1, 0.5, -0.5]).precision(2)
    assert m.to_array() == [0.13, -0.13, 2.5, 1, 0.5, -0.5]
    assert Mat([0.5, 0, 0, 1, -1.5, 0]).precision(0).to_array() == [1, 0, 0, 1, -2, 0]


def test_translate():
    m = Mat().set_rotation(math.pi / 2).translate(3, 4)
    assert (m.e, m.f) == (3, 4)
    assert m.a == pytest.approx(0, abs=1e-12)

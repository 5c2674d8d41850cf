import math

import pytest

from animtk.matrix3 import Matrix3
from animtk.quaternion import IDENTITY, Quaternion
from animtk.vector3 import AXIS_X, AXIS_Y, AXIS_Z, Vector3


def test_identity_matrix():
    assert IDENTITY.to_matrix() == Matrix3.identity()


@pytest.mark.parametrize("angle", [0.3, math.pi / 2, 2.0])
def test_axis_angle_matches_rz(angle):
    q = Quaternion.from_axis_angle(AXIS_Z, angle)
    assert q.to_matrix() == Matrix3.rz(angle)


def test_axis_angle_matches_rx():
    q = Quaternion.from_axis_angle(AXIS_X, 0.8)
    assert q.to_matrix() == Matrix3.rx(0.8)


def test_from_axis_angle_is_unit():
    q = Quaternion.from_axis_angle(Vector3(3.0, 0.0, 0.0), 1.0)
    assert q.length() == pytest.approx(1.0)


@pytest.mark.parametrize("angle", [0.1, 0.7, 1.5, 2.5])
def test_matrix_round_trip(angle):
    q = Quaternion.from_axis_angle(Vector3(1.0, 1.0, 0.0).normalized(), angle)
    assert Quaternion.from_matrix(q.to_matrix()) == q


def test_to_axis_angle_round_trip():
    q = Quaternion.from_axis_angle(AXIS_Y, 1.2)
    axis, angle = q.to_axis_angle()
    assert angle == pytest.approx(1.2)
    assert axis == AXIS_Y


def test_to_axis_angle_degenerate_gives_nan():
    axis, angle = IDENTITY.to_axis_angle()
    assert angle == 0.0
    assert math.isnan(axis.x)


def test_slerp_endpoints():
    q0 = Quaternion.from_axis_angle(AXIS_Z, 0.0)
    q1 = Quaternion.from_axis_angle(AXIS_Z, math.pi / 2)
    assert Quaternion.slerp(q0, q1, 0.0) == q0
    assert Quaternion.slerp(q0, q1, 1.0) == q1


def test_slerp_midpoint():
    q0 = Quaternion.from_axis_angle(AXIS_Z, 0.0)
    q1 = Quaternion.from_axis_angle(AXIS_Z, math.pi / 2)
    mid = Quaternion.slerp(q0, q1, 0.5)
    assert mid == Quaternion.from_axis_angle(AXIS_Z, math.pi / 4)


def test_slerp_equal_returns_first():
    q = Quaternion.from_axis_angle(AXIS_X, 0.4)
    assert Quaternion.slerp(q, q, 0.3) == q


def test_inverse_times_self_is_identity():
    q = Quaternion(0.2, -0.4, 0.5, 1.3)
    assert q * q.inverse() == IDENTITY
    assert q.inverse() * q == IDENTITY


def test_equality_ignores_sign():
    q = Quaternion.from_axis_angle(AXIS_Y, 0.9)
    assert q == -q
    assert q != Quaternion.from_axis_angle(AXIS_Y, 1.9)


def test_normalized_zero_warns():
    with pytest.warns(RuntimeWarning):
        result = Quaternion().normalized()
    assert list(result) == [0.0, 0.0, 0.0, 0.0]


def test_rotate_vector():
    q = Quaternion.from_axis_angle(AXIS_Z, math.pi / 2)
    assert q * AXIS_X == AXIS_Y


def test_dot_and_lengths():
    q = Quaternion(1.0, 2.0, 3.0, 4.0)
    assert q.sqr_length() == Quaternion.dot(q, q)
    assert q.length() == pytest.approx(math.sqrt(q.sqr_length()))


def test_parse_reads_w_first():
    q = Quaternion.parse("4 1 2 3")
    assert (q.x, q.y, q.z, q.w) == (1.0, 2.0, 3.0, 4.0)


def test_parse_too_short():
    with pytest.raises(ValueError):
        Quaternion.parse("1 2 3")


def test_str_and_index():
    q = Quaternion(1.0, 2.0, 3.0, 4.0)
    assert str(q) == "1 2 3 4"
    assert q[3] == 4.0
    with pytest.raises(IndexError):
        q[4]


def test_scalar_arithmetic():
    q = Quaternion(1.0, 2.0, 3.0, 4.0)
    assert list(2 * q) == list(q * 2)
    assert list((q * 2) / 2) == list(q)
    assert list(q - q) == [0.0, 0.0, 0.0, 0.0]
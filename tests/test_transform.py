import math

import pytest

from animtk.glmmath import AXIS_X, AXIS_Y, AXIS_Z, Quat, Vec3
from animtk.transform import IDENTITY, Transform


def sample():
    return Transform(
        Quat.from_angle_axis(0.7, Vec3(1.0, 2.0, 3.0).normalized()),
        Vec3(4.0, -1.0, 2.5),
        Vec3(2.0, 0.5, 3.0),
    )


def test_identity_leaves_point():
    p = Vec3(1.0, 2.0, 3.0)
    assert list(IDENTITY.transform_point(p)) == pytest.approx([1.0, 2.0, 3.0])


def test_translation_point_and_vector():
    t = Transform.translation_by((1.0, 2.0, 3.0))
    assert list(t.transform_point(Vec3())) == pytest.approx([1.0, 2.0, 3.0])
    assert list(t.transform_vector(AXIS_X)) == pytest.approx([1.0, 0.0, 0.0])


def test_uniform_scaling_matches_vector_scaling():
    assert Transform.scaling(2.0) == Transform.scaling(Vec3(2.0, 2.0, 2.0))
    v = Vec3(1.0, -2.0, 0.5)
    assert list(Transform.scaling(2.0).transform_vector(v)) == pytest.approx(
        [2.0, -4.0, 1.0]
    )


def test_rotation_about_z():
    t = Transform.rotation_about(math.pi / 2, AXIS_Z)
    assert list(t.transform_vector(AXIS_X)) == pytest.approx(
        list(AXIS_Y), abs=1e-9
    )


def test_from_rotation_keeps_quat():
    q = Quat.from_angle_axis(0.4, AXIS_Y)
    assert Transform.from_rotation(q).rotation == q


def test_times_inverse_is_identity_for_rigid():
    t = Transform(Quat.from_angle_axis(0.9, AXIS_Y), Vec3(1.0, 2.0, 3.0))
    p = Vec3(5.0, -4.0, 2.0)
    result = (t * t.inverse()).transform_point(p)
    assert list(result) == pytest.approx([5.0, -4.0, 2.0], abs=1e-9)


def test_matrix_agrees_with_transform_point():
    t = sample()
    m = t.matrix()
    p = Vec3(1.5, -2.0, 0.25)
    hom = (p.x, p.y, p.z, 1.0)
    out = [sum(a * b for a, b in zip(row, hom)) for row in m]
    assert out[:3] == pytest.approx(list(t.transform_point(p)), abs=1e-9)
    assert out[3] == pytest.approx(1.0)


def test_identity_matrix():
    m = IDENTITY.matrix()
    assert m == tuple(
        tuple(1.0 if i == j else 0.0 for j in range(4)) for i in range(4)
    )


def test_str_sections():
    lines = str(Transform.translation_by((0.0, 0.0, 0.0))).split("\n")
    assert [line[:3] for line in lines] == ["T: ", "R: ", "S: "]
"""Rigid transforms with non-uniform scale: rotation, translation and scale."""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Sequence, Union

from animtk.glmmath import Quat, Vec3

VecLike = Union[Vec3, Sequence[float]]


def _vec(v: VecLike) -> Vec3:
    if isinstance(v, Vec3):
        return v
    x, y, z = v
    return Vec3(float(x), float(y), float(z))


def _fmt_vec(v: Vec3) -> str:
    return f"vec3({v.x:f}, {v.y:f}, {v.z:f})"


@dataclass(frozen=True)
class Transform:
    """Applies scale, then rotation, then translation."""

    rotation: Quat = field(default_factory=Quat.identity)
    translation: Vec3 = field(default_factory=Vec3)
    scale: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))

    def __post_init__(self):
        object.__setattr__(self, "translation", _vec(self.translation))
        object.__setattr__(self, "scale", _vec(self.scale))

    @staticmethod
    def scaling(s: Union[float, VecLike]) -> Transform:
        """Pure scale, uniform when ``s`` is a number."""
        scale = Vec3(s, s, s) if isinstance(s, Real) else _vec(s)
        return Transform(Quat.identity(), Vec3(), scale)

    @staticmethod
    def rotation_about(angle: float, axis: VecLike) -> Transform:
        """Pure rotation of ``angle`` radians about ``axis``."""
        return Transform(Quat.from_angle_axis(angle, axis))

    @staticmethod
    def from_rotation(q: Quat) -> Transform:
        """Pure rotation given as a quaternion."""
        return Transform(q)

    @staticmethod
    def translation_by(pos: VecLike) -> Transform:
        """Pure translation."""
        return Transform(Quat.identity(), _vec(pos))

    def inverse(self) -> Transform:
        """Transform that undoes this one."""
        inv_rot = self.rotation.inverse()
        inv_scale = Vec3(1.0 / self.scale.x, 1.0 / self.scale.y, 1.0 / self.scale.z)
        offset = -(inv_scale * inv_rot.rotate(self.translation))
        return Transform(inv_rot, offset, inv_scale)

    def transform_point(self, pos: VecLike) -> Vec3:
        """Map a point through scale, rotation and translation."""
        return self.rotation.rotate(self.scale * _vec(pos)) + self.translation

    def transform_vector(self, direction: VecLike) -> Vec3:
        """Map a direction through scale and rotation only."""
        return self.rotation.rotate(self.scale * _vec(direction))

    def matrix(self) -> tuple[tuple[float, ...], ...]:
        """The 4x4 matrix T*R*S, row-major (``m[row][column]``)."""
        rot = self.rotation.to_mat3()
        s = self.scale
        t = self.translation
        rows = tuple(
            (row[0] * s.x, row[1] * s.y, row[2] * s.z, t[i])
            for i, row in enumerate(rot)
        )
        return rows + ((0.0, 0.0, 0.0, 1.0),)

    def __mul__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        rotation = self.rotation * other.rotation
        translation = self.translation + self.rotation.rotate(
            self.scale * other.translation
        )
        return Transform(rotation, translation, self.scale * other.scale)

    def __str__(self) -> str:
        r = self.rotation
        return (
            f"T: {_fmt_vec(self.translation)}\n"
            f"R: quat({r.w:f}, {{{r.x:f}, {r.y:f}, {r.z:f}}})\n"
            f"S: {_fmt_vec(self.scale)}"
        )


IDENTITY = Transform()
"""Vectors, quaternions and Euler rotation orders for skeletal animation.

3x3 matrices are plain nested tuples indexed as ``m[row][column]``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from numbers import Real
from typing import Iterator, Sequence, Union

Mat3 = tuple[
    tuple[float, float, float],
    tuple[float, float, float],
    tuple[float, float, float],
]

_FLOAT_EPSILON = 1.1920929e-07
_COS_ONE_OVER_TWO = math.cos(0.5)


class RotOrder(IntEnum):
    """Euler angle rotation orders."""

    XYZ = 0
    XZY = 1
    YXZ = 2
    YZX = 3
    ZXY = 4
    ZYX = 5


def _axes(roo: RotOrder) -> tuple[int, int, int]:
    i, j, k = ("XYZ".index(c) for c in RotOrder(roo).name)
    return i, j, k


@dataclass(frozen=True)
class Vec3:
    """Immutable 3D vector with component-wise arithmetic."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, Real):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x / other.x, self.y / other.y, self.z / other.z)
        if isinstance(other, Real):
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Unit-length copy of this vector."""
        return self / self.length()

    def dot(self, other: Vec3) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Cross product ``self x other``."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )


def _as_vec3(v: Union[Vec3, Sequence[float]]) -> Vec3:
    if isinstance(v, Vec3):
        return v
    x, y, z = v
    return Vec3(float(x), float(y), float(z))


@dataclass(frozen=True)
class Quat:
    """Immutable quaternion ``w + xi + yj + zk``; iterates as (w, x, y, z)."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.w
        yield self.x
        yield self.y
        yield self.z

    def __neg__(self) -> Quat:
        return Quat(-self.w, -self.x, -self.y, -self.z)

    def __add__(self, other: Quat) -> Quat:
        if not isinstance(other, Quat):
            return NotImplemented
        return Quat(*(a + b for a, b in zip(self, other)))

    def __sub__(self, other: Quat) -> Quat:
        if not isinstance(other, Quat):
            return NotImplemented
        return Quat(*(a - b for a, b in zip(self, other)))

    def __mul__(self, other):
        if isinstance(other, Quat):
            w1, x1, y1, z1 = self
            w2, x2, y2, z2 = other
            return Quat(
                w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
                w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
                w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
                w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
            )
        if isinstance(other, Vec3):
            return self.rotate(other)
        if isinstance(other, Real):
            return Quat(*(c * other for c in self))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Real):
            return Quat(*(c / other for c in self))
        return NotImplemented

    @staticmethod
    def identity() -> Quat:
        """The identity rotation."""
        return Quat(1.0, 0.0, 0.0, 0.0)

    def length(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Quat:
        """Unit quaternion; a zero quaternion normalizes to the identity."""
        length = self.length()
        if length <= 0.0:
            return Quat.identity()
        return self / length

    def conjugate(self) -> Quat:
        """Quaternion with the vector part negated."""
        return Quat(self.w, -self.x, -self.y, -self.z)

    def inverse(self) -> Quat:
        """Multiplicative inverse."""
        return self.conjugate() / self.dot(self)

    def dot(self, other: Quat) -> float:
        """Four-dimensional dot product."""
        return sum(a * b for a, b in zip(self, other))

    def rotate(self, v: Union[Vec3, Sequence[float]]) -> Vec3:
        """Rotate a vector by this quaternion."""
        v = _as_vec3(v)
        u = Vec3(self.x, self.y, self.z)
        uv = u.cross(v)
        uuv = u.cross(uv)
        return v + (uv * self.w + uuv) * 2.0

    def to_mat3(self) -> Mat3:
        """Rotation matrix of this quaternion."""
        w, x, y, z = self
        return (
            (1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)),
            (2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)),
            (2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)),
        )

    @staticmethod
    def from_mat3(m: Sequence[Sequence[float]]) -> Quat:
        """Quaternion of a rotation matrix."""
        trace_terms = (
            m[0][0] + m[1][1] + m[2][2],
            m[0][0] - m[1][1] - m[2][2],
            m[1][1] - m[0][0] - m[2][2],
            m[2][2] - m[0][0] - m[1][1],
        )
        biggest = max(range(4), key=lambda n: (trace_terms[n], -n))
        big = math.sqrt(trace_terms[biggest] + 1.0) * 0.5
        mult = 0.25 / big
        if biggest == 0:
            return Quat(
                big,
                (m[2][1] - m[1][2]) * mult,
                (m[0][2] - m[2][0]) * mult,
                (m[1][0] - m[0][1]) * mult,
            )
        if biggest == 1:
            return Quat(
                (m[2][1] - m[1][2]) * mult,
                big,
                (m[1][0] + m[0][1]) * mult,
                (m[0][2] + m[2][0]) * mult,
            )
        if biggest == 2:
            return Quat(
                (m[0][2] - m[2][0]) * mult,
                (m[1][0] + m[0][1]) * mult,
                big,
                (m[2][1] + m[1][2]) * mult,
            )
        return Quat(
            (m[1][0] - m[0][1]) * mult,
            (m[0][2] + m[2][0]) * mult,
            (m[2][1] + m[1][2]) * mult,
            big,
        )

    @staticmethod
    def from_angle_axis(angle: float, axis: Union[Vec3, Sequence[float]]) -> Quat:
        """Rotation of ``angle`` radians about ``axis`` (not normalized)."""
        axis = _as_vec3(axis)
        s = math.sin(angle * 0.5)
        return Quat(math.cos(angle * 0.5), axis.x * s, axis.y * s, axis.z * s)

    def angle(self) -> float:
        """Rotation angle in radians, in [0, 2*pi]."""
        if math.fabs(self.w) > _COS_ONE_OVER_TWO:
            a = math.asin(math.sqrt(self.x**2 + self.y**2 + self.z**2)) * 2.0
            if self.w < 0.0:
                return math.pi * 2.0 - a
            return a
        return math.acos(max(-1.0, min(1.0, self.w))) * 2.0

    def axis(self) -> Vec3:
        """Rotation axis; the Z axis when the rotation is the identity."""
        tmp = 1.0 - self.w * self.w
        if tmp <= 0.0:
            return Vec3(0.0, 0.0, 1.0)
        inv = 1.0 / math.sqrt(tmp)
        return Vec3(self.x * inv, self.y * inv, self.z * inv)


def _mix(q1: Quat, q2: Quat, u: float) -> Quat:
    cos_theta = q1.dot(q2)
    if cos_theta > 1.0 - _FLOAT_EPSILON:
        return q1 * (1.0 - u) + q2 * u
    angle = math.acos(max(-1.0, min(1.0, cos_theta)))
    return (q1 * math.sin((1.0 - u) * angle) + q2 * math.sin(u * angle)) / math.sin(
        angle
    )


def slerp(q1: Quat, q2: Quat, u: float) -> Quat:
    """Spherical interpolation along the shortest path."""
    cos_theta = q1.dot(q2)
    if cos_theta < 0.0:
        q2 = -q2
        cos_theta = -cos_theta
    if cos_theta > 1.0 - _FLOAT_EPSILON:
        return q1 * (1.0 - u) + q2 * u
    angle = math.acos(min(1.0, cos_theta))
    return (q1 * math.sin((1.0 - u) * angle) + q2 * math.sin(u * angle)) / math.sin(
        angle
    )


def squad(q1: Quat, q2: Quat, s1: Quat, s2: Quat, u: float) -> Quat:
    """Spherical quadrangle interpolation between q1 and q2 with controls s1, s2."""
    return _mix(_mix(q1, q2, u), _mix(s1, s2, u), 2.0 * (1.0 - u) * u)


def mat3_multiply(a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]) -> Mat3:
    """Matrix product ``a @ b``."""
    columns = list(zip(*b))
    return tuple(
        tuple(sum(p * q for p, q in zip(row, col)) for col in columns) for row in a
    )


def _axis_rotation(axis: int, angle: float) -> Mat3:
    c, s = math.cos(angle), math.sin(angle)
    if axis == 0:
        return ((1.0, 0.0, 0.0), (0.0, c, -s), (0.0, s, c))
    if axis == 1:
        return ((c, 0.0, s), (0.0, 1.0, 0.0), (-s, 0.0, c))
    return ((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0))


def euler_angle_ro(roo: RotOrder, xyz: Union[Vec3, Sequence[float]]) -> Mat3:
    """Rotation matrix for Euler angles (given as x, y, z radians) in order ``roo``."""
    angles = tuple(_as_vec3(xyz))
    i, j, k = _axes(roo)
    first = mat3_multiply(_axis_rotation(i, angles[i]), _axis_rotation(j, angles[j]))
    return mat3_multiply(first, _axis_rotation(k, angles[k]))


def extract_euler_angle_ro(
    roo: RotOrder, m: Union[Quat, Sequence[Sequence[float]]]
) -> Vec3:
    """Euler angles (x, y, z radians) of a rotation matrix or quaternion in order ``roo``."""
    if isinstance(m, Quat):
        m = m.to_mat3()
    i, j, k = _axes(roo)
    sign = 1.0 if (i, j, k) in ((0, 1, 2), (1, 2, 0), (2, 0, 1)) else -1.0
    cos_b = math.hypot(m[i][i], m[i][j])
    b = math.atan2(sign * m[i][k], cos_b)
    if cos_b > 1e-9:
        a = math.atan2(-sign * m[j][k], m[k][k])
        c = math.atan2(-sign * m[i][j], m[i][i])
    else:
        a = math.atan2(sign * m[k][j], m[j][j])
        c = 0.0
    angles = [0.0, 0.0, 0.0]
    angles[i], angles[j], angles[k] = a, b, c
    return Vec3(*angles)


def angle_axis_mat3(angle: float, axis: Union[Vec3, Sequence[float]]) -> Mat3:
    """Rotation matrix of ``angle`` radians about ``axis``."""
    return Quat.from_angle_axis(angle, axis).to_mat3()


def extract_angle_axis_mat3(m: Sequence[Sequence[float]]) -> tuple[float, Vec3]:
    """Angle (radians) and axis of a rotation matrix."""
    q = Quat.from_mat3(m)
    return q.angle(), q.axis()


ZERO3 = Vec3(0.0, 0.0, 0.0)
AXIS_X = Vec3(1.0, 0.0, 0.0)
AXIS_Y = Vec3(0.0, 1.0, 0.0)
AXIS_Z = Vec3(0.0, 0.0, 1.0)
ZERO3X3: Mat3 = ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
IDENTITY3X3: Mat3 = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
IDENTITY4X4 = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)
IDENTITY_Q = Quat(1.0, 0.0, 0.0, 0.0)
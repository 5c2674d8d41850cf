"""A 3x3 double precision matrix with Euler angle and axis-angle conversions."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, fields
from numbers import Real
from typing import Iterator

from animtk.constants import EPSILON, PI
from animtk.glmmath import RotOrder
from animtk.vector3 import Vector3

_EQUALITY_TOLERANCE = 0.001


def _f32(value: float) -> float:
    """Round a value to single precision, as the conversion routines compare in floats."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except (OverflowError, struct.error):
        return value


def _asin(value: float) -> float:
    """Arcsine that yields NaN outside [-1, 1] instead of raising."""
    if -1.0 <= value <= 1.0:
        return math.asin(value)
    return math.nan


@dataclass(frozen=True, eq=False)
class Matrix3:
    """Immutable 3x3 matrix; ``m[i][j]`` is row ``i``, column ``j``."""

    m11: float = 0.0
    m12: float = 0.0
    m13: float = 0.0
    m21: float = 0.0
    m22: float = 0.0
    m23: float = 0.0
    m31: float = 0.0
    m32: float = 0.0
    m33: float = 0.0

    __hash__ = None  # equality is approximate, so matrices are unhashable

    # construction -------------------------------------------------------

    @classmethod
    def _from_rows(cls, rows) -> Matrix3:
        return cls(*(v for row in rows for v in row))

    @staticmethod
    def identity() -> Matrix3:
        """The identity matrix."""
        return Matrix3(1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def zero() -> Matrix3:
        """The zero matrix."""
        return Matrix3()

    @staticmethod
    def rx(angle: float) -> Matrix3:
        """Rotation of ``angle`` radians about the X axis."""
        c, s = math.cos(angle), math.sin(angle)
        return Matrix3(1.0, 0.0, 0.0, 0.0, c, -s, 0.0, s, c)

    @staticmethod
    def ry(angle: float) -> Matrix3:
        """Rotation of ``angle`` radians about the Y axis."""
        c, s = math.cos(angle), math.sin(angle)
        return Matrix3(c, 0.0, s, 0.0, 1.0, 0.0, -s, 0.0, c)

    @staticmethod
    def rz(angle: float) -> Matrix3:
        """Rotation of ``angle`` radians about the Z axis."""
        c, s = math.cos(angle), math.sin(angle)
        return Matrix3(c, -s, 0.0, s, c, 0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_euler_angles(roo: RotOrder, angles: Vector3) -> Matrix3:
        """Rotation built from (x, y, z) radians applied in the order ``roo``."""
        single = {
            "X": Matrix3.rx(angles[0]),
            "Y": Matrix3.ry(angles[1]),
            "Z": Matrix3.rz(angles[2]),
        }
        first, second, third = (single[axis] for axis in RotOrder(roo).name)
        return (first * second) * third

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> Matrix3:
        """Rotation of ``angle`` radians about ``axis``."""
        half = angle / 2.0
        s = math.sin(half)
        x, y, z, w = axis.x * s, axis.y * s, axis.z * s, math.cos(half)
        length = math.sqrt(x * x + y * y + z * z + w * w)
        if length > EPSILON:
            x, y, z, w = x / length, y / length, z / length, w / length
        return Matrix3(
            1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y),
            2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x),
            2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (y * y + x * x),
        )

    @staticmethod
    def parse(text: str) -> Matrix3:
        """Read nine whitespace separated numbers in row-major order."""
        parts = text.split()
        if len(parts) < 9:
            raise ValueError(f"expected nine numbers, got {text!r}")
        return Matrix3(*(float(p) for p in parts[:9]))

    # access -------------------------------------------------------------

    @property
    def rows(self) -> tuple[tuple[float, float, float], ...]:
        """The three rows as tuples."""
        return (
            (self.m11, self.m12, self.m13),
            (self.m21, self.m22, self.m23),
            (self.m31, self.m32, self.m33),
        )

    def __iter__(self) -> Iterator[tuple[float, float, float]]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> tuple[float, float, float]:
        if not 0 <= index <= 2:
            raise IndexError(f"Matrix3 row index out of range: {index}")
        return self.rows[index]

    def _values(self) -> tuple[float, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))

    # arithmetic ---------------------------------------------------------

    def __neg__(self) -> Matrix3:
        return Matrix3(*(-v for v in self._values()))

    def __add__(self, other: Matrix3) -> Matrix3:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3(*(a + b for a, b in zip(self._values(), other._values())))

    def __sub__(self, other: Matrix3) -> Matrix3:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3(*(a - b for a, b in zip(self._values(), other._values())))

    def __mul__(self, other):
        if isinstance(other, Matrix3):
            columns = list(zip(*other.rows))
            return Matrix3._from_rows(
                tuple(sum(p * q for p, q in zip(row, col)) for col in columns)
                for row in self.rows
            )
        if isinstance(other, Vector3):
            return Vector3(*(sum(p * q for p, q in zip(row, other)) for row in self.rows))
        if isinstance(other, Real):
            return Matrix3(*(other * v for v in self._values()))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def __truediv__(self, d):
        if not isinstance(d, Real):
            return NotImplemented
        return Matrix3(*(v / d for v in self._values()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return all(
            math.fabs(a - b) <= _EQUALITY_TOLERANCE
            for a, b in zip(self._values(), other._values())
        )

    def __str__(self) -> str:
        return "".join(" ".join(f"{v:g}" for v in row) + "\n" for row in self.rows)

    # special functions --------------------------------------------------

    def transpose(self) -> Matrix3:
        """Transposed copy."""
        return Matrix3._from_rows(zip(*self.rows))

    def to_gl_matrix(self) -> list[float]:
        """Sixteen values of the equivalent 4x4 matrix in column-major order."""
        cols = list(zip(*self.rows))
        out: list[float] = []
        for col in cols:
            out.extend(col)
            out.append(0.0)
        out.extend((0.0, 0.0, 0.0, 1.0))
        return out

    # Euler angles -------------------------------------------------------

    def to_euler_angles(self, roo: RotOrder) -> Vector3:
        """Euler angles (x, y, z radians) of this rotation for order ``roo``."""
        converters = {
            RotOrder.XYZ: self.to_euler_angles_xyz,
            RotOrder.XZY: self.to_euler_angles_xzy,
            RotOrder.YXZ: self.to_euler_angles_yxz,
            RotOrder.YZX: self.to_euler_angles_yzx,
            RotOrder.ZXY: self.to_euler_angles_zxy,
            RotOrder.ZYX: self.to_euler_angles_zyx,
        }
        return converters[RotOrder(roo)]()

    def to_euler_angles_xyz(self) -> Vector3:
        """Euler angles for the XYZ order."""
        h = _f32(self.m13)
        if h == 1:
            return Vector3(math.atan2(self.m32, self.m22), PI / 2, 0.0)
        if h == -1:
            return Vector3(math.atan2(self.m32, self.m22), -PI / 2, 0.0)
        return Vector3(
            math.atan2(-self.m23, self.m33),
            _asin(h),
            math.atan2(-self.m12, self.m11),
        )

    def to_euler_angles_xzy(self) -> Vector3:
        """Euler angles for the XZY order."""
        h = _f32(-self.m12)
        if h == 1:
            return Vector3(0.0, math.atan2(self.m23, self.m33), PI / 2)
        if h == -1:
            return Vector3(0.0, math.atan2(-self.m23, self.m33), -PI / 2)
        return Vector3(
            math.atan2(self.m32, self.m22),
            math.atan2(self.m13, self.m11),
            _asin(h),
        )

    def to_euler_angles_yxz(self) -> Vector3:
        """Euler angles for the YXZ order."""
        h = _f32(self.m23)
        if h == -1:
            return Vector3(PI / 2, 0.0, math.atan2(self.m31, self.m32))
        if h == 1:
            return Vector3(-PI / 2, math.atan2(-self.m31, -self.m32), 0.0)
        return Vector3(
            _asin(-h),
            math.atan2(self.m13, self.m33),
            math.atan2(self.m21, self.m22),
        )

    def to_euler_angles_yzx(self) -> Vector3:
        """Euler angles for the YZX order."""
        h = _f32(self.m21)
        if h == 1:
            return Vector3(math.atan2(self.m13, self.m33), 0.0, PI / 2)
        if h == -1:
            return Vector3(math.atan2(self.m32, self.m12), 0.0, -PI / 2)
        return Vector3(
            math.atan2(-self.m23, self.m22),
            math.atan2(-self.m31, self.m11),
            _asin(h),
        )

    def to_euler_angles_zxy(self) -> Vector3:
        """Euler angles for the ZXY order."""
        h = _f32(self.m32)
        if h == 1:
            return Vector3(PI / 2, math.atan2(self.m13, -self.m23), 0.0)
        if h == -1:
            return Vector3(-PI / 2, 0.0, math.atan2(self.m21, self.m11))
        return Vector3(
            _asin(h),
            math.atan2(-self.m31, self.m33),
            math.atan2(-self.m12, self.m22),
        )

    def to_euler_angles_zyx(self) -> Vector3:
        """Euler angles for the ZYX order."""
        h = _f32(self.m31)
        if h == -1:
            return Vector3(math.atan2(self.m12, self.m22), PI / 2, 0.0)
        if h == 1:
            return Vector3(math.atan2(-self.m12, -self.m13), -PI / 2, 0.0)
        return Vector3(
            math.atan2(self.m32, self.m33),
            _asin(-h),
            math.atan2(self.m21, self.m11),
        )

    # quaternion components ----------------------------------------------

    def to_axis_angle(self) -> tuple[Vector3, float]:
        """Vector part and scalar part of the unit quaternion derived from this matrix.

        The first item is (x, y, z) of the quaternion, the second its w.
        """
        m11, m22, m33 = self.m11, self.m22, self.m33
        w_sq = (m11 + m22 + m33 + 1) / 4.0
        x_sq = (m11 - m22 - m33 + 1) / 4.0
        y_sq = (-m11 + m22 - m33 + 1) / 4.0
        z_sq = (-m11 - m22 - m33 + 1) / 4.0
        biggest = max(max(w_sq, z_sq), max(x_sq, y_sq))
        if biggest == w_sq:
            w = math.sqrt(w_sq)
            x = ((self.m32 - self.m23) / 4.0) / w
            y = ((self.m13 - self.m31) / 4.0) / w
            z = ((self.m21 - self.m12) / 4.0) / w
        elif biggest == x_sq:
            x = math.sqrt(x_sq)
            w = ((self.m32 - self.m23) / 4.0) / x
            y = ((self.m21 + self.m12) / 4.0) / x
            z = ((self.m13 + self.m31) / 4.0) / x
        elif biggest == y_sq:
            y = math.sqrt(y_sq)
            w = ((self.m13 - self.m31) / 4.0) / y
            x = ((self.m21 + self.m12) / 4.0) / y
            z = ((self.m23 + self.m32) / 4.0) / y
        else:
            z = math.sqrt(z_sq)
            w = ((self.m21 - self.m12) / 4.0) / z
            y = ((self.m23 + self.m32) / 4.0) / z
            x = ((self.m13 + self.m31) / 4.0) / z
        length = math.sqrt(x * x + y * y + z * z + w * w)
        if length > EPSILON:
            x, y, z, w = x / length, y / length, z / length, w / length
        return Vector3(x, y, z), w


IDENTITY = Matrix3.identity()
ZERO = Matrix3.zero()
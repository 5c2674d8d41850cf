"""A double precision quaternion with axis-angle and matrix conversions."""

from __future__ import annotations

import math
import struct
import warnings
from dataclasses import dataclass
from numbers import Real
from typing import Iterator

from animtk.constants import EPSILON
from animtk.matrix3 import Matrix3
from animtk.vector3 import Vector3

_EQUALITY_TOLERANCE = 0.001


def _f32(value: float) -> float:
    """Round to single precision."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except (OverflowError, struct.error):
        return value


def _acos(value: float) -> float:
    """Arccosine that yields NaN outside [-1, 1] instead of raising."""
    if -1.0 <= value <= 1.0:
        return math.acos(value)
    return math.nan


def _divide(a: float, b: float) -> float:
    """Floating point division that yields inf or NaN on a zero divisor."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


@dataclass(frozen=True, eq=False)
class Quaternion:
    """Immutable quaternion stored as (x, y, z, w); equality treats q and -q alike."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    __hash__ = None  # equality is approximate, so quaternions are unhashable

    # access -------------------------------------------------------------

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __getitem__(self, index: int) -> float:
        if not 0 <= index <= 3:
            raise IndexError(f"Quaternion index out of range: {index}")
        return (self.x, self.y, self.z, self.w)[index]

    # arithmetic ---------------------------------------------------------

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, -self.w)

    def __add__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(*(a + b for a, b in zip(self, other)))

    def __sub__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(*(a - b for a, b in zip(self, other)))

    def __mul__(self, other):
        if isinstance(other, Quaternion):
            x0, y0, z0, w0 = self
            x1, y1, z1, w1 = other
            return Quaternion(
                w0 * x1 + x0 * w1 + y0 * z1 - z0 * y1,
                w0 * y1 + y0 * w1 + z0 * x1 - x0 * z1,
                w0 * z1 + z0 * w1 + x0 * y1 - y0 * x1,
                w0 * w1 - x0 * x1 - y0 * y1 - z0 * z1,
            )
        if isinstance(other, Vector3):
            return self.to_matrix() * other
        if isinstance(other, Real):
            return Quaternion(*(c * other for c in self))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def __truediv__(self, d):
        if not isinstance(d, Real):
            return NotImplemented
        return Quaternion(*(c / d for c in self))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        same = all(math.fabs(a - b) < _EQUALITY_TOLERANCE for a, b in zip(self, other))
        opposite = all(
            math.fabs(a + b) < _EQUALITY_TOLERANCE for a, b in zip(self, other)
        )
        return same or opposite

    def __str__(self) -> str:
        return f"{self.x:g} {self.y:g} {self.z:g} {self.w:g}"

    # static functions ---------------------------------------------------

    @staticmethod
    def dot(q0: Quaternion, q1: Quaternion) -> float:
        """Four-dimensional dot product."""
        return sum(a * b for a, b in zip(q0, q1))

    @staticmethod
    def slerp(q0: Quaternion, q1: Quaternion, t: float) -> Quaternion:
        """Spherical interpolation from q0 (t=0) to q1 (t=1).

        The arc is taken as given; q1 is not flipped to the shorter side.
        """
        dot = Quaternion.dot(q0, q1)
        omega = _f32(math.acos(max(-1.0, min(1.0, dot))))
        if omega == 0.0 or t == 0.0:
            return q0
        if t == 1.0:
            return q1
        sin_omega = math.sin(omega)
        a = math.sin(omega * (1 - t)) / sin_omega
        b = math.sin(omega * t) / sin_omega
        return a * q0 + b * q1

    @staticmethod
    def parse(text: str) -> Quaternion:
        """Read four whitespace separated numbers in the order w x y z."""
        parts = text.split()
        if len(parts) < 4:
            raise ValueError(f"expected four numbers, got {text!r}")
        w, x, y, z = (float(p) for p in parts[:4])
        return Quaternion(x, y, z, w)

    # conversions --------------------------------------------------------

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> Quaternion:
        """Unit quaternion rotating ``angle`` radians about ``axis``."""
        half = angle / 2.0
        s = math.sin(half)
        return Quaternion(axis.x * s, axis.y * s, axis.z * s, math.cos(half)).normalized()

    def to_axis_angle(self) -> tuple[Vector3, float]:
        """Rotation axis and angle in radians; degenerate rotations give NaN axes."""
        half = _acos(self.w)
        s = math.sin(half)
        axis = Vector3(_divide(self.x, s), _divide(self.y, s), _divide(self.z, s))
        return axis, half * 2

    def to_matrix(self) -> Matrix3:
        """Rotation matrix of this quaternion."""
        x, y, z, w = self
        return Matrix3(
            1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y),
            2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x),
            2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (y * y + x * x),
        )

    @staticmethod
    def from_matrix(m: Matrix3) -> Quaternion:
        """Unit quaternion of a rotation matrix."""
        vector, w = m.to_axis_angle()
        return Quaternion(vector.x, vector.y, vector.z, w).normalized()

    # special functions --------------------------------------------------

    def sqr_length(self) -> float:
        """Squared norm."""
        return Quaternion.dot(self, self)

    def length(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.sqr_length())

    def normalized(self) -> Quaternion:
        """Unit-length copy; a near-zero quaternion is returned unchanged with a warning."""
        length = self.length()
        if length > EPSILON:
            return self / length
        warnings.warn("normalizing a quaternion with length 0", RuntimeWarning, stacklevel=2)
        return Quaternion(*self)

    def inverse(self) -> Quaternion:
        """Multiplicative inverse."""
        return Quaternion(-self.x, -self.y, -self.z, self.w) / self.sqr_length()


ZERO = Quaternion(0.0, 0.0, 0.0, 0.0)
IDENTITY = Quaternion(0.0, 0.0, 0.0, 1.0)
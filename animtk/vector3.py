"""A three-component double precision vector with tolerant equality."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator

from animtk.constants import EPSILON

_EQUALITY_TOLERANCE = 0.001


@dataclass(frozen=True, eq=False)
class Vector3:
    """Immutable 3D vector; ``a * b`` between vectors is the dot product."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    __hash__ = None  # equality is approximate, so vectors are unhashable

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        if not 0 <= index <= 2:
            raise IndexError(f"Vector3 index out of range: {index}")
        return (self.x, self.y, self.z)[index]

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        if isinstance(other, Vector3):
            return Vector3.dot(self, other)
        if isinstance(other, Real):
            return Vector3(other * self.x, other * self.y, other * self.z)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def __truediv__(self, d):
        if not isinstance(d, Real):
            return NotImplemented
        inv = 1.0 / d
        return Vector3(self.x * inv, self.y * inv, self.z * inv)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return all(
            math.fabs(a - b) < _EQUALITY_TOLERANCE for a, b in zip(self, other)
        )

    def __str__(self) -> str:
        return f"{self.x:g} {self.y:g} {self.z:g}"

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.sqr_length())

    def sqr_length(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalized(self) -> Vector3:
        """Unit-length copy; vectors shorter than EPSILON are returned unchanged."""
        length = self.length()
        if length > EPSILON:
            return self / length
        return Vector3(self.x, self.y, self.z)

    @staticmethod
    def dot(a: Vector3, b: Vector3) -> float:
        """Dot product."""
        return a.x * b.x + a.y * b.y + a.z * b.z

    @staticmethod
    def cross(left: Vector3, right: Vector3) -> Vector3:
        """Cross product ``left x right``."""
        return Vector3(
            left.y * right.z - left.z * right.y,
            left.z * right.x - left.x * right.z,
            left.x * right.y - left.y * right.x,
        )

    @staticmethod
    def distance(a: Vector3, b: Vector3) -> float:
        """Distance between two points."""
        return math.sqrt(Vector3.distance_sqr(a, b))

    @staticmethod
    def distance_sqr(a: Vector3, b: Vector3) -> float:
        """Squared distance between two points."""
        return sum((p - q) * (p - q) for p, q in zip(a, b))

    @staticmethod
    def lerp(a: Vector3, b: Vector3, t: float) -> Vector3:
        """Linear interpolation from ``a`` (t=0) to ``b`` (t=1)."""
        return a * (1 - t) + b * t

    @staticmethod
    def parse(text: str) -> Vector3:
        """Read three whitespace separated numbers."""
        parts = text.split()
        if len(parts) < 3:
            raise ValueError(f"expected three numbers, got {text!r}")
        x, y, z = (float(p) for p in parts[:3])
        return Vector3(x, y, z)


AXIS_X = Vector3(1.0, 0.0, 0.0)
AXIS_Y = Vector3(0.0, 1.0, 0.0)
AXIS_Z = Vector3(0.0, 0.0, 1.0)
ZERO = Vector3(0.0, 0.0, 0.0)
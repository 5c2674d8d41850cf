"""Numeric constants and small scalar helpers shared by the math types."""

import math

PI = 3.1415926535897932384626433832795
PI_2 = 1.5707963267948966192313216916398

EPSILON = 0.000001
RAD2DEG = 180.0 / PI
DEG2RAD = PI / 180.0

# Component indices for vectors and quaternions.
VX, VY, VZ, VW = range(4)


def is_zero(x: float, eps: float = 0.001) -> bool:
    """Return True when ``x`` lies strictly within ``eps`` of zero."""
    return math.fabs(x) < eps


def sgn(x: float) -> int:
    """Return 1 for non-negative values and -1 for negative ones."""
    return 1 if x >= 0 else -1
"""Skeleton poses: root position plus one local rotation per joint."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from animtk.glmmath import Quat, Vec3, slerp
from animtk.glmmath import squad as _quat_squad


@dataclass
class Pose:
    """Root translation and per-joint local rotations.

    ``Pose(q)`` with a single quaternion holds that one rotation at the origin;
    ``Pose(pos, q)`` holds one rotation at ``pos``.
    """

    root_pos: Vec3 = field(default_factory=Vec3)
    joint_rots: list[Quat] = field(default_factory=list)

    def __post_init__(self):
        if isinstance(self.root_pos, Quat):
            if self.joint_rots:
                raise TypeError("a pose built from a rotation takes no other rotations")
            self.joint_rots = [self.root_pos]
            self.root_pos = Vec3()
        elif not isinstance(self.root_pos, Vec3):
            x, y, z = self.root_pos
            self.root_pos = Vec3(float(x), float(y), float(z))
        if isinstance(self.joint_rots, Quat):
            self.joint_rots = [self.joint_rots]
        else:
            self.joint_rots = list(self.joint_rots)

    def copy(self) -> Pose:
        """Independent copy of this pose."""
        return Pose(self.root_pos, list(self.joint_rots))

    @staticmethod
    def lerp(p1: Pose, p2: Pose, u: float) -> Pose:
        """Linear root blend and slerped rotations from p1 (u=0) to p2 (u=1)."""
        _check_counts(p1, p2)
        root = p1.root_pos * (1.0 - u) + p2.root_pos * u
        rots = [slerp(q1, q2, u) for q1, q2 in zip(p1.joint_rots, p2.joint_rots)]
        return Pose(root, rots)

    @staticmethod
    def squad(p0: Pose, p1: Pose, p2: Pose, p3: Pose, u: float) -> Pose:
        """Cubic rotation blend between p1 and p2 using neighbours p0 and p3."""
        for other in (p0, p2, p3):
            _check_counts(p1, other)
        root = p1.root_pos * (1.0 - u) + p2.root_pos * u
        rots = []
        for q0, q1, q2, q3 in zip(p0.joint_rots, p1.joint_rots, p2.joint_rots, p3.joint_rots):
            s1 = intermediate(q0, q1, q2)
            s2 = intermediate(q1, q2, q3)
            rots.append(_quat_squad(q1, q2, s1, s2, u))
        return Pose(root, rots)

    def __str__(self) -> str:
        pos = self.root_pos
        lines = ["pose(", f"{pos.x:g} {pos.y:g} {pos.z:g}"]
        lines.extend(
            f"quat({q.w:f}, {{{q.x:f}, {q.y:f}, {q.z:f}}})" for q in self.joint_rots
        )
        return "\n".join(lines) + "\n)\n"


def _check_counts(reference: Pose, other: Pose) -> None:
    if len(other.joint_rots) < len(reference.joint_rots):
        raise ValueError(
            f"pose has {len(other.joint_rots)} rotations, "
            f"expected at least {len(reference.joint_rots)}"
        )


def q_exp(q: Quat) -> Quat:
    """Quaternion exponential of the vector part of ``q``."""
    angle = math.sqrt(q.x * q.x + q.y * q.y + q.z * q.z)
    sn = math.sin(angle)
    cs = math.cos(angle)
    coeff = 1.0 if abs(sn) < 0.000001 else sn / angle
    return Quat(cs, coeff * q.x, coeff * q.y, coeff * q.z)


def q_log(q: Quat) -> Quat:
    """Quaternion logarithm."""
    angle = math.sqrt(q.x * q.x + q.y * q.y + q.z * q.z)
    sn = math.sin(angle)
    coeff = 1.0 if abs(sn) < 0.0000001 else angle / sn
    length = q.length()
    w = math.log(length) if length > 0.0 else -math.inf
    return Quat(w, coeff * q.x, coeff * q.y, coeff * q.z)


def intermediate(q0: Quat, q1: Quat, q2: Quat) -> Quat:
    """Squad control point for ``q1`` given its neighbours."""
    inv1 = q1.inverse()
    term = q2 * inv1 + q0 * inv1
    return q_exp(-0.25 * q_log(term)) * q1
"""Joints: named transforms organized into a hierarchy."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence, Union

from animtk.glmmath import Quat, RotOrder, Vec3
from animtk.transform import Transform

VecLike = Union[Vec3, Sequence[float]]


class Joint:
    """A node of a skeleton holding its local and global transforms."""

    def __init__(self, name: str = "") -> None:
        self.id = -1
        self.name = name
        self.num_channels = 6
        self.rotation_order = RotOrder.XYZ
        self.parent: Optional[Joint] = None
        self.children: list[Joint] = []
        self.local2parent = Transform()
        self.local2global = Transform()

    def __repr__(self) -> str:
        return f"Joint(name={self.name!r}, id={self.id})"

    def copy(self) -> Joint:
        """Copy of this joint without its parent and children."""
        clone = Joint(self.name)
        clone.id = self.id
        clone.num_channels = self.num_channels
        clone.rotation_order = self.rotation_order
        clone.local2parent = self.local2parent
        clone.local2global = self.local2global
        return clone

    @property
    def local_translation(self) -> Vec3:
        """Translation relative to the parent."""
        return self.local2parent.translation

    @local_translation.setter
    def local_translation(self, value: VecLike) -> None:
        self.local2parent = replace(self.local2parent, translation=value)

    @property
    def local_rotation(self) -> Quat:
        """Rotation relative to the parent."""
        return self.local2parent.rotation

    @local_rotation.setter
    def local_rotation(self, value: Quat) -> None:
        self.local2parent = replace(self.local2parent, rotation=value)

    @property
    def global_translation(self) -> Vec3:
        """World-space position computed by the last forward kinematics pass."""
        return self.local2global.translation

    @property
    def global_rotation(self) -> Quat:
        """World-space rotation computed by the last forward kinematics pass."""
        return self.local2global.rotation

    def assign_id(self, joint_id: int) -> None:
        """Set the id; joints named ``Site...`` are renamed ``Site<id>``."""
        self.id = joint_id
        if self.name.startswith("Site"):
            self.name = f"Site{joint_id}"

    def fk(self) -> None:
        """Update the global transform of this joint and all its descendants."""
        if self.parent is not None:
            self.local2global = self.parent.local2global * self.local2parent
        else:
            self.local2global = self.local2parent
        for child in self.children:
            child.fk()

    @staticmethod
    def attach(parent: Optional[Joint], child: Optional[Joint]) -> None:
        """Make ``child`` a child of ``parent``, leaving any previous parent."""
        if child is None:
            return
        old = child.parent
        if old is not None:
            old.children = [c for c in old.children if c is not child]
        child.parent = parent
        if parent is not None:
            parent.children.append(child)

    @staticmethod
    def detach(parent: Optional[Joint], child: Optional[Joint]) -> None:
        """Separate ``child`` from ``parent`` if it is that parent's child."""
        if child is None or child.parent is not parent:
            return
        if parent is not None:
            for index, candidate in enumerate(parent.children):
                if candidate is child:
                    del parent.children[index]
                    break
        child.parent = None
"""Skeletons: joint hierarchies addressed by id or name."""

from __future__ import annotations

from typing import Iterator, Optional

from animtk.joint import Joint
from animtk.pose import Pose


class Skeleton:
    """An ordered collection of joints; the root joint has id 0."""

    def __init__(self) -> None:
        self._joints: list[Joint] = []
        self._root: Optional[Joint] = None

    def __len__(self) -> int:
        return len(self._joints)

    def __iter__(self) -> Iterator[Joint]:
        return iter(self._joints)

    @property
    def num_joints(self) -> int:
        """Number of joints."""
        return len(self._joints)

    @property
    def root(self) -> Optional[Joint]:
        """The root joint, or None for an empty skeleton."""
        return self._root

    def copy(self) -> Skeleton:
        """Deep copy with its own joints and the same hierarchy."""
        clone = Skeleton()
        clone._joints = [joint.copy() for joint in self._joints]
        for original, new in zip(self._joints, clone._joints):
            if original.parent is None:
                new.parent = None
                clone._root = new
            else:
                new.parent = clone._joints[original.parent.id]
            new.children = [clone._joints[child.id] for child in original.children]
        return clone

    def clear(self) -> None:
        """Remove all joints."""
        self._root = None
        self._joints = []

    def fk(self) -> None:
        """Recompute global transforms of every joint."""
        if self._root is not None:
            self._root.fk()

    def get_pose(self) -> Pose:
        """Pose holding the root translation and every joint's local rotation."""
        if not self._joints:
            return Pose()
        return Pose(
            self._joints[0].local_translation,
            [joint.local_rotation for joint in self._joints],
        )

    def set_pose(self, pose: Pose) -> None:
        """Apply a pose whose rotations match the joints in number and order."""
        if len(pose.joint_rots) != len(self._joints):
            raise ValueError(
                f"pose has {len(pose.joint_rots)} rotations, "
                f"skeleton has {len(self._joints)} joints"
            )
        for index, (joint, rotation) in enumerate(zip(self._joints, pose.joint_rots)):
            if index == 0:
                joint.local_translation = pose.root_pos
            joint.local_rotation = rotation
        self.fk()

    def by_name(self, name: str) -> Optional[Joint]:
        """First joint with the given name, or None."""
        return next((joint for joint in self._joints if joint.name == name), None)

    def by_id(self, joint_id: int) -> Joint:
        """Joint with the given id."""
        if not 0 <= joint_id < len(self._joints):
            raise IndexError(f"joint id out of range: {joint_id}")
        return self._joints[joint_id]

    def add_joint(self, joint: Joint, parent: Optional[Joint] = None) -> None:
        """Add a joint; without a parent it becomes the root."""
        joint.assign_id(len(self._joints))
        self._joints.append(joint)
        if parent is None:
            self._root = joint
        else:
            Joint.attach(parent, joint)

    def delete_joint(self, name: str) -> None:
        """Delete the named joint and all its descendants; ids are reassigned."""
        joint = self.by_name(name)
        if joint is not None:
            self._remove(joint)

    def _remove(self, joint: Joint) -> None:
        for child in list(joint.children):
            Joint.detach(joint, child)
            self._remove(child)

        parent = joint.parent
        if parent is not None:
            Joint.detach(parent, joint)
            if not parent.children:
                parent.num_channels = 0

        start = joint.id
        del self._joints[start]
        for index in range(start, len(self._joints)):
            self._joints[index].assign_id(index)
        if joint is self._root:
            self._root = None
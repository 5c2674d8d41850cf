"""Motions: evenly spaced pose keys interpolated linearly."""

from __future__ import annotations

import math

from animtk.pose import Pose
from animtk.skeleton import Skeleton

_FLOAT_EPSILON = 1.1920929e-07


class Motion:
    """A sequence of poses sampled at a fixed framerate."""

    def __init__(self, fps: float = 120.0) -> None:
        self._fps = fps
        self._dt = 1.0 / fps
        self._keys: list[Pose] = []

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def framerate(self) -> float:
        """Keys per second."""
        return self._fps

    @framerate.setter
    def framerate(self, fps: float) -> None:
        self._fps = fps
        self._dt = 1.0 / fps

    @property
    def delta_time(self) -> float:
        """Seconds between consecutive keys."""
        return self._dt

    @delta_time.setter
    def delta_time(self, dt: float) -> None:
        self._dt = dt
        self._fps = 1.0 / dt

    @property
    def num_keys(self) -> int:
        """Number of keys."""
        return len(self._keys)

    def copy(self) -> Motion:
        """Deep copy."""
        clone = Motion(self._fps)
        clone._dt = self._dt
        clone._keys = [key.copy() for key in self._keys]
        return clone

    def _check(self, key_id: int) -> None:
        if not 0 <= key_id < len(self._keys):
            raise IndexError(f"key id out of range: {key_id}")

    def update(self, skeleton: Skeleton, time: float, loop: bool = True) -> None:
        """Pose the skeleton at the given time."""
        skeleton.set_pose(self.value(time, loop))

    def value(self, t: float, loop: bool = True) -> Pose:
        """Pose at time ``t``, wrapping around when ``loop`` is set."""
        if not self._keys:
            return Pose()
        if len(self._keys) == 1:
            return self._keys[0].copy()

        duration = self.duration()
        if loop:
            t = math.fmod(t, duration)
            if t < 0:
                t += duration
        elif t >= duration - _FLOAT_EPSILON:
            return self._keys[-1].copy()
        elif t < 0:
            return self._keys[0].copy()

        segment = min(int(t / self._dt), len(self._keys) - 2)
        u = (t - segment * self._dt) / self._dt
        return Pose.lerp(self._keys[segment], self._keys[segment + 1], u)

    def append_key(self, pose: Pose) -> None:
        """Add a key at the end."""
        self._keys.append(pose.copy())

    def edit_key(self, key_id: int, pose: Pose) -> None:
        """Replace an existing key."""
        self._check(key_id)
        self._keys[key_id] = pose.copy()

    def delete_key(self, key_id: int) -> None:
        """Remove a key; later keys shift down by one."""
        self._check(key_id)
        del self._keys[key_id]

    def key(self, key_id: int) -> Pose:
        """Copy of the key with the given id."""
        self._check(key_id)
        return self._keys[key_id].copy()

    def clear(self) -> None:
        """Remove all keys."""
        self._keys = []

    def duration(self) -> float:
        """Time from the first key to the last, in seconds."""
        return (len(self._keys) - 1) * self._dt

    def normalized_duration(self, t: float) -> float:
        """Fraction of the motion reached at time ``t`` (wrapping); NaN if it has no length."""
        duration = self.duration()
        if duration == 0.0:
            return math.nan
        return math.fmod(t, duration) / duration

    def key_id(self, t: float) -> int:
        """Index of the key that starts the interval containing ``t``."""
        if len(self._keys) <= 1:
            return 0
        t = self.normalized_duration(t) * self.duration()
        return int(t / self._dt)
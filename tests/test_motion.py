import math

import pytest

from animtk.glmmath import Quat, Vec3
from animtk.joint import Joint
from animtk.motion import Motion
from animtk.pose import Pose
from animtk.skeleton import Skeleton


def _keys():
    return [
        Pose(Vec3(0.0, 0.0, 0.0), [Quat.identity(), Quat.identity()]),
        Pose(Vec3(2.0, 0.0, 0.0), [Quat.from_angle_axis(0.4, (0, 1, 0)), Quat.identity()]),
        Pose(Vec3(2.0, 4.0, 0.0), [Quat.from_angle_axis(0.8, (0, 1, 0)), Quat.identity()]),
    ]


def _motion():
    motion = Motion(10.0)
    for key in _keys():
        motion.append_key(key)
    return motion


def test_defaults():
    motion = Motion()
    assert motion.framerate == 120.0
    assert motion.delta_time == pytest.approx(1.0 / 120.0)
    assert motion.num_keys == 0


def test_delta_time_and_framerate_are_reciprocal():
    motion = Motion()
    motion.delta_time = 0.25
    assert motion.framerate == pytest.approx(1.0 / 0.25)
    motion.framerate = 50.0
    assert motion.delta_time == pytest.approx(1.0 / 50.0)


def test_duration():
    motion = _motion()
    assert motion.duration() == pytest.approx(2 * motion.delta_time)


def test_value_at_keys():
    motion = _motion()
    assert list(motion.value(0.0).root_pos) == pytest.approx([0.0, 0.0, 0.0], abs=1e-9)
    assert list(motion.value(0.1, loop=False).root_pos) == pytest.approx(
        [2.0, 0.0, 0.0], abs=1e-9
    )
    assert list(motion.value(0.2, loop=False).root_pos) == pytest.approx(
        [2.0, 4.0, 0.0], abs=1e-9
    )


def test_value_interpolates():
    motion = _motion()
    keys = _keys()
    expected = Pose.lerp(keys[0], keys[1], 0.5)
    result = motion.value(0.05)
    assert list(result.root_pos) == pytest.approx([1.0, 0.0, 0.0], abs=1e-9)
    assert [list(q) for q in result.joint_rots] == [
        pytest.approx(list(q), abs=1e-9) for q in expected.joint_rots
    ]


def test_value_clamps_without_loop():
    motion = _motion()
    assert list(motion.value(5.0, loop=False).root_pos) == pytest.approx(
        [2.0, 4.0, 0.0], abs=1e-9
    )
    assert list(motion.value(-1.0, loop=False).root_pos) == pytest.approx(
        [0.0, 0.0, 0.0], abs=1e-9
    )


def test_value_wraps_with_loop():
    motion = _motion()
    a = motion.value(0.05)
    b = motion.value(motion.duration() + 0.05)
    assert list(b.root_pos) == pytest.approx(list(a.root_pos), abs=1e-6)


def test_value_of_empty_and_single_key():
    motion = Motion()
    assert motion.value(1.0).joint_rots == []
    key = _keys()[1]
    motion.append_key(key)
    assert motion.value(3.0).root_pos == key.root_pos


def test_key_returns_copy():
    motion = _motion()
    pose = motion.key(0)
    pose.joint_rots.append(Quat.identity())
    assert len(motion.key(0).joint_rots) == 2


def test_edit_and_delete_key():
    motion = _motion()
    replacement = Pose(Vec3(7.0, 7.0, 7.0), [Quat.identity(), Quat.identity()])
    motion.edit_key(1, replacement)
    assert motion.key(1).root_pos == replacement.root_pos
    motion.delete_key(0)
    assert motion.num_keys == 2
    assert motion.key(0).root_pos == replacement.root_pos


def test_key_index_errors():
    motion = _motion()
    with pytest.raises(IndexError):
        motion.key(3)
    with pytest.raises(IndexError):
        motion.delete_key(-1)
    with pytest.raises(IndexError):
        motion.edit_key(5, Pose())


def test_key_id_and_normalized_duration():
    motion = _motion()
    assert motion.key_id(0.0) == 0
    assert motion.key_id(0.15) == 1
    assert motion.normalized_duration(0.1) == pytest.approx(0.5)
    assert Motion().key_id(1.0) == 0


def test_normalized_duration_without_length():
    motion = Motion()
    motion.append_key(Pose())
    result = motion.normalized_duration(1.0)
    assert str(result) == "nan"


def test_clear():
    motion = _motion()
    motion.clear()
    assert len(motion) == 0


def test_copy_is_independent():
    motion = _motion()
    clone = motion.copy()
    clone.delete_key(0)
    assert motion.num_keys == 3
    assert clone.framerate == motion.framerate


def test_update_poses_skeleton():
    skeleton = Skeleton()
    root, child = Joint("root"), Joint("child")
    skeleton.add_joint(root)
    skeleton.add_joint(child, root)
    motion = _motion()
    motion.update(skeleton, 0.1, loop=False)
    pose = skeleton.get_pose()
    key = motion.key(1)
    assert list(pose.root_pos) == pytest.approx([2.0, 0.0, 0.0], abs=1e-9)
    assert list(pose.joint_rots[0]) == pytest.approx(list(key.joint_rots[0]), abs=1e-9)
    assert list(root.global_translation) == pytest.approx([2.0, 0.0, 0.0], abs=1e-9)
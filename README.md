# animtk

A small pure-Python toolkit for character animation, with no dependencies
outside the standard library.

## What is in it

- `animtk.vector3.Vector3`: an immutable 3D vector. `a * b` between two
  vectors is the dot product; equality allows a tolerance of 0.001. Static
  helpers: `dot`, `cross`, `distance`, `distance_sqr`, `lerp`, `parse`.
- `animtk.matrix3.Matrix3`: an immutable 3x3 matrix with `rx`, `ry`, `rz`,
  `from_euler_angles`/`to_euler_angles` in all six rotation orders,
  `from_axis_angle`, `to_axis_angle`, `transpose`, `to_gl_matrix` and `parse`.
- `animtk.quaternion.Quaternion`: an immutable quaternion stored as
  `(x, y, z, w)`, with `slerp`, `from_axis_angle`, `to_axis_angle`,
  `to_matrix`, `from_matrix`, `normalized` and `inverse`. Equality treats
  `q` and `-q` as the same rotation.
- `animtk.glmmath`: the lightweight `Vec3`, `Quat` and `RotOrder` types used
  by the animation classes, plus `slerp`, `squad`, `euler_angle_ro`,
  `extract_euler_angle_ro`, `angle_axis_mat3` and `extract_angle_axis_mat3`.
  Matrices here are nested tuples indexed `m[row][column]`.
- `animtk.transform.Transform`: scale, then rotation, then translation.
  Transforms compose with `*`, invert with `inverse()`, and map points and
  directions with `transform_point` and `transform_vector`.
- `animtk.joint.Joint` and `animtk.skeleton.Skeleton`: joint hierarchies
  addressed by id or name, with forward kinematics (`fk`), `get_pose`,
  `set_pose`, `add_joint` and `delete_joint`.
- `animtk.pose.Pose`: a root position plus one local rotation per joint, with
  `Pose.lerp` and `Pose.squad` interpolation.
- `animtk.motion.Motion`: evenly spaced pose keys at a fixed framerate,
  sampled with `value(t, loop)` or applied to a skeleton with
  `update(skeleton, t, loop)`.

## Installation

```
pip install .
```

## Example

```python
import math

from animtk.glmmath import Quat, Vec3
from animtk.joint import Joint
from animtk.motion import Motion
from animtk.pose import Pose
from animtk.skeleton import Skeleton

skeleton = Skeleton()
hips = Joint("Hips")
skeleton.add_joint(hips)
knee = Joint("Knee")
knee.local_translation = (0.0, -40.0, 0.0)
skeleton.add_joint(knee, hips)
skeleton.fk()

bent = Quat.from_angle_axis(math.pi / 2, (1.0, 0.0, 0.0))
motion = Motion(30.0)
motion.append_key(Pose(Vec3(0, 90, 0), [Quat.identity(), Quat.identity()]))
motion.append_key(Pose(Vec3(0, 90, 10), [bent, Quat.identity()]))

# Pose the skeleton halfway between the two keys
motion.update(skeleton, motion.duration() / 2, False)
print(knee.global_translation)
```

## What it does not do

The package works on skeletons and motions held in memory. It does not read
or write motion-capture files of any format, and it does not draw or display
skeletons; loading data and rendering are left to the caller.

## Running the tests

```
pip install .[test]
pytest
```
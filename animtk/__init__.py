"""Character animation toolkit: 3D math, transforms, skeletons, poses and motions."""

__version__ = "0.1.0"
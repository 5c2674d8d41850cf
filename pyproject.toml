[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "animtk"
version = "0.1.0"
description = "Character animation toolkit: vectors, matrices, quaternions, transforms, skeletons, poses and motions"
requires-python = ">=3.10"
dependencies = []
keywords = ["animation", "skeleton", "quaternion", "euler angles", "kinematics", "keyframes"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["animtk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stmeshkit"
version = "1.0.0"
description = "Geometry building blocks for 4D space-time meshing: signed distance functions, run-length bitsets, voxel thinning and problem type descriptions."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "mesh",
    "space-time",
    "signed-distance-function",
    "voxel",
    "thinning",
    "skeletonization",
    "geometry",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["stmeshkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true

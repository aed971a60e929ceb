[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slinky"
version = "0.4.0"
description = "Helpers for controllers that run Slurm clusters on Kubernetes: pod and revision control, annotation parsing, keyed stores and slow-start batching."
requires-python = ">=3.10"
dependencies = []
keywords = ["slurm", "kubernetes", "operator", "controller", "clustering"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["slinky"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "matemonitor"
version = "1.28.1"
description = "System monitoring building blocks: CPU, memory and network load graphs, disk usage, cgroup names and graph colour pickers"
requires-python = ">=3.10"
keywords = ["system monitor", "cpu", "memory", "network", "disks", "cgroups", "load graph"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["matemonitor"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

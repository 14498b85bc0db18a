[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "swctl"
version = "0.1.0"
description = "Helpers for building observability backend queries (time ranges, entity identifiers, events, logs, manifest overlays) and a small command line tool."
requires-python = ">=3.10"
keywords = ["observability", "monitoring", "cli", "tracing", "apm"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
swctl = "swctl.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["swctl"]

[tool.pytest.ini_options]
addopts = "-ra"

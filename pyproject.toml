[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "notifykit"
version = "1.4.0"
description = "Building blocks for a lightweight desktop notification daemon: logging, markup handling, icon loading, colours, status and command-line parsing"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "notifications",
    "notification-daemon",
    "desktop",
    "markup",
    "icons",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["notifykit"]

[tool.hatch.build.targets.sdist]
include = [
    "notifykit",
    "tests",
    "README.md",
]

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
warn_redundant_casts = true

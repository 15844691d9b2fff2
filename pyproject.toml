[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ferrokit"
version = "0.1.0"
description = "Thread-safe primitives, message channels, layered error types and directory utilities, each with a runnable demonstration"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "concurrency",
    "threads",
    "channels",
    "mutex",
    "rwlock",
    "atomics",
    "directory",
    "filesystem",
    "errors",
]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ferrokit-restaurant = "ferrokit.restaurant:main"
ferrokit-matrix-bench = "ferrokit.matrix_bench:main"
ferrokit-errors = "ferrokit.errors:main"
ferrokit-lifetimes = "ferrokit.lifetimes:main"
ferrokit-atomics = "ferrokit.atomics:main"
ferrokit-threads = "ferrokit.threads:main"
ferrokit-channels = "ferrokit.channels:main"
ferrokit-mutex = "ferrokit.mutex:main"
ferrokit-rwlock = "ferrokit.rwlock:main"
ferrokit-clean = "ferrokit.cleaner:main"
ferrokit-dirops = "ferrokit.dirops:main"
ferrokit-walk = "ferrokit.walk:main"

[tool.hatch.build.targets.wheel]
packages = ["ferrokit"]

[tool.hatch.build.targets.sdist]
include = ["ferrokit", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true

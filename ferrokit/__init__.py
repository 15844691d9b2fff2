"""Thread-safe primitives, channels, layered errors and directory utilities."""

__version__ = "0.1.0"

__all__ = [
    "atomics",
    "channels",
    "cleaner",
    "dirops",
    "errors",
    "lifetimes",
    "matrix_bench",
    "mutex",
    "restaurant",
    "rwlock",
    "threads",
    "walk",
]
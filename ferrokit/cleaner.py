"""Remove empty directories below a root, deepest first."""

from __future__ import annotations

import argparse
import errno
import os
import sys
from pathlib import Path

_WINDOWS_DIR_NOT_EMPTY = 145


def _is_dir_not_empty_error(error: OSError) -> bool:
    if error.errno in (errno.ENOTEMPTY, errno.EEXIST):
        return True
    return getattr(error, "winerror", None) == _WINDOWS_DIR_NOT_EMPTY


def clean_empty_directories(target_root: str | os.PathLike[str]) -> list[Path]:
    """Delete every empty directory below ``target_root``; return those deleted.

    Directories are visited children first, so a parent left empty by
    removing its children is removed too. The root itself is kept.
    Unreadable entries are skipped; "not empty" failures are expected and
    ignored, other failures are reported on stderr.
    """
    root = Path(target_root)
    deleted: list[Path] = []
    for dirpath, _dirnames, _filenames in os.walk(root, topdown=False):
        path = Path(dirpath)
        if path == root:
            continue
        try:
            path.rmdir()
        except OSError as exc:
            if not _is_dir_not_empty_error(exc):
                print(f"[Error] Cannot delete {str(path)!r}: {exc}", file=sys.stderr)
            continue
        print(f"[Deleted] {str(path)!r}")
        deleted.append(path)
    return deleted


def main(argv: list[str] | None = None) -> int:
    """Clean empty directories below the given path (default: current directory)."""
    parser = argparse.ArgumentParser(description="Remove empty directories recursively.")
    parser.add_argument("path", nargs="?", default=".", help="root directory to clean")
    args = parser.parse_args(argv)
    try:
        clean_empty_directories(args.path)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
"""Directory tree walking: depth limits, skipping, searches and statistics."""

from __future__ import annotations

import argparse
import os
import shutil
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path

StrPath = str | os.PathLike[str]


@dataclass(frozen=True)
class WalkEntry:
    """A path met during a walk and how far below the root it lies."""

    path: Path
    depth: int

    def file_name(self) -> str | None:
        """The last component of the path, or None if it has no proper name."""
        name = self.path.name
        if not name or name == "..":
            return None
        return name

    def is_file(self) -> bool:
        """True if the path is a regular file now."""
        return self.path.is_file()


@dataclass
class DirectoryStatistics:
    """Files and directories below a path, and the total size of the files."""

    files: int = 0
    directories: int = 0
    total_size: int = 0

    def __add__(self, other: DirectoryStatistics) -> DirectoryStatistics:
        return DirectoryStatistics(
            self.files + other.files,
            self.directories + other.directories,
            self.total_size + other.total_size,
        )


@dataclass
class CodeStats:
    """Counts of Rust sources, Markdown documents and other files."""

    rs_files: int = 0
    md_files: int = 0
    other_files: int = 0

    def __add__(self, other: CodeStats) -> CodeStats:
        return CodeStats(
            self.rs_files + other.rs_files,
            self.md_files + other.md_files,
            self.other_files + other.other_files,
        )


def _quote(name: str) -> str:
    return f'"{name}"'


def _children(directory: Path) -> list[Path]:
    return sorted(directory.iterdir(), key=lambda p: p.name)


def _extension(path: Path) -> str | None:
    suffix = path.suffix
    return suffix[1:] if suffix else None


def traverse_lines(path: StrPath) -> list[str]:
    """Describe everything below a directory, one indented line per entry.

    Raises OSError if ``path`` cannot be listed.
    """
    lines: list[str] = []

    def visit(directory: Path, depth: int) -> None:
        indent = "  " * depth
        for child in _children(directory):
            if child.is_dir():
                lines.append(f"{indent}[DIR] {_quote(child.name)}")
                visit(child, depth + 1)
            else:
                lines.append(f"{indent}[FILE] {_quote(child.name)}")

    visit(Path(path), 0)
    return lines


def _walk(
    path: Path,
    depth: int,
    max_depth: int,
    skip_dirs: frozenset[str],
    entries: list[WalkEntry],
) -> None:
    if path.name and path.name in skip_dirs:
        return
    entries.append(WalkEntry(path, depth))
    if depth >= max_depth:
        return
    try:
        children = _children(path)
    except OSError:
        return
    for child in children:
        if child.is_dir():
            _walk(child, depth + 1, max_depth, skip_dirs, entries)
        else:
            entries.append(WalkEntry(child, depth + 1))


def custom_walkdir(root: StrPath, max_depth: int) -> list[WalkEntry]:
    """The root and everything below it down to ``max_depth`` levels, depth first."""
    entries: list[WalkEntry] = []
    _walk(Path(root), 0, max_depth, frozenset(), entries)
    return entries


def custom_walkdir_skip(root: StrPath, max_depth: int, skip_dirs: list[str]) -> list[WalkEntry]:
    """Like custom_walkdir, leaving out directories named in ``skip_dirs``."""
    entries: list[WalkEntry] = []
    _walk(Path(root), 0, max_depth, frozenset(skip_dirs), entries)
    return entries


def filter_files_by_extension(root: StrPath, ext: str) -> list[str]:
    """Paths of every file at or below ``root`` whose extension is ``ext``."""
    path = Path(root)
    if path.is_dir():
        results: list[str] = []
        for child in _children(path):
            results.extend(filter_files_by_extension(child, ext))
        return results
    return [str(path)] if _extension(path) == ext else []


def _descendants(path: Path) -> list[Path]:
    if not path.is_dir():
        return []
    found: list[Path] = []
    for child in _children(path):
        found.append(child)
        found.extend(_descendants(child))
    return found


def calculate_directory_size(path: StrPath) -> int:
    """Total size in bytes of the files below a directory; 0 for anything else."""
    total = 0
    for entry in _descendants(Path(path)):
        if entry.is_file():
            try:
                total += entry.stat().st_size
            except OSError:
                continue
    return total


def find_file(root: StrPath, filename: str) -> list[str]:
    """Paths of every file below ``root`` named exactly ``filename``."""
    path = Path(root)
    if not path.is_dir():
        return []
    results: list[str] = []
    for child in _children(path):
        if child.is_dir():
            results.extend(find_file(child, filename))
        elif child.name == filename:
            results.append(str(child))
    return results


def get_directory_statistics(path: StrPath) -> DirectoryStatistics:
    """Count files and directories (the root included) and sum the file sizes."""
    target = Path(path)
    if not target.is_dir():
        return DirectoryStatistics()
    stats = DirectoryStatistics(directories=1)
    for child in _children(target):
        if child.is_dir():
            stats = stats + get_directory_statistics(child)
        else:
            stats.files += 1
            try:
                stats.total_size += child.stat().st_size
            except OSError:
                pass
    return stats


def sort_by_modified_time(directory: StrPath) -> list[str]:
    """Names of the entries of a directory, oldest modification first."""

    def modified(entry: Path) -> float:
        try:
            return entry.stat().st_mtime
        except OSError:
            return 0.0

    return [entry.name for entry in sorted(_children(Path(directory)), key=modified)]


def find_large_files(root: StrPath, threshold: int) -> list[str]:
    """Paths of every file below ``root`` larger than ``threshold`` bytes."""
    path = Path(root)
    if not path.is_dir():
        return []
    found: list[str] = []
    for child in _children(path):
        if child.is_file():
            try:
                size = child.stat().st_size
            except OSError:
                continue
            if size > threshold:
                found.append(str(child))
        elif child.is_dir():
            found.extend(find_large_files(child, threshold))
    return found


def copy_tree(src: StrPath, dst: StrPath) -> None:
    """Copy a directory tree, or a single file, to ``dst``.

    Raises OSError if ``src`` does not exist.
    """
    src_path = Path(src)
    dst_path = Path(dst)
    if src_path.is_dir():
        dst_path.mkdir(parents=True, exist_ok=True)
        for child in src_path.iterdir():
            copy_tree(child, dst_path / child.name)
    else:
        shutil.copy(src_path, dst_path)


def get_code_statistics(root: StrPath) -> CodeStats:
    """Count .rs, .md and other files below ``root``."""
    path = Path(root)
    stats = CodeStats()
    if not path.is_dir():
        return stats
    for child in _children(path):
        if child.is_dir():
            stats = stats + get_code_statistics(child)
        elif _extension(child) == "rs":
            stats.rs_files += 1
        elif _extension(child) == "md":
            stats.md_files += 1
        else:
            stats.other_files += 1
    return stats


def _print_entries(entries: list[WalkEntry]) -> None:
    for entry in entries:
        print(f"  {'  ' * entry.depth} {_quote(entry.file_name() or str(entry.path))}")


def _write(base: Path, files: dict[str, str]) -> None:
    for name, content in files.items():
        target = base / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


def _run_examples(base: Path) -> None:
    print("示例 2: 使用标准库递归遍历")
    root = base / "test_walkdir"
    (root / "dir2/subdir2").mkdir(parents=True)
    _write(root, {"file1.txt": "content1", "file2.rs": "content2",
                  "dir1/subdir1/file3.txt": "content3"})
    for line in traverse_lines(root):
        print(line)
    shutil.rmtree(root)
    print()

    print("示例 3: 自定义 WalkDir 实现")
    root = base / "test_custom"
    (root / "dir1/subdir").mkdir(parents=True)
    _write(root, {"file1.txt": "test", "dir1/file2.txt": "test"})
    _print_entries(custom_walkdir(root, 3))
    shutil.rmtree(root)
    print()

    print("示例 4: 按文件类型过滤")
    root = base / "test_filter_types"
    _write(root, {"file1.txt": "test", "file2.rs": "test", "file3.md": "test",
                  "subdir/file4.txt": "test"})
    for ext in ("txt", "rs"):
        print(f"过滤 .{ext} 文件:")
        for found in filter_files_by_extension(root, ext):
            print(f"  {found}")
    shutil.rmtree(root)
    print()

    print("示例 5: 按深度限制")
    root = base / "test_depth"
    _write(root, {"file1.txt": "test", "dir1/file2.txt": "test",
                  "dir1/dir2/file3.txt": "test", "dir1/dir2/dir3/file4.txt": "test"})
    print("限制深度为 2:")
    _print_entries(custom_walkdir(root, 2))
    shutil.rmtree(root)
    print()

    print("示例 6: 获取目录大小")
    root = base / "test_size"
    (root / "dir1/dir2").mkdir(parents=True)
    _write(root, {"file1.txt": "Hello", "file2.txt": "World", "dir1/file3.txt": "Test"})
    print(f"目录总大小: {calculate_directory_size(root)} 字节")
    shutil.rmtree(root)
    print()

    print("示例 7: 查找特定文件")
    root = base / "test_find"
    _write(root, {"target.txt": "found me!", "other.txt": "not me",
                  "subdir/target.txt": "found me too!"})
    print("查找 target.txt 文件:")
    for found in find_file(root, "target.txt"):
        print(f"  {found}")
    shutil.rmtree(root)
    print()

    print("示例 8: 统计文件和目录数量")
    root = base / "test_stats"
    (root / "dir1/dir2").mkdir(parents=True)
    _write(root, {"file1.txt": "a", "file2.txt": "ab", "dir1/file3.txt": "abc"})
    stats = get_directory_statistics(root)
    print("目录统计:")
    print(f"  文件数: {stats.files}")
    print(f"  目录数: {stats.directories}")
    print(f"  总大小: {stats.total_size} 字节")
    shutil.rmtree(root)
    print()

    print("示例 9: 并行遍历概念")
    print("  目录项可以交给线程池并行处理")
    print()

    print("示例 10: 处理软链接")
    root = base / "test_symlinks"
    _write(root, {"file.txt": "test"})
    link = root / "link.txt"
    try:
        os.symlink("file.txt", link)
    except (OSError, NotImplementedError):
        print("此系统无法创建符号链接")
    else:
        print("处理符号链接:")
        print(f"  是符号链接: {str(link.is_symlink()).lower()}")
        print(f"  链接目标: {_quote(os.readlink(link))}")
    shutil.rmtree(root)
    print()

    print("示例 11: 按修改时间排序")
    root = base / "test_sort"
    for i in range(1, 4):
        _write(root, {f"file{i}.txt": f"content{i}"})
        time.sleep(0.1)
    print("按修改时间排序:")
    for name in sort_by_modified_time(root):
        print(f"  {_quote(name)}")
    shutil.rmtree(root)
    print()

    print("示例 12: 跳过特定目录")
    root = base / "test_skip"
    for name in (".git", "node_modules", "src"):
        (root / name).mkdir(parents=True)
    _write(root, {"file.txt": "test"})
    _print_entries(custom_walkdir_skip(root, 10, [".git", "node_modules"]))
    shutil.rmtree(root)
    print()

    print("示例 13: 查找大文件")
    root = base / "test_large"
    _write(root, {"small.txt": "small", "medium.txt": "medium content",
                  "large.txt": "large content here!"})
    print("查找大于 10 字节的文件:")
    for found in find_large_files(root, 10):
        print(f"  {_quote(found)}")
    shutil.rmtree(root)
    print()

    print("示例 14: 复制整个目录树")
    src = base / "test_copy_tree"
    dst = base / "test_copy_tree_dst"
    _write(src, {"file1.txt": "content1", "src/file2.txt": "content2"})
    copy_tree(src, dst)
    print("目标目录内容:")
    _print_entries(custom_walkdir(dst, 10))
    shutil.rmtree(src)
    shutil.rmtree(dst)
    print()

    print("示例 15: 实际应用 - 代码文件统计")
    root = base / "test_project"
    _write(root, {"Cargo.toml": "[package]", "src/main.rs": "fn main() {}",
                  "src/lib.rs": "pub fn hello() {}", "README.md": "# Test Project"})
    code = get_code_statistics(root)
    print("代码文件统计:")
    print(f"  Rust 文件: {code.rs_files} 个")
    print(f"  Markdown 文件: {code.md_files} 个")
    print(f"  其他文件: {code.other_files} 个")
    shutil.rmtree(root)


def main(argv: list[str] | None = None) -> int:
    """Run the directory walking examples inside a scratch directory."""
    parser = argparse.ArgumentParser(description="Directory walking examples.")
    parser.parse_args(argv)

    print("=== 目录遍历示例 ===\n")
    with tempfile.TemporaryDirectory() as scratch:
        _run_examples(Path(scratch))

    print("\n=== 总结 ===")
    print("目录遍历特点:")
    print("  - 支持深度限制、文件过滤")
    print("  - 可以跳过特定目录（.git, node_modules）")
    print("  - 适用于代码分析、文件搜索等场景")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
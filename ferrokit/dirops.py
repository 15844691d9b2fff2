"""Directory operations: trees, sizes, copies, searches and statistics."""

from __future__ import annotations

import argparse
import os
import shutil
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

StrPath = str | os.PathLike[str]


@dataclass
class DirectoryStats:
    """Counts of files and directories below a path, and the total file size."""

    total_files: int = 0
    total_dirs: int = 0
    total_size: int = 0

    def __add__(self, other: DirectoryStats) -> DirectoryStats:
        return DirectoryStats(
            self.total_files + other.total_files,
            self.total_dirs + other.total_dirs,
            self.total_size + other.total_size,
        )


def _quote(name: str) -> str:
    return f'"{name}"'


def _children(directory: Path) -> list[Path]:
    return sorted(directory.iterdir(), key=lambda p: p.name)


def _walk_tree(directory: Path, depth: int) -> Iterator[str]:
    indent = "  " * depth
    yield f"{indent}[目录] {_quote(directory.name or str(directory))}"
    for child in _children(directory):
        if child.is_dir():
            yield from _walk_tree(child, depth + 1)
        else:
            yield f"{indent}  [文件] {_quote(child.name)}"


def tree_lines(path: StrPath) -> list[str]:
    """Describe a directory tree, one indented line per directory and file.

    A path that is not a directory gives no lines.
    """
    root = Path(path)
    if not root.is_dir():
        return []
    return list(_walk_tree(root, 0))


def get_directory_size(path: StrPath) -> int:
    """Total size in bytes of a file, or of every file below a directory."""
    target = Path(path)
    if target.is_file():
        return target.stat().st_size
    if target.is_dir():
        return sum(get_directory_size(child) for child in target.iterdir())
    return 0


def copy_directory(src: StrPath, dst: StrPath) -> None:
    """Copy a file, or a directory with everything below it, to ``dst``."""
    src_path = Path(src)
    dst_path = Path(dst)
    if src_path.is_file():
        shutil.copy(src_path, dst_path)
    elif src_path.is_dir():
        dst_path.mkdir(parents=True, exist_ok=True)
        for child in src_path.iterdir():
            copy_directory(child, dst_path / child.name)


def _extension(path: Path) -> str | None:
    suffix = path.suffix
    return suffix[1:] if suffix else None


def find_files(directory: StrPath, extension: str) -> list[Path]:
    """Every file below ``directory`` whose extension equals ``extension``."""
    root = Path(directory)
    if not root.is_dir():
        return []
    results: list[Path] = []
    for child in _children(root):
        if child.is_dir():
            results.extend(find_files(child, extension))
        elif _extension(child) == extension:
            results.append(child)
    return results


def classify_files(directory: StrPath) -> dict[str, list[str]]:
    """Sort the entries of one directory by extension.

    Names ending in .txt go under "text", .rs under "rust", any other
    extension under "other"; entries without an extension are left out.
    """
    groups: dict[str, list[str]] = {"text": [], "rust": [], "other": []}
    for child in _children(Path(directory)):
        ext = _extension(child)
        if ext is None:
            continue
        if ext == "txt":
            groups["text"].append(child.name)
        elif ext == "rs":
            groups["rust"].append(child.name)
        else:
            groups["other"].append(child.name)
    return groups


def get_directory_stats(path: StrPath) -> DirectoryStats:
    """Count files and directories (the path itself included) and sum file sizes."""
    target = Path(path)
    if target.is_file():
        return DirectoryStats(total_files=1, total_size=target.stat().st_size)
    if target.is_dir():
        stats = DirectoryStats(total_dirs=1)
        for child in target.iterdir():
            stats = stats + get_directory_stats(child)
        return stats
    return DirectoryStats()


def sorted_entry_names(directory: StrPath) -> list[str]:
    """Names of the entries of a directory, sorted."""
    return sorted(entry.name for entry in Path(directory).iterdir())


def is_directory_empty(directory: StrPath) -> bool:
    """True if ``directory`` is a directory without entries; False otherwise."""
    path = Path(directory)
    if not path.is_dir():
        return False
    with os.scandir(path) as entries:
        return next(entries, None) is None


def sync_directories(src: StrPath, dst: StrPath) -> None:
    """Bring ``dst`` up to date with ``src`` by copying everything over."""
    copy_directory(src, dst)


def _is_readonly(path: Path) -> bool:
    return not path.stat().st_mode & (stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH)


def _run_examples(base: Path) -> None:
    print("示例 1: 创建目录")
    single = base / "test_dir"
    single.mkdir()
    print("单级目录创建成功")
    single.rmdir()
    print()

    print("示例 2: 创建多级目录")
    (base / "test_dir/level1/level2/level3").mkdir(parents=True)
    print("多级目录创建成功")
    shutil.rmtree(base / "test_dir")
    print()

    print("示例 3: 读取目录内容")
    listing = base / "test_read_dir"
    (listing / "subdir").mkdir(parents=True)
    for name in ("file1.txt", "file2.txt", "subdir/file3.txt"):
        (listing / name).touch()
    print("读取目录内容:")
    for child in _children(listing):
        kind = "目录" if child.is_dir() else "文件"
        print(f"  [{kind}] {_quote(child.name)}")
    shutil.rmtree(listing)
    print()

    print("示例 4: 递归遍历目录")
    tree = base / "test_recursive"
    (tree / "dir1/subdir1").mkdir(parents=True)
    (tree / "dir2/subdir2").mkdir(parents=True)
    for name in ("file1.txt", "file2.txt", "dir1/subdir1/file3.txt"):
        (tree / name).touch()
    print("递归遍历目录结构:")
    for line in tree_lines(tree):
        print(line)
    shutil.rmtree(tree)
    print()

    print("示例 5: 删除目录")
    removable = base / "test_remove_dir"
    removable.mkdir()
    print("目录创建成功")
    removable.rmdir()
    print("空目录删除成功")
    (removable / "subdir").mkdir(parents=True)
    (removable / "file.txt").touch()
    shutil.rmtree(removable)
    print("非空目录删除成功")
    print()

    print("示例 6: 获取当前工作目录")
    print(f"当前工作目录: {_quote(os.getcwd())}")
    print()

    print("示例 7: 更改工作目录")
    target = base / "test_change_dir"
    target.mkdir()
    original = Path.cwd()
    print(f"原始目录: {_quote(str(original))}")
    try:
        os.chdir(target)
        print(f"更改后目录: {_quote(os.getcwd())}")
    finally:
        os.chdir(original)
    print(f"恢复目录: {_quote(os.getcwd())}")
    target.rmdir()
    print()

    print("示例 8: 检查路径类型")
    kinds = base / "test_path_types"
    kinds.mkdir()
    file_path = kinds / "file.txt"
    file_path.touch()
    missing = base / "nonexistent"
    print("路径类型检查:")
    print(f"  {_quote(kinds.name)} 是目录? {str(kinds.is_dir()).lower()}")
    print(f"  {_quote(kinds.name)} 是文件? {str(kinds.is_file()).lower()}")
    print(f"  {_quote(file_path.name)} 是目录? {str(file_path.is_dir()).lower()}")
    print(f"  {_quote(file_path.name)} 是文件? {str(file_path.is_file()).lower()}")
    print(f"  {_quote(missing.name)} 存在? {str(missing.exists()).lower()}")
    shutil.rmtree(kinds)
    print()

    print("示例 9: 获取目录大小")
    sized = base / "test_size"
    (sized / "dir1/dir2").mkdir(parents=True)
    (sized / "file1.txt").write_bytes(b"Hello")
    (sized / "file2.txt").write_bytes(b"World")
    (sized / "dir1/file3.txt").write_bytes(b"Test")
    print(f"目录总大小: {get_directory_size(sized)} 字节")
    shutil.rmtree(sized)
    print()

    print("示例 10: 复制目录")
    src = base / "test_copy_src"
    dst = base / "test_copy_dst"
    (src / "subdir").mkdir(parents=True)
    (src / "file1.txt").write_bytes(b"Content1")
    (src / "subdir/file2.txt").write_bytes(b"Content2")
    print("复制目录...")
    copy_directory(src, dst)
    print("目标目录内容:")
    for name in sorted_entry_names(dst):
        print(f"  {_quote(name)}")
    shutil.rmtree(src)
    shutil.rmtree(dst)
    print()

    print("示例 11: 查找文件")
    search = base / "test_find"
    (search / "dir1/dir2").mkdir(parents=True)
    for name in ("file1.txt", "file2.rs", "dir1/file3.txt", "dir1/dir2/file4.txt"):
        (search / name).touch()
    print("查找所有 .txt 文件:")
    for found in find_files(search, "txt"):
        print(f"  {_quote(str(found.relative_to(base)))}")
    shutil.rmtree(search)
    print()

    print("示例 12: 检查目录权限")
    guarded = base / "test_permissions.txt"
    guarded.touch()
    print("文件权限:")
    print(f"  只读: {str(_is_readonly(guarded)).lower()}")
    mode = guarded.stat().st_mode
    os.chmod(guarded, stat.S_IMODE(mode) & ~(stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH))
    print(f"  设置后只读: {str(_is_readonly(guarded)).lower()}")
    os.chmod(guarded, stat.S_IMODE(mode))
    guarded.unlink()
    print()

    print("示例 13: 目录存在性检查")
    probe = base / "test_exists"
    print(f"目录存在? {str(probe.exists()).lower()}")
    probe.mkdir()
    print(f"创建后目录存在? {str(probe.exists()).lower()}")
    probe.rmdir()
    print(f"删除后目录存在? {str(probe.exists()).lower()}")
    print()

    print("示例 14: 重命名目录")
    old = base / "test_old_dir"
    new = base / "test_new_dir"
    old.mkdir()
    print("重命名目录...")
    old.rename(new)
    print(f"新目录存在? {str(new.exists()).lower()}")
    new.rmdir()
    print()

    print("示例 15: 过滤文件")
    mixed = base / "test_filter"
    mixed.mkdir()
    for name in ("file1.txt", "file2.txt", "file3.rs", "file4.md"):
        (mixed / name).touch()
    print("过滤文件:")
    labels = {"text": "文本文件", "rust": "Rust 文件", "other": "其他文件"}
    for group, names in classify_files(mixed).items():
        for name in names:
            print(f"  [{labels[group]}] {_quote(name)}")
    shutil.rmtree(mixed)
    print()

    print("示例 16: 创建目录并设置权限")
    perms = base / "test_perms"
    perms.mkdir()
    os.chmod(perms, 0o755)
    print("目录创建并设置权限完成")
    perms.rmdir()
    print()

    print("示例 17: 目录统计")
    counted = base / "test_stats"
    (counted / "dir1/dir2").mkdir(parents=True)
    (counted / "file1.txt").write_bytes(b"Hello")
    (counted / "file2.txt").write_bytes(b"World")
    (counted / "dir1/file3.txt").write_bytes(b"Test")
    stats = get_directory_stats(counted)
    print("目录统计:")
    print(f"  总文件数: {stats.total_files}")
    print(f"  总目录数: {stats.total_dirs}")
    print(f"  总大小: {stats.total_size} 字节")
    shutil.rmtree(counted)
    print()

    print("示例 18: 按名称排序目录内容")
    ordered = base / "test_sort"
    ordered.mkdir()
    for name in ("c.txt", "a.txt", "b.txt", "d.rs"):
        (ordered / name).touch()
    print("排序后的目录内容:")
    for name in sorted_entry_names(ordered):
        print(f"  {_quote(name)}")
    shutil.rmtree(ordered)
    print()

    print("示例 19: 检查目录是否为空")
    hollow = base / "test_empty"
    hollow.mkdir()
    print(f"空目录是空的? {str(is_directory_empty(hollow)).lower()}")
    (hollow / "file.txt").touch()
    print(f"添加文件后目录是空的? {str(is_directory_empty(hollow)).lower()}")
    shutil.rmtree(hollow)
    print()

    print("示例 20: 同步目录")
    sync_src = base / "test_sync_src"
    sync_dst = base / "test_sync_dst"
    (sync_src / "subdir").mkdir(parents=True)
    (sync_src / "file1.txt").write_bytes(b"Content1")
    (sync_src / "file2.txt").write_bytes(b"Content2")
    (sync_src / "subdir/file3.txt").write_bytes(b"Content3")
    print("同步目录...")
    sync_directories(sync_src, sync_dst)
    print("目标目录文件:")
    for name in sorted_entry_names(sync_dst):
        print(f"  {_quote(name)}")
    shutil.rmtree(sync_src)
    shutil.rmtree(sync_dst)


def main(argv: list[str] | None = None) -> int:
    """Run the directory examples inside a scratch directory."""
    parser = argparse.ArgumentParser(description="Directory operation examples.")
    parser.parse_args(argv)

    print("=== 目录操作示例 ===\n")
    with tempfile.TemporaryDirectory() as scratch:
        _run_examples(Path(scratch))

    print("\n=== 总结 ===")
    print("目录操作特点:")
    print("  - 创建单级与多级目录")
    print("  - 读取、遍历、查找目录内容")
    print("  - 删除空目录与非空目录")
    print("  - 所有失败以异常报告")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
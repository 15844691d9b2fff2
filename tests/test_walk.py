import os
from pathlib import Path

import pytest

from ferrokit.walk import (
    CodeStats,
    DirectoryStatistics,
    WalkEntry,
    calculate_directory_size,
    copy_tree,
    custom_walkdir,
    custom_walkdir_skip,
    filter_files_by_extension,
    find_file,
    find_large_files,
    get_code_statistics,
    get_directory_statistics,
    main,
    sort_by_modified_time,
    traverse_lines,
)


def make_tree(base: Path, files: dict[str, str], dirs: tuple[str, ...] = ()) -> Path:
    for name in dirs:
        (base / name).mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        target = base / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return base


def test_traverse_lines_describes_tree(tmp_path):
    root = make_tree(
        tmp_path / "test_walkdir",
        {"file1.txt": "content1", "file2.rs": "content2", "dir1/subdir1/file3.txt": "content3"},
        dirs=("dir2/subdir2",),
    )
    assert traverse_lines(root) == [
        '[DIR] "dir1"',
        '  [DIR] "subdir1"',
        '    [FILE] "file3.txt"',
        '[DIR] "dir2"',
        '  [DIR] "subdir2"',
        '[FILE] "file1.txt"',
        '[FILE] "file2.rs"',
    ]


def test_traverse_lines_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        traverse_lines(tmp_path / "missing")


def test_custom_walkdir_respects_depth(tmp_path):
    root = make_tree(
        tmp_path / "test_depth",
        {
            "file1.txt": "test",
            "dir1/file2.txt": "test",
            "dir1/dir2/file3.txt": "test",
            "dir1/dir2/dir3/file4.txt": "test",
        },
    )
    entries = custom_walkdir(root, 2)
    assert [(e.file_name(), e.depth) for e in entries] == [
        ("test_depth", 0),
        ("dir1", 1),
        ("dir2", 2),
        ("file2.txt", 2),
        ("file1.txt", 1),
    ]
    assert all(e.depth <= 2 for e in entries)


def test_custom_walkdir_depth_zero_is_root_only(tmp_path):
    root = make_tree(tmp_path / "r", {"a.txt": "x"})
    assert custom_walkdir(root, 0) == [WalkEntry(root, 0)]


def test_custom_walkdir_skip_leaves_out_named_dirs(tmp_path):
    root = make_tree(tmp_path / "test_skip", {"file.txt": "test"}, dirs=(".git/objects", "node_modules", "src"))
    names = [e.file_name() for e in custom_walkdir_skip(root, 10, [".git", "node_modules"])]
    assert names == ["test_skip", "file.txt", "src"]


def test_custom_walkdir_skip_root_itself(tmp_path):
    root = make_tree(tmp_path / "node_modules", {"a.txt": "x"})
    assert custom_walkdir_skip(root, 10, ["node_modules"]) == []


def test_filter_files_by_extension(tmp_path):
    root = make_tree(
        tmp_path / "test_filter_types",
        {"file1.txt": "test", "file2.rs": "test", "file3.md": "test", "subdir/file4.txt": "test"},
    )
    assert set(filter_files_by_extension(root, "txt")) == {
        str(root / "file1.txt"),
        str(root / "subdir" / "file4.txt"),
    }
    assert filter_files_by_extension(root, "rs") == [str(root / "file2.rs")]
    assert filter_files_by_extension(root, "py") == []


def test_calculate_directory_size(tmp_path):
    contents = {"file1.txt": "Hello", "file2.txt": "World", "dir1/file3.txt": "Test"}
    root = make_tree(tmp_path / "test_size", contents, dirs=("dir1/dir2",))
    assert calculate_directory_size(root) == sum(len(c) for c in contents.values())


def test_calculate_directory_size_non_directory_is_zero(tmp_path):
    single = tmp_path / "one.txt"
    single.write_text("abcdef")
    assert calculate_directory_size(single) == 0
    assert calculate_directory_size(tmp_path / "missing") == 0


def test_find_file(tmp_path):
    root = make_tree(
        tmp_path / "test_find",
        {"target.txt": "found me!", "other.txt": "not me", "subdir/target.txt": "found me too!"},
    )
    assert set(find_file(root, "target.txt")) == {
        str(root / "target.txt"),
        str(root / "subdir" / "target.txt"),
    }
    assert find_file(root, "absent.txt") == []


def test_get_directory_statistics(tmp_path):
    contents = {"file1.txt": "a", "file2.txt": "ab", "dir1/file3.txt": "abc"}
    root = make_tree(tmp_path / "test_stats", contents, dirs=("dir1/dir2",))
    stats = get_directory_statistics(root)
    assert stats.files == len(contents)
    assert stats.directories == 3
    assert stats.total_size == sum(len(c) for c in contents.values())


def test_get_directory_statistics_missing(tmp_path):
    assert get_directory_statistics(tmp_path / "missing") == DirectoryStatistics()


def test_sort_by_modified_time(tmp_path):
    root = make_tree(tmp_path / "test_sort", {"file1.txt": "c1", "file2.txt": "c2", "file3.txt": "c3"})
    stamps = {"file3.txt": 1_000_000, "file1.txt": 2_000_000, "file2.txt": 3_000_000}
    for name, stamp in stamps.items():
        os.utime(root / name, (stamp, stamp))
    assert sort_by_modified_time(root) == ["file3.txt", "file1.txt", "file2.txt"]


def test_find_large_files(tmp_path):
    root = make_tree(
        tmp_path / "test_large",
        {"small.txt": "small", "medium.txt": "medium content", "nested/large.txt": "large content here!"},
    )
    assert set(find_large_files(root, 10)) == {
        str(root / "medium.txt"),
        str(root / "nested" / "large.txt"),
    }


def test_find_large_files_threshold_is_strict(tmp_path):
    content = "exactly"
    root = make_tree(tmp_path / "t", {"f.txt": content})
    assert find_large_files(root, len(content)) == []
    assert find_large_files(root, len(content) - 1) == [str(root / "f.txt")]


def test_copy_tree_round_trip(tmp_path):
    contents = {"file1.txt": "content1", "src/file2.txt": "content2"}
    src = make_tree(tmp_path / "test_copy_tree", contents)
    dst = tmp_path / "test_copy_tree_dst"
    copy_tree(src, dst)
    for name, content in contents.items():
        assert (dst / name).read_text(encoding="utf-8") == content


def test_copy_tree_missing_source_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_tree(tmp_path / "missing", tmp_path / "dst")


def test_get_code_statistics(tmp_path):
    rs = ["src/main.rs", "src/lib.rs"]
    md = ["README.md"]
    other = ["Cargo.toml", "LICENSE"]
    root = make_tree(tmp_path / "test_project", {name: "x" for name in rs + md + other})
    assert get_code_statistics(root) == CodeStats(
        rs_files=len(rs), md_files=len(md), other_files=len(other)
    )


def test_walk_entry_methods(tmp_path):
    target = tmp_path / "note.txt"
    target.write_text("hi")
    entry = WalkEntry(target, 1)
    assert entry.file_name() == "note.txt"
    assert entry.is_file() is True
    assert WalkEntry(tmp_path, 0).is_file() is False
    assert WalkEntry(Path(".."), 0).file_name() is None


def test_main_runs_examples(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert '[FILE] "file1.txt"' in out
    assert "目录总大小: 14 字节" in out
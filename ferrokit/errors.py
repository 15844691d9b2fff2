"""Error types for a small data store, application error chaining and helpers."""

from __future__ import annotations

import math
import re
from pathlib import Path

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class DataStoreError(Exception):
    """Base class for data store failures."""


class DataStoreIoError(DataStoreError):
    """Reading the underlying file failed."""

    def __init__(self, source: OSError) -> None:
        super().__init__("数据读取失败")
        self.source = source


class FormatError(DataStoreError):
    """The stored data is malformed."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"数据格式错误: {detail}")
        self.detail = detail


class NotFoundError(DataStoreError):
    """A requested key does not exist."""

    def __init__(self, key: str) -> None:
        super().__init__(f"未找到键值: {key}")
        self.key = key


class UnknownError(DataStoreError):
    """An unclassified failure."""

    def __init__(self) -> None:
        super().__init__("未知错误")


class ApplicationError(Exception):
    """An application-level failure carrying context over its cause."""

    def chain(self) -> list[str]:
        """Messages from this error down through every cause."""
        messages: list[str] = []
        current: BaseException | None = self
        while current is not None:
            messages.append(str(current))
            current = current.__cause__
        return messages


class MyError(Exception):
    """A plain custom error with a details message."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details

    def __str__(self) -> str:
        return f"MyError: {self.details}"


def read_data(path: str | Path) -> str:
    """Read a data file; raise DataStoreIoError or FormatError on failure."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise DataStoreIoError(exc) from exc
    if not content:
        raise FormatError("文件为空")
    return content


def run_application(filename: str | Path = "non_existent_config.toml") -> str:
    """Load the configuration file, wrapping failures in ApplicationError."""
    print("--- 开始运行应用 ---")
    try:
        content = read_data(filename)
    except DataStoreError as exc:
        raise ApplicationError(f"加载配置文件 '{filename}' 失败") from exc
    print(f"配置内容: {content}")
    return content


def read_username(path: str | Path = "hello.txt") -> str:
    """Return the whole content of the file; OSError propagates."""
    return Path(path).read_text(encoding="utf-8")


def checked_sqrt(text: str) -> float | None:
    """Parse a 32-bit integer and take its square root; None if invalid or negative."""
    if not re.fullmatch(r"[+-]?[0-9]+", text):
        return None
    number = int(text)
    if not _INT32_MIN <= number <= _INT32_MAX or number < 0:
        return None
    return math.sqrt(float(number))


def do_something_risky() -> None:
    """Always fail with MyError."""
    details = "Something went wrong!"
    error = MyError(details)
    raise error


def _report(error: ApplicationError) -> str:
    head, *causes = error.chain()
    if not causes:
        return head
    lines = [head, "", "Caused by:"]
    lines.extend(f"    {i}: {message}" for i, message in enumerate(causes))
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Walk through propagation, optional chaining, custom errors and error context."""
    print("--- 示例 1: 错误传播 ---")
    try:
        print(f"读到内容: {read_username()}")
    except OSError as exc:
        print(f"读取失败 (预期内): {exc}")

    print("\n--- 示例 2: Result/Option 组合子 ---")
    maybe_number: int | None = 5
    doubled = None if maybe_number is None else maybe_number * 2
    print(f"Doubled: {doubled}")
    print(f"Value: {maybe_number if maybe_number is not None else 0}")
    print(f"Sqrt calculation: {checked_sqrt('4')}")

    print("\n--- 示例 3: 自定义错误 ---")
    try:
        do_something_risky()
        print("Success!")
    except MyError as exc:
        print(f"Caught custom error: {exc}")

    print()
    try:
        run_application()
    except ApplicationError as exc:
        print(f"\n❌ 应用发生错误:\n{_report(exc)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
"""String helpers around excerpts and choosing the longer of two strings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def longest(x: str, y: str) -> str:
    """Return the longer string; ties go to the second."""
    return x if len(x) > len(y) else y


def longest_with_an_announcement(x: str, y: str, ann: Any) -> str:
    """Print an announcement, then return the longer string."""
    print(f"Announcement! {ann}")
    return longest(x, y)


def first_sentence(text: str) -> str:
    """Return the text up to the first period."""
    return text.split(".", 1)[0]


def valid_return() -> str:
    """Return a freshly built string."""
    return "I am local but I move out"


@dataclass
class ImportantExcerpt:
    """A piece of a larger text."""

    part: str

    def level(self) -> int:
        """Importance level of the excerpt."""
        return 3

    def announce_and_return_part(self, announcement: str) -> str:
        """Print the announcement and return the excerpt."""
        print(f"Attention please: {announcement}")
        return self.part


@dataclass
class MyString:
    """A holder of text that can be replaced."""

    text: str

    def modify_data(self) -> None:
        """Replace the text with a fixed value."""
        self.text = "Modified data"


def main(argv: list[str] | None = None) -> int:
    """Run the string and excerpt examples."""
    print("--- 示例 2: 函数签名中的生命周期 ---")
    print(f"最长的字符串是: {longest('abcd', 'xyz')}")
    print(f"最长的字符串是 (内部作用域): {longest('long string is long', 'xyz')}")

    print("\n--- 示例 4: 返回所有权 ---")
    print(valid_return())

    print("\n--- 示例 1: 结构体持有引用 ---")
    excerpt = ImportantExcerpt(first_sentence("Call me Ishmael. Some years ago..."))
    print(f"提取的片段: {excerpt!r}")

    print("\n--- 示例 2: 方法与省略规则 ---")
    word = "Rust is hard but worth it.".split()[0]
    returned = ImportantExcerpt(word).announce_and_return_part("Method called!")
    print(f"Return value: {returned}")

    print("\n--- 示例 3: 'static 生命周期 ---")
    print("I have a static lifetime.")

    print("\n--- 示例 4: 综合应用 ---")
    longest_with_an_announcement("abcd", "xyz", "Testing generics")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
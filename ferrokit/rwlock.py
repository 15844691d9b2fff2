"""A reader-writer lock that owns its value and is poisoned by failed writers."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ferrokit.mutex import Mutex
from ferrokit.threads import ThreadPanic, spawn

T = TypeVar("T")


class LockBusy(Exception):
    """try_read or try_write found the lock held in a conflicting mode."""


class RwPoisonError(Exception):
    """A writer raised while holding the lock.

    This error's guard still holds the lock; take it with into_inner()
    and release it, ideally in a ``with`` block.
    """

    def __init__(self, guard: Any) -> None:
        super().__init__("rwlock is poisoned: a previous writer failed")
        self._guard = guard

    def into_inner(self) -> Any:
        """Return the guard, still holding the lock, to recover the data."""
        return self._guard


class _ReadGuard(Generic[T]):
    """Shared access to the protected value."""

    def __init__(self, lock: RwLock[T]) -> None:
        self._lock = lock
        self._held = True

    @property
    def value(self) -> T:
        if not self._held:
            raise RuntimeError("guard has been released")
        return self._lock._value

    def release(self) -> None:
        """Give up the read lock."""
        if self._held:
            self._held = False
            self._lock._release_read()

    def __enter__(self) -> _ReadGuard[T]:
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.release()


class _WriteGuard(Generic[T]):
    """Exclusive access to the protected value."""

    def __init__(self, lock: RwLock[T]) -> None:
        self._lock = lock
        self._held = True

    def _check(self) -> None:
        if not self._held:
            raise RuntimeError("guard has been released")

    @property
    def value(self) -> T:
        self._check()
        return self._lock._value

    @value.setter
    def value(self, new: T) -> None:
        self._check()
        self._lock._value = new

    def release(self) -> None:
        """Give up the write lock."""
        if self._held:
            self._held = False
            self._lock._release_write()

    def __enter__(self) -> _WriteGuard[T]:
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        if exc_type is not None and self._held:
            self._lock._poisoned = True
        self.release()


class RwLock(Generic[T]):
    """Many readers or one writer around a single value.

    Waiting writers are preferred over new readers so that a steady
    stream of readers cannot starve them.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._cond = threading.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
        self._poisoned = False

    def _acquire_read(self, blocking: bool) -> bool:
        with self._cond:
            if not blocking and (self._writer or self._waiting_writers):
                return False
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
            return True

    def _release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def _acquire_write(self, blocking: bool) -> bool:
        with self._cond:
            if not blocking and (self._writer or self._readers):
                return False
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
            return True

    def _release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    def _checked(self, guard: Any) -> Any:
        if self._poisoned:
            raise RwPoisonError(guard)
        return guard

    def read(self) -> _ReadGuard[T]:
        """Wait for shared access; raise RwPoisonError if poisoned."""
        self._acquire_read(True)
        return self._checked(_ReadGuard(self))

    def write(self) -> _WriteGuard[T]:
        """Wait for exclusive access; raise RwPoisonError if poisoned."""
        self._acquire_write(True)
        return self._checked(_WriteGuard(self))

    def try_read(self) -> _ReadGuard[T]:
        """Take shared access without waiting; raise LockBusy if a writer holds or waits."""
        if not self._acquire_read(False):
            raise LockBusy()
        return self._checked(_ReadGuard(self))

    def try_write(self) -> _WriteGuard[T]:
        """Take exclusive access without waiting; raise LockBusy if anyone holds it."""
        if not self._acquire_write(False):
            raise LockBusy()
        return self._checked(_WriteGuard(self))

    def is_poisoned(self) -> bool:
        """True once a writer has raised while holding the lock."""
        return self._poisoned

    def __repr__(self) -> str:
        return f"RwLock(poisoned={self._poisoned})"


@dataclass
class Database:
    """A list of stored records."""

    data: list[str] = field(default_factory=list)


class Cache:
    """A key-value list guarded by a reader-writer lock."""

    def __init__(self) -> None:
        self._data: RwLock[list[tuple[str, str]]] = RwLock([])

    def get(self, key: str) -> str | None:
        """Return the value first stored under ``key``, or None."""
        with self._data.read() as guard:
            return next((v for k, v in guard.value if k == key), None)

    def set(self, key: str, value: str) -> None:
        """Append a key-value pair."""
        with self._data.write() as guard:
            guard.value.append((key, value))

    def list(self) -> list[tuple[str, str]]:
        """Return a copy of every stored pair, in insertion order."""
        with self._data.read() as guard:
            return list(guard.value)


def _join_all(handles: list[Any]) -> None:
    for handle in handles:
        handle.join()


def main(argv: list[str] | None = None) -> int:
    """Run the reader-writer lock examples."""
    print("=== RwLock 读写锁示例 ===\n")

    print("示例 1: 基本读写操作")
    lock = RwLock(5)
    with lock.read() as r1, lock.read() as r2:
        print(f"读操作 1: {r1.value}")
        print(f"读操作 2: {r2.value}")
    with lock.write() as w:
        w.value = 10
        print(f"写操作后: {w.value}")
    with lock.read() as r:
        print(f"最终值: {r.value}\n")

    print("示例 2: 多个读者")
    numbers = RwLock([1, 2, 3, 4, 5])

    def reader(i: int) -> None:
        with numbers.read() as g:
            print(f"读者 {i}: {g.value}")
            time.sleep(0.1)
            print(f"读者 {i}: 完成")

    _join_all([spawn(reader, i) for i in range(5)])
    print("所有读者完成\n")

    print("示例 3: 读者与写者")
    shared = RwLock(0)

    def read_loop(i: int) -> None:
        for _ in range(3):
            with shared.read() as g:
                print(f"读者 {i}: 读取 {g.value}")
                time.sleep(0.05)

    def write_loop(i: int) -> None:
        for _ in range(2):
            with shared.write() as g:
                g.value += 10
                print(f"写者 {i}: 写入 {g.value}")
                time.sleep(0.1)

    handles = [spawn(read_loop, i) for i in range(3)]
    handles += [spawn(write_loop, i) for i in range(2)]
    _join_all(handles)
    with shared.read() as g:
        print(f"最终值: {g.value}\n")

    print("示例 4: try_read 和 try_write")
    busy = RwLock(42)
    with busy.write():
        try:
            busy.try_read().release()
            print("获取读锁成功")
        except LockBusy:
            print("无法获取读锁（写锁被持有）")
        try:
            busy.try_write().release()
            print("获取写锁成功")
        except LockBusy:
            print("无法获取写锁（写锁已被持有）")
    print()

    print("示例 5: RwLock 与复杂类型")
    db = RwLock(Database())

    def add(i: int) -> None:
        with db.write() as g:
            g.value.data.append(f"数据 {i}")
            print(f"写者: 添加数据 {i}")

    _join_all([spawn(add, i) for i in range(3)])

    def show(i: int) -> None:
        with db.read() as g:
            print(f"读者 {i}: {g.value.data}")

    _join_all([spawn(show, i) for i in range(3)])
    print()

    print("示例 6: 读写锁的性能优势")
    rw = RwLock(0)
    mx = Mutex(0)

    def rw_reads() -> None:
        for _ in range(1000):
            rw.read().release()

    def mutex_reads() -> None:
        for _ in range(1000):
            mx.lock().release()

    start = time.perf_counter()
    _join_all([spawn(rw_reads) for _ in range(10)])
    rw_time = time.perf_counter() - start
    start = time.perf_counter()
    _join_all([spawn(mutex_reads) for _ in range(10)])
    mutex_time = time.perf_counter() - start
    print(f"RwLock 读操作耗时: {rw_time:.4f}s")
    print(f"Mutex 读操作耗时: {mutex_time:.4f}s\n")

    print("示例 7: 先写后读")
    downgrade = RwLock(42)
    with downgrade.write() as g:
        g.value = 100
        print(f"写锁: 修改为 {g.value}")
    with downgrade.read() as g:
        print(f"读锁: 读取 {g.value}\n")

    print("示例 8: 写者饥饿问题")
    contested = RwLock(0)

    def steady_reader(i: int) -> None:
        for _ in range(100):
            with contested.read():
                time.sleep(0.001)
        print(f"读者 {i} 完成")

    def late_writer() -> None:
        print("写者: 尝试获取写锁...")
        with contested.write() as g:
            print("写者: 获取写锁成功！")
            g.value = 999
            time.sleep(0.1)
        print("写者: 完成")

    handles = [spawn(steady_reader, i) for i in range(5)]
    handles.append(spawn(late_writer))
    _join_all(handles)
    with contested.read() as g:
        print(f"最终值: {g.value}\n")

    print("示例 9: RwLock 的毒化")
    fragile = RwLock(42)

    def crash() -> None:
        with fragile.write() as g:
            g.value = 100
            raise RuntimeError("线程 panic！")

    try:
        spawn(crash).join()
    except ThreadPanic:
        pass
    try:
        with fragile.read() as g:
            print(f"读锁获取成功: {g.value}")
    except RwPoisonError as exc:
        print(f"读锁已被毒化: {exc}")
        with exc.into_inner() as g:
            print(f"恢复的值: {g.value}")
    print()

    print("示例 10: 实际应用场景 - 缓存系统")
    cache = Cache()

    def fill(i: int) -> None:
        for j in range(3):
            cache.set(f"key_{i}_{j}", f"value_{i}_{j}")

    _join_all([spawn(fill, i) for i in range(3)])

    def count(i: int) -> None:
        print(f"读者 {i}: {len(cache.list())} 个条目")

    _join_all([spawn(count, i) for i in range(5)])
    print(f"缓存内容: {cache.list()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
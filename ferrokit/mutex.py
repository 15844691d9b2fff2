"""A mutex that owns its value, hands out guards and is poisoned by failures."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ferrokit.threads import ThreadPanic, spawn

T = TypeVar("T")


class WouldBlock(Exception):
    """try_lock found the mutex held by someone else."""


class PoisonError(Exception):
    """A previous holder raised while holding the lock.

    The lock is held by this error's guard; take it with into_inner()
    and release it, ideally in a ``with`` block.
    """

    def __init__(self, guard: _Guard[Any]) -> None:
        super().__init__("mutex is poisoned: a previous holder failed")
        self._guard = guard

    def into_inner(self) -> _Guard[Any]:
        """Return the guard, still holding the lock, to recover the data."""
        return self._guard


class _Guard(Generic[T]):
    """Access to the protected value while the lock is held."""

    def __init__(self, mutex: Mutex[T]) -> None:
        self._mutex = mutex
        self._held = True

    def _check(self) -> None:
        if not self._held:
            raise RuntimeError("guard has been released")

    @property
    def value(self) -> T:
        self._check()
        return self._mutex._value

    @value.setter
    def value(self, new: T) -> None:
        self._check()
        self._mutex._value = new

    def release(self) -> None:
        """Release the lock; further access through this guard fails."""
        if self._held:
            self._held = False
            self._mutex._lock.release()

    def __enter__(self) -> _Guard[T]:
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        if exc_type is not None and self._held:
            self._mutex._poisoned = True
        self.release()


class Mutex(Generic[T]):
    """Mutual exclusion around a single value."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = threading.Lock()
        self._poisoned = False

    def _guard(self) -> _Guard[T]:
        guard = _Guard(self)
        if self._poisoned:
            raise PoisonError(guard)
        return guard

    def lock(self) -> _Guard[T]:
        """Wait for the lock and return a guard; raise PoisonError if poisoned."""
        self._lock.acquire()
        return self._guard()

    def try_lock(self) -> _Guard[T]:
        """Take the lock without waiting; raise WouldBlock if it is held."""
        if not self._lock.acquire(blocking=False):
            raise WouldBlock()
        return self._guard()

    def get(self) -> T:
        """Return the value under the lock; PoisonError propagates from lock()."""
        with self.lock() as guard:
            return guard.value

    def set(self, value: T) -> None:
        """Replace the value under the lock; PoisonError propagates from lock()."""
        with self.lock() as guard:
            guard.value = value

    def is_poisoned(self) -> bool:
        """True once a holder has raised while holding the lock."""
        return self._poisoned

    def __repr__(self) -> str:
        return f"Mutex(poisoned={self._poisoned})"


@dataclass
class SharedData:
    """A counter and the values that were added alongside it."""

    counter: int = 0
    values: list[int] = field(default_factory=list)


class ThreadSafeCounter:
    """A counter that may be incremented from several threads."""

    def __init__(self) -> None:
        self.count: Mutex[int] = Mutex(0)

    def increment(self) -> None:
        """Add one."""
        with self.count.lock() as guard:
            guard.value += 1

    def get(self) -> int:
        """Return the current count."""
        return self.count.get()


def shared_increment(threads: int = 10) -> int:
    """Let each of ``threads`` threads add one to a shared counter; return the total."""
    counter: Mutex[int] = Mutex(0)

    def work() -> None:
        with counter.lock() as guard:
            guard.value += 1

    workers = [threading.Thread(target=work) for _ in range(threads)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return counter.get()


def main(argv: list[str] | None = None) -> int:
    """Run the mutex examples."""
    print("=== Mutex 互斥锁示例 ===\n")

    print("示例 1: 基本 Mutex 用法")
    m = Mutex(5)
    with m.lock() as guard:
        guard.value = 6
        print(f"修改后: {guard.value}")
    print(f"最终值: {m.get()}\n")

    print("示例 2: 多线程共享 Mutex")
    print(f"最终计数: {shared_increment(10)}\n")

    print("示例 3: Mutex 与复杂类型")
    data = Mutex(SharedData())

    def record(i: int) -> None:
        with data.lock() as g:
            g.value.counter += 1
            g.value.values.append(i)
            print(f"线程 {i}: {g.value}")

    for handle in [spawn(record, i) for i in range(5)]:
        handle.join()
    print(f"最终数据: {data.get()}\n")

    print("示例 4: try_lock - 非阻塞获取锁")
    busy = Mutex(0)

    def hold() -> None:
        with busy.lock():
            print("线程1: 持有锁")
            time.sleep(0.5)
            print("线程1: 释放锁")

    holder = spawn(hold)
    time.sleep(0.1)
    print("线程主: 尝试获取锁")
    try:
        with busy.try_lock() as g:
            print("线程主: 获取锁成功")
            print(f"线程主: 值 = {g.value}")
    except WouldBlock:
        print("线程主: 无法获取锁，已被占用")
    holder.join()
    print()

    print("示例 6: 正确的多锁获取（避免死锁）")
    first, second = Mutex(0), Mutex(0)

    def both(i: int) -> None:
        with first.lock(), second.lock():
            print(f"线程 {i} 同时持有两个锁")

    for handle in [spawn(both, i) for i in range(2)]:
        handle.join()
    print("所有线程完成，没有死锁\n")

    print("示例 7: 通过守卫访问数据")
    text = Mutex("hello")
    with text.lock() as g:
        print(f"长度: {len(g.value)}")
        g.value += " world"
        print(f"值: {g.value}")
    print()

    print("示例 8: 使用 Mutex 实现简单的线程安全计数器")
    counter = ThreadSafeCounter()
    for handle in [spawn(counter.increment) for _ in range(10)]:
        handle.join()
    print(f"计数器值: {counter.get()}\n")

    print("示例 10: 锁的毒化 (Poisoning)")
    poisoned = Mutex(42)

    def crash() -> None:
        with poisoned.lock() as g:
            g.value = 100
            raise RuntimeError("线程 panic！")

    try:
        spawn(crash).join()
    except ThreadPanic:
        pass
    try:
        with poisoned.lock() as g:
            print(f"获取锁成功: {g.value}")
    except PoisonError as exc:
        print(f"锁已被毒化: {exc}")
        with exc.into_inner() as g:
            print(f"恢复的值: {g.value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
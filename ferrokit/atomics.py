"""Lock-backed atomic integers and booleans, a spin lock and small demos."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class CompareExchangeError(Exception):
    """A compare-and-exchange found a value other than the expected one."""

    def __init__(self, actual: object) -> None:
        super().__init__(f"current value is {actual!r}")
        self.actual = actual


class AtomicInt:
    """An integer whose operations are indivisible across threads.

    With ``bits`` set the value wraps like a fixed-width integer,
    two's complement when ``signed`` is true; without it the value is unbounded.
    """

    __slots__ = ("_value", "_lock", "_bits", "_signed")

    def __init__(self, value: int = 0, *, bits: int | None = None, signed: bool = True) -> None:
        if bits is not None and bits <= 0:
            raise ValueError("bits must be positive")
        self._lock = threading.Lock()
        self._bits = bits
        self._signed = signed
        self._value = self._wrap(value)

    def _wrap(self, value: int) -> int:
        if self._bits is None:
            return value
        mask = (1 << self._bits) - 1
        value &= mask
        if self._signed and value >> (self._bits - 1):
            value -= 1 << self._bits
        return value

    def _update(self, func: Callable[[int], int]) -> int:
        with self._lock:
            old = self._value
            self._value = self._wrap(func(old))
            return old

    def load(self) -> int:
        """Return the current value."""
        with self._lock:
            return self._value

    def store(self, value: int) -> None:
        """Replace the value."""
        with self._lock:
            self._value = self._wrap(value)

    def swap(self, value: int) -> int:
        """Replace the value and return the previous one."""
        return self._update(lambda _old: value)

    def fetch_add(self, value: int) -> int:
        """Add and return the previous value."""
        return self._update(lambda old: old + value)

    def fetch_sub(self, value: int) -> int:
        """Subtract and return the previous value."""
        return self._update(lambda old: old - value)

    def fetch_or(self, value: int) -> int:
        """Bitwise-or and return the previous value."""
        return self._update(lambda old: old | value)

    def fetch_and(self, value: int) -> int:
        """Bitwise-and and return the previous value."""
        return self._update(lambda old: old & value)

    def fetch_xor(self, value: int) -> int:
        """Bitwise-xor and return the previous value."""
        return self._update(lambda old: old ^ value)

    def fetch_max(self, value: int) -> int:
        """Keep the larger of the value and ``value``; return the previous value."""
        return self._update(lambda old: max(old, value))

    def fetch_min(self, value: int) -> int:
        """Keep the smaller of the value and ``value``; return the previous value."""
        return self._update(lambda old: min(old, value))

    def compare_exchange(self, current: int, new: int) -> int:
        """Store ``new`` if the value equals ``current`` and return it.

        Raises CompareExchangeError holding the actual value otherwise.
        """
        with self._lock:
            if self._value != current:
                raise CompareExchangeError(self._value)
            old = self._value
            self._value = self._wrap(new)
            return old

    def __repr__(self) -> str:
        return f"AtomicInt({self.load()})"


class AtomicBool:
    """A boolean flag whose operations are indivisible across threads."""

    __slots__ = ("_value", "_lock")

    def __init__(self, value: bool = False) -> None:
        self._lock = threading.Lock()
        self._value = bool(value)

    def load(self) -> bool:
        """Return the current flag."""
        with self._lock:
            return self._value

    def store(self, value: bool) -> None:
        """Set the flag."""
        with self._lock:
            self._value = bool(value)

    def compare_exchange(self, current: bool, new: bool) -> bool:
        """Set ``new`` if the flag equals ``current``; return the previous flag.

        Raises CompareExchangeError holding the actual flag otherwise.
        """
        with self._lock:
            if self._value != bool(current):
                raise CompareExchangeError(self._value)
            old = self._value
            self._value = bool(new)
            return old

    def __repr__(self) -> str:
        return f"AtomicBool({self.load()})"


class SpinLock:
    """A lock that busy-waits on an atomic flag."""

    def __init__(self) -> None:
        self._locked = AtomicBool(False)

    def lock(self) -> None:
        """Spin until the lock is taken."""
        while True:
            try:
                self._locked.compare_exchange(False, True)
                return
            except CompareExchangeError:
                time.sleep(0)

    def unlock(self) -> None:
        """Release the lock."""
        self._locked.store(False)

    def __enter__(self) -> SpinLock:
        self.lock()
        return self

    def __exit__(self, *args: object) -> None:
        self.unlock()


def _run_threads(count: int, target: Callable[[], None]) -> None:
    workers = [threading.Thread(target=target) for _ in range(count)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()


def parallel_count(threads: int = 10, per_thread: int = 1000) -> int:
    """Increment a shared atomic counter from several threads; return the total."""
    counter = AtomicInt()

    def work() -> None:
        for _ in range(per_thread):
            counter.fetch_add(1)

    _run_threads(threads, work)
    return counter.load()


def spinlock_count(threads: int = 5, per_thread: int = 1000) -> int:
    """Increment a counter under a spin lock from several threads; return the total."""
    lock = SpinLock()
    counter = AtomicInt()

    def work() -> None:
        for _ in range(per_thread):
            with lock:
                counter.fetch_add(1)

    _run_threads(threads, work)
    return counter.load()


def producer_consumer(count: int = 5) -> list[int]:
    """Hand the values 1..count from a producer to a consumer through a single slot."""
    data = AtomicInt()
    ready = AtomicBool(False)
    consumed: list[int] = []

    def produce() -> None:
        for value in range(1, count + 1):
            while ready.load():
                time.sleep(0)
            data.store(value)
            ready.store(True)

    def consume() -> None:
        for _ in range(count):
            while not ready.load():
                time.sleep(0)
            consumed.append(data.load())
            ready.store(False)

    producer = threading.Thread(target=produce)
    consumer = threading.Thread(target=consume)
    producer.start()
    consumer.start()
    producer.join()
    consumer.join()
    return consumed


def main(argv: list[str] | None = None) -> int:
    """Run the atomic examples."""
    print("=== 原子类型 (Atomic Types) 示例 ===\n")

    print("示例 1: 基本的原子操作")
    atomic = AtomicInt(0, bits=32)
    print(f"初始值: {atomic.load()}")
    atomic.store(10)
    print(f"写入后: {atomic.load()}")
    atomic.fetch_add(5)
    print(f"加 5 后: {atomic.load()}")
    atomic.fetch_sub(3)
    print(f"减 3 后: {atomic.load()}\n")

    print("示例 2: 多线程原子计数器")
    print(f"最终计数: {parallel_count(10, 1000)}\n")

    print("示例 4: 比较并交换 (Compare and Swap)")
    cas = AtomicInt(5, bits=32)
    for expected, new in ((5, 10), (5, 20)):
        try:
            old = cas.compare_exchange(expected, new)
            print(f"CAS 成功: {old} -> {cas.load()}")
        except CompareExchangeError as exc:
            print(f"CAS 失败: 当前值是 {exc.actual}")
    print()

    print("示例 5: 原子布尔值")
    flag = AtomicBool(False)

    def raise_flag() -> None:
        time.sleep(0.1)
        flag.store(True)
        print("线程: 设置标志为 true")

    setter = threading.Thread(target=raise_flag)
    setter.start()
    while not flag.load():
        time.sleep(0)
    print("主线程: 检测到标志为 true")
    setter.join()
    print()

    print("示例 6: 原子自增和自减")
    counter = AtomicInt(0, bits=32)
    print(f"fetch_add 返回旧值: {counter.fetch_add(1)}")
    print(f"当前值: {counter.load()}")
    print(f"fetch_add + 1 返回新值: {counter.fetch_add(1) + 1}")
    print(f"当前值: {counter.load()}")
    counter.fetch_sub(1)
    print(f"fetch_sub 后: {counter.load()}\n")

    print("示例 7: 原子位操作")
    bits = AtomicInt(0b0000, bits=32)
    bits.fetch_or(0b1010)
    print(f"fetch_or: {bits.load():04b}")
    bits.fetch_and(0b1100)
    print(f"fetch_and: {bits.load():04b}")
    bits.fetch_xor(0b1111)
    print(f"fetch_xor: {bits.load():04b}\n")

    print("示例 8: 原子最大值和最小值")
    extreme = AtomicInt(5, bits=32)
    extreme.fetch_max(10)
    print(f"fetch_max(10): {extreme.load()}")
    extreme.fetch_min(3)
    print(f"fetch_min(3): {extreme.load()}\n")

    print("示例 9: 自旋锁实现")
    print(f"自旋锁保护的计数: {spinlock_count(5, 1000)}\n")

    print("示例 10: 生产者-消费者模式（原子版本）")
    for value in producer_consumer(5):
        print(f"消费者: 消费 {value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
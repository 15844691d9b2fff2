"""Thread handles that return values and report failures, plus small demos."""

from __future__ import annotations

import queue
import threading
import time
from collections.abc import Callable, Iterable
from typing import Any


class ThreadPanic(Exception):
    """The function run by a thread raised; the original is the cause."""

    def __init__(self, payload: BaseException) -> None:
        super().__init__(f"thread panicked: {payload}")
        self.payload = payload


class ThreadHandle:
    """A running thread whose return value is collected by join()."""

    def __init__(self, func: Callable[..., Any], args: tuple[Any, ...], name: str | None) -> None:
        self._name = name
        self._result: Any = None
        self._error: BaseException | None = None
        self._thread = threading.Thread(target=self._run, args=(func, args), name=name, daemon=True)

    def _run(self, func: Callable[..., Any], args: tuple[Any, ...]) -> None:
        try:
            self._result = func(*args)
        except BaseException as exc:  # the failure is handed to join()
            self._error = exc

    def _start(self) -> ThreadHandle:
        self._thread.start()
        return self

    def join(self) -> Any:
        """Wait for the thread and return its result; raise ThreadPanic if it failed."""
        self._thread.join()
        if self._error is not None:
            raise ThreadPanic(self._error) from self._error
        return self._result

    def name(self) -> str | None:
        """The name given at spawn, or None."""
        return self._name


def spawn(func: Callable[..., Any], *args: Any, name: str | None = None) -> ThreadHandle:
    """Start ``func(*args)`` in a new thread."""
    return ThreadHandle(func, args, name)._start()


def run_workers(count: int = 5, delay: float = 0.5) -> list[int]:
    """Run ``count`` sleeping workers at once; each returns its id times ten."""

    def worker(ident: int) -> int:
        time.sleep(delay)
        return ident * 10

    handles = [spawn(worker, i) for i in range(count)]
    return [handle.join() for handle in handles]


class _Slot(threading.local):
    value = 0


_slot = _Slot()


def thread_local_values(main_value: int = 42, worker_value: int = 100) -> tuple[int, int, int]:
    """Show thread-local isolation.

    Returns what a new thread first sees, what it sees after writing
    ``worker_value``, and what the calling thread sees afterwards.
    """
    _slot.value = main_value

    def worker() -> tuple[int, int]:
        before = _slot.value
        _slot.value = worker_value
        return before, _slot.value

    before, after = spawn(worker).join()
    return before, after, _slot.value


def scoped_map(func: Callable[[Any], Any], items: Iterable[Any]) -> list[Any]:
    """Apply ``func`` to every item, one thread each, and wait for all of them."""
    handles = [spawn(func, item) for item in items]
    results: list[Any] = []
    failure: ThreadPanic | None = None
    for handle in handles:
        try:
            results.append(handle.join())
        except ThreadPanic as exc:
            failure = failure or exc
    if failure is not None:
        raise failure
    return results


_DONE = object()


def producer_consumer(count: int = 5) -> list[int]:
    """Send 1..count from a producer thread to a consumer thread over a queue."""
    channel: queue.Queue[Any] = queue.Queue()

    def produce() -> None:
        for value in range(1, count + 1):
            channel.put(value)
        channel.put(_DONE)

    def consume() -> list[int]:
        return list(iter(channel.get, _DONE))

    producer = spawn(produce)
    consumer = spawn(consume)
    producer.join()
    return consumer.join()


def main(argv: list[str] | None = None) -> int:
    """Run the thread examples."""
    print("=== 线程示例 ===\n")

    print("示例 1: 创建和启动线程")

    def count_up() -> None:
        print("新线程开始")
        for i in range(1, 6):
            print(f"新线程: 计数 {i}")
            time.sleep(0.1)
        print("新线程结束")

    handle = spawn(count_up)
    print("主线程继续执行")
    handle.join()
    print("主线程结束\n")

    print("示例 2: 传递数据")
    data = [1, 2, 3]
    spawn(lambda v: print(f"新线程接收: {v}"), data).join()
    print()

    print("示例 3: 返回值")
    print(f"线程返回值: {spawn(sum, range(1, 101)).join()}\n")

    print("示例 4: 线程 panic 处理")

    def fail() -> None:
        raise RuntimeError("线程发生了 panic!")

    try:
        spawn(fail).join()
        print("线程正常完成")
    except ThreadPanic as exc:
        print(f"线程 panic: {exc.payload!r}")
    print()

    print("示例 5: 多个线程并发")
    start = time.perf_counter()
    results = run_workers(5, 0.5)
    print(f"所有线程完成，耗时: {time.perf_counter() - start:.2f}s")
    print(f"结果: {results}\n")

    print("示例 6: 线程命名")
    name = spawn(lambda: threading.current_thread().name, name="工作线程").join()
    print(f"线程名称: {name}\n")

    print("示例 7: 线程栈大小")
    try:
        previous = threading.stack_size(1024 * 1024)
        try:
            spawn(lambda: print("自定义栈大小的线程")).join()
        finally:
            threading.stack_size(previous)
    except (ValueError, RuntimeError):
        print("此平台不支持自定义栈大小")
    print()

    print("示例 8: 获取线程 ID")
    main_id = threading.get_ident()
    child_id = spawn(threading.get_ident).join()
    print(f"主线程 ID: {main_id}")
    print(f"子线程 ID: {child_id}\n")

    print("示例 9: 线程局部存储")
    before, after, main_after = thread_local_values(42, 100)
    print(f"线程局部值: {before}")
    print(f"修改后的值: {after}")
    print(f"主线程的值: {main_after}\n")

    print("示例 10: 作用域线程")
    items = [1, 2, 3, 4, 5]
    for i, value in enumerate(scoped_map(lambda x: x, items)):
        print(f"线程 {i}: 数据[{i}] = {value}")
    print(f"原始数据: {items}\n")

    print("示例 11: 生产者-消费者模式（基础版）")
    for value in producer_consumer(5):
        print(f"消费者接收: {value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
"""Message channels between threads: unbounded, bounded and rendezvous."""

from __future__ import annotations

import itertools
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar

from ferrokit.threads import spawn

T = TypeVar("T")


class Empty(Exception):
    """No message is waiting, but senders are still connected."""


class Timeout(TimeoutError):
    """No message arrived before the timeout ran out."""


class Disconnected(Exception):
    """Every sender is gone (or the receiver was closed) and no message is left."""


class SendError(Exception):
    """The value could not be delivered because the receiving side is gone."""

    def __init__(self, value: Any) -> None:
        super().__init__("sending on a closed channel")
        self.value = value


class _State:
    """State shared by every end of one channel."""

    def __init__(self, bound: int | None) -> None:
        self.cond = threading.Condition()
        self.items: deque[Any] = deque()
        self.bound = bound
        self.senders = 1
        self.receiver_open = True
        self.pushed = 0
        self.popped = 0


class Sender(Generic[T]):
    """The sending end of a channel; clone it to get more producers."""

    def __init__(self, state: _State) -> None:
        self._state = state
        self._closed = False

    def send(self, value: T) -> None:
        """Deliver a value; raise SendError if the receiver is gone.

        On a bounded channel this waits for room; on a rendezvous channel
        it waits until the receiver has taken the value.
        """
        state = self._state
        with state.cond:
            if self._closed:
                raise SendError(value)
            bound = state.bound
            if bound is not None:
                limit = max(bound, 1)
                while state.receiver_open and len(state.items) >= limit:
                    state.cond.wait()
            if not state.receiver_open:
                raise SendError(value)
            ticket = state.pushed
            state.items.append(value)
            state.pushed += 1
            state.cond.notify_all()
            if bound == 0:
                while state.receiver_open and state.popped <= ticket:
                    state.cond.wait()
                if state.popped <= ticket:
                    raise SendError(value)

    def clone(self) -> Sender[T]:
        """Return another sender on the same channel."""
        state = self._state
        with state.cond:
            if self._closed:
                raise ValueError("cannot clone a closed sender")
            state.senders += 1
        return Sender(state)

    def close(self) -> None:
        """Drop this sender; the channel disconnects when the last one closes."""
        state = self._state
        with state.cond:
            if self._closed:
                return
            self._closed = True
            state.senders -= 1
            state.cond.notify_all()

    def __enter__(self) -> Sender[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class Receiver(Generic[T]):
    """The single receiving end of a channel."""

    def __init__(self, state: _State) -> None:
        self._state = state

    def _take(self, block: bool, deadline: float | None) -> T:
        state = self._state
        with state.cond:
            while True:
                if state.items:
                    value = state.items.popleft()
                    state.popped += 1
                    state.cond.notify_all()
                    return value
                if state.senders == 0 or not state.receiver_open:
                    raise Disconnected()
                if not block:
                    raise Empty()
                if deadline is None:
                    state.cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise Timeout()
                state.cond.wait(remaining)

    def recv(self) -> T:
        """Wait for the next value; raise Disconnected once nothing more can come."""
        return self._take(True, None)

    def try_recv(self) -> T:
        """Take a waiting value without blocking; raise Empty or Disconnected."""
        return self._take(False, None)

    def recv_timeout(self, timeout: float) -> T:
        """Wait up to ``timeout`` seconds; raise Timeout or Disconnected."""
        if timeout < 0:
            raise ValueError("timeout must not be negative")
        return self._take(True, time.monotonic() + timeout)

    def close(self) -> None:
        """Drop the receiver: pending values are discarded and senders fail."""
        state = self._state
        with state.cond:
            state.receiver_open = False
            state.items.clear()
            state.cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.recv()
            except Disconnected:
                return

    def __enter__(self) -> Receiver[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def channel() -> tuple[Sender[Any], Receiver[Any]]:
    """Create an unbounded channel."""
    state = _State(None)
    return Sender(state), Receiver(state)


def sync_channel(bound: int) -> tuple[Sender[Any], Receiver[Any]]:
    """Create a channel holding at most ``bound`` values; 0 makes every send a rendezvous."""
    if bound < 0:
        raise ValueError("bound must not be negative")
    state = _State(bound)
    return Sender(state), Receiver(state)


@dataclass(frozen=True)
class Quit:
    """Stop processing."""


@dataclass(frozen=True)
class Move:
    """Move to a position."""

    x: int
    y: int


@dataclass(frozen=True)
class Write:
    """Write some text."""

    text: str


@dataclass(frozen=True)
class ChangeColor:
    """Change to an RGB colour."""

    r: int
    g: int
    b: int


def describe_message(msg: Quit | Move | Write | ChangeColor) -> str:
    """Describe one message."""
    match msg:
        case Quit():
            return "收到退出消息"
        case Move(x=x, y=y):
            return f"移动到 ({x}, {y})"
        case Write(text=text):
            return f"写入: {text}"
        case ChangeColor(r=r, g=g, b=b):
            return f"颜色: ({r}, {g}, {b})"
    raise TypeError(f"unknown message: {msg!r}")


def main(argv: list[str] | None = None) -> int:
    """Run the channel examples."""
    print("=== 通道 (Channels) 示例 ===\n")

    print("示例 1: 基本的消息传递")
    tx, rx = channel()
    spawn(tx.send, "你好")
    print(f"接收到: {rx.recv()}\n")

    print("示例 2: 发送多个消息")
    tx, rx = channel()

    def send_numbers(sender: Sender[int]) -> None:
        with sender:
            for i in range(1, 6):
                sender.send(i)
                print(f"发送: {i}")
                time.sleep(0.1)

    spawn(send_numbers, tx)
    for received in rx:
        print(f"接收: {received}")
    print()

    print("示例 3: 多个生产者")
    tx, rx = channel()

    def produce(sender: Sender[str], label: str) -> None:
        with sender:
            for i in range(1, 4):
                sender.send(f"{label}: {i}")
                time.sleep(0.1)

    handles = [spawn(produce, tx.clone(), label) for label in ("生产者1", "生产者2")]
    tx.close()
    for handle in handles:
        handle.join()
    print("接收到的消息:")
    for received in rx:
        print(f"  {received}")
    print()

    print("示例 4: try_recv - 非阻塞接收")
    tx, rx = channel()
    spawn(lambda: (time.sleep(0.2), tx.send(42)))
    print("尝试非阻塞接收...")
    try:
        print(f"接收到: {rx.try_recv()}")
    except Empty:
        print("暂无消息: Empty")
    time.sleep(0.25)
    print("再次尝试...")
    try:
        print(f"接收到: {rx.try_recv()}")
    except (Empty, Disconnected) as exc:
        print(f"错误: {type(exc).__name__}")
    print()

    print("示例 5: recv_timeout - 带超时的接收")
    tx, rx = channel()
    spawn(lambda: (time.sleep(0.1), tx.send("延迟消息")))
    for timeout in (0.05, 0.2):
        print(f"等待消息（超时 {int(timeout * 1000)}ms）...")
        try:
            print(f"接收到: {rx.recv_timeout(timeout)}")
        except (Timeout, Disconnected):
            print("超时！")
    print()

    print("示例 6: 发送不同类型的消息")
    tx, rx = channel()
    for msg in (Move(10, 20), Write("你好"), ChangeColor(255, 0, 0), Quit()):
        tx.send(msg)
    print("处理不同类型的消息:")
    for msg in rx:
        print(f"  {describe_message(msg)}")
        if isinstance(msg, Quit):
            break
    print()

    print("示例 7: 无界通道")
    tx, rx = channel()

    def flood() -> None:
        for i in range(100):
            tx.send(i)
        print("生产者完成")

    producer = spawn(flood)
    time.sleep(0.01)
    print("消费者开始接收:")
    for received in itertools.islice(rx, 10):
        print(f"  接收: {received}")
    producer.join()
    print()

    print("示例 8: 同步通道 (rendezvous)")
    tx, rx = sync_channel(0)

    def rendezvous() -> None:
        print("发送者准备发送...")
        tx.send(42)
        print("发送者发送成功！")

    sender = spawn(rendezvous)
    time.sleep(0.1)
    print("接收者准备接收...")
    print(f"接收者接收到: {rx.recv()}")
    sender.join()
    print()

    print("示例 9: 带缓冲区的同步通道")
    tx, rx = sync_channel(2)

    def buffered() -> None:
        tx.send(1)
        print("发送 1")
        tx.send(2)
        print("发送 2")
        print("尝试发送 3（会阻塞）...")
        tx.send(3)
        print("发送 3")

    sender = spawn(buffered)
    time.sleep(0.1)
    print("接收者开始接收:")
    print(f"  接收: {rx.recv()}")
    time.sleep(0.1)
    print(f"  接收: {rx.recv()}")
    print(f"  接收: {rx.recv()}")
    sender.join()
    print()

    print("示例 10: 通道关闭检测")
    tx, rx = channel()

    def detect() -> None:
        for i in range(5):
            try:
                tx.send(i)
            except SendError:
                print(f"发送者: 通道已关闭，无法发送 {i}")
                break
            print(f"发送者: 发送 {i}")
        print("发送者完成")

    sender = spawn(detect)
    time.sleep(0.1)
    for _ in range(2):
        print(f"接收者: 接收 {rx.recv()}")
    rx.close()
    print("接收者: 关闭通道")
    sender.join()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
import itertools
import threading
import time

import pytest

from ferrokit.channels import (
    ChangeColor,
    Disconnected,
    Empty,
    Move,
    Quit,
    SendError,
    Timeout,
    Write,
    channel,
    describe_message,
    sync_channel,
)


def test_send_and_recv_round_trip():
    tx, rx = channel()
    tx.send("你好")
    assert rx.recv() == "你好"


def test_iteration_ends_when_sender_closes():
    tx, rx = channel()

    def produce():
        with tx:
            for i in range(1, 6):
                tx.send(i)

    worker = threading.Thread(target=produce)
    worker.start()
    assert list(rx) == [1, 2, 3, 4, 5]
    worker.join()


def test_multiple_producers_all_delivered():
    tx, rx = channel()
    tx1 = tx.clone()
    tx2 = tx.clone()
    tx.close()

    def produce(sender, label):
        with sender:
            for i in range(1, 4):
                sender.send(f"{label}: {i}")

    workers = [
        threading.Thread(target=produce, args=(tx1, "a")),
        threading.Thread(target=produce, args=(tx2, "b")),
    ]
    for w in workers:
        w.start()
    for w in workers:
        w.join()
    received = list(rx)
    assert sorted(received) == sorted(f"{l}: {i}" for l in "ab" for i in range(1, 4))
    assert [m for m in received if m.startswith("a")] == ["a: 1", "a: 2", "a: 3"]


def test_try_recv_empty_then_value():
    tx, rx = channel()
    with pytest.raises(Empty):
        rx.try_recv()
    tx.send(42)
    assert rx.try_recv() == 42


def test_try_recv_disconnected_after_all_senders_close():
    tx, rx = channel()
    tx.send(7)
    tx.close()
    assert rx.try_recv() == 7
    with pytest.raises(Disconnected):
        rx.try_recv()


def test_recv_timeout_expires_then_succeeds():
    tx, rx = channel()
    with pytest.raises(Timeout):
        rx.recv_timeout(0.05)

    def later():
        time.sleep(0.05)
        tx.send("延迟消息")

    worker = threading.Thread(target=later)
    worker.start()
    assert rx.recv_timeout(2.0) == "延迟消息"
    worker.join()


def test_recv_timeout_rejects_negative():
    _, rx = channel()
    with pytest.raises(ValueError):
        rx.recv_timeout(-1)


def test_recv_disconnected_when_no_senders():
    tx, rx = channel()
    tx.close()
    with pytest.raises(Disconnected):
        rx.recv()


def test_send_after_receiver_closed_raises_with_value():
    tx, rx = channel()
    rx.close()
    with pytest.raises(SendError) as info:
        tx.send(3)
    assert info.value.value == 3


def test_send_on_closed_sender_raises():
    tx, _ = channel()
    tx.close()
    with pytest.raises(SendError):
        tx.send(1)
    with pytest.raises(ValueError):
        tx.clone()


def test_islice_takes_first_values():
    tx, rx = channel()
    for i in range(100):
        tx.send(i)
    assert list(itertools.islice(rx, 10)) == list(range(10))
    assert rx.recv() == 10


def test_rendezvous_send_blocks_until_received():
    tx, rx = sync_channel(0)
    done = threading.Event()

    def send():
        tx.send(42)
        done.set()

    worker = threading.Thread(target=send)
    worker.start()
    assert not done.wait(0.1)
    assert rx.recv() == 42
    assert done.wait(2)
    worker.join()


def test_bounded_channel_blocks_when_full():
    tx, rx = sync_channel(2)
    sent = []

    def produce():
        for value in (1, 2, 3):
            tx.send(value)
            sent.append(value)

    worker = threading.Thread(target=produce)
    worker.start()
    time.sleep(0.1)
    assert sent == [1, 2]
    assert [rx.recv() for _ in range(3)] == [1, 2, 3]
    worker.join(2)
    assert sent == [1, 2, 3]


def test_rendezvous_sender_fails_when_receiver_closes():
    tx, rx = sync_channel(0)
    errors = []

    def send():
        try:
            tx.send("x")
        except SendError as exc:
            errors.append(exc.value)

    worker = threading.Thread(target=send)
    worker.start()
    time.sleep(0.05)
    rx.close()
    worker.join(2)
    assert errors == ["x"]
    with pytest.raises(SendError) as info:
        tx.send("y")
    assert info.value.value == "y"


def test_sync_channel_rejects_negative_bound():
    with pytest.raises(ValueError):
        sync_channel(-1)


@pytest.mark.parametrize(
    "msg, expected",
    [
        (Quit(), "收到退出消息"),
        (Move(10, 20), "移动到 (10, 20)"),
        (Write("你好"), "写入: 你好"),
        (ChangeColor(255, 0, 0), "颜色: (255, 0, 0)"),
    ],
)
def test_describe_message(msg, expected):
    assert describe_message(msg) == expected


def test_describe_message_rejects_unknown():
    with pytest.raises(TypeError):
        describe_message("hello")


def test_messages_travel_through_channel():
    tx, rx = channel()
    messages = [Move(1, 2), Write("hi"), Quit()]
    for msg in messages:
        tx.send(msg)
    tx.close()
    assert list(rx) == messages
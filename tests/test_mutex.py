import threading

import pytest

from ferrokit.mutex import (
    Mutex,
    PoisonError,
    SharedData,
    ThreadSafeCounter,
    WouldBlock,
    shared_increment,
)


def test_lock_modifies_value():
    m = Mutex(5)
    with m.lock() as guard:
        guard.value = 6
    assert m.get() == 6


def test_set_then_get_round_trip():
    m = Mutex("a")
    m.set("b")
    assert m.get() == "b"


def test_shared_increment_counts_every_thread():
    assert shared_increment(10) == 10


def test_try_lock_while_held_raises_would_block():
    m = Mutex(0)
    with m.lock():
        with pytest.raises(WouldBlock):
            m.try_lock()
    with m.try_lock() as guard:
        assert guard.value == 0


def test_try_lock_held_by_other_thread():
    m = Mutex(0)
    held = threading.Event()
    release = threading.Event()

    def hold():
        with m.lock():
            held.set()
            release.wait(2)

    worker = threading.Thread(target=hold)
    worker.start()
    held.wait(2)
    with pytest.raises(WouldBlock):
        m.try_lock()
    release.set()
    worker.join()
    assert m.get() == 0


def test_guard_unusable_after_release():
    m = Mutex(1)
    guard = m.lock()
    guard.release()
    with pytest.raises(RuntimeError):
        _ = guard.value
    assert m.get() == 1


def test_failure_poisons_and_value_is_recoverable():
    m = Mutex(42)

    def fail():
        with m.lock() as guard:
            guard.value = 100
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        fail()
    assert m.is_poisoned()
    with pytest.raises(PoisonError) as info:
        m.lock()
    with info.value.into_inner() as guard:
        assert guard.value == 100


def test_poison_persists_and_lock_is_released_after_recovery():
    m = Mutex(1)
    with pytest.raises(ValueError):
        with m.lock():
            raise ValueError("x")
    with pytest.raises(PoisonError) as info:
        m.try_lock()
    info.value.into_inner().release()
    with pytest.raises(PoisonError) as again:
        m.get()
    again.value.into_inner().release()
    assert m.is_poisoned()


def test_not_poisoned_without_failure():
    m = Mutex(0)
    with m.lock() as guard:
        guard.value += 1
    assert not m.is_poisoned()
    assert m.get() == 1


def test_shared_data_consistent_across_threads():
    data = Mutex(SharedData())

    def record(i):
        with data.lock() as guard:
            guard.value.counter += 1
            guard.value.values.append(i)

    workers = [threading.Thread(target=record, args=(i,)) for i in range(5)]
    for w in workers:
        w.start()
    for w in workers:
        w.join()
    result = data.get()
    assert result.counter == len(result.values)
    assert sorted(result.values) == list(range(5))


def test_thread_safe_counter():
    counter = ThreadSafeCounter()
    workers = [threading.Thread(target=counter.increment) for _ in range(10)]
    for w in workers:
        w.start()
    for w in workers:
        w.join()
    assert counter.get() == 10


def test_thread_safe_counter_starts_at_zero():
    assert ThreadSafeCounter().get() == 0
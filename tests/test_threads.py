import threading
import time

import pytest

from ferrokit.threads import (
    ThreadPanic,
    producer_consumer,
    run_workers,
    scoped_map,
    spawn,
    thread_local_values,
)


def test_spawn_returns_value():
    assert spawn(sum, range(1, 101)).join() == sum(range(1, 101))


def test_spawn_passes_arguments():
    assert spawn(lambda a, b: a + b, "ab", "cd").join() == "abcd"


def test_failure_becomes_thread_panic():
    def fail():
        raise ValueError("boom")

    with pytest.raises(ThreadPanic) as info:
        spawn(fail).join()
    assert isinstance(info.value.payload, ValueError)
    assert info.value.__cause__ is info.value.payload


def test_named_thread():
    handle = spawn(lambda: threading.current_thread().name, name="worker")
    assert handle.name() == "worker"
    assert handle.join() == "worker"


def test_unnamed_thread_has_no_name():
    handle = spawn(lambda: None)
    handle.join()
    assert handle.name() is None


def test_child_runs_on_another_thread():
    main_id = threading.get_ident()
    child_id = spawn(threading.get_ident).join()
    assert (child_id == main_id) is False


def test_run_workers_results_in_order():
    assert run_workers(5, 0.01) == [i * 10 for i in range(5)]


def test_run_workers_run_concurrently():
    start = time.perf_counter()
    results = run_workers(5, 0.2)
    elapsed = time.perf_counter() - start
    assert results == [0, 10, 20, 30, 40]
    assert elapsed < 5 * 0.2


def test_thread_local_isolation():
    before, after, main_after = thread_local_values(42, 100)
    assert before == 0
    assert after == 100
    assert main_after == 42


def test_scoped_map_keeps_order():
    items = [1, 2, 3, 4, 5]
    assert scoped_map(str, items) == ["1", "2", "3", "4", "5"]


def test_scoped_map_empty():
    assert scoped_map(str, []) == []


def test_scoped_map_propagates_failure():
    def check(x):
        if x == 2:
            raise KeyError(x)
        return x

    with pytest.raises(ThreadPanic) as info:
        scoped_map(check, [1, 2, 3])
    assert isinstance(info.value.payload, KeyError)


def test_producer_consumer_delivers_all():
    assert producer_consumer(5) == list(range(1, 6))


def test_producer_consumer_none():
    assert producer_consumer(0) == []
# ferrokit

A small toolkit of thread-safe primitives, message channels, layered error
types and directory utilities. Every module also has a `main()` that runs a
short demonstration and prints what happens. The demonstration output is
largely in Chinese.

No third-party packages are needed.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Provides |
| --- | --- |
| `ferrokit.atomics` | `AtomicInt` (optionally fixed-width and wrapping), `AtomicBool`, `SpinLock`, `CompareExchangeError`, `parallel_count`, `spinlock_count`, `producer_consumer` |
| `ferrokit.threads` | `spawn`, `ThreadHandle`, `ThreadPanic`, `run_workers`, `thread_local_values`, `scoped_map`, `producer_consumer` |
| `ferrokit.channels` | `channel`, `sync_channel`, `Sender`, `Receiver`, `Empty`, `Timeout`, `Disconnected`, `SendError`, the messages `Quit`, `Move`, `Write`, `ChangeColor`, and `describe_message` |
| `ferrokit.mutex` | `Mutex`, `PoisonError`, `WouldBlock`, `SharedData`, `ThreadSafeCounter`, `shared_increment` |
| `ferrokit.rwlock` | `RwLock`, `RwPoisonError`, `LockBusy`, `Database`, `Cache` |
| `ferrokit.errors` | `DataStoreError` with `DataStoreIoError`, `FormatError`, `NotFoundError`, `UnknownError`; `ApplicationError`, `MyError`, `read_data`, `run_application`, `read_username`, `checked_sqrt`, `do_something_risky` |
| `ferrokit.cleaner` | `clean_empty_directories` |
| `ferrokit.dirops` | `tree_lines`, `get_directory_size`, `copy_directory`, `find_files`, `classify_files`, `get_directory_stats`, `DirectoryStats`, `sorted_entry_names`, `is_directory_empty`, `sync_directories` |
| `ferrokit.walk` | `WalkEntry`, `traverse_lines`, `custom_walkdir`, `custom_walkdir_skip`, `filter_files_by_extension`, `calculate_directory_size`, `find_file`, `get_directory_statistics`, `sort_by_modified_time`, `find_large_files`, `copy_tree`, `get_code_statistics`, `DirectoryStatistics`, `CodeStats` |
| `ferrokit.lifetimes` | `longest`, `longest_with_an_announcement`, `first_sentence`, `valid_return`, `ImportantExcerpt`, `MyString` |
| `ferrokit.matrix_bench` | `filled_matrix`, `multiply`, `benchmark` |
| `ferrokit.restaurant` | `Breakfast`, `Appetizer`, `Asparagus`, `order_breakfast`, `harvest`, `weed`, `help`, `eat_at_restaurant` |

## Examples

Counting from many threads with an atomic integer:

```python
from ferrokit.atomics import AtomicInt, parallel_count

print(parallel_count(10, 1000))  # 10000

byte = AtomicInt(127, bits=8)
byte.fetch_add(1)
print(byte.load())  # -128
```

Threads that hand back a value, or the failure:

```python
from ferrokit.threads import ThreadPanic, spawn

print(spawn(sum, range(1, 101)).join())  # 5050

try:
    spawn(int, "not a number").join()
except ThreadPanic as exc:
    print(repr(exc.payload))
```

Passing messages between threads. The receiver's iterator ends once every
sender has been closed:

```python
from ferrokit.channels import channel
from ferrokit.threads import spawn

tx, rx = channel()

def produce():
    with tx:
        for i in range(1, 6):
            tx.send(i)

spawn(produce)
print(list(rx))  # [1, 2, 3, 4, 5]
```

`sync_channel(n)` holds at most `n` values; `sync_channel(0)` makes every
`send` wait until the receiver has taken the value. `try_recv` raises `Empty`,
`recv_timeout` raises `Timeout`, and once nothing more can arrive the receiving
calls raise `Disconnected`. After `Receiver.close()`, `send` raises `SendError`.

A mutex that owns its value and is poisoned when a holder raises:

```python
from ferrokit.mutex import Mutex, PoisonError

m = Mutex(42)
try:
    with m.lock() as guard:
        guard.value = 100
        raise RuntimeError("boom")
except RuntimeError:
    pass

try:
    with m.lock() as guard:
        print(guard.value)
except PoisonError as exc:
    with exc.into_inner() as guard:
        print(guard.value)  # 100
```

`try_lock()` raises `WouldBlock` when the lock is held.

A read-mostly cache behind a reader-writer lock:

```python
from ferrokit.rwlock import Cache

cache = Cache()
cache.set("key_0_0", "value_0_0")
print(cache.get("key_0_0"))  # value_0_0
print(cache.list())          # [('key_0_0', 'value_0_0')]
```

`RwLock` lets many readers in at once, or one writer; waiting writers are
served before new readers. `try_read()` and `try_write()` raise `LockBusy`
instead of waiting.

Removing empty directories, deepest first, while keeping the root:

```python
from ferrokit.cleaner import clean_empty_directories

removed = clean_empty_directories("build_output")
```

It returns the directories it deleted. A parent left empty by removing its
children is removed as well; directories that still hold files are kept.

Walking a tree with a depth limit and skipped directory names:

```python
from ferrokit.walk import custom_walkdir_skip

for entry in custom_walkdir_skip("project", 10, [".git", "node_modules"]):
    print("  " * entry.depth, entry.file_name())
```

Errors with a readable cause chain:

```python
from ferrokit.errors import ApplicationError, run_application

try:
    run_application("non_existent_config.toml")
except ApplicationError as exc:
    for message in exc.chain():
        print(message)
```

## Command-line demonstrations

Each module's demonstration can be run as a command:

```
ferrokit-atomics
ferrokit-threads
ferrokit-channels
ferrokit-mutex
ferrokit-rwlock
ferrokit-errors
ferrokit-lifetimes
ferrokit-matrix-bench
ferrokit-restaurant
ferrokit-dirops
ferrokit-walk
ferrokit-clean
```

- `ferrokit-clean [PATH]` removes every empty directory below `PATH`
  (default: the current directory) and leaves `PATH` itself in place. Deleted
  directories are printed; failures other than "directory not empty" go to
  standard error.
- `ferrokit-matrix-bench [--size N]` multiplies two `N` x `N` matrices
  (default 400) with a plain triple loop and prints the top-left cell and the
  time taken. At the default size this takes a while in pure Python.
- `ferrokit-dirops` and `ferrokit-walk` create and remove their sample files
  inside a temporary directory, so they leave nothing behind.

## What it does not do

The atomic types are built on a lock per value: they are safe across threads
but not lock-free, and offer no choice of memory ordering. The benchmark
measures pure-Python arithmetic only.
from __future__ import annotations

import threading

import pytest

from kvstore.store.locks import ReadWriteLock


def test_readers_hold_the_lock_concurrently() -> None:
    lock = ReadWriteLock()
    barrier = threading.Barrier(2, timeout=5)
    errors: list[BaseException] = []

    def reader() -> None:
        try:
            with lock.read_locked():
                barrier.wait()
        except threading.BrokenBarrierError as e:
            errors.append(e)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert errors == []


def test_writer_excludes_readers() -> None:
    lock = ReadWriteLock()
    entered = threading.Event()

    def reader() -> None:
        with lock.read_locked():
            entered.set()

    lock.acquire_write()
    thread = threading.Thread(target=reader)
    thread.start()

    assert not entered.wait(timeout=0.2)

    lock.release_write()
    thread.join(timeout=5)
    assert entered.is_set()


def test_waiting_writer_blocks_new_readers() -> None:
    lock = ReadWriteLock()
    writer_done = threading.Event()
    late_reader_entered = threading.Event()

    def writer() -> None:
        with lock.write_locked():
            writer_done.set()

    def late_reader() -> None:
        with lock.read_locked():
            late_reader_entered.set()

    lock.acquire_read()
    writer_thread = threading.Thread(target=writer)
    writer_thread.start()
    # Give the writer time to queue behind the held read lock.
    while not lock._waiting_writers:
        writer_done.wait(timeout=0.01)

    reader_thread = threading.Thread(target=late_reader)
    reader_thread.start()
    assert not late_reader_entered.wait(timeout=0.2)

    lock.release_read()
    writer_thread.join(timeout=5)
    reader_thread.join(timeout=5)
    assert writer_done.is_set()
    assert late_reader_entered.is_set()


def test_release_without_acquire_raises() -> None:
    lock = ReadWriteLock()

    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()
